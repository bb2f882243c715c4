"""
loopnotes - Tokenizer for a Loop/Beat Notation Language
=======================================================

This package reads loop notation source and produces a lazy stream of typed,
positioned tokens for a parser to consume.

    Title :groove
    @bpm = 120
    $verse Loop 4 Times [ ^Am7, ^D9 ] %dorian &ff8800
    |x.x. |x-x- 7/8   // a comment

Main Components
---------------
- **stream**: CharStream, the character cursor with line/column tracking
- **lexer**: TokenStream, one-token lookahead over the classifier table
- **tokens**: Token, TokenKind and the Ratio value of fractions
- **options**: LexerOptions, sigil and keyword configuration
- **errors**: LoopNotesError hierarchy with positioned lexical errors

Quick Start
-----------
    >>> from loopnotes import tokenize
    >>> [t.value for t in tokenize("Loop 4/4 Times")]
    ['Loop', Ratio(numerator=4, denominator=4), 'Times']

    >>> from loopnotes import TokenStream
    >>> stream = TokenStream("[:a, :b]")
    >>> stream.peek_token()
    Token(PUNCTUATION, '[', 1:0)
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from typing import Optional

from loopnotes.errors import (
    LoopNotesError,
    SourceLocation,
    LexerError,
    UnexpectedCharacterError,
    MalformedNumberError,
    UnterminatedClassReadError,
    LexerConfigError,
)
from loopnotes.lexer import LookaheadState, TokenStream
from loopnotes.options import LexerOptions
from loopnotes.stream import CharStream
from loopnotes.tokens import KEYWORDS, Ratio, Token, TokenKind


def tokenize(
    source: str,
    filename: Optional[str] = None,
    options: Optional[LexerOptions] = None,
) -> list[Token]:
    """
    Tokenize a whole source string.

    Args:
        source: Notation source text
        filename: Name for diagnostics
        options: Lexer configuration

    Returns:
        All tokens in source order

    Raises:
        LexerError: At the first lexical error
    """
    return list(TokenStream(source, filename, options))


__all__ = [
    "__version__",
    # Tokenizer
    "CharStream",
    "TokenStream",
    "LookaheadState",
    "tokenize",
    # Tokens
    "Token",
    "TokenKind",
    "Ratio",
    "KEYWORDS",
    # Configuration
    "LexerOptions",
    # Exception hierarchy
    "LoopNotesError",
    "SourceLocation",
    "LexerError",
    "UnexpectedCharacterError",
    "MalformedNumberError",
    "UnterminatedClassReadError",
    "LexerConfigError",
]
