"""
loopnotes Lexer (Token Stream)
==============================

This module turns notation source into a lazy stream of tokens for a
parser. Nothing is tokenized up front: each request for a token skips
whitespace and comments, classifies the next character and reads exactly
one token.

Classification
--------------
Lexical classes are tried in a fixed priority order; the first whose
classifier accepts the current character wins and its reader consumes the
token:

    meta, comment, identifier/keyword, section, beat, chord, scale,
    color, punctuation, operator, number

Comments (``// ...`` to end of line) produce no token; the stream loops
back into classification instead.

Lookahead
---------
The stream holds at most one token of lookahead and is always in one of
two states:

    EMPTY    --peek_token()-->  BUFFERED
    BUFFERED --next_token()-->  EMPTY

``next_token()`` in the EMPTY state reads and returns a token directly
without buffering it.

Example Usage
-------------
>>> from loopnotes.lexer import TokenStream
>>> stream = TokenStream("Loop 4 Times [:kick, :snare]")
>>> for token in stream:
...     print(token)
Token(KEYWORD, 'Loop', 1:0)
Token(NUMBER, 4, 1:5)
Token(KEYWORD, 'Times', 1:7)
Token(PUNCTUATION, '[', 1:13)
Token(IDENTIFIER, ':kick', 1:14)
Token(PUNCTUATION, ',', 1:19)
Token(IDENTIFIER, ':snare', 1:21)
Token(PUNCTUATION, ']', 1:27)
"""

from enum import Enum, auto
from typing import Callable, Iterator, NamedTuple, Optional
import logging

from loopnotes.errors import (
    MalformedNumberError,
    UnexpectedCharacterError,
    UnterminatedClassReadError,
)
from loopnotes.options import LexerOptions
from loopnotes.stream import CharStream
from loopnotes.tokens import (
    ALPHANUMERIC,
    DIGITS,
    LETTERS,
    OPERATORS,
    PUNCTUATION,
    SLASH,
    WHITESPACE,
    Ratio,
    Token,
    TokenKind,
    TokenValue,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Marker Bodies
# =============================================================================

# Characters that may follow each marker sigil
NAME_CHARS = ALPHANUMERIC + "-_"
BEAT_CHARS = "xX.-"
CHORD_CHARS = ALPHANUMERIC + "#"
COLOR_CHARS = ALPHANUMERIC

MARKER_BODIES: dict[TokenKind, str] = {
    TokenKind.META: NAME_CHARS,
    TokenKind.SECTION: NAME_CHARS,
    TokenKind.BEAT: BEAT_CHARS,
    TokenKind.CHORD: CHORD_CHARS,
    TokenKind.SCALE: NAME_CHARS,
    TokenKind.COLOR: COLOR_CHARS,
}


def _is_digit(char: Optional[str]) -> bool:
    return char is not None and char in DIGITS


# =============================================================================
# Dispatch Table Types
# =============================================================================

class LookaheadState(Enum):
    """Lookahead buffer state of a TokenStream."""
    EMPTY = auto()
    BUFFERED = auto()


class LexicalRule(NamedTuple):
    """
    A classifier/reader pair.

    The classifier sees the current character; the reader consumes from the
    stream and returns a token, or None when it skipped input (comments).
    """
    name: str
    matches: Callable[[str], bool]
    read: Callable[[int, int], Optional[Token]]


# =============================================================================
# Token Stream
# =============================================================================

class TokenStream:
    """
    Lazy token stream over notation source.

    Usage:
        stream = TokenStream(source, "song.loop")
        while (token := stream.next_token()) is not None:
            ...

    Attributes:
        options: The LexerOptions in effect
    """

    def __init__(
        self,
        source: str,
        filename: Optional[str] = None,
        options: Optional[LexerOptions] = None,
    ):
        """
        Initialize the stream with source text.

        Args:
            source: Notation source to tokenize
            filename: Name for diagnostics (defaults to options.filename)
            options: Lexer configuration (defaults to LexerOptions())
        """
        self.options = options or LexerOptions()
        self._chars = CharStream(source, filename or self.options.filename)

        self._state = LookaheadState.EMPTY
        self._current: Optional[Token] = None

        self._marker_sigils = self.options.marker_sigils()
        self._rules = self._build_rules()

    def _build_rules(self) -> tuple[LexicalRule, ...]:
        """Build the classifier table in priority order."""
        def marker(kind: TokenKind) -> LexicalRule:
            return LexicalRule(
                kind.value,
                lambda ch: ch in self._marker_sigils[kind],
                lambda line, column: self._read_marker(kind, line, column),
            )

        return (
            marker(TokenKind.META),
            LexicalRule("comment", self._is_comment, self._skip_comment),
            LexicalRule("identifier", self._is_identifier_start, self._read_identifier),
            marker(TokenKind.SECTION),
            marker(TokenKind.BEAT),
            marker(TokenKind.CHORD),
            marker(TokenKind.SCALE),
            marker(TokenKind.COLOR),
            LexicalRule("punctuation", self._is_punctuation, self._read_punctuation),
            LexicalRule("operator", self._is_operator, self._read_operator),
            LexicalRule("number", self._is_number_start, self._read_number),
        )

    # =========================================================================
    # Public Interface
    # =========================================================================

    @property
    def state(self) -> LookaheadState:
        return self._state

    @property
    def filename(self) -> str:
        return self._chars.filename

    def peek_token(self) -> Optional[Token]:
        """
        Return the next token without consuming it.

        Returns:
            The next token, or None at end of input

        Raises:
            LexerError: If the next token is malformed
        """
        if self._state is LookaheadState.BUFFERED:
            return self._current

        token = self._read_next()
        if token is not None:
            self._current = token
            self._state = LookaheadState.BUFFERED
        return token

    def next_token(self) -> Optional[Token]:
        """
        Consume and return the next token.

        Returns:
            The next token, or None at end of input

        Raises:
            LexerError: If the next token is malformed
        """
        if self._state is LookaheadState.BUFFERED:
            token = self._current
            self._current = None
            self._state = LookaheadState.EMPTY
            return token

        return self._read_next()

    def at_end(self) -> bool:
        """True when no tokens remain."""
        return self.peek_token() is None

    def __iter__(self) -> Iterator[Token]:
        """Drain the stream; single pass, since reading consumes."""
        while (token := self.next_token()) is not None:
            yield token

    # =========================================================================
    # Classification
    # =========================================================================

    def _read_next(self) -> Optional[Token]:
        """Skip whitespace and comments, then read one token."""
        chars = self._chars

        while True:
            chars.read_while(lambda ch: ch in WHITESPACE)

            if chars.at_end():
                return None

            char = chars.peek()
            start_offset = chars.offset
            start_line, start_column = chars.line, chars.column

            for rule in self._rules:
                if rule.matches(char):
                    break
            else:
                chars.fail(
                    f"invalid character: {char}",
                    error_class=UnexpectedCharacterError,
                    char=char,
                )

            token = rule.read(start_line, start_column)

            if chars.offset == start_offset:
                chars.fail(
                    f"{rule.name} reader consumed no input",
                    error_class=UnterminatedClassReadError,
                    kind=rule.name,
                )

            if token is not None:
                return token

    def _make_token(
        self,
        kind: TokenKind,
        value: TokenValue,
        text: str,
        line: int,
        column: int,
    ) -> Token:
        return Token(
            kind=kind,
            value=value,
            line=line,
            column=column,
            text=text,
            filename=self._chars.filename,
        )

    # =========================================================================
    # Comments
    # =========================================================================

    def _is_comment(self, char: str) -> bool:
        return char == SLASH and self._chars.peek(1) == SLASH

    def _skip_comment(self, line: int, column: int) -> None:
        """Skip a single-line comment (// ...), leaving the newline."""
        text = self._chars.read_while(lambda ch: ch != "\n")
        logger.debug(f"Skipped comment at {line}:{column}: {text!r}")
        return None

    # =========================================================================
    # Identifiers and Keywords
    # =========================================================================

    def _is_identifier_start(self, char: str) -> bool:
        return char in LETTERS or char in self.options.identifier_sigils

    def _read_identifier(self, line: int, column: int) -> Token:
        """
        Read an identifier or keyword.

        Identifiers start with a letter or an identifier sigil and continue
        with letters and digits. Only a bare word can be a keyword; ':Loop'
        is an identifier.
        """
        first = self._chars.consume()
        name = first + self._chars.read_while(lambda ch: ch in ALPHANUMERIC)

        if name in self.options.keywords:
            return self._make_token(TokenKind.KEYWORD, name, name, line, column)

        return self._make_token(TokenKind.IDENTIFIER, name, name, line, column)

    # =========================================================================
    # Notation Markers
    # =========================================================================

    def _read_marker(self, kind: TokenKind, line: int, column: int) -> Token:
        """
        Read a marker: its sigil followed by the kind's body characters.

        A bare sigil is a complete marker ('|' on its own is a bar line).
        """
        body_chars = MARKER_BODIES[kind]
        sigil = self._chars.consume()
        text = sigil + self._chars.read_while(lambda ch: ch in body_chars)
        return self._make_token(kind, text, text, line, column)

    # =========================================================================
    # Punctuation and Operators
    # =========================================================================

    def _is_punctuation(self, char: str) -> bool:
        return char in PUNCTUATION

    def _read_punctuation(self, line: int, column: int) -> Token:
        char = self._chars.consume()
        return self._make_token(TokenKind.PUNCTUATION, char, char, line, column)

    def _is_operator(self, char: str) -> bool:
        return char in OPERATORS

    def _read_operator(self, line: int, column: int) -> Token:
        char = self._chars.consume()
        return self._make_token(TokenKind.OPERATOR, char, char, line, column)

    # =========================================================================
    # Numbers
    # =========================================================================

    def _is_number_start(self, char: str) -> bool:
        # A '/' that reaches this point is not a comment; it is only
        # claimed here so a missing numerator gets a number error.
        return _is_digit(char) or (char == SLASH and _is_digit(self._chars.peek(1)))

    def _read_number(self, line: int, column: int) -> Token:
        """
        Read an integer or a numerator/denominator pair.

        Handles:
        - Integer: 12
        - Fraction: 4/4, 7/8 (exactly one '/'; a second one ends the token)
        """
        chars = self._chars

        numerator = chars.read_while(_is_digit)
        if not numerator:
            chars.fail(
                "missing numerator before '/'",
                hint="write fractions as <digits>/<digits>, e.g. 4/4",
                error_class=MalformedNumberError,
            )

        if chars.peek() != SLASH:
            return self._make_token(TokenKind.NUMBER, int(numerator), numerator, line, column)

        chars.consume()
        denominator = chars.read_while(_is_digit)
        if not denominator:
            chars.fail(
                "expected digits after '/'",
                hint="write fractions as <digits>/<digits>, e.g. 4/4",
                error_class=MalformedNumberError,
            )

        text = f"{numerator}/{denominator}"
        value = Ratio(int(numerator), int(denominator))
        return self._make_token(TokenKind.NUMBER, value, text, line, column)
