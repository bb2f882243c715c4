"""
Token Definitions
=================

Token kinds, the immutable Token value, and the fixed character sets shared
by the lexer and its configuration.

Token Kinds
-----------
| Kind        | Example        | Value                  |
|-------------|----------------|------------------------|
| KEYWORD     | Loop           | 'Loop'                 |
| IDENTIFIER  | :kick          | ':kick'                |
| PUNCTUATION | [              | '['                    |
| OPERATOR    | =              | '='                    |
| NUMBER      | 4/4            | Ratio(4, 4)            |
| NUMBER      | 12             | 12                     |
| META        | @bpm           | '@bpm'                 |
| SECTION     | $chorus        | '$chorus'              |
| BEAT        | |x.x.          | '|x.x.'                |
| CHORD       | ^F#m7          | '^F#m7'                |
| SCALE       | %dorian        | '%dorian'              |
| COLOR       | &ff8800        | '&ff8800'              |
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union
import string

from loopnotes.errors import SourceLocation


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Lexical classes produced by the tokenizer."""

    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    PUNCTUATION = "punctuation"
    OPERATOR = "operator"
    NUMBER = "number"

    # Notation markers
    META = "meta"
    SECTION = "section"
    BEAT = "beat"
    CHORD = "chord"
    SCALE = "scale"
    COLOR = "color"


# Marker kinds, in the order the lexer tries them
MARKER_KINDS: tuple[TokenKind, ...] = (
    TokenKind.META,
    TokenKind.SECTION,
    TokenKind.BEAT,
    TokenKind.CHORD,
    TokenKind.SCALE,
    TokenKind.COLOR,
)


# =============================================================================
# Fixed Character Sets
# =============================================================================

KEYWORDS: frozenset[str] = frozenset({"Loop", "Times", "Forever", "Title"})

PUNCTUATION = "[](),"
OPERATORS = "=+"
WHITESPACE = " \t\n\r"
DIGITS = string.digits
LETTERS = string.ascii_letters
ALPHANUMERIC = string.ascii_letters + string.digits

# Both the comment start ("//") and the number separator
SLASH = "/"


# =============================================================================
# Token Values
# =============================================================================

class Ratio(NamedTuple):
    """
    A numerator/denominator pair such as the '4/4' of a time signature.

    Kept unreduced: '4/4' and '2/2' are different notation.
    """
    numerator: int
    denominator: int

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


TokenValue = Union[str, int, Ratio]


@dataclass(frozen=True)
class Token:
    """
    A single classified token.

    Attributes:
        kind: The TokenKind classification
        value: Matched text, or int / Ratio for numbers
        line: Line of the token's first character (1-indexed)
        column: Column of the token's first character (0-indexed)
        text: The raw lexeme as it appeared in the source
        filename: Name of the source
    """
    kind: TokenKind
    value: TokenValue
    line: int
    column: int
    text: str
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def position(self) -> tuple[int, int]:
        """(line, column) of the first character."""
        return (self.line, self.column)

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_marker(self) -> bool:
        """Return True for the six notation marker kinds."""
        return self.kind in MARKER_KINDS

    def is_fraction(self) -> bool:
        return self.kind is TokenKind.NUMBER and isinstance(self.value, Ratio)
