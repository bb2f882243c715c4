"""
Lexer Configuration
===================

Options that decide which leading characters select the notation marker
classes, which characters may start a sigil-prefixed identifier, and which
words are keywords.

Configuration can come from:
- Default values (defined here)
- Keyword arguments to LexerOptions
- Environment variables (LexerOptions.from_env)

Default Sigils
--------------
| Class      | Sigil | Example   |
|------------|-------|-----------|
| identifier | : ~   | :kick     |
| meta       | @     | @bpm      |
| section    | $     | $chorus   |
| beat       | |     | |x.x.     |
| chord      | ^     | ^F#m7     |
| scale      | %     | %dorian   |
| color      | &     | &ff8800   |

Sigils must be unique across classes and must not collide with letters,
digits, punctuation, operators, '/' or whitespace; otherwise the lexer's
first-match dispatch would become ambiguous.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable
import logging
import os

from loopnotes.errors import LexerConfigError
from loopnotes.tokens import (
    ALPHANUMERIC,
    KEYWORDS,
    LETTERS,
    MARKER_KINDS,
    OPERATORS,
    PUNCTUATION,
    SLASH,
    WHITESPACE,
    TokenKind,
)

logger = logging.getLogger(__name__)


# Characters owned by the fixed lexical classes
RESERVED_CHARS = frozenset(ALPHANUMERIC + PUNCTUATION + OPERATORS + SLASH + WHITESPACE)

ENV_PREFIX = "LOOPNOTES_"


@dataclass(frozen=True)
class LexerOptions:
    """
    Tokenizer configuration.

    Attributes:
        filename: Name reported in token locations and errors
        keywords: Words emitted as KEYWORD instead of IDENTIFIER
        identifier_sigils: Characters that may prefix an identifier
        meta_sigils: Leading characters of META markers
        section_sigils: Leading characters of SECTION markers
        beat_sigils: Leading characters of BEAT markers
        chord_sigils: Leading characters of CHORD markers
        scale_sigils: Leading characters of SCALE markers
        color_sigils: Leading characters of COLOR markers

    Raises:
        LexerConfigError: If sigils overlap or keywords are not plain words
    """

    filename: str = "<input>"
    keywords: frozenset[str] = field(default=KEYWORDS)
    identifier_sigils: str = ":~"

    meta_sigils: str = "@"
    section_sigils: str = "$"
    beat_sigils: str = "|"
    chord_sigils: str = "^"
    scale_sigils: str = "%"
    color_sigils: str = "&"

    def __post_init__(self):
        # A bare string would otherwise become a set of its letters
        if isinstance(self.keywords, str):
            raise LexerConfigError(
                f"keywords must be a collection of words, not the string {self.keywords!r}"
            )
        if not isinstance(self.keywords, frozenset):
            object.__setattr__(self, "keywords", frozenset(self.keywords))
        self._validate()

    # ═══════════════════════════════════════════════════════════════════════
    # VALIDATION
    # ═══════════════════════════════════════════════════════════════════════

    def _validate(self) -> None:
        seen: dict[str, str] = {}

        groups = [("identifier", self.identifier_sigils)]
        groups += [(kind.value, self.sigils_for(kind)) for kind in MARKER_KINDS]

        for name, sigils in groups:
            if not sigils:
                raise LexerConfigError(f"{name} needs at least one sigil")
            for char in sigils:
                if char in RESERVED_CHARS:
                    raise LexerConfigError(
                        f"{name} sigil {char!r} is reserved by a fixed lexical class"
                    )
                if char in seen and seen[char] != name:
                    raise LexerConfigError(
                        f"sigil {char!r} is used by both {seen[char]} and {name}"
                    )
                seen[char] = name

        for word in self.keywords:
            if not word or word[0] not in LETTERS or any(c not in ALPHANUMERIC for c in word):
                raise LexerConfigError(
                    f"keyword {word!r} can never be read as a single identifier"
                )

    # ═══════════════════════════════════════════════════════════════════════
    # ACCESSORS
    # ═══════════════════════════════════════════════════════════════════════

    def sigils_for(self, kind: TokenKind) -> str:
        """Leading characters of a marker kind."""
        return getattr(self, f"{kind.value}_sigils")

    def marker_sigils(self) -> dict[TokenKind, str]:
        return {kind: self.sigils_for(kind) for kind in MARKER_KINDS}

    def with_keywords(self, keywords: Iterable[str]) -> "LexerOptions":
        """Return a copy with a different keyword set."""
        return replace(self, keywords=keywords)

    # ═══════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls, environ=None) -> "LexerOptions":
        """
        Create LexerOptions from environment variables.

        Environment variables (all optional):
            LOOPNOTES_KEYWORDS: Comma-separated keyword list
            LOOPNOTES_IDENTIFIER_SIGILS: Identifier prefix characters
            LOOPNOTES_META_SIGILS, LOOPNOTES_SECTION_SIGILS,
            LOOPNOTES_BEAT_SIGILS, LOOPNOTES_CHORD_SIGILS,
            LOOPNOTES_SCALE_SIGILS, LOOPNOTES_COLOR_SIGILS:
                Leading characters for each marker class

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            LexerOptions with values from the environment

        Raises:
            LexerConfigError: If the resulting options are invalid
        """
        if environ is None:
            environ = os.environ

        values = {}

        if keywords := environ.get(f"{ENV_PREFIX}KEYWORDS"):
            values["keywords"] = frozenset(
                word.strip() for word in keywords.split(",") if word.strip()
            )

        if sigils := environ.get(f"{ENV_PREFIX}IDENTIFIER_SIGILS"):
            values["identifier_sigils"] = sigils

        for kind in MARKER_KINDS:
            name = f"{kind.value}_sigils"
            if sigils := environ.get(f"{ENV_PREFIX}{name.upper()}"):
                values[name] = sigils

        if values:
            logger.debug(f"Lexer options from environment: {sorted(values)}")

        return cls(**values)
