"""
loopnotes Error Hierarchy
=========================

This module defines the exception hierarchy for the loopnotes tokenizer.
All exceptions inherit from LoopNotesError, allowing callers to catch all
library errors with a single except clause if desired.

Exception Hierarchy
-------------------
LoopNotesError (base)
├── LexerError - positioned lexical error
│   ├── UnexpectedCharacterError - character matches no lexical class
│   ├── MalformedNumberError - invalid '/' placement in a number
│   └── UnterminatedClassReadError - a class reader consumed nothing
└── LexerConfigError - invalid LexerOptions

Error Message Format
--------------------
Lexical errors carry the location of the failure and follow this format:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)

Lines are 1-indexed; columns count the characters already consumed on the
line, so the first character of a line is column 0.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class LoopNotesError(Exception):
    """
    Base exception for all loopnotes errors.

        try:
            tokens = tokenize(source)
        except LoopNotesError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in notation source, used by tokens and errors.

    Attributes:
        filename: Name of the source (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (0-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Lexer Exceptions
# =============================================================================

class LexerError(LoopNotesError):
    """
    Base exception for lexical errors.

    Lexical errors are fatal to the tokenization call that raised them.
    There is no recovery mode: the consumer must stop pulling tokens.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        return self.location.line if self.location else None

    @property
    def column(self) -> Optional[int]:
        return self.location.column if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            song.loop:3:4: error: invalid character: #
                Loop # 4 Times
                     ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Caret sits under the column (columns are 0-indexed)
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            padding = " " * (4 + self.location.column)
            parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnexpectedCharacterError(LexerError):
    """
    Character that no lexical class accepts as a leading character.

    Raised by the token stream after every classifier has been tried.

    Attributes:
        char: The offending character
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        *,
        char: Optional[str] = None,
    ):
        self.char = char
        super().__init__(message, location, hint=hint, source_line=source_line)


class MalformedNumberError(LexerError):
    """
    A numeric run with an invalid separator placement.

    Examples:
        4//4   - second '/' where a denominator digit was expected
        4/     - separator with nothing after it
        /4     - separator with no numerator
    """
    pass


class UnterminatedClassReadError(LexerError):
    """
    A class reader returned without consuming any character.

    This guards the tokenizer against stuck states: every reader must make
    forward progress or tokenization stops here.

    Attributes:
        kind: Name of the lexical class whose reader stalled
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        *,
        kind: Optional[str] = None,
    ):
        self.kind = kind
        super().__init__(message, location, hint=hint, source_line=source_line)


# =============================================================================
# Configuration Exceptions
# =============================================================================

class LexerConfigError(LoopNotesError):
    """
    Invalid lexer configuration.

    Raised when LexerOptions declares sigils that collide with each other
    or with the fixed lexical classes (letters, digits, punctuation,
    operators, '/', whitespace).
    """
    pass
