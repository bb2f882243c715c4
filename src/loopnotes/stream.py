"""
Character Stream
================

The leaf layer of the tokenizer: a cursor over a fixed input string that
hands out one character at a time and keeps track of where it is.

Position Tracking
-----------------
Lines start at 1 and columns at 0. Consuming a newline moves to the next
line and resets the column to 0; consuming anything else advances the
column by one. The position therefore always names the character that
``peek()`` would return.
"""

from typing import Callable, NoReturn, Optional, Type

from loopnotes.errors import LexerError, SourceLocation


class CharStream:
    """
    Read-only cursor over notation source text.

    Usage:
        stream = CharStream("Loop 4 Times")
        while not stream.at_end():
            ch = stream.consume()

    Attributes:
        source: The text being read (never modified)
        filename: Name of the source (for error messages)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 0

        # Offset of the first character of the current line
        self._line_start_pos = 0

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    # =========================================================================
    # Character Access
    # =========================================================================

    def peek(self, offset: int = 0) -> Optional[str]:
        """
        Look at the character at the current position + offset.

        Never advances. Returns None outside the source, before its start
        as well as past its end.
        """
        pos = self._pos + offset
        if pos < 0 or pos >= len(self.source):
            return None
        return self.source[pos]

    def consume(self) -> Optional[str]:
        """
        Consume and return the current character.

        Returns None, without advancing, at the end of the source.
        """
        if self.at_end():
            return None

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 0
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self.peek() is None

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """
        Consume characters while predicate holds for the current one.

        Returns the consumed characters (possibly empty).
        """
        chars = []
        while not self.at_end() and predicate(self.peek()):
            chars.append(self.consume())
        return "".join(chars)

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._line, self._column)

    def current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    def fail(
        self,
        message: str,
        hint: Optional[str] = None,
        error_class: Type[LexerError] = LexerError,
        **details,
    ) -> NoReturn:
        """
        Raise a lexical error at the current position.

        Args:
            message: Error description
            hint: Optional hint for fixing
            error_class: LexerError subclass to raise
            details: Extra keyword fields for error_class (char, kind)

        Raises:
            LexerError: Always
        """
        raise error_class(
            message,
            self.location(),
            hint=hint,
            source_line=self.current_line(),
            **details,
        )
