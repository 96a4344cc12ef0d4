"""Header block detection for Rust source files.

The header block is the leading run of lines that belong to the enclosing
module rather than to the first item: blank lines, ``//`` and ``//!``
comments, inner block comments and ``#![...]`` inner attributes. Outer doc
comments (``///``, ``/**``) and outer attributes (``#[...]``) attach to the
item that follows them, so they end the header.

This is a line heuristic, not a parser. Nested block comments, code
sharing a line with a closing ``*/``, and string literals that span lines
inside an attribute are not recognized.
"""

from enum import Enum


class HeaderState(str, Enum):
    """Scanner states."""

    IN_HEADER = "in_header"
    IN_BLOCK_COMMENT = "in_block_comment"
    IN_ATTRIBUTE = "in_attribute"
    DONE = "done"


def _bracket_delta(text: str) -> int:
    """Count opening minus closing brackets outside double-quoted strings."""
    delta = 0
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "[":
            delta += 1
        elif char == "]":
            delta -= 1
    return delta


def _is_outer_doc_comment(stripped: str) -> bool:
    # "////" and "/***" are plain comments, "/**/" is an empty block comment.
    if stripped.startswith("///"):
        return not stripped.startswith("////")
    if stripped.startswith("/**"):
        return not (stripped.startswith("/***") or stripped.startswith("/**/"))
    return False


class HeaderScanner:
    """Line-at-a-time state machine over the top of a source file.

    Feed lines in order with :meth:`feed`; it returns True while the line
    is part of the header. Once a line ends the header the scanner stays in
    ``DONE`` and every further line is rejected.
    """

    def __init__(self) -> None:
        self.state = HeaderState.IN_HEADER
        self.line_number = 0
        self._bracket_depth = 0

    @property
    def done(self) -> bool:
        return self.state == HeaderState.DONE

    def feed(self, line: str) -> bool:
        """Advance the scanner by one line.

        Args:
            line: A source line, with or without its line ending.

        Returns:
            True if the line belongs to the header block.
        """
        stripped = line.strip()
        first_line = self.line_number == 0
        self.line_number += 1

        if self.state == HeaderState.DONE:
            return False

        if self.state == HeaderState.IN_BLOCK_COMMENT:
            if "*/" in stripped:
                self.state = HeaderState.IN_HEADER
            return True

        if self.state == HeaderState.IN_ATTRIBUTE:
            self._bracket_depth += _bracket_delta(stripped)
            if self._bracket_depth <= 0:
                self.state = HeaderState.IN_HEADER
            return True

        return self._feed_header_line(stripped, first_line)

    def _feed_header_line(self, stripped: str, first_line: bool) -> bool:
        if not stripped:
            return True

        if _is_outer_doc_comment(stripped):
            self.state = HeaderState.DONE
            return False

        if stripped.startswith("//"):
            return True

        if stripped.startswith("/*"):
            if "*/" not in stripped[2:]:
                self.state = HeaderState.IN_BLOCK_COMMENT
            return True

        if stripped.startswith("#!["):
            self._bracket_depth = _bracket_delta(stripped)
            if self._bracket_depth > 0:
                self.state = HeaderState.IN_ATTRIBUTE
            return True

        # Shebang, only valid as the very first line of a file
        if first_line and stripped.startswith("#!"):
            return True

        self.state = HeaderState.DONE
        return False


def find_header_end(lines: list[str]) -> int:
    """Find the index of the first line after the header block.

    Args:
        lines: Source lines in file order.

    Returns:
        Index of the first non-header line, or ``len(lines)`` when the
        whole file is header.
    """
    scanner = HeaderScanner()
    for index, line in enumerate(lines):
        if not scanner.feed(line):
            return index
    return len(lines)
