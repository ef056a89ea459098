# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
In-memory, line addressable text buffer with marks that follow edits.

The buffer keeps each line's terminator next to its content, so the text
rebuilt by `TextModel.get_text()` is exactly the text the model was created
from, including mixed line endings.
"""

import re
from typing import List, NamedTuple, Optional, Tuple

from . import columns
from .errors import PositionError

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class Position(NamedTuple):
    """A (line index, character offset inside the line) pair."""

    line: int
    offset: int


def split_lines(text: str) -> Tuple[List[str], List[str]]:
    """
    Splits `text` into line contents and their terminators.

    The two returned lists have the same length; the last terminator is
    always the empty string.

    Example:
        >>> split_lines("a\\r\\nb")
        (['a', 'b'], ['\\r\\n', ''])
    """
    lines: List[str] = []
    endings: List[str] = []
    start = 0
    for match in _LINE_BREAK_RE.finditer(text):
        lines.append(text[start:match.start()])
        endings.append(match.group())
        start = match.end()
    lines.append(text[start:])
    endings.append("")
    return lines, endings


class Mark:
    """
    Opaque handle on a location of a `TextModel`.

    A mark is moved by every edit made before it. Resolve it with
    `TextModel.get_position()` after each mutation instead of keeping raw
    positions around.
    """

    __slots__ = ("_model", "_line", "_offset", "left_gravity")

    def __init__(self, model: "TextModel", line: int, offset: int, left_gravity: bool):
        self._model: Optional["TextModel"] = model
        self._line = line
        self._offset = offset
        self.left_gravity = left_gravity

    @property
    def deleted(self) -> bool:
        return self._model is None

    def __repr__(self) -> str:
        state = "deleted" if self.deleted else f"{self._line}:{self._offset}"
        return f"<Mark {state} left_gravity={self.left_gravity}>"


class TextModel:
    """Mutable sequence of lines with column-aware position queries."""

    def __init__(self, text: str = ""):
        self._lines, self._endings = split_lines(text)
        self._marks: List[Mark] = []

    def __repr__(self) -> str:
        return f"<TextModel lines={len(self._lines)} marks={len(self._marks)}>"

    # --- Addressing ---
    @property
    def line_count(self) -> int:
        return len(self._lines)

    def _check_line(self, line: int) -> None:
        if not 0 <= line < len(self._lines):
            raise PositionError(f"Line {line} is out of range (0..{len(self._lines) - 1})")

    def check_position(self, position: Position) -> None:
        """Raises PositionError unless `position` addresses a valid location."""
        self._check_line(position.line)
        if not 0 <= position.offset <= len(self._lines[position.line]):
            raise PositionError(
                f"Offset {position.offset} is out of range for line {position.line} "
                f"(length {len(self._lines[position.line])})"
            )

    def get_line(self, line: int) -> str:
        """Returns the content of `line` without its terminator."""
        self._check_line(line)
        return self._lines[line]

    def line_ending(self, line: int) -> str:
        self._check_line(line)
        return self._endings[line]

    def line_end(self, line: int) -> Position:
        self._check_line(line)
        return Position(line, len(self._lines[line]))

    def start_position(self) -> Position:
        return Position(0, 0)

    def end_position(self) -> Position:
        return self.line_end(len(self._lines) - 1)

    def get_text(self, start: Optional[Position] = None, end: Optional[Position] = None) -> str:
        """
        Returns the text between `start` and `end`, terminators included.

        Both bounds default to the corresponding end of the buffer.
        """
        start = self.start_position() if start is None else start
        end = self.end_position() if end is None else end
        self.check_position(start)
        self.check_position(end)
        if end < start:
            raise PositionError(f"End {tuple(end)} precedes start {tuple(start)}")

        if start.line == end.line:
            return self._lines[start.line][start.offset:end.offset]

        parts = [self._lines[start.line][start.offset:] + self._endings[start.line]]
        for line in range(start.line + 1, end.line):
            parts.append(self._lines[line] + self._endings[line])
        parts.append(self._lines[end.line][:end.offset])
        return "".join(parts)

    def offset_of(self, position: Position) -> int:
        """Converts a position to a character offset from the buffer start."""
        self.check_position(position)
        preceding = sum(len(self._lines[i]) + len(self._endings[i]) for i in range(position.line))
        return preceding + position.offset

    def position_at(self, offset: int) -> Position:
        """
        Converts a character offset from the buffer start to a position.

        Raises:
            PositionError: If the offset is out of range or falls between the
                two characters of a CRLF terminator.
        """
        if offset < 0:
            raise PositionError(f"Negative offset {offset}")

        line_start = 0
        for line, (content, ending) in enumerate(zip(self._lines, self._endings)):
            content_end = line_start + len(content)
            if offset <= content_end:
                return Position(line, offset - line_start)
            next_line_start = content_end + len(ending)
            if offset < next_line_start:
                raise PositionError(f"Offset {offset} splits the line terminator of line {line}")
            line_start = next_line_start
        raise PositionError(f"Offset {offset} is past the end of the buffer")

    # --- Columns and indentation ---
    def visual_column(self, position: Position) -> int:
        self.check_position(position)
        return columns.visual_column(self._lines[position.line], position.offset)

    def text_start(self, line: int) -> Optional[Position]:
        """
        Returns the position of the first non-whitespace character of `line`,
        or None if the line is blank.
        """
        content = self.get_line(line)
        length = columns.leading_whitespace_length(content)
        if length == len(content):
            return None
        return Position(line, length)

    def text_start_column(self, line: int) -> Optional[int]:
        start = self.text_start(line)
        if start is None:
            return None
        return columns.visual_column(self._lines[line], start.offset)

    def indentation_contains_tab(self, line: int) -> bool:
        return columns.indentation_contains_tab(self.get_line(line))

    # --- Marks ---
    def create_mark(self, position: Position, left_gravity: bool = False) -> Mark:
        """
        Creates a mark at `position`.

        Text inserted exactly at a mark ends up after a left-gravity mark and
        before a right-gravity one.
        """
        self.check_position(position)
        mark = Mark(self, position.line, position.offset, left_gravity)
        self._marks.append(mark)
        return mark

    def get_position(self, mark: Mark) -> Position:
        if mark._model is not self:
            raise PositionError(f"{mark!r} does not belong to this text model")
        return Position(mark._line, mark._offset)

    def delete_mark(self, mark: Mark) -> None:
        if mark._model is not self:
            raise PositionError(f"{mark!r} does not belong to this text model")
        self._marks.remove(mark)
        mark._model = None

    # --- Editing ---
    def insert(self, position: Position, text: str) -> Position:
        """
        Inserts `text` at `position` and returns the position right after it.

        `text` may contain line breaks; the line split at `position` keeps its
        original terminator on the last inserted line.
        """
        self.check_position(position)
        if not text:
            return position

        pieces, endings = split_lines(text)
        line, offset = position
        head = self._lines[line][:offset]
        tail = self._lines[line][offset:]
        added = len(pieces) - 1

        if added == 0:
            self._lines[line] = head + text + tail
            end = Position(line, offset + len(text))
        else:
            self._lines[line:line + 1] = [head + pieces[0]] + pieces[1:-1] + [pieces[-1] + tail]
            self._endings[line:line + 1] = endings[:-1] + [self._endings[line]]
            end = Position(line + added, len(pieces[-1]))

        for mark in self._marks:
            if mark._line > line:
                mark._line += added
            elif mark._line == line and (
                    mark._offset > offset or (mark._offset == offset and not mark.left_gravity)):
                mark._offset = end.offset + (mark._offset - offset)
                mark._line = end.line
        return end

    def delete(self, start: Position, end: Position) -> None:
        """Deletes the text between two positions, given in either order."""
        self.check_position(start)
        self.check_position(end)
        if end < start:
            start, end = end, start
        if start == end:
            return

        merged = self._lines[start.line][:start.offset] + self._lines[end.line][end.offset:]
        self._lines[start.line:end.line + 1] = [merged]
        self._endings[start.line:end.line + 1] = [self._endings[end.line]]
        removed = end.line - start.line

        for mark in self._marks:
            current = Position(mark._line, mark._offset)
            if current <= start:
                continue
            if current <= end:
                mark._line, mark._offset = start
            elif mark._line == end.line:
                mark._line = start.line
                mark._offset = start.offset + (mark._offset - end.offset)
            else:
                mark._line -= removed

    def replace(self, start: Position, end: Position, text: str) -> Position:
        """Replaces the span with `text`; returns the position after the new text."""
        self.check_position(start)
        self.check_position(end)
        if end < start:
            start, end = end, start
        self.delete(start, end)
        return self.insert(start, text)
