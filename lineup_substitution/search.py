# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Literal, case-sensitive forward search over a TextModel."""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from .errors import InvalidArgumentError, PositionError
from .text_model import Position, TextModel

logger = logging.getLogger(__name__)

_LINE_BREAK_CHARS = frozenset("\r\n")


@dataclass(frozen=True, slots=True)
class Match:
    """One occurrence of the search text, as a half-open [start, end) span."""

    start: Position
    end: Position


def find_next(model: TextModel, start: Position, search_text: str) -> Optional[Match]:
    """
    Finds the first occurrence of `search_text` at or after `start`.

    The comparison is exact: case sensitive, no regular expressions, no word
    boundaries. A search text holding line breaks is matched against the real
    line terminators of the model.

    Args:
        model (TextModel): The text to search.
        start (Position): Where the scan begins.
        search_text (str): The literal text to look for.

    Returns:
        Optional[Match]: The match, or None when there is no further occurrence.

    Raises:
        InvalidArgumentError: If `search_text` is empty.
        PositionError: If `start` is not a valid position of `model`.
    """
    if not search_text:
        raise InvalidArgumentError("Search text must not be empty")
    model.check_position(start)

    if _LINE_BREAK_CHARS.isdisjoint(search_text):
        for line in range(start.line, model.line_count):
            from_offset = start.offset if line == start.line else 0
            index = model.get_line(line).find(search_text, from_offset)
            if index != -1:
                return Match(Position(line, index), Position(line, index + len(search_text)))
        return None

    # Multi-line search text: scan the flattened buffer.
    text = model.get_text()
    index = model.offset_of(start)
    while True:
        index = text.find(search_text, index)
        if index == -1:
            return None
        try:
            return Match(model.position_at(index), model.position_at(index + len(search_text)))
        except PositionError:
            # Begins or ends inside a CRLF pair.
            logger.debug(f"find_next: skipping candidate at offset {index} that splits a CRLF terminator")
            index += 1


def iter_matches(model: TextModel, search_text: str,
                 start: Optional[Position] = None) -> Iterator[Match]:
    """
    Yields the non-overlapping occurrences of `search_text` from `start` on.

    Every step resumes at the end of the previous match, so the model must not
    be edited while iterating. Editing callers drive `find_next` themselves.
    """
    position = model.start_position() if start is None else start
    while True:
        match = find_next(model, position, search_text)
        if match is None:
            return
        yield match
        position = match.end
