# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Search-and-replace that keeps parameters lined up on the parenthesis.

For every occurrence of the search text, an opening parenthesis further on the
same line is looked for. If there is one, the following lines whose text
starts exactly at the column right after it are considered aligned on it, and
their indentation is grown or shrunk by the length difference between the
replacement and the search text:

    function_call (param1,          another_beautiful_name (param1,
                   param2);   -->                           param2);

Lines indented with at least one tab are re-indented with tabs and spaces,
other lines with spaces only. Broken alignment is not repaired; the input is
assumed to be well aligned.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .columns import build_indentation
from .errors import AlignmentInvariantViolation, InvalidArgumentError, PositionError, SubstitutionError
from .search import Match, find_next
from .text_model import Position, TextModel

logger = logging.getLogger(__name__)


@dataclass
class SubstitutionReport:
    """Counters collected over one substitution pass."""

    replacements: int = 0
    realigned_lines: int = 0


class Substitution:
    """
    Replaces every occurrence of a literal text and adjusts the alignment of
    the parameters that follow it.

    Args:
        search_text (str): Text to look for. Must not be empty.
        replacement (str): Text to put in its place. May be empty.

    Raises:
        InvalidArgumentError: If an argument is not usable.
    """

    def __init__(self, search_text: str, replacement: str):
        if not isinstance(search_text, str) or not search_text:
            raise InvalidArgumentError("Search text must be a non-empty string")
        if not isinstance(replacement, str):
            raise InvalidArgumentError("Replacement must be a string")

        self.search_text = search_text
        self.replacement = replacement
        # Column shift applied to each aligned line.
        self.delta = len(replacement) - len(search_text)

    def __repr__(self) -> str:
        return f"Substitution({self.search_text!r}, {self.replacement!r})"

    def apply(self, model: TextModel) -> SubstitutionReport:
        """
        Runs the whole pass over `model`, editing it in place.

        Matches are handled strictly in order; the search for the next one
        resumes after the replacement just inserted.

        Returns:
            SubstitutionReport: How many replacements and realignments were made.

        Raises:
            AlignmentInvariantViolation: If a line would need a negative indentation.
            SubstitutionError: If the model refuses a replacement.
        """
        report = SubstitutionReport()
        position = model.start_position()

        while True:
            match = find_next(model, position, self.search_text)
            if match is None:
                break
            position = self._replace(model, match, report)

        logger.info(
            f"{self!r}: {report.replacements} replacement(s), "
            f"{report.realigned_lines} line(s) realigned"
        )
        return report

    def _replace(self, model: TextModel, match: Match, report: SubstitutionReport) -> Position:
        """Handles one match and returns where the search resumes."""
        # Right gravity: ends up after the inserted replacement.
        end_mark = model.create_mark(match.end, left_gravity=False)
        try:
            parenthesis_column = self._get_parenthesis_column(model, match.end)
            self._substitute(model, match)
            report.replacements += 1

            replaced_end = model.get_position(end_mark)
            logger.debug(
                f"Replaced match at {match.start.line + 1}:{match.start.offset}, "
                f"parenthesis column: {parenthesis_column}"
            )

            if parenthesis_column is not None and self.delta != 0:
                report.realigned_lines += self._realign_block(
                    model, replaced_end.line + 1, parenthesis_column)

            return model.get_position(end_mark)
        finally:
            model.delete_mark(end_mark)

    @staticmethod
    def _get_parenthesis_column(model: TextModel, position: Position) -> Optional[int]:
        """
        Visual column just after the first '(' between `position` and the end
        of its line, or None.
        """
        index = model.get_line(position.line).find("(", position.offset)
        if index == -1:
            return None
        return model.visual_column(Position(position.line, index + 1))

    def _substitute(self, model: TextModel, match: Match) -> None:
        try:
            current = model.get_text(match.start, match.end)
        except PositionError as exc:
            raise SubstitutionError(f"Cannot replace {match}: {exc}") from exc

        if current != self.search_text:
            raise SubstitutionError(
                f"Cannot replace {match}: expected {self.search_text!r}, found {current!r}")

        model.replace(match.start, match.end, self.replacement)

    def _realign_block(self, model: TextModel, first_line: int, parenthesis_column: int) -> int:
        """Realigns the lines starting at `first_line` that sit on the parenthesis."""
        line = first_line
        while line < model.line_count:
            if model.text_start_column(line) != parenthesis_column:
                break
            self._adjust_alignment(model, line, parenthesis_column)
            line += 1
        return line - first_line

    def _adjust_alignment(self, model: TextModel, line: int, text_start_column: int) -> None:
        new_width = text_start_column + self.delta
        if new_width < 0:
            raise AlignmentInvariantViolation(
                f"Line {line + 1}: text starts at column {text_start_column}, "
                f"shifting it by {self.delta} gives a negative indentation")

        use_tabs = model.indentation_contains_tab(line)
        text_start = model.text_start(line)
        model.replace(Position(line, 0), text_start, build_indentation(new_width, use_tabs))
        logger.debug(f"Line {line + 1}: indentation {text_start_column} -> {new_width} (tabs: {use_tabs})")
