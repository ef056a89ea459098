# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Visual column arithmetic with tab expansion."""

from .errors import AlignmentInvariantViolation

# Fixed tab stop used for every column computation.
TAB_WIDTH = 8


def visual_column(line_text: str, offset: int, tab_width: int = TAB_WIDTH) -> int:
    """
    Returns the 0-based on-screen column of `offset` within `line_text`.

    Every character advances the column by one, except a tab which moves it
    to the next multiple of `tab_width` strictly greater than the current
    column.

    Args:
        line_text (str): The line content, without its terminator.
        offset (int): Character offset inside the line (may equal its length).
        tab_width (int): Tab stop width. Defaults to TAB_WIDTH.

    Returns:
        int: The visual column.

    Example:
        >>> visual_column("\\t\\t   x", 5)
        19
    """
    column = 0
    for char in line_text[:offset]:
        if char == "\t":
            column = column - (column % tab_width) + tab_width
        else:
            column += 1
    return column


def leading_whitespace_length(line_text: str) -> int:
    """Returns the number of whitespace characters at the start of the line."""
    length = 0
    for char in line_text:
        if not char.isspace():
            break
        length += 1
    return length


def indentation_contains_tab(line_text: str) -> bool:
    """True if the leading whitespace run of the line contains a tab."""
    return "\t" in line_text[:leading_whitespace_length(line_text)]


def build_indentation(width: int, use_tabs: bool, tab_width: int = TAB_WIDTH) -> str:
    """
    Builds a whitespace run covering exactly `width` visual columns.

    With `use_tabs` the run is `width // tab_width` tabs followed by
    `width % tab_width` spaces, otherwise it is made of spaces only.

    Raises:
        AlignmentInvariantViolation: If `width` is negative.
    """
    if width < 0:
        raise AlignmentInvariantViolation(f"Negative indentation width: {width}")

    if use_tabs:
        return "\t" * (width // tab_width) + " " * (width % tab_width)
    return " " * width
