# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Command line front end.

Usage: lineup-substitution <search-text> <replacement> <file>

All occurrences of <search-text> in <file> are replaced by <replacement>
while keeping the parameters aligned on the parenthesis of the call. The file
is modified in place, so keep a copy (ideally under version control).
"""

import locale
import logging
import os
import sys
from typing import List, Optional

from .config import load_config, setup_logging
from .driver import lineup_file
from .errors import LineupError

logger = logging.getLogger(__name__)


def print_usage(program: str) -> None:
    print(f"Usage: {program} <search-text> <replacement> <file>", file=sys.stderr)
    print("WARNING: the script modifies <file>!", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Runs the tool and returns the process exit status.

    Exit status is 1 on wrong usage or on any error; in both cases the file
    is not written.
    """
    argv = sys.argv if argv is None else argv
    program = os.path.basename(argv[0]) if argv else "lineup-substitution"

    if len(argv) != 4:
        print_usage(program)
        return 1

    search_text, replacement, filename = argv[1:4]

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e_locale:
        print(f"Warning: failed to set system locale: {e_locale}", file=sys.stderr)

    config = load_config()
    setup_logging(config)
    logger.debug(f"Substituting {search_text!r} with {replacement!r} in '{filename}'")

    try:
        report = lineup_file(filename, search_text, replacement, config)
    except (LineupError, OSError) as exc:
        logger.debug("Substitution aborted", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.info(
        f"'{filename}': {report.replacements} replacement(s), {report.realigned_lines} line(s) realigned")
    return 0


if __name__ == "__main__":
    sys.exit(main())
