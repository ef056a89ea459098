# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Entry points running a substitution on a string or on a file."""

import logging
from typing import Any, Dict, Optional

from .config import DEFAULT_CONFIG
from .realign import Substitution, SubstitutionReport
from .text_file import TextFile
from .text_model import TextModel

logger = logging.getLogger(__name__)


def transform(text: str, search_text: str, replacement: str) -> str:
    """
    Returns `text` with every `search_text` replaced by `replacement` and the
    parameters aligned on a following parenthesis adjusted. No I/O involved.

    Example:
        >>> transform("f (a,\\n   b);", "f", "foo")
        'foo (a,\\n     b);'
    """
    model = TextModel(text)
    Substitution(search_text, replacement).apply(model)
    return model.get_text()


def lineup_file(filename: str, search_text: str, replacement: str,
                config: Optional[Dict[str, Any]] = None) -> SubstitutionReport:
    """
    Runs the substitution on `filename` and overwrites it.

    The whole pass completes in memory before anything is written; if it
    fails, the file is left as it was. A file without any occurrence is not
    rewritten.

    Raises:
        InvalidArgumentError: If `search_text` is empty.
        OSError: If the file cannot be read or written.
        DecodeError: If the file content cannot be decoded.
        AlignmentInvariantViolation, SubstitutionError: If the pass fails.
    """
    config = config or DEFAULT_CONFIG
    min_confidence = config.get("files", {}).get(
        "min_detection_confidence", DEFAULT_CONFIG["files"]["min_detection_confidence"])

    substitution = Substitution(search_text, replacement)
    text_file = TextFile.load(filename, min_confidence=min_confidence)
    report = substitution.apply(text_file.model)

    if report.replacements == 0:
        logger.info(f"No occurrence of {search_text!r} in '{filename}', file left untouched.")
        return report

    text_file.save()
    return report
