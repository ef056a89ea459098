# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Loading a file into a TextModel and writing it back safely."""

import codecs
import errno
import logging
import os
import shutil
import tempfile
from typing import Optional, Tuple

import chardet

from .errors import DecodeError
from .text_model import TextModel

logger = logging.getLogger(__name__)

DEFAULT_MIN_CONFIDENCE = 0.75


def decode_bytes(raw: bytes, min_confidence: float = DEFAULT_MIN_CONFIDENCE) -> Tuple[str, str]:
    """
    Decodes file content, trying the likely encodings in order.

    1. UTF-8 with a byte order mark, when the BOM is present.
    2. Strict UTF-8.
    3. The encoding guessed by chardet, if its confidence reaches `min_confidence`.

    Returns:
        Tuple[str, str]: The decoded text and the name of the encoding used.

    Raises:
        DecodeError: If none of the candidates decodes the content.
    """
    if raw.startswith(codecs.BOM_UTF8):
        try:
            return raw.decode("utf-8-sig"), "utf-8-sig"
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Invalid UTF-8 after byte order mark: {exc}") from exc

    try:
        return raw.decode("utf-8"), "utf-8"
    except UnicodeDecodeError as exc:
        utf8_error = exc

    detection = chardet.detect(raw)
    encoding_guess = detection.get("encoding")
    confidence = detection.get("confidence") or 0.0
    logger.debug(f"Chardet detected encoding '{encoding_guess}' with confidence {confidence:.2f}")

    if encoding_guess and confidence >= min_confidence:
        try:
            return raw.decode(encoding_guess), encoding_guess.lower()
        except (UnicodeDecodeError, LookupError) as exc:
            logger.warning(f"Failed to decode with detected encoding '{encoding_guess}': {exc}")

    raise DecodeError(
        f"Could not decode content: not UTF-8 ({utf8_error.reason} at byte {utf8_error.start}) "
        f"and no confident encoding guess (got {encoding_guess!r}, confidence {confidence:.2f})"
    ) from utf8_error


def write_atomic(filename: str, data: bytes) -> None:
    """
    Replaces the content of `filename` with `data` without ever leaving a
    truncated file behind.

    The data goes to a temporary file in the same directory, which is synced,
    given the permission bits of the original file and renamed over it. On
    failure the temporary file is removed and the original is untouched.

    Raises:
        OSError: If any step of the write fails.
    """
    target = os.path.realpath(filename)
    directory = os.path.dirname(target)

    tmp = tempfile.NamedTemporaryFile(
        mode="wb", dir=directory, prefix=f".{os.path.basename(target)}.", suffix=".tmp", delete=False)
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        if os.path.exists(target):
            shutil.copymode(target, tmp.name)
        os.replace(tmp.name, target)
    except BaseException:
        logger.error(f"Failed to write '{target}', removing temporary file '{tmp.name}'")
        try:
            os.unlink(tmp.name)
        except FileNotFoundError:
            pass
        raise
    logger.debug(f"write_atomic: wrote {len(data)} bytes to '{target}'")


class TextFile:
    """
    A file on disk together with the TextModel holding its content.

    Attributes:
        filename (str): Path the content was loaded from.
        model (TextModel): The decoded, editable content.
        encoding (str): Encoding the content was decoded with.
    """

    def __init__(self, filename: str, model: TextModel, encoding: str = "utf-8"):
        self.filename = filename
        self.model = model
        self.encoding = encoding

    @classmethod
    def load(cls, filename: str, min_confidence: float = DEFAULT_MIN_CONFIDENCE) -> "TextFile":
        """
        Reads and decodes `filename`.

        Raises:
            OSError: If the file is missing, a directory or unreadable.
            DecodeError: If the content cannot be decoded.
        """
        if os.path.isdir(filename):
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), filename)

        with open(filename, "rb") as fh:
            raw = fh.read()

        try:
            text, encoding = decode_bytes(raw, min_confidence)
        except DecodeError as exc:
            logger.error(f"All attempts to decode '{filename}' failed: {exc}")
            raise DecodeError(f"{filename}: {exc}") from exc

        model = TextModel(text)
        logger.info(f"Loaded '{filename}' (enc: {encoding}, {model.line_count} lines)")
        return cls(filename, model, encoding)

    @property
    def output_encoding(self) -> str:
        # Always UTF-8; a byte order mark present on input is kept.
        return "utf-8-sig" if self.encoding == "utf-8-sig" else "utf-8"

    def save(self, filename: Optional[str] = None) -> None:
        """
        Writes the model back as UTF-8, to `filename` or to the loaded path.

        Raises:
            OSError: If the file cannot be written.
        """
        target = filename or self.filename
        data = self.model.get_text().encode(self.output_encoding)
        write_atomic(target, data)
        logger.info(f"Saved '{target}' (enc: {self.output_encoding}, {len(data)} bytes)")
