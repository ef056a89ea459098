# lineup-substitution is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Configuration loading and logging setup."""

import logging
import logging.handlers
import os
import sys
from typing import Any, Dict, Optional

import toml

CONFIG_ENV_VAR = "LINEUP_SUBSTITUTION_CONFIG"
DEFAULT_CONFIG_FILENAME = "lineup-substitution.toml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": True,
        # Empty: no log file.
        "log_file": "",
        "separate_error_log": False,
    },
    "files": {
        "min_detection_confidence": 0.75,
    },
}


# --- Dictionary Deep Merge Utility ---
def deep_merge(base: Dict[Any, Any], override: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.

    Nested dictionaries present on both sides are merged key by key; any other
    value from `override` replaces the one from `base`. Neither input is
    modified.

    Example:
        >>> deep_merge({'a': 1, 'b': {'x': 10}}, {'b': {'y': 2}})
        {'a': 1, 'b': {'x': 10, 'y': 2}}
    """
    result = dict(base)
    for key, override_value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
        else:
            result[key] = override_value
    return result


def _resolve_config_path(config_path: Optional[str]) -> str:
    if config_path:
        return config_path
    return os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILENAME


def load_config(config_path: Optional[str] = None) -> dict:
    """
    Loads the configuration, merging a user TOML file onto the defaults.

    The file is `config_path` when given, else the path in the
    LINEUP_SUBSTITUTION_CONFIG environment variable, else
    *lineup-substitution.toml* in the working directory. A missing file is
    not an error. Read and parse errors are logged and the defaults are used,
    so the function never raises.

    Returns:
        dict: The merged configuration.

    Example:
        >>> load_config("/nonexistent.toml")["files"]["min_detection_confidence"]
        0.75
    """
    path = _resolve_config_path(config_path)
    user_config: dict = {}

    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as fh:
                user_config = toml.loads(fh.read())
            logging.debug("Loaded user config from %s", path)
        except toml.TomlDecodeError as exc:
            logging.error("TOML parse error in %s: %s – using defaults.", path, exc)
        except OSError as exc:
            logging.error("Error reading %s: %s – using defaults.", path, exc)
    else:
        logging.debug("Config file %s not found – using defaults.", path)

    final_config = deep_merge(DEFAULT_CONFIG, user_config)

    # A section replaced by a non-table value falls back to its defaults.
    for section, default_val in DEFAULT_CONFIG.items():
        if not isinstance(final_config.get(section), dict):
            logging.warning("Config section [%s] is not a table – using defaults.", section)
            final_config[section] = dict(default_val)
    return final_config


def _level(name: Any, fallback: int) -> int:
    level = getattr(logging, str(name).upper(), None)
    return level if isinstance(level, int) else fallback


# --- Logging Setup Function ---
def setup_logging(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Configures the root logger from the ``[logging]`` section of `config`.

    Handlers:

    1. **Console handler** – `stderr`, threshold `console_level`
       (default **WARNING**), disabled by ``log_to_console = false``.
    2. **File handler** – rotating file at `log_file` from `file_level`
       (default **DEBUG**) upward; only when `log_file` is set.
    3. **Error-file handler** – rotating ``<log_file>.error`` holding only
       **ERROR** and **CRITICAL** records, when `separate_error_log` is true.

    Existing root handlers are replaced, so calling this twice does not
    duplicate records. Failures to open log files are reported on stderr and
    the remaining handlers are still installed.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    file_level = _level(logging_config.get("file_level", "DEBUG"), logging.DEBUG)
    console_level = _level(logging_config.get("console_level", "WARNING"), logging.WARNING)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    handlers = []

    if logging_config.get("log_to_console", True):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(console_level)
        handlers.append(console_handler)

    log_filename = logging_config.get("log_file") or ""
    if log_filename:
        try:
            log_dir = os.path.dirname(log_filename)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_filename, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(file_level)
            handlers.append(file_handler)
        except OSError as e_fh:
            print(f"Error setting up file logger for '{log_filename}': {e_fh}. File logging disabled.",
                  file=sys.stderr)

        if logging_config.get("separate_error_log", False):
            error_log_filename = f"{log_filename}.error"
            try:
                error_file_handler = logging.handlers.RotatingFileHandler(
                    error_log_filename, maxBytes=1 * 1024 * 1024, backupCount=3, encoding="utf-8"
                )
                error_file_handler.setFormatter(file_formatter)
                error_file_handler.setLevel(logging.ERROR)
                handlers.append(error_file_handler)
            except OSError as e_efh:
                print(f"Error setting up separate error log '{error_log_filename}': {e_efh}.", file=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    for handler in handlers:
        root_logger.addHandler(handler)
    # Root passes everything the most verbose handler wants.
    root_logger.setLevel(min([h.level for h in handlers], default=logging.WARNING))

    logging.debug("Logging setup complete. Root logger level: %s.", logging.getLevelName(root_logger.level))
