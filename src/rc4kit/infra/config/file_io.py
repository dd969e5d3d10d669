"""
Settings files for rc4kit.

Settings live in a TOML or JSON file with a ``[general]`` table (see the
bundled ``settings.sample.toml``). Every file is validated when read and
before it is stored, so a bad ``chunk_size`` or ``in_place`` is reported
when the file is loaded rather than halfway through processing a file.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, BinaryIO

from rc4kit.infra.config.adapter import LOG_LEVELS, ConfigAdapter
from rc4kit.infra.paths import DEFAULT_CONFIG_FILE, SETTING_PATH

logger = logging.getLogger(__name__)

LOCAL_SETTING_NAMES = ("settings.toml", "settings.json")

_PARSERS: dict[str, Callable[[BinaryIO], Any]] = {
    ".toml": tomllib.load,
    ".json": json.load,
}


def find_config_file(config_path: str | Path | None = None) -> Path | None:
    """Locate the settings file to use.

    Tried in order: ``config_path``, ``settings.toml`` and ``settings.json``
    in the working directory, then the per-user ``SETTING_PATH``. A missing
    ``config_path`` is logged and the search continues.

    Returns:
        The first existing file, or None.
    """
    if config_path:
        explicit = Path(config_path).expanduser().resolve()
        if explicit.is_file():
            return explicit
        logger.warning("Specified config file not found: %s", explicit)

    cwd = Path.cwd()
    for candidate in [*(cwd / name for name in LOCAL_SETTING_NAMES), SETTING_PATH]:
        if candidate.is_file():
            logger.debug("Using config file: %s", candidate)
            return candidate.resolve()

    return None


def validate_settings(data: dict[str, Any], source: object = "settings") -> None:
    """Check the ``general`` table of a settings mapping.

    Args:
        data: Parsed settings.
        source: Where the settings came from, used in error messages.

    Raises:
        ValueError: If ``general`` or ``general.debug`` is not a table, the
            log level is unknown, or a file en/decryption option has the
            wrong type or range.
    """
    general = data.get("general", {})
    if not isinstance(general, dict):
        raise ValueError(f"[general] must be a table in {source}")

    debug = general.get("debug", {})
    if not isinstance(debug, dict):
        raise ValueError(f"[general.debug] must be a table in {source}")

    level = debug.get("log_level") or "INFO"
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ValueError(
            f"log_level must be one of {', '.join(LOG_LEVELS)}, "
            f"got {level!r} in {source}"
        )

    try:
        ConfigAdapter(data).get_crypt_config()
    except ValueError as e:
        raise ValueError(f"Invalid settings in {source}: {e}") from e


def read_settings(path: Path) -> dict[str, Any]:
    """Parse and validate one settings file.

    Args:
        path: A ``.toml`` or ``.json`` file.

    Returns:
        The settings mapping.

    Raises:
        ValueError: If the extension is unsupported, the file does not
            parse, its root is not a table, or validation fails.
        OSError: If the file cannot be read.
    """
    parse = _PARSERS.get(path.suffix.lower())
    if parse is None:
        raise ValueError(f"Unsupported config file extension: {path.suffix}")

    fmt = path.suffix[1:].upper()
    with path.open("rb") as f:
        try:
            data = parse(f)
        except ValueError as e:
            raise ValueError(f"Invalid {fmt} in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(
            f"Config root must be a table, got {type(data).__name__} in {path}"
        )

    validate_settings(data, path)
    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Find, parse and validate the active settings file.

    Raises:
        FileNotFoundError: If no settings file exists.
        ValueError: If the file is invalid.
    """
    path = find_config_file(config_path)
    if path is None:
        raise FileNotFoundError("No valid config file found.")

    logger.debug("Loading configuration from: %s", path)
    return read_settings(path)


def copy_default_config(target: Path) -> None:
    """Write the bundled ``settings.sample.toml`` to ``target``."""
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(DEFAULT_CONFIG_FILE.read_bytes())
    logger.info("Sample configuration written to: %s", target)


def save_config(
    config: dict[str, Any],
    output_path: str | Path = SETTING_PATH,
) -> None:
    """Validate ``config`` and store it as JSON.

    Raises:
        ValueError: If ``config`` fails validation. Nothing is written.
        OSError: If writing fails.
    """
    validate_settings(config)

    output = Path(output_path).expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)
    try:
        with output.open("w", encoding="utf-8") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("Failed to write config JSON '%s': %s", output, e)
        raise

    logger.info("Configuration saved to JSON: %s", output)


def save_config_file(
    source_path: str | Path, output_path: str | Path = SETTING_PATH
) -> None:
    """Import a TOML/JSON settings file as the per-user JSON settings.

    Raises:
        FileNotFoundError: If ``source_path`` does not exist.
        ValueError: If ``source_path`` is invalid. Nothing is written.
    """
    source = Path(source_path).expanduser().resolve()
    if not source.is_file():
        raise FileNotFoundError(f"Source file not found: {source}")

    save_config(read_settings(source), output_path)
