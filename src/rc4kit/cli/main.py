"""
Command-line interface for rc4kit.

Usage:
    rc4kit crypt -f secret.bin -k 01 02 03 04 05
    rc4kit crypt -f secret.bin -k 0102030405 -o secret.bin.rc4
    rc4kit config init
    rc4kit config set my_settings.toml
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rc4kit import __version__
from rc4kit.infra.config import (
    LOG_LEVELS,
    ConfigAdapter,
    copy_default_config,
    load_config,
    save_config_file,
)
from rc4kit.infra.paths import DEFAULT_CONFIG_FILENAME, SETTING_PATH
from rc4kit.infra.persistence.file_crypt import crypt_file
from rc4kit.libs.crypto import (
    InvalidHexKey,
    KeyTooLong,
    KeyTooShort,
    parse_hex_key,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE = 2

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: from config, else INFO)",
    )
    common.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Settings file (.toml or .json)",
    )

    parser = argparse.ArgumentParser(
        prog="rc4kit",
        description="RC4 file en/decryption",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    crypt = sub.add_parser(
        "crypt",
        parents=[common],
        help="En/decrypt a file",
        description="En/decrypt a file. Running it twice with the same key "
        "restores the original contents.",
    )
    crypt.add_argument(
        "-f",
        "--file",
        required=True,
        type=Path,
        metavar="FILE_NAME",
        help="Name of file to en/decrypt",
    )
    crypt.add_argument(
        "-k",
        "--key",
        required=True,
        nargs="+",
        metavar="HEX_BYTES",
        help="En/decryption key: 5 to 256 hex bytes, e.g. '01 02 03 04 05' "
        "or '0102030405'",
    )
    crypt.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="PATH",
        help="Write the result here instead of overwriting FILE_NAME",
    )
    crypt.add_argument(
        "--chunk-size",
        type=_positive_int,
        metavar="BYTES",
        help="Bytes processed per step",
    )
    crypt.set_defaults(func=_cmd_crypt)

    config = sub.add_parser("config", help="Manage settings files")
    config_sub = config.add_subparsers(dest="config_command", required=True)

    init = config_sub.add_parser(
        "init", parents=[common], help="Write the sample settings file"
    )
    init.add_argument(
        "--path",
        type=Path,
        metavar="PATH",
        help=f"Destination (default: ./{DEFAULT_CONFIG_FILENAME})",
    )
    init.add_argument(
        "--force", action="store_true", help="Overwrite an existing file"
    )
    init.set_defaults(func=_cmd_config_init)

    set_ = config_sub.add_parser(
        "set", parents=[common], help="Store a settings file as user settings"
    )
    set_.add_argument("source", type=Path, help="TOML or JSON settings file")
    set_.set_defaults(func=_cmd_config_set)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args.config)
    except ValueError as e:
        if args.command != "config":
            print(f"Error: invalid config: {e}", file=sys.stderr)
            return EXIT_USAGE
        # config init/set must still work to replace a broken file
        print(f"Warning: ignoring invalid config: {e}", file=sys.stderr)
        settings = {}

    adapter = ConfigAdapter(settings)
    _setup_logging(args.log_level or adapter.get_log_level())

    code: int = args.func(args, adapter)
    return code


def _load_settings(config_path: Path | None) -> dict[str, Any]:
    """Load settings if a file is found; built-in defaults apply otherwise."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        logger.debug("No config file found, using defaults")
        return {}


def _setup_logging(level: str) -> None:
    if level not in LOG_LEVELS:
        level = "INFO"
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("rc4kit").setLevel(level)


def _cmd_crypt(args: argparse.Namespace, adapter: ConfigAdapter) -> int:
    try:
        key = parse_hex_key(args.key)
    except InvalidHexKey as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        cfg = adapter.get_crypt_config()
    except ValueError as e:
        print(f"Error: invalid config: {e}", file=sys.stderr)
        return EXIT_USAGE

    source: Path = args.file
    output: Path | None = args.output
    if output is None and not cfg.in_place:
        output = source.with_name(source.name + cfg.output_suffix)

    logger.debug("Key length: %d bytes", len(key))
    try:
        result = crypt_file(
            source,
            key,
            output=output,
            chunk_size=args.chunk_size or cfg.chunk_size,
        )
    except KeyTooShort as e:
        print(f"Error: key must be at least {e.minimum} bytes", file=sys.stderr)
        return EXIT_USAGE
    except KeyTooLong as e:
        print(f"Error: key must be at most {e.maximum} bytes", file=sys.stderr)
        return EXIT_USAGE
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    logger.info("Processed %d bytes, sha256=%s", result.size, result.sha256)
    print(f"Processed {source}")
    if not result.in_place:
        print(f"Output written to {result.target}")
    return EXIT_OK


def _cmd_config_init(args: argparse.Namespace, adapter: ConfigAdapter) -> int:
    target: Path = args.path or Path.cwd() / DEFAULT_CONFIG_FILENAME
    if target.exists() and not args.force:
        print(
            f"Error: {target} already exists (use --force to overwrite)",
            file=sys.stderr,
        )
        return EXIT_IO_ERROR

    try:
        copy_default_config(target)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    print(f"Config written to {target}")
    return EXIT_OK


def _cmd_config_set(args: argparse.Namespace, adapter: ConfigAdapter) -> int:
    try:
        save_config_file(args.source, SETTING_PATH)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    print(f"Configuration saved to {SETTING_PATH}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
