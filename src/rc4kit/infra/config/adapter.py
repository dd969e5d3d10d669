from __future__ import annotations

from typing import Any

from rc4kit.schemas import CryptConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigAdapter:
    """Typed accessor over a loaded settings mapping.

    Values are read from the ``general`` block and fall back to built-in
    defaults when missing.

    Args:
        config (dict[str, Any]): Loaded settings mapping, optionally
            containing a ``general`` block.

    Attributes:
        _config (dict[str, Any]): Internal stored settings mapping.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw settings mapping.

        Returns:
            dict[str, Any]: The stored settings.
        """
        return self._config

    def get_crypt_config(self) -> CryptConfig:
        """Build a CryptConfig from the general settings.

        Returns:
            CryptConfig: Resolved file en/decryption settings.

        Raises:
            ValueError: If ``chunk_size`` is not a positive integer,
                ``in_place`` is not a boolean, or ``output_suffix`` is not
                a string.
        """
        cfg = self._gen_cfg()

        chunk_size = cfg.get("chunk_size", 65536)
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
            raise ValueError(
                f"chunk_size must be an int, got {type(chunk_size).__name__}"
            )
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        in_place = cfg.get("in_place", True)
        if not isinstance(in_place, bool):
            raise ValueError(
                f"in_place must be a boolean, got {type(in_place).__name__}"
            )

        output_suffix = cfg.get("output_suffix", ".rc4")
        if not isinstance(output_suffix, str):
            raise ValueError(
                f"output_suffix must be a string, "
                f"got {type(output_suffix).__name__}"
            )

        return CryptConfig(
            chunk_size=chunk_size,
            in_place=in_place,
            output_suffix=output_suffix or ".rc4",
        )

    def get_log_level(self) -> str:
        """Return the configured logging level.

        Returns:
            str: Logging level or ``"INFO"`` if missing.
        """
        debug_cfg = self._gen_cfg().get("debug") or {}
        level = debug_cfg.get("log_level") if isinstance(debug_cfg, dict) else None
        return str(level).upper() if level else "INFO"

    def _gen_cfg(self) -> dict[str, Any]:
        """Return the general settings block.

        Returns:
            dict[str, Any]: ``general`` block or empty dict.
        """
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}
