from __future__ import annotations

import re
from collections.abc import Iterable

from .errors import InvalidHexKey

_SEP_RE = re.compile(r"[\s,]+")
_BYTE_RE = re.compile(r"[0-9a-fA-F]{1,2}")
_HEX_STRING_RE = re.compile(r"(?:[0-9a-fA-F]{2})+")


def _strip_prefix(token: str) -> str:
    token = token.strip()
    if token[:2] in ("0x", "0X"):
        return token[2:]
    return token


def parse_hex_key(tokens: str | Iterable[str]) -> bytes:
    """Decode a key given as hexadecimal text.

    Accepted forms:

    - A list of byte tokens, e.g. ``["0x01", "02", "a"]``. The ``0x``
      prefix is optional and each token holds one byte.
    - A string of tokens separated by whitespace or commas, e.g.
      ``"01 02 03 04 05"`` or ``"0x01,0x02,0x03"``. List elements are
      split the same way, so ``["01 02", "03"]`` is three tokens.
    - A single contiguous hex string, e.g. ``"0102030405"``.

    The key length is not checked here.

    Args:
        tokens: Hex text as a string or an iterable of strings.

    Returns:
        The decoded key bytes.

    Raises:
        InvalidHexKey: If the input is empty or any token is not valid hex.
    """
    if isinstance(tokens, str):
        tokens = [tokens]
    parts = [p for token in tokens for p in _SEP_RE.split(token.strip()) if p]

    if not parts:
        raise InvalidHexKey("Key must not be empty")

    if len(parts) == 1:
        single = _strip_prefix(parts[0])
        if len(single) > 2:
            if not _HEX_STRING_RE.fullmatch(single):
                raise InvalidHexKey(f"Invalid hex key string: {parts[0]!r}")
            return bytes.fromhex(single)

    out = bytearray()
    for token in parts:
        digits = _strip_prefix(token)
        if not _BYTE_RE.fullmatch(digits):
            raise InvalidHexKey(f"Invalid key hex byte: {token!r}")
        out.append(int(digits, 16))
    return bytes(out)


def format_hex_key(key: bytes) -> str:
    """Render key bytes as space-separated lowercase hex (``"01 02 0a"``)."""
    return key.hex(" ")
