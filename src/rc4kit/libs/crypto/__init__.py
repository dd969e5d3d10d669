"""
RC4 stream cipher and key helpers.
"""

__all__ = [
    "MIN_KEY_LEN",
    "MAX_KEY_LEN",
    "CipherState",
    "RC4",
    "initialize",
    "next_byte",
    "apply",
    "apply_static",
    "crypt",
    "parse_hex_key",
    "format_hex_key",
    "KeyLengthError",
    "KeyTooShort",
    "KeyTooLong",
    "InvalidHexKey",
]

from .errors import InvalidHexKey, KeyLengthError, KeyTooLong, KeyTooShort
from .keys import format_hex_key, parse_hex_key
from .rc4 import (
    MAX_KEY_LEN,
    MIN_KEY_LEN,
    RC4,
    CipherState,
    apply,
    apply_static,
    crypt,
    initialize,
    next_byte,
)
