"""
RC4 stream cipher.

The key schedule (KSA) builds a 256-byte permutation from the key, and the
generator (PRGA) walks that permutation to emit one keystream byte per step.
Encryption and decryption are the same operation: the keystream is XORed
into the data.

RC4 is broken by modern standards. It is kept here for interoperability
with formats that still use it.
"""

from __future__ import annotations

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
]

from typing import NoReturn

from .errors import KeyTooLong, KeyTooShort

BytesLike = bytes | bytearray | memoryview

MIN_KEY_LEN = 5  # 40 bits
MAX_KEY_LEN = 256  # 2048 bits


class CipherState:
    """Permutation ``S`` plus the generator cursors ``i`` and ``j``.

    Instances are produced by :func:`initialize` and advanced in place by
    :func:`next_byte` and :func:`apply`. The keystream depends on the exact
    order of those calls, so a state is never copied or pickled: drive one
    state from one sequence of calls only.
    """

    __slots__ = ("S", "i", "j")

    def __init__(self, S: bytearray) -> None:
        self.S = S
        self.i = 0
        self.j = 0

    def __repr__(self) -> str:
        return f"<CipherState i={self.i} j={self.j}>"

    def __copy__(self) -> NoReturn:
        raise TypeError("CipherState cannot be copied")

    def __deepcopy__(self, memo: dict[int, object]) -> NoReturn:
        raise TypeError("CipherState cannot be copied")

    def __reduce_ex__(self, protocol: object) -> NoReturn:
        raise TypeError("CipherState cannot be pickled")


def initialize(key: BytesLike) -> CipherState:
    """Run the RC4 Key-Scheduling Algorithm (KSA).

    Args:
        key: Secret key, between ``MIN_KEY_LEN`` and ``MAX_KEY_LEN`` bytes.

    Returns:
        A fresh state with both cursors at zero.

    Raises:
        KeyTooShort: If the key is shorter than ``MIN_KEY_LEN``.
        KeyTooLong: If the key is longer than ``MAX_KEY_LEN``.
    """
    key = bytes(memoryview(key))
    klen = len(key)
    if klen < MIN_KEY_LEN:
        raise KeyTooShort(MIN_KEY_LEN)
    if klen > MAX_KEY_LEN:
        raise KeyTooLong(MAX_KEY_LEN)

    S = bytearray(range(256))
    j = 0
    for i in range(256):
        j = (j + S[i] + key[i % klen]) & 0xFF
        S[i], S[j] = S[j], S[i]
    return CipherState(S)


def next_byte(state: CipherState) -> int:
    """Advance the state by one PRGA step and return the keystream byte."""
    S = state.S
    i = (state.i + 1) & 0xFF
    j = (state.j + S[i]) & 0xFF
    S[i], S[j] = S[j], S[i]
    state.i = i
    state.j = j
    return S[(S[i] + S[j]) & 0xFF]


def apply(state: CipherState, buffer: bytearray | memoryview) -> None:
    """XOR the keystream into ``buffer`` in place.

    Consumes one keystream byte per buffer byte, continuing from wherever
    ``state`` left off. Feeding consecutive chunks of a message gives the
    same result as feeding the whole message at once. An empty buffer
    consumes nothing.

    Args:
        state: State to advance.
        buffer: Writable byte buffer, either plaintext or ciphertext.

    Raises:
        TypeError: If ``buffer`` is read-only.
    """
    with memoryview(buffer) as view:
        if view.readonly:
            raise TypeError("buffer must be writable")

    # Same steps as next_byte, with the state held in locals for the loop.
    S = state.S
    i = state.i
    j = state.j
    for idx in range(len(buffer)):
        i = (i + 1) & 0xFF
        j = (j + S[i]) & 0xFF
        S[i], S[j] = S[j], S[i]
        buffer[idx] ^= S[(S[i] + S[j]) & 0xFF]
    state.i = i
    state.j = j


def apply_static(key: BytesLike, buffer: bytearray | memoryview) -> None:
    """En/decrypt ``buffer`` in place using a private state built from ``key``.

    Raises:
        KeyTooShort: If the key is shorter than ``MIN_KEY_LEN``.
        KeyTooLong: If the key is longer than ``MAX_KEY_LEN``.
        TypeError: If ``buffer`` is read-only.
    """
    apply(initialize(key), buffer)


def crypt(key: BytesLike, data: BytesLike) -> bytes:
    """Return ``data`` en/decrypted with a fresh keystream for ``key``."""
    out = bytearray(data)
    apply_static(key, out)
    return bytes(out)


class RC4:
    """RC4 cipher object holding its own keystream position.

    Successive :meth:`encrypt` / :meth:`decrypt` calls continue the same
    keystream, like a ``Crypto.Cipher.ARC4`` object does.
    """

    key_size = range(MIN_KEY_LEN, MAX_KEY_LEN + 1)

    def __init__(self, key: BytesLike) -> None:
        """
        Args:
            key: RC4 key bytes, between ``MIN_KEY_LEN`` and ``MAX_KEY_LEN``
                bytes long.

        Raises:
            KeyTooShort: If the key is too short.
            KeyTooLong: If the key is too long.
        """
        self._state = initialize(key)

    def apply(self, buffer: bytearray | memoryview) -> None:
        """XOR the next ``len(buffer)`` keystream bytes into ``buffer``."""
        apply(self._state, buffer)

    def encrypt(self, data: BytesLike) -> bytes:
        """Encrypt the next piece of a message.

        Args:
            data: Plaintext bytes.

        Returns:
            Ciphertext of the same length.
        """
        out = bytearray(data)
        apply(self._state, out)
        return bytes(out)

    def decrypt(self, data: BytesLike) -> bytes:
        """Decrypt the next piece of a message.

        Args:
            data: Ciphertext bytes.

        Returns:
            Plaintext of the same length.
        """
        return self.encrypt(data)
