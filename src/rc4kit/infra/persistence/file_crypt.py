"""
Chunked RC4 en/decryption of files on disk.

A file is processed in fixed-size chunks through a single cipher state, so
the result equals en/decrypting the whole file in memory while only one
chunk is held at a time.
"""

from __future__ import annotations

__all__ = ["DEFAULT_CHUNK_SIZE", "crypt_file"]

import hashlib
import io
import logging
from pathlib import Path

from rc4kit.libs.crypto.rc4 import BytesLike, CipherState, apply, initialize
from rc4kit.schemas import CryptResult

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


def crypt_file(
    path: str | Path,
    key: BytesLike,
    *,
    output: str | Path | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> CryptResult:
    """En/decrypt a file with RC4.

    Without ``output`` the file is rewritten in place. With ``output`` the
    result goes to that file and the source is left untouched, unless both
    refer to the same file (including through a hard link or symlink).

    Args:
        path: File to read.
        key: RC4 key bytes.
        output: Optional destination file. Parent directories are created.
        chunk_size: Bytes read and processed per step.

    Returns:
        CryptResult: Paths, byte count, and digest of the written data.

    Raises:
        ValueError: If ``chunk_size`` is not positive.
        KeyTooShort: If the key is too short.
        KeyTooLong: If the key is too long.
        IsADirectoryError: If ``path`` is a directory.
        FileNotFoundError: If ``path`` does not exist.
        OSError: If reading or writing fails.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    source = Path(path).expanduser()
    if source.is_dir():
        raise IsADirectoryError(f"Is a directory, not a file: {source}")
    if not source.is_file():
        raise FileNotFoundError(f"File not found: {source}")

    # Key errors surface before any file is opened for writing.
    state = initialize(key)

    target = source if output is None else Path(output).expanduser()
    # Hard links and symlinks to the source count as the same file.
    in_place = target.exists() and source.samefile(target)

    logger.debug(
        "RC4 %s -> %s (chunk_size=%d)",
        source,
        "in place" if in_place else target,
        chunk_size,
    )

    if in_place:
        with source.open("r+b") as f:
            size, digest = _crypt_in_place(f, state, chunk_size)
        target = source
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        with source.open("rb") as src, target.open("wb") as dst:
            size, digest = _crypt_copy(src, dst, state, chunk_size)

    logger.debug("RC4 done: %s (%d bytes)", target, size)
    return CryptResult(source=source, target=target, size=size, sha256=digest)


def _crypt_in_place(
    f: io.BufferedIOBase, state: CipherState, chunk_size: int
) -> tuple[int, str]:
    """Rewrite each chunk at the offset it was read from."""
    h = hashlib.sha256()
    buf = bytearray(chunk_size)
    view = memoryview(buf)
    offset = 0
    while n := f.readinto(buf):
        chunk = view[:n]
        apply(state, chunk)
        f.seek(offset)
        f.write(chunk)
        h.update(chunk)
        offset += n
    return offset, h.hexdigest()


def _crypt_copy(
    src: io.BufferedIOBase,
    dst: io.BufferedIOBase,
    state: CipherState,
    chunk_size: int,
) -> tuple[int, str]:
    """Stream ``src`` into ``dst`` through the cipher."""
    h = hashlib.sha256()
    buf = bytearray(chunk_size)
    view = memoryview(buf)
    size = 0
    while n := src.readinto(buf):
        chunk = view[:n]
        apply(state, chunk)
        dst.write(chunk)
        h.update(chunk)
        size += n
    return size, h.hexdigest()
