from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CryptResult:
    """Outcome of en/decrypting one file.

    Attributes:
        source: File that was read.
        target: File that was written (same as ``source`` when in place).
        size: Number of bytes processed.
        sha256: Hex SHA256 digest of the bytes written.
    """

    source: Path
    target: Path
    size: int
    sha256: str

    @property
    def in_place(self) -> bool:
        return self.source == self.target
