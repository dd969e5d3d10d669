"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass
class CryptConfig:
    """Configuration for file en/decryption.

    Attributes:
        chunk_size: Number of bytes read and processed per step.
        in_place: Whether to overwrite the input file when no output path
            is given.
        output_suffix: Suffix appended to the input file name when
            ``in_place`` is disabled and no output path is given.
    """

    chunk_size: int = 65536
    in_place: bool = True
    output_suffix: str = ".rc4"
