"""
Data contracts and type definitions.
"""

__all__ = [
    "CryptConfig",
    "CryptResult",
]

from .config import CryptConfig
from .result import CryptResult
