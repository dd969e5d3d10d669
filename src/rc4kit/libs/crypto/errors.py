class KeyLengthError(ValueError):
    """Key length is outside the range accepted by the key schedule."""


class KeyTooShort(KeyLengthError):
    """Key is shorter than ``minimum`` bytes."""

    def __init__(self, minimum: int) -> None:
        super().__init__(f"Key must be at least {minimum} bytes")
        self.minimum = minimum


class KeyTooLong(KeyLengthError):
    """Key is longer than ``maximum`` bytes."""

    def __init__(self, maximum: int) -> None:
        super().__init__(f"Key must be at most {maximum} bytes")
        self.maximum = maximum


class InvalidHexKey(ValueError):
    """A key token could not be decoded as hexadecimal bytes."""
