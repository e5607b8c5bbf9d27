"""Shared pieces of the targets: rejection, success and the seeded hash."""

from __future__ import annotations

_MASK64 = (1 << 64) - 1

# Seed every computed target starts from.
_RUNTIME_SEED = 0xFFFFFFFFFFFFFFC5


class Bail(Exception):
    """Raised when a target rejects its input at a given byte position."""

    def __init__(self, message: str, position: int = 0) -> None:
        super().__init__(message, position)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        return f"{self.message} at {self.position}"


class TargetReached(Exception):
    """Raised when an input passes every check of a target."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return self.detail or "target reached"


def splitmix64(x: int) -> int:
    """Return one splitmix64 step of ``x`` as an unsigned 64-bit value."""
    x = (x + 0x9E3779B97F4A7C15) & _MASK64
    x = ((x ^ (x >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    x = ((x ^ (x >> 27)) * 0x94D049BB133111EB) & _MASK64
    return x ^ (x >> 31)


def runtime_seed() -> int:
    """Return the seed that computed targets hash from."""
    return _RUNTIME_SEED