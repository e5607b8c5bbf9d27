"""Targets whose expected values are computed at run time from a seeded hash."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import ClassVar, Iterator, NoReturn, Optional

from .common import Bail, TargetReached, runtime_seed, splitmix64

_MASK64 = (1 << 64) - 1
_LIMB_SIZE = 8

_COMPUTED_WORDS = 5
_REPEATED_WORDS = 256
_LONG_LOOP_MAX = 255


def _u32(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 4], "little")


def _hash_chain() -> Iterator[int]:
    """Yield the successive 64-bit hashes that the computed targets expect."""
    value = splitmix64(runtime_seed())
    while True:
        yield value
        value = splitmix64(value)


def _mix(x: int) -> int:
    x = ((x ^ (x >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    x = ((x ^ (x >> 27)) * 0x94D049BB133111EB) & _MASK64
    return x ^ (x >> 31)


@dataclass(frozen=True)
class U256:
    """A 256-bit value held as four little-endian 64-bit limbs."""

    a: int
    b: int
    c: int
    d: int

    SIZE: ClassVar[int] = 32

    def advanced(self) -> "U256":
        """Return the next value: every limb mixed, then a<->c and b<->d swapped."""
        return U256(_mix(self.c), _mix(self.d), _mix(self.a), _mix(self.b))

    def to_bytes(self) -> bytes:
        """Return the 32-byte little-endian layout of the four limbs."""
        return b"".join(
            limb.to_bytes(_LIMB_SIZE, "little") for limb in (self.a, self.b, self.c, self.d)
        )

    @staticmethod
    def from_bytes(data: bytes) -> "U256":
        """Read a value from exactly 32 bytes."""
        if len(data) != U256.SIZE:
            raise ValueError(f"a U256 needs {U256.SIZE} bytes, got {len(data)}")
        limbs = (
            int.from_bytes(data[start : start + _LIMB_SIZE], "little")
            for start in range(0, U256.SIZE, _LIMB_SIZE)
        )
        return U256(*limbs)

    def __str__(self) -> str:
        return f"0x{self.a:x}_{self.b:x}_{self.c:x}_{self.d:x}"


_LONG_LOOP_START = U256(
    runtime_seed(), 0xA9C631E117332060, 0x620A6E3C1058E850, 0x159EDEA320A9E804
)


def check_u32_computed(data: bytes) -> NoReturn:
    """Require five 32-bit words equal to the low halves of a hash chain."""
    if len(data) < 24:
        raise Bail("too short", 0)
    for index, expected in zip(range(_COMPUTED_WORDS), _hash_chain()):
        offset = index * 4
        if _u32(data, offset) != expected & 0xFFFFFFFF:
            raise Bail("wrong u32", offset)
    raise TargetReached("computed u32 chain matched")


def check_u32_computed_branchless(data: bytes) -> NoReturn:
    """Compare all five computed words; a failure reports a bitmask of hits."""
    if len(data) < _COMPUTED_WORDS * 4:
        raise Bail("too short", 0)
    hits = 0
    for index, expected in zip(range(_COMPUTED_WORDS), _hash_chain()):
        if _u32(data, index * 4) == expected & 0xFFFFFFFF:
            hits |= 1 << index
    if hits == (1 << _COMPUTED_WORDS) - 1:
        raise TargetReached("computed u32 branchless matched")
    raise Bail("wrong u32 at index", hits)


def check_u32_computed_repeated(data: bytes) -> NoReturn:
    """Require 256 words, each its index combined with the top bits of a hash."""
    if len(data) < _REPEATED_WORDS * 4:
        raise Bail("too short", 0)
    for index, hashed in zip(range(_REPEATED_WORDS), _hash_chain()):
        expected = index | (hashed & 0xFFFFFF00)
        if _u32(data, index * 4) != expected:
            raise Bail("wrong u32", index * 4)
    raise TargetReached("repeated computed u32 matched")


def _check_u256_blocks(data: bytes, offset: int, loops: int, final_position: int) -> NoReturn:
    size = U256.SIZE
    required = size * (loops + 1) + offset
    if len(data) < required:
        raise Bail("too short", required)
    for i in range(loops):
        start = i * size
        if len(data) < size + start:
            raise Bail("too short", start)
        fill = bytes([(ord("A") + i * 5) & 0xFF]) * size
        if data[start : start + size] != fill:
            raise Bail("wrong u256", start)
    stepped = bytes((ord("0") + i * 2) & 0xFF for i in range(size))
    start = loops * size + offset
    if data[start : start + size] != stepped:
        raise Bail("wrong u256", final_position)
    raise TargetReached("u256 blocks matched")


def check_u256_fourlimbed(data: bytes, offset: int = 0, loops: int = 2) -> NoReturn:
    """Require ``loops`` repeated-byte blocks and a stepped block after ``offset``."""
    _check_u256_blocks(data, offset, loops, 64)


def check_u256_twolimbed(data: bytes, offset: int = 0, loops: int = 2) -> NoReturn:
    """Like the four-limb target, reporting the stepped block's real position."""
    _check_u256_blocks(data, offset, loops, loops * U256.SIZE + offset)


def check_u256_long_looped(data: bytes, verbose: Optional[bool] = None) -> NoReturn:
    """Require 256 consecutive 256-bit values of an advancing hash.

    When ``verbose`` is None, progress is reported if TEST_PRINTS is set.
    """
    if verbose is None:
        verbose = os.environ.get("TEST_PRINTS") is not None
    size = U256.SIZE
    expected = _LONG_LOOP_START.advanced()
    pos = 0

    for i in range(_LONG_LOOP_MAX):
        req_len = pos + size
        if len(data) <= req_len:
            if verbose:
                print(
                    f"[REACHED {i + 1} / {_LONG_LOOP_MAX}] not enough data pos {pos}, "
                    f"len {len(data)}, required len {req_len}",
                    file=sys.stderr,
                )
            raise Bail("not enough data for iteration", i)
        got = U256.from_bytes(data[pos : pos + size])
        if got != expected:
            if verbose:
                print(
                    f"[REACHED {i + 1} / {_LONG_LOOP_MAX}] invalid data at {pos} "
                    f"{got} vs {expected}",
                    file=sys.stderr,
                )
            raise Bail("wrong at loop iteration", i)
        pos += size
        expected = expected.advanced()

    req_len = pos + size
    if len(data) < req_len:
        if verbose:
            print(
                f"[LAST CHECK] not enough data pos {pos}, len {len(data)}, "
                f"required len {req_len}",
                file=sys.stderr,
            )
        raise Bail("not enough data for last check requires", req_len)
    got = U256.from_bytes(data[pos : pos + size])
    if got == expected:
        raise TargetReached("long u256 chain matched")
    if verbose:
        print(f"[LAST CHECK] invalid data at {pos} {got} vs {expected}", file=sys.stderr)
    raise Bail("wrong at last check", req_len)