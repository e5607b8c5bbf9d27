"""Targets that reward reaching deep or unusual control flow."""

from __future__ import annotations

from typing import Dict, Set

from .common import TargetReached

_CALL_CHAIN = b"abcd"
_MAX_DEPTH = 1000
_ONLY_SOME_BYTES_MIN = 2048
_FUZ_VALUE = ord("F") + 251 * ord("U") + 251 * 251 * ord("Z")
_RUN_TARGET = 20


def check_caller_callee(data: bytes) -> None:
    """Dispatch four bytes through a table whose entries install further entries.

    Only the calls 'a', 'b', 'c', 'd' in this order reach the final entry.
    """
    if len(data) < 4:
        return

    # Maps a byte to its step in the chain; each step installs the next one.
    installed: Dict[int, int] = {_CALL_CHAIN[0]: 0}
    last_step = len(_CALL_CHAIN) - 1
    for byte in data[:4]:
        step = installed.get(byte)
        if step is None:
            continue
        if step == last_step:
            raise TargetReached("caller-callee chain completed")
        installed[_CALL_CHAIN[step + 1]] = step + 1


def check_cleanse(data: bytes) -> None:
    """Reach the target when four scattered bytes hold fixed characters."""
    if (
        len(data) >= 20
        and data[1] == ord("1")
        and data[5] == ord("5")
        and data[10] == ord("A")
        and data[19] == ord("Z")
    ):
        raise TargetReached("scattered bytes matched")


def check_counter(data: bytes) -> None:
    """Reach the target when at least four bytes equal 'A' plus their position."""
    hits = sum(1 for position, byte in enumerate(data) if byte == ord("A") + position)
    if hits >= 4:
        raise TargetReached(f"{hits} positional matches")


def check_deep_recursion(data: bytes) -> None:
    """Reach the target when more than 1000 leading bytes follow the cycle A..J."""
    depth = 0
    while True:
        if depth > _MAX_DEPTH:
            raise TargetReached(f"depth {depth} reached")
        if depth == len(data) or data[depth] != ord("A") + depth % 10:
            return
        depth += 1


def _prefix_bits(data: bytes, word: bytes) -> int:
    bits = 0
    for position, (got, want) in enumerate(zip(data, word)):
        if got == want:
            bits |= 1 << position
    return bits


def check_four_independent_branches(data: bytes) -> None:
    """Reach the target when the input starts with "FUZZ"."""
    if _prefix_bits(data, b"FUZZ") == 0b1111:
        raise TargetReached("FUZZ found")


def check_full_coverage_set(data: bytes) -> None:
    """Reach the target when the input starts with "FUZZER"."""
    if _prefix_bits(data, b"FUZZER") == 0b111111:
        raise TargetReached("FUZZER found")


def check_labels20(data: bytes) -> None:
    """Reach the target on "FUZZ" followed by 'M' at 16 and 'E' at 19."""
    if (
        len(data) >= 20
        and data[:4] == b"FUZZ"
        and data[16] == ord("M")
        and data[19] == ord("E")
    ):
        raise TargetReached("labels matched")


def check_only_some_bytes(data: bytes) -> None:
    """Reach the target on at least 2048 bytes starting "ABC" with F, U, Z at 5, 7, 9."""
    if len(data) < _ONLY_SOME_BYTES_MIN:
        return
    if data[:3] != b"ABC":
        return
    combined = (data[5] + 251 * data[7] + 251 * 251 * data[9]) & 0xFFFFFFFF
    if combined == _FUZ_VALUE:
        raise TargetReached("selected bytes matched")


def check_repeated_bytes(data: bytes) -> None:
    """Reach the target when the input holds a run of at least 20 'A' bytes."""
    current = longest = 0
    for byte in data:
        current = current + 1 if byte == ord("A") else 0
        longest = max(longest, current)
    if longest >= _RUN_TARGET:
        raise TargetReached(f"Max: {longest}")


def check_single_byte_input(data: bytes) -> None:
    """Reach the target when the middle byte is 42."""
    if data and data[len(data) // 2] == 42:
        raise TargetReached("middle byte matched")


def check_three_functions(data: bytes) -> None:
    """Reach the target when the input starts with "FUZZME"."""
    if len(data) >= 5 and data[:4] == b"FUZZ" and data[4] == ord("M"):
        if len(data) >= 6 and data[5] == ord("E"):
            raise TargetReached("FUZZME found")


class TableLookup:
    """A target that remembers which table slots its inputs have hit.

    Each four-byte input selects one of 4096 slots; the target is reached
    once every slot has been seen.
    """

    SIZE = 1 << 12

    def __init__(self) -> None:
        self.seen: Set[int] = set()

    def __call__(self, data: bytes) -> None:
        if len(data) != 4:
            return
        index = int.from_bytes(data, "little") % self.SIZE
        self.seen.add(index)
        if len(self.seen) == self.SIZE:
            raise TargetReached("found all values")