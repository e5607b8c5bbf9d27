"""Targets built around integer comparisons, switches and byte swaps."""

from __future__ import annotations

import struct
import sys
from typing import Set

from .common import TargetReached

_INT32_MIN = -(1 << 31)
_INT64_MIN = -(1 << 63)

_seen_stages: Set[int] = set()


def _stage(number: int) -> bool:
    """Report a comparison stage on stderr the first time it is passed."""
    if number not in _seen_stages:
        print(f"Seen stage {number}", file=sys.stderr)
        _seen_stages.add(number)
    return True


def check_abs_neg_and_constant(data: bytes) -> None:
    """Reach the target when abs(x) overflows to negative and y is a constant."""
    if len(data) < 8:
        return
    x, y = struct.unpack_from("<iI", data)
    # abs() of the most negative int stays negative.
    if x == _INT32_MIN and y == 0xBADDCAFE:
        raise TargetReached(f"x = 0x{x & 0xFFFFFFFF:x} y 0x{y:x}")


def check_abs_neg_and_constant64(data: bytes) -> None:
    """The 64-bit variant of the abs-overflow puzzle."""
    if len(data) < 16:
        return
    x, y = struct.unpack_from("<qQ", data)
    if x == _INT64_MIN and y == 0xBADDCAFEDEADBEEF:
        raise TargetReached(f"x = 0x{x & 0xFFFFFFFFFFFFFFFF:x} y 0x{y:x}")


def check_swap_cmp(data: bytes) -> None:
    """Reach the target when byte-swapped words at three places match constants."""
    size = len(data)
    if size < 14:
        return
    (x,) = struct.unpack_from(">Q", data, 0)
    (y,) = struct.unpack_from(">I", data, size // 2)
    (z,) = struct.unpack_from(">I", data, size - 4)
    if x == 0x46555A5A5A5A5546 and z == 0x4F4B and y == 0x66757A7A:
        if data[size - 5] == ord("z"):
            raise TargetReached("swapped constants matched")


_SWITCH2_SCORES = {100001: 1, 100002: 2, 100003: 4}


def check_switch2(data: bytes) -> None:
    """Reach the target when three switch scores add up to 3, 5, 6 or 7."""
    if len(data) < 12:
        return
    result = sum(_SWITCH2_SCORES.get(value, 0) for value in struct.unpack_from("<3i", data))
    if result in (3, 5, 6, 7):
        raise TargetReached(f"Res={result}")


def check_switch3(data: bytes) -> None:
    """Reach the target when the middle 32-bit word hits one of two cases."""
    if len(data) < 20:
        return
    (value,) = struct.unpack_from("<I", data, len(data) // 2)
    if value in (0x47524159, 0x52474220):
        raise TargetReached(f"switch value 0x{value:x}")


def check_switch(data: bytes) -> None:
    """Reach the target when an int, a 64-bit word and a short hit their last cases."""
    size = len(data)
    if size < 4 or struct.unpack_from("<i", data, 0)[0] != 100000001:
        return
    if size < 12 or struct.unpack_from("<Q", data, 4)[0] != 100000001:
        return
    if size < 14 or struct.unpack_from("<h", data, 12)[0] != 21402:
        return
    raise TargetReached("all switches matched")


def check_simple_cmp(data: bytes) -> None:
    """Reach the target when four packed fields land in narrow ranges."""
    if len(data) != 21:
        return
    x, y, z, a = struct.unpack("<QqiB", data)
    if (
        x > 1234567890
        and _stage(1)
        and x < 1234567895
        and _stage(2)
        and a == 0x42
        and _stage(3)
        and y >= 987654321
        and _stage(4)
        and y <= 987654325
        and _stage(5)
        and z < -10000
        and _stage(6)
        and z >= -10005
        and _stage(7)
        and z != -10003
        and _stage(8)
    ):
        raise TargetReached(f"size {len(data)} ({x}, {y}, {z}, {a})")


_THREE_BYTES_TARGET = ord("F") + 251 * ord("U") + 251 * 251 * ord("Z")


def check_three_bytes(data: bytes) -> None:
    """Reach the target when three bytes combine to the value of "FUZ"."""
    if len(data) < 3:
        return
    if data[0] + 251 * data[1] + 251 * 251 * data[2] == _THREE_BYTES_TARGET:
        raise TargetReached("FUZ found")