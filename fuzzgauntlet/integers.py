"""Targets that compare fixed-width little-endian integers and a CRC-32 chain."""

from __future__ import annotations

import zlib
from typing import Iterable, NoReturn, Tuple

from .common import Bail, TargetReached

_Field = Tuple[int, int, int]  # offset, width in bytes, expected value


def _le(data: bytes, offset: int, size: int) -> int:
    return int.from_bytes(data[offset : offset + size], "little")


def _require(data: bytes, length: int, position: int = 0) -> None:
    if len(data) < length:
        raise Bail("too short", position)


def _expect_fields(data: bytes, fields: Iterable[_Field], label: str) -> None:
    for offset, size, value in fields:
        if _le(data, offset, size) != value:
            raise Bail(label, offset)


def crc32(data: bytes) -> int:
    """Return the reflected CRC-32 (polynomial 0xEDB88320) of ``data``."""
    return zlib.crc32(bytes(data)) & 0xFFFFFFFF


def check_crc32(data: bytes) -> NoReturn:
    """Require "BARF" followed by three chained CRC-32 values."""
    _require(data, 36)
    buff = bytearray(data[:36])
    for position, char in enumerate(b"BARF"):
        if buff[position] != char:
            raise Bail("wrong char", position)
    for i in range(1, 4):
        end = i * 4
        buff[end - 1] = ord("E") + i
        expected = crc32(buff[:end])
        if _le(buff, end, 4) != expected:
            raise Bail("wrong crc32", end)
    raise TargetReached("crc32 chain matched")


_U8_EXPECTED = b"ACEGIKMZY\x00\x01\x80"


def check_u8(data: bytes) -> NoReturn:
    """Require twelve specific bytes."""
    _require(data, 12)
    for position, (got, want) in enumerate(zip(data, _U8_EXPECTED)):
        if got != want:
            raise Bail("wrong char", position)
    raise TargetReached("u8 matched")


_U16_FIELDS = [
    (0, 2, 0x1122),
    (2, 2, 0x3344),
    (4, 2, 0x5566),
    (6, 2, 0x7788),
    (8, 2, 0xA0A1),
    (10, 2, 0xA2A3),
    (12, 2, 0x1234),
    (14, 2, 0xAABB),
]


def check_u16(data: bytes) -> NoReturn:
    """Require eight consecutive 16-bit constants."""
    _require(data, 16)
    _expect_fields(data, _U16_FIELDS, "wrong u16")
    raise TargetReached("u16 matched")


_U32_VALUES = [0x11223344, 0x55667788, 0xA0A1A2A3, 0xA4A5A6A7, 0x1234AABB]
_U32_FIELDS = [(i * 4, 4, value) for i, value in enumerate(_U32_VALUES)]


def check_u32(data: bytes) -> NoReturn:
    """Require five consecutive 32-bit constants."""
    _require(data, 24)
    _expect_fields(data, _U32_FIELDS, "wrong u32")
    raise TargetReached("u32 matched")


_U64_FIELDS = [
    (0, 8, 0x1122334455667788),
    (8, 8, 0xA0A1A2A3A4A5A6A7),
    (16, 8, 0x1234AABBCCDDEEFF),
    (24, 8, 0x0F1F2F3F4F5F6F7F),
]


def check_u64(data: bytes) -> NoReturn:
    """Require four consecutive 64-bit constants."""
    _require(data, 32)
    _expect_fields(data, _U64_FIELDS, "wrong u64")
    raise TargetReached("u64 matched")


def check_u128(data: bytes) -> NoReturn:
    """Require two repeated-byte 128-bit blocks and one stepped block."""
    _require(data, 48, 48)
    for i in range(2):
        offset = i * 16
        _require(data, 16 + offset, offset)
        if data[offset : offset + 16] != bytes([ord("A") + i * 5]) * 16:
            raise Bail("wrong u128", offset)
    stepped = bytes(ord("0") + i * 2 for i in range(16))
    if data[32:48] != stepped:
        raise Bail("wrong u128", 32)
    raise TargetReached("u128 matched")


def check_extint(data: bytes) -> NoReturn:
    """Require 24-, 40- and 56-bit integers at offsets 0, 3 and 8."""
    _require(data, 16)
    if _le(data, 0, 3) != 0x123456:
        raise Bail("wrong uint24_t", 0)
    if _le(data, 3, 5) != 0x1234554321:
        raise Bail("wrong uint40_t", 8)
    if _le(data, 8, 7) != 0x77665544332211:
        raise Bail("wrong uint56_t", 16)
    raise TargetReached("extint matched")


_U32_RANGES = [
    (0, 100100, 100102),
    (4, 2100, 2102),
    (8, 1234567, 1234569),
]


def check_u32_cmp(data: bytes) -> NoReturn:
    """Require three 32-bit values strictly inside narrow ranges."""
    _require(data, 24)
    for offset, lesser, greater in _U32_RANGES:
        value = _le(data, offset, 4)
        if value <= lesser or value >= greater:
            raise Bail("wrong u32", offset)
    raise TargetReached("u32 ranges matched")


def check_u32_branchless(data: bytes) -> NoReturn:
    """Compare all five 32-bit constants; a failure reports a bitmask of hits."""
    _require(data, 20)
    hits = 0
    for bit, (offset, size, value) in enumerate(_U32_FIELDS):
        if _le(data, offset, size) == value:
            hits |= 1 << bit
    if hits == (1 << len(_U32_FIELDS)) - 1:
        raise TargetReached("u32 branchless matched")
    raise Bail("wrong u32 off", hits)


_UNALIGNED_OFFSETS = [0, 5, 10, 16, 20]


def check_u32_branchless_unaligned(data: bytes) -> NoReturn:
    """Compare five 32-bit constants at unaligned offsets in one pass."""
    _require(data, 24)
    matched = all(
        _le(data, offset, 4) == value
        for offset, value in zip(_UNALIGNED_OFFSETS, _U32_VALUES)
    )
    if matched:
        raise TargetReached("u32 unaligned matched")
    raise Bail("one int was wrong", 0)