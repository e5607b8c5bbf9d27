"""Targets built around byte-string comparisons and simple transformations."""

from __future__ import annotations

import re
from typing import NoReturn

from .common import Bail, TargetReached

_WHITESPACE = b" \t\n\v\f\r"
_DIGITS = re.compile(rb"[0-9]*")
_HEX_DIGITS = b"0123456789abcdef"
_HEX_TARGET = b"[card-number]"

_TRANSFORM_MIN = 48
_TRANSFORM_BUFFER = 100


def _lower(byte: int) -> int:
    return byte + 32 if 0x41 <= byte <= 0x5A else byte


def _strncmp_equal(data: bytes, ref: bytes, n: int, *, fold: bool = False) -> bool:
    """Tell whether C ``strncmp`` (or ``strncasecmp``) would report equality."""
    for got, want in zip(data[:n], ref + b"\0"):
        if fold:
            got, want = _lower(got), _lower(want)
        if got != want:
            return False
        if got == 0:
            return True
    return True


def _atoi(buff: bytes) -> int:
    """Parse a leading decimal integer the way C ``atoi`` does on glibc."""
    text = bytes(buff).split(b"\0", 1)[0].lstrip(_WHITESPACE)
    sign = 1
    if text[:1] in (b"+", b"-"):
        if text[:1] == b"-":
            sign = -1
        text = text[1:]
    digits = _DIGITS.match(text).group()
    value = sign * int(digits) if digits else 0
    value = max(-(1 << 63), min((1 << 63) - 1, value))
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


_MEMCMP_FIELDS = (
    (0, b"0123"),
    (4, b"87654321"),
    (12, b"ABCDEFHIKLMNOPQR"),
)
_TAIL_OFFSET = 28
_TAIL = b"ZYXWVUTSRQPONMLKJIHGFEDCBA"


def check_memcmp(data: bytes) -> NoReturn:
    """Require four literal strings laid out back to back."""
    if len(data) < 32:
        raise Bail("too short", 0)
    for offset, expected in _MEMCMP_FIELDS:
        if data[offset : offset + len(expected)] != expected:
            raise Bail("wrong string", offset)
    if len(data) < 54:
        raise Bail("too short", 0)
    if data[_TAIL_OFFSET : _TAIL_OFFSET + len(_TAIL)] != _TAIL:
        raise Bail("wrong string", _TAIL_OFFSET)
    raise TargetReached("memcmp strings matched")


_STRCMP_FIELDS = (
    (0, b"0123", True),
    (4, b"87654321", False),
    (12, b"ABCDEFHIKLMNOPQR", True),
)


def check_strcmp(data: bytes) -> NoReturn:
    """Like the memcmp target, with some fields compared case-insensitively."""
    if len(data) < 28:
        raise Bail("too short", 0)
    for offset, expected, fold in _STRCMP_FIELDS:
        if not _strncmp_equal(data[offset:], expected, len(expected), fold=fold):
            raise Bail("wrong string", offset)
    if len(data) < 54:
        raise Bail("too short", 0)
    if not _strncmp_equal(data[_TAIL_OFFSET:], _TAIL, len(_TAIL)):
        raise Bail("wrong string", _TAIL_OFFSET)
    raise TargetReached("strcmp strings matched")


def _read_u32(buff: bytearray, offset: int) -> int:
    return int.from_bytes(buff[offset : offset + 4], "little")


def _write_u32(buff: bytearray, offset: int, value: int) -> None:
    buff[offset : offset + 4] = (value & 0xFFFFFFFF).to_bytes(4, "little")


def check_transform(data: bytes) -> NoReturn:
    """Require input that survives parsing, arithmetic, shifting and hex coding."""
    if len(data) < _TRANSFORM_MIN:
        raise Bail("too short", 0)
    if len(data) > _TRANSFORM_BUFFER:
        raise Bail("too long", _TRANSFORM_BUFFER)

    buff = bytearray(_TRANSFORM_BUFFER)
    buff[: len(data)] = data
    buff[-1] = 0

    if _atoi(buff) != 66766:
        raise Bail("wrong string", 0)

    _write_u32(buff, 6, _read_u32(buff, 6) - 0x100)
    if _read_u32(buff, 6) != 0x200:
        raise Bail("wrong u32", 6)

    _write_u32(buff, 10, _read_u32(buff, 10) ^ 0xA50FF05A)
    if _read_u32(buff, 10) != 0x11002200:
        raise Bail("wrong u32", 10)

    buff[14:24] = bytes((byte + 5) & 0xFF for byte in buff[14:24])
    if buff[14:24] != b"MNOPQRSTUVW"[:10]:
        raise Bail("wrong string", 14)

    for position in range(24, 29):
        if not 0x41 <= buff[position] <= 0x5A:
            raise Bail("wrong char", position)
        buff[position] = _lower(buff[position])
    if not _strncmp_equal(buff[24:], b"abcdefghijk", 5):
        raise Bail("wrong string", 24)

    encoded = "".join(f"{byte:02x}" for byte in buff[30:38]).encode()
    if not _strncmp_equal(encoded, _HEX_TARGET, 16):
        raise Bail("wrong hex", 30)

    decoded = bytearray()
    for i in range(4):
        pair = buff[38 + 2 * i : 40 + 2 * i]
        if not all(char in _HEX_DIGITS for char in pair):
            raise Bail("wrong hex char", 38 + i)
        decoded.append(int(pair.decode(), 16))
    if not _strncmp_equal(decoded, b"FOOO", 4):
        raise Bail("wrong hex decode", 38)

    raise TargetReached("transformations matched")