"""Targets that require floating-point values inside narrow ranges."""

from __future__ import annotations

import math
import struct
import sys
from fractions import Fraction
from typing import NoReturn, Optional, Union

from .common import Bail, TargetReached

_RANGES = (
    (1000000.01, 1000010.99),
    (101.9, 109.0),
    (22222221.9, 22222225.1),
)

_FLOAT_MIN_NORMAL = 2.0**-126
_DOUBLE_MIN_NORMAL = sys.float_info.min

_EXT_SLOT = 16
_EXT_BIAS = 16383
_EXT_MAX_EXP = 0x7FFF
_EXT_INTEGER_BIT = 1 << 63


def _to_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _is_normal(value: float, min_normal: float) -> bool:
    return math.isfinite(value) and abs(value) >= min_normal


def check_float(data: bytes) -> NoReturn:
    """Require three single-precision values inside fixed ranges."""
    if len(data) < 16:
        raise Bail("too short", 0)
    for index, (lesser, greater) in enumerate(_RANGES):
        offset = index * 4
        (value,) = struct.unpack_from("<f", data, offset)
        if value < _to_f32(lesser) or value > _to_f32(greater):
            raise Bail("wrong float", offset)
        if not _is_normal(value, _FLOAT_MIN_NORMAL):
            raise Bail("not normal", offset)
    raise TargetReached("floats matched")


def check_double(data: bytes) -> NoReturn:
    """Require three doubles inside fixed ranges and an exact pi."""
    if len(data) < 40:
        raise Bail("too short", 0)
    for index, (lesser, greater) in enumerate(_RANGES):
        offset = index * 8
        (value,) = struct.unpack_from("<d", data, offset)
        if value < lesser or value > greater:
            raise Bail("wrong double", offset)
        if not _is_normal(value, _DOUBLE_MIN_NORMAL):
            raise Bail("not normal", offset)
    (value,) = struct.unpack_from("<d", data, 24)
    if value != math.pi:
        raise Bail("wrong double", 24)
    if not _is_normal(value, _DOUBLE_MIN_NORMAL):
        raise Bail("not normal", 24)
    raise TargetReached("doubles matched")


def _decode_extended(raw: bytes) -> Optional[Union[Fraction, float]]:
    """Decode an x87 80-bit value exactly; None stands for NaN and invalid encodings."""
    mantissa = int.from_bytes(raw[:8], "little")
    sign_exponent = int.from_bytes(raw[8:10], "little")
    negative = bool(sign_exponent & 0x8000)
    exponent = sign_exponent & _EXT_MAX_EXP
    value: Union[Fraction, float]
    if exponent == _EXT_MAX_EXP:
        if mantissa != _EXT_INTEGER_BIT:
            return None
        value = math.inf
    elif exponent == 0:
        value = Fraction(mantissa, 1 << (_EXT_BIAS + 62))
    elif not mantissa & _EXT_INTEGER_BIT:
        return None
    else:
        value = Fraction(mantissa) * Fraction(2) ** (exponent - _EXT_BIAS - 63)
    return -value if negative else value


def _is_normal_extended(raw: bytes) -> bool:
    mantissa = int.from_bytes(raw[:8], "little")
    exponent = int.from_bytes(raw[8:10], "little") & _EXT_MAX_EXP
    return 0 < exponent < _EXT_MAX_EXP and bool(mantissa & _EXT_INTEGER_BIT)


def check_long_double(data: bytes) -> NoReturn:
    """Require three extended-precision values in ranges and an exact pi.

    Each value occupies a 16-byte slot holding an x87 80-bit number.
    """
    if len(data) < 4 * _EXT_SLOT:
        raise Bail("too short")
    slots = [data[i * _EXT_SLOT : (i + 1) * _EXT_SLOT] for i in range(4)]
    for index, ((lesser, greater), raw) in enumerate(zip(_RANGES, slots)):
        value = _decode_extended(raw)
        if value is not None and (value < lesser or value > greater):
            raise Bail(f"wrong long double (vals[{index}])")
        if not _is_normal_extended(raw):
            raise Bail(f"not normal (vals[{index}])")
    raw = slots[3]
    value = _decode_extended(raw)
    if value is None or value != Fraction(math.pi):
        raise Bail("wrong long double (vals[3])")
    if not _is_normal_extended(raw):
        raise Bail("not normal (vals[3])")
    raise TargetReached("long doubles matched")