"""Targets that look for particular strings, substrings and checksums."""

from __future__ import annotations

from typing import Iterable, Tuple

from .common import TargetReached

_MASK32 = 0xFFFFFFFF
_HASH_INIT = 0x12039854


def jenkins_hash(data: bytes) -> int:
    """Return the one-at-a-time hash of ``data``, started from a non-zero value."""
    value = _HASH_INIT
    for byte in data:
        value = (value + byte) & _MASK32
        value = (value + (value << 10)) & _MASK32
        value ^= value >> 6
    value = (value + (value << 3)) & _MASK32
    value ^= value >> 11
    value = (value + (value << 15)) & _MASK32
    return value


def check_simple_hash(data: bytes) -> None:
    """Reach the target when the last four bytes hold the hash of the rest."""
    if len(data) < 14:
        return
    computed = jenkins_hash(data[:-4])
    wanted = int.from_bytes(data[-4:], "little")
    if computed == wanted:
        raise TargetReached(f"simple_hash defeated: {computed:x} == {wanted:x}")


def check_cxx_string_eq(data: bytes) -> None:
    """Reach the target when the whole input equals "FooBar"."""
    if bytes(data) == b"FooBar":
        raise TargetReached("FooBar found")


_STRING_64 = b"123456789 123456789 123456789 123456789 123456789 123456789 1234"


def check_memcmp64(data: bytes) -> None:
    """Reach the target when the input starts with a fixed 64-byte string."""
    if len(data) >= 64 and data[:64] == _STRING_64:
        raise TargetReached("64-byte string found")


def _chain_matches(data: bytes, fields: Iterable[Tuple[int, bytes]]) -> bool:
    """Tell whether every literal sits at its offset, each fully inside ``data``."""
    for offset, literal in fields:
        end = offset + len(literal)
        if len(data) < end or data[offset:end] != literal:
            return False
    return True


_MEMCMP_CHAIN = (
    (0, b"01234567"),
    (8, b"ABCD"),
    (12, b"XY"),
    (14, b"KLM"),
    (17, b"ABCDE-GHIJ"),
)


def check_memcmp_chain(data: bytes) -> None:
    """Reach the target when five literals follow each other from the start."""
    if _chain_matches(data, _MEMCMP_CHAIN):
        printable = "".join(chr(byte) for byte in data if 32 <= byte < 127)
        raise TargetReached(f"{len(data)} {printable}")


def _aligned_count(data: bytes, word: bytes) -> int:
    return sum(
        1 for start in range(0, len(data) - 2, 3) if data[start : start + 3] == word
    )


def check_repeated_memcmp(data: bytes) -> None:
    """Reach the target when "foo" and "bar" each fill over ten aligned slots."""
    if _aligned_count(data, b"foo") > 10 and _aligned_count(data, b"bar") > 10:
        raise TargetReached("repeated words found")


_DICTIONARY_WORD = b"ElvisPresley"


def check_simple_dictionary(data: bytes) -> None:
    """Reach the target when the input starts with "ElvisPresley"."""
    size = len(_DICTIONARY_WORD)
    if len(data) < size:
        return
    matched = sum(1 for got, want in zip(data, _DICTIONARY_WORD) if got == want)
    if matched == size:
        raise TargetReached("dictionary word found")


_NEEDLE = b"Some long string"


def check_single_memcmp(data: bytes) -> None:
    """Reach the target when the input starts with "Some long string"."""
    if len(data) >= len(_NEEDLE) and data[: len(_NEEDLE)] == _NEEDLE:
        raise TargetReached("needle found")


def check_single_strcmp(data: bytes) -> None:
    """Reach the target when at least seven bytes start with "qwerty"."""
    if len(data) >= 7 and data[:6] == b"qwerty":
        raise TargetReached("qwerty found")


def check_single_strncmp(data: bytes) -> None:
    """Reach the target when at least six bytes start with "qwerty"."""
    if len(data) >= 6 and data[:6] == b"qwerty":
        raise TargetReached("qwerty found")


_STRCMP_CHAIN = ((0, b"ABC"), (3, b"QWER"), (7, b"ZXCVN"))


def check_strcmp_chain(data: bytes) -> None:
    """Reach the target when "ABC", "QWER" and "ZXCVN" follow each other."""
    if _chain_matches(data, _STRCMP_CHAIN):
        raise TargetReached("strcmp chain matched")


_STRNCMP_CHAIN = ((0, b"01234567"), (8, b"ABCD"), (12, b"XY"), (14, b"KLM"))


def check_strncmp_chain(data: bytes) -> None:
    """Reach the target when four literals follow each other from the start."""
    if _chain_matches(data, _STRNCMP_CHAIN):
        raise TargetReached("strncmp chain matched")


def _ascii_lower(text: bytes) -> bytes:
    return bytes(byte + 32 if 0x41 <= byte <= 0x5A else byte for byte in text)


def check_strstr(data: bytes) -> None:
    """Reach the target when the input holds "FUZZ", "abcd" in any case, and "kuku".

    The first two are searched for only before the first NUL byte.
    """
    if len(data) < 4:
        return
    text = bytes(data).split(b"\0", 1)[0]
    if b"FUZZ" in text and b"abcd" in _ascii_lower(text) and b"kuku" in bytes(data):
        raise TargetReached("substrings found")


_KEEP_SEED_TARGET = b"SELECT FROM WHERE"


def check_keep_seed(data: bytes) -> None:
    """Reach the target when the input is exactly "SELECT FROM WHERE"."""
    if len(data) > len(_KEEP_SEED_TARGET):
        return
    if bytes(data) == _KEEP_SEED_TARGET:
        raise TargetReached("query found")


def check_simple(data: bytes) -> None:
    """Reach the target when the input starts with "Hi!"."""
    if bytes(data[:3]) == b"Hi!":
        raise TargetReached("Hi! found")


def check_simple_stdio(data: bytes) -> None:
    """Reach the target when the input starts with "Hi!"; reported on stderr."""
    if bytes(data[:3]) == b"Hi!":
        raise TargetReached("Hi! found")