import pytest
from hypothesis import given, strategies as st

from fuzzgauntlet.common import Bail, TargetReached, runtime_seed, splitmix64
from fuzzgauntlet.computed import (
    U256,
    check_u256_fourlimbed,
    check_u256_long_looped,
    check_u256_twolimbed,
    check_u32_computed,
    check_u32_computed_branchless,
    check_u32_computed_repeated,
)


def _hashes(count):
    value = splitmix64(runtime_seed())
    out = []
    for _ in range(count):
        out.append(value)
        value = splitmix64(value)
    return out


def _words(values):
    return b"".join((v & 0xFFFFFFFF).to_bytes(4, "little") for v in values)


def _flip(data, index):
    buf = bytearray(data)
    buf[index] ^= 0x01
    return bytes(buf)


def _stepped():
    return bytes(ord("0") + i * 2 for i in range(32))


def _blocks(offset=0):
    return b"A" * 32 + b"F" * 32 + b"\x00" * offset + _stepped()


_LONG_START = U256(
    runtime_seed(), 0xA9C631E117332060, 0x620A6E3C1058E850, 0x159EDEA320A9E804
)


def _long_chain(count):
    h = _LONG_START.advanced()
    parts = []
    for _ in range(count):
        parts.append(h.to_bytes())
        h = h.advanced()
    return b"".join(parts)


def test_u32_computed_too_short():
    with pytest.raises(Bail) as info:
        check_u32_computed(b"\x00" * 23)
    assert info.value.message == "too short"


def test_u32_computed_valid_chain():
    data = _words(_hashes(5)) + b"\x00" * 4
    with pytest.raises(TargetReached):
        check_u32_computed(data)


@pytest.mark.parametrize("word", range(5))
def test_u32_computed_reports_wrong_word(word):
    data = _flip(_words(_hashes(5)) + b"\x00" * 4, word * 4)
    with pytest.raises(Bail) as info:
        check_u32_computed(data)
    assert info.value.message == "wrong u32"
    assert info.value.position == word * 4


def test_u32_computed_branchless_valid():
    with pytest.raises(TargetReached):
        check_u32_computed_branchless(_words(_hashes(5)))


def test_u32_computed_branchless_nothing_matches():
    with pytest.raises(Bail) as info:
        check_u32_computed_branchless(bytes(20))
    assert info.value.message == "wrong u32 at index"
    assert info.value.position == 0


@pytest.mark.parametrize("word", range(5))
def test_u32_computed_branchless_mask_misses_one_bit(word):
    data = _flip(_words(_hashes(5)), word * 4)
    with pytest.raises(Bail) as info:
        check_u32_computed_branchless(data)
    assert info.value.position == 0b11111 & ~(1 << word)


def test_u32_computed_branchless_too_short():
    with pytest.raises(Bail) as info:
        check_u32_computed_branchless(bytes(19))
    assert info.value.message == "too short"


def _repeated():
    return b"".join(
        (i | (h & 0xFFFFFF00)).to_bytes(4, "little") for i, h in enumerate(_hashes(256))
    )


def test_u32_computed_repeated_valid():
    with pytest.raises(TargetReached):
        check_u32_computed_repeated(_repeated())


def test_u32_computed_repeated_wrong_word():
    with pytest.raises(Bail) as info:
        check_u32_computed_repeated(_flip(_repeated(), 10 * 4))
    assert info.value.position == 10 * 4


def test_u32_computed_repeated_too_short():
    with pytest.raises(Bail) as info:
        check_u32_computed_repeated(_repeated()[:-1])
    assert info.value.message == "too short"


@given(st.binary(min_size=32, max_size=32))
def test_u256_round_trip(raw):
    assert U256.from_bytes(raw).to_bytes() == raw


def test_u256_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        U256.from_bytes(b"\x00" * 31)


def test_u256_zero_is_fixed_point():
    zero = U256(0, 0, 0, 0)
    assert zero.advanced() == zero


@given(st.integers(min_value=1, max_value=(1 << 64) - 1))
def test_u256_advance_swaps_limbs(value):
    moved = U256(value, 0, 0, 0).advanced()
    assert (moved.a, moved.b, moved.d) == (0, 0, 0)
    assert moved.c != 0


def test_u256_str_format():
    assert str(U256(0x1, 0xAB, 0x0, 0xFF)) == "0x1_ab_0_ff"


def test_fourlimbed_valid():
    with pytest.raises(TargetReached):
        check_u256_fourlimbed(_blocks())


def test_fourlimbed_valid_with_offset():
    with pytest.raises(TargetReached):
        check_u256_fourlimbed(_blocks(3), offset=3)


def test_fourlimbed_zero_loops():
    with pytest.raises(TargetReached):
        check_u256_fourlimbed(_stepped(), loops=0)


def test_fourlimbed_too_short_reports_required_length():
    with pytest.raises(Bail) as info:
        check_u256_fourlimbed(_blocks()[:-1])
    assert info.value.message == "too short"
    assert info.value.position == len(_blocks())


@pytest.mark.parametrize("block", [0, 1])
def test_fourlimbed_wrong_repeated_block(block):
    with pytest.raises(Bail) as info:
        check_u256_fourlimbed(_flip(_blocks(), block * 32 + 5))
    assert info.value.message == "wrong u256"
    assert info.value.position == block * 32


def test_fourlimbed_wrong_stepped_block_fixed_position():
    data = _blocks(5)
    with pytest.raises(Bail) as info:
        check_u256_fourlimbed(_flip(data, len(data) - 1), offset=5)
    assert info.value.position == 64


def test_twolimbed_valid():
    with pytest.raises(TargetReached):
        check_u256_twolimbed(_blocks())


def test_twolimbed_wrong_stepped_block_reports_offset():
    data = _blocks(5)
    with pytest.raises(Bail) as info:
        check_u256_twolimbed(_flip(data, len(data) - 1), offset=5)
    assert info.value.position == 2 * 32 + 5


def test_twolimbed_wrong_second_block():
    with pytest.raises(Bail) as info:
        check_u256_twolimbed(_flip(_blocks(), 40))
    assert info.value.position == 32


def test_long_looped_valid():
    with pytest.raises(TargetReached):
        check_u256_long_looped(_long_chain(256), verbose=False)


def test_long_looped_empty():
    with pytest.raises(Bail) as info:
        check_u256_long_looped(b"", verbose=False)
    assert info.value.message == "not enough data for iteration"
    assert info.value.position == 0


def test_long_looped_wrong_first_block():
    with pytest.raises(Bail) as info:
        check_u256_long_looped(_flip(_long_chain(2), 0), verbose=False)
    assert info.value.message == "wrong at loop iteration"
    assert info.value.position == 0


def test_long_looped_exact_loop_length_is_not_enough():
    with pytest.raises(Bail) as info:
        check_u256_long_looped(_long_chain(255), verbose=False)
    assert info.value.message == "not enough data for iteration"
    assert info.value.position == 254


def test_long_looped_last_check_short():
    with pytest.raises(Bail) as info:
        check_u256_long_looped(_long_chain(255) + b"\x00", verbose=False)
    assert info.value.message == "not enough data for last check requires"
    assert info.value.position == 256 * 32


def test_long_looped_last_check_wrong():
    data = _long_chain(256)
    with pytest.raises(Bail) as info:
        check_u256_long_looped(_flip(data, len(data) - 1), verbose=False)
    assert info.value.message == "wrong at last check"
    assert info.value.position == 256 * 32


def test_long_looped_verbose_prints(capsys):
    with pytest.raises(Bail):
        check_u256_long_looped(b"", verbose=True)
    assert "[REACHED 1 / 255] not enough data" in capsys.readouterr().err


def test_long_looped_quiet(capsys):
    with pytest.raises(Bail):
        check_u256_long_looped(b"", verbose=False)
    assert capsys.readouterr().err == ""


def test_long_looped_env_enables_prints(capsys, monkeypatch):
    monkeypatch.setenv("TEST_PRINTS", "1")
    with pytest.raises(Bail):
        check_u256_long_looped(_flip(_long_chain(2), 0))
    assert "invalid data at 0" in capsys.readouterr().err