from hypothesis import given
from hypothesis import strategies as st

from fuzzgauntlet.common import Bail, TargetReached, runtime_seed, splitmix64


def test_bail_carries_message_and_position():
    err = Bail("too short", 36)
    assert err.message == "too short"
    assert err.position == 36
    assert str(err) == "too short at 36"


def test_bail_position_defaults_to_zero():
    assert Bail("wrong char").position == 0


def test_target_reached_detail():
    assert str(TargetReached("BINGO")) == "BINGO"
    assert str(TargetReached()) == "target reached"


def test_runtime_seed_value():
    assert runtime_seed() == 0xFFFFFFFFFFFFFFC5


def test_splitmix64_known_first_output():
    assert splitmix64(0) == 0xE220A8397B1DCDAF


def test_splitmix64_known_second_output():
    assert splitmix64(0x9E3779B97F4A7C15) == 0x6E789E6AA1B965F4


@given(st.integers(min_value=0, max_value=(1 << 64) - 1))
def test_splitmix64_stays_in_64_bits(x):
    assert 0 <= splitmix64(x) < (1 << 64)


@given(
    st.lists(
        st.integers(min_value=0, max_value=(1 << 64) - 1),
        min_size=2,
        max_size=30,
        unique=True,
    )
)
def test_splitmix64_is_injective(values):
    outputs = {splitmix64(v) for v in values}
    assert len(outputs) == len(values)