"""Command line runner: feed one input to a named target."""

from __future__ import annotations

import argparse
import signal
import sys
from typing import Callable, Dict, NamedTuple, Optional, Sequence

from .common import Bail, TargetReached
from .comparisons import (
    check_abs_neg_and_constant,
    check_abs_neg_and_constant64,
    check_simple_cmp,
    check_swap_cmp,
    check_switch,
    check_switch2,
    check_switch3,
    check_three_bytes,
)
from .computed import (
    U256,
    check_u32_computed,
    check_u32_computed_branchless,
    check_u32_computed_repeated,
    check_u256_fourlimbed,
    check_u256_long_looped,
    check_u256_twolimbed,
)
from .control import (
    TableLookup,
    check_caller_callee,
    check_cleanse,
    check_counter,
    check_deep_recursion,
    check_four_independent_branches,
    check_full_coverage_set,
    check_labels20,
    check_only_some_bytes,
    check_repeated_bytes,
    check_single_byte_input,
    check_three_functions,
)
from .floats import check_double, check_float, check_long_double
from .integers import (
    check_crc32,
    check_extint,
    check_u8,
    check_u16,
    check_u32,
    check_u32_branchless,
    check_u32_branchless_unaligned,
    check_u32_cmp,
    check_u64,
    check_u128,
)
from .matching import (
    check_cxx_string_eq,
    check_keep_seed,
    check_memcmp64,
    check_memcmp_chain,
    check_repeated_memcmp,
    check_simple,
    check_simple_dictionary,
    check_simple_hash,
    check_simple_stdio,
    check_single_memcmp,
    check_single_strcmp,
    check_single_strncmp,
    check_strcmp_chain,
    check_strncmp_chain,
    check_strstr,
)
from .strings import check_memcmp, check_strcmp, check_transform

_ABORT_STATUS = 128 + signal.SIGABRT
_DEFAULT_LIMIT = 64


class _Target(NamedTuple):
    run: Callable[[bytes], object]
    limit: int = _DEFAULT_LIMIT


_TABLE_LOOKUP = TableLookup()

_TARGETS: Dict[str, _Target] = {
    "crc32": _Target(check_crc32),
    "u8": _Target(check_u8),
    "u16": _Target(check_u16, 16),
    "u32": _Target(check_u32, 32),
    "u64": _Target(check_u64),
    "u128": _Target(check_u128, 128),
    "float": _Target(check_float),
    "double": _Target(check_double),
    "longdouble": _Target(check_long_double),
    "u32-cmp": _Target(check_u32_cmp),
    "memcmp": _Target(check_memcmp),
    "strcmp": _Target(check_strcmp),
    "transform": _Target(check_transform),
    "extint": _Target(check_extint),
    "custom-u256-twolimbed": _Target(check_u256_twolimbed, 128),
    "custom-u256-fourlimbed": _Target(check_u256_fourlimbed, 128),
    "custom-u256-long-looped": _Target(check_u256_long_looped, U256.SIZE * 257),
    "u32-branchless": _Target(check_u32_branchless, 32),
    "u32-branchless-unaligned": _Target(check_u32_branchless_unaligned, 32),
    "u32-computed": _Target(check_u32_computed, 32),
    "u32-computed-branchless": _Target(check_u32_computed_branchless, 32),
    "u32-computed-repeated": _Target(check_u32_computed_repeated, 4096),
    "abs-neg-and-constant": _Target(check_abs_neg_and_constant),
    "abs-neg-and-constant64": _Target(check_abs_neg_and_constant64),
    "caller-callee": _Target(check_caller_callee),
    "cleanse": _Target(check_cleanse),
    "counter": _Target(check_counter),
    "cxx-string-eq": _Target(check_cxx_string_eq),
    "deep-recursion": _Target(check_deep_recursion),
    "four-independent-branches": _Target(check_four_independent_branches),
    "full-coverage-set": _Target(check_full_coverage_set),
    "keep-seed": _Target(check_keep_seed),
    "labels20": _Target(check_labels20),
    "memcmp64": _Target(check_memcmp64),
    "memcmp-chain": _Target(check_memcmp_chain),
    "only-some-bytes": _Target(check_only_some_bytes),
    "repeated-bytes": _Target(check_repeated_bytes),
    "repeated-memcmp": _Target(check_repeated_memcmp),
    "simple-cmp": _Target(check_simple_cmp),
    "simple-dictionary": _Target(check_simple_dictionary),
    "simple-hash": _Target(check_simple_hash),
    "simple": _Target(check_simple),
    "simple-stdio": _Target(check_simple_stdio),
    "single-byte-input": _Target(check_single_byte_input),
    "single-memcmp": _Target(check_single_memcmp),
    "single-strcmp": _Target(check_single_strcmp),
    "single-strncmp": _Target(check_single_strncmp),
    "strcmp-chain": _Target(check_strcmp_chain),
    "strncmp-chain": _Target(check_strncmp_chain),
    "strstr": _Target(check_strstr),
    "swap-cmp": _Target(check_swap_cmp),
    "switch": _Target(check_switch),
    "switch2": _Target(check_switch2),
    "switch3": _Target(check_switch3),
    "table-lookup": _Target(_TABLE_LOOKUP),
    "three-bytes": _Target(check_three_bytes),
    "three-functions": _Target(check_three_functions),
}


def read_input(path: Optional[str], limit: int) -> bytes:
    """Read at most ``limit`` bytes from ``path``, or from stdin when it is None."""
    if path is None:
        return sys.stdin.buffer.read(limit)
    with open(path, "rb") as stream:
        return stream.read(limit)


def run_target(name: str, data: bytes) -> Optional[Bail]:
    """Run the named target on ``data`` and return its rejection, if any.

    TargetReached propagates; an unknown name raises KeyError.
    """
    target = _TARGETS[name]
    try:
        target.run(data)
    except Bail as rejection:
        return rejection
    return None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Feed one input to a target; an abort-like status means it was reached."""
    parser = argparse.ArgumentParser(
        prog="fuzzgauntlet", description="Run one input against a fuzzing target."
    )
    parser.add_argument("target", choices=sorted(_TARGETS), metavar="TARGET")
    parser.add_argument("input", nargs="?", help="input file (default: stdin)")
    args = parser.parse_args(argv)

    try:
        data = read_input(args.input, _TARGETS[args.target].limit)
    except OSError as exc:
        print(f"cannot read {args.input}: {exc.strerror}", file=sys.stderr)
        return 0
    if not data:
        return 0

    try:
        rejection = run_target(args.target, data)
    except TargetReached as reached:
        print(f"BINGO; {reached}", file=sys.stderr)
        return _ABORT_STATUS
    if rejection is not None:
        print(rejection, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())