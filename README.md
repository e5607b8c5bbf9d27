# fuzzgauntlet

A collection of small fuzzing targets. Each one takes a buffer of bytes and
checks it against a puzzle. The puzzles include fixed integers, floats in
narrow ranges, strings behind `memcmp`/`strcmp`-style checks, values derived
from a runtime hash, checksums, switch tables and deep recursion.

- An input that solves the puzzle raises `TargetReached`.
- An input that fails a check either returns `None` quietly or raises `Bail`.
  A `Bail` carries a `message` and a `position`, and its string form is
  `"<message> at <position>"`.

The targets are benchmarks for input generators and mutators. Plug one into
your fuzzer and measure how quickly it reaches the goal.

## Installation

```
pip install fuzzgauntlet
```

The test dependencies come with the `test` extra:

```
pip install "fuzzgauntlet[test]"
```

## Using the targets from Python

```python
from fuzzgauntlet.common import Bail, TargetReached
from fuzzgauntlet.integers import check_u8

try:
    check_u8(b"ACEGIKMZY\x00\x01\x80")
except TargetReached:
    print("solved")
except Bail as err:
    print("rejected:", err)
```

### Modules

- `fuzzgauntlet.common`
  - The exceptions `Bail` and `TargetReached`.
  - `splitmix64(x)`, one SplitMix64 step on a 64-bit value.
  - `runtime_seed()`, the fixed seed that the computed targets hash from.
- `fuzzgauntlet.integers`
  - Little-endian integer puzzles: `check_u8`, `check_u16`, `check_u32`,
    `check_u64`, `check_u128` and `check_extint` (24-, 40- and 56-bit values).
  - `check_u32_cmp`, which needs three values inside narrow ranges.
  - `check_u32_branchless`, which raises a `Bail` whose position is a bitmask
    of the words that matched.
  - `check_u32_branchless_unaligned`.
  - `crc32(data)` and `check_crc32`, which needs `"BARF"` followed by three
    chained CRC-32 values.
- `fuzzgauntlet.computed`
  - Words derived from a SplitMix64 chain: `check_u32_computed`,
    `check_u32_computed_branchless` and `check_u32_computed_repeated`
    (256 words).
  - The frozen dataclass `U256`, with `advanced()`, `to_bytes()` and
    `U256.from_bytes(data)`.
  - `check_u256_fourlimbed(data, offset=0, loops=2)` and
    `check_u256_twolimbed(data, offset=0, loops=2)`.
  - `check_u256_long_looped(data, verbose=None)`, which needs 256
    consecutive values of an advancing 256-bit hash. Progress goes to stderr
    when `verbose` is true. When `verbose` is `None`, progress goes to stderr
    if the `TEST_PRINTS` environment variable is set.
- `fuzzgauntlet.floats`
  - `check_float` and `check_double`, which need values inside ranges, plus
    an exact pi for the doubles.
  - `check_long_double`, which reads x87 80-bit values from 16-byte slots.
- `fuzzgauntlet.strings`
  - `check_memcmp` and `check_strcmp`. Some fields of `check_strcmp` are
    compared without regard to case.
  - `check_transform`, which chains decimal parsing, integer arithmetic, a
    shift cipher, case folding and hex encoding and decoding.
- `fuzzgauntlet.comparisons`
  - `check_abs_neg_and_constant` and `check_abs_neg_and_constant64`.
  - `check_swap_cmp`.
  - `check_switch`, `check_switch2` and `check_switch3`.
  - `check_simple_cmp`, which prints `Seen stage N` to stderr the first time
    each stage is passed.
  - `check_three_bytes`.
- `fuzzgauntlet.matching`
  - String and memory matching: `check_cxx_string_eq`, `check_memcmp64`,
    `check_memcmp_chain`, `check_repeated_memcmp`, `check_simple_dictionary`,
    `check_single_memcmp`, `check_single_strcmp`, `check_single_strncmp`,
    `check_strcmp_chain`, `check_strncmp_chain`, `check_strstr`,
    `check_keep_seed`, `check_simple` and `check_simple_stdio`.
  - `jenkins_hash(data)` and `check_simple_hash`. The last four bytes of the
    input must hold the hash of the rest.
- `fuzzgauntlet.control`
  - Control-flow puzzles: `check_caller_callee`, `check_cleanse`,
    `check_counter`, `check_deep_recursion` (more than 1000 levels),
    `check_four_independent_branches`, `check_full_coverage_set`,
    `check_labels20`, `check_only_some_bytes` (at least 2048 bytes),
    `check_repeated_bytes`, `check_single_byte_input` and
    `check_three_functions`.
  - The stateful `TableLookup`. An instance remembers which of its 4096 slots
    four-byte inputs have hit, and raises `TargetReached` once every slot has
    been seen.
- `fuzzgauntlet.cli`
  - `read_input(path, limit)`, which reads from a file, or from stdin when
    `path` is `None`.
  - `run_target(name, data)`, which returns the `Bail`, or `None`, and lets
    `TargetReached` propagate.
  - `main(argv=None)`.

## Command line

Run a target on the contents of a file, or on standard input:

```
fuzzgauntlet u8 input.bin
fuzzgauntlet simple < input.bin
```

Target names are short and hyphenated: `u8`, `u32-cmp`, `crc32`,
`custom-u256-long-looped`, `memcmp-chain`, `simple-hash`, `table-lookup` and
so on. `fuzzgauntlet --help` lists them all.

The command reads at most as many bytes as the target accepts. For most
targets that is 64 bytes. Some targets accept more, for example 4096 for
`u32-computed-repeated`.

How the command ends:

| Situation | Output | Exit status |
|---|---|---|
| Input rejected | Any `Bail` is printed to stderr | 0 |
| Input empty or unreadable | A read error is printed to stderr | 0 |
| Target reached | `BINGO; ...` printed to stderr | 134 (128 + SIGABRT) |

A fuzzer that drives the command therefore sees a reached target as a crash.

## What this package does not do

fuzzgauntlet contains only the targets. It does not generate or mutate
inputs, and it does not measure coverage. Pair it with a fuzzer of your own.