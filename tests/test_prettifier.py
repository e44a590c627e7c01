from __future__ import annotations

import random

import pytest

from pretty_snowflake import damm
from pretty_snowflake.codec import AlphabetCodec
from pretty_snowflake.exceptions import IdParseError, InvalidCharacterError, InvalidIdError
from pretty_snowflake.prettifier import MAX_SEED, IdPrettifier
from pretty_snowflake.snowflake import GeneratorStrategy, SnowflakeIdGenerator

EXAMPLE_ID = 824227036833910784

CONFIGURATIONS = {
    "default": IdPrettifier(),
    "no-leading-zeros": IdPrettifier(leading_zeros=False),
    "short-alphabet": IdPrettifier(AlphabetCodec("ABC"), parts_size=2),
    "short-alphabet-no-leading-zeros": IdPrettifier(AlphabetCodec("ABC"), parts_size=2, leading_zeros=False),
    "wide-parts": IdPrettifier(parts_size=8, delimiter="."),
    "single-digit-parts": IdPrettifier(parts_size=1, delimiter="_"),
}


def _sample_seeds() -> list[int]:
    rng = random.Random(20240101)
    seeds = [0, 1, 9, 10, 99, 100, 12_345, 99_999, 100_000, EXAMPLE_ID, MAX_SEED - 1, MAX_SEED]
    seeds.extend(10**power for power in range(19))
    seeds.extend(rng.randint(0, MAX_SEED) for _ in range(500))
    return seeds


def test_default_fixtures() -> None:
    prettifier = IdPrettifier()
    assert prettifier.prettify(100) == "AAAA-00000-AAAA-01007"
    assert prettifier.prettify(1) == "AAAA-00000-AAAA-00013"
    assert prettifier.prettify(MAX_SEED) == "HPJD-72036-HAPK-58077"
    assert prettifier.prettify(EXAMPLE_ID) == "ARPJ-27036-GVQS-07849"


def test_default_fixtures_parse_back() -> None:
    prettifier = IdPrettifier()
    assert prettifier.to_id_seed("AAAA-00000-AAAA-01007") == 100
    assert prettifier.to_id_seed("AAAA-00000-AAAA-00013") == 1
    assert prettifier.to_id_seed("HPJD-72036-HAPK-58077") == MAX_SEED
    assert prettifier.to_id_seed("ARPJ-27036-GVQS-07849") == EXAMPLE_ID


def test_fixtures_without_leading_zeros() -> None:
    prettifier = IdPrettifier(leading_zeros=False)
    assert prettifier.prettify(MAX_SEED) == "HPJD-72036-HAPK-58077"
    assert prettifier.prettify(EXAMPLE_ID) == "RPJ-27036-GVQS-07849"
    assert prettifier.prettify(1) == "13"
    assert prettifier.to_id_seed("13") == 1
    assert prettifier.to_id_seed("RPJ-27036-GVQS-07849") == EXAMPLE_ID

    wide = prettifier.replace(parts_size=8)
    assert wide.prettify(1) == "13"
    assert wide.prettify(MAX_SEED) == "9223-FTYTHN-47758077"


def test_fixtures_with_wide_parts() -> None:
    prettifier = IdPrettifier().replace(parts_size=8)
    assert prettifier.prettify(1) == "00000000-AAAAAA-00000013"
    assert prettifier.prettify(MAX_SEED) == "00009223-FTYTHN-47758077"


def test_derived_fields_follow_encoder_and_parts_size() -> None:
    prettifier = IdPrettifier()
    assert prettifier.zero_char == "A"
    assert prettifier.max_encoder_length == 4

    wide = prettifier.replace(parts_size=8)
    assert wide.max_encoder_length == 6
    assert wide.delimiter == prettifier.delimiter

    binary = prettifier.replace(encoder=AlphabetCodec("xy"))
    assert binary.zero_char == "x"
    assert binary.max_encoder_length == len(format(99_999, "b"))
    assert prettifier.max_encoder_length == 4


def test_divide_chunks_from_the_right() -> None:
    prettifier = IdPrettifier()
    assert prettifier._divide("1007") == ["1007"]
    assert prettifier._divide(damm.encode(str(EXAMPLE_ID))) == ["8242", "27036", "83391", "07849"]
    assert prettifier._divide("1234567890") == ["12345", "67890"]


@pytest.mark.parametrize("name", sorted(CONFIGURATIONS))
def test_round_trip(name: str) -> None:
    prettifier = CONFIGURATIONS[name]
    for seed in _sample_seeds():
        rendered = prettifier.prettify(seed)
        assert prettifier.is_valid(rendered), rendered
        assert prettifier.to_id_seed(rendered) == seed, rendered


@pytest.mark.parametrize("strategy", list(GeneratorStrategy))
def test_round_trip_generated_seeds(strategy: GeneratorStrategy) -> None:
    generator = SnowflakeIdGenerator(strategy=strategy)
    for prettifier in CONFIGURATIONS.values():
        for _ in range(200):
            seed = generator.next_id()
            assert prettifier.to_id_seed(prettifier.prettify(seed)) == seed


@pytest.mark.parametrize("name", ["default", "short-alphabet", "wide-parts", "single-digit-parts"])
def test_leading_zeros_keep_length_constant(name: str) -> None:
    prettifier = CONFIGURATIONS[name]
    assert prettifier.leading_zeros
    lengths = {len(prettifier.prettify(seed)) for seed in _sample_seeds()}
    assert len(lengths) == 1
    assert len(prettifier.prettify(0)) == len(prettifier.prettify(MAX_SEED))


def test_pretty_ids_sort_like_seeds() -> None:
    prettifier = IdPrettifier()
    seeds = sorted(_sample_seeds())
    rendered = [prettifier.prettify(seed) for seed in seeds]
    assert rendered == sorted(rendered)


@pytest.mark.parametrize("strategy", list(GeneratorStrategy))
def test_preserve_id_monotonicity(strategy: GeneratorStrategy) -> None:
    generator = SnowflakeIdGenerator(strategy=strategy)
    prettifier = IdPrettifier()
    actual = [prettifier.prettify(generator.next_id()) for _ in range(100)]
    assert actual == sorted(actual)
    assert list(reversed(actual)) == sorted(actual, reverse=True)


def test_validate_pretty_ids() -> None:
    prettifier = IdPrettifier()
    assert prettifier.is_valid("HPJD-72036-HAPK-58077")
    assert prettifier.is_valid("ARPJ-27036-GVQS-07849")
    assert not prettifier.is_valid("ARPJ-27036-GVQS-07840")
    assert not prettifier.is_valid("ARPJ-27036-GVQS-07489")
    assert not prettifier.is_valid("ARPJ-27036-GVQZ-07489")
    assert not prettifier.is_valid("AAAA-00000-AAAA-01017")


def test_single_digit_errors_in_direct_chunks_are_detected() -> None:
    prettifier = IdPrettifier()
    rendered = prettifier.prettify(EXAMPLE_ID)
    for position, char in enumerate(rendered):
        if not char.isdigit():
            continue
        for digit in "0123456789":
            if digit == char:
                continue
            corrupted = f"{rendered[:position]}{digit}{rendered[position + 1:]}"
            assert not prettifier.is_valid(corrupted), corrupted
            with pytest.raises(InvalidIdError):
                prettifier.to_id_seed(corrupted)


def test_adjacent_transpositions_in_direct_chunks_are_detected() -> None:
    prettifier = IdPrettifier()
    rendered = prettifier.prettify(EXAMPLE_ID)
    swapped = 0
    for position in range(len(rendered) - 1):
        first, second = rendered[position], rendered[position + 1]
        if not (first.isdigit() and second.isdigit()) or first == second:
            continue
        corrupted = f"{rendered[:position]}{second}{first}{rendered[position + 2:]}"
        assert not prettifier.is_valid(corrupted), corrupted
        with pytest.raises(InvalidIdError):
            prettifier.to_id_seed(corrupted)
        swapped += 1
    assert swapped == 8


def test_to_id_seed_rejects_bad_checksum() -> None:
    with pytest.raises(InvalidIdError) as excinfo:
        IdPrettifier().to_id_seed("ARPJ-27036-GVQS-07840")
    assert excinfo.value.text == "ARPJ-27036-GVQS-07840"


def test_foreign_characters_in_encoded_chunks() -> None:
    prettifier = IdPrettifier()
    with pytest.raises(InvalidCharacterError):
        prettifier.to_id_seed("AIAA-00000-AAAA-01007")
    assert not prettifier.is_valid("AIAA-00000-AAAA-01007")


def test_encoded_chunk_wider_than_parts_is_invalid() -> None:
    prettifier = IdPrettifier()
    with pytest.raises(InvalidIdError):
        prettifier.to_id_seed("ZZZZ-00000-AAAA-01007")
    assert not prettifier.is_valid("ZZZZ-00000-AAAA-01007")


def test_numeral_outside_seed_range_is_a_parse_error() -> None:
    prettifier = IdPrettifier()
    too_large = prettifier.delimiter.join(prettifier._convert_parts(prettifier._divide(damm.encode("9" * 19))))
    assert not prettifier.is_valid(too_large)
    with pytest.raises(IdParseError):
        prettifier.to_id_seed(too_large)

    unpadded = IdPrettifier(leading_zeros=False)
    with pytest.raises(IdParseError):
        unpadded.to_id_seed(damm.encode("9" * 20))
    with pytest.raises(IdParseError):
        unpadded.to_id_seed("0")
    assert not unpadded.is_valid("0")


@pytest.mark.parametrize("name", ["default", "no-leading-zeros"])
@pytest.mark.parametrize("text", ["", "hello", "5X724", "AAAA-0000O-AAAA-01007", "AAAA-00000-AAAA-0100\uff17"])
def test_non_digit_direct_chunks_are_invalid(name: str, text: str) -> None:
    prettifier = CONFIGURATIONS[name]
    assert not prettifier.is_valid(text)
    with pytest.raises(InvalidIdError) as excinfo:
        prettifier.to_id_seed(text)
    assert excinfo.value.text == text


@pytest.mark.parametrize(
    "text",
    [
        "-",
        "AAAA-0-AAAA-01007",
        "AAA-00000-AAAA-01007",
        "00000-AAAA-01007",
        "AAAA-AAAA-00000-AAAA-01007",
        "AAAA-00000-AAAA-1007",
    ],
)
def test_non_canonical_layout_is_rejected_with_leading_zeros(text: str) -> None:
    prettifier = IdPrettifier()
    assert not prettifier.is_valid(text)
    with pytest.raises(InvalidIdError):
        prettifier.to_id_seed(text)


def test_unpadded_ids_accept_short_chunks() -> None:
    prettifier = IdPrettifier(leading_zeros=False)
    assert prettifier.to_id_seed("AAAA-0-AAAA-01007") == 100
    assert prettifier.to_id_seed("1007") == 100
    with pytest.raises(InvalidIdError):
        prettifier.to_id_seed("A-A-A-A-A-1007")


def test_prettify_rejects_seeds_outside_range() -> None:
    prettifier = IdPrettifier()
    with pytest.raises(ValueError):
        prettifier.prettify(-1)
    with pytest.raises(ValueError):
        prettifier.prettify(MAX_SEED + 1)


@pytest.mark.parametrize("seed", [100.0, "100", True, None])
def test_prettify_rejects_non_integer_seeds(seed: object) -> None:
    with pytest.raises(TypeError):
        IdPrettifier().prettify(seed)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "options",
    [
        {"parts_size": 0},
        {"delimiter": ""},
        {"delimiter": "A"},
        {"delimiter": "7"},
    ],
)
def test_rejects_inconsistent_options(options: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        IdPrettifier(**options)  # type: ignore[arg-type]


def test_equality_and_repr() -> None:
    assert IdPrettifier() == IdPrettifier(AlphabetCodec(), parts_size=5, delimiter="-", leading_zeros=True)
    assert IdPrettifier() != IdPrettifier(leading_zeros=False)
    assert hash(IdPrettifier()) == hash(IdPrettifier())
    assert "parts_size=5" in repr(IdPrettifier())
