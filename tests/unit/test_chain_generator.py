"""Unit tests for chain generation and validation.

Tests:
  - generate_random_chain(n) has length n for every n in 3..15
  - lengths 2 and 16 (and non-integers) raise ValidationError
  - no two adjacent entries are equal, every entry is a catalog code
  - the first entry is never the excluded start language
  - a seeded RNG makes chains reproducible
  - validate_chain accepts catalog chains and rejects bad lengths / codes
"""

from __future__ import annotations

import random

import pytest

from telephone.core.exceptions import ValidationError
from telephone.services.chain.generator import (
    CHAIN_MAX_LENGTH,
    CHAIN_MIN_LENGTH,
    generate_random_chain,
    validate_chain,
)
from telephone.services.language.catalog import (
    CATALOG,
    LanguageCatalog,
    LanguageCatalogEntry,
)


class TestGenerateRandomChain:
    """Tests for generate_random_chain()."""

    @pytest.mark.parametrize("length", range(CHAIN_MIN_LENGTH, CHAIN_MAX_LENGTH + 1))
    def test_exact_length(self, length: int) -> None:
        assert len(generate_random_chain(length)) == length

    @pytest.mark.parametrize("length", [0, 2, 16, -1])
    def test_out_of_range_rejected(self, length: int) -> None:
        with pytest.raises(ValidationError):
            generate_random_chain(length)

    @pytest.mark.parametrize("length", [3.5, "5", True])
    def test_non_integer_rejected(self, length: object) -> None:
        with pytest.raises(ValidationError):
            generate_random_chain(length)  # type: ignore[arg-type]

    def test_no_adjacent_duplicates(self) -> None:
        rng = random.Random(7)
        for _ in range(200):
            chain = generate_random_chain(CHAIN_MAX_LENGTH, rng=rng)
            for previous, current in zip(chain, chain[1:]):
                assert previous != current

    def test_only_catalog_codes(self) -> None:
        chain = generate_random_chain(10)
        assert all(CATALOG.contains(code) for code in chain)

    def test_first_entry_never_start_language(self) -> None:
        rng = random.Random(11)
        for _ in range(200):
            chain = generate_random_chain(5, exclude_start="EN-US", rng=rng)
            assert chain[0] != "EN-US"

    def test_seeded_rng_is_reproducible(self) -> None:
        first = generate_random_chain(8, rng=random.Random(42))
        second = generate_random_chain(8, rng=random.Random(42))
        assert first == second

    def test_returns_tuple(self) -> None:
        assert isinstance(generate_random_chain(3), tuple)

    def test_two_language_catalog_alternates(self) -> None:
        """With two codes and the first excluded, the chain must alternate."""
        catalog = LanguageCatalog(
            (LanguageCatalogEntry("DE", "German"), LanguageCatalogEntry("FR", "French"))
        )
        chain = generate_random_chain(5, exclude_start="DE", catalog=catalog)
        assert chain == ("FR", "DE", "FR", "DE", "FR")


class TestValidateChain:
    """Tests for validate_chain()."""

    def test_valid_chain_returned_as_tuple(self) -> None:
        assert validate_chain(["DE", "FR", "JA"]) == ("DE", "FR", "JA")

    def test_repeats_allowed(self) -> None:
        assert validate_chain(["DE", "DE", "DE"]) == ("DE", "DE", "DE")

    def test_too_short(self) -> None:
        with pytest.raises(ValidationError, match="between 3 and 15"):
            validate_chain(["DE", "FR"])

    def test_too_long(self) -> None:
        with pytest.raises(ValidationError):
            validate_chain(["DE", "FR"] * 8)

    def test_unknown_code(self) -> None:
        with pytest.raises(ValidationError, match="XX"):
            validate_chain(["DE", "XX", "FR"])

    def test_codes_are_case_sensitive(self) -> None:
        with pytest.raises(ValidationError):
            validate_chain(["de", "fr", "ja"])
