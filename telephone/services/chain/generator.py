"""Language chain generation and validation.

Random chains only forbid immediate repetition: a language may come back
later in the chain, and the start language is excluded from the first
position only.
"""

from __future__ import annotations

import random
from typing import Sequence

from telephone.core.exceptions import ValidationError
from telephone.services.language.catalog import CATALOG, LanguageCatalog

CHAIN_MIN_LENGTH = 3
CHAIN_MAX_LENGTH = 15


def check_chain_length(length: int, label: str = "Chain length") -> None:
    """Raise ValidationError unless CHAIN_MIN_LENGTH <= length <= CHAIN_MAX_LENGTH."""
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValidationError(f"{label} must be an integer")
    if length < CHAIN_MIN_LENGTH or length > CHAIN_MAX_LENGTH:
        raise ValidationError(
            f"{label} must be between {CHAIN_MIN_LENGTH} and {CHAIN_MAX_LENGTH}"
        )


def generate_random_chain(
    length: int,
    exclude_start: str | None = None,
    rng: random.Random | None = None,
    catalog: LanguageCatalog = CATALOG,
) -> tuple[str, ...]:
    """Draw a chain of *length* catalog codes with no adjacent duplicates.

    Args:
        length: Number of hops, 3 to 15 inclusive.
        exclude_start: Code that may not appear in the first position,
            normally the start language of the run.
        rng: Source of randomness. Defaults to the module-level generator.
        catalog: Universe of codes to draw from.

    Returns:
        The chain as an immutable tuple.

    Raises:
        ValidationError: If *length* is out of range.
    """
    check_chain_length(length, "Random chain length")
    choose = rng.choice if rng is not None else random.choice

    codes = catalog.all_codes()
    pool = [code for code in codes if code != exclude_start]
    chain: list[str] = []
    for _ in range(length):
        selected = choose(pool)
        chain.append(selected)
        pool = [code for code in codes if code != selected]
    return tuple(chain)


def validate_chain(
    codes: Sequence[str],
    catalog: LanguageCatalog = CATALOG,
) -> tuple[str, ...]:
    """Check a caller-supplied chain and return it as a tuple.

    Raises:
        ValidationError: On a bad length or a code missing from the catalog.
    """
    check_chain_length(len(codes), "Language chain length")
    unknown = [code for code in codes if not catalog.contains(code)]
    if unknown:
        raise ValidationError(
            f"Unsupported language code(s) in chain: {', '.join(unknown)}"
        )
    return tuple(codes)
