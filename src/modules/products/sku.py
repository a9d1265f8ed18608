"""SKU generation.

A SKU is a display/lookup convenience built from the product name and a
random five-digit suffix, e.g. ``SKU-WID-04217`` for "Widget".  It is not
a uniqueness guarantee; the ``products.sku`` unique index is the final
arbiter.
"""

from __future__ import annotations

import random
from typing import Protocol

SKU_PREFIX = "SKU"
NAME_PART_LENGTH = 3
SUFFIX_DIGITS = 5


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


default_random_source: RandomSource = random.SystemRandom()


def generate_sku(name: str, random_source: RandomSource | None = None) -> str:
    """Build ``SKU-<NAMEPART>-<DIGITS>`` from ``name``.

    ``random_source`` only needs a ``randrange`` method; pass a seeded
    ``random.Random`` for deterministic output.
    """
    source = default_random_source if random_source is None else random_source
    name_part = name.upper()[:NAME_PART_LENGTH]
    suffix = source.randrange(10**SUFFIX_DIGITS)
    return f"{SKU_PREFIX}-{name_part}-{suffix:0{SUFFIX_DIGITS}d}"
