"""Deterministic assignment of units to experiment variants."""

from __future__ import annotations

import struct
from collections.abc import Sequence

from variantkit.hashing import murmur3_32

_MASK = 0xFFFFFFFF
_NORMALIZER = 1.0 / 0xFFFFFFFF


def choose_variant(split: Sequence[float], prob: float) -> int:
    """Return the index of the split bucket that ``prob`` falls into.

    A probability beyond the cumulative total selects the last bucket.
    """
    cumulative = 0.0
    for index, weight in enumerate(split):
        cumulative += weight
        if prob < cumulative:
            return index
    return len(split) - 1


class VariantAssigner:
    """Assigns variants for one hashed unit."""

    def __init__(self, unit_hash: bytes) -> None:
        self._unit_hash = murmur3_32(unit_hash, 0)

    def assign(self, split: Sequence[float], seed_hi: int, seed_lo: int) -> int:
        """Return the variant index for the experiment seeded by ``seed_hi``/``seed_lo``."""
        return choose_variant(split, self._probability(seed_hi, seed_lo))

    def _probability(self, seed_hi: int, seed_lo: int) -> float:
        buffer = struct.pack("<III", seed_lo & _MASK, seed_hi & _MASK, self._unit_hash)
        return murmur3_32(buffer, 0) * _NORMALIZER