"""Size-tier classification for asset groups.

Tier boundaries are shared by every view so that stats stay comparable;
which tiers are actually rendered is decided per view.
"""

from enum import Enum
from typing import Iterable

from storygraph.models.graph import TierBreakdown


LARGE_TIER_MIN = 100
MEDIUM_TIER_MIN = 20
SMALL_TIER_MIN = 10


class SizeTier(str, Enum):
    """Group size buckets."""
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"
    TINY = "tiny"


def classify(size: int) -> SizeTier:
    """Bucket a group size. Boundaries are inclusive at the lower edge."""
    if size >= LARGE_TIER_MIN:
        return SizeTier.LARGE
    if size >= MEDIUM_TIER_MIN:
        return SizeTier.MEDIUM
    if size >= SMALL_TIER_MIN:
        return SizeTier.SMALL
    return SizeTier.TINY


def tier_breakdown(sizes: Iterable[int]) -> TierBreakdown:
    """Count how many groups fall in each tier."""
    counts = {tier.value: 0 for tier in SizeTier}
    for size in sizes:
        counts[classify(size).value] += 1
    return TierBreakdown(**counts)
