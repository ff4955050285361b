"""
Preference Ranker

Orders capabilities by how much they are used.

DESIGN RULES:
- Pure function of the usage counters
- Ties keep canonical capability order
- Never cached; callers recompute after every change
"""

from typing import List, Mapping

from schemas.capability import CANONICAL_CAPABILITIES, DEFAULT_PREFERRED
from schemas.snapshot import MAX_PREFERRED


def rank(counts: Mapping[str, int], limit: int = MAX_PREFERRED) -> List[str]:
    """
    Rank every canonical capability by usage.

    Args:
        counts: Usage counters keyed by capability id. Missing keys count as 0.
        limit: Number of capabilities to return

    Returns:
        Capability ids, most used first
    """
    # sorted() is stable, so equal counts stay in canonical order
    ordered = sorted(
        CANONICAL_CAPABILITIES,
        key=lambda capability: _count(counts, capability),
        reverse=True,
    )
    return ordered[:limit]


def derive_preferred(counts: Mapping[str, int]) -> List[str]:
    """
    Compute the preferred_features projection.

    With no recorded usage at all the built-in default is kept.
    """
    if not any(_count(counts, capability) for capability in CANONICAL_CAPABILITIES):
        return list(DEFAULT_PREFERRED)
    return rank(counts)


def _count(counts: Mapping[str, int], capability: str) -> int:
    value = counts.get(capability, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)
