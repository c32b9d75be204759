"""
Collapse per-item ETAs into one cart/checkout ETA.
"""
from typing import Optional, Sequence, Union

from .types import AggregationPolicy, ETAResult


def aggregate(results: Sequence[ETAResult], policy: Union[AggregationPolicy, str] = AggregationPolicy.LATEST) -> Optional[ETAResult]:
    """pick one of the results by policy.

    latest: the item with the latest max_date governs (slowest item).
    earliest: the item with the earliest min_date governs (fastest item).
    ties go to the first occurrence. returns None for an empty list; the
    caller reports that as "no rule matched".
    """
    policy = AggregationPolicy(policy)
    if not results:
        return None

    chosen = results[0]
    for result in results[1:]:
        if policy is AggregationPolicy.LATEST and result.max_date > chosen.max_date:
            chosen = result
        elif policy is AggregationPolicy.EARLIEST and result.min_date < chosen.min_date:
            chosen = result
    return chosen
