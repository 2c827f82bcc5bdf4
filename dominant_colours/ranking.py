"""Ordering of colour results by prevalence."""

from typing import Iterable, List

from .types import ColourResult


def rank_results(results: Iterable[ColourResult]) -> List[ColourResult]:
    """Sort results by percentage, most dominant first.

    The sort is stable: equal percentages keep their incoming (cluster
    index) order.
    """
    return sorted(results, key=lambda result: -result.percentage)
