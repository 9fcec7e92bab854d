"""Statistical weighting of terms into visual weight classes."""

from typing import Iterable, List, Tuple

from ..constants import WEIGHT_CLASSES, WEIGHT_MIN_RANGE
from ..models.term import Term, WeightedTerm


def thresholds(minimum: int, maximum: int) -> Tuple[float, ...]:
    """Ascending upper bounds for weight classes 1-5 (p10, p25, p50, p75, p90)."""
    count_range = maximum - minimum
    return (
        minimum + count_range / 10,
        minimum + count_range / 4,
        minimum + count_range / 2,
        minimum + count_range * 0.75,
        minimum + count_range * 0.90,
    )


def classify(count: int, minimum: int, maximum: int) -> int:
    """Classify a count into a weight class between 1 and 6.

    Ranges of five or less are too small to be meaningful and put every
    term in class 1. Thresholds are exclusive upper bounds, so a count equal
    to a threshold belongs to the next class.
    """
    if maximum - minimum <= WEIGHT_MIN_RANGE:
        return 1
    for weight, upper in enumerate(thresholds(minimum, maximum), start=1):
        if count < upper:
            return weight
    return WEIGHT_CLASSES


def weigh(terms: Iterable[Term], bounds: Tuple[int, int]) -> List[WeightedTerm]:
    """Pair each term with its weight class, preserving order."""
    minimum, maximum = bounds
    return [
        WeightedTerm(term=term, weight=classify(term.count, minimum, maximum))
        for term in terms
    ]
