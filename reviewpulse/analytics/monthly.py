"""
Monthly bucketing.

Groups reviews by the YYYY-MM month of their publish date. Reviews without
a parseable date are left out of every bucket.
"""

from collections import defaultdict
from typing import Callable, Dict, List, Sequence, Tuple

from reviewpulse.models.review import Review
from reviewpulse.utils.parsing import month_key


def bucket_by_month(reviews: Sequence[Review]) -> Dict[str, List[Review]]:
    """Map month key -> reviews published that month (input order kept)."""
    buckets: Dict[str, List[Review]] = defaultdict(list)
    for review in reviews:
        month = month_key(review.published_at_date)
        if month is None:
            continue
        buckets[month].append(review)
    return dict(buckets)


def monthly_averages(
    reviews: Sequence[Review],
    value: Callable[[Review], float]
) -> List[Tuple[str, float, int]]:
    """
    Average a per-review value within each month.

    Returns:
        (month, average, count) tuples sorted by month ascending
    """
    rows = []
    for month, bucket in bucket_by_month(reviews).items():
        total = sum(value(r) for r in bucket)
        rows.append((month, total / len(bucket), len(bucket)))

    # YYYY-MM is zero-padded, so string order is chronological
    return sorted(rows, key=lambda row: row[0])
