"""
Review diagnostics.

Logging helpers used after ingestion to spot truncated or date-filtered
review sets.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Dict, Optional, Sequence, Tuple

import pandas as pd

from reviewpulse.models.review import Review
from reviewpulse.utils.parsing import parse_published_date

logger = logging.getLogger(__name__)


def review_date_range(reviews: Sequence[Review]) -> Optional[Tuple[datetime, datetime]]:
    """
    Oldest and newest publish dates in the set.

    Returns:
        (oldest, newest), or None when no review has a parseable date
    """
    dates = [d for d in (parse_published_date(r.published_at_date) for r in reviews) if d is not None]
    if not dates:
        return None
    return min(dates), max(dates)


def log_review_stats(business_name: str, reviews: Sequence[Review]) -> Dict[int, int]:
    """
    Log total, date range and per-year counts for a review set.

    Returns:
        Review count per publish year
    """
    logger.info(f"------------- {business_name} Stats -------------")
    logger.info(f"Total reviews: {len(reviews)}")

    year_counts: Dict[int, int] = {}
    date_range = review_date_range(reviews)
    if date_range is not None:
        oldest, newest = date_range
        logger.info(f"Date range: {oldest.date().isoformat()} to {newest.date().isoformat()}")

        years = Counter(
            d.year for d in (parse_published_date(r.published_at_date) for r in reviews)
            if d is not None
        )
        year_counts = dict(sorted(years.items()))
        logger.info(f"Reviews by year: {year_counts}")

    logger.info("--------------------------------------")
    return year_counts


def check_for_date_filtering(
    business_name: str,
    reviews: Sequence[Review],
    now: Optional[datetime] = None,
    recent_months: int = 3,
    warning_percent: float = 95.0
) -> bool:
    """
    Warn when nearly every review is recent, which suggests the upstream
    query was date-filtered.

    Args:
        business_name: Business name for the warning
        reviews: Reviews to check
        now: Reference time (defaults to the current local time)
        recent_months: Size of the "recent" window in calendar months
        warning_percent: Share of recent reviews that triggers the warning

    Returns:
        True when the warning was emitted
    """
    if not reviews:
        return False

    now = now or datetime.now()
    if now.tzinfo is not None:
        # Publish dates are compared as naive local times
        now = now.astimezone().replace(tzinfo=None)
    cutoff = (pd.Timestamp(now) - pd.DateOffset(months=recent_months)).to_pydatetime()

    recent = 0
    for review in reviews:
        published = parse_published_date(review.published_at_date)
        if published is not None and published >= cutoff:
            recent += 1

    percent_recent = recent / len(reviews) * 100
    if percent_recent > warning_percent:
        logger.warning(
            f"{business_name} - {percent_recent:.1f}% of reviews are from the last "
            f"{recent_months} months. Possible date filtering."
        )
        return True
    return False
