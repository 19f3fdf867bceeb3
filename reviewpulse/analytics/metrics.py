"""
Metrics Aggregator.

Review counts, average rating, sentiment split and owner response rate.
"""

import logging
from collections import Counter
from typing import Sequence

from reviewpulse.models.analysis import ReviewMetrics
from reviewpulse.models.review import Review
from reviewpulse.utils.parsing import NEGATIVE, POSITIVE, sentiment_bucket

logger = logging.getLogger(__name__)


def has_owner_response(review: Review) -> bool:
    response = review.response_from_owner_text
    return isinstance(response, str) and len(response.strip()) > 0


class MetricsAggregator:
    """Computes ReviewMetrics; degenerates to zeros on empty input."""

    def calculate(self, reviews: Sequence[Review]) -> ReviewMetrics:
        total_reviews = len(reviews)
        if total_reviews == 0:
            return ReviewMetrics()

        buckets = Counter(sentiment_bucket(r.sentiment) for r in reviews)
        positive = buckets[POSITIVE]
        negative = buckets[NEGATIVE]

        total_stars = sum(r.stars for r in reviews)
        responses = sum(1 for r in reviews if has_owner_response(r))

        metrics = ReviewMetrics(
            total_reviews=total_reviews,
            avg_rating=total_stars / total_reviews,
            positive_reviews=positive,
            neutral_reviews=total_reviews - positive - negative,
            negative_reviews=negative,
            responses_from_owner=responses,
            response_rate=responses / total_reviews
        )

        logger.debug(
            f"Metrics: {total_reviews} reviews, avg {metrics.avg_rating:.2f}, "
            f"{responses} owner responses"
        )
        return metrics
