"""
Trend Analyzer.

Monthly rating series and monthly top-theme series.
"""

import logging
from collections import Counter
from typing import Dict, List, Sequence

from reviewpulse.analytics.monthly import monthly_averages
from reviewpulse.analytics.themes import review_themes
from reviewpulse.models.analysis import MonthlyRating, MonthlyThemes, ThemeCount, TrendData
from reviewpulse.models.review import Review
from reviewpulse.utils.parsing import month_key

logger = logging.getLogger(__name__)


class TrendAnalyzer:
    """Builds the two monthly trend series, both sorted by month ascending."""

    def __init__(self, top_themes_per_month: int = 5):
        self.top_themes_per_month = top_themes_per_month

    def analyze(self, reviews: Sequence[Review]) -> TrendData:
        trends = TrendData(
            rating_trend=self.rating_trend(reviews),
            theme_trend=self.theme_trend(reviews)
        )
        logger.debug(
            f"Trends: {len(trends.rating_trend)} rating months, "
            f"{len(trends.theme_trend)} theme months"
        )
        return trends

    def rating_trend(self, reviews: Sequence[Review]) -> List[MonthlyRating]:
        """Average stars per month."""
        return [
            MonthlyRating(month=month, avg_rating=average, count=count)
            for month, average, count in monthly_averages(reviews, lambda r: r.stars)
        ]

    def theme_trend(self, reviews: Sequence[Review]) -> List[MonthlyThemes]:
        """
        Top themes per month.

        Only reviews with both a parseable date and at least one non-blank
        theme contribute, so no month ends up with an empty theme list.
        """
        months: Dict[str, Counter] = {}

        for review in reviews:
            themes = review_themes(review)
            if not themes:
                continue

            month = month_key(review.published_at_date)
            if month is None:
                continue

            months.setdefault(month, Counter()).update(themes)

        result = []
        for month in sorted(months):
            ranked = sorted(months[month].items(), key=lambda item: (-item[1], item[0]))
            result.append(MonthlyThemes(
                month=month,
                themes=[
                    ThemeCount(theme=theme, count=count)
                    for theme, count in ranked[:self.top_themes_per_month]
                ]
            ))
        return result
