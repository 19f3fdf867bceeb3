"""
Review Analytics Engine.

Turns a flat list of reviews into a full AnalysisData object by running the
five analytics passes over the same input.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from reviewpulse.analytics.metrics import MetricsAggregator
from reviewpulse.analytics.sentiment import SentimentAnalyzer
from reviewpulse.analytics.staff import StaffMentionExtractor
from reviewpulse.analytics.themes import ThemeExtractor
from reviewpulse.analytics.trends import TrendAnalyzer
from reviewpulse.models.analysis import AnalysisData
from reviewpulse.models.review import Review
from reviewpulse.utils.diagnostics import review_date_range
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsConfig:
    """Tunable ranking sizes and the staff name normalization policy."""
    sentiment_top_themes: int = 10
    trend_top_themes_per_month: int = 5
    staff_case_fold: bool = False

    @classmethod
    def from_settings(cls) -> "AnalyticsConfig":
        return cls(
            sentiment_top_themes=settings.SENTIMENT_TOP_THEMES,
            trend_top_themes_per_month=settings.TREND_TOP_THEMES_PER_MONTH,
            staff_case_fold=settings.STAFF_NAME_CASE_FOLD
        )


class ReviewAnalyticsEngine:
    """
    Stateless review processor: reviews -> AnalysisData.

    Every call recomputes from its input; nothing is cached between calls,
    so one engine can serve independent callers.
    """

    def __init__(self, config: Optional[AnalyticsConfig] = None):
        """
        Initialize analytics engine.

        Args:
            config: Analytics configuration (defaults to AnalyticsConfig())
        """
        self.config = config or AnalyticsConfig()

        self.metrics_aggregator = MetricsAggregator()
        self.theme_extractor = ThemeExtractor()
        self.sentiment_analyzer = SentimentAnalyzer(
            top_themes=self.config.sentiment_top_themes,
            theme_extractor=self.theme_extractor
        )
        self.staff_extractor = StaffMentionExtractor(case_fold=self.config.staff_case_fold)
        self.trend_analyzer = TrendAnalyzer(
            top_themes_per_month=self.config.trend_top_themes_per_month
        )

    def process(self, reviews: Sequence[Review]) -> AnalysisData:
        """
        Process reviews into analysis data.

        Args:
            reviews: Reviews in any order; indices in the result refer to
                positions in this sequence

        Returns:
            AnalysisData built fresh from the input
        """
        reviews = list(reviews)
        self._log_date_range(reviews)

        themes = self.theme_extractor.extract(reviews)

        analysis = AnalysisData(
            reviews=reviews,
            metrics=self.metrics_aggregator.calculate(reviews),
            themes=themes,
            sentiment=self.sentiment_analyzer.analyze(reviews, themes=themes),
            staff_mentions=self.staff_extractor.extract(reviews),
            trends=self.trend_analyzer.analyze(reviews)
        )

        logger.info(
            f"Processed {len(reviews)} reviews: {len(analysis.themes)} themes, "
            f"{len(analysis.staff_mentions)} staff members, "
            f"{len(analysis.trends.rating_trend)} months"
        )
        return analysis

    def _log_date_range(self, reviews: Sequence[Review]) -> None:
        date_range = review_date_range(reviews)
        if date_range is None:
            return
        oldest, newest = date_range
        logger.info(f"Reviews date range: {oldest.isoformat()} to {newest.isoformat()}")


def process_reviews(reviews: Sequence[Review], config: Optional[AnalyticsConfig] = None) -> AnalysisData:
    """Run the analytics engine once with the given configuration."""
    return ReviewAnalyticsEngine(config).process(reviews)
