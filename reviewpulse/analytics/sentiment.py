"""
Sentiment Analyzer.

Overall, monthly and per-theme sentiment scores on a -1 to 1 scale.
"""

import logging
from typing import List, Optional, Sequence

from reviewpulse.analytics.monthly import monthly_averages
from reviewpulse.analytics.themes import ThemeExtractor
from reviewpulse.models.analysis import (
    MonthlySentiment,
    SentimentAnalysis,
    ThemeAnalysis,
    ThemeSentiment,
)
from reviewpulse.models.review import Review
from reviewpulse.utils.parsing import sentiment_value

logger = logging.getLogger(__name__)


class SentimentAnalyzer:
    """
    Aggregates per-review sentiment scalars.

    By-theme sentiment is a projection of the top entries of the global
    theme ranking.
    """

    def __init__(self, top_themes: int = 10, theme_extractor: Optional[ThemeExtractor] = None):
        """
        Args:
            top_themes: Number of ranked themes to include in by_theme
            theme_extractor: Extractor used when no ranking is supplied
        """
        self.top_themes = top_themes
        self.theme_extractor = theme_extractor or ThemeExtractor()

    def analyze(
        self,
        reviews: Sequence[Review],
        themes: Optional[List[ThemeAnalysis]] = None
    ) -> SentimentAnalysis:
        """
        Analyze sentiment.

        Args:
            reviews: Input reviews
            themes: Global theme ranking, recomputed when omitted

        Returns:
            SentimentAnalysis with overall, by_month and by_theme
        """
        values = [sentiment_value(r.sentiment) for r in reviews]
        overall = sum(values) / len(values) if values else 0.0

        by_month = [
            MonthlySentiment(month=month, sentiment=average, count=count)
            for month, average, count in monthly_averages(reviews, lambda r: sentiment_value(r.sentiment))
        ]

        if themes is None:
            themes = self.theme_extractor.extract(reviews)

        by_theme = [
            ThemeSentiment(theme=t.theme, sentiment=t.average_sentiment)
            for t in themes[:self.top_themes]
        ]

        logger.debug(f"Overall sentiment {overall:.2f} across {len(by_month)} months")
        return SentimentAnalysis(overall=overall, by_month=by_month, by_theme=by_theme)
