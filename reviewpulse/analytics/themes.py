"""
Theme Extractor.

Parses each review's embedded theme list, groups themes case-insensitively
and ranks them by number of mentions.
"""

import logging
from typing import List, Sequence

from reviewpulse.analytics.mentions import fold_case, group_mentions, mention_keys
from reviewpulse.models.analysis import ThemeAnalysis
from reviewpulse.models.review import Review

logger = logging.getLogger(__name__)

THEME_FIELD = "main_themes"


def review_themes(review: Review) -> List[str]:
    """Normalized theme keys mentioned by one review (duplicates kept)."""
    return mention_keys(review.main_themes, fold_case, THEME_FIELD)


class ThemeExtractor:
    """
    Ranks themes across a review set.

    Grouping key is the trimmed, lower-cased theme, so "Coffee" and
    "coffee " collapse into one entry keyed "coffee".
    """

    def extract(self, reviews: Sequence[Review]) -> List[ThemeAnalysis]:
        """
        Extract ranked themes.

        Args:
            reviews: Input reviews in original order

        Returns:
            Themes sorted by count descending (ties by theme ascending)
        """
        groups = group_mentions(reviews, THEME_FIELD, fold_case)

        themes = [
            ThemeAnalysis(
                theme=g.key,
                count=g.count,
                average_sentiment=g.average_sentiment,
                review_indices=g.review_indices
            )
            for g in groups
        ]

        logger.debug(f"Extracted {len(themes)} unique themes from {len(reviews)} reviews")
        return themes
