"""
Staff Mention Extractor.

Same grouping as the theme extractor, applied to staffMentioned. Names are
trimmed but keep their casing unless case folding is switched on.
"""

import logging
from typing import List, Sequence

from reviewpulse.analytics.mentions import fold_case, group_mentions, trim_only
from reviewpulse.models.analysis import StaffMention
from reviewpulse.models.review import Review

logger = logging.getLogger(__name__)

STAFF_FIELD = "staff_mentioned"


class StaffMentionExtractor:
    """Ranks staff members by number of mentions."""

    def __init__(self, case_fold: bool = False):
        """
        Args:
            case_fold: Lower-case names before grouping ("Anna" == "anna")
        """
        self.case_fold = case_fold

    def extract(self, reviews: Sequence[Review]) -> List[StaffMention]:
        normalize = fold_case if self.case_fold else trim_only
        groups = group_mentions(reviews, STAFF_FIELD, normalize)

        mentions = [
            StaffMention(
                name=g.key,
                count=g.count,
                average_sentiment=g.average_sentiment,
                review_indices=g.review_indices
            )
            for g in groups
        ]

        logger.debug(f"Extracted {len(mentions)} staff members (case_fold={self.case_fold})")
        return mentions
