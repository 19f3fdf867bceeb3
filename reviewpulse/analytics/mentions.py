"""
Mention grouping.

Shared routine behind the theme and staff extractors: decode an embedded
list field per review, normalize each entry into a grouping key and
accumulate count, sentiment and source review indices per key.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from reviewpulse.models.review import Review
from reviewpulse.utils.parsing import decode_list_field, sentiment_value

Normalizer = Callable[[str], str]


@dataclass
class MentionGroup:
    """Running totals for one grouping key."""
    key: str
    count: int = 0
    sentiment_sum: float = 0.0
    review_indices: List[int] = field(default_factory=list)

    @property
    def average_sentiment(self) -> float:
        return self.sentiment_sum / self.count if self.count else 0.0


def fold_case(entry: str) -> str:
    return entry.strip().lower()


def trim_only(entry: str) -> str:
    return entry.strip()


def mention_keys(raw, normalize: Normalizer, field_name: str = "field") -> List[str]:
    """
    Decode a list field into normalized grouping keys.
    Blank entries are dropped; duplicates are kept.
    """
    keys = []
    for entry in decode_list_field(raw, field_name):
        if not entry or not entry.strip():
            continue
        keys.append(normalize(entry))
    return keys


def group_mentions(
    reviews: Sequence[Review],
    field_name: str,
    normalize: Normalizer
) -> List[MentionGroup]:
    """
    Group list-field mentions across reviews.

    Args:
        reviews: Input reviews in original order
        field_name: Review attribute holding the list field
        normalize: Entry -> grouping key

    Returns:
        Groups sorted by count descending, then key ascending
    """
    groups: Dict[str, MentionGroup] = {}

    for index, review in enumerate(reviews):
        keys = mention_keys(getattr(review, field_name, None), normalize, field_name)
        if not keys:
            continue

        value = sentiment_value(review.sentiment)
        for key in keys:
            group: Optional[MentionGroup] = groups.get(key)
            if group is None:
                group = groups[key] = MentionGroup(key=key)
            group.count += 1
            group.sentiment_sum += value
            group.review_indices.append(index)

    return sorted(groups.values(), key=lambda g: (-g.count, g.key))
