"""
Review data model.

Represents one raw customer review as scraped for a business.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

# Embedded list fields arrive as JSON text, comma-separated text, or a list
ListField = Union[str, List[str], None]

# camelCase export key -> dataclass field
_FIELD_ALIASES = {
    "stars": "stars",
    "name": "name",
    "text": "text",
    "textTranslated": "text_translated",
    "publishedAtDate": "published_at_date",
    "reviewUrl": "review_url",
    "responseFromOwnerText": "response_from_owner_text",
    "sentiment": "sentiment",
    "staffMentioned": "staff_mentioned",
    "mainThemes": "main_themes",
}


@dataclass(frozen=True)
class Review:
    """
    Raw customer review.
    Only stars is validated; every other field is tolerated as-is.
    """
    stars: int  # 1-5 star rating
    name: str = ""  # Reviewer display name
    text: str = ""
    text_translated: Optional[str] = None
    published_at_date: Optional[str] = None  # ISO date-time string
    review_url: Optional[str] = None
    response_from_owner_text: Optional[str] = None
    sentiment: Optional[str] = None  # e.g. "very positive"
    staff_mentioned: ListField = None
    main_themes: ListField = None

    def __post_init__(self):
        if isinstance(self.stars, bool) or not isinstance(self.stars, int):
            raise ValueError(f"Invalid stars: {self.stars!r}. Must be an integer")
        if not (1 <= self.stars <= 5):
            raise ValueError(f"Invalid stars: {self.stars}. Must be 1-5")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Review":
        """
        Create Review from a raw row (camelCase or snake_case keys).

        Raises:
            ValueError: If stars is missing or not a 1-5 integer
        """
        values = {}
        for key, value in data.items():
            field_name = _FIELD_ALIASES.get(key, key)
            if field_name not in _FIELD_ALIASES.values():
                continue
            # pandas hands empty CSV cells over as NaN
            if isinstance(value, float) and math.isnan(value):
                value = None
            values[field_name] = value

        if values.get("stars") is None:
            raise ValueError("Review row has no stars value")
        values["stars"] = _coerce_stars(values["stars"])

        for text_field in ("name", "text"):
            if values.get(text_field) is None:
                values[text_field] = ""

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase row shape used by scrapers and exports."""
        return {
            "stars": self.stars,
            "name": self.name,
            "text": self.text,
            "textTranslated": self.text_translated,
            "publishedAtDate": self.published_at_date,
            "reviewUrl": self.review_url,
            "responseFromOwnerText": self.response_from_owner_text,
            "sentiment": self.sentiment,
            "staffMentioned": self.staff_mentioned,
            "mainThemes": self.main_themes,
        }


def _coerce_stars(value: Any) -> Any:
    """Accept numpy integers, integral floats and numeric strings from CSV exports."""
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return value
