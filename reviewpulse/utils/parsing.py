"""
Field parsing helpers.

Tolerant decoding of the semi-structured review fields shared by every
analytics pass: embedded name lists, sentiment labels and publish dates.
None of these functions raise on malformed content.
"""

import json
import logging
from datetime import datetime
from typing import Any, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

# Checked in order: the "very" forms contain the plain forms as substrings
SENTIMENT_SCALE = (
    ("very positive", 1.0),
    ("very negative", -1.0),
    ("positive", 0.5),
    ("negative", -0.5),
)

POSITIVE = "positive"
NEUTRAL = "neutral"
NEGATIVE = "negative"


def decode_list_field(raw: Any, field_name: str = "field") -> List[str]:
    """
    Decode a list field stored as a JSON array or comma-separated text.

    A JSON string is a single entry; JSON null, booleans, numbers and
    objects yield no entries.

    Args:
        raw: Field value (JSON text, CSV text, a list, or None)
        field_name: Field name for debug logging

    Returns:
        Raw entries (untrimmed for JSON, trimmed for CSV); empty list when
        nothing usable is present
    """
    if raw is None:
        return []

    if isinstance(raw, (list, tuple)):
        return [item for item in raw if isinstance(item, str)]

    if not isinstance(raw, str) or not raw.strip():
        return []

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug(f"{field_name} is not JSON, splitting on commas: {raw!r}")
        return [piece.strip() for piece in raw.split(",")]

    if isinstance(decoded, list):
        return [item for item in decoded if isinstance(item, str)]
    if isinstance(decoded, str):
        return [decoded]

    # null, booleans, numbers and objects carry no names
    logger.debug(f"{field_name} JSON value is not a list, ignoring: {raw!r}")
    return []


def sentiment_value(label: Optional[str]) -> float:
    """
    Map a free-text sentiment label to a scalar in [-1, 1].

    Matching is case-insensitive and substring based; unknown or missing
    labels are neutral (0.0).
    """
    if not label or not isinstance(label, str):
        return 0.0

    normalized = label.lower()
    for phrase, value in SENTIMENT_SCALE:
        if phrase in normalized:
            return value
    return 0.0


def sentiment_bucket(label: Optional[str]) -> str:
    """Classify a label as positive, neutral or negative."""
    value = sentiment_value(label)
    if value > 0:
        return POSITIVE
    if value < 0:
        return NEGATIVE
    return NEUTRAL


def parse_published_date(raw: Any) -> Optional[datetime]:
    """
    Parse a publish date into a naive local datetime.

    Timezone-aware values are converted to the local timezone; naive
    values are taken as local already. Returns None when unparsable.
    """
    if isinstance(raw, datetime):
        parsed = pd.Timestamp(raw)
    elif isinstance(raw, str) and raw.strip():
        # Relative words like "now" or "today" are not publish dates
        if not any(c.isdigit() for c in raw):
            logger.debug(f"Publish date has no digits: {raw!r}")
            return None
        try:
            parsed = pd.to_datetime(raw.strip(), errors="coerce")
        except (ValueError, TypeError, OverflowError):
            parsed = pd.NaT
    else:
        return None

    if pd.isna(parsed):
        logger.debug(f"Unparsable publish date: {raw!r}")
        return None

    result = parsed.to_pydatetime()
    if result.tzinfo is not None:
        result = result.astimezone().replace(tzinfo=None)
    return result


def month_key(raw: Any) -> Optional[str]:
    """Derive the YYYY-MM bucket for a publish date, or None."""
    parsed = parse_published_date(raw)
    if parsed is None:
        return None
    return f"{parsed.year:04d}-{parsed.month:02d}"
