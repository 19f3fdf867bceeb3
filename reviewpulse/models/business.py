"""
Business catalogue.

Maps the reviewed venues to their business type and the context string used
when asking a model for recommendations.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class BusinessType(str, Enum):
    CAFE = "CAFE"
    BAR = "BAR"
    GALLERY = "GALLERY"


BUSINESS_TYPE_MAP = {
    "The Little Prince Cafe": BusinessType.CAFE,
    "Vol de Nuit, The Hidden Bar": BusinessType.BAR,
    "L'Envol Art Space": BusinessType.GALLERY,
}

BUSINESS_CONTEXT = {
    BusinessType.CAFE: "a cafe serving coffee, pastries, and light meals",
    BusinessType.BAR: "a cocktail bar with a speakeasy atmosphere and live music",
    BusinessType.GALLERY: "an art gallery showcasing contemporary artists",
}

DEFAULT_BUSINESS_CONTEXT = "a local business"


def resolve_business_type(business_name: str) -> BusinessType:
    """Look up a venue's type; unknown venues are treated as cafes."""
    business_type = BUSINESS_TYPE_MAP.get(business_name)
    if business_type is None:
        logger.warning(f"Unknown business '{business_name}', defaulting to {BusinessType.CAFE.value}")
        return BusinessType.CAFE
    return business_type


def business_context(business_type) -> str:
    """Describe the business for a recommendation prompt."""
    try:
        return BUSINESS_CONTEXT[BusinessType(business_type)]
    except ValueError:
        return DEFAULT_BUSINESS_CONTEXT


def business_slug(business_name: str) -> str:
    """File-system friendly name, e.g. "vol_de_nuit_the_hidden_bar"."""
    cleaned = "".join(c.lower() if c.isalnum() else " " for c in business_name)
    return "_".join(cleaned.split())
