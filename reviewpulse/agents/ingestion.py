"""
Ingestion Agent.

Loads a business's scraped reviews from a JSON or CSV export.
Supports mock data for demos and tests.
"""

import json
import logging
import os
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pandas as pd

from reviewpulse.models.business import BusinessType, business_slug, resolve_business_type
from reviewpulse.models.review import Review
from reviewpulse.utils.parsing import parse_published_date

logger = logging.getLogger(__name__)


# (text, stars, sentiment, themes, staff) per business type
MOCK_TEMPLATES = {
    BusinessType.CAFE: [
        ("Best flat white in town, Anna remembered my order!", 5, "very positive", ["Coffee", "Service"], ["Anna"]),
        ("Croissants were fresh and flaky.", 5, "very positive", ["Pastries", "Food Quality"], []),
        ("Cozy spot but it gets very crowded on weekends.", 4, "positive", ["Atmosphere", "Crowding"], []),
        ("Waited 20 minutes for a latte.", 2, "negative", ["Wait Time", "Coffee"], ["Marc"]),
        ("Prices went up again, coffee is average.", 2, "negative", ["Prices", "Coffee"], []),
        ("Lovely little prince decor, nice place to read.", 4, "positive", ["Atmosphere", "Decor"], []),
        ("Rude staff at the counter.", 1, "very negative", ["Service"], ["Marc"]),
        ("Decent sandwiches.", 3, "neutral", ["Food Quality"], []),
    ],
    BusinessType.BAR: [
        ("Amazing cocktails, Leo is a true artist.", 5, "very positive", ["Cocktails", "Bartenders"], ["Leo"]),
        ("Live jazz on Thursday was magical.", 5, "very positive", ["Live Music", "Atmosphere"], []),
        ("Hard to find the entrance but worth it.", 4, "positive", ["Atmosphere", "Location"], []),
        ("Drinks are overpriced for the size.", 2, "negative", ["Prices", "Cocktails"], []),
        ("Too loud to have a conversation.", 2, "negative", ["Noise", "Live Music"], []),
        ("Sofia made us feel welcome.", 5, "very positive", ["Service"], ["Sofia"]),
        ("Waited ages to be seated, terrible.", 1, "very negative", ["Wait Time", "Service"], []),
        ("It's a bar.", 3, "neutral", ["Atmosphere"], []),
    ],
    BusinessType.GALLERY: [
        ("Inspiring exhibition of local artists.", 5, "very positive", ["Exhibitions", "Local Artists"], []),
        ("Claire gave us a wonderful guided tour.", 5, "very positive", ["Guided Tours", "Staff"], ["Claire"]),
        ("Bright, calm space.", 4, "positive", ["Space", "Atmosphere"], []),
        ("Small collection, done in 15 minutes.", 2, "negative", ["Collection Size"], []),
        ("Opening hours are confusing.", 2, "negative", ["Opening Hours"], []),
        ("Workshops for kids are great.", 4, "positive", ["Workshops"], ["Claire"]),
        ("Entrance fee not worth it at all.", 1, "very negative", ["Prices"], []),
        ("Okay for a rainy afternoon.", 3, "neutral", ["Exhibitions"], []),
    ],
}


class ReviewIngestionAgent:
    """
    Fetches reviews for a business.

    Real mode reads an export of the business's review table (JSON array
    of rows or CSV). Mock mode generates deterministic synthetic reviews.
    """

    def __init__(self, use_mock_data: bool = False, data_root: Optional[str] = None):
        """
        Initialize ingestion agent.

        Args:
            use_mock_data: If True, generate mock reviews instead of reading files
            data_root: Directory searched for "<business slug>.json|csv"
                when no explicit source path is given
        """
        self.use_mock_data = use_mock_data
        self.data_root = data_root

        if use_mock_data:
            logger.info("Initialized ReviewIngestionAgent in MOCK mode")
        else:
            logger.info(f"Initialized ReviewIngestionAgent in FILE mode (data_root={data_root})")

    def fetch_reviews(
        self,
        business_name: str,
        source_path: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Review]:
        """
        Fetch all reviews for a business, newest first.

        Args:
            business_name: Business display name (e.g., "The Little Prince Cafe")
            source_path: Explicit JSON/CSV export to read
            limit: Number of mock reviews to generate (mock mode only)

        Returns:
            List of Review objects sorted by published date descending

        Raises:
            FileNotFoundError: If no export exists for the business
            ValueError: If the export format is not supported
        """
        if self.use_mock_data and source_path is None:
            return self._generate_mock_reviews(business_name, limit or 60)

        path = source_path or self._default_source_path(business_name)
        rows = self._load_rows(path)

        reviews = []
        skipped = 0
        for row in rows:
            try:
                reviews.append(Review.from_dict(row))
            except (TypeError, ValueError) as e:
                skipped += 1
                logger.warning(f"Skipping invalid review row for {business_name}: {e}")

        reviews = sort_newest_first(reviews)

        logger.info(
            f"Fetched {len(reviews)} reviews for {business_name} from {path}"
            + (f" ({skipped} invalid rows skipped)" if skipped else "")
        )
        return reviews

    def _default_source_path(self, business_name: str) -> str:
        if not self.data_root:
            raise FileNotFoundError(f"No source path or data root configured for {business_name}")

        slug = business_slug(business_name)
        for extension in (".json", ".csv"):
            candidate = os.path.join(self.data_root, slug + extension)
            if os.path.exists(candidate):
                return candidate

        raise FileNotFoundError(f"No review export found for {business_name} in {self.data_root}")

    def _load_rows(self, path: str) -> List[Dict[str, Any]]:
        """
        Read raw rows from a JSON or CSV export.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the extension is unsupported or JSON is not a list
        """
        if not os.path.exists(path):
            logger.error(f"Review export not found: {path}")
            raise FileNotFoundError(path)

        extension = os.path.splitext(path)[1].lower()

        try:
            if extension == ".json":
                with open(path, "r", encoding="utf-8") as f:
                    rows = json.load(f)
                if not isinstance(rows, list):
                    raise ValueError(f"Expected a JSON array of review rows in {path}")
                return [row for row in rows if isinstance(row, dict)]

            if extension == ".csv":
                # Keep every column as text; stars is coerced by Review.from_dict
                df = pd.read_csv(path, dtype=str, keep_default_na=False)
                df = df.where(df != "", None)
                return df.to_dict(orient="records")
        except Exception as e:
            logger.error(f"Failed to load reviews from {path}: {e}")
            raise

        raise ValueError(f"Unsupported review export format: {extension}")

    def _generate_mock_reviews(self, business_name: str, count: int) -> List[Review]:
        """
        Generate synthetic reviews spread over the last twelve months.

        Creates realistic patterns:
        - Mix of sentiment labels and ratings
        - Themes with varied capitalization (to test case folding)
        - Staff lists in both JSON and comma-separated encodings
        - Owner responses on roughly a third of reviews
        """
        templates = MOCK_TEMPLATES[resolve_business_type(business_name)]
        anchor = datetime(2024, 12, 15, 12, 0, 0)

        reviews = []
        for i in range(count):
            text, stars, sentiment, themes, staff = templates[i % len(templates)]

            if i % 4 == 0:
                themes = [t.lower() for t in themes]
            main_themes = json.dumps(themes) if i % 3 else ", ".join(themes)
            staff_mentioned = (json.dumps(staff) if i % 2 else ", ".join(staff)) if staff else None

            published = anchor - timedelta(days=(i * 6) % 365)

            reviews.append(Review(
                stars=stars,
                name=f"guest_{i}",
                text=text,
                published_at_date=published.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
                response_from_owner_text="Thank you for your feedback!" if i % 3 == 0 else None,
                sentiment=sentiment,
                staff_mentioned=staff_mentioned,
                main_themes=main_themes
            ))

        logger.info(f"Generated {len(reviews)} mock reviews for {business_name}")
        return sort_newest_first(reviews)


def sort_newest_first(reviews: List[Review]) -> List[Review]:
    """Order by publish date descending; undated reviews go last."""
    dated = []
    undated = []
    for review in reviews:
        published = parse_published_date(review.published_at_date)
        if published is None:
            undated.append(review)
        else:
            dated.append((published, review))

    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [review for _, review in dated] + undated
