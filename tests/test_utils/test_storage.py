"""
Unit tests for the storage manager.
"""

import json
import os
import tempfile

import pandas as pd
import pytest

from reviewpulse.engine import ReviewAnalyticsEngine
from reviewpulse.models.recommendation import RecommendationResponse
from reviewpulse.models.review import Review
from reviewpulse.utils.storage import StorageManager


@pytest.fixture
def analysis():
    reviews = [
        Review(stars=5, published_at_date="2024-03-15T12:00:00Z", main_themes='["Coffee", "Service"]'),
        Review(stars=3, published_at_date="2024-04-15T12:00:00Z", main_themes="coffee"),
        Review(stars=4, published_at_date=None, main_themes='["Decor"]'),
    ]
    return ReviewAnalyticsEngine().process(reviews)


def test_save_analysis(analysis):
    """Test JSON export of the full analysis."""
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        path = storage.save_analysis(analysis, "The Little Prince Cafe")

        assert os.path.basename(path) == "the_little_prince_cafe_analysis.json"
        with open(path) as f:
            data = json.load(f)

        assert data["metrics"]["totalReviews"] == 3
        assert data["themes"][0]["theme"] == "coffee"


def test_save_recommendations():
    """Test JSON export of recommendations."""
    recs = RecommendationResponse(urgent_actions=["Hire a second barista"])

    with tempfile.TemporaryDirectory() as tmpdir:
        path = StorageManager(tmpdir).save_recommendations(recs, "L'Envol Art Space")

        assert os.path.basename(path) == "l_envol_art_space_recommendations.json"
        with open(path) as f:
            data = json.load(f)

        assert data["urgentActions"] == ["Hire a second barista"]
        assert data["futureScenarios"] == []


def test_export_trend_tables(analysis):
    """Test rating and pivoted theme trend CSVs plus metadata."""
    with tempfile.TemporaryDirectory() as tmpdir:
        paths = StorageManager(tmpdir).export_trend_tables(analysis, "Vol de Nuit, The Hidden Bar")

        rating_df = pd.read_csv(paths["rating_trend"])
        assert list(rating_df["month"]) == ["2024-03", "2024-04"]
        assert list(rating_df["count"]) == [1, 1]

        theme_df = pd.read_csv(paths["theme_trend"])
        assert list(theme_df["month"]) == ["2024-03", "2024-04"]
        assert list(theme_df["coffee"]) == [1, 1]
        assert list(theme_df["service"]) == [1, 0]

        with open(paths["metadata"]) as f:
            metadata = json.load(f)

        assert metadata["month_range"] == {"start": "2024-03", "end": "2024-04"}
        assert metadata["dated_reviews"] == 2
        assert metadata["undated_reviews"] == 1


def test_export_trend_tables_empty():
    """Test export with no reviews at all."""
    analysis = ReviewAnalyticsEngine().process([])

    with tempfile.TemporaryDirectory() as tmpdir:
        paths = StorageManager(tmpdir).export_trend_tables(analysis, "Empty Place")

        assert pd.read_csv(paths["rating_trend"]).empty
        with open(paths["metadata"]) as f:
            metadata = json.load(f)
        assert metadata["months_with_reviews"] == 0
        assert metadata["month_range"]["start"] is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
