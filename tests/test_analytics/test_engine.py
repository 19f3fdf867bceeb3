"""
Unit tests for the Review Analytics Engine.
Covers the aggregate properties of a full engine run.
"""

import pytest

from reviewpulse.engine import AnalyticsConfig, ReviewAnalyticsEngine, process_reviews
from reviewpulse.models.review import Review


@pytest.fixture
def reviews():
    """Small mixed review set across two months plus one undated review."""
    return [
        Review(
            stars=5,
            name="Alice",
            published_at_date="2024-03-15T12:00:00.000Z",
            sentiment="very positive",
            main_themes='["Coffee", "Service"]',
            staff_mentioned='["Anna"]',
            response_from_owner_text="Thanks Alice!"
        ),
        Review(
            stars=2,
            name="Bob",
            published_at_date="2024-03-10T12:00:00.000Z",
            sentiment="negative",
            main_themes="coffee, wait time",
            staff_mentioned="Marc"
        ),
        Review(
            stars=4,
            name="Chloe",
            published_at_date="2024-04-12T12:00:00.000Z",
            sentiment="Positive",
            main_themes='["Atmosphere"]',
            response_from_owner_text="   "
        ),
        Review(
            stars=3,
            name="Dan",
            published_at_date="",
            sentiment=None,
            main_themes='["Coffee"]',
            staff_mentioned='["Anna"]'
        ),
    ]


def test_empty_input():
    """Test that empty input degrades to zeros and empty lists."""
    analysis = ReviewAnalyticsEngine().process([])

    assert analysis.metrics.to_dict() == {
        "totalReviews": 0,
        "avgRating": 0,
        "positiveReviews": 0,
        "neutralReviews": 0,
        "negativeReviews": 0,
        "responsesFromOwner": 0,
        "responseRate": 0,
    }
    assert analysis.themes == []
    assert analysis.staff_mentions == []
    assert analysis.sentiment.overall == 0
    assert analysis.sentiment.by_month == []
    assert analysis.trends.rating_trend == []
    assert analysis.trends.theme_trend == []


def test_metrics(reviews):
    """Test counts, average rating and owner response rate."""
    metrics = ReviewAnalyticsEngine().process(reviews).metrics

    assert metrics.total_reviews == 4
    assert metrics.avg_rating == pytest.approx(3.5)
    assert metrics.positive_reviews == 2
    assert metrics.negative_reviews == 1
    assert metrics.neutral_reviews == 1
    assert metrics.positive_reviews + metrics.neutral_reviews + metrics.negative_reviews == metrics.total_reviews

    # Whitespace-only response does not count
    assert metrics.responses_from_owner == 1
    assert metrics.response_rate == pytest.approx(0.25)


def test_reviews_pass_through(reviews):
    """Test that the input is passed through in order."""
    analysis = ReviewAnalyticsEngine().process(reviews)
    assert analysis.reviews == reviews


def test_theme_ranking(reviews):
    """Test theme grouping, ordering and review indices."""
    themes = ReviewAnalyticsEngine().process(reviews).themes

    assert themes[0].theme == "coffee"
    assert themes[0].count == 3
    assert themes[0].review_indices == [0, 1, 3]
    assert themes[0].average_sentiment == pytest.approx((1.0 - 0.5 + 0.0) / 3)

    counts = [t.count for t in themes]
    assert counts == sorted(counts, reverse=True)

    for theme in themes:
        assert theme.count == len(theme.review_indices)


def test_single_review_theme_collapse():
    """Test that differently cased duplicates collapse into one theme."""
    review = Review(stars=5, sentiment="very positive", main_themes='["Coffee","coffee"]')

    analysis = ReviewAnalyticsEngine().process([review])

    assert len(analysis.themes) == 1
    assert analysis.themes[0].theme == "coffee"
    assert analysis.themes[0].count == 2
    assert analysis.themes[0].average_sentiment == 1.0


def test_sentiment_analysis(reviews):
    """Test overall, monthly and by-theme sentiment."""
    sentiment = ReviewAnalyticsEngine().process(reviews).sentiment

    assert sentiment.overall == pytest.approx((1.0 - 0.5 + 0.5 + 0.0) / 4)

    # Undated review is excluded from months
    assert [m.month for m in sentiment.by_month] == ["2024-03", "2024-04"]
    assert sentiment.by_month[0].count == 2
    assert sentiment.by_month[0].sentiment == pytest.approx(0.25)
    assert sentiment.by_month[1].sentiment == pytest.approx(0.5)

    assert sentiment.by_theme[0].theme == "coffee"


def test_by_theme_limited_to_top_themes():
    """Test that by_theme keeps only the configured number of themes."""
    themes = ", ".join(f"theme {i}" for i in range(15))
    review = Review(stars=4, main_themes=themes)

    analysis = ReviewAnalyticsEngine(AnalyticsConfig(sentiment_top_themes=10)).process([review])

    assert len(analysis.themes) == 15
    assert len(analysis.sentiment.by_theme) == 10


def test_staff_mentions(reviews):
    """Test staff grouping across JSON and comma-separated fields."""
    staff = ReviewAnalyticsEngine().process(reviews).staff_mentions

    assert [s.name for s in staff] == ["Anna", "Marc"]
    assert staff[0].count == 2
    assert staff[0].review_indices == [0, 3]
    assert staff[0].average_sentiment == pytest.approx(0.5)


def test_unparsable_date_still_counted(reviews):
    """Test that an undated review only drops out of monthly series."""
    analysis = ReviewAnalyticsEngine().process(reviews)

    assert analysis.metrics.total_reviews == 4
    assert sum(m.count for m in analysis.sentiment.by_month) == 3
    assert sum(r.count for r in analysis.trends.rating_trend) == 3


def test_rating_trend(reviews):
    """Test monthly average rating series."""
    trend = ReviewAnalyticsEngine().process(reviews).trends.rating_trend

    assert [r.month for r in trend] == ["2024-03", "2024-04"]
    assert trend[0].avg_rating == pytest.approx(3.5)
    assert trend[0].count == 2
    assert trend[1].avg_rating == pytest.approx(4.0)


def test_to_dict_shape(reviews):
    """Test the camelCase output shape."""
    data = ReviewAnalyticsEngine().process(reviews).to_dict()

    assert set(data) == {"reviews", "metrics", "themes", "sentiment", "staffMentions", "trends"}
    assert set(data["themes"][0]) == {"theme", "count", "averageSentiment", "reviewIndices"}
    assert set(data["staffMentions"][0]) == {"name", "count", "averageSentiment", "reviewIndices"}
    assert set(data["sentiment"]) == {"overall", "byMonth", "byTheme"}
    assert set(data["trends"]) == {"ratingTrend", "themeTrend"}
    assert data["reviews"][0]["publishedAtDate"] == "2024-03-15T12:00:00.000Z"


def test_repeated_runs_are_independent(reviews):
    """Test that the engine keeps no state between calls."""
    engine = ReviewAnalyticsEngine()

    first = engine.process(reviews)
    engine.process([Review(stars=1, main_themes="noise")])
    second = engine.process(reviews)

    assert first.to_dict() == second.to_dict()


def test_process_reviews_helper(reviews):
    """Test the module-level convenience function."""
    analysis = process_reviews(reviews, AnalyticsConfig(staff_case_fold=True))
    assert analysis.metrics.total_reviews == 4


def test_default_config_when_omitted(reviews):
    """Test that a missing config falls back to the defaults."""
    assert ReviewAnalyticsEngine(None).config == AnalyticsConfig()
    assert process_reviews(reviews).metrics.total_reviews == 4


def test_non_list_json_fields_contribute_nothing():
    """Test that JSON null, numbers, booleans and objects yield no themes or staff."""
    reviews = [
        Review(stars=4, main_themes="null", staff_mentioned="null"),
        Review(stars=4, main_themes="123", staff_mentioned="true"),
        Review(stars=4, main_themes="{}", staff_mentioned='{"name": "Anna"}'),
    ]

    analysis = ReviewAnalyticsEngine().process(reviews)

    assert analysis.themes == []
    assert analysis.staff_mentions == []
    assert analysis.sentiment.by_theme == []
    assert analysis.trends.theme_trend == []
    assert analysis.metrics.total_reviews == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
