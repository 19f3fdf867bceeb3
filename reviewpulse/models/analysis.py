"""
Analysis data models.

Output of the Review Analytics Engine. All entities are transient and are
rebuilt from scratch on every engine run.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from reviewpulse.models.review import Review


@dataclass
class ReviewMetrics:
    """Counts and rates over the whole review set."""
    total_reviews: int = 0
    avg_rating: float = 0.0
    positive_reviews: int = 0
    neutral_reviews: int = 0
    negative_reviews: int = 0
    responses_from_owner: int = 0
    response_rate: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalReviews": self.total_reviews,
            "avgRating": self.avg_rating,
            "positiveReviews": self.positive_reviews,
            "neutralReviews": self.neutral_reviews,
            "negativeReviews": self.negative_reviews,
            "responsesFromOwner": self.responses_from_owner,
            "responseRate": self.response_rate,
        }


@dataclass
class ThemeAnalysis:
    """
    A theme and the reviews that mention it.

    theme is the grouping key itself (trimmed, lower-cased).
    review_indices point into the original input sequence.
    """
    theme: str
    count: int
    average_sentiment: float  # -1 to 1
    review_indices: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "theme": self.theme,
            "count": self.count,
            "averageSentiment": self.average_sentiment,
            "reviewIndices": list(self.review_indices),
        }


@dataclass
class StaffMention:
    """A staff member and the reviews that mention them."""
    name: str
    count: int
    average_sentiment: float  # -1 to 1
    review_indices: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "averageSentiment": self.average_sentiment,
            "reviewIndices": list(self.review_indices),
        }


@dataclass
class MonthlySentiment:
    month: str  # YYYY-MM
    sentiment: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "sentiment": self.sentiment, "count": self.count}


@dataclass
class ThemeSentiment:
    theme: str
    sentiment: float

    def to_dict(self) -> Dict[str, Any]:
        return {"theme": self.theme, "sentiment": self.sentiment}


@dataclass
class SentimentAnalysis:
    overall: float = 0.0  # -1 to 1
    by_month: List[MonthlySentiment] = field(default_factory=list)
    by_theme: List[ThemeSentiment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "byMonth": [m.to_dict() for m in self.by_month],
            "byTheme": [t.to_dict() for t in self.by_theme],
        }


@dataclass
class MonthlyRating:
    month: str  # YYYY-MM
    avg_rating: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "avgRating": self.avg_rating, "count": self.count}


@dataclass
class ThemeCount:
    theme: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"theme": self.theme, "count": self.count}


@dataclass
class MonthlyThemes:
    """Top themes for one month."""
    month: str  # YYYY-MM
    themes: List[ThemeCount] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "themes": [t.to_dict() for t in self.themes]}


@dataclass
class TrendData:
    rating_trend: List[MonthlyRating] = field(default_factory=list)
    theme_trend: List[MonthlyThemes] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ratingTrend": [r.to_dict() for r in self.rating_trend],
            "themeTrend": [t.to_dict() for t in self.theme_trend],
        }


@dataclass
class AnalysisData:
    """
    Full analysis of a review set.
    The reviews list is the engine input, passed through in its original order.
    """
    reviews: List[Review]
    metrics: ReviewMetrics
    themes: List[ThemeAnalysis]
    sentiment: SentimentAnalysis
    staff_mentions: List[StaffMention]
    trends: TrendData

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "reviews": [r.to_dict() for r in self.reviews],
            "metrics": self.metrics.to_dict(),
            "themes": [t.to_dict() for t in self.themes],
            "sentiment": self.sentiment.to_dict(),
            "staffMentions": [s.to_dict() for s in self.staff_mentions],
            "trends": self.trends.to_dict(),
        }
