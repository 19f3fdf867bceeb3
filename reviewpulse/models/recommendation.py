"""
Recommendation data model.

Five categorized lists of free-form suggestions returned by a
recommendation generator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

# camelCase key -> dataclass field
CATEGORY_FIELDS = {
    "urgentActions": "urgent_actions",
    "growthStrategies": "growth_strategies",
    "marketingIdeas": "marketing_ideas",
    "competitivePositioning": "competitive_positioning",
    "futureScenarios": "future_scenarios",
}


@dataclass
class RecommendationResponse:
    urgent_actions: List[str] = field(default_factory=list)
    growth_strategies: List[str] = field(default_factory=list)
    marketing_ideas: List[str] = field(default_factory=list)
    competitive_positioning: List[str] = field(default_factory=list)
    future_scenarios: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecommendationResponse":
        """
        Build from a model's JSON object.
        Missing categories become empty lists; non-string items are dropped.
        """
        values = {}
        for key, field_name in CATEGORY_FIELDS.items():
            items = data.get(key, data.get(field_name, []))
            if isinstance(items, str):
                items = [items]
            if not isinstance(items, list):
                items = []
            values[field_name] = [str(i).strip() for i in items if isinstance(i, (str, int, float)) and str(i).strip()]
        return cls(**values)

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(getattr(self, name)) for key, name in CATEGORY_FIELDS.items()}

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in CATEGORY_FIELDS.values())


# Generic suggestions used when no model output is usable
DEFAULT_RECOMMENDATIONS = {
    "urgentActions": ["Address customer service issues", "Improve response time to reviews"],
    "growthStrategies": ["Focus on core strengths", "Consider expanding popular offerings"],
    "marketingIdeas": ["Leverage positive reviews in social media", "Create loyalty program"],
    "competitivePositioning": ["Emphasize unique atmosphere", "Highlight quality of products/services"],
    "futureScenarios": ["Prepare for seasonal variations", "Explore potential partnerships"],
}
