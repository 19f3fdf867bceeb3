"""
Recommendation Agent.

Turns an AnalysisData summary into five lists of business recommendations
using a text-generation model. Provider, key and model are passed per call
in a RecommendationConfig.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

import google.generativeai as genai

from reviewpulse.models.analysis import AnalysisData
from reviewpulse.models.business import business_context
from reviewpulse.models.recommendation import (
    CATEGORY_FIELDS,
    DEFAULT_RECOMMENDATIONS,
    RecommendationResponse,
)

logger = logging.getLogger(__name__)

GEMINI_PROVIDER = "gemini"
DEFAULT_PROVIDER = "default"
PROVIDERS = (GEMINI_PROVIDER, DEFAULT_PROVIDER)


SYSTEM_PROMPT = """You are an expert business consultant for small hospitality and arts venues.

You receive aggregated customer review analytics and return strategic recommendations.

Rules:
- Ground every recommendation in the metrics, themes and staff mentions provided
- Give 3 concise, actionable items per category
- Do not invent numbers that are not in the data

Output valid JSON only."""


class RecommendationError(RuntimeError):
    """Raised when a provider cannot produce recommendations."""


@dataclass(frozen=True)
class RecommendationConfig:
    """
    Request-scoped recommendation settings.

    fallback_provider is used when the primary provider fails; None
    propagates the failure instead.
    """
    provider: str = GEMINI_PROVIDER
    api_key: Optional[str] = None
    model_name: str = "gemini-1.5-flash"
    temperature: float = 0.7
    max_retries: int = 3
    fallback_provider: Optional[str] = None

    def __post_init__(self):
        if self.provider not in PROVIDERS:
            raise ValueError(f"Invalid provider: {self.provider}. Must be one of {PROVIDERS}")
        if self.fallback_provider is not None and self.fallback_provider not in PROVIDERS:
            raise ValueError(
                f"Invalid fallback provider: {self.fallback_provider}. Must be one of {PROVIDERS}"
            )
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")


def _percent(part: int, total: int) -> str:
    return f"{(part / total * 100):.0f}%" if total else "0%"


def build_prompt(analysis: AnalysisData, business_type) -> str:
    """
    Construct the recommendation prompt from analysis data.

    Args:
        analysis: Engine output
        business_type: BusinessType (or its string value)

    Returns:
        Prompt text asking for the five categories as JSON
    """
    metrics = analysis.metrics
    total = metrics.total_reviews

    top_themes = [
        f"{t.theme} (mentioned {t.count} times, sentiment: {t.average_sentiment:.2f})"
        for t in analysis.themes[:5]
    ] or ["No recurring themes"]

    staff_info = [
        f"{s.name} (mentioned {s.count} times, sentiment: {s.average_sentiment:.2f})"
        for s in analysis.staff_mentions[:3]
    ] or ["No staff specifically mentioned"]

    themes_text = "\n".join(top_themes)
    staff_text = "\n".join(staff_info)

    return f"""Based on the following customer review data for {business_context(business_type)},
provide strategic recommendations in these categories: urgent actions, growth strategies, marketing ideas,
competitive positioning, and future scenarios.

REVIEW METRICS:
Total reviews: {total}
Average rating: {metrics.avg_rating:.1f}/5
Positive reviews: {metrics.positive_reviews} ({_percent(metrics.positive_reviews, total)})
Neutral reviews: {metrics.neutral_reviews} ({_percent(metrics.neutral_reviews, total)})
Negative reviews: {metrics.negative_reviews} ({_percent(metrics.negative_reviews, total)})
Owner response rate: {metrics.response_rate * 100:.0f}%
Overall sentiment: {analysis.sentiment.overall:.2f} (-1 to 1 scale)

TOP THEMES:
{themes_text}

STAFF MENTIONS:
{staff_text}

Please provide recommendations in this JSON format:
{{
  "urgentActions": ["action 1", "action 2", "action 3"],
  "growthStrategies": ["strategy 1", "strategy 2", "strategy 3"],
  "marketingIdeas": ["idea 1", "idea 2", "idea 3"],
  "competitivePositioning": ["position 1", "position 2", "position 3"],
  "futureScenarios": ["scenario 1", "scenario 2", "scenario 3"]
}}"""


def parse_recommendation_text(text: str) -> RecommendationResponse:
    """
    Parse model output into recommendations.

    Tries the first {...} block as JSON, then falls back to pattern
    matching each category section. Never raises; unparsable text yields
    empty lists.
    """
    if not text:
        return RecommendationResponse()

    json_match = re.search(r"\{[\s\S]*\}", text)
    if json_match:
        try:
            data = json.loads(json_match.group(0))
            if isinstance(data, dict):
                return RecommendationResponse.from_dict(data)
        except json.JSONDecodeError as e:
            logger.debug(f"Recommendation JSON block did not decode, using text fallback: {e}")

    return _parse_sections(text)


def _parse_sections(text: str) -> RecommendationResponse:
    keys = list(CATEGORY_FIELDS)
    values: Dict[str, List[str]] = {}

    for key, field_name in CATEGORY_FIELDS.items():
        others = "|".join(k for k in keys if k != key)
        pattern = rf"{key}[\"']?[:\[\s]+([\s\S]*?)(?={others}|\]|\}}|$)"
        match = re.search(pattern, text, re.IGNORECASE)
        values[field_name] = _extract_items(match.group(1)) if match else []

    return RecommendationResponse(**values)


def _extract_items(section: str) -> List[str]:
    """Pull quoted, numbered or bulleted items out of a section."""
    items = []
    for match in re.finditer(r'"([^"]+)"|(\d+\.\s*[^,\n]+)|([-•]\s*[^,\n]+)', section):
        item = match.group(1) or match.group(2) or match.group(3)
        item = re.sub(r'^[-•\d."\s]+|"+$', "", item.strip())
        if item:
            items.append(item)

    if items:
        return items

    lines = [re.sub(r'^[-"\s]+|"+$', "", line.strip()) for line in re.split(r"[,\n]+", section)]
    return [line for line in lines if line and not line.isdigit()]


class GeminiRecommendationGenerator:
    """
    Generates recommendations with Gemini.

    Uses JSON response mode; falls back to text parsing when the model
    returns prose anyway.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.7,
        max_retries: int = 3
    ):
        """
        Initialize Gemini generator.

        Args:
            api_key: Gemini API key
            model_name: Gemini model to use
            temperature: Sampling temperature
            max_retries: Number of attempts before giving up

        Raises:
            ValueError: If no API key is provided
        """
        if not api_key:
            raise ValueError("API key is required for Gemini recommendations")

        self.model_name = model_name
        self.temperature = temperature
        self.max_retries = max_retries

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=model_name,
            generation_config={
                "temperature": temperature,
                "response_mime_type": "application/json"
            },
            system_instruction=SYSTEM_PROMPT
        )

        logger.info(f"Initialized GeminiRecommendationGenerator with model={model_name}, temp={temperature}")

    def generate(self, analysis: AnalysisData, business_type) -> RecommendationResponse:
        """
        Generate recommendations.

        Raises:
            RecommendationError: If every attempt fails or yields nothing usable
        """
        prompt = build_prompt(analysis, business_type)
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                response = self.model.generate_content(prompt)
                recommendations = parse_recommendation_text(response.text)
                if recommendations.is_empty():
                    raise RecommendationError("Model response contained no recommendations")

                logger.debug(f"Generated recommendations on attempt {attempt + 1}")
                return recommendations

            except Exception as e:
                last_error = e
                logger.error(f"Gemini recommendation error (attempt {attempt + 1}): {e}")

        logger.warning(f"Max retries reached for {self.model_name} recommendations")
        raise RecommendationError(f"Gemini recommendations failed: {last_error}") from last_error


class DefaultRecommendationGenerator:
    """Offline provider returning generic recommendations."""

    def generate(self, analysis: AnalysisData, business_type) -> RecommendationResponse:
        return RecommendationResponse.from_dict(DEFAULT_RECOMMENDATIONS)


class RecommendationAgent:
    """Dispatches recommendation requests to the configured provider."""

    def generate_recommendations(
        self,
        analysis: AnalysisData,
        business_type,
        config: RecommendationConfig
    ) -> RecommendationResponse:
        """
        Generate recommendations for one analysis.

        Args:
            analysis: Engine output
            business_type: BusinessType of the reviewed venue
            config: Provider settings for this request

        Returns:
            RecommendationResponse from the primary or fallback provider

        Raises:
            RecommendationError: If the primary fails and no fallback is set
            ValueError: If the provider needs an API key that is missing
        """
        try:
            return self._build_generator(config.provider, config).generate(analysis, business_type)
        except (RecommendationError, ValueError) as e:
            if not config.fallback_provider or config.fallback_provider == config.provider:
                raise
            logger.warning(f"{config.provider} provider failed ({e}), falling back to {config.fallback_provider}")
            return self._build_generator(config.fallback_provider, config).generate(analysis, business_type)

    def _build_generator(self, provider: str, config: RecommendationConfig):
        if provider == GEMINI_PROVIDER:
            return GeminiRecommendationGenerator(
                api_key=config.api_key,
                model_name=config.model_name,
                temperature=config.temperature,
                max_retries=config.max_retries
            )
        return DefaultRecommendationGenerator()
