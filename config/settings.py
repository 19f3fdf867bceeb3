"""
Configuration settings for ReviewPulse.

Centralized configuration for the analytics engine, collaborators and CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# API Configuration
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")

# Recommendation generation
RECOMMENDATION_PROVIDER = "gemini"  # "gemini" or "default"
RECOMMENDATION_FALLBACK_PROVIDER = "default"  # None to fail hard
RECOMMENDATION_MODEL = "gemini-1.5-flash"
RECOMMENDATION_TEMPERATURE = 0.7
RECOMMENDATION_MAX_RETRIES = 3

# Analytics Engine
SENTIMENT_TOP_THEMES = 10  # Themes projected into sentiment.byTheme
TREND_TOP_THEMES_PER_MONTH = 5
STAFF_NAME_CASE_FOLD = False  # "Anna" and "anna" stay distinct when False

# Diagnostics
DATE_FILTER_WARNING_PERCENT = 95.0
DATE_FILTER_RECENT_MONTHS = 3

# Ingestion
DEFAULT_BUSINESS = "The Little Prince Cafe"
USE_MOCK_DATA = False  # Set to True to generate synthetic reviews
MOCK_REVIEWS_PER_BUSINESS = 60

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewpulse.log"
