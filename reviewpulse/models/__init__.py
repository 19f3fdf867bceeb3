"""
Data models for ReviewPulse.

- Review: raw input record
- Analysis: engine output (metrics, themes, sentiment, staff, trends)
- Business: venue catalogue
- Recommendation: categorized suggestion lists
"""
