"""
Utility modules for ReviewPulse.

Cross-cutting concerns:
- Parsing: Tolerant decoding of review fields
- Diagnostics: Review set statistics and date-filtering checks
- Storage: File output for analysis, trends and recommendations
"""
