"""
Analytics passes for ReviewPulse.

Each pass derives one part of the analysis from the same review sequence:
- Metrics Aggregator
- Theme Extractor
- Sentiment Analyzer
- Staff Mention Extractor
- Trend Analyzer
"""
