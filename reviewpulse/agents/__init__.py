"""
Agent implementations for ReviewPulse.

Collaborators around the analytics engine:
- Ingestion Agent
- Recommendation Agent
"""
