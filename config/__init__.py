"""
Configuration package for ReviewPulse.
"""
