"""
Core business logic for talent-match.

Submodules:
- exceptions: Error taxonomy
- matching: Scoring, weighting and ranking of store listings
"""
