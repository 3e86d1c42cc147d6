"""
Talent Match - listing recommendation engine for talent profiles.

Scores every published store listing against a talent's profile along
weighted dimensions and returns a ranked, explainable match list.
"""

__app_name__ = "talent-match"
__version__ = "0.1.0"
