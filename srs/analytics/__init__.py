"""
Analytics package exports.
"""

from srs.analytics.forecast import build_forecast_index, upcoming_review_counts

__all__ = [
    "build_forecast_index",
    "upcoming_review_counts",
]
