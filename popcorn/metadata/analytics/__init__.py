"""
metadata.analytics
~~~~~~~~~~~~~~~~~~
Derived numbers shown in the watched-list summary.
"""

from popcorn.metadata.analytics.stats import average, summarize, format_stat, WatchedSummary

__all__ = ["average", "summarize", "format_stat", "WatchedSummary"]
