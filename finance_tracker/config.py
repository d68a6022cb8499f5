"""Configuration defaults for the finance tracker engine.

Every engine function takes its window sizes and limits as explicit
arguments; the values below are only the defaults those arguments fall
back to.  They are fixed constants so the same call always gives the same
result; callers wanting other values pass them explicitly.
"""

from __future__ import annotations

from typing import Dict

# Monthly trend chart: current month plus five prior months
DEFAULT_WINDOW_MONTHS = 6

# Trailing window for the category breakdown
DEFAULT_WINDOW_DAYS = 30

# Result sizes for the dashboard widgets
DEFAULT_TOP_CATEGORIES = 5
DEFAULT_UPCOMING_LIMIT = 5
DEFAULT_RECENT_LIMIT = 5


def get_engine_defaults() -> Dict[str, int]:
    """Return the defaults keyed by engine argument name."""
    return {
        'window_months': DEFAULT_WINDOW_MONTHS,
        'window_days': DEFAULT_WINDOW_DAYS,
        'top_categories': DEFAULT_TOP_CATEGORIES,
        'upcoming_limit': DEFAULT_UPCOMING_LIMIT,
        'recent_limit': DEFAULT_RECENT_LIMIT,
    }
