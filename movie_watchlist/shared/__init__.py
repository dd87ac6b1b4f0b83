"""Shared utilities: subscription handles, datetime helpers, logging.

Used by domain, application, and infrastructure. No business logic.
"""

from movie_watchlist.shared.subscription import Subscription
from movie_watchlist.shared.utils import (
    ensure_utc,
    from_timestamp_utc,
    utc_now,
)

__all__ = [
    "Subscription",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
]
