"""
TMDB catalog client.
"""

from movie_watchlist.infrastructure.external.tmdb.client import (
    TmdbCatalogClient,
    normalize_results,
    poster_url,
)

__all__ = [
    "TmdbCatalogClient",
    "normalize_results",
    "poster_url",
]
