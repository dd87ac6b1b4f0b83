"""View models (use cases of the two screens) and notice conversion."""

from movie_watchlist.application.use_cases.home import HomeViewModel, MovieRow
from movie_watchlist.application.use_cases.login import LoginMode, LoginViewModel

__all__ = [
    "HomeViewModel",
    "LoginMode",
    "LoginViewModel",
    "MovieRow",
]
