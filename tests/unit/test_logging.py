"""Tests for logging setup."""

import logging

from movie_watchlist.shared.logging import setup_logging


def test_setup_logging_quiets_httpx_request_lines() -> None:
    """Request URLs carry the catalog API key, so httpx INFO lines are suppressed."""
    setup_logging()
    assert logging.getLogger("httpx").getEffectiveLevel() == logging.WARNING
