"""Tests for the Subscription cancellation handle."""

from unittest.mock import MagicMock

from movie_watchlist.shared.subscription import Subscription


def test_cancel_releases_once() -> None:
    """cancel() calls the release function exactly once."""
    release = MagicMock()
    sub = Subscription(release, name="test")
    sub.cancel()
    sub.cancel()
    release.assert_called_once_with()
    assert sub.cancelled


def test_inert_is_already_cancelled() -> None:
    sub = Subscription.inert("nothing")
    assert sub.cancelled
    sub.cancel()


def test_context_manager_cancels_on_exit() -> None:
    release = MagicMock()
    with Subscription(release) as sub:
        assert not sub.cancelled
    release.assert_called_once_with()
    assert sub.cancelled


def test_repr_shows_state() -> None:
    sub = Subscription(name="collection:users/u1/movies")
    assert "active" in repr(sub)
    sub.cancel()
    assert "cancelled" in repr(sub)
