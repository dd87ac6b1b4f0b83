"""Home screen view model: session-driven navigation, tabs, results and lists.

Owns the live saved-movies subscription for the signed-in identity: it is
opened when an identity appears and cancelled exactly once when the identity
changes or the view closes. Catalog requests are cancel-on-supersede: a new
search or popular request cancels the one still in flight, so only the latest
request writes the results.

Every command catches collaborator errors and returns (and records) a Notice;
nothing raised by a collaborator escapes to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from movie_watchlist.application.dtos.identity import Identity, Session
from movie_watchlist.application.dtos.movie import CatalogEntry, MovieUpsert, SavedMovie
from movie_watchlist.application.dtos.notice import DeletionOutcome, Notice
from movie_watchlist.application.interfaces.gateways import ICatalogClient, IIdentityGateway
from movie_watchlist.application.interfaces.services import IDeletionPrompter
from movie_watchlist.application.services.account_deletion import AccountDeletionWorkflow
from movie_watchlist.application.services.session_controller import SessionController
from movie_watchlist.application.services.watchlist_service import WatchlistService
from movie_watchlist.application.use_cases.notices import notice_from_error
from movie_watchlist.domain.enums import AuthErrorReason, DeletionState, ResultsTab, WatchStatus
from movie_watchlist.domain.exceptions import (
    AuthError,
    StoreError,
    ValidationException,
    WatchlistException,
)
from movie_watchlist.shared.subscription import Subscription

logger = logging.getLogger(__name__)

ViewListener = Callable[[str], None]

# Change events delivered to view listeners
EVENT_SESSION = "session"
EVENT_MOVIES = "movies"
EVENT_RESULTS = "results"

_MAX_NOTICES = 20


@dataclass(frozen=True)
class MovieRow:
    """One row of a tab: catalog or saved data merged with the saved status."""

    id: str
    title: str
    year: int | None
    poster_url: str | None
    status: WatchStatus | None


class HomeViewModel:
    """State and commands of the main screen."""

    def __init__(
        self,
        session: SessionController,
        gateway: IIdentityGateway,
        watchlist: WatchlistService,
        catalog: ICatalogClient,
        deletion: AccountDeletionWorkflow,
    ) -> None:
        self._session = session
        self._gateway = gateway
        self._watchlist = watchlist
        self._catalog = catalog
        self._deletion = deletion
        self.tab = ResultsTab.SEARCH
        self.results: list[CatalogEntry] = []
        self.saved: list[SavedMovie] = []
        self.notices: list[Notice] = []
        self.query = ""
        self._list_subscription: Subscription | None = None
        self._list_owner: str | None = None
        self._session_subscription: Subscription | None = None
        self._catalog_task: asyncio.Task[list[CatalogEntry]] | None = None
        self._listeners: list[ViewListener] = []

    # ---- Scope ----

    def open(self) -> None:
        """Follow the session; call on the event loop when the view becomes active."""
        if self._session_subscription is not None:
            return
        self._session_subscription = self._session.subscribe(self._on_session)
        self._on_session(self._session.state)

    def close(self) -> None:
        """Release every listener and cancel any in-flight catalog request."""
        if self._session_subscription is not None:
            self._session_subscription.cancel()
            self._session_subscription = None
        self._release_list()
        if self._catalog_task is not None and not self._catalog_task.done():
            self._catalog_task.cancel()
        self._catalog_task = None

    def subscribe(self, listener: ViewListener) -> Subscription:
        """listener(event) is called after session, movies or results change."""
        self._listeners.append(listener)

        def release() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(release, name="home-view")

    def _changed(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ---- Session / navigation ----

    @property
    def session(self) -> Session:
        return self._session.state

    @property
    def identity(self) -> Identity | None:
        return self._session.state.identity

    @property
    def route(self) -> str | None:
        """'login' or 'home' by session; None while the session is loading."""
        state = self._session.state
        if state.loading:
            return None
        return "home" if state.identity else "login"

    def _on_session(self, session: Session) -> None:
        uid = session.identity.uid if session.identity else None
        if uid != self._list_owner:
            self._release_list()
            self.saved = []
            if uid is None:
                self.results = []
                self.query = ""
                self.tab = ResultsTab.SEARCH
            else:
                self._list_owner = uid
                self._list_subscription = self._watchlist.subscribe(
                    uid, self._on_saved, self._on_store_error
                )
                logger.debug("Saved-movies subscription opened for uid=%s", uid)
        self._changed(EVENT_SESSION)

    def _release_list(self) -> None:
        if self._list_subscription is not None:
            self._list_subscription.cancel()
            self._list_subscription = None
        self._list_owner = None

    def _on_saved(self, movies: list[SavedMovie]) -> None:
        self.saved = movies
        self._changed(EVENT_MOVIES)

    def _on_store_error(self, exc: StoreError) -> None:
        self._record(notice_from_error(exc, "Your lists could not be loaded."))

    # ---- Notices ----

    def _record(self, notice: Notice) -> Notice:
        self.notices.append(notice)
        del self.notices[:-_MAX_NOTICES]
        return notice

    def dismiss_notices(self) -> None:
        self.notices.clear()

    # ---- Tabs / rows ----

    def select_tab(self, tab: ResultsTab) -> None:
        self.tab = tab

    def status_of(self, movie_id: str | int) -> WatchStatus | None:
        key = str(movie_id)
        for movie in self.saved:
            if movie.id == key:
                return movie.status
        return None

    def saved_with_status(self, status: WatchStatus) -> list[SavedMovie]:
        return [m for m in self.saved if m.status is status]

    def rows(self, tab: ResultsTab | None = None) -> list[MovieRow]:
        """Rows of a tab: search results annotated with saved status, or a saved list."""
        tab = tab or self.tab
        if tab is ResultsTab.SEARCH:
            statuses = {m.id: m.status for m in self.saved}
            return [
                MovieRow(
                    id=str(entry.id),
                    title=entry.title,
                    year=entry.release_year,
                    poster_url=self._catalog.poster_url(entry.poster_path),
                    status=statuses.get(str(entry.id)),
                )
                for entry in self.results
            ]
        status = WatchStatus.TO_WATCH if tab is ResultsTab.TO_WATCH else WatchStatus.WATCHED
        return [
            MovieRow(
                id=movie.id,
                title=movie.title,
                year=movie.year,
                poster_url=self._catalog.poster_url(movie.poster_path),
                status=movie.status,
            )
            for movie in self.saved_with_status(status)
        ]

    # ---- Catalog commands ----

    async def search(self, term: str) -> Notice | None:
        """Run a search; supersedes any catalog request still in flight."""
        self.query = term
        self.tab = ResultsTab.SEARCH
        return await self._load_results(
            lambda: self._catalog.search(term), "Search failed. Please try again."
        )

    async def load_popular(self) -> Notice | None:
        """Load the popular listing; supersedes any catalog request still in flight."""
        self.query = ""
        return await self._load_results(
            self._catalog.list_popular, "Could not load popular movies. Please try again."
        )

    async def _load_results(
        self,
        request: Callable[[], Awaitable[list[CatalogEntry]]],
        failure_message: str,
    ) -> Notice | None:
        previous = self._catalog_task
        if previous is not None and not previous.done():
            previous.cancel()
            logger.debug("Superseded catalog request cancelled")

        async def run() -> list[CatalogEntry]:
            return await request()

        task = asyncio.ensure_future(run())
        self._catalog_task = task
        try:
            entries = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if task is not self._catalog_task and (current is None or not current.cancelling()):
                return None
            raise
        except WatchlistException as exc:
            if task is self._catalog_task:
                self._catalog_task = None
            return self._record(notice_from_error(exc, failure_message))
        if task is not self._catalog_task:
            return None
        self._catalog_task = None
        self.results = entries
        self._changed(EVENT_RESULTS)
        return None

    # ---- List commands ----

    def _require_uid(self) -> str:
        identity = self.identity
        if identity is None:
            raise AuthError("You are not signed in.", AuthErrorReason.NOT_SIGNED_IN)
        return identity.uid

    async def save(self, entry: CatalogEntry, status: WatchStatus) -> Notice | None:
        """Add a catalog entry to a list (or move it if already saved)."""
        existing = next((m for m in self.saved if m.id == str(entry.id)), None)
        movie = MovieUpsert.from_entry(entry, status)
        if existing is not None:
            movie = MovieUpsert(
                id=movie.id,
                title=movie.title,
                status=status,
                year=movie.year,
                poster_path=movie.poster_path,
                created_at=existing.created_at,
            )
        return await self._run_list_command(
            lambda uid: self._watchlist.upsert(uid, movie),
            "Could not save the movie. Please try again.",
        )

    async def set_status(self, movie_id: str, status: WatchStatus) -> Notice | None:
        """Move a saved movie to the other list."""
        existing = next((m for m in self.saved if m.id == str(movie_id)), None)
        if existing is None:
            error = ValidationException("That movie is not in your lists.", field="movie_id")
            return self._record(notice_from_error(error))
        movie = MovieUpsert(
            id=existing.id,
            title=existing.title,
            status=status,
            year=existing.year,
            poster_path=existing.poster_path,
            created_at=existing.created_at,
        )
        return await self._run_list_command(
            lambda uid: self._watchlist.upsert(uid, movie),
            "Could not move the movie. Please try again.",
        )

    async def remove(self, movie_id: str) -> Notice | None:
        return await self._run_list_command(
            lambda uid: self._watchlist.remove(uid, movie_id),
            "Could not remove the movie. Please try again.",
        )

    async def _run_list_command(
        self,
        command: Callable[[str], Awaitable[None]],
        failure_message: str,
    ) -> Notice | None:
        try:
            await command(self._require_uid())
        except WatchlistException as exc:
            logger.warning("List command failed: %s", exc.message)
            return self._record(notice_from_error(exc, failure_message))
        return None

    # ---- Account commands ----

    async def sign_out(self) -> Notice | None:
        try:
            await self._gateway.sign_out()
        except WatchlistException as exc:
            return self._record(notice_from_error(exc))
        return None

    async def delete_account(self, prompter: IDeletionPrompter) -> DeletionOutcome:
        """Run the deletion workflow for the signed-in identity."""
        identity = self.identity
        if identity is None:
            return self._refuse_deletion(
                AuthError("You are not signed in.", AuthErrorReason.NOT_SIGNED_IN)
            )
        if self._deletion.in_progress:
            # Another run owns the workflow state.
            return self._refuse_deletion(
                ValidationException("Account deletion is already in progress")
            )
        try:
            outcome = await self._deletion.run(identity, prompter)
        except WatchlistException as exc:
            notice = self._record(notice_from_error(exc))
            return DeletionOutcome(state=self._deletion.state, notice=notice)
        if outcome.notice is not None:
            self._record(outcome.notice)
        return outcome

    def _refuse_deletion(self, exc: WatchlistException) -> DeletionOutcome:
        return DeletionOutcome(state=DeletionState.IDLE, notice=self._record(notice_from_error(exc)))
