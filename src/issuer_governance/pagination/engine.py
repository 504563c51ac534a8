from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

from issuer_governance.errors import QueryError
from issuer_governance.observability.logging import get_logger

T = TypeVar("T")

Cursor = str


class Direction(StrEnum):
    FORWARD = "forward"
    BACKWARD = "backward"


class PageStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(slots=True, frozen=True)
class PageRequest:
    cursor: Cursor | None = None
    direction: Direction = Direction.FORWARD
    page_size: int | None = None
    refresh: bool = False


@dataclass(slots=True)
class NavigationState:
    current: Cursor | None = None
    history: list[Cursor | None] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class PageView(Generic[T]):
    status: PageStatus
    items: tuple[T, ...]
    current: Cursor | None
    history: tuple[Cursor | None, ...]
    next_cursor_candidate: Cursor | None
    can_go_back: bool
    can_go_forward: bool
    end_of_list: bool = False
    error: str | None = None


PageFetcher = Callable[[PageRequest], Awaitable[Sequence[T]]]
ItemKey = Callable[[T], Cursor]


@dataclass(slots=True, frozen=True)
class _Pending(Generic[T]):
    generation: int
    request: PageRequest
    inflight: asyncio.Future[Sequence[T]]


class CursorPaginator(Generic[T]):
    """Client-side history over a remote list that only pages forward.

    Each page is requested with the key of the last item seen (the cursor).
    Cursors used to reach the current page are kept on a stack, so going back
    re-requests the exact earlier page instead of approximating it.

    Navigation moves when a request is issued, so overlapping clicks end on
    the same cursor and history as the same clicks made one at a time. A Next
    issued while a page is loading waits for it, since the cursor it needs is
    the last key of that page. If the latest request fails, or an advance hits
    the end of the list, navigation returns to the page on display. Responses
    to superseded requests, and anything arriving after ``close()``, are
    discarded.
    """

    def __init__(
        self,
        fetch_page: PageFetcher[T],
        item_key: ItemKey[T],
        *,
        page_size: int | None = None,
        name: str = "list",
    ) -> None:
        self._fetch_page = fetch_page
        self._item_key = item_key
        self._page_size = page_size
        self._name = name

        self._navigation = NavigationState()
        self._shown = NavigationState()
        self._status = PageStatus.IDLE
        self._items: tuple[T, ...] = ()
        self._next_candidate: Cursor | None = None
        self._empty_cursor: Cursor | None = None
        self._end_of_list = False
        self._has_page = False
        self._error: str | None = None

        self._generation = 0
        self._inflight: asyncio.Future[Sequence[T]] | None = None
        self._lock = asyncio.Lock()
        self._settled = asyncio.Event()
        self._settled.set()
        self._closed = False
        self._logger = get_logger("pagination")

    @property
    def status(self) -> PageStatus:
        return self._status

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def current(self) -> Cursor | None:
        return self._navigation.current

    @property
    def history(self) -> tuple[Cursor | None, ...]:
        return tuple(self._navigation.history)

    @property
    def can_go_back(self) -> bool:
        return bool(self._navigation.history) and not self._closed

    @property
    def can_go_forward(self) -> bool:
        return self._has_page and not self._closed

    @property
    def closed(self) -> bool:
        return self._closed

    def view(self) -> PageView[T]:
        return PageView(
            status=self._status,
            items=self._items,
            current=self._navigation.current,
            history=tuple(self._navigation.history),
            next_cursor_candidate=self._next_candidate,
            can_go_back=self.can_go_back,
            can_go_forward=self.can_go_forward,
            end_of_list=self._end_of_list,
            error=self._error,
        )

    async def load(self) -> PageView[T]:
        """Fetch the page at the current cursor (the first page when idle)."""
        async with self._lock:
            if self._closed:
                return self.view()
            pending = self._start(PageRequest(cursor=self._navigation.current, page_size=self._page_size))
        return await self._finish(pending)

    async def refresh(self) -> PageView[T]:
        """Re-read the current page, bypassing cached data, after a mutation."""
        async with self._lock:
            if self._closed:
                return self.view()
            pending = self._start(
                PageRequest(cursor=self._navigation.current, page_size=self._page_size, refresh=True)
            )
        return await self._finish(pending)

    async def next(self) -> PageView[T]:
        async with self._lock:
            while self._status is PageStatus.LOADING and not self._closed:
                await self._settled.wait()
            if not self.can_go_forward:
                return self.view()

            if self._next_candidate is None:
                # The shown page is empty: ask for the same page again.
                cursor = self._empty_cursor
                refresh = True
            else:
                cursor = self._next_candidate
                refresh = False

            if cursor != self._navigation.current:
                self._navigation.history.append(self._navigation.current)
                self._navigation.current = cursor
            pending = self._start(PageRequest(cursor=cursor, page_size=self._page_size, refresh=refresh))
        return await self._finish(pending, advancing=True)

    async def previous(self) -> PageView[T]:
        async with self._lock:
            if not self.can_go_back:
                return self.view()
            cursor = self._navigation.history.pop()
            self._navigation.current = cursor
            pending = self._start(
                PageRequest(cursor=cursor, direction=Direction.BACKWARD, page_size=self._page_size)
            )
        return await self._finish(pending)

    def close(self) -> None:
        """Stop the view; an in-flight response is dropped when it arrives."""
        self._closed = True
        self._generation += 1
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None
        self._settled.set()

    def _start(self, request: PageRequest) -> _Pending[T]:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        self._generation += 1
        self._status = PageStatus.LOADING
        self._settled.clear()
        self._logger.debug(
            "page_requested",
            view=self._name,
            cursor=request.cursor,
            direction=request.direction.value,
            refresh=request.refresh,
        )
        inflight = asyncio.ensure_future(self._fetch_page(request))
        self._inflight = inflight
        return _Pending(self._generation, request, inflight)

    async def _finish(self, pending: _Pending[T], *, advancing: bool = False) -> PageView[T]:
        try:
            items = tuple(await pending.inflight)
        except asyncio.CancelledError:
            if pending.generation != self._generation:
                return self.view()
            self._restore_shown()
            self._status = PageStatus.LOADED if self._has_page else PageStatus.IDLE
            self._settled.set()
            raise
        except QueryError as exc:
            return self._fail(pending, exc.message)
        finally:
            if self._inflight is pending.inflight:
                self._inflight = None

        if pending.generation != self._generation:
            self._logger.info("stale_page_discarded", view=self._name, cursor=pending.request.cursor)
            return self.view()

        try:
            candidate = self._item_key(items[-1]) if items else None
        except (KeyError, TypeError, ValueError) as exc:
            return self._fail(pending, f"malformed {self._name} item: {exc!r}")

        if not items and advancing:
            self._logger.info(
                "end_of_list",
                view=self._name,
                cursor=pending.request.cursor,
                current=self._shown.current,
            )
            self._restore_shown()
        if not items:
            self._empty_cursor = pending.request.cursor

        self._items = items
        self._next_candidate = candidate
        self._end_of_list = not items
        self._shown = NavigationState(self._navigation.current, list(self._navigation.history))
        self._status = PageStatus.LOADED
        self._has_page = True
        self._error = None
        self._settled.set()
        self._logger.debug(
            "page_loaded",
            view=self._name,
            cursor=self._navigation.current,
            item_count=len(items),
            depth=len(self._navigation.history),
        )
        return self.view()

    def _fail(self, pending: _Pending[T], error: str) -> PageView[T]:
        if pending.generation != self._generation:
            return self.view()
        self._restore_shown()
        self._status = PageStatus.ERRORED
        self._error = error
        self._settled.set()
        self._logger.warning(
            "page_failed",
            view=self._name,
            cursor=pending.request.cursor,
            error=error,
        )
        return self.view()

    def _restore_shown(self) -> None:
        self._navigation = NavigationState(self._shown.current, list(self._shown.history))
