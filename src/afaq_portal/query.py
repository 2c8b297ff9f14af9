"""Query cache keyed by resource path, with in-flight request sharing.

Every read goes through :meth:`QueryCache.query`. Callers asking for the same
key while a request is in flight join that request instead of issuing a new
one, and a settled entry is served from the cache until it is invalidated.
Writes (form submissions, uploads) go through :meth:`QueryCache.mutate` and
are never cached.

The cache does not act on errors: a failed fetch is stored on the entry and
handed back to the caller, which decides whether to redirect or show a toast.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

QueryKey = tuple[str, ...]
Fetcher = Callable[[], Awaitable[Any]]


def make_key(*parts: Any) -> QueryKey:
    """Build a query key from path segments, skipping ``None`` parts."""
    return tuple(str(part) for part in parts if part is not None)


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class CachedQuery:
    """Cache entry for one query key."""

    key: QueryKey
    data: Any = None
    error: Optional[BaseException] = None
    fetched_at: Optional[datetime] = None
    state: QueryStatus = QueryStatus.IDLE
    task: Optional["asyncio.Task[None]"] = field(default=None, repr=False)


@dataclass(frozen=True)
class QueryResult:
    """What a consumer sees of a query at one point in time."""

    data: Any = None
    error: Optional[BaseException] = None
    is_loading: bool = False
    status: QueryStatus = QueryStatus.IDLE

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR


class QueryCache:
    """In-memory cache of query results shared by every page."""

    def __init__(self) -> None:
        self._entries: dict[QueryKey, CachedQuery] = {}

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def entry(self, key: QueryKey) -> Optional[CachedQuery]:
        return self._entries.get(key)

    def peek(self, key: QueryKey) -> QueryResult:
        """Return the current snapshot for ``key`` without fetching."""
        return self._snapshot(self._entries.get(key))

    async def query(
        self,
        key: QueryKey,
        fetcher: Fetcher,
        *,
        enabled: bool = True,
    ) -> QueryResult:
        """Resolve ``key``, fetching it at most once.

        Args:
            key: Query key (tuple of path segments)
            fetcher: Coroutine function performing the request
            enabled: When False the fetcher is never called and the current
                snapshot is returned as-is

        Returns:
            QueryResult with the data or the captured error
        """
        entry = self._entries.get(key)
        if not enabled:
            return self._snapshot(entry)

        if entry is None or entry.state is QueryStatus.IDLE:
            entry = self._start(key, fetcher)

        task = entry.task
        if task is not None:
            # Shielded so one consumer going away does not cancel the fetch
            # for the others.
            await asyncio.shield(task)
        return self._snapshot(entry)

    async def refetch(self, key: QueryKey, fetcher: Fetcher) -> QueryResult:
        """Drop ``key`` and fetch it again, whatever state it was in."""
        self.invalidate(key)
        return await self.query(key, fetcher)

    def invalidate(self, prefix: QueryKey = ()) -> int:
        """Drop every entry whose key starts with ``prefix``.

        In-flight requests are detached rather than cancelled: when they
        complete they update only their own detached entry, so they can never
        overwrite data fetched after the invalidation.

        Returns:
            Number of entries dropped
        """
        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Invalidated %d queries under %s", len(stale), prefix)
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    async def mutate(self, fetcher: Callable[[], Awaitable[T]]) -> T:
        """Run a write-style request: never cached, never shared."""
        return await fetcher()

    def _start(self, key: QueryKey, fetcher: Fetcher) -> CachedQuery:
        entry = CachedQuery(key=key, state=QueryStatus.LOADING)
        self._entries[key] = entry
        entry.task = asyncio.get_running_loop().create_task(self._run(entry, fetcher))
        return entry

    async def _run(self, entry: CachedQuery, fetcher: Fetcher) -> None:
        try:
            data = await fetcher()
        except asyncio.CancelledError:
            entry.state = QueryStatus.IDLE
            raise
        except Exception as e:
            logger.info("Query %s failed: %s", "/".join(entry.key), e)
            entry.error = e
            entry.state = QueryStatus.ERROR
        else:
            entry.data = data
            entry.error = None
            entry.state = QueryStatus.SUCCESS
        finally:
            entry.fetched_at = datetime.now()
            entry.task = None

    @staticmethod
    def _snapshot(entry: Optional[CachedQuery]) -> QueryResult:
        if entry is None:
            return QueryResult()
        return QueryResult(
            data=entry.data,
            error=entry.error,
            is_loading=entry.state is QueryStatus.LOADING,
            status=entry.state,
        )
