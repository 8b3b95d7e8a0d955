"""
Feed Cache - degraded-mode fallback for the three feeds.

Every request still queries the store. The cache only answers when that
query fails, by returning the last successful result. It is never
invalidated and never used to skip a query.

Each cache holds one immutable FeedSnapshot; a successful fetch swaps in a
new snapshot object, so a reader always sees a whole value.
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from pymongo.errors import PyMongoError

from udyog_saathi.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FeedSnapshot:
    data: tuple
    fetched_at: float

    def as_list(self) -> List[dict]:
        return list(self.data)


class FeedUnavailable(Exception):
    """The store query failed and there is no snapshot to fall back on."""

    def __init__(self, feed: str, cause: Exception):
        super().__init__(f"{feed} feed unavailable: {cause}")
        self.feed = feed
        self.cause = cause


class FeedCache:

    def __init__(self, name: str):
        self.name = name
        self._snapshot: Optional[FeedSnapshot] = None

    @property
    def snapshot(self) -> Optional[FeedSnapshot]:
        return self._snapshot

    def fetch(self, loader: Callable[[], List[dict]]) -> List[dict]:
        """
        Run loader; on success remember the result, on store failure
        return the previous result if there is one.

        Raises:
            FeedUnavailable: the query failed and nothing was cached yet
        """
        started = time.monotonic()
        try:
            data = loader()
        except PyMongoError as e:
            snapshot = self._snapshot
            if snapshot is None:
                logger.error("%s query failed with no cached data: %s", self.name, e)
                raise FeedUnavailable(self.name, e) from e
            logger.warning(
                "%s query failed, returning data cached %.0fs ago: %s",
                self.name, time.time() - snapshot.fetched_at, e
            )
            return snapshot.as_list()

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info("%s query took %.0fms, found %d", self.name, elapsed_ms, len(data))
        self._snapshot = FeedSnapshot(data=tuple(data), fetched_at=time.time())
        return list(data)


class FeedCaches:
    """One cache per feed, owned by the FastAPI app (app.state.feed_caches)."""

    def __init__(self):
        self.jobs = FeedCache("jobs")
        self.workers = FeedCache("workers")
        self.instant = FeedCache("instant")
