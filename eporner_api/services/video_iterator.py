"""Lazy iteration over every video of a paginated search"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional

from ..core.exceptions import EpornerError
from ..models.params import SearchParams
from ..models.video_models import Video, VideoCollection

if TYPE_CHECKING:
    from ..clients.eporner_client import EpornerClient

# Setup logging
logger = logging.getLogger(__name__)


class IteratorState(str, Enum):
    """Lifecycle of a :class:`VideoIterator`"""
    UNSTARTED = "unstarted"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"


class VideoIterator:
    """
    Iterator over all videos matching a search, fetching one page at a time.

    Pages are requested only when the consumer moves past the last buffered
    video. Any error raised while fetching a page ends the iteration exactly
    like running out of results would; the error is kept in
    :attr:`last_error` for diagnostics and never propagates.

    Instances are not thread-safe: sharing one iterator between threads
    requires external synchronization.
    """

    def __init__(self, client: "EpornerClient", params: SearchParams):
        """
        Initialize the iterator. No request is made until iteration starts.

        Args:
            client: Client used to fetch each page
            params: Search parameters of the first page
        """
        self.client = client
        self.initial_params = params
        self.params = params

        self.state = IteratorState.UNSTARTED
        self.last_error: Optional[EpornerError] = None

        self._collection: Optional[VideoCollection] = None
        self._current: Optional[Video] = None
        self._index = 0
        self._total_fetched = 0
        self._has_more_pages = True

    def __iter__(self) -> Iterator[Video]:
        """Restart from the first page and yield every video in order"""
        self.rewind()
        while self.valid():
            yield self._current
            self.next()

    def rewind(self) -> None:
        """Go back to the first page and position on its first video"""
        self.params = self.initial_params
        self.last_error = None
        self._collection = None
        self._index = 0
        self._total_fetched = 0
        self._has_more_pages = True

        self._fetch_next_page()
        self._position(fetch_more=False)

    def current(self) -> Optional[Video]:
        """Current video, or None once exhausted"""
        return self._current

    def key(self) -> int:
        return self._total_fetched

    def next(self) -> None:
        """Move to the next video, fetching the following page when needed"""
        if self.state == IteratorState.EXHAUSTED:
            return
        if self.state == IteratorState.UNSTARTED:
            self.rewind()
            return

        self._index += 1
        self._total_fetched += 1
        self._position(fetch_more=True)

    def valid(self) -> bool:
        return self._current is not None

    @property
    def count(self) -> int:
        """Number of videos moved past so far, across all pages"""
        return self._total_fetched

    @property
    def has_more(self) -> bool:
        """Whether the last fetched page reported a following page"""
        return self._has_more_pages

    @property
    def current_page(self) -> int:
        """Page number the next fetch would request"""
        return self.params.page

    def _position(self, fetch_more: bool) -> None:
        if self._buffered():
            self._current = self._collection.videos[self._index]
            self.state = IteratorState.POSITIONED
            return

        if fetch_more and self._has_more_pages:
            self._fetch_next_page()
            if self._buffered():
                self._current = self._collection.videos[self._index]
                self.state = IteratorState.POSITIONED
                return

        self._current = None
        self.state = IteratorState.EXHAUSTED

    def _buffered(self) -> bool:
        return self._collection is not None and self._index < len(self._collection.videos)

    def _fetch_next_page(self) -> None:
        try:
            self._collection = self.client.search(self.params)
            self._index = 0
            self._has_more_pages = self._collection.has_more_pages

            if self._has_more_pages:
                self.params = self.params.next_page()

        except EpornerError as e:
            logger.warning(
                f"Stopping iteration at page {self.params.page}: {e}",
                extra={'error_type': type(e).__name__}
            )
            self.last_error = e
            self._collection = VideoCollection.empty()
            self._index = 0
            self._has_more_pages = False
            self._current = None
