"""Offset/limit pagination over a collection."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Iterator, Mapping

from eccc_climate.config import PAGE_SIZE
from eccc_climate.errors import TransportError
from eccc_climate.ingest.flatten import RecordFlattener
from eccc_climate.ingest.pages import PageError, PageFetcher

logger = logging.getLogger(__name__)

Flatten = Callable[[Mapping[str, Any]], dict]
Progress = Callable[[int, int | None], None]


@dataclass
class Collected:
    rows: list[dict] = field(default_factory=list)
    error: TransportError | None = None
    pages: int = 0

    @property
    def complete(self) -> bool:
        return self.error is None


class PaginatedCollector:
    """Drive a ``PageFetcher`` from offset 0 until the collection is exhausted.

    Exhaustion is an empty page, a page shorter than ``page_size``, or the
    accumulated row count reaching the server's ``numberMatched``. The short
    page check is the fallback when ``numberMatched`` is absent or wrong.
    """

    def __init__(self, fetcher: PageFetcher, page_size: int = PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.fetcher = fetcher
        self.page_size = page_size

    def iter_pages(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        flatten: Flatten | None = None,
        progress: Progress | None = None,
    ) -> Iterator[list[dict]]:
        """Yield flattened rows one page at a time.

        Raises:
            TransportError: a page request failed. Pages already yielded stay
                with the caller.
        """
        flatten = flatten or RecordFlattener(passthrough=True)
        offset = 0
        accumulated = 0

        while True:
            page = self.fetcher.fetch_page(collection, filters, offset=offset, limit=self.page_size)
            if isinstance(page, PageError):
                raise page.to_exception()

            if not page.features:
                return

            rows = [flatten(feature) for feature in page.features]
            accumulated += len(rows)
            logger.debug(
                "%s: page at offset %d returned %d features (%d of %s)",
                collection, offset, len(rows), accumulated, page.number_matched,
            )
            if progress is not None:
                progress(accumulated, page.number_matched)

            yield rows

            if page.number_matched is not None and accumulated >= page.number_matched:
                return
            if len(page.features) < self.page_size:
                return
            offset += self.page_size

    def iter_rows(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        flatten: Flatten | None = None,
        progress: Progress | None = None,
    ) -> Iterator[dict]:
        for rows in self.iter_pages(collection, filters, flatten, progress):
            yield from rows

    def collect_all(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        flatten: Flatten | None = None,
        progress: Progress | None = None,
    ) -> Collected:
        """Fetch every page, keeping partial rows if a page fails."""
        result = Collected()
        try:
            for rows in self.iter_pages(collection, filters, flatten, progress):
                result.rows.extend(rows)
                result.pages += 1
        except TransportError as exc:
            result.error = exc
        return result
