"""Single-page fetcher for GeoMet OGC API collections.

One GET per page. Failures come back as a ``PageError`` value so the caller
decides whether to abort, skip or keep partial results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
from typing import Any, Mapping

import requests

from eccc_climate.config import ClimateConfig
from eccc_climate.errors import DownloadCancelled, TransportError

logger = logging.getLogger(__name__)


@dataclass
class Page:
    features: list[dict] = field(default_factory=list)
    number_matched: int | None = None


@dataclass
class PageError:
    collection: str
    offset: int | None
    status_code: int | None
    message: str = ""

    def to_exception(self) -> TransportError:
        if self.status_code is None:
            detail = self.message or "request failed"
        else:
            detail = f"HTTP {self.status_code}"
            if self.message:
                detail += f" ({self.message})"
        return TransportError(
            f"Error downloading {self.collection} at offset {self.offset}: {detail}",
            status_code=self.status_code,
            collection=self.collection,
            offset=self.offset,
        )


class PageFetcher:
    """Issue one request per page against ``{base_url}/collections/{name}/items``."""

    def __init__(
        self,
        config: ClimateConfig | None = None,
        session: requests.Session | None = None,
        cancel_event: threading.Event | None = None,
    ):
        self.config = config or ClimateConfig()
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": self.config.user_agent})
        self.session = session
        self.cancel_event = cancel_event

    def fetch_page(
        self,
        collection: str,
        filters: Mapping[str, Any] | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Page | PageError:
        """Fetch one page of ``collection``.

        Args:
            collection: Collection name, e.g. "climate-daily".
            filters: Query parameters passed verbatim (equality or range
                values such as ``datetime="2020-01-01/2020-12-31"``).
            offset: Index of the first feature to return.
            limit: Maximum number of features in the page.

        Returns:
            ``Page`` on HTTP 200 with a decodable features list, otherwise a
            ``PageError``. Only cancellation raises.
        """
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise DownloadCancelled(f"Download of {collection} cancelled")

        params: dict[str, Any] = {"f": "json"}
        params.update(filters or {})
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset

        url = self.config.items_url(collection)
        logger.debug("GET %s params=%s", url, params)

        try:
            resp = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            return PageError(collection, offset, None, str(exc))

        if resp.status_code != 200:
            return PageError(collection, offset, resp.status_code, resp.reason or "")

        try:
            payload = resp.json()
        except ValueError:
            return PageError(collection, offset, resp.status_code, "response is not valid JSON")

        features = payload.get("features") if isinstance(payload, dict) else None
        if not isinstance(features, list):
            return PageError(collection, offset, resp.status_code, "response has no features list")

        return Page(features=features, number_matched=_as_int(payload.get("numberMatched")))


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
