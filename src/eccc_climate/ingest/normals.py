"""Climate normals downloads (30-year averages)."""

from __future__ import annotations

import logging
from typing import Callable

from eccc_climate.config import NORMALS_COLLECTIONS, NORMALS_LIMIT
from eccc_climate.errors import InvalidArgument, NotFound
from eccc_climate.index import StationIndex
from eccc_climate.ingest.flatten import RecordFlattener
from eccc_climate.ingest.pages import PageError, PageFetcher
from eccc_climate.results import BatchResult, UnitError

logger = logging.getLogger(__name__)

METADATA_COLUMNS = ["station_name", "station_id", "climate_id", "prov", "lat", "lon", "elev"]


class NormalsDownloader:
    def __init__(
        self,
        fetcher: PageFetcher,
        index_provider: Callable[[], StationIndex],
        limit: int = NORMALS_LIMIT,
    ):
        self.fetcher = fetcher
        self.index_provider = index_provider
        self.limit = limit

    def download(self, climate_id: str, period: str = "current") -> BatchResult:
        """Download normals for one station.

        ``period`` is "current" (same as "1991-2020"), "1981-2010" or
        "1971-2000". A station without normals, an HTTP failure or an empty
        response gives an empty result and a logged warning; an unknown
        climate ID raises ``NotFound``.
        """
        if not climate_id:
            raise InvalidArgument("Must specify a climate_id")
        if period not in NORMALS_COLLECTIONS:
            raise InvalidArgument("period must be 'current', '1991-2020', '1981-2010', or '1971-2000'")
        collection = NORMALS_COLLECTIONS[period]

        matches = self.index_provider().search(climate_id=climate_id)
        if matches.empty:
            raise NotFound(f"Climate ID {climate_id} not found")
        station = StationIndex(matches).records()[0]

        result = BatchResult()
        if not station["has_normals"]:
            logger.warning("Station %s does not have normals data available", climate_id)
            return result

        page = self.fetcher.fetch_page(
            collection,
            {"CLIMATE_IDENTIFIER": station["climate_id"]},
            offset=0,
            limit=self.limit,
        )
        if isinstance(page, PageError):
            error = page.to_exception()
            logger.warning("Error downloading normals for station %s: %s", climate_id, error)
            result.errors.append(UnitError(climate_id, error))
            return result

        if not page.features:
            logger.warning("No normals data found for station %s", climate_id)
            return result

        prefix = {col: station.get(col) for col in METADATA_COLUMNS}
        prefix["normals_period"] = period
        flatten = RecordFlattener(passthrough=True, prefix=prefix)
        result.rows = [flatten(feature) for feature in page.features]
        logger.info("Downloaded %d normals records for station %s", len(result.rows), climate_id)
        return result
