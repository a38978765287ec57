"""Client facade wiring fetcher, collector, cache and downloaders together."""

from __future__ import annotations

from datetime import date, timedelta
import threading
from pathlib import Path
from typing import Iterable

import pandas as pd
import requests

from eccc_climate.config import ClimateConfig
from eccc_climate.index import StationIndex
from eccc_climate.ingest.collector import PaginatedCollector
from eccc_climate.ingest.normals import NormalsDownloader
from eccc_climate.ingest.observations import ObservationDownloader
from eccc_climate.ingest.pages import PageFetcher
from eccc_climate.ingest.stations import StationCache
from eccc_climate.results import BatchResult
from eccc_climate.variables import list_variables


class ClimateClient:
    """Entry point for station discovery, observations and normals.

    Example:
        client = ClimateClient(ClimateConfig(cache_dir=Path("data")))
        bc_daily = client.search_stations(prov="BC", interval="day")
        obs = client.download_observations(
            climate_ids="1018611", start="2020-01-01", end="2020-12-31",
        ).to_frame()
    """

    def __init__(
        self,
        config: ClimateConfig | None = None,
        session: requests.Session | None = None,
        cancel_event: threading.Event | None = None,
    ):
        self.config = config or ClimateConfig()
        self.fetcher = PageFetcher(self.config, session=session, cancel_event=cancel_event)
        self.collector = PaginatedCollector(self.fetcher, page_size=self.config.page_size)
        self.cache = StationCache(self.collector, self.config)
        self.observations = ObservationDownloader(self.collector, self.station_index)
        self.normals = NormalsDownloader(self.fetcher, self.station_index, limit=self.config.normals_limit)

    def station_index(self) -> StationIndex:
        return StationIndex(self.cache.get_stations())

    def get_all_stations(
        self,
        refresh: bool = False,
        cache_path: Path | str | None = None,
        max_age: timedelta | float | None = None,
    ) -> pd.DataFrame:
        return self.cache.get_stations(refresh=refresh, cache_path=cache_path, max_age=max_age)

    def search_stations(self, **criteria) -> pd.DataFrame:
        """See ``StationIndex.search`` for the supported criteria."""
        return self.station_index().search(**criteria)

    def download_observations(
        self,
        station_ids: Iterable[int] | int | None = None,
        climate_ids: Iterable[str] | str | None = None,
        station_names: Iterable[str] | str | None = None,
        start: date | str | None = None,
        end: date | str | None = None,
        interval: str = "day",
        trim: bool = False,
        verbose: bool = True,
        include_geometry: bool = False,
    ) -> BatchResult:
        return self.observations.download(
            station_ids=station_ids,
            climate_ids=climate_ids,
            station_names=station_names,
            start=start,
            end=end,
            interval=interval,
            trim=trim,
            verbose=verbose,
            include_geometry=include_geometry,
        )

    def download_normals(self, climate_id: str, period: str = "current") -> BatchResult:
        return self.normals.download(climate_id, period)

    @staticmethod
    def list_variables(interval: str = "day") -> list[str]:
        return list_variables(interval)

    def stations_meta(self) -> dict:
        return self.cache.info()
