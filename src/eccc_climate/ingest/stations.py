"""Climate station download and on-disk cache.

The full station list is pulled from the ``climate-stations`` collection and
kept as a parquet file. A cached file younger than ``max_age`` is reused; an
older one (or ``refresh=True``) triggers a full re-download that replaces the
whole table.
"""

from __future__ import annotations

from datetime import datetime, timedelta
import logging
import os
from pathlib import Path
import time
import warnings

import pandas as pd

from eccc_climate.config import STATIONS_COLLECTION, ClimateConfig
from eccc_climate.errors import CacheDirWarning, CacheWriteWarning
from eccc_climate.ingest.collector import PaginatedCollector
from eccc_climate.ingest.flatten import Copy, Equals, Present, RecordFlattener, Scale, TrimUpper

logger = logging.getLogger(__name__)

STATION_COLUMNS = {
    "station_name": Copy("STATION_NAME"),
    "station_id": Copy("STN_ID", cast=int),
    "climate_id": TrimUpper("CLIMATE_IDENTIFIER"),
    "prov": TrimUpper("PROV_STATE_TERR_CODE"),
    "lat": Scale("LATITUDE", 1e7),
    "lon": Scale("LONGITUDE", 1e7),
    "elev": Copy("ELEVATION", cast=float),
    "tz": Copy("TIMEZONE"),
    "station_type": Copy("STATION_TYPE"),
    "first_date": Copy("FIRST_DATE"),
    "last_date": Copy("LAST_DATE"),
    "has_daily": Present("DLY_FIRST_DATE"),
    "has_hourly": Present("HLY_FIRST_DATE"),
    "has_monthly": Present("MLY_FIRST_DATE"),
    "has_normals": Equals("HAS_NORMALS_DATA", "Y"),
}

flatten_station = RecordFlattener(STATION_COLUMNS)


def stations_frame(rows: list[dict]) -> pd.DataFrame:
    """Build the fixed-schema station table from flattened rows."""
    df = pd.DataFrame.from_records(rows, columns=list(STATION_COLUMNS))
    df["station_id"] = df["station_id"].astype("Int64")
    for col in ["lat", "lon", "elev"]:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
    for col in ["has_daily", "has_hourly", "has_monthly", "has_normals"]:
        df[col] = df[col].astype(bool)
    return df


def _as_timedelta(max_age: timedelta | float | int) -> timedelta:
    if isinstance(max_age, timedelta):
        return max_age
    return timedelta(days=float(max_age))


class StationCache:
    def __init__(self, collector: PaginatedCollector, config: ClimateConfig | None = None):
        self.collector = collector
        self.config = config or ClimateConfig()
        self.table: pd.DataFrame | None = None
        self._source: tuple[Path, float] | None = None

    def cache_path(self) -> Path:
        """Resolve ``{cache_dir}/{cache_file}``, creating the directory if needed.

        If the directory cannot be created, a ``CacheDirWarning`` is issued and
        the bare file name is used instead.
        """
        cache_file = self.config.cache_file
        if self.config.cache_dir is None:
            return Path(cache_file)

        cache_dir = Path(self.config.cache_dir)
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            warnings.warn(f"Could not create cache directory: {exc}", CacheDirWarning, stacklevel=2)
            return Path(cache_file)
        return cache_dir / cache_file

    @staticmethod
    def age(path: Path) -> timedelta | None:
        """Wall-clock time since the file was last written, or None if missing."""
        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            return None
        return timedelta(seconds=time.time() - mtime)

    def get_stations(
        self,
        refresh: bool = False,
        cache_path: Path | str | None = None,
        max_age: timedelta | float | None = None,
    ) -> pd.DataFrame:
        """Return the station table, from cache when fresh enough.

        Args:
            refresh: Ignore any cached file and re-download.
            cache_path: Override the configured cache location.
            max_age: Maximum cache age (timedelta, or days as a number).

        Raises:
            TransportError: a page failed while re-downloading.
        """
        path = Path(cache_path) if cache_path is not None else self.cache_path()
        limit = _as_timedelta(max_age if max_age is not None else self.config.max_age)

        if not refresh:
            age = self.age(path)
            if age is not None and age <= limit:
                if self.table is not None and self._source == (path, path.stat().st_mtime):
                    return self.table
                logger.info("Loading stations from cache (%.1f days old)", age / timedelta(days=1))
                self.table = pd.read_parquet(path)
                self._source = (path, path.stat().st_mtime)
                return self.table
            if age is not None:
                logger.info(
                    "Cache is %.1f days old (max: %.1f days). Refreshing...",
                    age / timedelta(days=1), limit / timedelta(days=1),
                )

        table = self.download()
        self.table = table
        self._source = None
        if self._write(table, path):
            self._source = (path, path.stat().st_mtime)
        return table

    def download(self) -> pd.DataFrame:
        """Download every station. A failed page aborts the whole refresh."""
        logger.info("Downloading station data from %s", self.config.items_url(STATIONS_COLLECTION))

        def _progress(count: int, total: int | None) -> None:
            logger.info("Downloaded %d of %s stations...", count, total if total is not None else "?")

        collected = self.collector.collect_all(STATIONS_COLLECTION, flatten=flatten_station, progress=_progress)
        if collected.error is not None:
            raise collected.error

        logger.info("Downloaded %d stations total.", len(collected.rows))
        return stations_frame(collected.rows)

    def _write(self, table: pd.DataFrame, path: Path) -> bool:
        """Atomically replace the cache file; failures only warn."""
        tmp = path.with_name(f".{path.name}.{os.getpid()}.tmp")
        try:
            table.to_parquet(tmp, index=False)
            os.replace(tmp, path)
        except (OSError, ValueError) as exc:
            warnings.warn(f"Could not save cache: {exc}", CacheWriteWarning, stacklevel=3)
            tmp.unlink(missing_ok=True)
            return False
        logger.info("Saved stations to cache: %s", path)
        return True

    def info(self) -> dict:
        """Describe the API endpoint and the state of the cache file."""
        path = self.cache_path()
        meta = {
            "api_base_url": self.config.base_url,
            "api_endpoint": self.config.items_url(STATIONS_COLLECTION),
            "cache_path": str(path),
            "total_stations": None,
            "last_updated": None,
        }
        if path.exists():
            meta["last_updated"] = datetime.fromtimestamp(path.stat().st_mtime)
            meta["total_stations"] = len(pd.read_parquet(path, columns=["station_id"]))
        return meta
