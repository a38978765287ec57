"""Hourly, daily and monthly observation downloads.

Each requested station is downloaded independently: a failed page drops that
station's rows and is recorded in the result's ``errors``, and the remaining
stations are still fetched.
"""

from __future__ import annotations

from datetime import date
import logging
from typing import Callable, Iterable

import pandas as pd

from eccc_climate.config import INTERVAL_COLLECTIONS
from eccc_climate.errors import InvalidArgument, NotFound, TransportError
from eccc_climate.index import StationIndex
from eccc_climate.ingest.collector import PaginatedCollector
from eccc_climate.ingest.flatten import RecordFlattener
from eccc_climate.results import BatchResult, UnitError

logger = logging.getLogger(__name__)

METADATA_COLUMNS = ["station_name", "station_id", "climate_id", "prov", "lat", "lon", "elev", "tz"]


def _parse_date(value: date | str | None, label: str) -> date:
    if value is None:
        raise InvalidArgument("Must specify both start and end dates")
    try:
        return pd.Timestamp(value).date()
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Invalid {label} date: {value!r}") from exc


def _unique(values: Iterable) -> list:
    seen = set()
    out = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def trim_rows(rows: list[dict], start: date, end: date, interval: str) -> list[dict]:
    """Keep rows inside [start, end] by LOCAL_DATE, or LOCAL_YEAR for monthly data."""
    if not rows:
        return rows
    keys = set().union(*(row.keys() for row in rows))
    if "LOCAL_DATE" in keys:
        kept = []
        unparseable = 0
        for row in rows:
            value = row.get("LOCAL_DATE")
            if value is None:
                continue
            try:
                stamp = pd.Timestamp(str(value)[:10])
            except ValueError:
                stamp = pd.NaT
            if pd.isna(stamp):
                unparseable += 1
                continue
            if start <= stamp.date() <= end:
                kept.append(row)
        if unparseable:
            logger.warning("Dropped %d rows with unparseable LOCAL_DATE while trimming", unparseable)
        return kept
    if interval == "month" and "LOCAL_YEAR" in keys:
        return [
            row for row in rows
            if row.get("LOCAL_YEAR") is not None and start.year <= int(row["LOCAL_YEAR"]) <= end.year
        ]
    return rows


class ObservationDownloader:
    def __init__(self, collector: PaginatedCollector, index_provider: Callable[[], StationIndex]):
        self.collector = collector
        self.index_provider = index_provider

    def resolve(
        self,
        index: StationIndex,
        station_ids: Iterable[int] | int | None = None,
        climate_ids: Iterable[str] | str | None = None,
        station_names: Iterable[str] | str | None = None,
        interval: str = "day",
    ) -> list[int]:
        """Turn the caller's selector into an ordered list of unique station IDs.

        Names take precedence over climate IDs, which take precedence over
        explicit station IDs.
        """
        if station_names is not None:
            names = [station_names] if isinstance(station_names, str) else list(station_names)
            found = [index.search(name=name, interval=interval) for name in names]
            ids = [sid for frame in found for sid in frame["station_id"].dropna().tolist()]
            if not ids:
                raise NotFound("No stations found with the specified name(s)")
            return _unique(int(sid) for sid in ids)

        if climate_ids is not None:
            wanted = [climate_ids] if isinstance(climate_ids, str) else list(climate_ids)
            ids = index.search(climate_id=wanted)["station_id"].dropna().tolist()
            if not ids:
                raise NotFound(f"No stations found with climate_id(s): {', '.join(wanted)}")
            return _unique(int(sid) for sid in ids)

        if isinstance(station_ids, int):
            return [station_ids]
        return _unique(int(sid) for sid in station_ids)

    def download(
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
        """Download observations for one or more stations.

        Args:
            station_ids: Station ID(s).
            climate_ids: Climate identifier(s), e.g. "1018611".
            station_names: Name query/queries, resolved with ``interval``.
            start: Inclusive start date.
            end: Inclusive end date.
            interval: "hour", "day" or "month".
            trim: Drop rows outside [start, end] after download.
            verbose: Log progress at INFO instead of DEBUG.
            include_geometry: Add the feature's GeoJSON geometry as a column.

        Returns:
            BatchResult with rows in station resolution order and one
            ``UnitError`` per station that was skipped or failed.

        Raises:
            InvalidArgument: bad interval or date range (before any request).
            NotFound: name or climate ID selectors matched no station.
        """
        if interval not in INTERVAL_COLLECTIONS:
            raise InvalidArgument("interval must be 'hour', 'day', or 'month'")
        start_date = _parse_date(start, "start")
        end_date = _parse_date(end, "end")
        if end_date < start_date:
            raise InvalidArgument("end date must be after start date")
        if station_ids is None and climate_ids is None and station_names is None:
            raise InvalidArgument("Must specify station_ids, climate_ids, or station_names")

        level = logging.INFO if verbose else logging.DEBUG
        collection = INTERVAL_COLLECTIONS[interval]
        index = self.index_provider()
        ids = self.resolve(index, station_ids, climate_ids, station_names, interval)

        result = BatchResult()
        for stn_id in ids:
            logger.log(level, "Downloading data for station %s (%s)...", stn_id, interval)
            station = index.lookup(stn_id)
            if station is None:
                logger.warning("Station ID %s not found", stn_id)
                result.errors.append(UnitError(stn_id, NotFound(f"Station ID {stn_id} not found")))
                continue
            if not station.get("climate_id"):
                logger.warning("Station ID %s has no climate identifier, skipping", stn_id)
                result.errors.append(UnitError(stn_id, NotFound(f"Station ID {stn_id} has no climate identifier")))
                continue

            try:
                rows = self._download_station(station, collection, start_date, end_date, level, include_geometry)
            except TransportError as exc:
                logger.warning("Error downloading data for station %s: %s", stn_id, exc)
                result.errors.append(UnitError(stn_id, exc))
                continue
            result.rows.extend(rows)

        if trim:
            result.rows = trim_rows(result.rows, start_date, end_date, interval)

        logger.log(level, "Downloaded %d observations total.", len(result.rows))
        return result

    def _download_station(
        self,
        station: dict,
        collection: str,
        start: date,
        end: date,
        level: int,
        include_geometry: bool,
    ) -> list[dict]:
        prefix = {col: station.get(col) for col in METADATA_COLUMNS}
        flatten = RecordFlattener(passthrough=True, prefix=prefix, include_geometry=include_geometry)
        filters = {
            "CLIMATE_IDENTIFIER": station["climate_id"],
            "datetime": f"{start.isoformat()}/{end.isoformat()}",
        }

        def _progress(count: int, total: int | None) -> None:
            logger.log(level, "  Downloaded %d observations...", count)

        # Materialized per station so a failure part-way drops the station's rows
        return list(self.collector.iter_rows(collection, filters, flatten, _progress))
