"""In-memory station search over the cached station table."""

from __future__ import annotations

from collections.abc import Iterable
from numbers import Real
from typing import Any, Callable

import numpy as np
import pandas as pd

from eccc_climate.config import INTERVAL_FLAGS
from eccc_climate.errors import InvalidArgument
from eccc_climate.geo import haversine_km


def _as_list(value: Any) -> list:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _clean_value(v: Any) -> Any:
    """Convert pandas/numpy scalars to plain Python, missing values to None."""
    if v is None or (pd.api.types.is_scalar(v) and pd.isna(v)):
        return None
    if pd.api.types.is_scalar(v) and hasattr(v, "item"):  # numpy scalar
        return v.item()
    return v


def clean_record(row: dict) -> dict:
    return {k: _clean_value(v) for k, v in row.items()}


def _parse_coords(coords: Any) -> tuple[float, float]:
    if isinstance(coords, (str, bytes)) or not isinstance(coords, Iterable):
        raise InvalidArgument("coords must be a (latitude, longitude) pair")
    values = list(coords)
    if len(values) != 2 or not all(isinstance(v, Real) and not isinstance(v, bool) for v in values):
        raise InvalidArgument("coords must be a (latitude, longitude) pair")
    return float(values[0]), float(values[1])


class StationIndex:
    """Conjunctive filters over a station table.

    The table is the DataFrame produced by ``StationCache``; it is never
    modified. Every ``search`` returns a new frame.
    """

    def __init__(self, table: pd.DataFrame, distance: Callable = haversine_km):
        self.table = table
        self.distance = distance

    def __len__(self) -> int:
        return len(self.table)

    def search(
        self,
        name: str | None = None,
        climate_id: str | Iterable[str] | None = None,
        station_id: int | Iterable[int] | None = None,
        prov: str | None = None,
        interval: str | None = None,
        has_normals: bool | None = None,
        coords: tuple[float, float] | None = None,
        dist: float | None = None,
    ) -> pd.DataFrame:
        """Filter stations; all supplied criteria must match.

        Args:
            name: Case-insensitive substring of ``station_name``.
            climate_id: One or more climate identifiers (case-insensitive).
            station_id: One or more station IDs.
            prov: Province/territory code, e.g. "BC".
            interval: "hour", "day" or "month"; keeps stations with that data.
            has_normals: Keep stations whose normals flag equals this value.
            coords: (latitude, longitude) of the search centre. Adds a
                ``distance`` column in km.
            dist: Radius in km around ``coords``.

        Raises:
            InvalidArgument: unknown interval, malformed coords, or ``dist``
                without ``coords``.
        """
        # Validate everything before touching the table
        flag = None
        if interval is not None:
            if interval not in INTERVAL_FLAGS:
                raise InvalidArgument("interval must be 'hour', 'day', or 'month'")
            flag = INTERVAL_FLAGS[interval]
        center = _parse_coords(coords) if coords is not None else None
        if dist is not None and center is None:
            raise InvalidArgument("dist requires coords")

        df = self.table
        mask = pd.Series(True, index=df.index)

        if name is not None:
            names = df["station_name"].fillna("").astype(str).str.upper()
            mask &= names.str.contains(str(name).upper(), regex=False)

        if climate_id is not None:
            wanted = [str(c).strip().upper() for c in _as_list(climate_id)]
            mask &= df["climate_id"].isin(wanted)

        if station_id is not None:
            mask &= df["station_id"].isin(_as_list(station_id)).fillna(False).astype(bool)

        if prov is not None:
            mask &= df["prov"].notna() & (df["prov"] == str(prov).strip().upper())

        if flag is not None:
            mask &= df[flag].fillna(False).astype(bool)

        if has_normals is not None:
            mask &= df["has_normals"] == bool(has_normals)

        result = df[mask]

        if center is not None:
            lat, lon = center
            distance = self.distance(
                lat, lon,
                result["lat"].to_numpy(dtype=float),
                result["lon"].to_numpy(dtype=float),
            )
            result = result.assign(distance=np.asarray(distance, dtype=float))
            if dist is not None:
                result = result[result["distance"] <= dist]

        return result.reset_index(drop=True)

    def lookup(self, station_id: int) -> dict | None:
        """Return one station as a plain dict, or None if absent."""
        matches = self.table[self.table["station_id"] == station_id]
        if matches.empty:
            return None
        return clean_record(matches.iloc[0].to_dict())

    def records(self, df: pd.DataFrame | None = None) -> list[dict]:
        frame = self.table if df is None else df
        return [clean_record(r) for r in frame.to_dict("records")]
