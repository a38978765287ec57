"""Shared test fixtures."""

import pandas as pd
import pytest

from eccc_climate.index import StationIndex
from eccc_climate.ingest.pages import Page, PageError
from eccc_climate.ingest.stations import flatten_station, stations_frame


def station_feature(**props) -> dict:
    return {"type": "Feature", "geometry": {"type": "Point", "coordinates": [0, 0]}, "properties": props}


STATION_FEATURES = [
    station_feature(
        STATION_NAME="VICTORIA GONZALES",
        STN_ID=114,
        CLIMATE_IDENTIFIER="1018611",
        PROV_STATE_TERR_CODE="BC",
        LATITUDE=484131000,
        LONGITUDE=-1233253000,
        ELEVATION="69.5",
        TIMEZONE="PST",
        STATION_TYPE="Climate-Auto",
        FIRST_DATE="1898-01-01 00:00:00",
        LAST_DATE="2024-06-30 00:00:00",
        DLY_FIRST_DATE="1898-01-01 00:00:00",
        HLY_FIRST_DATE="",
        MLY_FIRST_DATE="1898-01-01 00:00:00",
        HAS_NORMALS_DATA="Y",
    ),
    station_feature(
        STATION_NAME="KAMLOOPS A",
        STN_ID=1275,
        CLIMATE_IDENTIFIER="1163780",
        PROV_STATE_TERR_CODE=" bc ",
        LATITUDE=507025000,
        LONGITUDE=-1204486000,
        ELEVATION="345.3",
        TIMEZONE="PST",
        STATION_TYPE="Climate",
        FIRST_DATE="1951-01-01 00:00:00",
        LAST_DATE="2013-06-13 00:00:00",
        DLY_FIRST_DATE="1951-01-01 00:00:00",
        HLY_FIRST_DATE="1953-01-01 00:00:00",
        MLY_FIRST_DATE="1951-01-01 00:00:00",
        HAS_NORMALS_DATA="Y",
    ),
    station_feature(
        STATION_NAME="TORONTO CITY",
        STN_ID=5051,
        CLIMATE_IDENTIFIER="6158355",
        PROV_STATE_TERR_CODE="ON",
        LATITUDE=436667000,
        LONGITUDE=-794000000,
        ELEVATION="112.5",
        TIMEZONE="EST",
        STATION_TYPE="Climate",
        FIRST_DATE="1840-03-01 00:00:00",
        LAST_DATE="2024-06-30 00:00:00",
        DLY_FIRST_DATE="1840-03-01 00:00:00",
        HLY_FIRST_DATE=None,
        MLY_FIRST_DATE=None,
        HAS_NORMALS_DATA="N",
    ),
    station_feature(
        STATION_NAME="SHIP 4XY",
        STN_ID=9999,
        CLIMATE_IDENTIFIER="0000ship",
        PROV_STATE_TERR_CODE=None,
        LATITUDE=None,
        LONGITUDE=None,
        ELEVATION=None,
        TIMEZONE=None,
        STATION_TYPE="Marine",
        FIRST_DATE=None,
        LAST_DATE=None,
        HAS_NORMALS_DATA="N",
    ),
]


class ScriptedFetcher:
    """Stand-in for PageFetcher; ``script(collection, filters, offset, limit)`` returns a page."""

    def __init__(self, script):
        self.script = script
        self.calls = []

    def fetch_page(self, collection, filters=None, offset=None, limit=None):
        self.calls.append({
            "collection": collection,
            "filters": dict(filters or {}),
            "offset": offset,
            "limit": limit,
        })
        return self.script(collection, filters or {}, offset, limit)


def paged(features, number_matched="auto"):
    """Script serving ``features`` by offset/limit like the real API."""

    def script(collection, filters, offset, limit):
        start = offset or 0
        stop = start + limit if limit is not None else None
        matched = len(features) if number_matched == "auto" else number_matched
        return Page(features=features[start:stop], number_matched=matched)

    return script


def error_page(status_code=500):
    def script(collection, filters, offset, limit):
        return PageError(collection, offset, status_code, "Internal Server Error")

    return script


@pytest.fixture
def station_features() -> list[dict]:
    return [dict(f) for f in STATION_FEATURES]


@pytest.fixture
def station_table(station_features) -> pd.DataFrame:
    return stations_frame([flatten_station(f) for f in station_features])


@pytest.fixture
def station_index(station_table) -> StationIndex:
    return StationIndex(station_table)


@pytest.fixture
def cache_file(tmp_path, station_table):
    """A fresh parquet station cache at the default file name."""
    path = tmp_path / "stations_cache.parquet"
    station_table.to_parquet(path, index=False)
    return path
