"""Tests for climate normals downloads."""

import logging

import pytest

from eccc_climate.errors import InvalidArgument, NotFound, TransportError
from eccc_climate.ingest.normals import NormalsDownloader
from eccc_climate.ingest.pages import Page

from conftest import ScriptedFetcher, error_page, paged


NORMALS_FEATURES = [
    {"properties": {"CLIMATE_IDENTIFIER": "1018611", "MONTH": 1, "NORMAL_ID": 1, "VALUE": 5.4}},
    {"properties": {"CLIMATE_IDENTIFIER": "1018611", "MONTH": 2, "NORMAL_ID": 1, "VALUE": 6.1}},
]


def _downloader(station_index, script):
    fetcher = ScriptedFetcher(script)
    return NormalsDownloader(fetcher, lambda: station_index), fetcher


def test_rows_echo_period_and_station(station_index):
    downloader, fetcher = _downloader(station_index, paged(NORMALS_FEATURES))

    result = downloader.download("1018611")

    assert len(result) == 2
    row = result.rows[0]
    assert list(row)[:8] == [
        "station_name", "station_id", "climate_id", "prov", "lat", "lon", "elev", "normals_period",
    ]
    assert row["normals_period"] == "current"
    assert row["station_name"] == "VICTORIA GONZALES"
    assert row["VALUE"] == 5.4
    assert fetcher.calls == [{
        "collection": "climate-normals",
        "filters": {"CLIMATE_IDENTIFIER": "1018611"},
        "offset": 0,
        "limit": 10000,
    }]


@pytest.mark.parametrize("period,collection", [
    ("1991-2020", "climate-normals"),
    ("1981-2010", "climate-normals-1981-2010"),
    ("1971-2000", "climate-normals-1971-2000"),
])
def test_period_selects_collection(station_index, period, collection):
    downloader, fetcher = _downloader(station_index, paged(NORMALS_FEATURES))

    result = downloader.download("1018611", period=period)

    assert fetcher.calls[0]["collection"] == collection
    assert result.rows[0]["normals_period"] == period


def test_climate_id_match_is_case_insensitive(station_index):
    downloader, fetcher = _downloader(station_index, paged([]))

    downloader.download("0000ship")

    # SHIP 4XY has no normals, so nothing is requested
    assert fetcher.calls == []


def test_unknown_period(station_index):
    downloader, fetcher = _downloader(station_index, paged(NORMALS_FEATURES))

    with pytest.raises(InvalidArgument):
        downloader.download("1018611", period="1961-1990")
    assert fetcher.calls == []


def test_empty_climate_id(station_index):
    downloader, _ = _downloader(station_index, paged(NORMALS_FEATURES))

    with pytest.raises(InvalidArgument):
        downloader.download("")


def test_unknown_climate_id(station_index):
    downloader, _ = _downloader(station_index, paged(NORMALS_FEATURES))

    with pytest.raises(NotFound, match="XXXXXXX"):
        downloader.download("XXXXXXX")


def test_station_without_normals_warns(station_index, caplog):
    downloader, fetcher = _downloader(station_index, paged(NORMALS_FEATURES))

    with caplog.at_level(logging.WARNING):
        result = downloader.download("6158355")

    assert result.rows == []
    assert result.ok
    assert fetcher.calls == []
    assert "does not have normals" in caplog.text


def test_http_error_gives_empty_result(station_index, caplog):
    downloader, _ = _downloader(station_index, error_page(500))

    with caplog.at_level(logging.WARNING):
        result = downloader.download("1163780")

    assert result.rows == []
    assert isinstance(result.errors[0].error, TransportError)
    assert result.errors[0].unit == "1163780"
    assert "1163780" in caplog.text


def test_no_features_warns(station_index, caplog):
    downloader, _ = _downloader(
        station_index, lambda *args: Page(features=[], number_matched=0),
    )

    with caplog.at_level(logging.WARNING):
        result = downloader.download("1163780")

    assert result.rows == []
    assert result.ok
    assert "No normals data" in caplog.text
