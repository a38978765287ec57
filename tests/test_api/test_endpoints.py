"""API endpoint tests using TestClient with a primed station cache."""

import pytest
from fastapi.testclient import TestClient

from eccc_climate.api.app import create_app
from eccc_climate.client import ClimateClient
from eccc_climate.config import ClimateConfig
from eccc_climate.ingest.pages import Page, PageError

from conftest import ScriptedFetcher


DAILY = [
    {"properties": {"LOCAL_DATE": "2020-01-01 00:00:00", "MAX_TEMPERATURE": 7.1}},
    {"properties": {"LOCAL_DATE": "2020-01-02 00:00:00", "MAX_TEMPERATURE": 6.4}},
]

NORMALS = [{"properties": {"MONTH": 1, "VALUE": 5.4}}]


def _api_script(collection, filters, offset, limit):
    if collection == "climate-daily":
        if filters["CLIMATE_IDENTIFIER"] == "1163780":
            return PageError(collection, offset, 500, "Internal Server Error")
        return Page(features=DAILY, number_matched=len(DAILY))
    if collection.startswith("climate-normals"):
        return Page(features=NORMALS, number_matched=len(NORMALS))
    return PageError(collection, offset, 404, "Not Found")


@pytest.fixture
def api(tmp_path, cache_file):
    """TestClient over a ClimateClient whose station cache is already fresh."""
    climate = ClimateClient(ClimateConfig(cache_dir=tmp_path))
    fetcher = ScriptedFetcher(_api_script)
    climate.fetcher.fetch_page = fetcher.fetch_page
    app = create_app(climate)
    client = TestClient(app, raise_server_exceptions=True)
    client.fetcher = fetcher
    return client


class TestHealthEndpoint:
    def test_health(self, api):
        resp = api.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestStationsEndpoints:
    def test_search_by_prov(self, api):
        resp = api.get("/stations/search", params={"prov": "BC"})
        assert resp.status_code == 200
        data = resp.json()
        assert [s["climate_id"] for s in data] == ["1018611", "1163780"]
        assert data[0]["distance"] is None

    def test_search_multiple_climate_ids(self, api):
        resp = api.get("/stations/search", params=[("climate_id", "6158355"), ("climate_id", "1018611")])
        assert resp.status_code == 200
        assert sorted(s["station_id"] for s in resp.json()) == [114, 5051]

    def test_search_nearby(self, api):
        resp = api.get("/stations/search", params={"lat": 48.4284, "lon": -123.3656, "dist": 50})
        assert resp.status_code == 200
        data = resp.json()
        assert len(data) == 1
        assert data[0]["station_name"] == "VICTORIA GONZALES"
        assert data[0]["distance"] < 10

    def test_search_lat_without_lon(self, api):
        resp = api.get("/stations/search", params={"lat": 48.4})
        assert resp.status_code == 422

    def test_search_dist_without_coords(self, api):
        resp = api.get("/stations/search", params={"dist": 10})
        assert resp.status_code == 422

    def test_search_bad_interval(self, api):
        resp = api.get("/stations/search", params={"interval": "week"})
        assert resp.status_code == 422

    def test_search_missing_coordinates_serialize(self, api):
        resp = api.get("/stations/search", params={"name": "ship"})
        assert resp.status_code == 200
        assert resp.json()[0]["lat"] is None

    def test_station_detail(self, api):
        resp = api.get("/stations/1163780")
        assert resp.status_code == 200
        data = resp.json()
        assert data["station_name"] == "KAMLOOPS A"
        assert data["has_hourly"] is True

    def test_station_not_found(self, api):
        resp = api.get("/stations/NONEXISTENT")
        assert resp.status_code == 404


class TestObservationsEndpoint:
    def test_daily_rows(self, api):
        resp = api.get("/observations", params={
            "climate_id": "1018611",
            "start": "2020-01-01",
            "end": "2020-01-31",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 2
        assert data["rows"][0]["station_id"] == 114
        assert data["rows"][0]["MAX_TEMPERATURE"] == 7.1
        assert data["errors"] == []

    def test_failed_station_reported(self, api):
        resp = api.get("/observations", params=[
            ("station_id", 114),
            ("station_id", 1275),
            ("start", "2020-01-01"),
            ("end", "2020-01-31"),
        ])
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 2
        assert data["errors"][0]["unit"] == "1275"
        assert "HTTP 500" in data["errors"][0]["error"]

    def test_end_before_start(self, api):
        resp = api.get("/observations", params={
            "climate_id": "1018611",
            "start": "2020-02-01",
            "end": "2020-01-01",
        })
        assert resp.status_code == 422
        assert api.fetcher.calls == []

    def test_no_selector(self, api):
        resp = api.get("/observations", params={"start": "2020-01-01", "end": "2020-01-31"})
        assert resp.status_code == 422

    def test_unknown_name(self, api):
        resp = api.get("/observations", params={
            "name": "Atlantis",
            "start": "2020-01-01",
            "end": "2020-01-31",
        })
        assert resp.status_code == 404


class TestNormalsEndpoint:
    def test_normals(self, api):
        resp = api.get("/normals/1018611", params={"period": "1981-2010"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 1
        assert data["rows"][0]["normals_period"] == "1981-2010"
        assert api.fetcher.calls[0]["collection"] == "climate-normals-1981-2010"

    def test_station_without_normals_is_empty(self, api):
        resp = api.get("/normals/6158355")
        assert resp.status_code == 200
        assert resp.json()["count"] == 0

    def test_unknown_climate_id(self, api):
        resp = api.get("/normals/XXXXXXX")
        assert resp.status_code == 404

    def test_bad_period(self, api):
        resp = api.get("/normals/1018611", params={"period": "1961-1990"})
        assert resp.status_code == 422


class TestVariablesEndpoint:
    def test_hourly(self, api):
        resp = api.get("/variables/hour")
        assert resp.status_code == 200
        assert "TEMP" in resp.json()

    def test_unknown_interval(self, api):
        resp = api.get("/variables/week")
        assert resp.status_code == 422
