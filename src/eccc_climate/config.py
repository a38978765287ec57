from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
import os
from pathlib import Path

# MSC GeoMet OGC API
API_BASE_URL = "https://api.weather.gc.ca"
USER_AGENT = "eccc-climate/0.1.0"
REQUEST_TIMEOUT = 60.0

# Station cache
STATIONS_CACHE_FILE = "stations_cache.parquet"
STATIONS_CACHE_MAX_AGE_DAYS = 7

# Pagination
PAGE_SIZE = 1000
NORMALS_LIMIT = 10000

# Collections
STATIONS_COLLECTION = "climate-stations"

INTERVAL_COLLECTIONS = {
    "hour": "climate-hourly",
    "day": "climate-daily",
    "month": "climate-monthly",
}

INTERVAL_FLAGS = {
    "hour": "has_hourly",
    "day": "has_daily",
    "month": "has_monthly",
}

NORMALS_COLLECTIONS = {
    "current": "climate-normals",
    "1991-2020": "climate-normals",
    "1981-2010": "climate-normals-1981-2010",
    "1971-2000": "climate-normals-1971-2000",
}

INTERVALS = list(INTERVAL_COLLECTIONS)


@dataclass
class ClimateConfig:
    """Settings shared by every component of a client."""

    base_url: str = API_BASE_URL
    cache_dir: Path | None = None
    cache_file: str = STATIONS_CACHE_FILE
    max_age: timedelta = timedelta(days=STATIONS_CACHE_MAX_AGE_DAYS)
    page_size: int = PAGE_SIZE
    normals_limit: int = NORMALS_LIMIT
    timeout: float | None = REQUEST_TIMEOUT
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls) -> ClimateConfig:
        """Build a config from ECCC_CLIMATE_* environment variables."""
        config = cls()
        if os.environ.get("ECCC_CLIMATE_BASE_URL"):
            config.base_url = os.environ["ECCC_CLIMATE_BASE_URL"]
        if os.environ.get("ECCC_CLIMATE_CACHE_DIR"):
            config.cache_dir = Path(os.environ["ECCC_CLIMATE_CACHE_DIR"])
        if os.environ.get("ECCC_CLIMATE_CACHE_FILE"):
            config.cache_file = os.environ["ECCC_CLIMATE_CACHE_FILE"]
        if os.environ.get("ECCC_CLIMATE_MAX_AGE_DAYS"):
            config.max_age = timedelta(days=float(os.environ["ECCC_CLIMATE_MAX_AGE_DAYS"]))
        if os.environ.get("ECCC_CLIMATE_TIMEOUT"):
            config.timeout = float(os.environ["ECCC_CLIMATE_TIMEOUT"])
        return config

    def items_url(self, collection: str) -> str:
        return f"{self.base_url.rstrip('/')}/collections/{collection}/items"
