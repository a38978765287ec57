"""eccc-climate - station search and climate data downloads from the MSC GeoMet API."""

__version__ = "0.1.0"

from eccc_climate.client import ClimateClient
from eccc_climate.config import ClimateConfig
from eccc_climate.errors import (
    CacheDirWarning,
    CacheWriteWarning,
    ClimateError,
    DownloadCancelled,
    InvalidArgument,
    NotFound,
    TransportError,
)
from eccc_climate.results import BatchResult, UnitError
from eccc_climate.variables import list_variables

__all__ = [
    "ClimateClient",
    "ClimateConfig",
    "BatchResult",
    "UnitError",
    "ClimateError",
    "InvalidArgument",
    "NotFound",
    "TransportError",
    "DownloadCancelled",
    "CacheWriteWarning",
    "CacheDirWarning",
    "list_variables",
]
