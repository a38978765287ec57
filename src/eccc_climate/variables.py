"""Catalog of the columns each observation collection is expected to return.

Documentation only: downloads keep whatever properties the API sends.
"""

from __future__ import annotations

from eccc_climate.errors import InvalidArgument

VARIABLES = {
    "hour": [
        "LOCAL_DATE", "LOCAL_YEAR", "LOCAL_MONTH", "LOCAL_DAY", "LOCAL_HOUR",
        "TEMP", "TEMP_FLAG", "DEW_POINT_TEMP", "DEW_POINT_TEMP_FLAG",
        "REL_HUMIDITY", "REL_HUMIDITY_FLAG", "WIND_DIR", "WIND_DIR_FLAG",
        "WIND_SPEED", "WIND_SPEED_FLAG", "VISIBILITY", "VISIBILITY_FLAG",
        "STATION_PRESSURE", "STATION_PRESSURE_FLAG", "HUMIDEX", "HUMIDEX_FLAG",
        "WIND_CHILL", "WIND_CHILL_FLAG", "WEATHER", "TOTAL_PRECIPITATION",
        "TOTAL_PRECIPITATION_FLAG", "TOTAL_RAIN", "TOTAL_RAIN_FLAG",
        "TOTAL_SNOW", "TOTAL_SNOW_FLAG", "SNOW_ON_GROUND", "SNOW_ON_GROUND_FLAG",
    ],
    "day": [
        "LOCAL_DATE", "LOCAL_YEAR", "LOCAL_MONTH", "LOCAL_DAY",
        "MEAN_TEMPERATURE", "MEAN_TEMPERATURE_FLAG",
        "MAX_TEMPERATURE", "MAX_TEMPERATURE_FLAG",
        "MIN_TEMPERATURE", "MIN_TEMPERATURE_FLAG",
        "TOTAL_PRECIPITATION", "TOTAL_PRECIPITATION_FLAG",
        "TOTAL_RAIN", "TOTAL_RAIN_FLAG",
        "TOTAL_SNOW", "TOTAL_SNOW_FLAG",
        "SNOW_ON_GROUND", "SNOW_ON_GROUND_FLAG",
        "MAX_REL_HUMIDITY", "MAX_REL_HUMIDITY_FLAG",
        "MIN_REL_HUMIDITY", "MIN_REL_HUMIDITY_FLAG",
        "HEATING_DEGREE_DAYS", "HEATING_DEGREE_DAYS_FLAG",
        "COOLING_DEGREE_DAYS", "COOLING_DEGREE_DAYS_FLAG",
    ],
    "month": [
        "LOCAL_YEAR", "LOCAL_MONTH",
        "MEAN_TEMPERATURE", "MAX_TEMPERATURE", "MIN_TEMPERATURE",
        "MEAN_MAX_TEMPERATURE", "MEAN_MIN_TEMPERATURE",
        "EXTREME_MAX_TEMPERATURE", "EXTREME_MIN_TEMPERATURE",
        "TOTAL_PRECIPITATION", "TOTAL_RAIN", "TOTAL_SNOW",
        "MAX_SNOW_ON_GROUND", "MAX_PRECIPITATION", "MAX_RAIN", "MAX_SNOW",
        "MEAN_PRECIPITATION", "MEAN_NUMBER_DAYS_WITH_PRECIPITATION",
        "MAX_NUMBER_DAYS_WITH_PRECIPITATION", "MIN_NUMBER_DAYS_WITH_PRECIPITATION",
    ],
}


def list_variables(interval: str = "day") -> list[str]:
    if interval not in VARIABLES:
        raise InvalidArgument("interval must be 'hour', 'day', or 'month'")
    return list(VARIABLES[interval])
