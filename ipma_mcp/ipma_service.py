# ABOUTME: Service layer for IPMA open-data API calls and response parsing.
# ABOUTME: Handles the location catalog, forecasts, warnings, seismic, station and UV endpoints.

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from ipma_mcp.config import IPMA_BASE_URL
from ipma_mcp.models import (
    ForecastResponse,
    Location,
    LocationsResponse,
    ObservationBuckets,
    SeismicEvent,
    SeismicResponse,
    StationInfo,
    UVEntry,
    WeatherType,
    WeatherTypesResponse,
    WeatherWarning,
)

logger = logging.getLogger(__name__)

LOCATIONS_PATH = "/distrits-islands.json"
DAILY_FORECAST_PATH = "/forecast/meteorology/cities/daily/{global_id}.json"
WEATHER_TYPES_PATH = "/weather-type-classe.json"
WARNINGS_PATH = "/forecast/warnings/warnings_www.json"
SEISMIC_PATH = "/observation/seismic/{area_id}.json"
OBSERVATIONS_PATH = "/observation/meteorology/stations/observations.json"
STATIONS_PATH = "/observation/meteorology/stations/stations.json"
UV_PATH = "/forecast/meteorology/uv/uv.json"

SEISMIC_AREAS = {"continent": 1, "azores": 2, "madeira": 3}
DEFAULT_SEISMIC_AREA = "continent"

_warnings_adapter = TypeAdapter(list[WeatherWarning])
_observations_adapter = TypeAdapter(ObservationBuckets)
_stations_adapter = TypeAdapter(list[StationInfo])
_uv_adapter = TypeAdapter(list[UVEntry])


async def fetch_json(client: httpx.AsyncClient, path: str) -> Any:
    """GET a path under the IPMA base URL and return the decoded JSON body."""
    url = f"{IPMA_BASE_URL}{path}"
    logger.debug("Fetching %s", url)
    resp = await client.get(url)
    resp.raise_for_status()
    return resp.json()


async def get_locations(client: httpx.AsyncClient) -> list[Location]:
    """Fetch the full catalog of forecast locations, in upstream order."""
    data = await fetch_json(client, LOCATIONS_PATH)
    return LocationsResponse.model_validate(data).data


def find_location(locations: list[Location], city: str) -> Location | None:
    """Return the first location whose name contains `city`, ignoring case.

    No ranking is applied: with several matches the catalog order decides.
    """
    needle = city.lower()
    for location in locations:
        if needle in location.name.lower():
            return location
    return None


async def resolve_location(client: httpx.AsyncClient, city: str) -> Location | None:
    """Resolve a free-text place name to a catalog location, or None if nothing matches."""
    location = find_location(await get_locations(client), city)
    if location is None:
        logger.info("No location matches %r", city)
    return location


async def get_daily_forecast(client: httpx.AsyncClient, global_id: int) -> ForecastResponse:
    """Fetch the daily forecast series for one location id."""
    data = await fetch_json(client, DAILY_FORECAST_PATH.format(global_id=global_id))
    return ForecastResponse.model_validate(data)


async def get_weather_types(client: httpx.AsyncClient) -> list[WeatherType]:
    """Fetch the weather-type catalog mapping type ids to descriptions."""
    data = await fetch_json(client, WEATHER_TYPES_PATH)
    return WeatherTypesResponse.model_validate(data).data


async def get_warnings(client: httpx.AsyncClient) -> list[WeatherWarning]:
    """Fetch the active warnings. Anything other than a list is treated as no warnings."""
    data = await fetch_json(client, WARNINGS_PATH)
    if not isinstance(data, list):
        return []
    return _warnings_adapter.validate_python(data)


def seismic_area_id(area: str) -> int:
    """Map an area selector to the upstream area id; unknown selectors mean the continent."""
    return SEISMIC_AREAS.get(area.lower(), SEISMIC_AREAS[DEFAULT_SEISMIC_AREA])


async def get_seismic_events(client: httpx.AsyncClient, area_id: int) -> list[SeismicEvent]:
    """Fetch recent seismic events for an area id, most recent first as published."""
    data = await fetch_json(client, SEISMIC_PATH.format(area_id=area_id))
    return SeismicResponse.model_validate(data).data


async def get_station_observations(client: httpx.AsyncClient) -> ObservationBuckets:
    """Fetch the observation snapshot keyed by timestamp, then by station id."""
    data = await fetch_json(client, OBSERVATIONS_PATH)
    return _observations_adapter.validate_python(data)


async def get_stations(client: httpx.AsyncClient) -> list[StationInfo]:
    """Fetch the station catalog used to name observation entries."""
    data = await fetch_json(client, STATIONS_PATH)
    return _stations_adapter.validate_python(data)


async def get_uv_forecast(client: httpx.AsyncClient) -> list[UVEntry]:
    """Fetch the UV index forecast. Anything other than a list is treated as no data."""
    data = await fetch_json(client, UV_PATH)
    if not isinstance(data, list):
        return []
    return _uv_adapter.validate_python(data)
