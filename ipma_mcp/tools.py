# ABOUTME: Tool table and dispatcher mapping tool calls onto IPMA fetch-and-format pipelines.
# ABOUTME: Validates arguments before any remote call and normalizes failures at a single edge.

import logging
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ipma_mcp.deps import IpmaDeps
from ipma_mcp.errors import InvalidParams, MethodNotFound, normalize_error
from ipma_mcp.formatters import (
    format_forecast,
    format_locations,
    format_seismic,
    format_stations,
    format_uv,
    format_warnings,
    location_not_found,
)
from ipma_mcp.ipma_service import (
    get_daily_forecast,
    get_locations,
    get_seismic_events,
    get_station_observations,
    get_stations,
    get_uv_forecast,
    get_warnings,
    get_weather_types,
    resolve_location,
    seismic_area_id,
)

logger = logging.getLogger(__name__)

DEFAULT_DAYS = 5
DEFAULT_AREA = "all"


class NoParams(BaseModel):
    """Arguments of tools that take none."""


class ForecastParams(BaseModel):
    city: str = Field(min_length=1, description="Nome da cidade (ex: Lisboa, Porto, Coimbra, Faro, etc.)")
    days: int | None = Field(default=DEFAULT_DAYS, ge=1, description="Número de dias de previsão (máximo 10)")

    @field_validator("days", mode="before")
    @classmethod
    def default_unset_days(cls, value: Any) -> Any:
        """Null and 0 mean "not given" and fall back to the default day count."""
        return DEFAULT_DAYS if value is None or value == 0 else value


class SeismicParams(BaseModel):
    area: str | None = Field(default=DEFAULT_AREA, description="Área: 'continent', 'azores', 'madeira', ou 'all'")

    @field_validator("area", mode="before")
    @classmethod
    def default_unset_area(cls, value: Any) -> Any:
        """Null or empty area means "not given" and falls back to the default selector."""
        return value or DEFAULT_AREA


ToolHandler = Callable[[httpx.AsyncClient, Any], Awaitable[str]]


class Tool(BaseModel):
    """One callable tool: its advertised schema and the pipeline that serves it."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    action: str
    params: type[BaseModel]
    handler: ToolHandler

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the parameter model, as advertised to clients."""
        return self.params.model_json_schema()


async def weather_forecast(client: httpx.AsyncClient, params: ForecastParams) -> str:
    """Resolve the city, then fetch its daily forecast and the weather-type catalog."""
    location = await resolve_location(client, params.city)
    if location is None:
        return location_not_found(params.city)
    forecast = await get_daily_forecast(client, location.global_id)
    weather_types = await get_weather_types(client)
    return format_forecast(location, params.days, forecast, weather_types)


async def weather_warnings(client: httpx.AsyncClient, params: NoParams) -> str:
    """Fetch and render the active weather warnings."""
    return format_warnings(await get_warnings(client))


async def seismic_data(client: httpx.AsyncClient, params: SeismicParams) -> str:
    """Fetch recent seismic events for the selected area."""
    events = await get_seismic_events(client, seismic_area_id(params.area))
    return format_seismic(params.area, events)


async def locations(client: httpx.AsyncClient, params: NoParams) -> str:
    """Fetch the location catalog and render it grouped by district."""
    return format_locations(await get_locations(client))


async def weather_stations(client: httpx.AsyncClient, params: NoParams) -> str:
    """Fetch the observation snapshot, then the station catalog for display names."""
    observations = await get_station_observations(client)
    stations = await get_stations(client)
    return format_stations(observations, stations)


async def uv_forecast(client: httpx.AsyncClient, params: NoParams) -> str:
    """Fetch the UV list; the location catalog is only needed when there is something to show."""
    entries = await get_uv_forecast(client)
    if not entries:
        return format_uv([], [])
    return format_uv(entries, await get_locations(client))


TOOLS: Mapping[str, Tool] = MappingProxyType(
    {
        tool.name: tool
        for tool in (
            Tool(
                name="get_weather_forecast",
                description="Obter previsão meteorológica para uma cidade específica em Portugal",
                action="obter previsão",
                params=ForecastParams,
                handler=weather_forecast,
            ),
            Tool(
                name="get_weather_warnings",
                description="Obter avisos meteorológicos ativos em Portugal",
                action="obter avisos",
                params=NoParams,
                handler=weather_warnings,
            ),
            Tool(
                name="get_seismic_data",
                description="Obter dados sísmicos recentes",
                action="obter dados sísmicos",
                params=SeismicParams,
                handler=seismic_data,
            ),
            Tool(
                name="get_locations",
                description="Listar todas as cidades/locais disponíveis para previsão",
                action="obter locais",
                params=NoParams,
                handler=locations,
            ),
            Tool(
                name="get_weather_stations",
                description="Obter dados de observação das estações meteorológicas",
                action="obter dados das estações",
                params=NoParams,
                handler=weather_stations,
            ),
            Tool(
                name="get_uv_forecast",
                description="Obter previsão do índice UV",
                action="obter previsão UV",
                params=NoParams,
                handler=uv_forecast,
            ),
        )
    }
)


def parse_arguments(tool: Tool, arguments: Mapping[str, Any] | None) -> BaseModel:
    """Validate raw call arguments against the tool's parameter model.

    Raises:
        InvalidParams: If a required argument is missing or has the wrong type.
    """
    try:
        return tool.params.model_validate(dict(arguments or {}))
    except ValidationError as e:
        if any(err["loc"] == ("city",) and err["type"] in ("missing", "string_too_short") for err in e.errors()):
            raise InvalidParams("City parameter is required") from e
        summary = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise InvalidParams(f"Invalid arguments for {tool.name}: {summary}") from e


async def dispatch(deps: IpmaDeps, name: str, arguments: Mapping[str, Any] | None = None) -> str:
    """Run one tool call and return its text result.

    Every failure leaves this function as a ToolError: argument and lookup errors
    as raised, anything else wrapped as InternalError.
    """
    tool = TOOLS.get(name)
    try:
        if tool is None:
            raise MethodNotFound(f"Tool {name} not found")
        params = parse_arguments(tool, arguments)
        logger.info("Calling %s with %s", name, params.model_dump())
        return await tool.handler(deps.http_client, params)
    except Exception as exc:
        error = normalize_error(exc, tool.action if tool else "executar ferramenta")
        if error is exc:
            logger.info("Tool call %s rejected: %s", name, error.message)
            raise
        logger.exception("Tool call %s failed", name)
        raise error from exc
