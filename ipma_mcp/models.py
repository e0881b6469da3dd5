# ABOUTME: Pydantic BaseModels for the IPMA open-data JSON payloads.
# ABOUTME: Maps upstream Portuguese camelCase fields onto snake_case attributes via aliases.

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IpmaModel(BaseModel):
    """Base for upstream records: accepts aliases or field names, ignores unknown keys."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class Location(IpmaModel):
    """A forecast location (district capital or island) from distrits-islands.json."""

    global_id: int = Field(alias="globalIdLocal")
    name: str = Field(alias="local")
    district_id: int = Field(alias="idDistrito")
    region_id: int | None = Field(default=None, alias="idRegiao")
    municipality_id: int | None = Field(default=None, alias="idConcelho")
    warning_area_id: str | None = Field(default=None, alias="idAreaAviso")
    latitude: str
    longitude: str


class LocationsResponse(IpmaModel):
    data: list[Location] = []


class ForecastDay(IpmaModel):
    """One day of forecast for a single location."""

    forecast_date: str = Field(alias="forecastDate")
    t_min: str = Field(alias="tMin")
    t_max: str = Field(alias="tMax")
    precipitation_probability: str = Field(alias="precipitaProb")
    wind_direction: str = Field(alias="predWindDir")
    weather_type_id: int = Field(alias="idWeatherType")
    wind_speed_class: int | None = Field(default=None, alias="classWindSpeed")
    latitude: str | None = None
    longitude: str | None = None


class ForecastResponse(IpmaModel):
    """Daily forecast series for one location."""

    global_id: int | None = Field(default=None, alias="globalIdLocal")
    data_update: str | None = Field(default=None, alias="dataUpdate")
    data: list[ForecastDay] = []


class WeatherType(IpmaModel):
    weather_type_id: int = Field(alias="idWeatherType")
    description_pt: str = Field(alias="descWeatherTypePT")
    description_en: str = Field(alias="descWeatherTypeEN")


class WeatherTypesResponse(IpmaModel):
    data: list[WeatherType] = []


class WeatherWarning(IpmaModel):
    """An active weather warning for one warning area."""

    area_id: str = Field(alias="idAreaAviso")
    awareness_level: str = Field(alias="awarenessLevelID")
    awareness_type: str = Field(alias="awarenessTypeName")
    text: str | None = None
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")


class SeismicEvent(IpmaModel):
    """A single seismic event as published for one area."""

    time: str
    data_update: str | None = Field(default=None, alias="dataUpdate")
    magnitude: str = Field(alias="magnitud")
    magnitude_type: str = Field(alias="magType")
    depth: int | float
    latitude: str = Field(alias="lat")
    longitude: str = Field(alias="lon")
    region: str | None = Field(default=None, alias="obsRegion")
    local: str | None = None
    degree: str | None = None
    source: str | None = None


class SeismicResponse(IpmaModel):
    data: list[SeismicEvent] = []

    @field_validator("data", mode="before")
    @classmethod
    def null_data_is_empty(cls, value: Any) -> Any:
        """IPMA publishes `"data": null` for an area with no recent events."""
        return [] if value is None else value


class StationProperties(IpmaModel):
    station_id: str = Field(alias="idEstacao")
    name: str = Field(alias="localEstacao")


class StationInfo(IpmaModel):
    """A GeoJSON feature from the station catalog."""

    properties: StationProperties


class StationObservation(IpmaModel):
    """Readings of one station; values of -99 mean the sensor reported nothing."""

    temperature: float | None = Field(default=None, alias="temperatura")
    humidity: float | None = Field(default=None, alias="humidade")
    pressure: float | None = Field(default=None, alias="pressao")
    wind_intensity: float | None = Field(default=None, alias="intensidadeVento")
    accumulated_precipitation: float | None = Field(default=None, alias="precAcumulada")


# timestamp -> station id -> readings (upstream publishes null for silent stations)
ObservationBuckets = dict[str, dict[str, StationObservation | None]]


class UVEntry(IpmaModel):
    """UV index forecast for one location, date and time interval."""

    date: str = Field(alias="data")
    global_id: int = Field(alias="globalIdLocal")
    uv_index: str = Field(alias="iUv")
    interval: str = Field(alias="intervaloHora")