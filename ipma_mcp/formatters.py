# ABOUTME: Turns parsed IPMA payloads into the text blocks returned by each tool.
# ABOUTME: Pure functions: grouping, truncation, UV banding and sentinel suppression live here.

from datetime import datetime
from zoneinfo import ZoneInfo

from ipma_mcp.config import DISPLAY_TIMEZONE
from ipma_mcp.models import (
    ForecastResponse,
    Location,
    ObservationBuckets,
    SeismicEvent,
    StationInfo,
    UVEntry,
    WeatherType,
    WeatherWarning,
)

MAX_SEISMIC_EVENTS = 10
MAX_STATIONS = 15
MAX_UV_DATES = 3
MAX_UV_ENTRIES_PER_DATE = 10

# Readings at or below this value mean "not measured"
UNAVAILABLE_SENTINEL = -99

UNKNOWN_WEATHER_TYPE = "Desconhecido"
NO_WARNINGS_TEXT = "✅ Não há avisos meteorológicos ativos no momento."
NO_SEISMIC_TEXT = "📍 Não há dados sísmicos recentes para a área especificada."
NO_OBSERVATIONS_TEXT = "🌡️ Não há observações disponíveis no momento."
NO_UV_TEXT = "☀️ Não há dados de UV disponíveis no momento."

SEISMIC_AREA_LABELS = {"continent": "Continente", "azores": "Açores", "madeira": "Madeira"}

# (inclusive upper bound, label); first match wins
UV_BANDS = (
    (2, "Baixo 🟢"),
    (5, "Moderado 🟡"),
    (7, "Alto 🟠"),
    (10, "Muito Alto 🔴"),
)
UV_EXTREME = "Extremo 🟣"


def format_timestamp(value: str) -> str:
    """Render an ISO 8601 timestamp as DD/MM/YYYY, HH:MM:SS.

    Offset-aware values are shown in the display time zone; anything that does
    not parse is returned untouched.
    """
    try:
        moment = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return value
    if moment.tzinfo is not None:
        moment = moment.astimezone(ZoneInfo(DISPLAY_TIMEZONE))
    return moment.strftime("%d/%m/%Y, %H:%M:%S")


def _is_measured(value: float | str | None) -> bool:
    """True unless the value is missing or at or below the "not measured" sentinel."""
    if value is None:
        return False
    try:
        return float(value) > UNAVAILABLE_SENTINEL
    except ValueError:
        return True


def location_not_found(city: str) -> str:
    """Informational reply for a city that matches no catalog entry."""
    return f'Cidade "{city}" não encontrada. Use get_locations para ver cidades disponíveis.'


def format_forecast(
    location: Location,
    days: int,
    forecast: ForecastResponse,
    weather_types: list[WeatherType],
) -> str:
    """Render up to `days` forecast days for a resolved location."""
    descriptions = {wt.weather_type_id: wt.description_pt for wt in weather_types}

    lines = [
        f"📍 **Previsão para {location.name}**",
        "",
        f"📍 Coordenadas: {location.latitude}, {location.longitude}",
        f"🕐 Última atualização: {forecast.data_update}",
        "",
    ]
    for day in forecast.data[:days]:
        lines += [
            f"📅 **{day.forecast_date}**",
            f"🌡️ Temperatura: {day.t_min}°C - {day.t_max}°C",
            f"☁️ Condições: {descriptions.get(day.weather_type_id, UNKNOWN_WEATHER_TYPE)}",
            f"🌧️ Probabilidade de precipitação: {day.precipitation_probability}%",
            f"💨 Vento: {day.wind_direction}",
            "",
        ]
    return "\n".join(lines)


def format_warnings(warnings: list[WeatherWarning] | None) -> str:
    """Render active warnings, or a fixed sentence when there are none."""
    if not warnings:
        return NO_WARNINGS_TEXT

    lines = ["⚠️ **Avisos Meteorológicos Ativos**", ""]
    for warning in warnings:
        lines += [
            f"🚨 **{warning.awareness_type}**",
            f"📍 Área: {warning.area_id}",
            f"🔴 Nível: {warning.awareness_level}",
            f"⏰ De: {format_timestamp(warning.start_time)}",
            f"⏰ Até: {format_timestamp(warning.end_time)}",
        ]
        if warning.text:
            lines.append(f"📝 Detalhes: {warning.text}")
        lines.append("")
    return "\n".join(lines)


def seismic_area_label(area: str) -> str:
    """Display name for an area selector; unknown selectors are shown as the continent."""
    return SEISMIC_AREA_LABELS.get(area.lower(), SEISMIC_AREA_LABELS["continent"])


def format_seismic(area: str, events: list[SeismicEvent]) -> str:
    """Render the most recent seismic events, keeping upstream order."""
    if not events:
        return NO_SEISMIC_TEXT

    lines = [
        f"🌍 **Dados Sísmicos - {seismic_area_label(area)}**",
        "",
        f"🕐 Última atualização: {events[0].data_update}",
        "",
    ]
    for event in events[:MAX_SEISMIC_EVENTS]:
        lines += [
            f"📅 **{format_timestamp(event.time)}**",
            f"📍 Local: {event.region or 'N/A'}",
        ]
        if _is_measured(event.magnitude):
            lines.append(f"📏 Magnitude: {event.magnitude} {event.magnitude_type}")
        if _is_measured(event.depth):
            lines.append(f"🌊 Profundidade: {event.depth} km")
        lines += [f"🗺️ Coordenadas: {event.latitude}, {event.longitude}", ""]
    return "\n".join(lines)


def format_locations(locations: list[Location]) -> str:
    """List locations grouped by district id, in the order districts first appear."""
    by_district: dict[int, list[Location]] = {}
    for location in locations:
        by_district.setdefault(location.district_id, []).append(location)

    lines = ["📍 **Locais Disponíveis para Previsão**", ""]
    for district_id, members in by_district.items():
        lines.append(f"**Região {district_id}:**")
        lines += [f"• {loc.name} ({loc.latitude}, {loc.longitude})" for loc in members]
        lines.append("")
    return "\n".join(lines)


def format_stations(observations: ObservationBuckets, stations: list[StationInfo]) -> str:
    """Render the latest observation bucket for the first stations it lists."""
    if not observations:
        return NO_OBSERVATIONS_TEXT

    names = {station.properties.station_id: station.properties.name for station in stations}
    # Bucket keys are ISO timestamps, so the greatest key is the most recent
    latest = max(observations)
    readings = observations[latest]

    lines = ["🌡️ **Observações das Estações Meteorológicas**", "", f"🕐 Observações de: {latest}", ""]
    for station_id in list(readings)[:MAX_STATIONS]:
        obs = readings[station_id]
        lines.append(f"📍 **{names.get(station_id, f'Estação {station_id}')}**")
        if obs is not None:
            if _is_measured(obs.temperature):
                lines.append(f"🌡️ Temperatura: {obs.temperature}°C")
            if _is_measured(obs.humidity):
                lines.append(f"💧 Humidade: {obs.humidity}%")
            if _is_measured(obs.pressure):
                lines.append(f"📊 Pressão: {obs.pressure} hPa")
            if _is_measured(obs.wind_intensity):
                lines.append(f"💨 Vento: {obs.wind_intensity} m/s")
            if _is_measured(obs.accumulated_precipitation):
                lines.append(f"🌧️ Precipitação: {obs.accumulated_precipitation} mm")
        lines.append("")
    return "\n".join(lines)


def classify_uv(index: float) -> str:
    """Return the UV band label for a numeric UV index."""
    for upper, label in UV_BANDS:
        if index <= upper:
            return label
    return UV_EXTREME


def format_uv(entries: list[UVEntry], locations: list[Location]) -> str:
    """Render UV forecasts grouped by date, then by location."""
    if not entries:
        return NO_UV_TEXT

    names = {loc.global_id: loc.name for loc in locations}
    by_date: dict[str, list[tuple[UVEntry, float]]] = {}
    for entry in entries:
        try:
            index = float(entry.uv_index)
        except ValueError:
            continue
        if index > UNAVAILABLE_SENTINEL:
            by_date.setdefault(entry.date, []).append((entry, index))
    if not by_date:
        return NO_UV_TEXT

    lines = ["☀️ **Previsão do Índice UV**", ""]
    for date in list(by_date)[:MAX_UV_DATES]:
        lines.append(f"📅 **{date}**")
        for uv, index in by_date[date][:MAX_UV_ENTRIES_PER_DATE]:
            name = names.get(uv.global_id, f"Local {uv.global_id}")
            lines.append(f"• {name}: UV {uv.uv_index} ({classify_uv(index)}) - {uv.interval}")
        lines.append("")
    return "\n".join(lines)
