"""Shared helper functions for rendering weather results."""

import html
from collections.abc import Iterable

from .schemas import CurrentWeather, DailyForecast, GeocodeResult, SearchEvent

NO_HISTORY_MESSAGE = 'No hay búsquedas registradas para tu IP.'
MISSING_VALUE = '-'


def format_number(value: float) -> str:
    """Format a provider number the way it was sent (15.0 -> "15")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_temperature(temp: float | None) -> str:
    """Format temperature with the Celsius unit symbol.

    Args:
        temp: Temperature value, None when the provider has no reading.

    Returns:
        Formatted temperature string.
    """
    if temp is None:
        return MISSING_VALUE
    return f'{format_number(temp)}°C'


def render_current_weather(location: GeocodeResult, weather: CurrentWeather) -> str:
    """Render the current weather snapshot for a location."""
    return (
        f'<h3>Tiempo Actual en {html.escape(location.display_name)}</h3>\n'
        f'<p><strong>Temperatura:</strong> {format_temperature(weather.temperature)}</p>\n'
        f'<p><strong>Viento:</strong> {format_number(weather.windspeed)} km/h</p>\n'
        f'<p><strong>Hora:</strong> {html.escape(weather.time)}</p>'
    )


def render_forecast(location: GeocodeResult, days: Iterable[DailyForecast]) -> str:
    """Render one line per forecast day, keeping the given order."""
    lines = [f'<h3>Pronóstico a 15 días para {html.escape(location.display_name)}</h3>']
    for day in days:
        lines.append(
            f'<p><strong>{html.escape(day.date)}:</strong> '
            f'Máx: {format_temperature(day.temp_max)}, '
            f'Mín: {format_temperature(day.temp_min)}</p>'
        )
    return '\n'.join(lines)


def render_history(events: Iterable[SearchEvent]) -> str:
    """Render logged searches in the order received (newest first).

    Args:
        events: Search events as returned by the history endpoint.

    Returns:
        HTML snippet with one block per event, or a notice when empty.
    """
    parts = ['<h3>Historial de Búsquedas</h3>']
    items = list(events)
    if not items:
        parts.append(f'<p>{NO_HISTORY_MESSAGE}</p>')
        return '\n'.join(parts)

    for event in items:
        # result is markup produced by the renderers above
        parts.append(
            '<div class="history-item">\n'
            f'<p><strong>Fecha:</strong> {html.escape(event.timestamp)}</p>\n'
            f'<p><strong>Ciudad:</strong> {html.escape(event.city or "")}</p>\n'
            f'<p><strong>Tipo:</strong> {html.escape(event.search_type or "")}</p>\n'
            f'<p><strong>Resultado:</strong> {event.result or ""}</p>\n'
            '<hr>\n'
            '</div>'
        )
    return '\n'.join(parts)
