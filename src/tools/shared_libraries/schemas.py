"""Pydantic models exchanged between the clients, the store and the server."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SearchType(str, Enum):
    """Labels stored with every logged search."""

    CURRENT = 'Tiempo Actual'
    FORECAST = 'Pronóstico 15 Días'
    MAP = 'Mapa'


class GeocodeResult(BaseModel):
    """Most likely match for a free-text place name."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    lat: float
    lon: float


class CurrentWeather(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: float
    windspeed: float
    time: str


class DailyForecast(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    temp_max: float | None = None
    temp_min: float | None = None


class SearchEvent(BaseModel):
    """One immutable row of the search log."""

    model_config = ConfigDict(frozen=True)

    id: int
    ip: str | None = None
    city: str | None = None
    search_type: str | None = None
    result: str | None = None
    timestamp: str


class SearchRequest(BaseModel):
    """Body of ``POST /api/search``."""

    search_type: str = Field(description='Kind of search that was displayed')
    city: str = Field(description='Place name as typed by the user')
    result: str = Field(description='Rendered markup shown to the user')


class SearchSaved(BaseModel):
    message: str
    id: int
