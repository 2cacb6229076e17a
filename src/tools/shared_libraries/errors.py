"""Error taxonomy shared by the API clients, the store and the orchestrator."""


class WeatherSearchError(Exception):
    """Base class for all weather search errors."""


class ValidationError(WeatherSearchError):
    """The user supplied a blank place name."""


class NotFoundError(WeatherSearchError):
    """Geocoding returned no matching locality."""


class TransportError(WeatherSearchError):
    """An external provider could not be reached or returned unusable data."""


class StoreError(WeatherSearchError):
    """The search log could not be written or read."""
