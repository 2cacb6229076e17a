"""Map Tool - Google Maps embed view for a pair of coordinates."""

import html
import os
from urllib.parse import urlencode

DEFAULT_MAP_EMBED_URL = 'https://maps.google.com/maps'
MAP_ZOOM = 13
MAP_HEIGHT = 450


def get_map_embed_url() -> str:
    """Get the base URL of the embeddable map view."""
    return os.getenv('MAP_EMBED_URL', DEFAULT_MAP_EMBED_URL)


def build_map_url(lat: float | str, lon: float | str, zoom: int = MAP_ZOOM) -> str:
    """Build the embed URL centered on the coordinates.

    Raises:
        ValueError: If either coordinate is not numeric.
    """
    lat, lon = float(lat), float(lon)
    query = urlencode(
        {
            'q': f'{lat},{lon}',
            't': '',
            'z': zoom,
            'ie': 'UTF8',
            'iwloc': '',
            'output': 'embed',
        },
        safe=',',
    )
    return f'{get_map_embed_url()}?{query}'


def build_map_view(lat: float | str, lon: float | str, display_name: str) -> str:
    """Build the map markup: a heading plus a fixed-size iframe.

    Args:
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
        display_name: Canonical place name shown in the heading.

    Returns:
        HTML snippet ready to be displayed and logged.
    """
    src = html.escape(build_map_url(lat, lon), quote=True)
    return (
        f'<h3>Mapa de {html.escape(display_name)}</h3>\n'
        f'<iframe width="100%" height="{MAP_HEIGHT}" frameborder="0" style="border:0" '
        f'src="{src}" allowfullscreen></iframe>'
    )
