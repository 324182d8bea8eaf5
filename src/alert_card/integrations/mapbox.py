import io
from functools import lru_cache
from urllib.parse import quote

import requests
from PIL import Image, UnidentifiedImageError
from colorama import Fore, Back

from alert_card.constants import NWS_USER_AGENT
from alert_card.errors import AssetLoadFailed, BackdropFetchFailed

MAPBOX_STATIC_URL = 'https://api.mapbox.com/styles/v1/{style}/static/{overlay}{lng},{lat},{zoom}/{width}x{height}'


def build_path_overlay(encoded_path, render_config):
    """Mapbox path overlay: path-{width}+{color}-{opacity}({polyline})"""
    if not encoded_path:
        return ''
    cfg = render_config
    return f'path-{cfg.path_width}+{cfg.path_color}-{cfg.path_opacity}({quote(encoded_path, safe="")})'


def build_static_map_url(viewport, render_config):
    """Static image URL (without the token) for the map area of the card"""
    overlay = build_path_overlay(viewport.encoded_path, render_config)
    return MAPBOX_STATIC_URL.format(
        style=render_config.map_style,
        overlay=f'{overlay}/' if overlay else '',
        lng=viewport.center_lng,
        lat=viewport.center_lat,
        zoom=viewport.zoom_level,
        width=render_config.map_width,
        height=render_config.map_height,
    )


def fetch_backdrop(viewport, render_config, access_token, timeout=30):
    """Downloads the static map for the alert.

    Args:
        viewport (ViewportSpec): center/zoom/path for the request
        render_config (RenderConfig): map size and overlay style
        access_token (str): Mapbox token
        timeout (float): seconds to wait on the request

    Returns:
        PIL.Image: RGB backdrop

    Raises:
        BackdropFetchFailed: network error, non 2xx response, or a body that isn't an image
    """
    url = build_static_map_url(viewport, render_config)
    print(Fore.CYAN + f'Requesting backdrop {url}' + Fore.RESET)
    try:
        response = requests.get(
            url,
            params={'access_token': access_token},
            headers={'User-Agent': NWS_USER_AGENT},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        print(Back.RED + f'Backdrop request failed: {e}' + Back.RESET)
        raise BackdropFetchFailed(f'static map request failed: {e}') from e

    try:
        backdrop = Image.open(io.BytesIO(response.content))
        backdrop.load()
    except (UnidentifiedImageError, OSError) as e:
        raise BackdropFetchFailed(f'static map response was not an image: {e}') from e
    return backdrop.convert('RGB')


@lru_cache(maxsize=4)
def load_logo(path):
    """Loads the logo once per path. Failures aren't cached, so a fixed file gets picked up next time.

    Raises:
        AssetLoadFailed: file missing or not an image
    """
    try:
        with Image.open(path) as img:
            logo = img.convert('RGBA')
    except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
        print(Back.RED + f'Error loading logo {path}: {e}' + Back.RESET)
        raise AssetLoadFailed(f'could not load logo {path}: {e}') from e
    print(Back.GREEN + f'Logo loaded from {path}' + Back.RESET)
    return logo
