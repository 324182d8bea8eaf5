import asyncio
from colorama import Fore, Back

from alert_card.cardmaker import format_alert_time, render_alert_card
from alert_card.gfx_tools.details_box import get_threat_summary, is_severe_event
from alert_card.gfx_tools.get_alert_geometry import get_viewport
from alert_card.integrations.mapbox import fetch_backdrop, load_logo
from alert_card.models import RenderedAlert
from alert_card.render_config import DEFAULT_RENDER_CONFIG


def build_caption(alert, render_config=DEFAULT_RENDER_CONFIG):
    """'Tornado Warning for Twiggs, Wilkinson until MARCH 31, 03:15 PM EDT!'"""
    punc = '!' if is_severe_event(alert.event) else '.'
    expires = format_alert_time(alert.expires, render_config)
    return f'{alert.event} for {alert.area_desc} until {expires}{punc}'


def render_alert(alert, access_token, render_config=DEFAULT_RENDER_CONFIG):
    """Runs one alert through the whole pipeline.

    Args:
        alert (Alert): alert to draw
        access_token (str): token for the static map provider
        render_config (RenderConfig): sizes/colors/fonts/logo path

    Returns:
        RenderedAlert: PNG bytes + caption

    Raises:
        BackdropFetchFailed, AssetLoadFailed, EncodingFailed
    """
    print(Fore.LIGHTBLUE_EX + f'Rendering {alert.event} ({alert.id})' + Fore.RESET)
    viewport = get_viewport(alert.geometry)
    threats = get_threat_summary(alert.description, alert.event)
    backdrop = fetch_backdrop(viewport, render_config, access_token)
    logo = load_logo(render_config.logo_path)
    image = render_alert_card(alert, viewport, threats, backdrop, logo, render_config)
    return RenderedAlert(alert_id=alert.id, image=image, caption=build_caption(alert, render_config))


async def render_alert_async(alert, access_token, render_config=DEFAULT_RENDER_CONFIG):
    """Same as render_alert, but the network fetch and logo load happen off the
    event loop so several alerts can be in flight at once. Cancelling the task drops the render."""
    viewport = get_viewport(alert.geometry)
    threats = get_threat_summary(alert.description, alert.event)
    backdrop = await asyncio.to_thread(fetch_backdrop, viewport, render_config, access_token)
    logo = await asyncio.to_thread(load_logo, render_config.logo_path)
    image = render_alert_card(alert, viewport, threats, backdrop, logo, render_config)
    return RenderedAlert(alert_id=alert.id, image=image, caption=build_caption(alert, render_config))


async def render_alerts(alerts, access_token, render_config=DEFAULT_RENDER_CONFIG):
    """Renders a batch concurrently. One alert failing doesn't touch the others.

    Returns:
        list: a RenderedAlert or the exception it failed with, in the same order as alerts
    """
    results = await asyncio.gather(
        *(render_alert_async(alert, access_token, render_config) for alert in alerts),
        return_exceptions=True,
    )
    failed = sum(isinstance(r, Exception) for r in results)
    if failed:
        print(Back.YELLOW + f'{failed} of {len(results)} renders failed' + Back.RESET)
    return results
