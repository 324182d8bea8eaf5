import io
import time

import pytz
from PIL import Image, ImageDraw
from colorama import Fore, Back

from alert_card.constants import BADGE_COLORS
from alert_card.errors import EncodingFailed
from alert_card.gfx_tools.details_box import format_threat_values, is_severe_event
from alert_card.gfx_tools.drawing import draw_badge, fill_gradient_rect, load_fonts
from alert_card.gfx_tools.text_layout import draw_lines, layout_lines, text_measurer, wrap_text
from alert_card.render_config import DEFAULT_RENDER_CONFIG

'''
LAYER STACK (bottom to top)
1 - banner
2 - map backdrop
3 - county footer
4 - sidebar panel
5 - sidebar info (sender, time badges, narrative)
6 - hazard badges (tor/svr only)
7 - logo
'''


def format_alert_time(dt, render_config):
    """Formats a timestamp in the card's target time zone, e.g. 'MARCH 31, 02:40 PM EDT'"""
    local_dt = dt.astimezone(pytz.timezone(render_config.target_timezone))
    return local_dt.strftime(render_config.time_format).upper()


def draw_banner(canvas, draw, event, fonts, cfg):
    fill_gradient_rect(canvas, (0, 0, cfg.width, cfg.banner_height), cfg.banner_colors)
    draw.text((cfg.width / 2, cfg.banner_baseline), event.upper(), font=fonts('bold', 22),
              fill=cfg.text_color, anchor='ms')


def draw_backdrop(canvas, backdrop, cfg):
    size = (cfg.map_width, cfg.map_height)
    backdrop = backdrop.convert('RGB')
    if backdrop.size != size:
        backdrop = backdrop.resize(size, Image.Resampling.LANCZOS)
    canvas.paste(backdrop, (0, cfg.map_top))


def draw_county_footer(canvas, draw, area_desc, fonts, cfg):
    """Gradient bar along the bottom of the map with the wrapped county list.

    The bar grows upward one line at a time when the counties don't fit on one line.

    Returns:
        tuple: (footer_top, footer_height) so the logo can be centered in it
    """
    font = fonts('semibold', 14)
    lines = layout_lines(f'Counties: {area_desc}', cfg.map_width - 2 * cfg.footer_text_margin,
                         text_measurer(draw, font), max_lines=cfg.footer_max_lines)
    footer_height = cfg.footer_height + (len(lines) - 1) * cfg.footer_line_height
    footer_top = cfg.height - footer_height
    fill_gradient_rect(canvas, (0, footer_top, cfg.map_width, footer_height), cfg.footer_colors)

    first_baseline = cfg.height - cfg.footer_baseline_inset - (len(lines) - 1) * cfg.footer_line_height
    draw_lines(draw, lines, cfg.map_width / 2, first_baseline, cfg.footer_line_height, font,
               fill=cfg.text_color, align='center')
    return footer_top, footer_height


def draw_sidebar_panel(draw, cfg):
    draw.rectangle(
        [cfg.width - cfg.panel_width, cfg.banner_height, cfg.width - 1, cfg.height - 1],
        fill=cfg.sidebar_color,
    )


def draw_time_badge(canvas, draw, y, label, when, colors, fonts, cfg):
    """Draws one IN EFFECT/EXPIRES badge with its top at y. Returns the y just below it."""
    box = (cfg.content_x, y, cfg.content_width, cfg.time_badge_height)
    draw_badge(canvas, draw, box, colors, cfg.badge_radius, label, format_alert_time(when, cfg),
               fonts('semibold', 12), fonts('medium', 11), 15, 30, fill=cfg.text_color)
    return y + cfg.time_badge_height


def draw_sidebar_info(canvas, draw, alert, show_badges, fonts, cfg):
    """Sender, time badges and narrative, top to bottom.

    Returns:
        int: y of the bottom of the time badges, which the hazard grid is laid out from
    """
    x = cfg.content_x
    cursor = cfg.banner_height + 20
    cursor = wrap_text(draw, alert.sender_name.upper(), x, cursor, cfg.content_width,
                       cfg.sender_line_height, fonts('semibold', 13), fill=cfg.text_color,
                       max_lines=cfg.sender_max_lines)
    cursor += 30

    cursor = draw_time_badge(canvas, draw, cursor, 'IN EFFECT:', alert.effective, cfg.effective_colors, fonts, cfg)
    cursor = draw_time_badge(canvas, draw, cursor, 'EXPIRES:', alert.expires, cfg.expires_colors, fonts, cfg)
    badges_bottom = cursor

    narrative_y = cursor + 20
    if show_badges:
        text_limit = cursor + cfg.hazard_grid_offset - 12 #leave room for descenders above the grid
    else:
        text_limit = cfg.height - cfg.sidebar_padding
    max_lines = max(1, int((text_limit - narrative_y) // cfg.narrative_line_height) + 1)
    wrap_text(draw, alert.description, x, narrative_y, cfg.content_width, cfg.narrative_line_height,
              fonts('regular', 13), fill=cfg.text_color, max_lines=max_lines)
    return badges_bottom


def draw_hazard_badges(canvas, draw, event, threats, top, fonts, cfg):
    """2x2 grid: TORNADO WIND / HAIL MOTION"""
    colors = BADGE_COLORS['tornado'] if 'TORNADO' in event.upper() else BADGE_COLORS['severe']
    size = cfg.hazard_box_size
    step = size + cfg.hazard_box_spacing
    start_x = cfg.content_x
    start_y = top + cfg.hazard_grid_offset
    for i, (label, value) in enumerate(format_threat_values(threats)):
        row, col = divmod(i, 2)
        box = (start_x + col * step, start_y + row * step, size, size)
        draw_badge(canvas, draw, box, colors, cfg.badge_radius, label, value,
                   fonts('semibold', 14), fonts('medium', 13), size // 2 - 5, size // 2 + 15,
                   fill=cfg.text_color)


def draw_logo(canvas, logo, footer_top, footer_height, cfg):
    """Logo in the bottom left corner of the footer, vertically centered in the bar"""
    logo = logo.convert('RGBA')
    logo_height = logo.height / logo.width * cfg.logo_width
    size = (max(1, round(cfg.logo_width * cfg.logo_scale)), max(1, round(logo_height * cfg.logo_scale)))
    y = round(footer_top + (footer_height - logo_height) / 2 + 2)
    resized = logo.resize(size, Image.Resampling.LANCZOS)
    canvas.paste(resized, (cfg.logo_x, y), resized)


def encode_png(canvas):
    buffer = io.BytesIO()
    try:
        canvas.save(buffer, format='PNG')
    except (OSError, ValueError) as e:
        raise EncodingFailed(f'could not encode alert card as PNG: {e}') from e
    return buffer.getvalue()


def render_alert_card(alert, viewport, threats, backdrop, logo, render_config=DEFAULT_RENDER_CONFIG):
    """Composites the alert card.

    Args:
        alert (Alert): the alert being drawn
        viewport (ViewportSpec): what the backdrop was requested with (only used for logging here)
        threats (ThreatSummary): hazard facts for the badge grid
        backdrop (PIL.Image): static map, ideally already map_width x map_height
        logo (PIL.Image): logo, any size, scaled to logo_width
        render_config (RenderConfig): sizes/colors/fonts

    Returns:
        bytes: PNG of the finished card

    Raises:
        EncodingFailed: if the PNG can't be written
    """
    render_start_time = time.time()
    cfg = render_config
    fonts = load_fonts(cfg)
    canvas = Image.new('RGB', (cfg.width, cfg.height), cfg.background)
    draw = ImageDraw.Draw(canvas)
    show_badges = is_severe_event(alert.event)

    draw_banner(canvas, draw, alert.event, fonts, cfg)
    draw_backdrop(canvas, backdrop, cfg)
    footer_top, footer_height = draw_county_footer(canvas, draw, alert.area_desc, fonts, cfg)
    draw_sidebar_panel(draw, cfg)
    badges_bottom = draw_sidebar_info(canvas, draw, alert, show_badges, fonts, cfg)
    if show_badges:
        draw_hazard_badges(canvas, draw, alert.event, threats, badges_bottom, fonts, cfg)
    else:
        print(Back.YELLOW + f'{alert.event} is not tor/svr, skipping hazard badges.' + Back.RESET)
    draw_logo(canvas, logo, footer_top, footer_height, cfg)

    png = encode_png(canvas)
    print(Fore.LIGHTGREEN_EX + f'Card for {alert.id} rendered at zoom {viewport.zoom_level} '
          f'in {time.time() - render_start_time:.2f}s ({len(png)} bytes)' + Fore.RESET)
    return png
