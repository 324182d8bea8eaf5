from dataclasses import dataclass, fields, replace
from typing import Tuple

ColorPair = Tuple[str, str]


@dataclass(frozen=True)
class RenderConfig:
    """Everything the card renderer needs to know about sizes, colors and fonts.

    Passed in explicitly so the renderer has no module level state.
    """
    # --- CANVAS ---
    width: int = 800
    height: int = 600
    panel_width: int = 250 #right sidebar
    banner_height: int = 50
    map_offset_y: int = 10 #gap between banner and map
    footer_height: int = 40
    background: str = '#FFFFFF'
    text_color: str = '#FFFFFF'

    # --- BANNER / FOOTER / SIDEBAR ---
    banner_colors: ColorPair = ('#D32F2F', '#880E4F')
    banner_baseline: int = 33
    footer_colors: ColorPair = ('#37474F', '#263238')
    footer_baseline_inset: int = 15 #last footer line sits this far above the canvas bottom
    footer_line_height: int = 16
    footer_max_lines: int = 4
    footer_text_margin: int = 80 #keeps the county text clear of the logo
    sidebar_color: str = '#1C1C1C'
    sidebar_padding: int = 10
    sender_line_height: int = 16
    sender_max_lines: int = 3
    narrative_line_height: int = 18

    # --- BADGES ---
    badge_radius: int = 10
    time_badge_height: int = 40
    effective_colors: ColorPair = ('#00695C', '#004D40')
    expires_colors: ColorPair = ('#E65100', '#BF360C')
    hazard_box_size: int = 100
    hazard_box_spacing: int = 8
    hazard_grid_offset: int = 150 #from the bottom of the time badges

    # --- LOGO ---
    logo_path: str = 'assets/logo.png'
    logo_width: int = 80
    logo_scale: float = 0.8
    logo_x: int = 10

    # --- TIME ---
    target_timezone: str = 'America/New_York'
    time_format: str = '%B %d, %I:%M %p %Z'

    # --- FONTS ---
    font_dir: str = 'assets/fonts'
    font_files: Tuple[Tuple[str, str], ...] = (
        ('regular', 'Roboto-Regular.ttf'),
        ('medium', 'Roboto-Medium.ttf'),
        ('semibold', 'Roboto-SemiBold.ttf'),
        ('bold', 'Roboto-Bold.ttf'),
    )

    # --- STATIC MAP ---
    map_style: str = 'mapbox/light-v10'
    path_width: int = 5
    path_color: str = 'ff0000'
    path_opacity: float = 0.8

    @property
    def map_width(self):
        return self.width - self.panel_width

    @property
    def map_height(self):
        return self.height - self.banner_height - self.map_offset_y

    @property
    def map_top(self):
        return self.banner_height + self.map_offset_y

    @property
    def content_x(self):
        return self.width - self.panel_width + self.sidebar_padding

    @property
    def content_width(self):
        return self.panel_width - 2 * self.sidebar_padding

    def with_overrides(self, **overrides):
        """Copy with the given fields replaced. Unknown names are ignored."""
        known = {f.name for f in fields(self)}
        return replace(self, **{k: v for k, v in overrides.items() if k in known})


DEFAULT_RENDER_CONFIG = RenderConfig()
