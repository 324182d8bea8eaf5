# --- EVENT CATEGORIES ---
TORNADO_WARNING = 'Tornado Warning'
SEVERE_THUNDERSTORM_WARNING = 'Severe Thunderstorm Warning'
SEVERE = [TORNADO_WARNING, SEVERE_THUNDERSTORM_WARNING]

# --- HAZARD BADGE COLORS ---
#gradient start/end for the 2x2 hazard grid
BADGE_COLORS = {
    'tornado': ('#D32F2F', '#880E4F'), #red -> magenta
    'severe': ('#FBC02D', '#F57F17'), #yellow -> orange
}

# --- DISPLAY MARKERS ---
NOT_AVAILABLE = 'N/A'
NO_TORNADO = 'None'

NWS_USER_AGENT = 'alert-card/weather-alert-bot'
