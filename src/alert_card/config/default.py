## Production-ish config: NWS Peachtree City warnings for Georgia, posted to Discord.
import os
from dotenv import load_dotenv
from alert_card.constants import SEVERE

load_dotenv()

# --- API POLLING SETTINGS ---
NWS_ALERTS_URL = 'https://api.weather.gov/alerts/active'
ALERT_AREA = 'GA' #state code for the ?area= query param
SENDER_FILTER = 'NWS Peachtree City GA' #only alerts whose senderName contains this
ALERT_TYPES_TO_MONITOR = SEVERE
CHECK_INTERVAL = 60 #seconds between scans
FETCH_TIMEOUT = 30

# --- POSTED ALERTS LOG ---
LOG_FILE = 'logs/posted_alerts.log'
POSTED_MAX_AGE = 48 * 3600 #forget ids after 2 days
POSTED_MAX_SIZE = 5000

# --- RENDERING ---
MAPBOX_TOKEN = os.getenv('MAPBOX_TOKEN')
OUTPUT_DIR = 'graphics'
LOGO_PATH = 'assets/logo.png'
FONT_DIR = 'assets/fonts'
TARGET_TIMEZONE = 'America/New_York'

# --- TARGETS ---
POST_TO_DISCORD = False
WEBHOOKS = [hook for hook in os.getenv('DISCORD_WEBHOOKS', '').split(',') if hook]
ERROR_WEBHOOK = os.getenv('DISCORD_ERROR_WEBHOOK')
DISCORD_PINGS_ALL = [] #roles to mention on errors
