## Use on personal machine for testing/messing w/ things.
import os
from dotenv import load_dotenv
from alert_card.constants import SEVERE

load_dotenv()

# --- API POLLING SETTINGS ---
NWS_ALERTS_URL = 'https://api.weather.gov/alerts/active'
ALERT_AREA = 'GA'
SENDER_FILTER = '' #everything in the area
ALERT_TYPES_TO_MONITOR = SEVERE + ['Special Weather Statement']
CHECK_INTERVAL = 60
FETCH_TIMEOUT = 30

LOG_FILE = 'logs/posted_alerts_test.log'
POSTED_MAX_AGE = 6 * 3600
POSTED_MAX_SIZE = 500

MAPBOX_TOKEN = os.getenv('MAPBOX_TOKEN')
OUTPUT_DIR = 'graphics/live-test'
LOGO_PATH = 'assets/logo.png'
FONT_DIR = 'assets/fonts'
TARGET_TIMEZONE = 'America/New_York'

POST_TO_DISCORD = False
WEBHOOKS = []
ERROR_WEBHOOK = None
DISCORD_PINGS_ALL = []
