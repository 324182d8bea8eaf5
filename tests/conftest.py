import copy
import io

import pytest
from PIL import Image

from alert_card.models import Alert

SAMPLE_FEATURE = {
    "id": "https://api.weather.gov/alerts/urn:oid:2.49.0.1.840.0.test.001.1",
    "properties": {
        "id": "urn:oid:2.49.0.1.840.0.test.001.1",
        "event": "Tornado Warning",
        "effective": "2025-03-31T18:40:00Z",
        "expires": "2025-03-31T19:15:00Z",
        "senderName": "NWS Peachtree City GA",
        "description": (
            "A severe thunderstorm capable of producing a tornado was located near Jeffersonville, "
            "moving east at 40 mph. Tornado...OBSERVED. Hazard...winds up to 70 mph and quarter size hail. "
            "A tornado is possible with this storm."
        ),
        "areaDesc": "Twiggs, Wilkinson, Baldwin, Jones",
    },
    "geometry": {
        "type": "Polygon",
        "coordinates": [[
            [-83.38, 32.68],
            [-83.29, 32.67],
            [-83.22, 32.71],
            [-83.26, 32.76],
            [-83.34, 32.75],
            [-83.38, 32.68],
        ]],
    },
}

BACKDROP_COLOR = (207, 216, 220)


@pytest.fixture
def sample_feature():
    return copy.deepcopy(SAMPLE_FEATURE)


@pytest.fixture
def sample_alert(sample_feature):
    return Alert.from_feature(sample_feature)


@pytest.fixture
def backdrop():
    return Image.new('RGB', (550, 540), BACKDROP_COLOR)


@pytest.fixture
def logo():
    return Image.new('RGBA', (200, 100), (255, 255, 255, 255))


@pytest.fixture
def png_bytes(backdrop):
    buffer = io.BytesIO()
    backdrop.save(buffer, format='PNG')
    return buffer.getvalue()
