from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

Coordinate = Tuple[float, float] #(lng, lat), GeoJSON order


class TornadoStatus(Enum):
    OBSERVED = 'Observed'
    RADAR_INDICATED = 'Radar Indicated'
    POSSIBLE = 'Possible'
    NONE = 'None'


def parse_timestamp(value):
    """Parses an NWS ISO-8601 timestamp ('2025-03-31T18:40:00Z' or with a -04:00 offset).
    Naive timestamps are assumed to be UTC."""
    if not value:
        raise ValueError('missing timestamp')
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _outer_ring(geometry):
    if not geometry or not geometry.get('coordinates'):
        return ()
    coords = geometry['coordinates']
    if geometry.get('type') == 'MultiPolygon':
        coords = coords[0] #first polygon only, we just need something to frame the map on
    if not coords:
        return ()
    return tuple((float(lng), float(lat)) for lng, lat, *_ in coords[0])


@dataclass(frozen=True)
class Alert:
    id: str
    event: str
    sender_name: str
    area_desc: str
    effective: datetime
    expires: datetime
    description: str
    geometry: Tuple[Coordinate, ...] = ()

    @classmethod
    def from_feature(cls, feature):
        """Builds an Alert from one GeoJSON feature of the api.weather.gov alerts feed.

        Args:
            feature (dict): a single item of the feed's 'features' list

        Returns:
            Alert: parsed, immutable alert record
        """
        properties = feature.get('properties', {})
        return cls(
            id=properties.get('id') or feature.get('id', ''),
            event=properties.get('event') or '',
            sender_name=properties.get('senderName') or '',
            area_desc=properties.get('areaDesc') or '',
            effective=parse_timestamp(properties['effective']),
            expires=parse_timestamp(properties['expires']),
            description=properties.get('description') or '',
            geometry=_outer_ring(feature.get('geometry')),
        )


@dataclass(frozen=True)
class ThreatSummary:
    tornado_status: TornadoStatus = TornadoStatus.NONE
    wind_mph: Optional[int] = None
    hail_inches: Optional[Decimal] = None
    motion: Optional[Tuple[str, int]] = None #(direction, speed mph)


@dataclass(frozen=True)
class ViewportSpec:
    center_lat: float
    center_lng: float
    zoom_level: int
    encoded_path: str
    bounds: Tuple[float, float, float, float] = field(default=(0.0, 0.0, 0.0, 0.0)) #min_lng, min_lat, max_lng, max_lat


@dataclass(frozen=True)
class RenderedAlert:
    alert_id: str
    image: bytes #PNG
    caption: str
