from shapely.geometry import MultiPoint
from colorama import Fore

from alert_card.errors import GeometryDegenerate
from alert_card.models import ViewportSpec

CLOSE_ZOOM = 8
WIDE_ZOOM = 7
CLOSE_ZOOM_MAX_SPAN = 1.0 #degrees, both spans have to be under this
POLYLINE_PRECISION = 1e5


def get_alert_bounds(ring):
    """Bounding box of an alert ring.

    Args:
        ring (sequence of (lng, lat)): outer ring of the alert polygon

    Returns:
        tuple: (min_lng, min_lat, max_lng, max_lat)

    Raises:
        GeometryDegenerate: ring is empty or has zero extent on both axes
    """
    if not ring:
        raise GeometryDegenerate('alert ring has no points')
    bounds = MultiPoint([(lng, lat) for lng, lat in ring]).bounds
    min_lng, min_lat, max_lng, max_lat = bounds
    if max_lng - min_lng == 0 and max_lat - min_lat == 0:
        raise GeometryDegenerate(f'alert ring collapses to a single point {bounds[:2]}')
    return bounds


def _fallback_bounds(ring):
    #minimum-size box: zero span around the first point (or null island if there's nothing at all)
    if ring:
        lng, lat = ring[0]
    else:
        lng, lat = 0.0, 0.0
    return (lng, lat, lng, lat)


def pick_zoom(lat_span, lng_span):
    """fixed two level policy, warnings are small enough that this works fine"""
    if lat_span < CLOSE_ZOOM_MAX_SPAN and lng_span < CLOSE_ZOOM_MAX_SPAN:
        return CLOSE_ZOOM
    return WIDE_ZOOM


def _encode_value(v):
    v = ~(v << 1) if v < 0 else (v << 1)
    chunks = []
    while v >= 0x20:
        chunks.append(chr((0x20 | (v & 0x1F)) + 63))
        v >>= 5
    chunks.append(chr(v + 63))
    return ''.join(chunks)


def encode_polyline(coords):
    """Encodes [(lat, lng), ...] into a Google polyline string (1e5 precision)."""
    last_lat = 0
    last_lng = 0
    out = []
    for lat, lng in coords:
        ilat = int(round(lat * POLYLINE_PRECISION))
        ilng = int(round(lng * POLYLINE_PRECISION))
        out.append(_encode_value(ilat - last_lat))
        out.append(_encode_value(ilng - last_lng))
        last_lat = ilat
        last_lng = ilng
    return ''.join(out)


def _decode_value(s, idx):
    result = 0
    shift = 0
    while True:
        b = ord(s[idx]) - 63
        idx += 1
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            break
    d = ~(result >> 1) if (result & 1) else (result >> 1)
    return d, idx


def decode_polyline(poly):
    """Decodes a polyline string back into [(lat, lng), ...]"""
    idx = 0
    lat = 0
    lng = 0
    coords = []
    while idx < len(poly):
        dlat, idx = _decode_value(poly, idx)
        dlng, idx = _decode_value(poly, idx)
        lat += dlat
        lng += dlng
        coords.append((lat / POLYLINE_PRECISION, lng / POLYLINE_PRECISION))
    return coords


def get_viewport(ring):
    """Works out where to point the static map for an alert.

    Center is the middle of the bounding box (not the centroid). Degenerate rings
    never fail, they just get a zero-span box and the close zoom.

    Args:
        ring (sequence of (lng, lat)): outer ring of the alert polygon

    Returns:
        ViewportSpec: center, zoom and the encoded path for the map overlay
    """
    try:
        bounds = get_alert_bounds(ring)
    except GeometryDegenerate as e:
        print(Fore.YELLOW + f'Degenerate alert geometry ({e}), using minimum bounding box.' + Fore.RESET)
        bounds = _fallback_bounds(ring)

    min_lng, min_lat, max_lng, max_lat = bounds
    center_lat = (min_lat + max_lat) / 2
    center_lng = (min_lng + max_lng) / 2
    zoom = pick_zoom(max_lat - min_lat, max_lng - min_lng)
    #overlay wants lat/lng, the feed gives us lng/lat
    encoded_path = encode_polyline([(lat, lng) for lng, lat in ring])
    return ViewportSpec(
        center_lat=center_lat,
        center_lng=center_lng,
        zoom_level=zoom,
        encoded_path=encoded_path,
        bounds=tuple(bounds),
    )
