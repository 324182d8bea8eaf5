class AlertCardError(Exception):
    """Base class for everything that can go wrong while rendering an alert card."""


class GeometryDegenerate(AlertCardError):
    """Alert ring has no usable extent. Only raised/caught inside the geometry tools."""


class BackdropFetchFailed(AlertCardError):
    """The static map tile request failed or returned something that isn't an image."""


class AssetLoadFailed(AlertCardError):
    """The logo (or another static asset) is missing or corrupt."""


class EncodingFailed(AlertCardError):
    """The finished canvas could not be serialized to PNG."""
