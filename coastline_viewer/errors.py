"""Exception taxonomy for place lookups."""


class CoastlineViewerError(Exception):
    """Base class for errors raised by this package."""


class PlaceLookupError(CoastlineViewerError):
    """A geocoding lookup did not produce a usable polygon."""

    def __init__(self, query: str, message: str):
        super().__init__(message)
        self.query = query


class LookupFailed(PlaceLookupError):
    """Transport-level failure: connection error, HTTP error or unreadable body."""


class PlaceNotFound(PlaceLookupError):
    """The service answered but returned no polygon geometry."""


class GeometryError(CoastlineViewerError, ValueError):
    """GeoJSON geometry that cannot be represented as a polygon."""
