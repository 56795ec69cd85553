import pytest
import requests

from coastline_viewer.config import Settings
from coastline_viewer.errors import LookupFailed, PlaceLookupError, PlaceNotFound
from coastline_viewer.geometry import MultiPolygon, Polygon
from coastline_viewer.lookup import PlaceLookupClient

SADO = {
    "display_name": "佐渡島, 新潟県, 日本",
    "geojson": {
        "type": "Polygon",
        "coordinates": [[[138.2, 37.8], [138.5, 37.8], [138.5, 38.3], [138.2, 38.3], [138.2, 37.8]]],
    },
}


class DummyResponse:
    def __init__(self, payload=None, status_code: int = 200, json_error: bool = False) -> None:
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.json_error:
            raise ValueError("Expecting value")
        return self.payload


class DummySession:
    def __init__(self, response: DummyResponse) -> None:
        self.response = response
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        return self.response


class BrokenSession:
    def get(self, url, params=None, headers=None, timeout=None):
        raise requests.ConnectionError("connection refused")


def make_client(response: DummyResponse, **overrides):
    session = DummySession(response)
    settings = Settings(**overrides)
    return PlaceLookupClient(settings, session=session), session  # type: ignore[arg-type]


def test_lookup_sends_single_polygon_query() -> None:
    client, session = make_client(DummyResponse([SADO]), user_agent="TestAgent/0.1", lookup_timeout=5)

    client.lookup("Sado Island Japan")

    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == "https://nominatim.openstreetmap.org/search"
    assert call["params"] == {"q": "Sado Island Japan", "format": "json", "polygon_geojson": 1, "limit": 1}
    assert call["headers"] == {"User-Agent": "TestAgent/0.1"}
    assert call["timeout"] == 5


def test_lookup_returns_first_geometry() -> None:
    second = {"geojson": {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1]]]}}
    client, _ = make_client(DummyResponse([SADO, second]))

    geometry = client.lookup("Sado Island Japan")

    assert isinstance(geometry, Polygon)
    assert geometry.outer.points[0] == (138.2, 37.8)


def test_lookup_multipolygon() -> None:
    payload = [{"geojson": {"type": "MultiPolygon", "coordinates": [[[[0, 0], [1, 0], [1, 1]]], [[[5, 5], [6, 5], [6, 6]]]]}}]
    client, _ = make_client(DummyResponse(payload))
    geometry = client.lookup("Japan")
    assert isinstance(geometry, MultiPolygon)
    assert len(geometry.polygons) == 2


@pytest.mark.parametrize(
    "payload",
    [
        [],
        [{"display_name": "no geometry"}],
        [{"geojson": None}],
        [{"geojson": {"type": "Point", "coordinates": [139.69, 35.68]}}],
        [{"geojson": {"type": "Polygon", "coordinates": [[["a", "b"], [1, 1], [0, 1]]]}}],
        [{"geojson": {"type": "Polygon", "coordinates": [[[None, 0], [1, 1], [0, 1]]]}}],
        [{"geojson": {"type": "MultiPolygon", "coordinates": [[[[[0, 0], [1, 1]]]]]}}],
        [{"geojson": "Polygon"}],
        {"error": "unexpected"},
    ],
)
def test_lookup_not_found(payload) -> None:
    client, _ = make_client(DummyResponse(payload))
    with pytest.raises(PlaceNotFound) as excinfo:
        client.lookup("Xanadu")
    assert excinfo.value.query == "Xanadu"


@pytest.mark.parametrize(
    "response",
    [
        DummyResponse([SADO], status_code=503),
        DummyResponse([SADO], status_code=429),
        DummyResponse(None, json_error=True),
    ],
)
def test_lookup_failed(response: DummyResponse) -> None:
    client, _ = make_client(response)
    with pytest.raises(LookupFailed):
        client.lookup("Honshu Japan")


def test_lookup_transport_error() -> None:
    client = PlaceLookupClient(Settings(), session=BrokenSession())  # type: ignore[arg-type]
    with pytest.raises(LookupFailed) as excinfo:
        client.lookup("Honshu Japan")
    assert isinstance(excinfo.value, PlaceLookupError)
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
