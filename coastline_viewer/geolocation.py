"""Browser geolocation, surfaced as a position-or-failure value."""

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from streamlit_js_eval import streamlit_js_eval

logger = logging.getLogger(__name__)


class GeolocationErrorCode(enum.IntEnum):
    # 1-3 are the W3C PositionError codes.
    UNSUPPORTED = 0
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


@dataclass(frozen=True)
class GeolocationOptions:
    high_accuracy: bool = True
    timeout_ms: int = 10_000
    maximum_age_ms: int = 0


@dataclass(frozen=True)
class GeoPosition:
    lat: float
    lng: float


@dataclass(frozen=True)
class GeolocationFailure:
    code: Optional[int]
    message: str = ""


GeolocationResult = Union[GeoPosition, GeolocationFailure]


def build_geolocation_js(options: GeolocationOptions) -> str:
    """JavaScript promise resolving to ``{coords: ...}`` or ``{error: ...}``; it never rejects."""
    js_options = json.dumps(
        {
            "enableHighAccuracy": options.high_accuracy,
            "timeout": options.timeout_ms,
            "maximumAge": options.maximum_age_ms,
        }
    )
    return (
        "new Promise((resolve) => {"
        " if (!navigator.geolocation) {"
        f" resolve({{error: {{code: {int(GeolocationErrorCode.UNSUPPORTED)}, message: 'unsupported'}}}});"
        " return; }"
        " navigator.geolocation.getCurrentPosition("
        " (pos) => resolve({coords: {latitude: pos.coords.latitude, longitude: pos.coords.longitude}}),"
        " (err) => resolve({error: {code: err.code, message: err.message}}),"
        f" {js_options});"
        "})"
    )


def parse_browser_payload(payload: Any) -> Optional[GeolocationResult]:
    """
    Interpret what the browser sent back.

    None means the browser has not answered yet. Anything that is neither a
    position nor a coded error becomes a failure without a code.
    """
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        return GeolocationFailure(code=None, message=f"Unexpected geolocation payload: {payload!r}")

    error = payload.get("error")
    if isinstance(error, Mapping):
        code = error.get("code")
        return GeolocationFailure(
            code=int(code) if isinstance(code, (int, float)) else None,
            message=str(error.get("message", "")),
        )

    coords = payload.get("coords")
    if isinstance(coords, Mapping):
        try:
            return GeoPosition(lat=float(coords["latitude"]), lng=float(coords["longitude"]))
        except (KeyError, TypeError, ValueError):
            pass
    return GeolocationFailure(code=None, message="Position missing from geolocation payload")


class BrowserGeolocator:
    """Runs ``navigator.geolocation`` in the page through streamlit-js-eval."""

    def __init__(self) -> None:
        self._request_id = 0

    def new_request(self) -> None:
        # A fresh component key makes the browser ask again instead of replaying the last answer.
        self._request_id += 1

    def request_position(self, options: GeolocationOptions) -> Optional[GeolocationResult]:
        payload = streamlit_js_eval(
            js_expressions=build_geolocation_js(options),
            key=f"geolocation-{self._request_id}",
        )
        result = parse_browser_payload(payload)
        if isinstance(result, GeolocationFailure):
            logger.warning("Geolocation failed (code=%s): %s", result.code, result.message)
        return result
