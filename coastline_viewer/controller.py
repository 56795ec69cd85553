"""Search / clear / locate orchestration for the coastline map."""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from .config import Settings
from .errors import LookupFailed, PlaceLookupError
from .geolocation import (
    GeolocationErrorCode,
    GeolocationFailure,
    GeolocationOptions,
)
from .geometry import Center, extract_largest_ring, translate
from .map_view import LayerHandle
from .names import translate_name

logger = logging.getLogger(__name__)

CENTER_MARKER_COLOR = "red"
CENTER_MARKER_POPUP = "中心点"
LOCATION_MARKER_POPUP = "現在地"
MAINLAND_SUFFIX = "（メインランドのみ）"


class ControllerState(enum.Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    RENDERED = "rendered"
    FAILED = "failed"


class StatusKind(enum.Enum):
    READY = "ready"
    INVALID_INPUT = "invalid_input"
    LOADING = "loading"
    RENDERED = "rendered"
    LOOKUP_FAILED = "lookup_failed"
    NOT_FOUND = "not_found"
    CLEARED = "cleared"
    LOCATING = "locating"
    LOCATED = "located"
    GEOLOCATION_UNSUPPORTED = "geolocation_unsupported"
    GEOLOCATION_DENIED = "geolocation_denied"
    GEOLOCATION_UNAVAILABLE = "geolocation_unavailable"
    GEOLOCATION_TIMEOUT = "geolocation_timeout"
    GEOLOCATION_UNKNOWN = "geolocation_unknown"


@dataclass(frozen=True)
class Status:
    kind: StatusKind
    message: str
    is_error: bool = False


READY_STATUS = Status(StatusKind.READY, "国名または島名を入力して「表示」ボタンをクリックしてください")

_GEOLOCATION_ERRORS = {
    GeolocationErrorCode.UNSUPPORTED: (StatusKind.GEOLOCATION_UNSUPPORTED, "お使いのブラウザは位置情報に対応していません"),
    GeolocationErrorCode.PERMISSION_DENIED: (StatusKind.GEOLOCATION_DENIED, "位置情報の使用が許可されていません"),
    GeolocationErrorCode.POSITION_UNAVAILABLE: (StatusKind.GEOLOCATION_UNAVAILABLE, "位置情報が利用できません"),
    GeolocationErrorCode.TIMEOUT: (StatusKind.GEOLOCATION_TIMEOUT, "位置情報の取得がタイムアウトしました"),
}


def geolocation_failure_status(failure: GeolocationFailure) -> Status:
    try:
        kind, message = _GEOLOCATION_ERRORS[GeolocationErrorCode(failure.code)]
    except (ValueError, TypeError):
        kind, message = StatusKind.GEOLOCATION_UNKNOWN, "位置情報の取得に失敗しました"
    return Status(kind, message, is_error=True)


class OverlayController:
    """
    Owns everything the page draws on the map: the coastline overlays from
    successful searches and the center pin marking where the last search was
    placed.

    The "current location" marker is not tracked here; ``clear`` leaves it
    on the map.
    """

    def __init__(self, settings: Settings, map_view, lookup_client, geolocator=None) -> None:
        self._settings = settings
        self._map_view = map_view
        self._lookup_client = lookup_client
        self._geolocator = geolocator
        self._overlays: List[LayerHandle] = []
        self._center_marker: Optional[LayerHandle] = None
        self._generation = 0
        self.state = ControllerState.IDLE
        self.status = READY_STATUS

    @property
    def overlays(self) -> List[LayerHandle]:
        return list(self._overlays)

    @property
    def center_marker(self) -> Optional[LayerHandle]:
        return self._center_marker

    def _set_status(self, kind: StatusKind, message: str, is_error: bool = False) -> Status:
        self.status = Status(kind, message, is_error)
        return self.status

    # =========================
    # Search
    # =========================
    def search(self, display_name: str) -> Status:
        name = (display_name or "").strip()
        if not name:
            return self._set_status(StatusKind.INVALID_INPUT, "国名または島名を入力してください", is_error=True)

        self._generation += 1
        generation = self._generation
        self.state = ControllerState.SEARCHING
        self._set_status(StatusKind.LOADING, "海岸線データを読み込み中...")

        target = self._map_view.get_center()
        self._place_center_marker(target)

        place = translate_name(name)
        query = place.search_query
        logger.info("Searching %r as %r (%s)", name, query, place.category.value)

        try:
            geometry = self._lookup_client.lookup(query)
        except PlaceLookupError as exc:
            if generation != self._generation:
                logger.debug("Discarding failure of superseded search %r", query)
                return self.status
            logger.warning("Lookup for %r failed: %s", query, exc)
            self.state = ControllerState.FAILED
            if isinstance(exc, LookupFailed):
                return self._set_status(StatusKind.LOOKUP_FAILED, "エラー: データの取得に失敗しました", is_error=True)
            return self._set_status(StatusKind.NOT_FOUND, "エラー: 見つかりません", is_error=True)

        if generation != self._generation:
            logger.debug("Discarding result of superseded search %r", query)
            return self.status

        if place.is_mainland_only:
            geometry = extract_largest_ring(geometry)
        centered = translate(geometry, target)

        handle = self._map_view.add_overlay(centered, self._settings.overlay_style, name=name)
        self._overlays.append(handle)

        self.state = ControllerState.RENDERED
        suffix = MAINLAND_SUFFIX if place.is_mainland_only else ""
        return self._set_status(StatusKind.RENDERED, f"{name}の海岸線を表示しました{suffix}")

    def _place_center_marker(self, target: Center) -> None:
        if self._center_marker is not None:
            self._map_view.remove(self._center_marker)
        self._center_marker = self._map_view.add_marker(target, CENTER_MARKER_POPUP, color=CENTER_MARKER_COLOR)

    # =========================
    # Clear
    # =========================
    def clear(self) -> Status:
        for handle in self._overlays:
            self._map_view.remove(handle)
        self._overlays = []
        if self._center_marker is not None:
            self._map_view.remove(self._center_marker)
            self._center_marker = None
        self.state = ControllerState.IDLE
        return self._set_status(StatusKind.CLEARED, "表示をクリアしました")

    # =========================
    # Locate
    # =========================
    def locate(self) -> Status:
        if self._geolocator is None:
            return self._set_status(
                StatusKind.GEOLOCATION_UNSUPPORTED, "お使いのブラウザは位置情報に対応していません", is_error=True
            )

        result = self._geolocator.request_position(GeolocationOptions())
        if result is None:
            return self._set_status(StatusKind.LOCATING, "現在地を取得中...")
        if isinstance(result, GeolocationFailure):
            self.status = geolocation_failure_status(result)
            return self.status

        position = Center(lat=result.lat, lng=result.lng)
        self._map_view.add_marker(position, LOCATION_MARKER_POPUP)
        self._map_view.set_view(position, self._settings.locate_zoom)
        return self._set_status(StatusKind.LOCATED, "現在地に移動しました")


__all__ = [
    "ControllerState",
    "OverlayController",
    "Status",
    "StatusKind",
]
