"""
folium-backed map view.

Streamlit reruns the page script on every interaction, so the view keeps
plain descriptions of its layers and rebuilds the ``folium.Map`` from them on
each run. The viewport reported back by ``st_folium`` is fed in through
``sync_viewport`` so the controller can read the current center.
"""

import html
import itertools
import json
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import folium
from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry import shape

from .config import OverlayStyle, Settings
from .geometry import Center, GeoPolygon, to_geojson

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerHandle:
    layer_id: int
    kind: str  # "overlay" | "marker"


@dataclass(frozen=True)
class _OverlayLayer:
    geojson: dict
    style: OverlayStyle
    name: str


@dataclass(frozen=True)
class _MarkerLayer:
    center: Center
    popup: str
    color: Optional[str]


class FoliumMapView:
    def __init__(self, settings: Settings) -> None:
        lat, lng = settings.default_center
        self._center = Center(lat=lat, lng=lng)
        self._zoom = settings.default_zoom
        self._layers: "OrderedDict[int, Any]" = OrderedDict()
        self._ids = itertools.count(1)

    # =========================
    # Viewport
    # =========================
    @property
    def zoom(self) -> int:
        return self._zoom

    def get_center(self) -> Center:
        return self._center

    def set_view(self, center: Center, zoom: int) -> None:
        self._center = center
        self._zoom = zoom

    def sync_viewport(self, state: Optional[Mapping[str, Any]]) -> None:
        """Adopt the center/zoom reported by ``st_folium``; anything malformed is ignored."""
        if not state:
            return
        center = state.get("center")
        if isinstance(center, Mapping):
            try:
                self._center = Center(lat=float(center["lat"]), lng=float(center["lng"]))
            except (KeyError, TypeError, ValueError):
                logger.debug("Ignoring malformed viewport center: %r", center)
        zoom = state.get("zoom")
        if isinstance(zoom, (int, float)):
            self._zoom = int(zoom)

    # =========================
    # Layers
    # =========================
    def add_overlay(self, geometry: GeoPolygon, style: OverlayStyle, name: str = "") -> LayerHandle:
        layer_id = next(self._ids)
        self._layers[layer_id] = _OverlayLayer(geojson=to_geojson(geometry), style=style, name=name)
        return LayerHandle(layer_id, "overlay")

    def add_marker(self, center: Center, popup: str, color: Optional[str] = None) -> LayerHandle:
        layer_id = next(self._ids)
        self._layers[layer_id] = _MarkerLayer(center=center, popup=popup, color=color)
        return LayerHandle(layer_id, "marker")

    def remove(self, handle: LayerHandle) -> None:
        self._layers.pop(handle.layer_id, None)

    def has_layer(self, handle: LayerHandle) -> bool:
        return handle.layer_id in self._layers

    def overlay_count(self) -> int:
        return sum(1 for layer in self._layers.values() if isinstance(layer, _OverlayLayer))

    def marker_count(self) -> int:
        return sum(1 for layer in self._layers.values() if isinstance(layer, _MarkerLayer))

    # =========================
    # Rendering
    # =========================
    def build_map(self) -> folium.Map:
        m = folium.Map(location=[self._center.lat, self._center.lng], zoom_start=self._zoom, control_scale=True)

        for layer in self._layers.values():
            if isinstance(layer, _OverlayLayer):
                style = layer.style.as_leaflet()
                folium.GeoJson(
                    layer.geojson,
                    name=layer.name or "Coastline",
                    style_function=lambda feat, style=style: style,
                ).add_to(m)
            else:
                icon = folium.Icon(color=layer.color) if layer.color else None
                folium.Marker(
                    location=[layer.center.lat, layer.center.lng],
                    popup=folium.Popup(layer.popup, show=True),
                    icon=icon,
                ).add_to(m)
        return m

    # =========================
    # Export helpers
    # =========================
    def overlays_geojson(self) -> str:
        features = [
            {"type": "Feature", "properties": {"name": layer.name}, "geometry": layer.geojson}
            for layer in self._layers.values()
            if isinstance(layer, _OverlayLayer)
        ]
        return json.dumps({"type": "FeatureCollection", "features": features}, ensure_ascii=False)

    def overlays_kml(self) -> str:
        parts = ['<?xml version="1.0" encoding="UTF-8"?>',
                 '<kml xmlns="http://www.opengis.net/kml/2.2"><Document>']
        for layer in self._layers.values():
            if not isinstance(layer, _OverlayLayer) or not layer.geojson["coordinates"]:
                continue
            try:
                geom = shape(layer.geojson)
            except (ValueError, GEOSException) as exc:
                logger.warning("Skipping overlay %r in KML export: %s", layer.name, exc)
                continue
            if geom.is_empty:
                continue
            if isinstance(geom, ShapelyPolygon):
                polys = [geom]
            elif isinstance(geom, ShapelyMultiPolygon):
                polys = list(geom.geoms)
            else:
                continue
            for p in polys:
                coords = " ".join(f"{c[0]},{c[1]},0" for c in p.exterior.coords)
                parts.append(
                    f"<Placemark><name>{html.escape(layer.name)}</name>"
                    f"<Polygon><outerBoundaryIs><LinearRing><coordinates>{coords}</coordinates></LinearRing></outerBoundaryIs></Polygon>"
                    f"</Placemark>"
                )
        parts.append("</Document></kml>")
        return "\n".join(parts)

    def map_html(self) -> bytes:
        return self.build_map().get_root().render().encode("utf-8")

