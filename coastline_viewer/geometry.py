"""
Polygon geometry helpers: ring area, mainland extraction, bounding-box center
and re-centering.

GeoJSON coordinates are parsed once into a small tagged union
(Ring / Polygon / MultiPolygon over (lng, lat) points). Every node knows how to
list its own points and how to shift itself, so the walks below recurse
through the structure without ever inspecting raw nested lists.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple, Union

from .errors import GeometryError

Point = Tuple[float, float]  # (lng, lat)


@dataclass(frozen=True)
class Center:
    lat: float
    lng: float


@dataclass(frozen=True)
class Ring:
    points: Tuple[Point, ...] = ()

    def iter_points(self) -> Iterator[Point]:
        return iter(self.points)

    def shifted(self, dlng: float, dlat: float) -> "Ring":
        return Ring(tuple((lng + dlng, lat + dlat) for lng, lat in self.points))

    def to_coordinates(self) -> list:
        return [[lng, lat] for lng, lat in self.points]


@dataclass(frozen=True)
class Polygon:
    rings: Tuple[Ring, ...] = ()

    @property
    def outer(self) -> Optional[Ring]:
        return self.rings[0] if self.rings else None

    def iter_points(self) -> Iterator[Point]:
        for ring in self.rings:
            yield from ring.iter_points()

    def shifted(self, dlng: float, dlat: float) -> "Polygon":
        return Polygon(tuple(ring.shifted(dlng, dlat) for ring in self.rings))

    def to_coordinates(self) -> list:
        return [ring.to_coordinates() for ring in self.rings]


@dataclass(frozen=True)
class MultiPolygon:
    polygons: Tuple[Polygon, ...] = ()

    def iter_points(self) -> Iterator[Point]:
        for polygon in self.polygons:
            yield from polygon.iter_points()

    def shifted(self, dlng: float, dlat: float) -> "MultiPolygon":
        return MultiPolygon(tuple(polygon.shifted(dlng, dlat) for polygon in self.polygons))

    def to_coordinates(self) -> list:
        return [polygon.to_coordinates() for polygon in self.polygons]


GeoPolygon = Union[Polygon, MultiPolygon]
Shape = Union[Ring, Polygon, MultiPolygon]


# =========================
# GeoJSON conversion
# =========================
def _parse_point(raw: Any) -> Point:
    if not isinstance(raw, (list, tuple)) or len(raw) < 2:
        raise GeometryError(f"Expected [lng, lat] position, got {raw!r}")
    # Positions may carry altitude; only lng/lat are kept.
    try:
        return (float(raw[0]), float(raw[1]))
    except (TypeError, ValueError) as exc:
        raise GeometryError(f"Non-numeric position {raw!r}") from exc


def _parse_ring(raw: Any) -> Ring:
    if not isinstance(raw, (list, tuple)):
        raise GeometryError("Expected a list of positions for a ring")
    return Ring(tuple(_parse_point(p) for p in raw))


def _parse_polygon(raw: Any) -> Polygon:
    if not isinstance(raw, (list, tuple)):
        raise GeometryError("Expected a list of rings for a polygon")
    return Polygon(tuple(_parse_ring(r) for r in raw))


def parse_geometry(geojson: Mapping[str, Any]) -> GeoPolygon:
    """Build a Polygon or MultiPolygon from a GeoJSON geometry mapping."""
    if not isinstance(geojson, Mapping):
        raise GeometryError(f"Expected a GeoJSON geometry object, got {geojson!r}")
    geom_type = geojson.get("type")
    coordinates = geojson.get("coordinates", [])
    if geom_type == "Polygon":
        return _parse_polygon(coordinates)
    if geom_type == "MultiPolygon":
        if not isinstance(coordinates, (list, tuple)):
            raise GeometryError("Expected a list of polygons for a multipolygon")
        return MultiPolygon(tuple(_parse_polygon(p) for p in coordinates))
    raise GeometryError(f"Unsupported geometry type: {geom_type!r}")


def to_geojson(geometry: GeoPolygon) -> dict:
    geom_type = "MultiPolygon" if isinstance(geometry, MultiPolygon) else "Polygon"
    return {"type": geom_type, "coordinates": geometry.to_coordinates()}


# =========================
# Area / mainland extraction
# =========================
def ring_area(ring: Union[Ring, Sequence[Sequence[float]], None]) -> float:
    """
    Shoelace sum over consecutive point pairs, halved.

    The last point is not wrapped back to the first, so this is only an
    approximation of the enclosed area. It is good enough to rank rings.
    """
    if ring is None:
        return 0.0
    points = ring.points if isinstance(ring, Ring) else ring
    total = 0.0
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        total += x0 * y1 - x1 * y0
    return abs(total / 2)


def extract_largest_ring(geometry: GeoPolygon) -> Polygon:
    """Keep only the member polygon with the largest outer ring."""
    if isinstance(geometry, Polygon):
        return geometry

    largest: Optional[Polygon] = None
    largest_area = 0.0
    for polygon in geometry.polygons:
        area = ring_area(polygon.outer)
        if largest is None or area > largest_area:
            largest = polygon
            largest_area = area
    return largest if largest is not None else Polygon()


# =========================
# Centering
# =========================
def bounding_center(geometry: Shape) -> Optional[Center]:
    """Midpoint of the bounding box, or None when there are no points."""
    min_lng = min_lat = float("inf")
    max_lng = max_lat = float("-inf")
    seen = False
    for lng, lat in geometry.iter_points():
        seen = True
        min_lng, max_lng = min(min_lng, lng), max(max_lng, lng)
        min_lat, max_lat = min(min_lat, lat), max(max_lat, lat)
    if not seen:
        return None
    return Center(lat=(min_lat + max_lat) / 2, lng=(min_lng + max_lng) / 2)


def translate(geometry: Shape, target_center: Center) -> Shape:
    """Return a copy of ``geometry`` moved so its bounding-box center is ``target_center``."""
    current = bounding_center(geometry)
    if current is None:
        return geometry
    return geometry.shifted(target_center.lng - current.lng, target_center.lat - current.lat)
