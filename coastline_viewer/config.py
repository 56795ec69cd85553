"""Settings and logging setup for the coastline viewer."""

import logging
import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = "CoastlineViewer/1.0"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class OverlayStyle:
    color: str = "#3498db"
    weight: int = 2
    fill_opacity: float = 0.1

    def as_leaflet(self) -> dict:
        return {"color": self.color, "weight": self.weight, "fillOpacity": self.fill_opacity}


@dataclass(frozen=True)
class Settings:
    nominatim_url: str = NOMINATIM_SEARCH_URL
    user_agent: str = DEFAULT_USER_AGENT
    lookup_timeout: float = 30.0
    default_center: Tuple[float, float] = (36.5, 138.0)
    default_zoom: int = 6
    locate_zoom: int = 13
    overlay_style: OverlayStyle = OverlayStyle()
    log_level: str = "INFO"

    @classmethod
    def load(cls) -> "Settings":
        return cls(
            nominatim_url=os.getenv("COASTLINE_NOMINATIM_URL", NOMINATIM_SEARCH_URL),
            user_agent=os.getenv("COASTLINE_USER_AGENT", DEFAULT_USER_AGENT),
            lookup_timeout=float(os.getenv("COASTLINE_LOOKUP_TIMEOUT", "30")),
            default_center=(
                float(os.getenv("COASTLINE_MAP_LAT", "36.5")),
                float(os.getenv("COASTLINE_MAP_LNG", "138.0")),
            ),
            default_zoom=int(os.getenv("COASTLINE_MAP_ZOOM", "6")),
            locate_zoom=int(os.getenv("COASTLINE_LOCATE_ZOOM", "13")),
            log_level=os.getenv("COASTLINE_LOG_LEVEL", "INFO"),
        )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
