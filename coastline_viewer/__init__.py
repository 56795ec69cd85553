"""Coastline Viewer: draw an island or country outline on the current map center."""

__version__ = "1.0.0"
