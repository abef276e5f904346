"""Geospatial data viewer core: features, file loading, operations, layers and camera."""

__version__ = "0.1.0"