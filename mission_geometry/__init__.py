"""Geospatial path planning for drone survey missions.

Components, leaves first:
    geodesy   - ENU <-> global conversion around a mission origin
    optics    - field of view, ground footprint, GSD and depth of field
    planning  - raster, polygon coverage, perimeter, orbit and Bezier paths
    mission   - Mission / PathSegment / Waypoint / GCP models and editing
    analysis  - distance, flight time, battery and photo statistics
"""

__version__ = "0.1.0"
