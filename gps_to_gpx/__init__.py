"""
gps-to-gpx — GPS waypoints to GPX 1.1
==========================================
Build a GPX track document from a list of waypoint dicts. Zero external dependencies.

Quick start:
    gps2gpx points.json track.gpx      # CLI

Library:
    from gps_to_gpx import build
    xml = build([{"latitude": 45.5, "longitude": -73.6}], {"activityName": "RUN"})
"""

from .models import XmlDocument, format_value, GpxError, InvalidXmlName, InvalidXmlCharacter
from .gpx import (
    build, create_gpx, build_document, resolve_settings,
    validate_waypoints, validate_options, validate_coordinates,
    DEFAULT_SETTINGS, XML_PROLOG,
    InvalidWaypointsArgument, InvalidOptionsArgument, MissingCoordinates,
)

__version__ = "1.0.0"
__all__ = [
    "build", "create_gpx", "build_document", "resolve_settings",
    "validate_waypoints", "validate_options", "validate_coordinates",
    "DEFAULT_SETTINGS", "XML_PROLOG", "XmlDocument", "format_value",
    "GpxError", "InvalidWaypointsArgument", "InvalidOptionsArgument", "MissingCoordinates",
    "InvalidXmlName", "InvalidXmlCharacter",
]
