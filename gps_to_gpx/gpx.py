"""
gps-to-gpx — GPX 1.1 track builder

Turns a list of waypoint mappings into a GPX document:

    <gpx>
      <metadata><name>Activity</name>[<time>]</metadata>
      <trk>[<name>]<trkseg><trkpt lat lon>...</trkpt>...</trkseg></trk>
    </gpx>
"""

from __future__ import annotations
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from .models import GpxError, XmlDocument, format_iso, is_date_like

logger = logging.getLogger(__name__)

XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>'

GPX_VERSION = "1.1"
GPX_NS = "http://www.topografix.com/GPX/1/1"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
GPX_SCHEMA_LOCATION = (
    "http://www.topografix.com/GPX/1/1 "
    "http://www.topografix.com/GPX/1/1/gpx.xsd "
    "http://www.garmin.com/xmlschemas/GpxExtensions/v3 "
    "http://www.garmin.com/xmlschemas/GpxExtensionsv3.xsd "
    "http://www.garmin.com/xmlschemas/TrackPointExtension/v1 "
    "http://www.garmin.com/xmlschemas/TrackPointExtensionv1.xsd"
)
METADATA_NAME = "Activity"

# Marks an omitted `options` argument
_MISSING = object()


# ─────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────

class InvalidWaypointsArgument(GpxError):
    def __init__(self):
        super().__init__(
            "gps_to_gpx expected the parameter `waypoints` to exist and be a non-empty list "
            "of GPS points, but something was wrong with the provided data. Did you pass a list "
            "(not `None` or empty) of waypoints (each point being a dict) as the "
            "first argument when you called the function?"
        )


class InvalidOptionsArgument(GpxError):
    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(
            f"gps_to_gpx expected the parameter `options` to be a dict, but instead it was "
            f'the type "{type_name}". Did you pass a dict of additional options '
            f"as the second argument when you called the function? `options` is not a required "
            f"parameter, so unless you need to override some default settings, you can leave it blank."
        )


class MissingCoordinates(GpxError):
    def __init__(self):
        super().__init__(
            "gps_to_gpx expected to find properties for latitude and longitude on all GPS "
            "points, but at least one point did not have both. Did you pass a list of waypoints "
            "(where every point has a latitude and longitude) as the first argument when you called "
            "the function? These properties are pretty essential to a well-formed GPX file. If they "
            "are found using property names different than in the default settings, you can "
            'override the "latKey" and "lonKey" options in the second argument to the function call.'
        )


# ─────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────

def is_record(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def validate_waypoints(waypoints):
    if (
        waypoints is None
        or not is_sequence(waypoints)
        or not waypoints
        or not all(is_record(point) for point in waypoints)
    ):
        raise InvalidWaypointsArgument()


def validate_options(options=_MISSING) -> Mapping:
    """Return ``options`` as a mapping. Only an omitted argument means no options."""
    if options is _MISSING:
        return {}
    if not is_record(options):
        raise InvalidOptionsArgument(type(options).__name__)
    return options


def validate_coordinates(point: Mapping, lat_key: str, lon_key: str):
    if lat_key not in point or lon_key not in point:
        raise MissingCoordinates()


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────

DEFAULT_SETTINGS = MappingProxyType({
    "activityName": "Everyday I'm hustlin'",
    "creator": "Patrick Hooper",
    "courseKey": "course",
    "eleKey": "elevation",
    "extKey": "extensions",
    "hdopKey": "hdop",
    "latKey": "latitude",
    "lonKey": "longitude",
    "speedKey": "speed",
    "startTime": None,
    "timeKey": "time",
    "vdopKey": "vdop",
})


def resolve_settings(options: Optional[Mapping] = None) -> dict:
    """Shallow-merge ``options`` over DEFAULT_SETTINGS into a new dict."""
    settings = dict(DEFAULT_SETTINGS)
    if options:
        overrides = sorted(k for k in options if k in DEFAULT_SETTINGS)
        if overrides:
            logger.debug("Overriding default settings: %s", ", ".join(overrides))
        settings.update(options)
    return settings


# ─────────────────────────────────────────────────────────────
# Document builder
# ─────────────────────────────────────────────────────────────

def _time_text(value):
    return format_iso(value) if is_date_like(value) else value


def add_text_node(doc: XmlDocument, parent, tag: str, value):
    """Append ``<tag>value</tag>`` to ``parent`` and return the new element."""
    element = doc.create_element(parent, tag)
    doc.append_text(element, value)
    return element


def _add_trkpt(doc: XmlDocument, trkseg, point: Mapping, settings: Mapping):
    validate_coordinates(point, settings["latKey"], settings["lonKey"])

    trkpt = doc.create_element(trkseg, "trkpt")
    doc.set_attribute(trkpt, "lat", point[settings["latKey"]])
    doc.set_attribute(trkpt, "lon", point[settings["lonKey"]])

    # Fixed order: course, ele, hdop, speed, vdop, time, extensions
    for tag, key in (
        ("course", settings["courseKey"]),
        ("ele", settings["eleKey"]),
        ("hdop", settings["hdopKey"]),
        ("speed", settings["speedKey"]),
        ("vdop", settings["vdopKey"]),
    ):
        if key in point:
            add_text_node(doc, trkpt, tag, point[key])

    time_key = settings["timeKey"]
    if time_key in point:
        add_text_node(doc, trkpt, "time", _time_text(point[time_key]))

    ext_key = settings["extKey"]
    if ext_key in point:
        extensions = doc.create_element(trkpt, "extensions")
        tpx = doc.create_element(extensions, "gpxtpx:TrackPointExtension")
        values = point[ext_key]
        if is_record(values):
            for name, value in values.items():
                add_text_node(doc, tpx, f"gpxtpx:{name}", value)

    return trkpt


def build_document(waypoints, settings: Mapping) -> XmlDocument:
    """Build the GPX element tree for validated ``waypoints``."""
    doc = XmlDocument("gpx")
    gpx = doc.root
    doc.set_attribute(gpx, "creator", settings["creator"])
    doc.set_attribute(gpx, "version", GPX_VERSION)
    doc.set_attribute(gpx, "xmlns", GPX_NS)
    doc.set_attribute(gpx, "xmlns:xsi", XSI_NS)
    doc.set_attribute(gpx, "xsi:schemaLocation", GPX_SCHEMA_LOCATION)

    metadata = doc.create_element(gpx, "metadata")
    add_text_node(doc, metadata, "name", METADATA_NAME)
    start_time = settings["startTime"]
    if start_time:
        add_text_node(doc, metadata, "time", _time_text(start_time))

    trk = doc.create_element(gpx, "trk")
    activity_name = settings["activityName"]
    if activity_name:
        add_text_node(doc, trk, "name", activity_name)

    trkseg = doc.create_element(trk, "trkseg")
    for point in waypoints:
        _add_trkpt(doc, trkseg, point, settings)

    logger.debug("Built GPX track with %d points", len(waypoints))
    return doc


# ─────────────────────────────────────────────────────────────
# Public entry point
# ─────────────────────────────────────────────────────────────

def build(waypoints=None, options: Mapping = _MISSING) -> str:
    """
    Create a GPX 1.1 string from a list of GPS waypoints.

    ``waypoints`` must be a non-empty list of dicts, each holding at least a
    latitude and a longitude (``"latitude"`` / ``"longitude"`` unless the
    ``latKey`` / ``lonKey`` options say otherwise). ``options`` overrides
    keys of DEFAULT_SETTINGS and may be omitted, but not passed as None.

    Raises InvalidWaypointsArgument, InvalidOptionsArgument,
    MissingCoordinates, or InvalidXmlName / InvalidXmlCharacter when a
    key or value cannot be written as XML; nothing is returned on failure.
    """
    validate_waypoints(waypoints)
    options = validate_options(options)
    settings = resolve_settings(options)
    doc = build_document(waypoints, settings)
    return XML_PROLOG + doc.to_string()


create_gpx = build
