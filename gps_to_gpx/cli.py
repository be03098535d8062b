#!/usr/bin/env python3
"""
gps-to-gpx — command line
================================
Convert a JSON file of GPS waypoints into a GPX 1.1 track.

Usage:
    gps2gpx points.json                       # GPX to stdout
    gps2gpx points.json track.gpx             # Write track.gpx
    gps2gpx points.json track.gpx --pretty    # Indented output
    gps2gpx --info points.json                # Show file info only
    gps2gpx points.json out.gpx --name RUN --start-time 2015-07-20T23:30:49Z
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .gpx import (
    DEFAULT_SETTINGS, XML_PROLOG, GpxError,
    build_document, resolve_settings, validate_options, validate_waypoints,
)

logger = logging.getLogger(__name__)

SOFT_FULL_NAME = f"gps-to-gpx v{__version__}"

# CLI flag -> settings key
_FLAG_SETTINGS = {
    "name": "activityName",
    "creator": "creator",
    "start_time": "startTime",
    "lat_key": "latKey",
    "lon_key": "lonKey",
    "ele_key": "eleKey",
    "time_key": "timeKey",
    "ext_key": "extKey",
}


def load_input(filepath: str):
    """Read ``(waypoints, options)`` from a JSON file.

    The file holds either a list of waypoints or an object with a
    ``waypoints`` list and an optional ``options`` object. An explicit
    ``"options": null`` is passed through and rejected as invalid options.
    """
    with open(filepath, "r", encoding="utf-8-sig") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data.get("waypoints"), data.get("options", {})
    return data, {}


def merge_cli_options(options, args) -> dict:
    merged = dict(options or {})
    for attr, key in _FLAG_SETTINGS.items():
        value = getattr(args, attr)
        if value is not None:
            merged[key] = value
    if args.no_name:
        merged["activityName"] = None
    return merged


def show_info(waypoints, settings, filepath: str = ""):
    """Display a summary of the waypoints that would be written."""
    if filepath:
        print(f"\n📁 File: {filepath}")
    print(f"   Points: {len(waypoints)}")

    lat_key, lon_key = settings["latKey"], settings["lonKey"]
    first, last = waypoints[0], waypoints[-1]
    print(f"   Start: {first.get(lat_key)}, {first.get(lon_key)}")
    if len(waypoints) > 1:
        print(f"   End:   {last.get(lat_key)}, {last.get(lon_key)}")

    fields = []
    for key in ("courseKey", "eleKey", "hdopKey", "speedKey", "vdopKey", "timeKey", "extKey"):
        name = settings[key]
        count = sum(1 for p in waypoints if name in p)
        if count:
            fields.append(f"{name} ({count})")
    print(f"   Fields: {', '.join(fields) if fields else '(coordinates only)'}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="gps2gpx",
        description=f"{SOFT_FULL_NAME} — GPS waypoints to GPX",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s points.json track.gpx              Convert to GPX
  %(prog)s points.json                        Print GPX to stdout
  %(prog)s --info points.json                 Show file information
  %(prog)s points.json out.gpx --lat-key lat --lon-key lng
        """)

    parser.add_argument("input", help="JSON waypoints file")
    parser.add_argument("output", nargs="?", help="Output GPX file (default: stdout)")
    parser.add_argument("--info", action="store_true", help="Show file info")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--pretty", action="store_true", help="Indent the GPX output")

    gpx_group = parser.add_argument_group("GPX options")
    gpx_group.add_argument("--name", help=f"Track name (default: {DEFAULT_SETTINGS['activityName']!r})")
    gpx_group.add_argument("--no-name", action="store_true", help="Omit the track name")
    gpx_group.add_argument("--creator", help="Value of the gpx creator attribute")
    gpx_group.add_argument("--start-time", help="Metadata time, e.g. 2015-07-20T23:30:49Z")

    key_group = parser.add_argument_group("Waypoint keys")
    key_group.add_argument("--lat-key", help="Latitude key (default: latitude)")
    key_group.add_argument("--lon-key", help="Longitude key (default: longitude)")
    key_group.add_argument("--ele-key", help="Elevation key (default: elevation)")
    key_group.add_argument("--time-key", help="Time key (default: time)")
    key_group.add_argument("--ext-key", help="Extensions key (default: extensions)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        waypoints, options = load_input(args.input)
    except (OSError, ValueError) as e:
        print(f"❌ Error reading {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        validate_waypoints(waypoints)
        options = merge_cli_options(validate_options(options), args)
        settings = resolve_settings(options)
        if args.info:
            show_info(waypoints, settings, args.input)
            return 0
        doc = build_document(waypoints, settings)
    except GpxError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    gpx = XML_PROLOG + doc.to_string(pretty=args.pretty)

    if not args.output:
        sys.stdout.write(gpx + "\n")
        return 0

    try:
        Path(args.output).write_text(gpx, encoding="utf-8")
    except OSError as e:
        print(f"❌ Error writing {args.output}: {e}", file=sys.stderr)
        return 1

    logger.debug("Wrote %d bytes to %s", len(gpx.encode("utf-8")), args.output)
    print(f"✅ Converted → {args.output} ({len(waypoints)} points)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
