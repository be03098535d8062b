"""
gps-to-gpx — XML document model
XmlDocument: element tree + serializer used to assemble GPX output.
"""

from __future__ import annotations
import copy
import re
import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone
from typing import Any

# XML 1.0 (5th ed.) Name production; ':' is allowed so prefixed names pass
_NAME_START = (
    ":A-Z_a-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D\u037F-\u1FFF"
    "\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF\uFDF0-\uFFFD"
    "\U00010000-\U000EFFFF"
)
_NAME_CHAR = _NAME_START + "\\-.0-9\u00B7\u0300-\u036F\u203F-\u2040"
_XML_NAME = re.compile(f"[{_NAME_START}][{_NAME_CHAR}]*")

# Anything outside the XML 1.0 Char production
_INVALID_XML_CHAR = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


class GpxError(ValueError):
    """Base class for every error raised while building a GPX document."""


class InvalidXmlName(GpxError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f'"{name}" is not a valid XML name, so it cannot be used as an element or '
            f"attribute name. Extension keys become `gpxtpx:<key>` elements: use keys made "
            f"of letters, digits, '_', '-' and '.', not starting with a digit or containing spaces."
        )


class InvalidXmlCharacter(GpxError):
    def __init__(self, value: str, char: str):
        self.value = value
        self.char = char
        super().__init__(
            f"The value {value!r} contains the character U+{ord(char):04X}, which XML 1.0 "
            f"does not allow. Remove control characters from waypoint values and options."
        )


def is_date_like(value: Any) -> bool:
    return isinstance(value, (datetime, date))


def format_iso(value) -> str:
    """UTC ISO-8601 with milliseconds, e.g. 2015-07-20T23:30:49.000Z."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def format_value(value: Any) -> str:
    """Render a caller-supplied value as XML text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def check_name(name: str) -> str:
    if not isinstance(name, str) or not _XML_NAME.fullmatch(name):
        raise InvalidXmlName(str(name))
    return name


def check_text(text: str) -> str:
    m = _INVALID_XML_CHAR.search(text)
    if m:
        raise InvalidXmlCharacter(text, m.group())
    return text


class XmlDocument:
    """A namespace-less XML document with a single named root element.

    Names and values are checked on the way in, so ``to_string`` always
    yields well-formed XML.
    """

    def __init__(self, root_tag: str):
        self._root = ET.Element(check_name(root_tag))

    @property
    def root(self) -> ET.Element:
        return self._root

    def create_element(self, parent: ET.Element, tag: str) -> ET.Element:
        """Create ``tag`` and append it as the last child of ``parent``."""
        return ET.SubElement(parent, check_name(tag))

    def set_attribute(self, element: ET.Element, name: str, value: Any):
        element.set(check_name(name), check_text(format_value(value)))

    def append_text(self, element: ET.Element, value: Any):
        text = check_text(format_value(value))
        element.text = (element.text or "") + text

    def to_string(self, pretty: bool = False) -> str:
        """Serialize the tree. Escaping of ``& < > "`` is done by ElementTree."""
        root = self._root
        if pretty:
            # Indent a copy so the document itself is left untouched
            root = copy.deepcopy(self._root)
            ET.indent(root, space="  ")
        return ET.tostring(root, encoding="unicode", short_empty_elements=True)
