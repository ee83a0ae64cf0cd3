"""
ePOS-Print Wire Codec.

Renders command dataclasses to the XML elements the printer expects and
parses them back. Attributes are written in field order and absent
optionals are never written. Element text is XML-escaped exactly once
here; printer escapes such as {1, {A or \\x1d are plain characters and
pass through unchanged.

Example:
    >>> render(Hline(x1=1, x2=2, style=LineStyle.THIN_DOUBLE))
    '<hline x1="1" x2="2" style="thin_double"/>'
"""

import xml.etree.ElementTree as ET
from dataclasses import fields
from xml.sax.saxutils import escape

from .commands import COMMAND_TYPES, Command
from .errors import SerializeError

# Extra entity for attribute values, which are always double quoted
_ATTR_ENTITIES = {'"': "&quot;"}


def encode_value(value) -> str:
    """Convert a field value to its wire token."""
    # bool is an int subclass, so it must be checked first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    to_wire = getattr(value, "to_wire", None)
    if to_wire is not None:
        return to_wire()
    raise SerializeError(f"Cannot render value {value!r} of type {type(value).__name__}")


def render(command: Command) -> str:
    """
    Render a command to its XML element.

    Args:
        command: Any command dataclass

    Returns:
        The element as a string, e.g. '<cut type="feed"/>'

    Raises:
        SerializeError: If a field holds a value with no wire form
    """
    if not isinstance(command, Command) or not command.TAG:
        raise SerializeError(f"Not a print command: {command!r}")

    parts = [command.TAG]
    text = None
    for f in fields(command):
        value = getattr(command, f.name)
        if f.metadata.get("content"):
            if not isinstance(value, str):
                raise SerializeError(f"{command.kind}.{f.name} must be a string")
            text = value
        elif "attr" in f.metadata and value is not None:
            parts.append(f'{f.metadata["attr"]}="{escape(encode_value(value), _ATTR_ENTITIES)}"')

    opening = " ".join(parts)
    if text is None:
        return f"<{opening}/>"
    return f"<{opening}>{escape(text)}</{command.TAG}>"


def parse(fragment: str) -> Command:
    """
    Parse a rendered XML element back into its command.

    Raises:
        SerializeError: If the element or one of its attributes is unknown
        UnknownCatalogValue: If a catalog attribute holds an unknown token
    """
    try:
        element = ET.fromstring(fragment)
    except ET.ParseError as e:
        raise SerializeError(f"Malformed command XML: {e}") from e

    cls = COMMAND_TYPES.get(element.tag)
    if cls is None:
        raise SerializeError(f"Unknown command element: <{element.tag}>")

    kwargs = {}
    seen = set()
    for f in fields(cls):
        if f.metadata.get("content"):
            kwargs[f.name] = element.text or ""
            continue

        name = f.metadata.get("attr")
        if name is None or name not in element.attrib:
            continue
        seen.add(name)
        token = element.attrib[name]
        try:
            kwargs[f.name] = f.metadata["decode"](token)
        except ValueError as e:
            raise SerializeError(f"Invalid {name}={token!r} on <{element.tag}>") from e

    unknown = set(element.attrib) - seen
    if unknown:
        raise SerializeError(f"Unknown attributes on <{element.tag}>: {sorted(unknown)}")

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise SerializeError(f"Incomplete <{element.tag}> element: {e}") from e
