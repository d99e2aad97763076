"""Format detection and file helpers for FHIR JSON and XML content."""

import logging
from pathlib import Path
from typing import Union

from . import json_codec, xml_codec
from .exceptions import FHIRParseError
from .resources import Resource

logger = logging.getLogger(__name__)

FORMATS = ("json", "xml")


def detect_format(text: Union[str, bytes]) -> str:
    """Guess the wire format from the first non-blank character."""
    text = json_codec.decode_text(text)
    stripped = text.lstrip("\ufeff \t\r\n")
    if stripped.startswith("{"):
        return "json"
    if stripped.startswith("<"):
        return "xml"
    raise FHIRParseError("Content is neither FHIR JSON nor FHIR XML")


def from_contents(text: Union[str, bytes]) -> Resource:
    """Read a resource from JSON or XML text, whichever it is.

    Raises:
        FHIRParseError: If the text is in neither format or malformed
        UnknownResourceTypeError: If the JSON names no implemented resource
        pydantic.ValidationError: If the content does not fit the model
    """
    fmt = detect_format(text)
    logger.debug("Detected %s content", fmt)
    if fmt == "json":
        return Resource.from_dict(json_codec.loads(text))
    return xml_codec.load(text)


def format_for_path(path: Union[str, Path]) -> str:
    suffix = Path(path).suffix.lower().lstrip(".")
    if suffix not in FORMATS:
        raise ValueError(f"Unsupported file format: {suffix or path}")
    return suffix


def read_file(path: Union[str, Path]) -> Resource:
    """Read a resource from a .json or .xml file."""
    path = Path(path)
    format_for_path(path)
    return from_contents(path.read_bytes())


def write_file(resource: Resource, path: Union[str, Path], indent: int = 2) -> None:
    """Write a resource to a .json or .xml file, chosen by suffix."""
    path = Path(path)
    if format_for_path(path) == "json":
        text = resource.to_json(indent=indent)
    else:
        text = resource.to_xml(pretty=indent > 0)
    path.write_text(text + "\n", encoding="utf-8")
    logger.debug("Wrote %s to %s", resource.get_resource_type(), path)
