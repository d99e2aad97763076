"""Reading and writing FHIR XML.

Elements are written in model declaration order, which is FHIR element
order.  Primitive values go in a ``value`` attribute, ``Element.id`` and
``Extension.url`` are attributes, resources in resource-typed slots are
wrapped in an element named after the slot and ``Narrative.div`` is embedded
XHTML.
"""

import copy
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional, Tuple

import defusedxml.ElementTree as DefusedET
from defusedxml import DefusedXmlException

from .config import NAMESPACES
from .elements import COMPLEX, RESOURCE, XHTML, ElementInfo
from .exceptions import FHIRParseError
from .primitives import coerce_lexical, format_lexical
from .registry import get_resource_class

logger = logging.getLogger(__name__)

FHIR_NS = NAMESPACES["FHIR"]
XHTML_NS = NAMESPACES["XHTML"]
XSI_NS = NAMESPACES["XSI"]


def _split(tag: str) -> Tuple[Optional[str], str]:
    if tag.startswith("{"):
        namespace, _, name = tag[1:].partition("}")
        return namespace, name
    return None, tag


def _root_name(model: Any) -> str:
    if model.is_resource():
        return model.get_resource_type()
    return model.fhir_type()


# -- writing ------------------------------------------------------------------


def dump(model: Any, pretty: bool = False) -> str:
    """Serialize a model instance to FHIR XML text."""
    root = ET.Element(_root_name(model))
    root.set("xmlns", FHIR_NS)
    _fill(root, model)
    if pretty:
        _indent(root)
    return ET.tostring(root, encoding="unicode")


def _indent(root: ET.Element) -> None:
    """Indent the FHIR elements, leaving whitespace inside narrative XHTML as written."""
    divs = [div for div in root.iter("div") if div.get("xmlns") == XHTML_NS]
    inner = [(node, node.text, node.tail) for div in divs for node in div.iter() if node is not div]
    outer = [(div, div.text) for div in divs]
    ET.indent(root, space="  ")
    for node, text, tail in inner:
        node.text, node.tail = text, tail
    for div, text in outer:
        div.text = text


def _fill(elem: ET.Element, model: Any) -> None:
    for info in model.elements().values():
        value = getattr(model, info.name)
        if value is None:
            continue
        if info.xml_attribute:
            elem.set(info.json_name, format_lexical(info.type_code, value))
            continue
        for item in value if info.is_list else [value]:
            elem.append(_child(info, item))


def _child(info: ElementInfo, value: Any) -> ET.Element:
    if info.kind == XHTML:
        return _xhtml_element(value)
    if info.kind == RESOURCE:
        wrapper = ET.Element(info.json_name)
        inner = ET.SubElement(wrapper, value.get_resource_type())
        _fill(inner, value)
        return wrapper
    if info.kind == COMPLEX:
        elem = ET.Element(info.json_name)
        _fill(elem, value)
        return elem
    return ET.Element(info.json_name, value=format_lexical(info.type_code, value))


def _strip_namespaces(elem: ET.Element) -> None:
    for node in elem.iter():
        if isinstance(node.tag, str):
            node.tag = _split(node.tag)[1]


def _xhtml_element(text: str) -> ET.Element:
    try:
        div = DefusedET.fromstring(text)
    except (ET.ParseError, DefusedXmlException) as e:
        raise FHIRParseError(f"Narrative div is not well-formed XHTML: {e}") from e
    _strip_namespaces(div)
    div.set("xmlns", XHTML_NS)
    return div


# -- reading ------------------------------------------------------------------


def parse(text) -> ET.Element:
    """Parse XML text with entity expansion and DTDs disabled."""
    try:
        return DefusedET.fromstring(text)
    except ET.ParseError as e:
        raise FHIRParseError(f"Invalid XML: {e}") from e
    except DefusedXmlException as e:
        raise FHIRParseError(f"Forbidden XML construct: {e}") from e


def load(text, cls: Optional[type] = None) -> Any:
    """Parse FHIR XML text into a model instance.

    Args:
        text: XML document
        cls: Expected model class; an abstract resource class (or None)
            selects the class from the root element name

    Returns:
        Validated model instance

    Raises:
        FHIRParseError: If the XML is malformed, not in the FHIR namespace or
            contains elements the model does not declare
        pydantic.ValidationError: If the content does not fit the model
    """
    root = parse(text)
    namespace, name = _split(root.tag)
    if namespace != FHIR_NS:
        raise FHIRParseError(f"Root element {name!r} is not in the FHIR namespace")

    if cls is None or (cls.is_resource() and cls.is_abstract()):
        cls = _resource_class(name)
    elif name != _root_name(cls):
        raise FHIRParseError(f"Expected root element {_root_name(cls)!r}, found {name!r}")

    logger.debug("Reading %s from XML", name)
    data = _read(root, cls)
    if cls.is_resource():
        data["resourceType"] = name
    return cls.model_validate(data)


def _resource_class(name: str) -> type:
    try:
        return get_resource_class(name)
    except KeyError as e:
        raise FHIRParseError(str(e)) from None


def _read(elem: ET.Element, cls: type) -> Dict[str, Any]:
    by_name = {info.json_name: info for info in cls.elements().values()}
    location = cls.fhir_path()
    data: Dict[str, Any] = {}

    for attr, raw in elem.attrib.items():
        if _split(attr)[0] == XSI_NS:
            # schema hints such as xsi:schemaLocation
            continue
        info = by_name.get(attr)
        if info is None or not info.xml_attribute:
            raise FHIRParseError(f"{location}: unexpected attribute {attr!r}")
        data[info.name] = _coerce(info, raw)

    for child in elem:
        if not isinstance(child.tag, str):
            # comments and processing instructions
            continue
        namespace, name = _split(child.tag)
        info = by_name.get(name)
        if info is None or info.xml_attribute:
            raise FHIRParseError(f"{location}: unknown element {name!r}")
        expected = XHTML_NS if info.kind == XHTML else FHIR_NS
        if namespace != expected:
            raise FHIRParseError(f"{location}.{name}: element must be in namespace {expected}")

        value = _read_child(child, info)
        if info.is_list:
            data.setdefault(info.name, []).append(value)
        elif info.name in data:
            # left for validation to reject as a list on a single-valued element
            data[info.name] = [data[info.name], value]
        else:
            data[info.name] = value
    return data


def _read_child(child: ET.Element, info: ElementInfo) -> Any:
    if info.kind == XHTML:
        div = copy.deepcopy(child)
        div.tail = None
        _strip_namespaces(div)
        div.set("xmlns", XHTML_NS)
        return ET.tostring(div, encoding="unicode")
    if info.kind == RESOURCE:
        inner = [node for node in child if isinstance(node.tag, str)]
        if len(inner) != 1:
            raise FHIRParseError(f"{info.path}: expected exactly one resource element")
        namespace, name = _split(inner[0].tag)
        if namespace != FHIR_NS:
            raise FHIRParseError(f"{info.path}: resource {name!r} is not in the FHIR namespace")
        data = {"resourceType": name}
        data.update(_read(inner[0], _resource_class(name)))
        return data
    if info.kind == COMPLEX:
        return _read(child, info.model)

    extra = set(child.attrib) - {"value"}
    if extra or len(child):
        raise FHIRParseError(
            f"{info.path}: id and extensions on primitive values are not supported"
        )
    raw = child.get("value")
    if raw is None:
        raise FHIRParseError(f"{info.path}: primitive element without a value attribute")
    return _coerce(info, raw)


def _coerce(info: ElementInfo, raw: str) -> Any:
    try:
        return coerce_lexical(info.type_code, raw)
    except ValueError as e:
        raise FHIRParseError(f"{info.path}: {e}") from e
