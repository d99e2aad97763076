"""FHIR R4 primitive data types.

Every primitive is an ``Annotated`` alias: the Python value type, the lexical
constraint from the R4 base definitions and a :class:`FHIRPrimitive` marker so
that the element metadata can report the FHIR type code.  Date and time values
keep their lexical form because FHIR allows partial dates.
"""

import decimal
from typing import Annotated, Any, Dict, Tuple

from pydantic import (
    BeforeValidator,
    Field,
    StrictBool,
    StrictInt,
    StringConstraints,
)


class FHIRPrimitive:
    """Marker attached to a primitive alias naming its FHIR type code."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"FHIRPrimitive({self.name!r})"


_DATE = r"([0-9]([0-9]([0-9][1-9]|[1-9]0)|[1-9]00)|[1-9]000)"
_TIME = r"([01][0-9]|2[0-3]):[0-5][0-9]:([0-5][0-9]|60)(\.[0-9]+)?"
_ZONE = r"(Z|(\+|-)((0[0-9]|1[0-3]):[0-5][0-9]|14:00))"

# name -> (python value kind, lexical regex)
PRIMITIVES: Dict[str, Tuple[str, str]] = {
    "base64Binary": ("string", r"(\s*([0-9a-zA-Z\+/=]){4}\s*)+"),
    "boolean": ("boolean", r"true|false"),
    "canonical": ("string", r"\S*"),
    "code": ("string", r"[^\s]+(\s[^\s]+)*"),
    "date": ("date", _DATE + r"(-(0[1-9]|1[0-2])(-(0[1-9]|[1-2][0-9]|3[0-1]))?)?"),
    "dateTime": (
        "datetime",
        _DATE + r"(-(0[1-9]|1[0-2])(-(0[1-9]|[1-2][0-9]|3[0-1])(T" + _TIME + _ZONE + r")?)?)?",
    ),
    "decimal": ("decimal", r"-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?"),
    "id": ("string", r"[A-Za-z0-9\-\.]{1,64}"),
    "instant": (
        "datetime",
        _DATE + r"-(0[1-9]|1[0-2])-(0[1-9]|[1-2][0-9]|3[0-1])T" + _TIME + _ZONE,
    ),
    "integer": ("integer", r"-?([0]|([1-9][0-9]*))"),
    "markdown": ("string", r"[ \r\n\t\S]+"),
    "oid": ("string", r"urn:oid:[0-2](\.(0|[1-9][0-9]*))+"),
    "positiveInt": ("integer", r"[1-9][0-9]*"),
    "string": ("string", r"[ \r\n\t\S]+"),
    "time": ("time", _TIME),
    "unsignedInt": ("integer", r"[0]|([1-9][0-9]*)"),
    "uri": ("string", r"\S*"),
    "url": ("string", r"\S*"),
    "uuid": ("string", r"urn:uuid:[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"),
    "xhtml": ("string", r""),
}

INT32_MIN = -2147483648
INT32_MAX = 2147483647


def _pattern(name: str) -> str:
    return "^(?:" + PRIMITIVES[name][1] + ")$"


def _text(name: str):
    return Annotated[str, StringConstraints(pattern=_pattern(name)), FHIRPrimitive(name)]


def _decimal_number(value: Any) -> Any:
    """Accept JSON numbers only; floats are read through their shortest repr."""
    if isinstance(value, (str, bool)):
        raise ValueError(f"decimal must be a number, not {type(value).__name__}")
    if isinstance(value, float):
        return decimal.Decimal(repr(value))
    return value


Base64Binary = _text("base64Binary")
Canonical = _text("canonical")
Code = _text("code")
Date = _text("date")
DateTime = _text("dateTime")
Id = _text("id")
Instant = _text("instant")
Markdown = _text("markdown")
Oid = _text("oid")
String = _text("string")
Time = _text("time")
Uri = _text("uri")
Url = _text("url")
Uuid = _text("uuid")

Boolean = Annotated[StrictBool, FHIRPrimitive("boolean")]
Integer = Annotated[StrictInt, Field(ge=INT32_MIN, le=INT32_MAX), FHIRPrimitive("integer")]
PositiveInt = Annotated[StrictInt, Field(ge=1, le=INT32_MAX), FHIRPrimitive("positiveInt")]
UnsignedInt = Annotated[StrictInt, Field(ge=0, le=INT32_MAX), FHIRPrimitive("unsignedInt")]
Decimal = Annotated[
    decimal.Decimal,
    BeforeValidator(_decimal_number),
    Field(allow_inf_nan=False),
    FHIRPrimitive("decimal"),
]

# Narrative.div: an XHTML fragment whose root is a <div>
Xhtml = Annotated[
    str,
    StringConstraints(pattern=r"^\s*<div[\s>/]", min_length=1),
    FHIRPrimitive("xhtml"),
]


def coerce_lexical(primitive: str, text: str) -> Any:
    """Convert the lexical form of a primitive (as found in XML) to its value.

    Strings are returned unchanged; validation of the lexical form is left to
    the model.
    """
    kind = PRIMITIVES[primitive][0]
    if kind == "boolean":
        if text == "true":
            return True
        if text == "false":
            return False
        raise ValueError(f"Invalid boolean value: {text!r}")
    if kind == "integer":
        try:
            return int(text)
        except ValueError:
            raise ValueError(f"Invalid {primitive} value: {text!r}") from None
    if kind == "decimal":
        try:
            return decimal.Decimal(text)
        except decimal.InvalidOperation:
            raise ValueError(f"Invalid decimal value: {text!r}") from None
    return text


def format_lexical(primitive: str, value: Any) -> str:
    """Render a primitive value in its FHIR lexical form."""
    kind = PRIMITIVES[primitive][0]
    if kind == "boolean":
        return "true" if value else "false"
    return str(value)


__all__ = [
    "FHIRPrimitive",
    "PRIMITIVES",
    "Base64Binary",
    "Boolean",
    "Canonical",
    "Code",
    "Date",
    "DateTime",
    "Decimal",
    "Id",
    "Instant",
    "Integer",
    "Markdown",
    "Oid",
    "PositiveInt",
    "String",
    "Time",
    "UnsignedInt",
    "Uri",
    "Url",
    "Uuid",
    "Xhtml",
    "coerce_lexical",
    "format_lexical",
]
