"""Element metadata: the per-type table of declared FHIR elements.

Models declare their elements as ordinary pydantic fields.  The FHIR-specific
facts that the Python annotation cannot express are attached as ``Annotated``
markers (:class:`Binding`, :class:`Targets`, :class:`Choice`,
:class:`XmlAttribute`); everything else (type code, cardinality, kind) is read
back from the annotation itself.
"""

import sys
import types
from dataclasses import dataclass
from typing import Annotated, Any, ForwardRef, List, Optional, Tuple, Union, get_args, get_origin

from .config import STRUCTURE_DEFINITION_BASE
from .primitives import FHIRPrimitive
from .registry import get_type_class
from .valuesets import ValueSet

BINDING_STRENGTHS = ("required", "extensible", "preferred", "example")

PRIMITIVE = "primitive"
XHTML = "xhtml"
COMPLEX = "complex"
RESOURCE = "resource"


class Binding:
    """Value-set binding of a coded element."""

    __slots__ = ("strength", "value_set")

    def __init__(self, strength: str, value_set: Union[ValueSet, str]):
        if strength not in BINDING_STRENGTHS:
            raise ValueError(f"Invalid binding strength: {strength}")
        if isinstance(value_set, str):
            value_set = ValueSet(value_set)
        self.strength = strength
        self.value_set = value_set

    @property
    def url(self) -> str:
        return self.value_set.url

    @property
    def checkable(self) -> bool:
        """Whether membership can be tested locally."""
        return self.value_set.enumerated

    def __repr__(self):
        return f"Binding({self.strength!r}, {self.url!r})"


def required(value_set: Union[ValueSet, str]) -> Binding:
    return Binding("required", value_set)


def extensible(value_set: Union[ValueSet, str]) -> Binding:
    return Binding("extensible", value_set)


def preferred(value_set: Union[ValueSet, str]) -> Binding:
    return Binding("preferred", value_set)


def example(value_set: Union[ValueSet, str]) -> Binding:
    return Binding("example", value_set)


class Targets:
    """Allowed target resource types of a Reference or canonical element."""

    __slots__ = ("names",)

    def __init__(self, *names: str):
        self.names = tuple(names)

    @property
    def profiles(self) -> Tuple[str, ...]:
        return tuple(STRUCTURE_DEFINITION_BASE + name for name in self.names)

    def __repr__(self):
        return f"Targets{self.names!r}"


class Choice:
    """Membership of a field in a ``name[x]`` choice group."""

    __slots__ = ("group", "required")

    def __init__(self, group: str, required: bool = False):
        self.group = group
        self.required = required

    def __repr__(self):
        return f"Choice({self.group!r}, required={self.required})"


class XmlAttribute:
    """The element is written as an XML attribute rather than a child element."""

    def __repr__(self):
        return "XmlAttribute()"


@dataclass(frozen=True)
class ElementInfo:
    """One row of a model's metadata table."""

    name: str
    json_name: str
    path: str
    type_code: str
    min: int
    max: str
    kind: str
    model: Optional[type] = None
    binding: Optional[Binding] = None
    targets: Tuple[str, ...] = ()
    choice: Optional[str] = None
    xml_attribute: bool = False

    @property
    def is_list(self) -> bool:
        return self.max == "*"

    @property
    def is_primitive(self) -> bool:
        return self.kind in (PRIMITIVE, XHTML)

    @property
    def cardinality(self) -> str:
        return f"{self.min}..{self.max}"

    def describe(self) -> str:
        """Single-line summary, in the style of the R4 element tables."""
        parts = [self.path, self.cardinality, self.type_code]
        if self.targets:
            parts.append("(" + "|".join(self.targets) + ")")
        if self.binding is not None:
            parts.append(f"[{self.binding.strength}: {self.binding.url}]")
        return " ".join(parts)


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is getattr(types, "UnionType", None)


def unwrap_annotation(annotation: Any, metadata: List[Any]) -> Tuple[Any, bool, List[Any]]:
    """Strip Optional, List and Annotated layers from a field annotation.

    Returns the innermost type, whether a list layer was seen and every
    ``Annotated`` metadata object collected on the way.
    """
    markers = list(metadata)
    is_list = False
    tp = annotation
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            args = get_args(tp)
            tp = args[0]
            markers.extend(args[1:])
        elif _is_union(origin):
            args = [arg for arg in get_args(tp) if arg is not type(None)]
            tp = args[0]
        elif origin is list:
            is_list = True
            tp = get_args(tp)[0]
        else:
            return tp, is_list, markers


def _find(markers: List[Any], kind: type) -> Any:
    for marker in markers:
        if isinstance(marker, kind):
            return marker
    return None


def _resolve_name(owner: type, name: str) -> Any:
    """Resolve a forward reference left unevaluated on a field."""
    head, _, rest = name.partition(".")
    target = getattr(sys.modules.get(owner.__module__), head, None)
    if target is None:
        return get_type_class(name)
    for part in filter(None, rest.split(".")):
        target = getattr(target, part)
    return target


def build_element_info(owner: type, name: str, field: Any, base_path: str) -> ElementInfo:
    """Describe one pydantic field of ``owner`` as a FHIR element."""
    # Local import: the model module imports this one.
    from .model import FHIRModel

    tp, is_list, markers = unwrap_annotation(field.annotation, field.metadata)
    if isinstance(tp, ForwardRef):
        tp = tp.__forward_arg__
    if isinstance(tp, str):
        tp = _resolve_name(owner, tp)
    primitive = _find(markers, FHIRPrimitive)
    choice = _find(markers, Choice)
    targets = _find(markers, Targets)
    model = None

    if primitive is not None:
        type_code = primitive.name
        kind = XHTML if type_code == "xhtml" else PRIMITIVE
    elif isinstance(tp, type) and issubclass(tp, FHIRModel):
        model = tp
        type_code = tp.fhir_type()
        kind = RESOURCE if tp.is_resource() else COMPLEX
    else:
        raise TypeError(f"{owner.__name__}.{name}: cannot map {tp!r} to a FHIR type")

    json_name = field.alias or name
    if choice is not None:
        path = f"{base_path}.{choice.group}[x]"
        minimum = 1 if choice.required else 0
    else:
        path = f"{base_path}.{json_name}"
        minimum = 1 if field.is_required() else 0

    return ElementInfo(
        name=name,
        json_name=json_name,
        path=path,
        type_code=type_code,
        min=minimum,
        max="*" if is_list else "1",
        kind=kind,
        model=model,
        binding=_find(markers, Binding),
        targets=targets.names if targets is not None else (),
        choice=choice.group if choice is not None else None,
        xml_attribute=_find(markers, XmlAttribute) is not None,
    )


def _coding_problem(info: ElementInfo, coding: Any, location: str) -> Optional[str]:
    value_set = info.binding.value_set
    if coding.code is None:
        return f"{location}: coding without a code cannot match value set {value_set.url}"
    if coding.system is not None and coding.system not in value_set.codes:
        return f"{location}: system {coding.system!r} is not part of value set {value_set.url}"
    if not value_set.contains(coding.code, coding.system):
        return f"{location}: code {coding.code!r} is not in value set {value_set.url}"
    return None


def check_binding(info: ElementInfo, value: Any, location: Optional[str] = None) -> Optional[str]:
    """Test one coded value against the value set bound to ``info``.

    Handles code, Coding and CodeableConcept values.  A CodeableConcept passes
    when any of its codings does; one with text only passes unless the
    binding is required.  Messages start with ``location``, which defaults
    to the element path.

    Returns:
        A message describing the violation, or None when the value passes or
        the value set is not enumerated
    """
    binding = info.binding
    if binding is None or not binding.checkable:
        return None
    location = location or info.path
    if info.type_code == "code":
        if binding.value_set.contains(value):
            return None
        return f"{location}: code {value!r} is not in value set {binding.url}"
    if info.type_code == "Coding":
        return _coding_problem(info, value, location)
    if info.type_code == "CodeableConcept":
        codings = value.coding or []
        if not codings:
            if binding.strength == "required":
                return f"{location}: no coding from value set {binding.url}"
            return None
        problems = [_coding_problem(info, coding, location) for coding in codings]
        if None in problems:
            return None
        return problems[0]
    return None
