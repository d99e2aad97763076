"""Base class of every FHIR model.

``FHIRModel`` is a pydantic model with a fixed field set.  Cardinality and
value types are enforced by pydantic from the field annotations; choice
groups and required bindings are enforced by an after-validator that reads
the element table built from the same annotations.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator
from pydantic_core import PydanticCustomError

from .elements import ElementInfo, build_element_info, check_binding
from .mixins import Hashable, Json, Xml
from .registry import register_type

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def prune_empty(data: Any) -> Any:
    """Drop empty lists from a dumped model."""
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if not (isinstance(value, list) and not value)}
    return data


class FHIRModel(Hashable, Json, Xml, BaseModel):
    """Common behaviour of data types, backbone elements and resources."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if "." not in cls.__qualname__ and not cls.is_resource():
            register_type(cls)

    # -- introspection --------------------------------------------------------

    @classmethod
    def is_resource(cls) -> bool:
        return False

    @classmethod
    def fhir_type(cls) -> str:
        """FHIR type code of this class.

        Nested classes report their base type, ``BackboneElement`` or
        ``Element``.
        """
        if "." in cls.__qualname__:
            for base in cls.__mro__[1:]:
                if "." not in base.__qualname__:
                    return base.fhir_type()
        return cls.__name__

    @classmethod
    def fhir_path(cls) -> str:
        """FHIR path of this class, e.g. ``ExplanationOfBenefit.item.adjudication``.

        Nested classes are named after the element that declares them, so the
        path follows from the qualified class name.
        """
        parts = cls.__qualname__.split(".")
        if len(parts) == 1:
            return cls.fhir_type()
        return ".".join([parts[0]] + [part[:1].lower() + part[1:] for part in parts[1:]])

    @classmethod
    def elements(cls) -> Dict[str, ElementInfo]:
        """Element table of this class keyed by python field name.

        The table is built on first use and cached on the class.  Order is
        declaration order, inherited elements first.
        """
        table = cls.__dict__.get("__fhir_elements__")
        if table is None:
            base_path = cls.fhir_path()
            table = {
                name: build_element_info(cls, name, field, base_path)
                for name, field in cls.model_fields.items()
            }
            cls.__fhir_elements__ = table
        return table

    @classmethod
    def element(cls, name: str) -> ElementInfo:
        """Look up an element by python field name or FHIR element name."""
        table = cls.elements()
        if name in table:
            return table[name]
        for info in table.values():
            if info.json_name == name:
                return info
        raise KeyError(f"{cls.fhir_path()} has no element {name!r}")

    @classmethod
    def choice_groups(cls) -> Dict[str, List[ElementInfo]]:
        """Variants of each ``[x]`` group, keyed by group name."""
        groups: Dict[str, List[ElementInfo]] = {}
        for info in cls.elements().values():
            if info.choice is not None:
                groups.setdefault(info.choice, []).append(info)
        return groups

    def choice_value(self, group: str) -> Any:
        """Return the populated variant of a choice group, or None."""
        variants = self.choice_groups().get(group)
        if variants is None:
            raise KeyError(f"{self.fhir_path()} has no choice group {group!r}")
        for info in variants:
            value = getattr(self, info.name)
            if value is not None:
                return value
        return None

    # -- validation -----------------------------------------------------------

    def _choice_problems(self) -> List[str]:
        problems = []
        for variants in self.choice_groups().values():
            present = [info.json_name for info in variants if getattr(self, info.name) is not None]
            names = ", ".join(info.json_name for info in variants)
            if len(present) > 1:
                problems.append(
                    f"{variants[0].path}: only one of {names} may be present, found {', '.join(present)}"
                )
            elif not present and variants[0].min == 1:
                problems.append(f"{variants[0].path}: one of {names} is required")
        return problems

    def _binding_problems(self) -> List[str]:
        problems = []
        for info in self.elements().values():
            if info.binding is None or info.binding.strength != "required":
                continue
            for item in _as_list(getattr(self, info.name)):
                problem = check_binding(info, item)
                if problem is not None:
                    problems.append(problem)
        return problems

    @model_validator(mode="after")
    def _check_constraints(self):
        problems = self._choice_problems() + self._binding_problems()
        if problems:
            logger.debug("%s failed constraint checks: %s", self.fhir_path(), problems)
            raise PydanticCustomError(
                "fhir_constraint",
                "{problems}",
                {"problems": "; ".join(problems)},
            )
        return self

    @model_serializer(mode="wrap")
    def _serialize(self, handler):
        return prune_empty(handler(self))

    # -- traversal and comparison ---------------------------------------------

    def each_element(self, path: Optional[str] = None) -> Iterator[Tuple[str, ElementInfo, Any]]:
        """Yield ``(location, info, value)`` for every populated element, depth first.

        Locations index repeating elements, e.g. ``Patient.name[0].given[1]``.
        """
        base = path or self.fhir_path()
        for info in self.elements().values():
            value = getattr(self, info.name)
            if value is None:
                continue
            items = value if info.is_list else [value]
            for index, item in enumerate(items):
                location = f"{base}.{info.json_name}"
                if info.is_list:
                    location += f"[{index}]"
                yield location, info, item
                if isinstance(item, FHIRModel):
                    yield from item.each_element(location)

    def mismatch(self, other: Any, exclude: Iterable[str] = ()) -> List[str]:
        """List the locations at which ``other`` differs from this instance.

        Args:
            other: Instance to compare against
            exclude: Element names ignored at every level (e.g. ``("id", "meta")``)

        Returns:
            Locations of differing elements; empty when the two are equal
        """
        if type(other) is not type(self):
            return [self.fhir_path()]
        return list(_differences(self, other, self.fhir_path(), set(exclude)))

    def equals(self, other: Any, exclude: Iterable[str] = ()) -> bool:
        return not self.mismatch(other, exclude)


def _differences(left: FHIRModel, right: FHIRModel, base: str, exclude: set) -> Iterator[str]:
    for info in left.elements().values():
        if info.name in exclude or info.json_name in exclude:
            continue
        location = f"{base}.{info.json_name}"
        mine = getattr(left, info.name)
        theirs = getattr(right, info.name)
        if info.is_list:
            mine, theirs = mine or [], theirs or []
            if len(mine) != len(theirs):
                yield location
                continue
            for index, (a, b) in enumerate(zip(mine, theirs)):
                yield from _compare(a, b, f"{location}[{index}]", exclude)
        else:
            yield from _compare(mine, theirs, location, exclude)


def _compare(a: Any, b: Any, location: str, exclude: set) -> Iterator[str]:
    if isinstance(a, FHIRModel) and type(a) is type(b):
        yield from _differences(a, b, location, exclude)
    elif a != b:
        yield location


def rebuild_models(*models: type) -> None:
    """Resolve forward references of ``models`` and of every class nested in them.

    Nested classes that reuse a sibling backbone refer to it by its dotted
    name (``"ExplanationOfBenefit.Item.Adjudication"``), which only resolves
    once the outermost class exists.
    """
    for model in models:
        model.model_rebuild()
        for nested in vars(model).values():
            if isinstance(nested, type) and issubclass(nested, FHIRModel):
                rebuild_models(nested)
