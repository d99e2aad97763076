"""Name to class lookup for resources and data types.

Model classes register themselves when they are defined; the lists of R4
names cover the whole release, so a known but unimplemented name can be told
apart from a misspelt one.
"""

from typing import Dict, List

from .exceptions import UnknownResourceTypeError
from .valuesets import DATA_TYPE_CODES, RESOURCE_TYPE_CODES

ABSTRACT_RESOURCES = ("Resource", "DomainResource")

# Every concrete resource type in R4
RESOURCES: List[str] = [name for name in RESOURCE_TYPE_CODES if name not in ABSTRACT_RESOURCES]

# Every complex data type in R4 (primitives start lower case)
TYPES: List[str] = [name for name in DATA_TYPE_CODES if name[0].isupper()]

_resource_classes: Dict[str, type] = {}
_type_classes: Dict[str, type] = {}


def register_resource(cls: type) -> type:
    _resource_classes[cls.get_resource_type()] = cls
    return cls


def register_type(cls: type) -> type:
    _type_classes[cls.__name__] = cls
    return cls


def get_resource_class(name: str) -> type:
    """Return the model class for a resourceType.

    Raises:
        UnknownResourceTypeError: If ``name`` is abstract, not an R4 resource
            type or has no model
    """
    try:
        return _resource_classes[name]
    except (KeyError, TypeError):
        raise UnknownResourceTypeError(name) from None


def get_type_class(name: str) -> type:
    """Return the model class for a complex data type name."""
    try:
        return _type_classes[name]
    except (KeyError, TypeError):
        raise KeyError(f"Unknown or unsupported data type: {name!r}") from None


def resource_names() -> List[str]:
    """Names of the implemented resource types, in R4 order."""
    return [name for name in RESOURCES if name in _resource_classes]


def type_names() -> List[str]:
    """Names of the implemented data types, in R4 order."""
    return [name for name in TYPES if name in _type_classes]
