"""Conversion to and from ``fhir.resources`` model instances.

``fhir.resources`` ships R4B models under ``fhir.resources.R4B``; R4B has the
R4 shape for every resource implemented here, so instances convert through
their FHIR JSON objects.
"""

import importlib
import logging
from typing import Any

from . import json_codec
from .exceptions import UnknownResourceTypeError
from .resources import Resource
from .resources.resource import resource_from_dict

logger = logging.getLogger(__name__)

FHIR_RESOURCES_PACKAGE = "fhir.resources.R4B"


def fhir_resources_class(resource_type: str) -> type:
    """Return the ``fhir.resources`` R4B class for a resource type.

    Raises:
        UnknownResourceTypeError: If the package has no such resource
    """
    try:
        module = importlib.import_module(f"{FHIR_RESOURCES_PACKAGE}.{resource_type.lower()}")
        return getattr(module, resource_type)
    except (ImportError, AttributeError):
        raise UnknownResourceTypeError(resource_type) from None


def to_fhir_resources(resource: Resource) -> Any:
    """Convert a resource to the matching ``fhir.resources`` R4B instance."""
    cls = fhir_resources_class(resource.get_resource_type())
    logger.debug("Converting %s to %s", resource.get_resource_type(), cls.__module__)
    return cls.model_validate(resource.to_dict())


def from_fhir_resources(model: Any) -> Resource:
    """Convert a ``fhir.resources`` instance to the matching resource here.

    Raises:
        UnknownResourceTypeError: If the resource type is not implemented here
        pydantic.ValidationError: If the content does not fit the model
    """
    # the FHIR JSON text keeps decimals as numbers
    data = json_codec.loads(model.model_dump_json(by_alias=True, exclude_none=True))
    data["resourceType"] = model.get_resource_type()
    return resource_from_dict(data)
