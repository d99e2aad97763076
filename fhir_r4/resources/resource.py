"""Abstract resource base classes and polymorphic resource slots."""

import logging
from typing import Annotated, Any, ClassVar, Dict, List, Optional

from pydantic import BeforeValidator, SerializeAsAny, ValidationInfo, model_serializer, model_validator

from .. import valuesets
from ..datatypes import Extension, Meta, Narrative
from ..elements import preferred
from ..model import FHIRModel, prune_empty
from ..primitives import Code, Id, Uri
from ..registry import ABSTRACT_RESOURCES, get_resource_class, register_resource

logger = logging.getLogger(__name__)

# Validation context key set when parsing FHIR JSON, where resourceType is mandatory
REQUIRE_RESOURCE_TYPE = "require_resource_type"


class Resource(FHIRModel):
    """Base of all resources.

    Every concrete subclass names its type in ``__resource_type__``; JSON
    carries it as ``resourceType``.  ``SEARCH_PARAMS`` lists the names of the
    search parameters R4 defines for the type.
    """

    __resource_type__: ClassVar[str] = "Resource"
    SEARCH_PARAMS: ClassVar[List[str]] = []

    id: Optional[Id] = None
    meta: Optional[Meta] = None
    implicitRules: Optional[Uri] = None
    language: Annotated[Optional[Code], preferred(valuesets.LANGUAGES)] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if "__resource_type__" in cls.__dict__ and not cls.is_abstract():
            register_resource(cls)

    @classmethod
    def get_resource_type(cls) -> str:
        """Canonical name of this resource type, e.g. ``"AppointmentResponse"``."""
        return cls.__resource_type__

    @property
    def resource_type(self) -> str:
        return self.get_resource_type()

    @classmethod
    def is_resource(cls) -> bool:
        return True

    @classmethod
    def is_abstract(cls) -> bool:
        return cls.get_resource_type() in ABSTRACT_RESOURCES

    @classmethod
    def fhir_type(cls) -> str:
        return cls.get_resource_type()

    @model_validator(mode="before")
    @classmethod
    def _check_resource_type(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        if "resourceType" not in data:
            if (info.context or {}).get(REQUIRE_RESOURCE_TYPE):
                raise ValueError(f"resourceType is required, expected {cls.get_resource_type()!r}")
        else:
            data = dict(data)
            declared = data.pop("resourceType")
            if declared != cls.get_resource_type():
                raise ValueError(
                    f"resourceType {declared!r} does not match {cls.get_resource_type()!r}"
                )
        return data

    @model_serializer(mode="wrap")
    def _serialize(self, handler):
        data = {"resourceType": self.get_resource_type()}
        data.update(prune_empty(handler(self)))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resource":
        """Validate a FHIR JSON object.

        On an abstract class the concrete class is chosen from
        ``resourceType``; on a concrete class the object is validated into
        that class, and the object must name it in ``resourceType``.

        Raises:
            UnknownResourceTypeError: If ``resourceType`` names no implemented
                resource
            pydantic.ValidationError: If the object does not fit the model
        """
        if cls.is_abstract():
            return resource_from_dict(data)
        return cls.model_validate(data, context={REQUIRE_RESOURCE_TYPE: True})


def _parse_resource(value: Any) -> Any:
    if isinstance(value, dict):
        try:
            cls = get_resource_class(value.get("resourceType"))
        except KeyError as e:
            raise ValueError(str(e)) from None
        return cls.model_validate(value)
    return value


# A slot holding any concrete resource (contained, Bundle.entry.resource, ...)
AnyResource = Annotated[SerializeAsAny[Resource], BeforeValidator(_parse_resource)]


class DomainResource(Resource):
    """A resource with narrative, extensions and contained resources."""

    __resource_type__: ClassVar[str] = "DomainResource"

    text: Optional[Narrative] = None
    contained: Optional[List[AnyResource]] = None
    extension: Optional[List[Extension]] = None
    modifierExtension: Optional[List[Extension]] = None


def resource_from_dict(data: Any) -> Resource:
    """Build the resource named by ``data["resourceType"]``."""
    if not isinstance(data, dict):
        raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
    cls = get_resource_class(data.get("resourceType"))
    logger.debug("Dispatching resourceType %s", cls.get_resource_type())
    return cls.model_validate(data)
