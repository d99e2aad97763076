"""OperationOutcome: errors, warnings and information messages from a system action."""

from typing import Annotated, ClassVar, List, Optional

from pydantic import Field

from .. import valuesets
from ..datatypes import BackboneElement, CodeableConcept
from ..elements import example, required
from ..primitives import Code, String
from .resource import DomainResource


class OperationOutcome(DomainResource):
    __resource_type__: ClassVar[str] = "OperationOutcome"
    SEARCH_PARAMS: ClassVar[List[str]] = []

    class Issue(BackboneElement):
        severity: Annotated[Code, required(valuesets.ISSUE_SEVERITY)]
        code: Annotated[Code, required(valuesets.ISSUE_TYPE)]
        details: Annotated[
            Optional[CodeableConcept], example("http://hl7.org/fhir/ValueSet/operation-outcome")
        ] = None
        diagnostics: Optional[String] = None
        location: Optional[List[String]] = None
        expression: Optional[List[String]] = None

    issue: Annotated[List[Issue], Field(min_length=1)]
