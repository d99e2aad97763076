"""CapabilityStatement: the capabilities of a FHIR server or client."""

from typing import Annotated, ClassVar, List, Optional

from pydantic import Field

from .. import valuesets
from ..datatypes import (
    BackboneElement,
    CodeableConcept,
    Coding,
    ContactDetail,
    Reference,
    UsageContext,
)
from ..elements import Targets, extensible, required
from ..primitives import Boolean, Canonical, Code, DateTime, Markdown, String, UnsignedInt, Uri, Url
from .resource import DomainResource

MIME_TYPE = required(valuesets.MIME_TYPES)


class CapabilityStatement(DomainResource):
    """A statement of the capabilities of a FHIR server or client.

    The nested classes follow the R4 structure: ``Rest`` describes a RESTful
    endpoint with one ``Rest.Resource`` per supported resource type,
    ``Messaging`` and ``Document`` the other exchange paradigms.
    """

    __resource_type__: ClassVar[str] = "CapabilityStatement"
    SEARCH_PARAMS: ClassVar[List[str]] = [
        "context-quantity", "context-type-quantity", "context-type-value", "context-type",
        "context", "date", "description", "fhirversion", "format", "guide", "jurisdiction",
        "mode", "name", "publisher", "resource-profile", "resource", "security-service",
        "software", "status", "supported-profile", "title", "url", "version",
    ]

    class Software(BackboneElement):
        name: String
        version: Optional[String] = None
        releaseDate: Optional[DateTime] = None

    class Implementation(BackboneElement):
        description: String
        url: Optional[Url] = None
        custodian: Annotated[Optional[Reference], Targets("Organization")] = None

    class Rest(BackboneElement):
        class Security(BackboneElement):
            cors: Optional[Boolean] = None
            service: Annotated[
                Optional[List[CodeableConcept]], extensible(valuesets.RESTFUL_SECURITY_SERVICE)
            ] = None
            description: Optional[Markdown] = None

        class Resource(BackboneElement):
            class Interaction(BackboneElement):
                code: Annotated[Code, required(valuesets.TYPE_RESTFUL_INTERACTION)]
                documentation: Optional[Markdown] = None

            class SearchParam(BackboneElement):
                name: String
                definition: Annotated[Optional[Canonical], Targets("SearchParameter")] = None
                type: Annotated[Code, required(valuesets.SEARCH_PARAM_TYPE)]
                documentation: Optional[Markdown] = None

            class Operation(BackboneElement):
                name: String
                definition: Annotated[Canonical, Targets("OperationDefinition")]
                documentation: Optional[Markdown] = None

            type: Annotated[Code, required(valuesets.RESOURCE_TYPES)]
            profile: Annotated[Optional[Canonical], Targets("StructureDefinition")] = None
            supportedProfile: Annotated[
                Optional[List[Canonical]], Targets("StructureDefinition")
            ] = None
            documentation: Optional[Markdown] = None
            interaction: Optional[List[Interaction]] = None
            versioning: Annotated[Optional[Code], required(valuesets.VERSIONING_POLICY)] = None
            readHistory: Optional[Boolean] = None
            updateCreate: Optional[Boolean] = None
            conditionalCreate: Optional[Boolean] = None
            conditionalRead: Annotated[
                Optional[Code], required(valuesets.CONDITIONAL_READ_STATUS)
            ] = None
            conditionalUpdate: Optional[Boolean] = None
            conditionalDelete: Annotated[
                Optional[Code], required(valuesets.CONDITIONAL_DELETE_STATUS)
            ] = None
            referencePolicy: Annotated[
                Optional[List[Code]], required(valuesets.REFERENCE_HANDLING_POLICY)
            ] = None
            searchInclude: Optional[List[String]] = None
            searchRevInclude: Optional[List[String]] = None
            searchParam: Optional[List[SearchParam]] = None
            operation: Optional[List[Operation]] = None

        class Interaction(BackboneElement):
            code: Annotated[Code, required(valuesets.SYSTEM_RESTFUL_INTERACTION)]
            documentation: Optional[Markdown] = None

        mode: Annotated[Code, required(valuesets.RESTFUL_CAPABILITY_MODE)]
        documentation: Optional[Markdown] = None
        security: Optional[Security] = None
        resource: Optional[List[Resource]] = None
        interaction: Optional[List[Interaction]] = None
        searchParam: Optional[List[Resource.SearchParam]] = None
        operation: Optional[List[Resource.Operation]] = None
        compartment: Annotated[Optional[List[Canonical]], Targets("CompartmentDefinition")] = None

    class Messaging(BackboneElement):
        class Endpoint(BackboneElement):
            protocol: Annotated[Coding, extensible(valuesets.MESSAGE_TRANSPORT)]
            address: Url

        class SupportedMessage(BackboneElement):
            mode: Annotated[Code, required(valuesets.EVENT_CAPABILITY_MODE)]
            definition: Annotated[Canonical, Targets("MessageDefinition")]

        endpoint: Optional[List[Endpoint]] = None
        reliableCache: Optional[UnsignedInt] = None
        documentation: Optional[Markdown] = None
        supportedMessage: Optional[List[SupportedMessage]] = None

    class Document(BackboneElement):
        mode: Annotated[Code, required(valuesets.DOCUMENT_MODE)]
        documentation: Optional[Markdown] = None
        profile: Annotated[Canonical, Targets("StructureDefinition")]

    url: Optional[Uri] = None
    version: Optional[String] = None
    name: Optional[String] = None
    title: Optional[String] = None
    status: Annotated[Code, required(valuesets.PUBLICATION_STATUS)]
    experimental: Optional[Boolean] = None
    date: DateTime
    publisher: Optional[String] = None
    contact: Optional[List[ContactDetail]] = None
    description: Optional[Markdown] = None
    useContext: Optional[List[UsageContext]] = None
    jurisdiction: Annotated[
        Optional[List[CodeableConcept]], extensible("http://hl7.org/fhir/ValueSet/jurisdiction")
    ] = None
    purpose: Optional[Markdown] = None
    copyright: Optional[Markdown] = None
    kind: Annotated[Code, required(valuesets.CAPABILITY_STATEMENT_KIND)]
    instantiates: Annotated[Optional[List[Canonical]], Targets("CapabilityStatement")] = None
    imports: Annotated[Optional[List[Canonical]], Targets("CapabilityStatement")] = None
    software: Optional[Software] = None
    implementation: Optional[Implementation] = None
    fhirVersion: Annotated[Code, required(valuesets.FHIR_VERSION)]
    format: Annotated[List[Code], Field(min_length=1), MIME_TYPE]
    patchFormat: Annotated[Optional[List[Code]], MIME_TYPE] = None
    implementationGuide: Annotated[Optional[List[Canonical]], Targets("ImplementationGuide")] = None
    rest: Optional[List[Rest]] = None
    messaging: Optional[List[Messaging]] = None
    document: Optional[List[Document]] = None
