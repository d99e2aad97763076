"""FHIR R4 general-purpose data types.

Field declaration order is FHIR element order.  ``Element`` and
``BackboneElement`` live here rather than in :mod:`fhir_r4.model` because
their ``extension`` elements refer to :class:`Extension`.
"""

from typing import Annotated, List, Optional

from pydantic import Field

from . import valuesets
from .elements import Choice, Targets, XmlAttribute, example, extensible, preferred, required
from .model import FHIRModel, rebuild_models
from .primitives import (
    Base64Binary,
    Boolean,
    Canonical,
    Code,
    Date,
    DateTime,
    Decimal,
    Id,
    Instant,
    Integer,
    Markdown,
    Oid,
    PositiveInt,
    String,
    Time,
    UnsignedInt,
    Uri,
    Url,
    Uuid,
    Xhtml,
)

PERSON_TARGETS = Targets(
    "Practitioner", "PractitionerRole", "RelatedPerson", "Patient", "Device", "Organization"
)


class Element(FHIRModel):
    """Base for all elements."""

    id: Annotated[Optional[String], XmlAttribute()] = None
    extension: Optional[List["Extension"]] = None


class BackboneElement(Element):
    """Base for nested element groups that may carry modifier extensions."""

    modifierExtension: Optional[List["Extension"]] = None


class Coding(Element):
    """A reference to a code defined by a terminology system."""

    system: Optional[Uri] = None
    version: Optional[String] = None
    code: Optional[Code] = None
    display: Optional[String] = None
    userSelected: Optional[Boolean] = None


class CodeableConcept(Element):
    """A concept given by codings and/or text."""

    coding: Optional[List[Coding]] = None
    text: Optional[String] = None


class Period(Element):
    start: Optional[DateTime] = None
    end: Optional[DateTime] = None


class Identifier(Element):
    """An identifier intended for computation."""

    use: Annotated[Optional[Code], required(valuesets.IDENTIFIER_USE)] = None
    type: Annotated[Optional[CodeableConcept], extensible(valuesets.IDENTIFIER_TYPE)] = None
    system: Optional[Uri] = None
    value: Optional[String] = None
    period: Optional[Period] = None
    assigner: Annotated[Optional["Reference"], Targets("Organization")] = None


class Reference(Element):
    """A reference from one resource to another."""

    reference: Optional[String] = None
    type: Annotated[Optional[Uri], extensible(valuesets.RESOURCE_TYPES)] = None
    identifier: Optional[Identifier] = None
    display: Optional[String] = None


class Quantity(Element):
    """A measured amount."""

    value: Optional[Decimal] = None
    comparator: Annotated[Optional[Code], required(valuesets.QUANTITY_COMPARATOR)] = None
    unit: Optional[String] = None
    system: Optional[Uri] = None
    code: Optional[Code] = None


class Age(Quantity):
    pass


class Count(Quantity):
    pass


class Distance(Quantity):
    pass


class Duration(Quantity):
    pass


class Money(Element):
    value: Optional[Decimal] = None
    currency: Annotated[Optional[Code], required(valuesets.CURRENCIES)] = None


class Range(Element):
    low: Optional[Quantity] = None
    high: Optional[Quantity] = None


class Ratio(Element):
    numerator: Optional[Quantity] = None
    denominator: Optional[Quantity] = None


class Attachment(Element):
    """Content in a format defined elsewhere."""

    contentType: Annotated[Optional[Code], required(valuesets.MIME_TYPES)] = None
    language: Annotated[Optional[Code], preferred(valuesets.LANGUAGES)] = None
    data: Optional[Base64Binary] = None
    url: Optional[Url] = None
    size: Optional[UnsignedInt] = None
    hash: Optional[Base64Binary] = None
    title: Optional[String] = None
    creation: Optional[DateTime] = None


class Annotation(Element):
    """Text node with attribution."""

    authorReference: Annotated[
        Optional[Reference],
        Choice("author"),
        Targets("Practitioner", "Patient", "RelatedPerson", "Organization"),
    ] = None
    authorString: Annotated[Optional[String], Choice("author")] = None
    time: Optional[DateTime] = None
    text: Markdown


class HumanName(Element):
    use: Annotated[Optional[Code], required(valuesets.NAME_USE)] = None
    text: Optional[String] = None
    family: Optional[String] = None
    given: Optional[List[String]] = None
    prefix: Optional[List[String]] = None
    suffix: Optional[List[String]] = None
    period: Optional[Period] = None


class Address(Element):
    use: Annotated[Optional[Code], required(valuesets.ADDRESS_USE)] = None
    type: Annotated[Optional[Code], required(valuesets.ADDRESS_TYPE)] = None
    text: Optional[String] = None
    line: Optional[List[String]] = None
    city: Optional[String] = None
    district: Optional[String] = None
    state: Optional[String] = None
    postalCode: Optional[String] = None
    country: Optional[String] = None
    period: Optional[Period] = None


class ContactPoint(Element):
    """Details of a technology-mediated contact point (phone, email, ...)."""

    system: Annotated[Optional[Code], required(valuesets.CONTACT_POINT_SYSTEM)] = None
    value: Optional[String] = None
    use: Annotated[Optional[Code], required(valuesets.CONTACT_POINT_USE)] = None
    rank: Optional[PositiveInt] = None
    period: Optional[Period] = None


class ContactDetail(Element):
    name: Optional[String] = None
    telecom: Optional[List[ContactPoint]] = None


class Contributor(Element):
    type: Annotated[Code, required(valuesets.CONTRIBUTOR_TYPE)]
    name: String
    contact: Optional[List[ContactDetail]] = None


class UsageContext(Element):
    """Describes the context in which content is intended to be used."""

    code: Annotated[Coding, extensible(valuesets.USAGE_CONTEXT_TYPE)]
    valueCodeableConcept: Annotated[Optional[CodeableConcept], Choice("value", required=True)] = None
    valueQuantity: Annotated[Optional[Quantity], Choice("value", required=True)] = None
    valueRange: Annotated[Optional[Range], Choice("value", required=True)] = None
    valueReference: Annotated[
        Optional[Reference],
        Choice("value", required=True),
        Targets(
            "PlanDefinition", "ResearchStudy", "InsurancePlan", "HealthcareService", "Group",
            "Location", "Organization",
        ),
    ] = None


class Meta(Element):
    """Metadata about a resource."""

    versionId: Optional[Id] = None
    lastUpdated: Optional[Instant] = None
    source: Optional[Uri] = None
    profile: Annotated[Optional[List[Canonical]], Targets("StructureDefinition")] = None
    security: Annotated[Optional[List[Coding]], extensible(valuesets.SECURITY_LABELS)] = None
    tag: Annotated[
        Optional[List[Coding]], example("http://hl7.org/fhir/ValueSet/common-tags")
    ] = None


class Narrative(Element):
    """Human-readable summary of a resource.

    ``div`` holds the XHTML fragment as text; in XML it is written as an
    embedded element in the XHTML namespace.
    """

    status: Annotated[Code, required(valuesets.NARRATIVE_STATUS)]
    div: Xhtml


class Signature(Element):
    type: Annotated[
        List[Coding],
        Field(min_length=1),
        preferred("http://hl7.org/fhir/ValueSet/signature-type"),
    ]
    when: Instant
    who: Annotated[Reference, PERSON_TARGETS]
    onBehalfOf: Annotated[Optional[Reference], PERSON_TARGETS] = None
    targetFormat: Annotated[Optional[Code], required(valuesets.MIME_TYPES)] = None
    sigFormat: Annotated[Optional[Code], required(valuesets.MIME_TYPES)] = None
    data: Optional[Base64Binary] = None


class SampledData(Element):
    """A series of measurements taken by a device."""

    origin: Quantity
    period: Decimal
    factor: Optional[Decimal] = None
    lowerLimit: Optional[Decimal] = None
    upperLimit: Optional[Decimal] = None
    dimensions: PositiveInt
    data: Optional[String] = None


class Timing(BackboneElement):
    """Specifies an event that may occur multiple times."""

    class Repeat(Element):
        boundsDuration: Annotated[Optional[Duration], Choice("bounds")] = None
        boundsRange: Annotated[Optional[Range], Choice("bounds")] = None
        boundsPeriod: Annotated[Optional[Period], Choice("bounds")] = None
        count: Optional[PositiveInt] = None
        countMax: Optional[PositiveInt] = None
        duration: Optional[Decimal] = None
        durationMax: Optional[Decimal] = None
        durationUnit: Annotated[Optional[Code], required(valuesets.UNITS_OF_TIME)] = None
        frequency: Optional[PositiveInt] = None
        frequencyMax: Optional[PositiveInt] = None
        period: Optional[Decimal] = None
        periodMax: Optional[Decimal] = None
        periodUnit: Annotated[Optional[Code], required(valuesets.UNITS_OF_TIME)] = None
        dayOfWeek: Annotated[Optional[List[Code]], required(valuesets.DAYS_OF_WEEK)] = None
        timeOfDay: Optional[List[Time]] = None
        when: Annotated[Optional[List[Code]], required(valuesets.EVENT_TIMING)] = None
        offset: Optional[UnsignedInt] = None

    event: Optional[List[DateTime]] = None
    repeat: Optional[Repeat] = None
    code: Annotated[
        Optional[CodeableConcept], preferred("http://hl7.org/fhir/ValueSet/timing-abbreviation")
    ] = None


class Dosage(BackboneElement):
    """How a medication is or should be taken."""

    class DoseAndRate(Element):
        type: Annotated[
            Optional[CodeableConcept], example("http://hl7.org/fhir/ValueSet/dose-rate-type")
        ] = None
        doseRange: Annotated[Optional[Range], Choice("dose")] = None
        doseQuantity: Annotated[Optional[Quantity], Choice("dose")] = None
        rateRatio: Annotated[Optional[Ratio], Choice("rate")] = None
        rateRange: Annotated[Optional[Range], Choice("rate")] = None
        rateQuantity: Annotated[Optional[Quantity], Choice("rate")] = None

    sequence: Optional[Integer] = None
    text: Optional[String] = None
    additionalInstruction: Optional[List[CodeableConcept]] = None
    patientInstruction: Optional[String] = None
    timing: Optional[Timing] = None
    asNeededBoolean: Annotated[Optional[Boolean], Choice("asNeeded")] = None
    asNeededCodeableConcept: Annotated[Optional[CodeableConcept], Choice("asNeeded")] = None
    site: Optional[CodeableConcept] = None
    route: Optional[CodeableConcept] = None
    method: Optional[CodeableConcept] = None
    doseAndRate: Optional[List[DoseAndRate]] = None
    maxDosePerPeriod: Optional[Ratio] = None
    maxDosePerAdministration: Optional[Quantity] = None
    maxDosePerLifetime: Optional[Quantity] = None


class Expression(Element):
    description: Optional[String] = None
    name: Optional[Id] = None
    language: Annotated[Code, extensible(valuesets.EXPRESSION_LANGUAGE)]
    expression: Optional[String] = None
    reference: Optional[Uri] = None


class ParameterDefinition(Element):
    name: Optional[Code] = None
    use: Annotated[Code, required(valuesets.OPERATION_PARAMETER_USE)]
    min: Optional[Integer] = None
    max: Optional[String] = None
    documentation: Optional[String] = None
    type: Annotated[Code, required(valuesets.ALL_TYPES)]
    profile: Annotated[Optional[Canonical], Targets("StructureDefinition")] = None


class DataRequirement(Element):
    """Describes a required data item for evaluation."""

    class CodeFilter(Element):
        path: Optional[String] = None
        searchParam: Optional[String] = None
        valueSet: Annotated[Optional[Canonical], Targets("ValueSet")] = None
        code: Optional[List[Coding]] = None

    class DateFilter(Element):
        path: Optional[String] = None
        searchParam: Optional[String] = None
        valueDateTime: Annotated[Optional[DateTime], Choice("value")] = None
        valuePeriod: Annotated[Optional[Period], Choice("value")] = None
        valueDuration: Annotated[Optional[Duration], Choice("value")] = None

    class Sort(Element):
        path: String
        direction: Annotated[Code, required(valuesets.SORT_DIRECTION)]

    type: Annotated[Code, required(valuesets.ALL_TYPES)]
    profile: Annotated[Optional[List[Canonical]], Targets("StructureDefinition")] = None
    subjectCodeableConcept: Annotated[
        Optional[CodeableConcept], Choice("subject"), extensible(valuesets.SUBJECT_TYPE)
    ] = None
    subjectReference: Annotated[Optional[Reference], Choice("subject"), Targets("Group")] = None
    mustSupport: Optional[List[String]] = None
    codeFilter: Optional[List[CodeFilter]] = None
    dateFilter: Optional[List[DateFilter]] = None
    limit: Optional[PositiveInt] = None
    sort: Optional[List[Sort]] = None


class RelatedArtifact(Element):
    """Related artifacts such as additional documentation or citations."""

    type: Annotated[Code, required(valuesets.RELATED_ARTIFACT_TYPE)]
    label: Optional[String] = None
    display: Optional[String] = None
    citation: Optional[Markdown] = None
    url: Optional[Url] = None
    document: Optional[Attachment] = None
    resource: Annotated[Optional[Canonical], Targets("Resource")] = None


class TriggerDefinition(Element):
    type: Annotated[Code, required(valuesets.TRIGGER_TYPE)]
    name: Optional[String] = None
    timingTiming: Annotated[Optional[Timing], Choice("timing")] = None
    timingReference: Annotated[Optional[Reference], Choice("timing"), Targets("Schedule")] = None
    timingDate: Annotated[Optional[Date], Choice("timing")] = None
    timingDateTime: Annotated[Optional[DateTime], Choice("timing")] = None
    data: Optional[List[DataRequirement]] = None
    condition: Optional[Expression] = None


class Extension(Element):
    """Additional content defined by implementations.

    ``url`` identifies the meaning of the extension; it is written as an XML
    attribute.  At most one ``value[x]`` variant may be present.
    """

    url: Annotated[Uri, XmlAttribute()]
    valueBase64Binary: Annotated[Optional[Base64Binary], Choice("value")] = None
    valueBoolean: Annotated[Optional[Boolean], Choice("value")] = None
    valueCanonical: Annotated[Optional[Canonical], Choice("value")] = None
    valueCode: Annotated[Optional[Code], Choice("value")] = None
    valueDate: Annotated[Optional[Date], Choice("value")] = None
    valueDateTime: Annotated[Optional[DateTime], Choice("value")] = None
    valueDecimal: Annotated[Optional[Decimal], Choice("value")] = None
    valueId: Annotated[Optional[Id], Choice("value")] = None
    valueInstant: Annotated[Optional[Instant], Choice("value")] = None
    valueInteger: Annotated[Optional[Integer], Choice("value")] = None
    valueMarkdown: Annotated[Optional[Markdown], Choice("value")] = None
    valueOid: Annotated[Optional[Oid], Choice("value")] = None
    valuePositiveInt: Annotated[Optional[PositiveInt], Choice("value")] = None
    valueString: Annotated[Optional[String], Choice("value")] = None
    valueTime: Annotated[Optional[Time], Choice("value")] = None
    valueUnsignedInt: Annotated[Optional[UnsignedInt], Choice("value")] = None
    valueUri: Annotated[Optional[Uri], Choice("value")] = None
    valueUrl: Annotated[Optional[Url], Choice("value")] = None
    valueUuid: Annotated[Optional[Uuid], Choice("value")] = None
    valueAddress: Annotated[Optional[Address], Choice("value")] = None
    valueAge: Annotated[Optional[Age], Choice("value")] = None
    valueAnnotation: Annotated[Optional[Annotation], Choice("value")] = None
    valueAttachment: Annotated[Optional[Attachment], Choice("value")] = None
    valueCodeableConcept: Annotated[Optional[CodeableConcept], Choice("value")] = None
    valueCoding: Annotated[Optional[Coding], Choice("value")] = None
    valueContactPoint: Annotated[Optional[ContactPoint], Choice("value")] = None
    valueCount: Annotated[Optional[Count], Choice("value")] = None
    valueDistance: Annotated[Optional[Distance], Choice("value")] = None
    valueDuration: Annotated[Optional[Duration], Choice("value")] = None
    valueHumanName: Annotated[Optional[HumanName], Choice("value")] = None
    valueIdentifier: Annotated[Optional[Identifier], Choice("value")] = None
    valueMoney: Annotated[Optional[Money], Choice("value")] = None
    valuePeriod: Annotated[Optional[Period], Choice("value")] = None
    valueQuantity: Annotated[Optional[Quantity], Choice("value")] = None
    valueRange: Annotated[Optional[Range], Choice("value")] = None
    valueRatio: Annotated[Optional[Ratio], Choice("value")] = None
    valueReference: Annotated[Optional[Reference], Choice("value")] = None
    valueSampledData: Annotated[Optional[SampledData], Choice("value")] = None
    valueSignature: Annotated[Optional[Signature], Choice("value")] = None
    valueTiming: Annotated[Optional[Timing], Choice("value")] = None
    valueContactDetail: Annotated[Optional[ContactDetail], Choice("value")] = None
    valueContributor: Annotated[Optional[Contributor], Choice("value")] = None
    valueDataRequirement: Annotated[Optional[DataRequirement], Choice("value")] = None
    valueExpression: Annotated[Optional[Expression], Choice("value")] = None
    valueParameterDefinition: Annotated[Optional[ParameterDefinition], Choice("value")] = None
    valueRelatedArtifact: Annotated[Optional[RelatedArtifact], Choice("value")] = None
    valueTriggerDefinition: Annotated[Optional[TriggerDefinition], Choice("value")] = None
    valueUsageContext: Annotated[Optional[UsageContext], Choice("value")] = None
    valueDosage: Annotated[Optional[Dosage], Choice("value")] = None
    valueMeta: Annotated[Optional[Meta], Choice("value")] = None


rebuild_models(
    *(
        model
        for model in list(globals().values())
        if isinstance(model, type) and issubclass(model, FHIRModel) and model.__module__ == __name__
    )
)


__all__ = [
    "Element",
    "BackboneElement",
    "Extension",
    "Narrative",
    "Meta",
    "Coding",
    "CodeableConcept",
    "Identifier",
    "Reference",
    "Period",
    "Quantity",
    "Age",
    "Count",
    "Distance",
    "Duration",
    "Money",
    "Range",
    "Ratio",
    "Attachment",
    "Annotation",
    "HumanName",
    "Address",
    "ContactPoint",
    "ContactDetail",
    "Contributor",
    "UsageContext",
    "Signature",
    "SampledData",
    "Timing",
    "Dosage",
    "Expression",
    "ParameterDefinition",
    "DataRequirement",
    "RelatedArtifact",
    "TriggerDefinition",
]
