"""Observation: measurements and simple assertions about a patient, device or other subject."""

from typing import Annotated, ClassVar, List, Optional

from .. import valuesets
from ..datatypes import (
    Annotation,
    BackboneElement,
    CodeableConcept,
    Identifier,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    SampledData,
    Timing,
)
from ..elements import Choice, Targets, extensible, preferred, required
from ..model import rebuild_models
from ..primitives import Boolean, Code, DateTime, Instant, Integer, String, Time
from .resource import DomainResource

DATA_ABSENT_REASON = extensible(valuesets.DATA_ABSENT_REASON)
INTERPRETATION = extensible(valuesets.OBSERVATION_INTERPRETATION)


class Observation(DomainResource):
    """Measurements and simple assertions.

    ``value[x]`` and ``effective[x]`` are choice groups: at most one variant
    of each may be set, e.g. either ``valueQuantity`` or ``valueString``.
    """

    __resource_type__: ClassVar[str] = "Observation"
    SEARCH_PARAMS: ClassVar[List[str]] = [
        "amino-acid-change", "based-on", "category", "code-value-concept", "code-value-date",
        "code-value-quantity", "code-value-string", "code", "combo-code-value-concept",
        "combo-code-value-quantity", "combo-code", "combo-data-absent-reason",
        "combo-value-concept", "combo-value-quantity", "component-code-value-concept",
        "component-code-value-quantity", "component-code", "component-data-absent-reason",
        "component-value-concept", "component-value-quantity", "data-absent-reason", "date",
        "derived-from", "device", "dna-variant", "encounter", "focus", "gene-amino-acid-change",
        "gene-dnavariant", "gene-identifier", "has-member", "identifier", "method", "part-of",
        "patient", "performer", "specimen", "status", "subject", "value-concept", "value-date",
        "value-quantity", "value-string",
    ]

    class ReferenceRange(BackboneElement):
        low: Optional[Quantity] = None
        high: Optional[Quantity] = None
        type: Annotated[
            Optional[CodeableConcept],
            preferred("http://hl7.org/fhir/ValueSet/referencerange-meaning"),
        ] = None
        appliesTo: Optional[List[CodeableConcept]] = None
        age: Optional[Range] = None
        text: Optional[String] = None

    class Component(BackboneElement):
        code: CodeableConcept
        valueQuantity: Annotated[Optional[Quantity], Choice("value")] = None
        valueCodeableConcept: Annotated[Optional[CodeableConcept], Choice("value")] = None
        valueString: Annotated[Optional[String], Choice("value")] = None
        valueBoolean: Annotated[Optional[Boolean], Choice("value")] = None
        valueInteger: Annotated[Optional[Integer], Choice("value")] = None
        valueRange: Annotated[Optional[Range], Choice("value")] = None
        valueRatio: Annotated[Optional[Ratio], Choice("value")] = None
        valueSampledData: Annotated[Optional[SampledData], Choice("value")] = None
        valueTime: Annotated[Optional[Time], Choice("value")] = None
        valueDateTime: Annotated[Optional[DateTime], Choice("value")] = None
        valuePeriod: Annotated[Optional[Period], Choice("value")] = None
        dataAbsentReason: Annotated[Optional[CodeableConcept], DATA_ABSENT_REASON] = None
        interpretation: Annotated[Optional[List[CodeableConcept]], INTERPRETATION] = None
        referenceRange: Optional[List["Observation.ReferenceRange"]] = None

    identifier: Optional[List[Identifier]] = None
    basedOn: Annotated[
        Optional[List[Reference]],
        Targets(
            "CarePlan", "DeviceRequest", "ImmunizationRecommendation", "MedicationRequest",
            "NutritionOrder", "ServiceRequest",
        ),
    ] = None
    partOf: Annotated[
        Optional[List[Reference]],
        Targets(
            "MedicationAdministration", "MedicationDispense", "MedicationStatement", "Procedure",
            "Immunization", "ImagingStudy",
        ),
    ] = None
    status: Annotated[Code, required(valuesets.OBSERVATION_STATUS)]
    category: Annotated[
        Optional[List[CodeableConcept]],
        preferred("http://hl7.org/fhir/ValueSet/observation-category"),
    ] = None
    code: CodeableConcept
    subject: Annotated[Optional[Reference], Targets("Patient", "Group", "Device", "Location")] = None
    focus: Annotated[Optional[List[Reference]], Targets("Resource")] = None
    encounter: Annotated[Optional[Reference], Targets("Encounter")] = None
    effectiveDateTime: Annotated[Optional[DateTime], Choice("effective")] = None
    effectivePeriod: Annotated[Optional[Period], Choice("effective")] = None
    effectiveTiming: Annotated[Optional[Timing], Choice("effective")] = None
    effectiveInstant: Annotated[Optional[Instant], Choice("effective")] = None
    issued: Optional[Instant] = None
    performer: Annotated[
        Optional[List[Reference]],
        Targets(
            "Practitioner", "PractitionerRole", "Organization", "CareTeam", "Patient",
            "RelatedPerson",
        ),
    ] = None
    valueQuantity: Annotated[Optional[Quantity], Choice("value")] = None
    valueCodeableConcept: Annotated[Optional[CodeableConcept], Choice("value")] = None
    valueString: Annotated[Optional[String], Choice("value")] = None
    valueBoolean: Annotated[Optional[Boolean], Choice("value")] = None
    valueInteger: Annotated[Optional[Integer], Choice("value")] = None
    valueRange: Annotated[Optional[Range], Choice("value")] = None
    valueRatio: Annotated[Optional[Ratio], Choice("value")] = None
    valueSampledData: Annotated[Optional[SampledData], Choice("value")] = None
    valueTime: Annotated[Optional[Time], Choice("value")] = None
    valueDateTime: Annotated[Optional[DateTime], Choice("value")] = None
    valuePeriod: Annotated[Optional[Period], Choice("value")] = None
    dataAbsentReason: Annotated[Optional[CodeableConcept], DATA_ABSENT_REASON] = None
    interpretation: Annotated[Optional[List[CodeableConcept]], INTERPRETATION] = None
    note: Optional[List[Annotation]] = None
    bodySite: Optional[CodeableConcept] = None
    method: Optional[CodeableConcept] = None
    specimen: Annotated[Optional[Reference], Targets("Specimen")] = None
    device: Annotated[Optional[Reference], Targets("Device", "DeviceMetric")] = None
    referenceRange: Optional[List[ReferenceRange]] = None
    hasMember: Annotated[
        Optional[List[Reference]],
        Targets("Observation", "QuestionnaireResponse", "MolecularSequence"),
    ] = None
    derivedFrom: Annotated[
        Optional[List[Reference]],
        Targets(
            "DocumentReference", "ImagingStudy", "Media", "QuestionnaireResponse", "Observation",
            "MolecularSequence",
        ),
    ] = None
    component: Optional[List[Component]] = None


rebuild_models(Observation)
