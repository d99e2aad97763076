"""Appointment: a booking of a healthcare event among patient(s), practitioner(s) and devices."""

from typing import Annotated, ClassVar, List, Optional

from pydantic import Field

from .. import valuesets
from ..datatypes import BackboneElement, CodeableConcept, Identifier, Period, Reference
from ..elements import Targets, extensible, preferred, required
from ..primitives import Code, DateTime, Instant, PositiveInt, String, UnsignedInt
from .resource import DomainResource


PARTICIPANT_TYPE = extensible(valuesets.ENCOUNTER_PARTICIPANT_TYPE)
PARTICIPANT_REQUIRED = required(valuesets.PARTICIPANT_REQUIRED)
PARTICIPATION_STATUS = required(valuesets.PARTICIPATION_STATUS)


class Appointment(DomainResource):
    __resource_type__: ClassVar[str] = "Appointment"
    SEARCH_PARAMS: ClassVar[List[str]] = [
        "actor", "appointment-type", "based-on", "date", "identifier", "location",
        "part-status", "patient", "practitioner", "reason-code", "reason-reference",
        "service-category", "service-type", "slot", "specialty", "status", "supporting-info",
    ]

    class Participant(BackboneElement):
        type: Annotated[Optional[List[CodeableConcept]], PARTICIPANT_TYPE] = None
        actor: Annotated[
            Optional[Reference],
            Targets(
                "Patient", "Practitioner", "PractitionerRole", "RelatedPerson", "Device",
                "HealthcareService", "Location",
            ),
        ] = None
        required: Annotated[Optional[Code], PARTICIPANT_REQUIRED] = None
        status: Annotated[Code, PARTICIPATION_STATUS]
        period: Optional[Period] = None

    identifier: Optional[List[Identifier]] = None
    status: Annotated[Code, required(valuesets.APPOINTMENT_STATUS)]
    cancelationReason: Optional[CodeableConcept] = None
    serviceCategory: Optional[List[CodeableConcept]] = None
    serviceType: Optional[List[CodeableConcept]] = None
    specialty: Optional[List[CodeableConcept]] = None
    appointmentType: Annotated[
        Optional[CodeableConcept], preferred("http://terminology.hl7.org/ValueSet/v2-0276")
    ] = None
    reasonCode: Optional[List[CodeableConcept]] = None
    reasonReference: Annotated[
        Optional[List[Reference]],
        Targets("Condition", "Procedure", "Observation", "ImmunizationRecommendation"),
    ] = None
    priority: Optional[UnsignedInt] = None
    description: Optional[String] = None
    supportingInformation: Annotated[Optional[List[Reference]], Targets("Resource")] = None
    start: Optional[Instant] = None
    end: Optional[Instant] = None
    minutesDuration: Optional[PositiveInt] = None
    slot: Annotated[Optional[List[Reference]], Targets("Slot")] = None
    created: Optional[DateTime] = None
    comment: Optional[String] = None
    patientInstruction: Optional[String] = None
    basedOn: Annotated[Optional[List[Reference]], Targets("ServiceRequest")] = None
    participant: Annotated[List[Participant], Field(min_length=1)]
    requestedPeriod: Optional[List[Period]] = None
