"""AppointmentResponse: a reply to an appointment request for a patient and/or practitioner(s)."""

from typing import Annotated, ClassVar, List, Optional

from .. import valuesets
from ..datatypes import CodeableConcept, Identifier, Reference
from ..elements import Targets, extensible, required
from ..primitives import Code, Instant, String
from .resource import DomainResource


class AppointmentResponse(DomainResource):
    """A participant's acceptance, tentative acceptance or decline of an appointment.

    Example:
        >>> response = AppointmentResponse(
        ...     appointment=Reference(reference="Appointment/example"),
        ...     participantStatus="accepted",
        ... )
        >>> response.resource_type
        'AppointmentResponse'
    """

    __resource_type__: ClassVar[str] = "AppointmentResponse"
    SEARCH_PARAMS: ClassVar[List[str]] = [
        "actor", "appointment", "identifier", "location", "part-status", "patient",
        "practitioner",
    ]

    identifier: Optional[List[Identifier]] = None
    appointment: Annotated[Reference, Targets("Appointment")]
    start: Optional[Instant] = None
    end: Optional[Instant] = None
    participantType: Annotated[
        Optional[List[CodeableConcept]], extensible(valuesets.ENCOUNTER_PARTICIPANT_TYPE)
    ] = None
    actor: Annotated[
        Optional[Reference],
        Targets(
            "Patient", "Practitioner", "PractitionerRole", "RelatedPerson", "Device",
            "HealthcareService", "Location",
        ),
    ] = None
    participantStatus: Annotated[Code, required(valuesets.PARTICIPATION_STATUS)]
    comment: Optional[String] = None
