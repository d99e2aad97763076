"""Patient: demographics of a person receiving care or other health-related services."""

from typing import Annotated, ClassVar, List, Optional

from .. import valuesets
from ..datatypes import (
    Address,
    Attachment,
    BackboneElement,
    CodeableConcept,
    ContactPoint,
    HumanName,
    Identifier,
    Period,
    Reference,
)
from ..elements import Choice, Targets, extensible, preferred, required
from ..primitives import Boolean, Code, Date, DateTime, Integer
from .resource import DomainResource

GENDER = required(valuesets.ADMINISTRATIVE_GENDER)
COMMUNICATION_LANGUAGE = preferred(valuesets.LANGUAGES)


class Patient(DomainResource):
    __resource_type__: ClassVar[str] = "Patient"
    SEARCH_PARAMS: ClassVar[List[str]] = [
        "active", "address-city", "address-country", "address-postalcode", "address-state",
        "address-use", "address", "age", "birthdate", "birthOrderBoolean", "death-date",
        "deceased", "email", "family", "gender", "general-practitioner", "given", "identifier",
        "language", "link", "mothersMaidenName", "name", "organization", "part-agree", "phone",
        "phonetic", "telecom",
    ]

    class Contact(BackboneElement):
        relationship: Annotated[
            Optional[List[CodeableConcept]], extensible(valuesets.PATIENT_CONTACT_RELATIONSHIP)
        ] = None
        name: Optional[HumanName] = None
        telecom: Optional[List[ContactPoint]] = None
        address: Optional[Address] = None
        gender: Annotated[Optional[Code], GENDER] = None
        organization: Annotated[Optional[Reference], Targets("Organization")] = None
        period: Optional[Period] = None

    class Communication(BackboneElement):
        language: Annotated[CodeableConcept, COMMUNICATION_LANGUAGE]
        preferred: Optional[Boolean] = None

    class Link(BackboneElement):
        other: Annotated[Reference, Targets("Patient", "RelatedPerson")]
        type: Annotated[Code, required(valuesets.LINK_TYPE)]

    identifier: Optional[List[Identifier]] = None
    active: Optional[Boolean] = None
    name: Optional[List[HumanName]] = None
    telecom: Optional[List[ContactPoint]] = None
    gender: Annotated[Optional[Code], GENDER] = None
    birthDate: Optional[Date] = None
    deceasedBoolean: Annotated[Optional[Boolean], Choice("deceased")] = None
    deceasedDateTime: Annotated[Optional[DateTime], Choice("deceased")] = None
    address: Optional[List[Address]] = None
    maritalStatus: Annotated[
        Optional[CodeableConcept], extensible(valuesets.MARITAL_STATUS)
    ] = None
    multipleBirthBoolean: Annotated[Optional[Boolean], Choice("multipleBirth")] = None
    multipleBirthInteger: Annotated[Optional[Integer], Choice("multipleBirth")] = None
    photo: Optional[List[Attachment]] = None
    contact: Optional[List[Contact]] = None
    communication: Optional[List[Communication]] = None
    generalPractitioner: Annotated[
        Optional[List[Reference]], Targets("Organization", "Practitioner", "PractitionerRole")
    ] = None
    managingOrganization: Annotated[Optional[Reference], Targets("Organization")] = None
    link: Optional[List[Link]] = None
