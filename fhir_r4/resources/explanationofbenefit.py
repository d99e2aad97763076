"""ExplanationOfBenefit: the adjudication details of a claim as reported to the patient."""

from typing import Annotated, ClassVar, List, Optional

from pydantic import Field

from .. import valuesets
from ..datatypes import (
    Address,
    Attachment,
    BackboneElement,
    CodeableConcept,
    Coding,
    Identifier,
    Money,
    Period,
    Quantity,
    Reference,
)
from ..elements import Choice, Targets, example, extensible, preferred, required
from ..model import rebuild_models
from ..primitives import Boolean, Code, Date, DateTime, Decimal, PositiveInt, String, UnsignedInt
from .resource import DomainResource


def _example(name: str):
    return example(f"http://hl7.org/fhir/ValueSet/{name}")


REVENUE = _example("ex-revenue-center")
BENEFIT_CATEGORY = _example("ex-benefitcategory")
PRODUCT_OR_SERVICE = _example("service-uscls")
MODIFIERS = _example("claim-modifiers")
PROGRAM_CODE = _example("ex-program-code")
SERVICE_PLACE = _example("service-place")
ADJUDICATION = _example("adjudication")

DEVICE = Targets("Device")
PROVIDERS = Targets("Practitioner", "PractitionerRole", "Organization")


class ExplanationOfBenefit(DomainResource):
    """Adjudication details from the processing of a Claim.

    Line items nest three levels deep (``item``, ``item.detail``,
    ``item.detail.subDetail``), each with its own adjudications;
    ``addItem`` has the same shape for items added by the insurer.  All of
    them share ``ExplanationOfBenefit.Item.Adjudication``.
    """

    __resource_type__: ClassVar[str] = "ExplanationOfBenefit"
    SEARCH_PARAMS: ClassVar[List[str]] = [
        "care-team", "claim", "coverage", "created", "detail-udi", "disposition", "encounter",
        "enterer", "facility", "identifier", "item-udi", "patient", "payee", "procedure-udi",
        "provider", "status", "subdetail-udi",
    ]

    class Related(BackboneElement):
        claim: Annotated[Optional[Reference], Targets("Claim")] = None
        relationship: Annotated[
            Optional[CodeableConcept], _example("related-claim-relationship")
        ] = None
        reference: Optional[Identifier] = None

    class Payee(BackboneElement):
        type: Annotated[Optional[CodeableConcept], _example("payeetype")] = None
        party: Annotated[
            Optional[Reference],
            Targets("Practitioner", "PractitionerRole", "Organization", "Patient", "RelatedPerson"),
        ] = None

    class CareTeam(BackboneElement):
        sequence: PositiveInt
        provider: Annotated[Reference, PROVIDERS]
        responsible: Optional[Boolean] = None
        role: Annotated[Optional[CodeableConcept], _example("claim-careteamrole")] = None
        qualification: Annotated[
            Optional[CodeableConcept], _example("provider-qualification")
        ] = None

    class SupportingInfo(BackboneElement):
        sequence: PositiveInt
        category: Annotated[CodeableConcept, _example("claim-informationcategory")]
        code: Annotated[Optional[CodeableConcept], _example("claim-exception")] = None
        timingDate: Annotated[Optional[Date], Choice("timing")] = None
        timingPeriod: Annotated[Optional[Period], Choice("timing")] = None
        valueBoolean: Annotated[Optional[Boolean], Choice("value")] = None
        valueString: Annotated[Optional[String], Choice("value")] = None
        valueQuantity: Annotated[Optional[Quantity], Choice("value")] = None
        valueAttachment: Annotated[Optional[Attachment], Choice("value")] = None
        valueReference: Annotated[Optional[Reference], Choice("value"), Targets("Resource")] = None
        reason: Annotated[Optional[Coding], _example("missing-tooth-reason")] = None

    class Diagnosis(BackboneElement):
        sequence: PositiveInt
        diagnosisCodeableConcept: Annotated[
            Optional[CodeableConcept], Choice("diagnosis", required=True), _example("icd-10")
        ] = None
        diagnosisReference: Annotated[
            Optional[Reference], Choice("diagnosis", required=True), Targets("Condition")
        ] = None
        type: Annotated[Optional[List[CodeableConcept]], _example("ex-diagnosistype")] = None
        onAdmission: Annotated[
            Optional[CodeableConcept], _example("ex-diagnosis-on-admission")
        ] = None
        packageCode: Annotated[
            Optional[CodeableConcept], _example("ex-diagnosisrelatedgroup")
        ] = None

    class Procedure(BackboneElement):
        sequence: PositiveInt
        type: Annotated[Optional[List[CodeableConcept]], _example("ex-procedure-type")] = None
        date: Optional[DateTime] = None
        procedureCodeableConcept: Annotated[
            Optional[CodeableConcept],
            Choice("procedure", required=True),
            _example("icd-10-procedures"),
        ] = None
        procedureReference: Annotated[
            Optional[Reference], Choice("procedure", required=True), Targets("Procedure")
        ] = None
        udi: Annotated[Optional[List[Reference]], DEVICE] = None

    class Insurance(BackboneElement):
        focal: Boolean
        coverage: Annotated[Reference, Targets("Coverage")]
        preAuthRef: Optional[List[String]] = None

    class Accident(BackboneElement):
        date: Optional[Date] = None
        type: Annotated[Optional[CodeableConcept], extensible(valuesets.ACT_INCIDENT_CODE)] = None
        locationAddress: Annotated[Optional[Address], Choice("location")] = None
        locationReference: Annotated[
            Optional[Reference], Choice("location"), Targets("Location")
        ] = None

    class Item(BackboneElement):
        class Adjudication(BackboneElement):
            category: Annotated[CodeableConcept, ADJUDICATION]
            reason: Annotated[Optional[CodeableConcept], _example("adjudication-reason")] = None
            amount: Optional[Money] = None
            value: Optional[Decimal] = None

        class Detail(BackboneElement):
            class SubDetail(BackboneElement):
                sequence: PositiveInt
                revenue: Annotated[Optional[CodeableConcept], REVENUE] = None
                category: Annotated[Optional[CodeableConcept], BENEFIT_CATEGORY] = None
                productOrService: Annotated[CodeableConcept, PRODUCT_OR_SERVICE]
                modifier: Annotated[Optional[List[CodeableConcept]], MODIFIERS] = None
                programCode: Annotated[Optional[List[CodeableConcept]], PROGRAM_CODE] = None
                quantity: Optional[Quantity] = None
                unitPrice: Optional[Money] = None
                factor: Optional[Decimal] = None
                net: Optional[Money] = None
                udi: Annotated[Optional[List[Reference]], DEVICE] = None
                noteNumber: Optional[List[PositiveInt]] = None
                adjudication: Optional[List["ExplanationOfBenefit.Item.Adjudication"]] = None

            sequence: PositiveInt
            revenue: Annotated[Optional[CodeableConcept], REVENUE] = None
            category: Annotated[Optional[CodeableConcept], BENEFIT_CATEGORY] = None
            productOrService: Annotated[CodeableConcept, PRODUCT_OR_SERVICE]
            modifier: Annotated[Optional[List[CodeableConcept]], MODIFIERS] = None
            programCode: Annotated[Optional[List[CodeableConcept]], PROGRAM_CODE] = None
            quantity: Optional[Quantity] = None
            unitPrice: Optional[Money] = None
            factor: Optional[Decimal] = None
            net: Optional[Money] = None
            udi: Annotated[Optional[List[Reference]], DEVICE] = None
            noteNumber: Optional[List[PositiveInt]] = None
            adjudication: Optional[List["ExplanationOfBenefit.Item.Adjudication"]] = None
            subDetail: Optional[List[SubDetail]] = None

        sequence: PositiveInt
        careTeamSequence: Optional[List[PositiveInt]] = None
        diagnosisSequence: Optional[List[PositiveInt]] = None
        procedureSequence: Optional[List[PositiveInt]] = None
        informationSequence: Optional[List[PositiveInt]] = None
        revenue: Annotated[Optional[CodeableConcept], REVENUE] = None
        category: Annotated[Optional[CodeableConcept], BENEFIT_CATEGORY] = None
        productOrService: Annotated[CodeableConcept, PRODUCT_OR_SERVICE]
        modifier: Annotated[Optional[List[CodeableConcept]], MODIFIERS] = None
        programCode: Annotated[Optional[List[CodeableConcept]], PROGRAM_CODE] = None
        servicedDate: Annotated[Optional[Date], Choice("serviced")] = None
        servicedPeriod: Annotated[Optional[Period], Choice("serviced")] = None
        locationCodeableConcept: Annotated[
            Optional[CodeableConcept], Choice("location"), SERVICE_PLACE
        ] = None
        locationAddress: Annotated[Optional[Address], Choice("location")] = None
        locationReference: Annotated[
            Optional[Reference], Choice("location"), Targets("Location")
        ] = None
        quantity: Optional[Quantity] = None
        unitPrice: Optional[Money] = None
        factor: Optional[Decimal] = None
        net: Optional[Money] = None
        udi: Annotated[Optional[List[Reference]], DEVICE] = None
        bodySite: Annotated[Optional[CodeableConcept], _example("tooth")] = None
        subSite: Annotated[Optional[List[CodeableConcept]], _example("surface")] = None
        encounter: Annotated[Optional[List[Reference]], Targets("Encounter")] = None
        noteNumber: Optional[List[PositiveInt]] = None
        adjudication: Optional[List[Adjudication]] = None
        detail: Optional[List[Detail]] = None

    class AddItem(BackboneElement):
        class Detail(BackboneElement):
            class SubDetail(BackboneElement):
                productOrService: Annotated[CodeableConcept, PRODUCT_OR_SERVICE]
                modifier: Annotated[Optional[List[CodeableConcept]], MODIFIERS] = None
                quantity: Optional[Quantity] = None
                unitPrice: Optional[Money] = None
                factor: Optional[Decimal] = None
                net: Optional[Money] = None
                noteNumber: Optional[List[PositiveInt]] = None
                adjudication: Optional[List["ExplanationOfBenefit.Item.Adjudication"]] = None

            productOrService: Annotated[CodeableConcept, PRODUCT_OR_SERVICE]
            modifier: Annotated[Optional[List[CodeableConcept]], MODIFIERS] = None
            quantity: Optional[Quantity] = None
            unitPrice: Optional[Money] = None
            factor: Optional[Decimal] = None
            net: Optional[Money] = None
            noteNumber: Optional[List[PositiveInt]] = None
            adjudication: Optional[List["ExplanationOfBenefit.Item.Adjudication"]] = None
            subDetail: Optional[List[SubDetail]] = None

        itemSequence: Optional[List[PositiveInt]] = None
        detailSequence: Optional[List[PositiveInt]] = None
        subDetailSequence: Optional[List[PositiveInt]] = None
        provider: Annotated[Optional[List[Reference]], PROVIDERS] = None
        productOrService: Annotated[CodeableConcept, PRODUCT_OR_SERVICE]
        modifier: Annotated[Optional[List[CodeableConcept]], MODIFIERS] = None
        programCode: Annotated[Optional[List[CodeableConcept]], PROGRAM_CODE] = None
        servicedDate: Annotated[Optional[Date], Choice("serviced")] = None
        servicedPeriod: Annotated[Optional[Period], Choice("serviced")] = None
        locationCodeableConcept: Annotated[
            Optional[CodeableConcept], Choice("location"), SERVICE_PLACE
        ] = None
        locationAddress: Annotated[Optional[Address], Choice("location")] = None
        locationReference: Annotated[
            Optional[Reference], Choice("location"), Targets("Location")
        ] = None
        quantity: Optional[Quantity] = None
        unitPrice: Optional[Money] = None
        factor: Optional[Decimal] = None
        net: Optional[Money] = None
        bodySite: Annotated[Optional[CodeableConcept], _example("tooth")] = None
        subSite: Annotated[Optional[List[CodeableConcept]], _example("surface")] = None
        noteNumber: Optional[List[PositiveInt]] = None
        adjudication: Optional[List["ExplanationOfBenefit.Item.Adjudication"]] = None
        detail: Optional[List[Detail]] = None

    class Total(BackboneElement):
        category: Annotated[CodeableConcept, ADJUDICATION]
        amount: Money

    class Payment(BackboneElement):
        type: Annotated[Optional[CodeableConcept], _example("ex-paymenttype")] = None
        adjustment: Optional[Money] = None
        adjustmentReason: Annotated[
            Optional[CodeableConcept], _example("payment-adjustment-reason")
        ] = None
        date: Optional[Date] = None
        amount: Optional[Money] = None
        identifier: Optional[Identifier] = None

    class ProcessNote(BackboneElement):
        number: Optional[PositiveInt] = None
        type: Annotated[Optional[Code], required(valuesets.NOTE_TYPE)] = None
        text: Optional[String] = None
        language: Annotated[Optional[CodeableConcept], preferred(valuesets.LANGUAGES)] = None

    class BenefitBalance(BackboneElement):
        class Financial(BackboneElement):
            type: Annotated[CodeableConcept, _example("benefit-type")]
            allowedUnsignedInt: Annotated[Optional[UnsignedInt], Choice("allowed")] = None
            allowedString: Annotated[Optional[String], Choice("allowed")] = None
            allowedMoney: Annotated[Optional[Money], Choice("allowed")] = None
            usedUnsignedInt: Annotated[Optional[UnsignedInt], Choice("used")] = None
            usedMoney: Annotated[Optional[Money], Choice("used")] = None

        category: Annotated[CodeableConcept, BENEFIT_CATEGORY]
        excluded: Optional[Boolean] = None
        name: Optional[String] = None
        description: Optional[String] = None
        network: Annotated[Optional[CodeableConcept], _example("benefit-network")] = None
        unit: Annotated[Optional[CodeableConcept], _example("benefit-unit")] = None
        term: Annotated[Optional[CodeableConcept], _example("benefit-term")] = None
        financial: Optional[List[Financial]] = None

    identifier: Optional[List[Identifier]] = None
    status: Annotated[Code, required(valuesets.EXPLANATION_OF_BENEFIT_STATUS)]
    type: Annotated[CodeableConcept, extensible(valuesets.CLAIM_TYPE)]
    subType: Annotated[Optional[CodeableConcept], _example("claim-subtype")] = None
    use: Annotated[Code, required(valuesets.CLAIM_USE)]
    patient: Annotated[Reference, Targets("Patient")]
    billablePeriod: Optional[Period] = None
    created: DateTime
    enterer: Annotated[Optional[Reference], Targets("Practitioner", "PractitionerRole")] = None
    insurer: Annotated[Reference, Targets("Organization")]
    provider: Annotated[Reference, PROVIDERS]
    priority: Annotated[Optional[CodeableConcept], _example("process-priority")] = None
    fundsReserveRequested: Annotated[Optional[CodeableConcept], _example("fundsreserve")] = None
    fundsReserve: Annotated[Optional[CodeableConcept], _example("fundsreserve")] = None
    related: Optional[List[Related]] = None
    prescription: Annotated[
        Optional[Reference], Targets("MedicationRequest", "VisionPrescription")
    ] = None
    originalPrescription: Annotated[Optional[Reference], Targets("MedicationRequest")] = None
    payee: Optional[Payee] = None
    referral: Annotated[Optional[Reference], Targets("ServiceRequest")] = None
    facility: Annotated[Optional[Reference], Targets("Location")] = None
    claim: Annotated[Optional[Reference], Targets("Claim")] = None
    claimResponse: Annotated[Optional[Reference], Targets("ClaimResponse")] = None
    outcome: Annotated[Code, required(valuesets.REMITTANCE_OUTCOME)]
    disposition: Optional[String] = None
    preAuthRef: Optional[List[String]] = None
    preAuthRefPeriod: Optional[List[Period]] = None
    careTeam: Optional[List[CareTeam]] = None
    supportingInfo: Optional[List[SupportingInfo]] = None
    diagnosis: Optional[List[Diagnosis]] = None
    procedure: Optional[List[Procedure]] = None
    precedence: Optional[PositiveInt] = None
    insurance: Annotated[List[Insurance], Field(min_length=1)]
    accident: Optional[Accident] = None
    item: Optional[List[Item]] = None
    addItem: Optional[List[AddItem]] = None
    adjudication: Optional[List[Item.Adjudication]] = None
    total: Optional[List[Total]] = None
    payment: Optional[Payment] = None
    formCode: Annotated[Optional[CodeableConcept], _example("forms")] = None
    form: Optional[Attachment] = None
    processNote: Optional[List[ProcessNote]] = None
    benefitPeriod: Optional[Period] = None
    benefitBalance: Optional[List[BenefitBalance]] = None


rebuild_models(ExplanationOfBenefit)
