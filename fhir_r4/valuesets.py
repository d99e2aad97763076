"""Value sets referenced by element bindings.

Only value sets that are enumerated by the R4 core definitions are listed with
codes; bindings to open-ended value sets (MIME types, currencies, languages)
carry the canonical URL alone and are never checked for membership.
"""

from typing import Dict, Iterable, Optional, Sequence, Tuple


class ValueSet:
    """A value set: canonical URL plus the legal codes per coding system."""

    def __init__(self, url: str, codes: Optional[Dict[str, Sequence[str]]] = None):
        self.url = url
        self.codes: Dict[str, Tuple[str, ...]] = {
            system: tuple(values) for system, values in (codes or {}).items()
        }

    @property
    def enumerated(self) -> bool:
        """True when the legal codes are known."""
        return bool(self.codes)

    @property
    def systems(self) -> Tuple[str, ...]:
        return tuple(self.codes)

    def all_codes(self) -> Tuple[str, ...]:
        result = []
        for values in self.codes.values():
            result.extend(values)
        return tuple(result)

    def contains(self, code: Optional[str], system: Optional[str] = None) -> bool:
        """Check membership of a code, optionally qualified by its system."""
        if code is None:
            return False
        if system is None:
            return code in self.all_codes()
        return code in self.codes.get(system, ())

    def __repr__(self):
        return f"ValueSet({self.url!r})"


def _vs(name: str, system: Optional[str], codes: Iterable[str]) -> ValueSet:
    return ValueSet(
        f"http://hl7.org/fhir/ValueSet/{name}",
        {system or f"http://hl7.org/fhir/{name}": tuple(codes)},
    )


RESOURCE_TYPE_CODES = (
    "Account", "ActivityDefinition", "AdverseEvent", "AllergyIntolerance", "Appointment",
    "AppointmentResponse", "AuditEvent", "Basic", "Binary", "BiologicallyDerivedProduct",
    "BodyStructure", "Bundle", "CapabilityStatement", "CarePlan", "CareTeam", "CatalogEntry",
    "ChargeItem", "ChargeItemDefinition", "Claim", "ClaimResponse", "ClinicalImpression",
    "CodeSystem", "Communication", "CommunicationRequest", "CompartmentDefinition",
    "Composition", "ConceptMap", "Condition", "Consent", "Contract", "Coverage",
    "CoverageEligibilityRequest", "CoverageEligibilityResponse", "DetectedIssue", "Device",
    "DeviceDefinition", "DeviceMetric", "DeviceRequest", "DeviceUseStatement",
    "DiagnosticReport", "DocumentManifest", "DocumentReference", "DomainResource",
    "EffectEvidenceSynthesis", "Encounter", "Endpoint", "EnrollmentRequest",
    "EnrollmentResponse", "EpisodeOfCare", "EventDefinition", "Evidence", "EvidenceVariable",
    "ExampleScenario", "ExplanationOfBenefit", "FamilyMemberHistory", "Flag", "Goal",
    "GraphDefinition", "Group", "GuidanceResponse", "HealthcareService", "ImagingStudy",
    "Immunization", "ImmunizationEvaluation", "ImmunizationRecommendation",
    "ImplementationGuide", "InsurancePlan", "Invoice", "Library", "Linkage", "List",
    "Location", "Measure", "MeasureReport", "Media", "Medication", "MedicationAdministration",
    "MedicationDispense", "MedicationKnowledge", "MedicationRequest", "MedicationStatement",
    "MedicinalProduct", "MedicinalProductAuthorization", "MedicinalProductContraindication",
    "MedicinalProductIndication", "MedicinalProductIngredient", "MedicinalProductInteraction",
    "MedicinalProductManufactured", "MedicinalProductPackaged",
    "MedicinalProductPharmaceutical", "MedicinalProductUndesirableEffect",
    "MessageDefinition", "MessageHeader", "MolecularSequence", "NamingSystem",
    "NutritionOrder", "Observation", "ObservationDefinition", "OperationDefinition",
    "OperationOutcome", "Organization", "OrganizationAffiliation", "Parameters", "Patient",
    "PaymentNotice", "PaymentReconciliation", "Person", "PlanDefinition", "Practitioner",
    "PractitionerRole", "Procedure", "Provenance", "Questionnaire", "QuestionnaireResponse",
    "RelatedPerson", "RequestGroup", "ResearchDefinition", "ResearchElementDefinition",
    "ResearchStudy", "ResearchSubject", "Resource", "RiskAssessment", "RiskEvidenceSynthesis",
    "Schedule", "SearchParameter", "ServiceRequest", "Slot", "Specimen", "SpecimenDefinition",
    "StructureDefinition", "StructureMap", "Subscription", "Substance",
    "SubstanceNucleicAcid", "SubstancePolymer", "SubstanceProtein",
    "SubstanceReferenceInformation", "SubstanceSourceMaterial", "SubstanceSpecification",
    "SupplyDelivery", "SupplyRequest", "Task", "TerminologyCapabilities", "TestReport",
    "TestScript", "ValueSet", "VerificationResult", "VisionPrescription",
)

DATA_TYPE_CODES = (
    "Address", "Age", "Annotation", "Attachment", "BackboneElement", "CodeableConcept",
    "Coding", "ContactDetail", "ContactPoint", "Contributor", "Count", "DataRequirement",
    "Distance", "Dosage", "Duration", "Element", "ElementDefinition", "Expression",
    "Extension", "HumanName", "Identifier", "MarketingStatus", "Meta", "Money",
    "MoneyQuantity", "Narrative", "ParameterDefinition", "Period", "Population",
    "ProdCharacteristic", "ProductShelfLife", "Quantity", "Range", "Ratio", "Reference",
    "RelatedArtifact", "SampledData", "Signature", "SimpleQuantity", "SubstanceAmount",
    "Timing", "TriggerDefinition", "UsageContext", "base64Binary", "boolean", "canonical",
    "code", "date", "dateTime", "decimal", "id", "instant", "integer", "markdown", "oid",
    "positiveInt", "string", "time", "unsignedInt", "uri", "url", "uuid", "xhtml",
)

# -- open value sets (URL only) ---------------------------------------------

LANGUAGES = ValueSet("http://hl7.org/fhir/ValueSet/languages")
MIME_TYPES = ValueSet("http://hl7.org/fhir/ValueSet/mimetypes")
CURRENCIES = ValueSet("http://hl7.org/fhir/ValueSet/currencies")
SECURITY_LABELS = ValueSet("http://hl7.org/fhir/ValueSet/security-labels")
UCUM_UNITS = ValueSet("http://hl7.org/fhir/ValueSet/ucum-units")

# -- data types ---------------------------------------------------------------

ADDRESS_USE = _vs("address-use", None, ("home", "work", "temp", "old", "billing"))
ADDRESS_TYPE = _vs("address-type", None, ("postal", "physical", "both"))
CONTACT_POINT_SYSTEM = _vs(
    "contact-point-system", None, ("phone", "fax", "email", "pager", "url", "sms", "other")
)
CONTACT_POINT_USE = _vs("contact-point-use", None, ("home", "work", "temp", "old", "mobile"))
CONTRIBUTOR_TYPE = _vs("contributor-type", None, ("author", "editor", "reviewer", "endorser"))
NAME_USE = _vs(
    "name-use", None, ("usual", "official", "temp", "nickname", "anonymous", "old", "maiden")
)
IDENTIFIER_USE = _vs("identifier-use", None, ("usual", "official", "temp", "secondary", "old"))
IDENTIFIER_TYPE = ValueSet(
    "http://hl7.org/fhir/ValueSet/identifier-type",
    {
        "http://terminology.hl7.org/CodeSystem/v2-0203": (
            "DL", "PPN", "BRN", "MR", "MCN", "EN", "TAX", "NIIP", "PRN", "MD", "DR", "ACSN",
            "UDI", "SNO", "SB", "PLAC", "FILL", "JHN",
        )
    },
)
NARRATIVE_STATUS = _vs("narrative-status", None, ("generated", "extensions", "additional", "empty"))
QUANTITY_COMPARATOR = _vs("quantity-comparator", None, ("<", "<=", ">=", ">"))
SORT_DIRECTION = _vs("sort-direction", None, ("ascending", "descending"))
OPERATION_PARAMETER_USE = _vs("operation-parameter-use", None, ("in", "out"))
RELATED_ARTIFACT_TYPE = _vs(
    "related-artifact-type",
    None,
    (
        "documentation", "justification", "citation", "predecessor", "successor",
        "derived-from", "depends-on", "composed-of",
    ),
)
TRIGGER_TYPE = _vs(
    "trigger-type",
    None,
    (
        "named-event", "periodic", "data-changed", "data-added", "data-modified",
        "data-removed", "data-accessed", "data-access-ended",
    ),
)
UNITS_OF_TIME = ValueSet(
    "http://hl7.org/fhir/ValueSet/units-of-time",
    {"http://unitsofmeasure.org": ("s", "min", "h", "d", "wk", "mo", "a")},
)
DAYS_OF_WEEK = _vs("days-of-week", None, ("mon", "tue", "wed", "thu", "fri", "sat", "sun"))
EVENT_TIMING = ValueSet(
    "http://hl7.org/fhir/ValueSet/event-timing",
    {
        "http://hl7.org/fhir/event-timing": (
            "MORN", "MORN.early", "MORN.late", "NOON", "AFT", "AFT.early", "AFT.late", "EVE",
            "EVE.early", "EVE.late", "NIGHT", "PHS",
        ),
        "http://terminology.hl7.org/CodeSystem/v3-TimingEvent": (
            "HS", "WAKE", "C", "CM", "CD", "CV", "AC", "ACM", "ACD", "ACV", "PC", "PCM",
            "PCD", "PCV",
        ),
    },
)
EXPRESSION_LANGUAGE = _vs(
    "expression-language", None, ("text/cql", "text/fhirpath", "application/x-fhir-query")
)
USAGE_CONTEXT_TYPE = ValueSet(
    "http://hl7.org/fhir/ValueSet/usage-context-type",
    {
        "http://terminology.hl7.org/CodeSystem/usage-context-type": (
            "gender", "age", "focus", "user", "workflow", "task", "venue", "species", "program",
        )
    },
)
ALL_TYPES = ValueSet(
    "http://hl7.org/fhir/ValueSet/all-types",
    {
        "http://hl7.org/fhir/abstract-types": ("Type", "Any"),
        "http://hl7.org/fhir/data-types": DATA_TYPE_CODES,
        "http://hl7.org/fhir/resource-types": RESOURCE_TYPE_CODES,
    },
)
RESOURCE_TYPES = _vs("resource-types", None, RESOURCE_TYPE_CODES)
SUBJECT_TYPE = ValueSet(
    "http://hl7.org/fhir/ValueSet/subject-type",
    {
        "http://hl7.org/fhir/resource-types": (
            "Patient", "Practitioner", "Organization", "Location", "Device",
        )
    },
)

# -- resources ----------------------------------------------------------------

PUBLICATION_STATUS = _vs("publication-status", None, ("draft", "active", "retired", "unknown"))
PARTICIPATION_STATUS = _vs(
    "participationstatus", None, ("accepted", "declined", "tentative", "needs-action")
)
PARTICIPANT_REQUIRED = _vs(
    "participantrequired", None, ("required", "optional", "information-only")
)
ENCOUNTER_PARTICIPANT_TYPE = ValueSet(
    "http://hl7.org/fhir/ValueSet/encounter-participant-type",
    {
        "http://terminology.hl7.org/CodeSystem/participant-type": ("translator", "emergency"),
        "http://terminology.hl7.org/CodeSystem/v3-ParticipationType": (
            "ADM", "ATND", "CALLBCK", "CON", "DIS", "ESC", "REF", "SPRF", "PPRF", "PART",
        ),
    },
)
APPOINTMENT_STATUS = _vs(
    "appointmentstatus",
    None,
    (
        "proposed", "pending", "booked", "arrived", "fulfilled", "cancelled", "noshow",
        "entered-in-error", "checked-in", "waitlist",
    ),
)

CAPABILITY_STATEMENT_KIND = _vs(
    "capability-statement-kind", None, ("instance", "capability", "requirements")
)
FHIR_VERSION = ValueSet(
    "http://hl7.org/fhir/ValueSet/FHIR-version",
    {
        "http://hl7.org/fhir/FHIR-version": (
            "0.01", "0.05", "0.06", "0.11", "0.0.80", "0.0.81", "0.0.82", "0.4.0", "0.5.0",
            "1.0.0", "1.0.1", "1.0.2", "1.1.0", "1.4.0", "1.6.0", "1.8.0", "3.0.0", "3.0.1",
            "3.3.0", "3.5.0", "4.0.0", "4.0.1",
        )
    },
)
RESTFUL_CAPABILITY_MODE = _vs("restful-capability-mode", None, ("client", "server"))
RESTFUL_SECURITY_SERVICE = ValueSet(
    "http://hl7.org/fhir/ValueSet/restful-security-service",
    {
        "http://terminology.hl7.org/CodeSystem/restful-security-service": (
            "OAuth", "SMART-on-FHIR", "NTLM", "Basic", "Kerberos", "Certificates",
        )
    },
)
VERSIONING_POLICY = _vs(
    "versioning-policy", None, ("no-version", "versioned", "versioned-update")
)
CONDITIONAL_READ_STATUS = _vs(
    "conditional-read-status",
    None,
    ("not-supported", "modified-since", "not-match", "full-support"),
)
CONDITIONAL_DELETE_STATUS = _vs(
    "conditional-delete-status", None, ("not-supported", "single", "multiple")
)
REFERENCE_HANDLING_POLICY = _vs(
    "reference-handling-policy",
    None,
    ("literal", "logical", "resolves", "enforced", "local"),
)
TYPE_RESTFUL_INTERACTION = ValueSet(
    "http://hl7.org/fhir/ValueSet/type-restful-interaction",
    {
        "http://hl7.org/fhir/restful-interaction": (
            "read", "vread", "update", "patch", "delete", "history-instance", "history-type",
            "create", "search-type",
        )
    },
)
SYSTEM_RESTFUL_INTERACTION = ValueSet(
    "http://hl7.org/fhir/ValueSet/system-restful-interaction",
    {
        "http://hl7.org/fhir/restful-interaction": (
            "transaction", "batch", "search-system", "history-system",
        )
    },
)
SEARCH_PARAM_TYPE = _vs(
    "search-param-type",
    None,
    (
        "number", "date", "string", "token", "reference", "composite", "quantity", "uri",
        "special",
    ),
)
MESSAGE_TRANSPORT = ValueSet(
    "http://hl7.org/fhir/ValueSet/message-transport",
    {"http://terminology.hl7.org/CodeSystem/message-transport": ("http", "ftp", "mllp")},
)
EVENT_CAPABILITY_MODE = _vs("event-capability-mode", None, ("sender", "receiver"))
DOCUMENT_MODE = _vs("document-mode", None, ("producer", "consumer"))

EXPLANATION_OF_BENEFIT_STATUS = _vs(
    "explanationofbenefit-status", None, ("active", "cancelled", "draft", "entered-in-error")
)
CLAIM_TYPE = ValueSet(
    "http://hl7.org/fhir/ValueSet/claim-type",
    {
        "http://terminology.hl7.org/CodeSystem/claim-type": (
            "institutional", "oral", "pharmacy", "professional", "vision",
        )
    },
)
CLAIM_USE = _vs("claim-use", None, ("claim", "preauthorization", "predetermination"))
REMITTANCE_OUTCOME = _vs("remittance-outcome", None, ("queued", "complete", "error", "partial"))
NOTE_TYPE = _vs("note-type", None, ("display", "print", "printoper"))
ACT_INCIDENT_CODE = ValueSet(
    "http://terminology.hl7.org/ValueSet/v3-ActIncidentCode",
    {"http://terminology.hl7.org/CodeSystem/v3-ActCode": ("MVA", "SCHOOL", "SPT", "WPA")},
)

ADMINISTRATIVE_GENDER = _vs(
    "administrative-gender", None, ("male", "female", "other", "unknown")
)
LINK_TYPE = _vs("link-type", None, ("replaced-by", "replaces", "refer", "seealso"))
MARITAL_STATUS = ValueSet(
    "http://hl7.org/fhir/ValueSet/marital-status",
    {
        "http://terminology.hl7.org/CodeSystem/v3-MaritalStatus": (
            "A", "D", "I", "L", "M", "P", "S", "T", "U", "W",
        ),
        "http://terminology.hl7.org/CodeSystem/v3-NullFlavor": ("UNK",),
    },
)
PATIENT_CONTACT_RELATIONSHIP = ValueSet(
    "http://hl7.org/fhir/ValueSet/patient-contactrelationship",
    {"http://terminology.hl7.org/CodeSystem/v2-0131": ("C", "E", "F", "I", "N", "S", "U")},
)

OBSERVATION_STATUS = _vs(
    "observation-status",
    None,
    (
        "registered", "preliminary", "final", "amended", "corrected", "cancelled",
        "entered-in-error", "unknown",
    ),
)
DATA_ABSENT_REASON = ValueSet(
    "http://hl7.org/fhir/ValueSet/data-absent-reason",
    {
        "http://terminology.hl7.org/CodeSystem/data-absent-reason": (
            "unknown", "asked-unknown", "temp-unknown", "not-asked", "asked-declined",
            "masked", "not-applicable", "unsupported", "as-text", "error", "not-a-number",
            "negative-infinity", "positive-infinity", "not-performed", "not-permitted",
        )
    },
)
OBSERVATION_INTERPRETATION = ValueSet(
    "http://hl7.org/fhir/ValueSet/observation-interpretation",
    {
        "http://terminology.hl7.org/CodeSystem/v3-ObservationInterpretation": (
            "CAR", "B", "D", "U", "W", "<", ">", "IE", "A", "AA", "HH", "LL", "H", "HU", "L",
            "LU", "N", "I", "NCL", "NS", "R", "SYN-R", "S", "SDD", "SYN-S", "EX", "HX", "LX",
            "IND", "E", "NEG", "ND", "POS", "DET", "EXP", "UNE", "NR", "RR", "WR",
        )
    },
)

BUNDLE_TYPE = _vs(
    "bundle-type",
    None,
    (
        "document", "message", "transaction", "transaction-response", "batch",
        "batch-response", "history", "searchset", "collection",
    ),
)
SEARCH_ENTRY_MODE = _vs("search-entry-mode", None, ("match", "include", "outcome"))
HTTP_VERB = _vs("http-verb", None, ("GET", "HEAD", "POST", "PUT", "DELETE", "PATCH"))

ISSUE_SEVERITY = _vs("issue-severity", None, ("fatal", "error", "warning", "information"))
ISSUE_TYPE = _vs(
    "issue-type",
    None,
    (
        "invalid", "structure", "required", "value", "invariant", "security", "login",
        "unknown", "expired", "forbidden", "suppressed", "processing", "not-supported",
        "duplicate", "multiple-matches", "not-found", "deleted", "too-long", "code-invalid",
        "extension", "too-costly", "business-rule", "conflict", "transient", "lock-error",
        "no-store", "exception", "timeout", "incomplete", "throttled", "informational",
    ),
)
