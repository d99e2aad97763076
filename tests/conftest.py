"""Shared FHIR JSON samples, shaped after the R4 example resources."""

from decimal import Decimal

import pytest


@pytest.fixture
def appointment_response_json():
    return {
        "resourceType": "AppointmentResponse",
        "id": "example",
        "text": {
            "status": "generated",
            "div": '<div xmlns="http://www.w3.org/1999/xhtml">Accept Brian MRI results discussion</div>',
        },
        "appointment": {"reference": "Appointment/example", "display": "Brian MRI results discussion"},
        "actor": {"reference": "Patient/example", "display": "Peter James Chalmers"},
        "participantStatus": "accepted",
    }


@pytest.fixture
def patient_json():
    return {
        "resourceType": "Patient",
        "id": "example",
        "identifier": [
            {"use": "usual", "system": "urn:oid:1.2.36.146.595.217.0.1", "value": "12345"}
        ],
        "active": True,
        "name": [{"use": "official", "family": "Chalmers", "given": ["Peter", "James"]}],
        "telecom": [{"system": "phone", "value": "(03) 5555 6473", "use": "work", "rank": 1}],
        "gender": "male",
        "birthDate": "1974-12-25",
        "deceasedBoolean": False,
        "address": [
            {"use": "home", "line": ["534 Erewhon St"], "city": "PleasantVille", "postalCode": "3999"}
        ],
        "managingOrganization": {"reference": "Organization/1"},
    }


@pytest.fixture
def observation_json():
    return {
        "resourceType": "Observation",
        "id": "f001",
        "status": "final",
        "code": {
            "coding": [{"system": "http://loinc.org", "code": "15074-8", "display": "Glucose"}]
        },
        "subject": {"reference": "Patient/f001", "display": "P. van de Heuvel"},
        "effectivePeriod": {"start": "2013-04-02T09:30:10+01:00"},
        "issued": "2013-04-03T15:30:10+01:00",
        "valueQuantity": {
            "value": Decimal("6.3"),
            "unit": "mmol/l",
            "system": "http://unitsofmeasure.org",
            "code": "mmol/L",
        },
        "interpretation": [
            {
                "coding": [
                    {
                        "system": "http://terminology.hl7.org/CodeSystem/v3-ObservationInterpretation",
                        "code": "H",
                    }
                ]
            }
        ],
        "referenceRange": [
            {
                "low": {"value": Decimal("3.1"), "unit": "mmol/l"},
                "high": {"value": Decimal("6.2"), "unit": "mmol/l"},
            }
        ],
    }


@pytest.fixture
def eob_json():
    return {
        "resourceType": "ExplanationOfBenefit",
        "id": "EB3500",
        "status": "active",
        "type": {
            "coding": [{"system": "http://terminology.hl7.org/CodeSystem/claim-type", "code": "oral"}]
        },
        "use": "claim",
        "patient": {"reference": "Patient/pat1"},
        "created": "2014-08-16",
        "insurer": {"reference": "Organization/3"},
        "provider": {"reference": "Practitioner/1"},
        "outcome": "complete",
        "careTeam": [{"sequence": 1, "provider": {"reference": "Practitioner/example"}}],
        "insurance": [{"focal": True, "coverage": {"reference": "Coverage/9876B1"}}],
        "item": [
            {
                "sequence": 1,
                "careTeamSequence": [1],
                "productOrService": {
                    "coding": [{"system": "http://terminology.hl7.org/CodeSystem/ex-USCLS", "code": "1205"}]
                },
                "servicedDate": "2014-08-16",
                "unitPrice": {"value": Decimal("135.57"), "currency": "USD"},
                "net": {"value": Decimal("135.57"), "currency": "USD"},
                "adjudication": [
                    {
                        "category": {"coding": [{"code": "eligible"}]},
                        "amount": {"value": Decimal("120.5"), "currency": "USD"},
                    },
                    {"category": {"coding": [{"code": "eligpercent"}]}, "value": Decimal("0.8")},
                ],
                "detail": [
                    {
                        "sequence": 1,
                        "productOrService": {"text": "Exam"},
                        "adjudication": [
                            {"category": {"text": "benefit"}, "amount": {"value": Decimal("96.4"), "currency": "USD"}}
                        ],
                        "subDetail": [
                            {
                                "sequence": 1,
                                "productOrService": {"text": "Radiograph"},
                                "adjudication": [{"category": {"text": "benefit"}, "value": Decimal("0.5")}],
                            }
                        ],
                    }
                ],
            }
        ],
        "total": [
            {
                "category": {"coding": [{"code": "submitted"}]},
                "amount": {"value": Decimal("135.57"), "currency": "USD"},
            }
        ],
    }


@pytest.fixture
def capability_json():
    return {
        "resourceType": "CapabilityStatement",
        "id": "example",
        "status": "draft",
        "date": "2012-01-04",
        "kind": "instance",
        "software": {"name": "EHR"},
        "implementation": {"description": "main EHR at ACME", "url": "http://10.2.3.4/fhir"},
        "fhirVersion": "4.0.1",
        "format": ["xml", "json"],
        "rest": [
            {
                "mode": "server",
                "security": {
                    "cors": True,
                    "service": [
                        {
                            "coding": [
                                {
                                    "system": "http://terminology.hl7.org/CodeSystem/restful-security-service",
                                    "code": "SMART-on-FHIR",
                                }
                            ]
                        }
                    ],
                },
                "resource": [
                    {
                        "type": "Patient",
                        "interaction": [{"code": "read"}, {"code": "search-type"}],
                        "versioning": "versioned-update",
                        "conditionalDelete": "not-supported",
                        "searchParam": [
                            {
                                "name": "identifier",
                                "definition": "http://hl7.org/fhir/SearchParameter/Patient-identifier",
                                "type": "token",
                            }
                        ],
                    }
                ],
                "interaction": [{"code": "transaction"}, {"code": "history-system"}],
                "compartment": ["http://hl7.org/fhir/CompartmentDefinition/patient"],
            }
        ],
        "messaging": [
            {
                "endpoint": [
                    {
                        "protocol": {
                            "system": "http://terminology.hl7.org/CodeSystem/message-transport",
                            "code": "mllp",
                        },
                        "address": "mllp:10.1.1.10:9234",
                    }
                ],
                "reliableCache": 30,
                "supportedMessage": [{"mode": "receiver", "definition": "MessageDefinition/example"}],
            }
        ],
        "document": [{"mode": "consumer", "profile": "StructureDefinition/Questionnaire"}],
    }


@pytest.fixture
def bundle_json(patient_json, observation_json):
    observation_json["subject"] = {"reference": "urn:uuid:61ebe359-bfdc-4613-8bf2-c5e300945f0a"}
    return {
        "resourceType": "Bundle",
        "id": "bundle-transaction",
        "type": "transaction",
        "entry": [
            {
                "fullUrl": "urn:uuid:61ebe359-bfdc-4613-8bf2-c5e300945f0a",
                "resource": patient_json,
                "request": {"method": "POST", "url": "Patient"},
            },
            {
                "fullUrl": "urn:uuid:88f151c0-a954-468a-88bd-5ae15c08e059",
                "resource": observation_json,
                "request": {"method": "POST", "url": "Observation"},
            },
        ],
    }
