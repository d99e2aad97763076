"""Tests for assembling resources into bundles."""

import uuid
from datetime import datetime

import pytest

from fhir_r4.bundle_assembler import BundleAssembler
from fhir_r4.datatypes import CodeableConcept, Coding, Identifier, Reference
from fhir_r4.resources import Bundle, Observation, Patient
from fhir_r4.validator import FHIRValidator


class TestBundleAssembler:
    """Test suite for BundleAssembler with Patient and Observation entries."""

    def setup_method(self):
        """Set up test fixtures."""
        self.assembler = BundleAssembler()

        self.patient = Patient(
            id="patient-123",
            identifier=[Identifier(system="http://example.org/mrn", value="MRN-1")],
            gender="female",
            birthDate="1980-01-01"
        )

        # refers to the patient by id
        self.observation = Observation(
            id="obs-789",
            status="final",
            code=CodeableConcept(coding=[Coding(system="http://loinc.org", code="4548-4")]),
            subject=Reference(reference="Patient/patient-123")
        )

    def test_create_transaction_bundle(self):
        """Test creating a transaction bundle."""
        bundle = self.assembler.create_bundle(
            [self.patient, self.observation],
            bundle_type="transaction",
            request_method="POST"
        )

        assert isinstance(bundle, Bundle)
        assert bundle.type == "transaction"
        assert len(bundle.entry) == 2
        assert bundle.timestamp is not None

        # every entry carries a POST request
        for entry in bundle.entry:
            assert entry.request is not None
            assert entry.request.method == "POST"
            assert entry.fullUrl.startswith("urn:uuid:")

        assert bundle.entry[0].request.url == "Patient"
        assert bundle.entry[0].request.ifNoneExist == "identifier=http://example.org/mrn|MRN-1"
        assert bundle.entry[1].request.url == "Observation"
        assert bundle.entry[1].request.ifNoneExist is None

    def test_post_rewrites_references(self):
        """Test that references between POSTed resources use their URNs."""
        bundle = self.assembler.create_bundle([self.patient, self.observation])

        patient_entry, observation_entry = bundle.entry
        assert patient_entry.resource.id is None
        assert observation_entry.resource.subject.reference == patient_entry.fullUrl

    def test_post_does_not_modify_input(self):
        """Test that the original resources keep their ids and references."""
        self.assembler.create_bundle([self.patient, self.observation])

        assert self.patient.id == "patient-123"
        assert self.observation.subject.reference == "Patient/patient-123"

    def test_create_bundle_with_urn_mapping(self):
        """Test creating bundle with a caller supplied URN mapping."""
        patient_uuid = str(uuid.uuid4())
        urn_mapping = {"Patient/patient-123": patient_uuid}

        bundle = self.assembler.create_bundle(
            [self.patient, self.observation],
            bundle_type="transaction",
            request_method="POST",
            urn_mapping=urn_mapping
        )

        assert bundle.entry[0].fullUrl == f"urn:uuid:{patient_uuid}"
        assert bundle.entry[1].resource.subject.reference == f"urn:uuid:{patient_uuid}"
        # POSTed ids are added to the mapping
        assert bundle.entry[1].fullUrl == f"urn:uuid:{urn_mapping['Observation/obs-789']}"

    def test_same_id_on_different_types(self):
        """Test that resources of different types sharing an id get separate URNs."""
        patient = Patient(id="1", gender="male")
        observation = Observation(
            id="1",
            status="final",
            code=CodeableConcept(text="weight"),
            subject=Reference(reference="Patient/1"),
        )
        derived = Observation(
            id="2",
            status="final",
            code=CodeableConcept(text="BMI"),
            subject=Reference(reference="Patient/1"),
            derivedFrom=[Reference(reference="Observation/1")],
        )

        bundle = self.assembler.create_bundle([patient, observation, derived])

        patient_url, observation_url, _ = (entry.fullUrl for entry in bundle.entry)
        assert patient_url != observation_url
        assert bundle.entry[1].resource.subject.reference == patient_url
        assert bundle.entry[2].resource.subject.reference == patient_url
        assert bundle.entry[2].resource.derivedFrom[0].reference == observation_url

    def test_create_collection_bundle(self):
        """Test creating a collection bundle."""
        bundle = self.assembler.create_bundle(
            [self.patient, self.observation],
            bundle_type="collection"
        )

        assert bundle.type == "collection"
        assert len(bundle.entry) == 2
        assert bundle.entry[0].fullUrl == "urn:uuid:patient-123"
        assert bundle.entry[0].resource.id == "patient-123"

        # collections carry no requests
        for entry in bundle.entry:
            assert entry.request is None

    def test_create_bundle_with_put_method(self):
        """Test creating bundle with PUT method."""
        bundle = self.assembler.create_bundle(
            [self.patient],
            bundle_type="transaction",
            request_method="PUT"
        )

        request = bundle.entry[0].request
        assert request.method == "PUT"
        assert request.url == "Patient/patient-123"
        assert request.ifNoneMatch == "*"
        assert bundle.entry[0].resource.id == "patient-123"

    def test_put_without_id(self):
        """Test that PUT falls back to POST for resources without an id."""
        bundle = self.assembler.create_bundle(
            [Patient(gender="male")],
            bundle_type="batch",
            request_method="PUT"
        )

        assert bundle.entry[0].request.method == "POST"
        assert bundle.entry[0].request.url == "Patient"

    def test_create_bundle_with_conditional_method(self):
        """Test creating bundle with conditional update."""
        bundle = self.assembler.create_bundle(
            [self.patient],
            bundle_type="transaction",
            request_method="CONDITIONAL"
        )

        request = bundle.entry[0].request
        assert request.method == "PUT"
        assert request.url == "Patient?identifier=http://example.org/mrn|MRN-1"

    def test_create_multiple_bundles(self):
        """Test splitting resources into multiple bundles."""
        resources = [
            Patient(id=f"patient-{i}", gender="male", birthDate="1990-01-01")
            for i in range(25)
        ]

        bundles = self.assembler.create_bundles(
            resources,
            bundle_type="transaction",
            bundle_size=10
        )

        assert len(bundles) == 3
        assert len(bundles[0].entry) == 10
        assert len(bundles[1].entry) == 10
        assert len(bundles[2].entry) == 5

    def test_references_across_bundles(self):
        """Test that a shared mapping keeps references valid across bundles."""
        bundles = self.assembler.create_bundles(
            [self.patient, self.observation],
            bundle_size=1
        )

        assert bundles[1].entry[0].resource.subject.reference == bundles[0].entry[0].fullUrl

    def test_invalid_bundle_size(self):
        """Test that bundle size must be positive."""
        with pytest.raises(ValueError):
            self.assembler.create_bundles([self.patient], bundle_size=0)

    def test_empty_resource_list(self):
        """Test that no resources still give one empty bundle."""
        bundles = self.assembler.create_bundles([], bundle_type="transaction")

        assert len(bundles) == 1
        assert bundles[0].type == "transaction"
        assert not bundles[0].entry
        assert bundles[0].timestamp is not None

    def test_bundle_has_unique_id(self):
        """Test that every bundle gets a fresh id."""
        bundle1 = self.assembler.create_bundle([self.patient])
        bundle2 = self.assembler.create_bundle([self.patient])

        assert bundle1.id != bundle2.id
        assert bundle1.id is not None
        assert bundle2.id is not None

    def test_invalid_bundle_type(self):
        """Test that only collection, transaction and batch are assembled."""
        with pytest.raises(ValueError):
            self.assembler.create_bundle(
                [self.patient],
                bundle_type="document"
            )

    def test_invalid_request_method(self):
        """Test rejecting an unknown request method."""
        with pytest.raises(ValueError):
            self.assembler.create_bundle(
                [self.patient],
                bundle_type="transaction",
                request_method="INVALID"
            )

    def test_bundle_timestamp_format(self):
        """Test that the timestamp is an ISO 8601 instant in UTC."""
        bundle = self.assembler.create_bundle([self.patient])

        timestamp = bundle.timestamp
        assert isinstance(timestamp, str)
        assert timestamp.endswith("+00:00")
        datetime.fromisoformat(timestamp)

    def test_preserve_resource_attributes(self):
        """Test that collection entries keep the resource content."""
        patient = Patient.from_dict({
            "resourceType": "Patient",
            "id": "test-patient",
            "gender": "female",
            "birthDate": "1985-06-15",
            "name": [{"given": ["Jane"], "family": "Doe"}],
            "telecom": [{"system": "phone", "value": "555-1234"}],
        })

        bundle = self.assembler.create_bundle(
            [patient],
            bundle_type="collection"
        )

        bundled_patient = bundle.entry[0].resource
        assert bundled_patient.gender == "female"
        assert bundled_patient.birthDate == "1985-06-15"
        assert bundled_patient.name[0].given[0] == "Jane"
        assert bundled_patient.telecom[0].value == "555-1234"

    def test_assembled_bundle_validates(self):
        """Test that an assembled transaction passes validation."""
        bundle = self.assembler.create_bundle([self.patient, self.observation])
        bundle = Bundle.from_json(bundle.to_json())

        result = FHIRValidator().validate_bundle(bundle)
        assert result.is_valid
        assert result.warnings == []
