"""Tests for the model base class and element metadata."""

import pytest
from pydantic import ValidationError

from fhir_r4.datatypes import CodeableConcept, Coding, HumanName, Quantity, Reference
from fhir_r4.elements import COMPLEX, PRIMITIVE, RESOURCE, Binding, check_binding
from fhir_r4.registry import get_type_class
from fhir_r4.resources import Appointment, Bundle, ExplanationOfBenefit, Observation, Patient


class TestElementTable:
    """Test suite for element metadata."""

    def test_declaration_order(self):
        """Test that inherited elements come first, in FHIR order."""
        names = list(Patient.elements())
        assert names[:8] == [
            "id", "meta", "implicitRules", "language",
            "text", "contained", "extension", "modifierExtension",
        ]
        assert names[8:11] == ["identifier", "active", "name"]

    def test_cardinality(self):
        """Test minimum and maximum cardinality."""
        assert Patient.element("gender").cardinality == "0..1"
        assert Patient.element("name").cardinality == "0..*"
        assert Observation.element("status").cardinality == "1..1"
        assert Appointment.element("participant").cardinality == "1..*"

    def test_kinds_and_type_codes(self):
        """Test type codes of primitive, complex and resource elements."""
        gender = Patient.element("gender")
        assert gender.kind == PRIMITIVE
        assert gender.type_code == "code"

        name = Patient.element("name")
        assert name.kind == COMPLEX
        assert name.type_code == "HumanName"
        assert name.model is HumanName

        contained = Patient.element("contained")
        assert contained.kind == RESOURCE
        assert contained.type_code == "Resource"

    def test_binding_and_targets(self):
        """Test binding and reference target metadata."""
        gender = Patient.element("gender")
        assert isinstance(gender.binding, Binding)
        assert gender.binding.strength == "required"
        assert gender.binding.url == "http://hl7.org/fhir/ValueSet/administrative-gender"

        managing = Patient.element("managingOrganization")
        assert managing.targets == ("Organization",)

    def test_lookup_by_json_name(self):
        """Test element lookup by name."""
        assert Observation.element("valueQuantity").name == "valueQuantity"
        with pytest.raises(KeyError):
            Observation.element("valueFoo")

    def test_describe(self):
        """Test the one line element summary."""
        line = Patient.element("gender").describe()
        assert line == (
            "Patient.gender 0..1 code "
            "[required: http://hl7.org/fhir/ValueSet/administrative-gender]"
        )
        assert Patient.element("managingOrganization").describe() == (
            "Patient.managingOrganization 0..1 Reference (Organization)"
        )

    def test_element_table_is_cached(self):
        """Test that the table is built once per class."""
        assert Patient.elements() is Patient.elements()
        assert "__fhir_elements__" in Patient.__dict__


class TestTypeNames:
    """Test suite for fhir_type and fhir_path."""

    def test_data_type(self):
        """Test top level data types."""
        assert HumanName.fhir_type() == "HumanName"
        assert HumanName.fhir_path() == "HumanName"
        assert get_type_class("HumanName") is HumanName

    def test_backbone_paths(self):
        """Test that nested classes report their element path."""
        adjudication = ExplanationOfBenefit.Item.Adjudication
        assert adjudication.fhir_type() == "BackboneElement"
        assert adjudication.fhir_path() == "ExplanationOfBenefit.item.adjudication"
        assert Bundle.Entry.Request.fhir_path() == "Bundle.entry.request"

    def test_nested_element_paths(self):
        """Test element paths of backbone elements."""
        assert Bundle.Entry.Request.element("method").path == "Bundle.entry.request.method"
        sub_detail = ExplanationOfBenefit.Item.Detail.SubDetail
        assert sub_detail.element("adjudication").path == (
            "ExplanationOfBenefit.item.detail.subDetail.adjudication"
        )
        assert sub_detail.element("adjudication").model is ExplanationOfBenefit.Item.Adjudication

    def test_choice_path(self):
        """Test that choice variants share the [x] path."""
        assert Observation.element("valueString").path == "Observation.value[x]"
        assert Observation.element("valueString").choice == "value"


class TestChoiceGroups:
    """Test suite for choice groups."""

    def test_groups(self):
        """Test grouping of variants."""
        groups = Patient.choice_groups()
        assert set(groups) == {"deceased", "multipleBirth"}
        assert [info.name for info in groups["deceased"]] == ["deceasedBoolean", "deceasedDateTime"]

    def test_choice_value(self):
        """Test reading the populated variant."""
        patient = Patient(deceasedDateTime="2015-02-14")
        assert patient.choice_value("deceased") == "2015-02-14"
        assert patient.choice_value("multipleBirth") is None
        with pytest.raises(KeyError):
            patient.choice_value("value")

    def test_only_one_variant(self):
        """Test that two variants of one group are rejected."""
        with pytest.raises(ValidationError, match="only one of"):
            Patient(deceasedBoolean=True, deceasedDateTime="2015-02-14")

    def test_required_group(self):
        """Test that a required choice group needs a variant."""
        with pytest.raises(ValidationError, match="one of diagnosisCodeableConcept, diagnosisReference is required"):
            ExplanationOfBenefit.Diagnosis(sequence=1)
        diagnosis = ExplanationOfBenefit.Diagnosis(
            sequence=1, diagnosisReference=Reference(reference="Condition/c1")
        )
        assert diagnosis.choice_value("diagnosis").reference == "Condition/c1"


class TestConstraints:
    """Test suite for structural validation."""

    def test_unknown_element_rejected(self):
        """Test that the field set is fixed."""
        with pytest.raises(ValidationError):
            Patient(nickname="Jim")

    def test_required_element(self):
        """Test that missing required elements are rejected."""
        with pytest.raises(ValidationError):
            Observation(code=CodeableConcept(text="Weight"))

    def test_required_list_not_empty(self):
        """Test that a 1..* element needs an item."""
        with pytest.raises(ValidationError):
            Appointment(status="booked", participant=[])

    def test_single_valued_rejects_list(self):
        """Test that a 0..1 element does not take a list."""
        with pytest.raises(ValidationError):
            Patient(gender=["male", "female"])

    def test_required_binding(self):
        """Test that required bindings admit only listed codes."""
        with pytest.raises(ValidationError, match="administrative-gender"):
            Patient(gender="girl")
        assert Patient(gender="other").gender == "other"

    def test_required_binding_in_backbone(self):
        """Test required bindings on nested elements."""
        with pytest.raises(ValidationError):
            Appointment.Participant(status="maybe")

    def test_extensible_binding_not_enforced(self):
        """Test that extensible bindings do not fail construction."""
        patient = Patient(
            maritalStatus=CodeableConcept(coding=[Coding(system="http://example.org", code="X")])
        )
        assert patient.maritalStatus.coding[0].code == "X"


class TestCheckBinding:
    """Test suite for value set membership checks."""

    def test_code(self):
        """Test code membership."""
        info = Patient.element("gender")
        assert check_binding(info, "male") is None
        assert "not in value set" in check_binding(info, "man")

    def test_codeable_concept(self):
        """Test that any matching coding passes."""
        info = Patient.element("maritalStatus")
        system = "http://terminology.hl7.org/CodeSystem/v3-MaritalStatus"
        concept = CodeableConcept(
            coding=[Coding(system="http://example.org", code="X"), Coding(system=system, code="M")]
        )
        assert check_binding(info, concept) is None
        wrong = CodeableConcept(coding=[Coding(system=system, code="Z")])
        assert "'Z'" in check_binding(info, wrong)

    def test_text_only_concept(self):
        """Test that text only concepts pass an extensible binding."""
        info = Patient.element("maritalStatus")
        assert check_binding(info, CodeableConcept(text="married")) is None

    def test_location(self):
        """Test that messages start with the given location."""
        info = Patient.element("gender")
        assert check_binding(info, "man", "Patient.contact[0].gender").startswith(
            "Patient.contact[0].gender:"
        )

    def test_open_value_set(self):
        """Test that bindings without listed codes always pass."""
        info = Patient.element("language")
        assert check_binding(info, "xx-YY") is None


class TestTraversal:
    """Test suite for element traversal and comparison."""

    def setup_method(self):
        """Set up test fixtures."""
        self.patient = Patient(
            id="example",
            name=[HumanName(family="Chalmers", given=["Peter", "James"])],
            gender="male",
        )

    def test_each_element(self):
        """Test depth first traversal with indexed locations."""
        locations = [location for location, _, _ in self.patient.each_element()]
        assert locations == [
            "Patient.id",
            "Patient.name[0]",
            "Patient.name[0].family",
            "Patient.name[0].given[0]",
            "Patient.name[0].given[1]",
            "Patient.gender",
        ]

    def test_equals(self):
        """Test structural equality."""
        other = Patient.from_dict(self.patient.to_dict())
        assert self.patient.equals(other)
        assert self.patient == other

    def test_mismatch(self):
        """Test reporting of differing locations."""
        other = Patient(
            id="other",
            name=[HumanName(family="Chalmers", given=["Peter", "Jim"])],
            gender="male",
        )
        assert self.patient.mismatch(other) == ["Patient.id", "Patient.name[0].given[1]"]
        assert self.patient.mismatch(other, exclude=("id",)) == ["Patient.name[0].given[1]"]
        assert self.patient.equals(other, exclude=("id", "given"))
        assert not self.patient.equals(other, exclude=("given",))

    def test_mismatch_other_type(self):
        """Test comparison against a different type."""
        assert self.patient.mismatch(Quantity(value=1)) == ["Patient"]
