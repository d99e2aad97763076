"""Tests for FHIR XML reading and writing."""

import pytest
from pydantic import ValidationError

from fhir_r4 import xml_codec
from fhir_r4.datatypes import Coding, Extension, HumanName
from fhir_r4.exceptions import FHIRParseError
from fhir_r4.resources import (
    AppointmentResponse,
    Bundle,
    CapabilityStatement,
    ExplanationOfBenefit,
    Observation,
    Patient,
    Resource,
)

FHIR = 'xmlns="http://hl7.org/fhir"'


class TestXmlWriting:
    """Test suite for writing FHIR XML."""

    def test_primitives_as_value_attributes(self):
        """Test that primitives are written in value attributes."""
        xml = Patient(id="p1", active=True, gender="male").to_xml()
        assert xml == (
            f'<Patient {FHIR}><id value="p1" /><active value="true" />'
            '<gender value="male" /></Patient>'
        )

    def test_repeating_elements(self):
        """Test that lists become repeated elements."""
        xml = Patient(name=[HumanName(given=["Peter", "James"])]).to_xml()
        assert '<name><given value="Peter" /><given value="James" /></name>' in xml

    def test_element_id_and_extension_url_are_attributes(self):
        """Test attributes of Element.id and Extension.url."""
        coding = Coding(
            id="c1", extension=[Extension(url="http://example.org/x", valueBoolean=False)], code="a"
        )
        xml = coding.to_xml()
        assert xml == (
            f'<Coding {FHIR} id="c1"><extension url="http://example.org/x">'
            '<valueBoolean value="false" /></extension><code value="a" /></Coding>'
        )

    def test_narrative_div(self, appointment_response_json):
        """Test that the div is embedded in the XHTML namespace."""
        xml = AppointmentResponse.from_dict(appointment_response_json).to_xml()
        assert (
            '<text><status value="generated" />'
            '<div xmlns="http://www.w3.org/1999/xhtml">Accept Brian MRI results discussion</div>'
            "</text>"
        ) in xml

    def test_contained_resource_wrapped(self):
        """Test that resources in resource slots are wrapped."""
        patient = Patient.from_dict(
            {"resourceType": "Patient", "contained": [{"resourceType": "Patient", "id": "c"}]}
        )
        assert '<contained><Patient><id value="c" /></Patient></contained>' in patient.to_xml()

    def test_pretty(self):
        """Test indented output."""
        xml = Patient(id="p1", gender="male").to_xml(pretty=True)
        assert xml == f'<Patient {FHIR}>\n  <id value="p1" />\n  <gender value="male" />\n</Patient>'

    def test_pretty_keeps_narrative_whitespace(self):
        """Test that indentation does not reach into the narrative XHTML."""
        div = '<div xmlns="http://www.w3.org/1999/xhtml"><p>a</p><p>b <b>c</b></p></div>'
        patient = Patient.from_dict({"resourceType": "Patient", "text": {"status": "generated", "div": div}})
        xml = patient.to_xml(pretty=True)
        assert div in xml
        assert '\n    <status value="generated" />\n' in xml
        assert Patient.from_xml(xml).text.div == div

    def test_decimal_lexical_form(self, observation_json):
        """Test that decimals are written in their lexical form."""
        xml = Observation.from_dict(observation_json).to_xml()
        assert '<value value="6.3" />' in xml


class TestXmlReading:
    """Test suite for reading FHIR XML."""

    def test_read_resource(self):
        """Test reading a resource with the root element picking the class."""
        xml = (
            f'<Patient {FHIR}><id value="p1" /><active value="true" />'
            '<name><family value="Chalmers" /><given value="Peter" /></name>'
            '<multipleBirthInteger value="2" /></Patient>'
        )
        patient = Resource.from_xml(xml)
        assert isinstance(patient, Patient)
        assert patient.active is True
        assert patient.name[0].given == ["Peter"]
        assert patient.multipleBirthInteger == 2

    def test_comments_ignored(self):
        """Test that comments are skipped."""
        xml = f'<Patient {FHIR}><!-- note --><gender value="female" /></Patient>'
        assert Patient.from_xml(xml).gender == "female"

    def test_wrong_root(self):
        """Test that the root element must match the class."""
        with pytest.raises(FHIRParseError, match="Expected root element 'Observation'"):
            Observation.from_xml(f'<Patient {FHIR}/>')

    def test_not_fhir_namespace(self):
        """Test that the root must be in the FHIR namespace."""
        with pytest.raises(FHIRParseError, match="namespace"):
            Patient.from_xml("<Patient><gender value=\"male\" /></Patient>")

    def test_unknown_element(self):
        """Test that undeclared elements are rejected."""
        with pytest.raises(FHIRParseError, match="unknown element 'nickname'"):
            Patient.from_xml(f'<Patient {FHIR}><nickname value="Jim" /></Patient>')

    def test_unexpected_attribute(self):
        """Test that undeclared attributes are rejected."""
        with pytest.raises(FHIRParseError, match="unexpected attribute"):
            Patient.from_xml(f'<Patient {FHIR} status="x" />')

    def test_schema_location_ignored(self):
        """Test that xsi attributes on the root are accepted and ignored."""
        xml = (
            f'<Patient {FHIR} xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            'xsi:schemaLocation="http://hl7.org/fhir ../../schema/patient.xsd">'
            '<gender value="male" /></Patient>'
        )
        assert Patient.from_xml(xml).gender == "male"

    def test_repeated_single_element(self):
        """Test that a repeated 0..1 element fails validation."""
        xml = f'<Patient {FHIR}><gender value="male" /><gender value="female" /></Patient>'
        with pytest.raises(ValidationError):
            Patient.from_xml(xml)

    def test_invalid_boolean(self):
        """Test that only true and false are booleans."""
        with pytest.raises(FHIRParseError, match="boolean"):
            Patient.from_xml(f'<Patient {FHIR}><active value="yes" /></Patient>')

    def test_primitive_extension_unsupported(self):
        """Test that extensions on primitives are reported."""
        xml = (
            f'<Patient {FHIR}><gender value="male">'
            '<extension url="http://example.org/x"><valueString value="y" /></extension>'
            "</gender></Patient>"
        )
        with pytest.raises(FHIRParseError):
            Patient.from_xml(xml)

    def test_malformed_xml(self):
        """Test that malformed XML raises FHIRParseError."""
        with pytest.raises(FHIRParseError, match="Invalid XML"):
            Patient.from_xml(f"<Patient {FHIR}>")

    def test_entities_forbidden(self):
        """Test that entity declarations are refused."""
        xml = (
            '<?xml version="1.0"?><!DOCTYPE Patient [<!ENTITY e "boom">]>'
            f'<Patient {FHIR}><gender value="&e;" /></Patient>'
        )
        with pytest.raises(FHIRParseError):
            Patient.from_xml(xml)

    def test_unknown_root_resource(self):
        """Test a root naming an unimplemented resource."""
        with pytest.raises(FHIRParseError, match="Encounter"):
            xml_codec.load(f'<Encounter {FHIR} />')


class TestXmlRoundTrip:
    """Test suite for JSON and XML agreement."""

    def test_appointment_response(self, appointment_response_json):
        """Test an XML round trip of AppointmentResponse."""
        response = AppointmentResponse.from_dict(appointment_response_json)
        assert AppointmentResponse.from_xml(response.to_xml()) == response
        assert Resource.from_xml(response.to_xml(pretty=True)).to_dict() == appointment_response_json

    def test_patient(self, patient_json):
        """Test an XML round trip of Patient."""
        patient = Patient.from_dict(patient_json)
        assert Patient.from_xml(patient.to_xml()).to_dict() == patient_json

    def test_observation(self, observation_json):
        """Test an XML round trip of Observation with decimals and choices."""
        observation = Observation.from_dict(observation_json)
        assert Observation.from_xml(observation.to_xml()).to_dict() == observation_json

    def test_decimal_precision(self):
        """Test that decimal digits survive XML to JSON to XML."""
        xml = (
            f'<Observation {FHIR}><status value="final" /><code><text value="x" /></code>'
            '<valueQuantity><value value="1.50" /></valueQuantity></Observation>'
        )
        observation = Observation.from_xml(xml)
        assert '"value": 1.50' in observation.to_json()
        assert Observation.from_json(observation.to_json()).to_xml() == xml

    def test_decimal_beyond_float_precision(self):
        """Test that a decimal with more digits than a float is written back unchanged."""
        xml = (
            f'<Observation {FHIR}><status value="final" /><code><text value="x" /></code>'
            '<valueQuantity><value value="12345678901234567890.123456789" /></valueQuantity></Observation>'
        )
        assert Observation.from_xml(xml).to_xml() == xml

    def test_bundle(self, bundle_json):
        """Test an XML round trip of a bundle of resources."""
        bundle = Bundle.from_dict(bundle_json)
        parsed = Bundle.from_xml(bundle.to_xml(pretty=True))
        assert parsed.to_dict() == bundle_json
        assert isinstance(parsed.entry[0].resource, Patient)

    def test_capability_statement(self, capability_json):
        """Test an XML round trip of CapabilityStatement."""
        statement = CapabilityStatement.from_dict(capability_json)
        assert CapabilityStatement.from_xml(statement.to_xml()).to_dict() == capability_json

    def test_explanation_of_benefit(self, eob_json):
        """Test an XML round trip of ExplanationOfBenefit."""
        eob = ExplanationOfBenefit.from_dict(eob_json)
        parsed = ExplanationOfBenefit.from_xml(eob.to_xml())
        assert parsed.equals(eob)
        assert parsed.to_dict() == eob_json
