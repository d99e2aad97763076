"""Tests for format detection and file helpers."""

import json

import pytest

from fhir_r4.exceptions import FHIRParseError
from fhir_r4.reader import detect_format, format_for_path, from_contents, read_file, write_file
from fhir_r4.resources import AppointmentResponse, Patient


class TestFormatDetection:
    """Test suite for format detection."""

    def test_detect_json(self):
        """Test JSON detection with leading whitespace and BOM."""
        assert detect_format('  {"resourceType": "Patient"}') == "json"
        assert detect_format(b'\xef\xbb\xbf{"resourceType": "Patient"}') == "json"

    def test_detect_xml(self):
        """Test XML detection."""
        assert detect_format('\n<Patient xmlns="http://hl7.org/fhir"/>') == "xml"

    def test_detect_neither(self):
        """Test content in neither format."""
        with pytest.raises(FHIRParseError):
            detect_format("resourceType: Patient")

    def test_detect_invalid_utf8(self):
        """Test that bytes which are not UTF-8 raise FHIRParseError."""
        with pytest.raises(FHIRParseError, match="not valid UTF-8"):
            detect_format(b'{"resourceType": "Patient", "id": "\xff"}')

    def test_format_for_path(self):
        """Test format selection by file suffix."""
        assert format_for_path("bundle.json") == "json"
        assert format_for_path("Patient.XML") == "xml"
        with pytest.raises(ValueError, match="Unsupported file format"):
            format_for_path("patient.yaml")


class TestFromContents:
    """Test suite for reading either format."""

    def test_json(self, patient_json):
        """Test reading JSON content."""
        patient = from_contents(json.dumps(patient_json))
        assert isinstance(patient, Patient)

    def test_invalid_utf8(self):
        """Test reading bytes that are not UTF-8."""
        with pytest.raises(FHIRParseError):
            from_contents(b'{"resourceType": "Patient", "id": "\xff"}')

    def test_xml(self):
        """Test reading XML content."""
        patient = from_contents('<Patient xmlns="http://hl7.org/fhir"><gender value="male"/></Patient>')
        assert patient.gender == "male"


class TestFiles:
    """Test suite for reading and writing files."""

    def test_write_and_read_json(self, tmp_path, appointment_response_json):
        """Test a JSON file round trip."""
        response = AppointmentResponse.from_dict(appointment_response_json)
        path = tmp_path / "response.json"
        write_file(response, path)
        assert json.loads(path.read_text(encoding="utf-8")) == appointment_response_json
        assert read_file(path) == response

    def test_write_and_read_xml(self, tmp_path, appointment_response_json):
        """Test an XML file round trip."""
        response = AppointmentResponse.from_dict(appointment_response_json)
        path = tmp_path / "response.xml"
        write_file(response, path)
        assert path.read_text(encoding="utf-8").startswith("<AppointmentResponse")
        assert read_file(path) == response

    def test_unsupported_suffix(self, tmp_path):
        """Test that other suffixes are refused."""
        path = tmp_path / "patient.txt"
        path.write_text("{}")
        with pytest.raises(ValueError):
            read_file(path)
        with pytest.raises(ValueError):
            write_file(Patient(), path)
