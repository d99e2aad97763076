"""Configuration constants for fhir_r4."""

from typing import Dict

FHIR_VERSION = "4.0.1"

# XML namespaces
NAMESPACES = {
    "FHIR": "http://hl7.org/fhir",
    "XHTML": "http://www.w3.org/1999/xhtml",
    "XSI": "http://www.w3.org/2001/XMLSchema-instance",
}

# Content types for the two wire formats
MIME_TYPES = {
    "JSON": "application/fhir+json",
    "XML": "application/fhir+xml",
}

# Well-known code systems
SYSTEMS: Dict[str, str] = {
    "RESOURCE_TYPES": "http://hl7.org/fhir/resource-types",
    "DATA_TYPES": "http://hl7.org/fhir/data-types",
    "ISSUE_TYPE": "http://hl7.org/fhir/issue-type",
    "ISSUE_SEVERITY": "http://hl7.org/fhir/issue-severity",
    "UCUM": "http://unitsofmeasure.org",
    "LANGUAGES": "urn:ietf:bcp:47",
}

# Canonical base for core StructureDefinitions (reference target profiles)
STRUCTURE_DEFINITION_BASE = "http://hl7.org/fhir/StructureDefinition/"

# Default values for generated bundles
BUNDLE_DEFAULTS = {
    "TYPE": "transaction",
    "REQUEST_METHOD": "POST",
    "MAX_SIZE": 100,
}
