"""FHIR R4 resource models.

Importing this package registers every implemented resource, so that
:func:`get_resource_class` and the polymorphic resource slots can find it.
"""

from .resource import AnyResource, DomainResource, Resource, resource_from_dict
from .appointment import Appointment
from .appointmentresponse import AppointmentResponse
from .bundle import Bundle
from .capabilitystatement import CapabilityStatement
from .explanationofbenefit import ExplanationOfBenefit
from .observation import Observation
from .operationoutcome import OperationOutcome
from .patient import Patient

__all__ = [
    "AnyResource",
    "Resource",
    "DomainResource",
    "resource_from_dict",
    "Appointment",
    "AppointmentResponse",
    "Bundle",
    "CapabilityStatement",
    "ExplanationOfBenefit",
    "Observation",
    "OperationOutcome",
    "Patient",
]
