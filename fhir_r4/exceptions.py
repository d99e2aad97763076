"""Exceptions raised while reading FHIR content."""


class FHIRError(Exception):
    """Base class for fhir_r4 errors."""


class FHIRParseError(FHIRError, ValueError):
    """Content could not be read as FHIR JSON or XML."""


class UnknownResourceTypeError(FHIRError, KeyError):
    """A resourceType that is not part of R4 or has no model in this package."""

    def __init__(self, resource_type):
        self.resource_type = resource_type
        super().__init__(resource_type)

    def __str__(self):
        return f"Unknown or unsupported resourceType: {self.resource_type!r}"
