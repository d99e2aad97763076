"""fhir_r4 - FHIR R4 resource models with JSON and XML serialization."""

from .datatypes import *  # noqa: F401,F403
from .datatypes import __all__ as _datatypes
from .exceptions import FHIRError, FHIRParseError, UnknownResourceTypeError
from .model import FHIRModel
from .reader import from_contents, read_file, write_file
from .registry import get_resource_class, get_type_class
from .resources import *  # noqa: F401,F403
from .resources import __all__ as _resources
from .validator import FHIRValidator, ValidationResult

__version__ = "0.1.0"
__all__ = [
    "FHIRModel",
    "FHIRError",
    "FHIRParseError",
    "UnknownResourceTypeError",
    "FHIRValidator",
    "ValidationResult",
    "from_contents",
    "read_file",
    "write_file",
    "get_resource_class",
    "get_type_class",
] + _datatypes + _resources
