"""Validation of FHIR resources and bundles beyond model construction.

Building a model already enforces cardinality, primitive formats, choice
groups and required bindings.  :class:`FHIRValidator` reports the rest:
extensible bindings, reference target types, local references to contained
resources and bundle structure, each at the severity configured in
:class:`~fhir_r4.settings.ValidatorSettings`.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Set, Union

from pydantic import ValidationError

from . import json_codec, reader, xml_codec
from .config import STRUCTURE_DEFINITION_BASE
from .elements import COMPLEX, RESOURCE, check_binding
from .exceptions import FHIRParseError, UnknownResourceTypeError
from .model import FHIRModel
from .registry import RESOURCES
from .resources import Bundle, DomainResource, OperationOutcome, Resource
from .settings import ValidatorSettings

logger = logging.getLogger(__name__)

ISSUE_SEVERITIES = {"error": "error", "warning": "warning", "info": "information"}


class ValidationResult:
    """Result of a validation operation."""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.info: List[str] = []

    def add_error(self, message: str):
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)

    def add_info(self, message: str):
        """Add an info message."""
        self.info.append(message)

    def add(self, severity: str, message: str):
        """Add a message at a configured severity; ``ignore`` drops it."""
        if severity == "error":
            self.add_error(message)
        elif severity == "warning":
            self.add_warning(message)
        elif severity == "info":
            self.add_info(message)

    def to_operation_outcome(self) -> OperationOutcome:
        """Report the messages as an OperationOutcome resource.

        A result without messages gives a single informational issue.
        """
        issues = []
        for severity, messages in (
            ("error", self.errors),
            ("warning", self.warnings),
            ("info", self.info),
        ):
            for message in messages:
                issues.append(
                    OperationOutcome.Issue(
                        severity=ISSUE_SEVERITIES[severity],
                        code="invalid" if severity != "info" else "informational",
                        diagnostics=message,
                    )
                )
        if not issues:
            issues.append(
                OperationOutcome.Issue(
                    severity="information", code="informational", diagnostics="All OK"
                )
            )
        return OperationOutcome(issue=issues)

    def __str__(self):
        """String representation of validation result."""
        lines = []
        if self.is_valid:
            lines.append("✓ Validation passed")
        else:
            lines.append("✗ Validation failed")

        for title, messages in (
            ("Errors", self.errors),
            ("Warnings", self.warnings),
            ("Info", self.info),
        ):
            if messages:
                lines.append(f"{title} ({len(messages)}):")
                for message in messages:
                    lines.append(f"  - {message}")

        return "\n".join(lines)


def reference_type(reference: Any) -> Optional[str]:
    """Resource type a Reference points at, when it can be told.

    ``Reference.type`` wins, read as a type name even when given as the
    core StructureDefinition URL; otherwise the type is read from a relative or
    absolute literal reference such as ``Patient/1`` or
    ``http://example.org/fhir/Patient/1/_history/2``.
    """
    if reference.type:
        if reference.type.startswith(STRUCTURE_DEFINITION_BASE):
            return reference.type[len(STRUCTURE_DEFINITION_BASE):]
        return reference.type
    literal = reference.reference
    if not literal or literal.startswith(("#", "urn:")):
        return None
    parts = literal.split("?")[0].split("/")
    if "_history" in parts:
        parts = parts[: parts.index("_history")]
    if len(parts) >= 2 and parts[-2] in RESOURCES:
        return parts[-2]
    return None


def error_messages(error: ValidationError) -> List[str]:
    """Flatten a pydantic error into ``location: message`` lines."""
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        if location:
            messages.append(f"{error.title}.{location}: {detail['msg']}")
        else:
            messages.append(f"{error.title}: {detail['msg']}")
    return messages


class FHIRValidator:
    """Validator for FHIR resources and bundles."""

    def __init__(self, settings: Optional[ValidatorSettings] = None):
        self.settings = settings or ValidatorSettings()

    # -- model instances ------------------------------------------------------

    def validate_resource(self, resource: Resource) -> ValidationResult:
        """Validate a resource instance.

        Args:
            resource: Any resource, including a Bundle

        Returns:
            ValidationResult with validation status and messages
        """
        if isinstance(resource, Bundle):
            return self.validate_bundle(resource)
        result = ValidationResult()
        self._check_resource(resource, resource.fhir_path(), set(), False, result)
        logger.debug(
            "Validated %s: %d errors, %d warnings",
            resource.get_resource_type(),
            len(result.errors),
            len(result.warnings),
        )
        return result

    def validate_bundle(self, bundle: Bundle) -> ValidationResult:
        """Validate a bundle and every resource in it.

        Args:
            bundle: FHIR Bundle to validate

        Returns:
            ValidationResult with validation status and messages
        """
        result = ValidationResult()

        if not bundle.id:
            result.add(self.settings.missing_id_severity, "Bundle missing id")

        if not bundle.timestamp and bundle.type in ("document", "message"):
            result.add_error(f"Bundle of type {bundle.type} missing timestamp")

        if not bundle.entry:
            result.add_warning("Bundle has no entries")
        else:
            result.add_info(f"Bundle contains {len(bundle.entry)} entries")
            self._validate_entries(bundle, result)

        self._check_model(bundle, "Bundle", set(), result)
        return result

    def _validate_entries(self, bundle: Bundle, result: ValidationResult):
        """Validate bundle entries."""
        full_urls: Set[str] = set()
        resource_ids: Set[str] = set()
        references = []

        for i, entry in enumerate(bundle.entry):
            location = f"Bundle.entry[{i}]"
            if entry.fullUrl:
                if entry.fullUrl in full_urls:
                    result.add_error(f"{location}: duplicate fullUrl {entry.fullUrl}")
                full_urls.add(entry.fullUrl)
            elif entry.resource is not None and bundle.type not in ("batch-response", "transaction-response"):
                result.add_warning(f"{location} missing fullUrl")

            if bundle.type in ("transaction", "batch"):
                if entry.request is None:
                    result.add_error(f"{location} missing request (required for {bundle.type} bundle)")
                if entry.resource is None and (entry.request is None or entry.request.method in ("POST", "PUT")):
                    result.add_error(f"{location} missing resource")
            elif bundle.type in ("transaction-response", "batch-response"):
                if entry.response is None:
                    result.add_error(f"{location} missing response (required for {bundle.type} bundle)")
            elif entry.resource is None and bundle.type != "history":
                result.add_error(f"{location} missing resource")

            if entry.resource is not None:
                if entry.resource.id:
                    resource_ids.add(f"{entry.resource.get_resource_type()}/{entry.resource.id}")
                for where, info, value in entry.resource.each_element(f"{location}.resource"):
                    if info.type_code == "Reference" and value.reference:
                        references.append((where, value.reference))

        self._check_references(full_urls, resource_ids, references, result)

    def _check_references(self, full_urls: Set[str], resource_ids: Set[str], references, result: ValidationResult):
        """Check that references between entries resolve inside the bundle."""
        for location, reference in references:
            if reference.startswith("#"):
                continue
            if reference.startswith("urn:"):
                if reference not in full_urls:
                    result.add_warning(f"{location}: reference to {reference} matches no entry fullUrl")
            elif reference.count("/") == 1 and reference not in resource_ids and reference not in full_urls:
                result.add_warning(f"{location}: reference to {reference} is not in the bundle")

    # -- element walk ---------------------------------------------------------

    def _check_resource(self, resource: Resource, location: str, outer_ids: Set[str], contained: bool, result: ValidationResult):
        if not resource.id:
            result.add(self.settings.missing_id_severity, f"{location}: {resource.get_resource_type()} missing id")

        local_ids = set(outer_ids)
        if isinstance(resource, DomainResource):
            if resource.text is None and not contained:
                result.add(
                    self.settings.missing_narrative_severity,
                    f"{location}: {resource.get_resource_type()} has no narrative",
                )
            local_ids.update(item.id for item in resource.contained or [] if item.id)
        self._check_model(resource, location, local_ids, result)

    def _check_model(self, model: FHIRModel, location: str, local_ids: Set[str], result: ValidationResult):
        for info in model.elements().values():
            value = getattr(model, info.name)
            if value is None:
                continue
            for index, item in enumerate(value if info.is_list else [value]):
                where = f"{location}.{info.json_name}"
                if info.is_list:
                    where += f"[{index}]"

                if info.kind == RESOURCE:
                    if info.name == "contained":
                        self._check_resource(item, where, local_ids, True, result)
                    else:
                        self._check_resource(item, where, set(), False, result)
                    continue

                if info.binding is not None and info.binding.strength == "extensible":
                    problem = check_binding(info, item, where)
                    if problem is not None:
                        result.add(self.settings.extensible_binding_severity, problem)
                if info.type_code == "Reference":
                    self._check_reference(info, item, where, local_ids, result)
                if info.kind == COMPLEX:
                    self._check_model(item, where, local_ids, result)

    def _check_reference(self, info, reference, location: str, local_ids: Set[str], result: ValidationResult):
        literal = reference.reference
        if literal and literal.startswith("#"):
            if self.settings.check_local_references and literal != "#" and literal[1:] not in local_ids:
                result.add_error(f"{location}: {literal} does not match a contained resource")
            return

        if not info.targets or "Resource" in info.targets:
            return
        target = reference_type(reference)
        if target is not None and target not in info.targets:
            result.add(
                self.settings.reference_target_severity,
                f"{location}: reference to {target} is not allowed, expected {' | '.join(info.targets)}",
            )

    # -- text and files -------------------------------------------------------

    def validate_dict(self, data: Any) -> ValidationResult:
        """Validate a FHIR JSON object.

        Args:
            data: Parsed JSON object

        Returns:
            ValidationResult with validation status and messages
        """
        try:
            resource = Resource.from_dict(data)
        except (TypeError, UnknownResourceTypeError) as e:
            return self._failure(f"Invalid FHIR resource: {e}")
        except ValidationError as e:
            return self._failure(*error_messages(e))
        return self.validate_resource(resource)

    def validate_json(self, json_str: Union[str, bytes]) -> ValidationResult:
        """Validate a JSON document.

        Args:
            json_str: JSON string to validate

        Returns:
            ValidationResult with validation status and messages
        """
        try:
            data = json_codec.loads(json_str)
        except FHIRParseError as e:
            return self._failure(str(e))
        return self.validate_dict(data)

    def validate_xml(self, xml_str: Union[str, bytes]) -> ValidationResult:
        """Validate an XML document.

        Args:
            xml_str: XML string to validate

        Returns:
            ValidationResult with validation status and messages
        """
        try:
            resource = xml_codec.load(xml_str)
        except FHIRParseError as e:
            return self._failure(str(e))
        except ValidationError as e:
            return self._failure(*error_messages(e))
        return self.validate_resource(resource)

    def validate_file(self, file_path: Union[str, Path]) -> ValidationResult:
        """Validate a resource from a .json or .xml file.

        Args:
            file_path: Path to the file

        Returns:
            ValidationResult with validation status and messages
        """
        try:
            fmt = reader.format_for_path(file_path)
            content = Path(file_path).read_bytes()
        except (OSError, ValueError) as e:
            return self._failure(f"Failed to read file: {e}")

        logger.info("Validating %s", file_path)
        if fmt == "json":
            return self.validate_json(content)
        return self.validate_xml(content)

    def _failure(self, *messages: str) -> ValidationResult:
        result = ValidationResult()
        for message in messages:
            result.add_error(message)
        return result
