"""Validator settings loaded from YAML or JSON files."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

SEVERITY_PATTERN = "^(error|warning|info|ignore)$"


class ValidatorSettings(BaseModel):
    """Severities of the checks the validator makes beyond model construction.

    Each severity is one of ``error``, ``warning``, ``info`` or ``ignore``.
    """

    model_config = ConfigDict(extra="forbid")

    extensible_binding_severity: str = Field(default="warning", pattern=SEVERITY_PATTERN)
    reference_target_severity: str = Field(default="error", pattern=SEVERITY_PATTERN)
    missing_id_severity: str = Field(default="info", pattern=SEVERITY_PATTERN)
    missing_narrative_severity: str = Field(default="ignore", pattern=SEVERITY_PATTERN)
    check_local_references: bool = Field(default=True)


class SettingsParser:
    """Parser for validator settings files."""

    def parse(self, settings_path: Union[str, Path]) -> ValidatorSettings:
        """Parse a settings file.

        Args:
            settings_path: Path to YAML or JSON settings file

        Returns:
            Validated settings

        Raises:
            ValueError: If the file is missing, of an unsupported format or invalid
        """
        settings_path = Path(settings_path)

        if not settings_path.exists():
            raise ValueError(f"Settings file not found: {settings_path}")

        with open(settings_path, "r") as f:
            if settings_path.suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif settings_path.suffix == ".json":
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported file format: {settings_path.suffix}")

        return self.validate(data or {})

    def validate(self, settings_dict: Dict[str, Any]) -> ValidatorSettings:
        """Validate a settings dictionary.

        Raises:
            ValueError: If the settings are invalid
        """
        if not isinstance(settings_dict, dict):
            raise ValueError("Invalid settings: expected a mapping")
        try:
            return ValidatorSettings(**settings_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid settings: {e}")
