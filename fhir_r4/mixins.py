"""Serialization mixins shared by every FHIR model.

``Hashable`` converts to and from the plain dictionary shape of FHIR JSON,
``Json`` to and from JSON text and ``Xml`` to and from FHIR XML text.
"""

from typing import Any, Dict, Optional

from . import json_codec, xml_codec


class Hashable:
    """Conversion to and from plain dictionaries."""

    def to_dict(self) -> Dict[str, Any]:
        """Return the FHIR JSON object for this instance.

        Keys use the FHIR element names, absent elements and empty lists are
        left out and decimals stay ``decimal.Decimal`` so no digits are lost.
        """
        return self.model_dump(mode="python", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Validate a FHIR JSON object into an instance of this class."""
        return cls.model_validate(data)


class Json:
    """Conversion to and from FHIR JSON text."""

    def to_json(self, indent: Optional[int] = None) -> str:
        return json_codec.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text):
        """Parse FHIR JSON text.

        Args:
            text: JSON document as ``str`` or ``bytes``

        Returns:
            Instance of this class (or, on the abstract ``Resource``, of the
            class named by ``resourceType``)

        Raises:
            FHIRParseError: If the text is not a JSON object
            pydantic.ValidationError: If the object does not fit the model
        """
        return cls.from_dict(json_codec.loads(text))


class Xml:
    """Conversion to and from FHIR XML text."""

    def to_xml(self, pretty: bool = False) -> str:
        return xml_codec.dump(self, pretty=pretty)

    @classmethod
    def from_xml(cls, text):
        """Parse FHIR XML text into an instance of this class.

        Raises:
            FHIRParseError: If the text is not well-formed FHIR XML or names
                elements the model does not declare
            pydantic.ValidationError: If the content does not fit the model
        """
        return xml_codec.load(text, cls)
