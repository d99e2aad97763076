"""Reading and writing FHIR JSON text.

Numbers with a fraction or exponent are read as ``decimal.Decimal`` and
written back digit for digit, since FHIR treats decimal precision as
significant.
"""

import logging
from typing import Any, Dict, Optional, Union

import simplejson

from .exceptions import FHIRParseError

logger = logging.getLogger(__name__)


def decode_text(content: Union[str, bytes, bytearray]) -> str:
    """Decode UTF-8 content, dropping a byte order mark.

    Raises:
        FHIRParseError: If the bytes are not valid UTF-8
    """
    if isinstance(content, (bytes, bytearray)):
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise FHIRParseError(f"Content is not valid UTF-8: {e}") from e
    return content


def loads(text) -> Dict[str, Any]:
    """Parse JSON text that must hold a single JSON object.

    Raises:
        FHIRParseError: If the text is not valid JSON or not an object
    """
    text = decode_text(text)
    try:
        data = simplejson.loads(text, use_decimal=True)
    except simplejson.JSONDecodeError as e:
        raise FHIRParseError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FHIRParseError(f"Expected a JSON object, got {type(data).__name__}")
    logger.debug("Parsed JSON object with %d keys", len(data))
    return data


def dumps(data: Dict[str, Any], indent: Optional[int] = None) -> str:
    return simplejson.dumps(data, indent=indent, ensure_ascii=False, use_decimal=True)
