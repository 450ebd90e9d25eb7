"""
Validators - Field-level validation for domain records

This module provides the bounds checks applied to every desired record
before it can take part in a reconciliation. Each validator raises
ValidationError naming the violated constraint.
"""

import logging
from typing import Optional

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

MAX_NAME_OCTETS = 255
MAX_LABEL_OCTETS = 63
MAX_DATA_LENGTH = 255
MAX_TXT_DATA_LENGTH = 512
MAX_PRIORITY = 65535
MAX_WEIGHT = 100
MAX_PORT = 65535


def validate_name(name: str) -> str:
    """
    Validate a record name.

    Args:
        name: The record name, e.g. "www" or "@" for the zone apex

    Returns:
        The name with surrounding whitespace removed

    Raises:
        ValidationError: If the name or one of its labels is out of bounds
    """
    if not isinstance(name, str):
        raise ValidationError("name must be a string")

    name = name.strip()
    octets = len(name.encode("utf-8"))
    if octets < 1 or octets > MAX_NAME_OCTETS:
        raise ValidationError(
            f"name must be between 1..{MAX_NAME_OCTETS} octets"
        )

    for label in name.split("."):
        if len(label.encode("utf-8")) > MAX_LABEL_OCTETS:
            raise ValidationError(
                f"invalid domain name. name octets should be less than {MAX_LABEL_OCTETS} characters"
            )

    return name


def validate_ttl(ttl: int) -> int:
    """Validate that a TTL is a non-negative number of seconds."""
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise ValidationError("ttl must be an integer")
    if ttl < 0:
        raise ValidationError("ttl must be a positive value")
    return ttl


def validate_data(record_type: str, data: str) -> str:
    """
    Validate record data against the length bound of its type.

    TXT records allow up to 512 characters, every other type up to 255.
    """
    if not isinstance(data, str):
        raise ValidationError("data must be a string")

    data = data.strip()
    if str(record_type).upper() == "TXT":
        if len(data) > MAX_TXT_DATA_LENGTH:
            raise ValidationError(
                f"TXT data must be between 0..{MAX_TXT_DATA_LENGTH} characters in length"
            )
    elif len(data) > MAX_DATA_LENGTH:
        raise ValidationError(
            f"data must be between 0..{MAX_DATA_LENGTH} characters in length"
        )
    return data


def validate_priority(priority: int) -> int:
    if not _is_int(priority) or priority < 0 or priority > MAX_PRIORITY:
        raise ValidationError(f"priority must be between 0..{MAX_PRIORITY} (16 bit)")
    return priority


def validate_weight(weight: int) -> int:
    if not _is_int(weight) or weight < 0 or weight > MAX_WEIGHT:
        raise ValidationError(f"weight must be between 0..{MAX_WEIGHT}")
    return weight


def validate_port(port: Optional[int]) -> Optional[int]:
    """Validate an SRV port. Zero and None both mean the port is unset."""
    if port is None or port == 0:
        return None
    if not _is_int(port) or port < 1 or port > MAX_PORT:
        raise ValidationError(f"port must be between 1..{MAX_PORT}")
    return port


def validate_underscore_prefixed(field: str, value: Optional[str], example: str) -> str:
    """
    Validate an SRV service or protocol string.

    Args:
        field: Field name used in the error message ("service" or "protocol")
        value: The value to check; empty values are allowed
        example: Example value shown in the error message

    Returns:
        The value, or an empty string when unset
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if value.strip() and not value.startswith("_"):
        raise ValidationError(f"{field} must start with an underscore (e.g. {example})")
    return value


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
