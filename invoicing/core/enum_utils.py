"""
Enum Utilities for String-based Enum Fields

CONVENTION:
━━━━━━━━━━━
• Pydantic: Python Enum (str mixin) for input validation
• Serialized payloads: plain string values
• Case: All enum values are UPPERCASE

CASE NORMALIZATION:
━━━━━━━━━━━━━━━━━━━
Callers (UI forms, persisted rows) send units and statuses in whatever case
they were stored with ("pieces", "draft"). Use normalize_to_uppercase() or
create_uppercase_validator() to accept them case-insensitively.

USAGE PATTERNS:
━━━━━━━━━━━━━━━
1. In Pydantic Schemas (with case normalization):
   _normalize_status = create_uppercase_validator('status', VALID_INVOICE_STATUSES)

2. Reading a value that may be an enum or a plain string:
   get_enum_value(record.status)
"""

from enum import Enum
from typing import Any, Optional, TypeVar, Type, Set


T = TypeVar('T', bound=Enum)


def get_enum_value(value: Any) -> Optional[str]:
    """
    Safely get string value from an enum or string.

    Examples:
        >>> get_enum_value(InvoiceStatus.DRAFT)
        'DRAFT'
        >>> get_enum_value("DRAFT")
        'DRAFT'
        >>> get_enum_value(None)
        None
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    return str(value)


def to_enum(value: Any, enum_class: Type[T]) -> Optional[T]:
    """
    Convert a string value to an enum instance, case-insensitively.

    Returns None if the value is not a member.

    Examples:
        >>> to_enum("pieces", PrimaryUnit)
        PrimaryUnit.PIECES
        >>> to_enum("INVALID", PrimaryUnit)
        None
    """
    if value is None:
        return None
    if isinstance(value, enum_class):
        return value
    if isinstance(value, str):
        value = value.upper()
    try:
        return enum_class(value)
    except (ValueError, KeyError):
        return None


def status_in(value: Any, *enum_members: Enum) -> bool:
    """
    Check if a status (enum or string) matches any of the given enums.

    Examples:
        >>> status_in("OVERDUE", InvoiceStatus.SENT, InvoiceStatus.OVERDUE)
        True
    """
    if value is None:
        return False
    return get_enum_value(value) in [e.value for e in enum_members]


# =============================================================================
# CASE NORMALIZATION FOR PYDANTIC SCHEMAS
# =============================================================================

def normalize_to_uppercase(value: Any, valid_values: Set[str]) -> Any:
    """
    Normalize a string value to UPPERCASE if it's a valid enum value.

    Returns:
        UPPERCASE string if valid, original value otherwise (for Pydantic to handle)

    Examples:
        >>> normalize_to_uppercase('pieces', {'PIECES', 'BOXES'})
        'PIECES'
        >>> normalize_to_uppercase('invalid', {'PIECES', 'BOXES'})
        'invalid'  # Returns as-is for Pydantic to raise validation error
    """
    if value is None:
        return value
    if isinstance(value, str):
        upper_v = value.strip().upper()
        if upper_v in valid_values:
            return upper_v
    return value


def create_uppercase_validator(field_name: str, valid_values: Set[str]) -> classmethod:
    """
    Create a Pydantic field_validator that normalizes values to UPPERCASE.

    Usage:
        class MySchema(BaseModel):
            status: InvoiceStatus

            _normalize_status = create_uppercase_validator('status', VALID_INVOICE_STATUSES)
    """
    from pydantic import field_validator

    @field_validator(field_name, mode='before')
    @classmethod
    def validate(cls, v):
        return normalize_to_uppercase(v, valid_values)

    return validate


# =============================================================================
# PRE-DEFINED VALID VALUE SETS
# =============================================================================

VALID_PRIMARY_UNITS = {"PIECES", "KILOGRAMS", "BOXES", "SETS", "UNITS", "OTHERS"}

VALID_INVOICE_STATUSES = {
    "DRAFT", "SENT", "PARTIALLY_PAID", "PAID", "OVERDUE", "CANCELLED"
}
