"""
Base Schema Classes for Pydantic Models

This module provides base classes that handle common patterns like Decimal
serialization, ensuring consistency across all engine schemas.

RULE: Computed (output) schemas inherit from BaseResultSchema so money is
serialized as a string and never loses precision through float.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer


# Decimal rendered as a plain string in JSON output ("212.40", not 212.4)
MoneyStr = Annotated[
    Decimal,
    PlainSerializer(lambda v: format(v, "f"), return_type=str, when_used="json"),
]


class BaseInputSchema(BaseModel):
    """
    Base class for caller-supplied records (catalog products, persisted invoices).

    These schemas accept numeric strings from the persistence layer and
    convert them to Decimal. Unknown fields are ignored.
    """
    model_config = ConfigDict(
        extra='ignore',
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class BaseResultSchema(BaseModel):
    """
    Base class for values derived by the engine.

    Features:
    - Allow population by field name or alias
    - Reads attributes from ORM rows / dataclasses handed in by callers
    """
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )
