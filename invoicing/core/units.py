"""Primary units of measure and their document labels."""
from enum import Enum
from typing import Any, Dict, NamedTuple

from invoicing.core.enum_utils import get_enum_value, to_enum


class PrimaryUnit(str, Enum):
    """Unit a catalog product is sold in."""
    PIECES = "PIECES"
    KILOGRAMS = "KILOGRAMS"
    BOXES = "BOXES"
    SETS = "SETS"
    UNITS = "UNITS"
    OTHERS = "OTHERS"


class UnitConfig(NamedTuple):
    label: str
    abbreviation: str


UNIT_OPTIONS: Dict[PrimaryUnit, UnitConfig] = {
    PrimaryUnit.PIECES: UnitConfig("Pieces", "PCS"),
    PrimaryUnit.KILOGRAMS: UnitConfig("Kilograms", "KGs"),
    PrimaryUnit.BOXES: UnitConfig("Boxes", "BOX"),
    PrimaryUnit.SETS: UnitConfig("Sets", "SETS"),
    PrimaryUnit.UNITS: UnitConfig("Units", "UNIT"),
    PrimaryUnit.OTHERS: UnitConfig("Others", "OTH"),
}


def get_unit_label(unit: Any) -> str:
    """'Pieces [PCS]' for known units, the raw value otherwise."""
    member = to_enum(unit, PrimaryUnit)
    if member is None:
        return get_enum_value(unit) or ""
    config = UNIT_OPTIONS[member]
    return f"{config.label} [{config.abbreviation}]"


def get_unit_abbreviation(unit: Any) -> str:
    member = to_enum(unit, PrimaryUnit)
    if member is None:
        return (get_enum_value(unit) or "").upper()
    return UNIT_OPTIONS[member].abbreviation


def get_unit_display_name(unit: Any) -> str:
    member = to_enum(unit, PrimaryUnit)
    if member is None:
        return get_enum_value(unit) or ""
    return UNIT_OPTIONS[member].label
