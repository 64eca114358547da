"""Energy type catalog and fuel/unit vocabulary normalization.

The buy message, the catalog below and the orders endpoint each spell the
same fuel and unit differently ("elec" vs "electric", "m3" vs "m³"), so
comparisons always go through normalize_fuel_type / normalize_unit_type.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

UNKNOWN = "unknown"


@dataclass(frozen=True)
class EnergyType:
    """Fuel and unit expected for a buy energy id."""

    fuel_type: str
    unit_type: str


ENERGY_TYPES: Mapping[int, EnergyType] = MappingProxyType(
    {
        1: EnergyType(fuel_type="gas", unit_type="m³"),
        2: EnergyType(fuel_type="nuclear", unit_type="MW"),
        3: EnergyType(fuel_type="electric", unit_type="kWh"),
        4: EnergyType(fuel_type="oil", unit_type="Litres"),
    }
)

_UNKNOWN_ENERGY_TYPE = EnergyType(fuel_type=UNKNOWN, unit_type=UNKNOWN)

FUEL_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "elec": "electric",
        "electricity": "electric",
        "gas": "gas",
        "natural gas": "gas",
        "oil": "oil",
        "petroleum": "oil",
        "nuclear": "nuclear",
    }
)

UNIT_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "m³": "m³",
        "m3": "m³",
        "cubic meters": "m³",
        "mw": "MW",
        "megawatts": "MW",
        "kwh": "kWh",
        "kilowatt hours": "kWh",
        "litres": "Litres",
        "liters": "Litres",
        "l": "Litres",
    }
)


def energy_type_for(energy_id: int) -> EnergyType:
    """Return the catalog entry for an id, or the "unknown" sentinel entry."""
    return ENERGY_TYPES.get(energy_id, _UNKNOWN_ENERGY_TYPE)


def expected_fuel_type(energy_id: int) -> str:
    return energy_type_for(energy_id).fuel_type


def expected_unit_type(energy_id: int) -> str:
    return energy_type_for(energy_id).unit_type


def is_known_energy_id(energy_id: int) -> bool:
    return energy_id in ENERGY_TYPES


def normalize_fuel_type(fuel_type: str | None) -> str:
    """Lower-case, trim and map fuel synonyms to a canonical name."""
    if not fuel_type:
        return ""
    normalized = fuel_type.lower().strip()
    return FUEL_SYNONYMS.get(normalized, normalized)


def normalize_unit_type(unit_type: str | None) -> str:
    """Lower-case, trim and map unit spellings to a canonical symbol."""
    if not unit_type:
        return ""
    normalized = unit_type.lower().strip()
    return UNIT_SYNONYMS.get(normalized, normalized)
