"""
Unit Definitions for Unit Conversion

Canonical unit tables for length, mass, volume and temperature, the
alias table for informal spellings, and the immutable registry built
from them.
"""

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union
from enum import Enum

from ..exceptions import RegistryError


class UnitType(Enum):
    """Categories of physical units, in conversion check order"""
    LENGTH = "length"
    MASS = "mass"
    VOLUME = "volume"
    TEMPERATURE = "temperature"


BASE_UNITS: Dict[UnitType, str] = {
    UnitType.LENGTH: 'm',
    UnitType.MASS: 'kg',
    UnitType.VOLUME: 'L',
    UnitType.TEMPERATURE: 'C',
}


@dataclass(frozen=True)
class LinearUnit:
    """
    Unit proportional to its category's base unit

    One unit of ``symbol`` equals ``factor`` base units.
    """
    symbol: str
    name: str
    unit_type: UnitType
    factor: float
    description: str = ""

    def __post_init__(self):
        if not self.factor > 0:
            raise ValueError(f"Conversion factor must be positive, got {self.factor}")

    def to_base(self, value):
        return value * self.factor

    def from_base(self, value):
        return value / self.factor


@dataclass(frozen=True)
class AffineUnit:
    """
    Unit related to the Celsius pivot by a scale and an offset

    ``celsius = (x - offset) * scale_numerator / scale_denominator``
    """
    symbol: str
    name: str
    unit_type: UnitType
    offset: float
    scale_numerator: float = 1.0
    scale_denominator: float = 1.0
    description: str = ""

    def __post_init__(self):
        if not (self.scale_numerator > 0 and self.scale_denominator > 0):
            raise ValueError(f"Scale must be positive, got "
                             f"{self.scale_numerator}/{self.scale_denominator}")

    def to_base(self, value):
        return (value - self.offset) * self.scale_numerator / self.scale_denominator

    def from_base(self, value):
        return value * self.scale_denominator / self.scale_numerator + self.offset


UnitDefinition = Union[LinearUnit, AffineUnit]


def _linear(unit_type: UnitType, *entries) -> Dict[str, LinearUnit]:
    return {symbol: LinearUnit(symbol, name, unit_type, factor, *rest)
            for symbol, name, factor, *rest in entries}


# ===================================================================
# CANONICAL UNIT TABLES
# ===================================================================

LENGTH_UNITS: Dict[str, LinearUnit] = _linear(
    UnitType.LENGTH,
    ('m', 'meter', 1.0, 'Base unit of length'),
    ('cm', 'centimeter', 0.01),
    ('mm', 'millimeter', 0.001),
    ('ft', 'foot', 0.3048),
    ('yd', 'yard', 0.9144),
    ('km', 'kilometer', 1000.0),
    ('mi', 'mile', 1609.34),
)

MASS_UNITS: Dict[str, LinearUnit] = _linear(
    UnitType.MASS,
    ('kg', 'kilogram', 1.0, 'Base unit of mass'),
    ('g', 'gram', 0.001),
    ('lb', 'pound', 0.453592),
    ('oz', 'ounce', 0.0283495),
)

VOLUME_UNITS: Dict[str, LinearUnit] = _linear(
    UnitType.VOLUME,
    ('L', 'liter', 1.0, 'Base unit of volume'),
    ('l', 'liter', 1.0, 'Lowercase liter'),
    ('mL', 'milliliter', 0.001),
    ('ml', 'milliliter', 0.001, 'Lowercase milliliter'),
    ('uL', 'microliter', 0.000001),
    ('ul', 'microliter', 0.000001, 'Lowercase microliter'),
    ('gal', 'US gallon', 3.78541),
    ('qt', 'US quart', 0.946353),
    ('pt', 'US pint', 0.473176),
    ('cup', 'metric cup', 0.24),
    ('floz', 'US fluid ounce', 0.0295735),
    ('tbsp', 'tablespoon', 0.0147868),
    ('tsp', 'teaspoon', 0.00492892),
    ('m3', 'cubic meter', 1000.0),
    ('cm3', 'cubic centimeter', 0.001),
    ('cc', 'cubic centimeter', 0.001),
    ('in3', 'cubic inch', 0.0163871),
    ('ft3', 'cubic foot', 28.3168),
)

TEMPERATURE_UNITS: Dict[str, AffineUnit] = {
    'C': AffineUnit('C', 'degree celsius', UnitType.TEMPERATURE, 0.0,
                    description='Pivot scale for temperature'),
    'F': AffineUnit('F', 'degree fahrenheit', UnitType.TEMPERATURE, 32.0, 5.0, 9.0),
    'K': AffineUnit('K', 'kelvin', UnitType.TEMPERATURE, 273.15),
}

UNIT_TABLES: Dict[UnitType, Dict[str, UnitDefinition]] = {
    UnitType.LENGTH: LENGTH_UNITS,
    UnitType.MASS: MASS_UNITS,
    UnitType.VOLUME: VOLUME_UNITS,
    UnitType.TEMPERATURE: TEMPERATURE_UNITS,
}

# Lower-case spelling -> canonical key
UNIT_ALIASES: Dict[str, str] = {
    # length
    'meter': 'm', 'meters': 'm',
    'metre': 'm', 'metres': 'm',
    'kilometer': 'km', 'kilometers': 'km',
    'kilometre': 'km', 'kilometres': 'km',
    'foot': 'ft', 'feet': 'ft',
    'yard': 'yd', 'yards': 'yd',
    'mile': 'mi', 'miles': 'mi',

    # mass
    'kilogram': 'kg', 'kilograms': 'kg',
    'gram': 'g', 'grams': 'g',
    'pound': 'lb', 'pounds': 'lb',
    'lbs': 'lb',
    'ounce': 'oz', 'ounces': 'oz',

    # volume
    'liter': 'L', 'liters': 'L',
    'litre': 'L', 'litres': 'L',
    'milliliter': 'mL', 'milliliters': 'mL',
    'millilitre': 'mL', 'millilitres': 'mL',
    'cup': 'cup', 'cups': 'cup',
    'tablespoon': 'tbsp', 'tablespoons': 'tbsp',
    'teaspoon': 'tsp', 'teaspoons': 'tsp',

    # temperature
    'c': 'C', 'celsius': 'C', 'centigrade': 'C',
    'f': 'F', 'fahrenheit': 'F',
    'k': 'K', 'kelvin': 'K',
}


# ===================================================================
# UNIT REGISTRY
# ===================================================================

class UnitRegistry:
    """
    Immutable registry of canonical units and aliases

    Tables are copied and exposed through read-only views. The
    constructor checks that categories are disjoint and that every
    alias resolves to exactly one canonical key.
    """

    def __init__(self, tables: Mapping[UnitType, Mapping[str, UnitDefinition]] = None,
                 aliases: Mapping[str, str] = None):
        tables = UNIT_TABLES if tables is None else tables
        aliases = UNIT_ALIASES if aliases is None else aliases

        owners: Dict[str, UnitType] = {}
        frozen_tables = {}
        for unit_type in UnitType:
            table = dict(tables.get(unit_type, {}))
            for symbol, unit_def in table.items():
                if symbol in owners:
                    raise RegistryError(
                        f"Unit '{symbol}' defined in both {owners[symbol].value} "
                        f"and {unit_type.value}", symbol)
                if unit_def.unit_type is not unit_type:
                    raise RegistryError(
                        f"Unit '{symbol}' is tagged {unit_def.unit_type.value} "
                        f"but listed under {unit_type.value}", symbol)
                owners[symbol] = unit_type
            frozen_tables[unit_type] = MappingProxyType(table)

        for alias, target in aliases.items():
            if alias != alias.lower():
                raise RegistryError(f"Alias '{alias}' must be lower-case", alias)
            if target not in owners:
                raise RegistryError(f"Alias '{alias}' targets unknown unit '{target}'", alias)

        self._tables = MappingProxyType(frozen_tables)
        self._owners = MappingProxyType(owners)
        self._aliases = MappingProxyType(dict(aliases))

    @property
    def categories(self) -> Tuple[UnitType, ...]:
        return tuple(self._tables)

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def __contains__(self, unit: str) -> bool:
        return unit in self._owners

    def normalize(self, raw: str) -> str:
        """
        Resolve an informal spelling to its canonical key

        Args:
            raw: Unit as typed by the user (any casing)

        Returns:
            Canonical key if the lower-cased input is a known alias,
            otherwise the original input unchanged
        """
        return self._aliases.get(raw.lower(), raw)

    def lookup_category(self, unit: str) -> Optional[UnitType]:
        """Category owning a canonical key, or None"""
        return self._owners.get(unit)

    def get_unit_info(self, unit: str) -> Optional[UnitDefinition]:
        """
        Get unit definition by canonical key

        Args:
            unit: Canonical key to look up (e.g., 'kg')

        Returns:
            LinearUnit or AffineUnit if found, None otherwise
        """
        unit_type = self._owners.get(unit)
        if unit_type is None:
            return None
        return self._tables[unit_type][unit]

    def table(self, unit_type: UnitType) -> Mapping[str, UnitDefinition]:
        return self._tables[unit_type]

    def units_of(self, unit_type: UnitType) -> Tuple[str, ...]:
        """Canonical keys of one category, in table order"""
        return tuple(self._tables[unit_type])


@lru_cache(maxsize=1)
def default_registry() -> UnitRegistry:
    """Shared registry built from the module tables on first use"""
    return UnitRegistry()
