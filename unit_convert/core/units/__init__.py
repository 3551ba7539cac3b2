"""
Units Module for Unit Conversion

Registry of canonical units and aliases, and the conversion engine
that works over it.
"""

from .converter import UnitConverter, ConversionResult
from .definitions import (
    UNIT_ALIASES,
    UNIT_TABLES,
    BASE_UNITS,
    LinearUnit,
    AffineUnit,
    UnitDefinition,
    UnitRegistry,
    UnitType,
    default_registry,
)

# Create default converter instance
default_converter = UnitConverter()

# Convenience functions using default converter
def normalize(raw):
    """Resolve an alias to its canonical key using the default registry"""
    return default_converter.registry.normalize(raw)

def lookup_category(unit):
    """Category of a canonical key using the default registry"""
    return default_converter.registry.lookup_category(unit)

def convert_value(from_unit, to_unit, value):
    """Convert value between canonical keys using default converter"""
    return default_converter.convert(from_unit, to_unit, value)

__all__ = [
    'UnitConverter',
    'ConversionResult',
    'UNIT_ALIASES',
    'UNIT_TABLES',
    'BASE_UNITS',
    'LinearUnit',
    'AffineUnit',
    'UnitDefinition',
    'UnitRegistry',
    'UnitType',
    'default_registry',
    'default_converter',
    'normalize',
    'lookup_category',
    'convert_value',
]
