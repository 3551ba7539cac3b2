"""
Unit Conversion Package

Converts values between units of length, mass, volume and temperature,
resolving informal spellings to canonical unit keys first.
"""

__version__ = "1.0.0"

# Core imports for public API
from .core.exceptions import (
    UnitConvertError,
    ConversionError,
    UnknownUnitError,
    IncompatibleUnitsError,
    InvalidNumberError,
    MissingArgumentError,
)
from .core.units import (
    UnitConverter,
    ConversionResult,
    UnitRegistry,
    UnitType,
    default_registry,
    normalize,
    lookup_category,
    convert_value,
)
from .config.converter_config import ConverterConfiguration

# Infrastructure
from .infrastructure.logging.session_logger import setup_logging, get_logger

__all__ = [
    # Core classes
    'UnitConverter', 'ConversionResult', 'UnitRegistry', 'UnitType',
    'ConverterConfiguration',

    # Errors
    'UnitConvertError', 'ConversionError', 'UnknownUnitError',
    'IncompatibleUnitsError', 'InvalidNumberError', 'MissingArgumentError',

    # Convenience functions
    'default_registry', 'normalize', 'lookup_category', 'convert_value',
    'setup_logging', 'get_logger',

    # Version info
    '__version__'
]
