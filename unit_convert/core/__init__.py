"""Core conversion engine and error types"""

from .exceptions import (
    UnitConvertError,
    ConversionError,
    UnknownUnitError,
    IncompatibleUnitsError,
    InvalidNumberError,
    MissingArgumentError,
    RegistryError,
    ConfigurationError,
)
from .units import UnitConverter, UnitRegistry, UnitType, normalize, convert_value

__all__ = [
    'UnitConvertError', 'ConversionError', 'UnknownUnitError',
    'IncompatibleUnitsError', 'InvalidNumberError', 'MissingArgumentError',
    'RegistryError', 'ConfigurationError',
    'UnitConverter', 'UnitRegistry', 'UnitType', 'normalize', 'convert_value',
]
