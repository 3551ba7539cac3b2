"""
Custom Exceptions for Unit Conversion

Exception hierarchy shared by the registry, the conversion engine and
the command line layer. Every error carries a details mapping and an
exit code so the CLI can report failures uniformly.
"""

from typing import Sequence


class UnitConvertError(Exception):
    """Base exception for all unit conversion errors"""

    # 2 is left to click usage errors
    exit_code = 1

    def __init__(self, message: str, details: dict = None):
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        base_msg = super().__str__()
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base_msg} (Details: {detail_str})"
        return base_msg

    @property
    def message(self) -> str:
        """Message without the details suffix"""
        return self.args[0] if self.args else ""


class ConversionError(UnitConvertError):
    """Raised when the engine cannot convert between two units"""

    def __init__(self, message: str, from_unit: str = None, to_unit: str = None,
                 details: dict = None):
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(message, details)


class UnknownUnitError(ConversionError):
    """Raised when a unit identifier is not a canonical key of any category"""

    exit_code = 3

    def __init__(self, from_unit: str, to_unit: str, unknown: Sequence[str] = ()):
        self.unknown = tuple(unknown) or (from_unit, to_unit)
        super().__init__(f"Unknown unit(s): from='{from_unit}', to='{to_unit}'",
                         from_unit, to_unit)


class IncompatibleUnitsError(ConversionError):
    """Raised when the source unit is known but its category does not hold the target"""

    exit_code = 4

    def __init__(self, from_unit: str, to_unit: str, from_type=None, to_type=None):
        self.from_type = from_type
        self.to_type = to_type
        details = {}
        if from_type is not None:
            details['from_type'] = from_type.value
        if to_type is not None:
            details['to_type'] = to_type.value
        super().__init__("Incompatible unit types (eg., length vs. mass)",
                         from_unit, to_unit, details)


class InvalidNumberError(UnitConvertError):
    """Raised when the value token cannot be parsed as a number"""

    exit_code = 5

    def __init__(self, token: str = None):
        self.token = token
        details = {'token': token} if token is not None else None
        super().__init__("Value must be a valid number.", details)


class MissingArgumentError(UnitConvertError):
    """Raised when from-unit, to-unit or value is absent"""

    exit_code = 6

    def __init__(self, missing: Sequence[str] = ()):
        self.missing = tuple(missing)
        details = {'missing': "/".join(self.missing)} if self.missing else None
        super().__init__("Missing required arguments", details)


class RegistryError(UnitConvertError):
    """Raised when unit tables violate a registry invariant"""

    def __init__(self, message: str, unit: str = None):
        details = {'unit': unit} if unit else None
        super().__init__(message, details)


class ConfigurationError(UnitConvertError):
    """Raised when configuration is invalid"""

    def __init__(self, message: str, parameter: str = None, value=None):
        details = {}
        if parameter:
            details['parameter'] = parameter
        if value is not None:
            details['value'] = str(value)
        super().__init__(message, details)

