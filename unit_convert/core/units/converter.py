"""
Unit Conversion Engine

Converts values between canonical units of the same category: linear
factors for length, mass and volume, affine transforms through Celsius
for temperature. Failures come back as typed results; ``convert``
raises them for callers that prefer exceptions.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Union, Dict, Optional, Any

import numpy as np

from .definitions import (
    UnitRegistry,
    UnitType,
    LinearUnit,
    default_registry,
)
from ..exceptions import (
    ConversionError,
    IncompatibleUnitsError,
    UnknownUnitError,
)

Number = Union[float, np.ndarray]


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a single conversion: a value or an error, never both"""
    from_unit: str
    to_unit: str
    value: Optional[Number] = None
    error: Optional[ConversionError] = None
    unit_type: Optional[UnitType] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Number:
        """Return the converted value or raise the carried error"""
        if self.error is not None:
            raise self.error
        return self.value


class UnitConverter:
    """
    Stateless converter over an immutable unit registry

    The only mutable state is a set of usage counters, updated under a
    lock, so one instance can be shared between threads.
    """

    def __init__(self, registry: UnitRegistry = None, logger=None):
        """
        Initialize unit converter

        Args:
            registry: Unit registry to resolve keys against (default shared one)
            logger: Logger for debug traces (default module logger)
        """
        self.registry = registry or default_registry()
        self.logger = logger or logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._stats = {
            'conversions': 0,
            'errors': 0,
            'unknown_unit': 0,
            'incompatible_units': 0,
        }

    def try_convert(self, from_unit: str, to_unit: str, value: Number) -> ConversionResult:
        """
        Convert value between two canonical unit keys

        Categories are checked in ``UnitType`` order and the first one
        holding both keys is used.

        Args:
            from_unit: Source canonical key (e.g., 'km')
            to_unit: Target canonical key (e.g., 'mi')
            value: Scalar or numpy array to convert

        Returns:
            ConversionResult carrying the value or an UnknownUnitError /
            IncompatibleUnitsError
        """
        value = self._coerce(value)

        for unit_type in UnitType:
            table = self.registry.table(unit_type)
            if from_unit in table and to_unit in table:
                if from_unit == to_unit:
                    result = value
                else:
                    source = table[from_unit]
                    target = table[to_unit]
                    result = target.from_base(source.to_base(value))

                self._count('conversions')
                self.logger.debug(f"{from_unit} -> {to_unit} ({unit_type.value})")
                return ConversionResult(from_unit, to_unit, result, unit_type=unit_type)

        from_type = self.registry.lookup_category(from_unit)
        to_type = self.registry.lookup_category(to_unit)

        # a known source unit whose category does not hold the target
        if from_type is not None:
            self._count('incompatible_units')
            error = IncompatibleUnitsError(from_unit, to_unit, from_type, to_type)
        else:
            self._count('unknown_unit')
            unknown = [unit for unit, unit_type in ((from_unit, from_type), (to_unit, to_type))
                       if unit_type is None]
            error = UnknownUnitError(from_unit, to_unit, unknown)

        self.logger.debug(f"Conversion failed: {error}")
        return ConversionResult(from_unit, to_unit, error=error)

    def convert(self, from_unit: str, to_unit: str, value: Number) -> Number:
        """
        Convert value between two canonical unit keys

        Raises:
            UnknownUnitError: If the source key is not in any category
            IncompatibleUnitsError: If the source key's category does not hold the target
        """
        return self.try_convert(from_unit, to_unit, value).unwrap()

    def get_conversion_factor(self, from_unit: str, to_unit: str) -> float:
        """
        Multiplication factor between two linear units

        Raises:
            ConversionError: If units are unknown, incompatible, or affine
        """
        result = self.try_convert(from_unit, to_unit, 1.0)
        if not result.ok:
            raise result.error

        if not isinstance(self.registry.get_unit_info(from_unit), LinearUnit):
            raise ConversionError(f"No constant factor between '{from_unit}' and '{to_unit}' "
                                  f"({result.unit_type.value} is not linear)",
                                  from_unit, to_unit)
        return result.value

    def validate_unit(self, unit: str) -> bool:
        """Check if unit is a canonical key of any category"""
        return unit in self.registry

    def get_statistics(self) -> Dict[str, Any]:
        """Get converter usage statistics"""
        with self._lock:
            stats = self._stats.copy()
        stats['registered_units'] = sum(len(self.registry.table(t)) for t in UnitType)
        stats['registered_aliases'] = len(self.registry.aliases)
        return stats

    def _count(self, key: str):
        with self._lock:
            self._stats[key] += 1
            if key != 'conversions':
                self._stats['errors'] += 1

    @staticmethod
    def _coerce(value: Number) -> Number:
        if isinstance(value, np.ndarray):
            return value.astype(np.float64, copy=False)
        return float(value)
