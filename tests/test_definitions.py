import pytest

from unit_convert.core.exceptions import RegistryError
from unit_convert.core.units import (
    UNIT_ALIASES,
    UNIT_TABLES,
    AffineUnit,
    LinearUnit,
    UnitRegistry,
    UnitType,
    default_registry,
)


def test_normalize_aliases_case_insensitive(registry):
    assert registry.normalize("METERS") == registry.normalize("meters") == "m"
    assert registry.normalize("Kilograms") == "kg"
    assert registry.normalize("LBS") == "lb"
    assert registry.normalize("Fahrenheit") == "F"
    assert registry.normalize("c") == "C"


def test_normalize_passes_unknown_input_through_unchanged(registry):
    assert registry.normalize("L") == "L"
    assert registry.normalize("mL") == "mL"
    assert registry.normalize("Xyz") == "Xyz"
    assert registry.normalize("") == ""


@pytest.mark.parametrize("raw", sorted(UNIT_ALIASES) + ["KG", "Miles", "mL", "uL", "foo", "K"])
def test_normalize_is_idempotent(registry, raw):
    once = registry.normalize(raw)
    assert registry.normalize(once) == once


@pytest.mark.parametrize("alias", sorted(UNIT_ALIASES))
def test_aliases_resolve_in_any_casing(registry, alias):
    assert registry.normalize(alias.upper()) == registry.normalize(alias.title()) == UNIT_ALIASES[alias]


def test_every_canonical_key_normalizes_to_itself(registry):
    for unit_type in UnitType:
        for symbol in registry.units_of(unit_type):
            assert registry.normalize(symbol) == symbol


def test_lookup_category(registry):
    assert registry.lookup_category("km") is UnitType.LENGTH
    assert registry.lookup_category("oz") is UnitType.MASS
    assert registry.lookup_category("tbsp") is UnitType.VOLUME
    assert registry.lookup_category("K") is UnitType.TEMPERATURE
    assert registry.lookup_category("k") is None
    assert registry.lookup_category("meters") is None


def test_categories_are_disjoint():
    seen = set()
    for table in UNIT_TABLES.values():
        assert seen.isdisjoint(table)
        seen.update(table)


def test_base_units_have_unit_factor(registry):
    assert registry.get_unit_info("m").factor == 1.0
    assert registry.get_unit_info("kg").factor == 1.0
    assert registry.get_unit_info("L").factor == 1.0
    assert isinstance(registry.get_unit_info("C"), AffineUnit)
    assert registry.get_unit_info("nope") is None


def test_registry_rejects_colliding_keys():
    tables = {
        UnitType.LENGTH: {'x': LinearUnit('x', 'ex', UnitType.LENGTH, 1.0)},
        UnitType.MASS: {'x': LinearUnit('x', 'ex', UnitType.MASS, 1.0)},
    }
    with pytest.raises(RegistryError, match="defined in both"):
        UnitRegistry(tables, {})


def test_registry_rejects_dangling_alias():
    tables = {UnitType.LENGTH: {'m': LinearUnit('m', 'meter', UnitType.LENGTH, 1.0)}}
    with pytest.raises(RegistryError, match="unknown unit"):
        UnitRegistry(tables, {'metres': 'meter'})


def test_registry_rejects_upper_case_alias():
    tables = {UnitType.LENGTH: {'m': LinearUnit('m', 'meter', UnitType.LENGTH, 1.0)}}
    with pytest.raises(RegistryError, match="lower-case"):
        UnitRegistry(tables, {'Meter': 'm'})


def test_registry_is_read_only(registry):
    with pytest.raises(TypeError):
        registry.table(UnitType.LENGTH)['nm'] = LinearUnit('nm', 'nanometer', UnitType.LENGTH, 1e-9)
    with pytest.raises(TypeError):
        registry.aliases['inch'] = 'in'


def test_registry_copies_source_tables():
    tables = {UnitType.LENGTH: {'m': LinearUnit('m', 'meter', UnitType.LENGTH, 1.0)}}
    registry = UnitRegistry(tables, {})
    tables[UnitType.LENGTH]['cm'] = LinearUnit('cm', 'centimeter', UnitType.LENGTH, 0.01)
    assert 'cm' not in registry


def test_default_registry_is_shared():
    assert default_registry() is default_registry()


@pytest.mark.parametrize("factor", [0.0, -1.0])
def test_linear_unit_requires_positive_factor(factor):
    with pytest.raises(ValueError):
        LinearUnit('bad', 'bad', UnitType.LENGTH, factor)


def test_affine_unit_requires_positive_scale():
    with pytest.raises(ValueError):
        AffineUnit('bad', 'bad', UnitType.TEMPERATURE, 0.0, 0.0, 1.0)
