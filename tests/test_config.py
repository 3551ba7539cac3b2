import json

import pytest

from unit_convert.config import ConverterConfiguration
from unit_convert.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ('PRECISION', 'COLOR', 'LOG_FILE', 'VERBOSE'):
        monkeypatch.delenv(f"UNIT_CONVERT_{name}", raising=False)


def test_defaults():
    config = ConverterConfiguration()
    config.validate()
    assert config.precision == 6
    assert config.color is True
    assert config.log_file is None


def test_from_env(monkeypatch):
    monkeypatch.setenv('UNIT_CONVERT_PRECISION', '9')
    monkeypatch.setenv('UNIT_CONVERT_COLOR', 'off')
    monkeypatch.setenv('UNIT_CONVERT_LOG_FILE', '/tmp/convert.log')
    config = ConverterConfiguration.from_env()
    assert config.precision == 9
    assert config.color is False
    assert config.log_file == '/tmp/convert.log'


def test_empty_log_file_means_none(monkeypatch):
    monkeypatch.setenv('UNIT_CONVERT_LOG_FILE', '')
    assert ConverterConfiguration.from_env().log_file is None


def test_invalid_environment_value(monkeypatch):
    monkeypatch.setenv('UNIT_CONVERT_PRECISION', '40')
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        ConverterConfiguration.from_env()


def test_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"precision": 4, "verbose": True}))
    config = ConverterConfiguration.from_file(str(path))
    assert config.precision == 4
    assert config.verbose is True


def test_file_overrides_environment(tmp_path, monkeypatch):
    monkeypatch.setenv('UNIT_CONVERT_PRECISION', '9')
    monkeypatch.setenv('UNIT_CONVERT_COLOR', 'false')
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"precision": 4}))
    config = ConverterConfiguration.from_file(str(path))
    assert config.precision == 4
    assert config.color is False


def test_file_with_unknown_key(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"digits": 4}))
    with pytest.raises(ConfigurationError, match="Unknown configuration parameter"):
        ConverterConfiguration.from_file(str(path))


def test_file_that_is_not_an_object(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigurationError):
        ConverterConfiguration.from_file(str(path))


def test_unreadable_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot read"):
        ConverterConfiguration.from_file(str(tmp_path / "missing.json"))


@pytest.mark.parametrize("overrides", [
    {'precision': 'six'},
    {'precision': 0},
    {'precision': 18},
    {'color': 'maybe'},
])
def test_bad_values(overrides):
    config = ConverterConfiguration()
    with pytest.raises(ConfigurationError) as excinfo:
        config.update(overrides)
    assert excinfo.value.details['parameter'] in overrides
    assert config.precision == 6


def test_none_overrides_are_skipped():
    config = ConverterConfiguration(precision=3).update({'precision': None, 'color': None})
    assert config.precision == 3
    assert config.color is True
