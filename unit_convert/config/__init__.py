"""Configuration for the unit converter"""

from .converter_config import ConverterConfiguration, ENV_PREFIX

__all__ = ['ConverterConfiguration', 'ENV_PREFIX']
