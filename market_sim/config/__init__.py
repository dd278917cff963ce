"""
Configuration module.

Frozen dataclass defaults, optionally overridden by a YAML file and then by
command line values.
"""
from .defaults import DefaultConfig, InstrumentSpec, get_default_config
from .loader import ConfigLoader

__all__ = ["ConfigLoader", "DefaultConfig", "InstrumentSpec", "get_default_config"]
