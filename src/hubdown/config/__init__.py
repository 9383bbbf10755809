"""Configuration — package defaults merged with YAML files and environment."""

from hubdown.config.defaults import get_defaults
from hubdown.config.hierarchy import load_config_hierarchy, validate_config

__all__ = ["get_defaults", "load_config_hierarchy", "validate_config"]
