"""Configuration for gicker."""

from .config_loader import ConfigLoader
from .config_schema import GickerConfig

__all__ = ["ConfigLoader", "GickerConfig"]
