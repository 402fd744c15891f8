"""Configuration module - exports Settings and load_config."""

from bandje.config.loader import load_config
from bandje.config.settings import Settings

__all__ = ["Settings", "load_config"]
