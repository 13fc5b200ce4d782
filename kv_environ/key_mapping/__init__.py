"""Key mapping and consumable flat-entry utilities."""

from .env_map import EnvMap
from .mapper import KeyMapper


__all__ = ["EnvMap", "KeyMapper"]
