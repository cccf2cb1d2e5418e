"""Configuration files (YAML) and the manager that loads them.

Packaged defaults live next to this module; user overrides are merged by
:class:`ConfigManager`.
"""

from .manager import ConfigManager

__all__ = [
    "ConfigManager",
]
