"""
Incremental Merkle Accumulator - Core Package

Configuration and logging setup shared by the accumulator modules.
"""

from incmerkle.core.config import Settings, get_settings, settings
from incmerkle.core.logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "setup_logging",
]
