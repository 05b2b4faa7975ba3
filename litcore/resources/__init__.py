"""
Resources module - static reference data.
"""

from litcore.resources.database import Database

__all__ = ["Database"]
