"""
API Routers
"""

from . import filter, system, transform

__all__ = ["filter", "system", "transform"]
