"""Core module - configuration, errors, selectors and session."""

from vigil.core.config import VigilConfig
from vigil.core.driver_factory import create_driver
from vigil.core.session import VigilSession

__all__ = ["VigilConfig", "VigilSession", "create_driver"]
