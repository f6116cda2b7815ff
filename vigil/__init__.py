"""
Vigil - Retrying assertions for browser UI tests.

Describe what should eventually be true about an element and let Vigil
wait, re-check and explain the failure when it never happens.
"""

__version__ = "0.1.0"

from vigil.core.config import VigilConfig
from vigil.core.errors import (
    ElementNotFound,
    ElementShould,
    ElementShouldNot,
    InvalidSelector,
    UIAssertionError,
    VigilError,
)
from vigil.core.session import VigilSession
from vigil.layers.action.element import VirtualElement

__all__ = [
    "VigilSession",
    "VigilConfig",
    "VirtualElement",
    "VigilError",
    "InvalidSelector",
    "UIAssertionError",
    "ElementNotFound",
    "ElementShould",
    "ElementShouldNot",
    "__version__",
]
