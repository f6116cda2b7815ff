"""
Vigil configuration.

Timeouts and the text-entry strategy are passed explicitly to the
session and polling engine instead of living in module globals.
"""

from dataclasses import dataclass
from typing import Optional
import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of milliseconds, got {raw!r}")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class VigilConfig:
    """Configuration for waits and interactions."""
    timeout_ms: int = 4000
    polling_interval_ms: int = 100
    fast_set_value: bool = False  # Inject values via JS instead of native keystrokes
    headless: bool = False
    profile_path: Optional[str] = None

    def __post_init__(self):
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be non-negative, got {self.timeout_ms}")
        if self.polling_interval_ms < 0:
            raise ValueError(
                f"polling_interval_ms must be non-negative, got {self.polling_interval_ms}"
            )

    @classmethod
    def from_env(cls, **overrides) -> "VigilConfig":
        """
        Build a config from VIGIL_* environment variables.

        Recognized variables:
            VIGIL_TIMEOUT_MS, VIGIL_POLLING_INTERVAL_MS,
            VIGIL_FAST_SET_VALUE, VIGIL_HEADLESS

        Keyword overrides win over the environment.
        """
        values = {
            "timeout_ms": _env_int("VIGIL_TIMEOUT_MS", cls.timeout_ms),
            "polling_interval_ms": _env_int("VIGIL_POLLING_INTERVAL_MS", cls.polling_interval_ms),
            "fast_set_value": _env_flag("VIGIL_FAST_SET_VALUE", cls.fast_set_value),
            "headless": _env_flag("VIGIL_HEADLESS", cls.headless),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
