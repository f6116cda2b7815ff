import pytest

from vigil.core.config import VigilConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("VIGIL_TIMEOUT_MS", "VIGIL_POLLING_INTERVAL_MS", "VIGIL_FAST_SET_VALUE", "VIGIL_HEADLESS"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    """Test the default configuration."""
    config = VigilConfig()
    assert config.timeout_ms == 4000
    assert config.polling_interval_ms == 100
    assert config.fast_set_value is False


@pytest.mark.parametrize("field", ["timeout_ms", "polling_interval_ms"])
def test_negative_durations_rejected(field):
    """Test that negative durations are rejected."""
    with pytest.raises(ValueError):
        VigilConfig(**{field: -1})


def test_zero_timeout_allowed():
    """Test that a zero timeout is allowed."""
    assert VigilConfig(timeout_ms=0).timeout_ms == 0


def test_from_env(monkeypatch):
    """Test reading the configuration from the environment."""
    monkeypatch.setenv("VIGIL_TIMEOUT_MS", "8000")
    monkeypatch.setenv("VIGIL_POLLING_INTERVAL_MS", "250")
    monkeypatch.setenv("VIGIL_FAST_SET_VALUE", "true")
    monkeypatch.setenv("VIGIL_HEADLESS", "1")

    config = VigilConfig.from_env()

    assert config == VigilConfig(timeout_ms=8000, polling_interval_ms=250,
                                 fast_set_value=True, headless=True)


def test_overrides_win_over_env(monkeypatch):
    """Test that explicit overrides beat the environment."""
    monkeypatch.setenv("VIGIL_TIMEOUT_MS", "8000")
    assert VigilConfig.from_env(timeout_ms=500).timeout_ms == 500
    assert VigilConfig.from_env(timeout_ms=None).timeout_ms == 8000


def test_non_integer_env_rejected(monkeypatch):
    """Test that a non-integer duration in the environment is rejected."""
    monkeypatch.setenv("VIGIL_TIMEOUT_MS", "soon")
    with pytest.raises(ValueError, match="VIGIL_TIMEOUT_MS"):
        VigilConfig.from_env()
