"""Tests for engine configuration."""

import pytest

from g3m.config import DEFAULT_ENGINE_CONFIG, EngineConfig


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        """Default values match the documented tolerances."""
        config = EngineConfig()
        assert config.epsilon == 30
        assert config.bisection_tolerance == 1
        assert config.max_iterations == 256
        assert config.bracket_step_bps == 10
        assert config.max_bracket_steps == 20_000

    def test_default_instance(self):
        """The module-level default is a plain EngineConfig()."""
        assert DEFAULT_ENGINE_CONFIG == EngineConfig()

    def test_epsilon_band_is_open(self):
        """The band excludes its endpoints on both sides."""
        config = EngineConfig(epsilon=30)
        assert config.is_within_epsilon(0)
        assert config.is_within_epsilon(29)
        assert config.is_within_epsilon(-29)
        assert not config.is_within_epsilon(30)
        assert not config.is_within_epsilon(-30)

    def test_from_env(self):
        """Environment variables override defaults."""
        config = EngineConfig.from_env(
            {"G3M_EPSILON": "100", "G3M_MAX_ITERATIONS": "64", "G3M_MAX_BRACKET_STEPS": "500"}
        )
        assert config.epsilon == 100
        assert config.max_iterations == 64
        assert config.max_bracket_steps == 500

    def test_from_env_defaults(self):
        """Missing variables fall back to defaults."""
        assert EngineConfig.from_env({}) == EngineConfig()

    @pytest.mark.parametrize(
        "kwargs",
        [{"epsilon": 0}, {"max_iterations": 0}, {"bracket_step_bps": 0}, {"bracket_step_bps": 10_000}],
    )
    def test_invalid_values(self, kwargs):
        """Out-of-range settings are rejected at construction."""
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_frozen(self):
        """Config cannot be mutated after construction."""
        with pytest.raises(AttributeError):
            DEFAULT_ENGINE_CONFIG.epsilon = 1  # type: ignore[misc]
