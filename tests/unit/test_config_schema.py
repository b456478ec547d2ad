"""
Unit tests for Pydantic config schema validation.

Tests defaults, range checks, error classification and YAML loading.
"""

import pytest
import yaml
from pydantic import ValidationError

from src.step_counter.config_schema import (
    AdaptiveThreshold,
    FixedThreshold,
    StepCounterConfig,
    load_config
)
from src.step_counter.exceptions import (
    ConfigFileNotFoundError,
    ConfigValidationError,
    ConfigurationError,
    IncompatibleConfigError,
    InvalidInputError,
    StepCountError
)


class TestDefaults:
    """Test default configuration"""

    def test_default_values(self):
        """Defaults match the documented tuning"""
        config = StepCounterConfig()
        assert config.target_sample_rate_hz == 25.0
        assert config.filter_low_cutoff_hz == 0.5
        assert config.filter_high_cutoff_hz == 3.0
        assert config.filter_order == 2
        assert config.score_mode == "rectified"
        assert config.min_step_interval_ms == 250.0
        assert config.debounce_policy == "first"
        assert isinstance(config.peak_threshold, AdaptiveThreshold)

    def test_defaults_pass_check(self):
        """Default configuration is valid"""
        config = StepCounterConfig()
        assert config.check() is config

    def test_derived_properties(self):
        """Interval in seconds and Nyquist frequency"""
        config = StepCounterConfig(min_step_interval_ms=300, target_sample_rate_hz=50)
        assert config.min_step_interval_s == pytest.approx(0.3)
        assert config.nyquist_hz == 25.0

    def test_frozen(self):
        """Configurations are immutable values"""
        config = StepCounterConfig()
        with pytest.raises(ValidationError):
            config.filter_order = 4


class TestTypeValidation:
    """Test pydantic-level validation"""

    def test_unknown_score_mode(self):
        with pytest.raises(ValidationError):
            StepCounterConfig(score_mode="wavelet")

    def test_unknown_debounce_policy(self):
        with pytest.raises(ValidationError):
            StepCounterConfig(debounce_policy="last")

    def test_threshold_discriminator(self):
        """Threshold dicts are routed by their mode"""
        config = StepCounterConfig(peak_threshold={"mode": "fixed", "value": 0.5})
        assert isinstance(config.peak_threshold, FixedThreshold)
        assert config.peak_threshold.value == 0.5

    def test_unknown_threshold_method(self):
        with pytest.raises(ValidationError):
            AdaptiveThreshold(method="percentile")


class TestRangeChecks:
    """Test check() error classification"""

    @pytest.mark.parametrize("field,value", [
        ("target_sample_rate_hz", 0.0),
        ("target_sample_rate_hz", -25.0),
        ("filter_low_cutoff_hz", 0.0),
        ("filter_high_cutoff_hz", -1.0),
        ("min_step_interval_ms", -1.0),
    ])
    def test_non_positive_is_invalid_input(self, field, value):
        """Non-positive rates, cutoffs and negative intervals are input errors"""
        with pytest.raises(InvalidInputError) as exc_info:
            StepCounterConfig(**{field: value}).check()
        assert exc_info.value.details["field"] == field

    def test_empty_passband(self):
        """low >= high is a configuration error"""
        with pytest.raises(IncompatibleConfigError):
            StepCounterConfig(filter_low_cutoff_hz=3.0, filter_high_cutoff_hz=3.0).check()
        with pytest.raises(ConfigurationError):
            StepCounterConfig(filter_low_cutoff_hz=4.0, filter_high_cutoff_hz=3.0).check()

    def test_high_cutoff_at_nyquist(self):
        """High cutoff must lie below half the target rate"""
        with pytest.raises(IncompatibleConfigError):
            StepCounterConfig(target_sample_rate_hz=6.0, filter_high_cutoff_hz=3.0).check()

    def test_high_cutoff_below_nyquist(self):
        StepCounterConfig(target_sample_rate_hz=10.0, filter_high_cutoff_hz=4.9).check()

    @pytest.mark.parametrize("order", [0, 9])
    def test_filter_order_range(self, order):
        with pytest.raises(ConfigValidationError):
            StepCounterConfig(filter_order=order).check()

    def test_score_window_size(self):
        with pytest.raises(ConfigValidationError):
            StepCounterConfig(score_window_size=0).check()

    def test_negative_variance_penalty(self):
        with pytest.raises(ConfigValidationError):
            StepCounterConfig(variance_penalty=-0.5).check()

    def test_zero_interval_allowed(self):
        """A zero interval disables debouncing"""
        StepCounterConfig(min_step_interval_ms=0).check()

    @pytest.mark.parametrize("fraction", [0.0, 1.0, 1.5])
    def test_adaptive_fraction_range(self, fraction):
        with pytest.raises(ConfigValidationError):
            StepCounterConfig(peak_threshold=AdaptiveThreshold(fraction=fraction)).check()

    def test_adaptive_window_positive(self):
        with pytest.raises(ConfigValidationError):
            StepCounterConfig(peak_threshold=AdaptiveThreshold(window_seconds=0)).check()

    def test_negative_fixed_threshold(self):
        with pytest.raises(ConfigValidationError):
            StepCounterConfig(peak_threshold=FixedThreshold(value=-0.1)).check()

    def test_configuration_errors_are_not_value_errors(self):
        """Domain errors form their own hierarchy"""
        with pytest.raises(StepCountError) as exc_info:
            StepCounterConfig(filter_order=0).check()
        assert not isinstance(exc_info.value, ValueError)


class TestLoading:
    """Test dict and YAML loading"""

    def test_from_dict(self, config_dict):
        config = StepCounterConfig.from_dict(config_dict)
        assert config.peak_threshold.fraction == 0.3

    def test_to_dict_round_trip(self, config_dict):
        config = StepCounterConfig.from_dict(config_dict)
        assert StepCounterConfig.from_dict(config.to_dict()) == config

    def test_load_yaml(self, temp_yaml_config):
        config = load_config(str(temp_yaml_config))
        assert config.filter_high_cutoff_hz == 3.0
        assert config.peak_threshold.method == "rolling_max"

    def test_partial_yaml_uses_defaults(self, tmp_path):
        config_file = tmp_path / "partial.yaml"
        config_file.write_text(yaml.dump({"score_mode": "energy"}))

        config = load_config(str(config_file))
        assert config.score_mode == "energy"
        assert config.target_sample_rate_hz == 25.0

    def test_empty_yaml(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(str(config_file)) == StepCounterConfig()

    def test_load_yaml_checks_ranges(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(yaml.dump({"filter_low_cutoff_hz": 5.0}))

        with pytest.raises(IncompatibleConfigError):
            load_config(str(config_file))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))
