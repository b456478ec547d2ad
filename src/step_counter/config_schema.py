"""
Pydantic schema for the step counting configuration.

The configuration is an explicit immutable value passed into every run, so
concurrent runs with different tuning never interfere. Pydantic enforces types;
``StepCounterConfig.check()`` enforces ranges and raises the pipeline's own
error kinds so bad configuration is reported before any window is read.

Version: 1.0.0
Date: 2026-10-19
"""

import math
from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DEFAULT_SAMPLE_RATE_HZ,
    DEFAULT_LOW_CUTOFF_HZ,
    DEFAULT_HIGH_CUTOFF_HZ,
    DEFAULT_FILTER_ORDER,
    MAX_FILTER_ORDER,
    NYQUIST_FRACTION,
    DEFAULT_SCORE_MODE,
    DEFAULT_SCORE_WINDOW_SIZE,
    DEFAULT_VARIANCE_PENALTY,
    DEFAULT_THRESHOLD_METHOD,
    DEFAULT_THRESHOLD_WINDOW_SEC,
    DEFAULT_THRESHOLD_FRACTION,
    DEFAULT_THRESHOLD_STD_FACTOR,
    DEFAULT_MIN_SCORE,
    DEFAULT_MIN_STEP_INTERVAL_MS,
    DEFAULT_DEBOUNCE_POLICY,
    MS_PER_SECOND,
)
from .exceptions import (
    ConfigFileNotFoundError,
    ConfigValidationError,
    IncompatibleConfigError,
    InvalidInputError,
)


def _require_positive(field: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{field} must be positive", field=field, value=value)


class FixedThreshold(BaseModel):
    """Constant score threshold (simple mode)"""
    model_config = ConfigDict(frozen=True)

    mode: Literal["fixed"] = "fixed"

    value: float = Field(
        description="Peaks must score strictly above this value"
    )

    def check(self) -> None:
        if not math.isfinite(self.value) or self.value < 0:
            raise ConfigValidationError("peak_threshold.value", self.value, "must be finite and >= 0")


class AdaptiveThreshold(BaseModel):
    """Threshold that follows the trailing score level of the wearer"""
    model_config = ConfigDict(frozen=True)

    mode: Literal["adaptive"] = "adaptive"

    method: Literal["rolling_max", "rolling_mean_std"] = Field(
        default=DEFAULT_THRESHOLD_METHOD,
        description="rolling_max: fraction x trailing max; rolling_mean_std: mean + k x std"
    )

    window_seconds: float = Field(
        default=DEFAULT_THRESHOLD_WINDOW_SEC,
        description="Length of the trailing window the statistics are taken over"
    )

    fraction: float = Field(
        default=DEFAULT_THRESHOLD_FRACTION,
        description="Fraction of the trailing max a peak must exceed (rolling_max)"
    )

    std_factor: float = Field(
        default=DEFAULT_THRESHOLD_STD_FACTOR,
        description="Standard deviations above the trailing mean (rolling_mean_std)"
    )

    min_score: float = Field(
        default=DEFAULT_MIN_SCORE,
        description="Absolute floor under the adaptive threshold"
    )

    def check(self) -> None:
        if not math.isfinite(self.window_seconds) or self.window_seconds <= 0:
            raise ConfigValidationError("peak_threshold.window_seconds", self.window_seconds, "must be > 0")
        if not (0 < self.fraction < 1):
            raise ConfigValidationError("peak_threshold.fraction", self.fraction, "must be in (0, 1)")
        if not math.isfinite(self.std_factor) or self.std_factor < 0:
            raise ConfigValidationError("peak_threshold.std_factor", self.std_factor, "must be >= 0")
        if not math.isfinite(self.min_score) or self.min_score < 0:
            raise ConfigValidationError("peak_threshold.min_score", self.min_score, "must be >= 0")


ThresholdSettings = Annotated[Union[FixedThreshold, AdaptiveThreshold], Field(discriminator="mode")]


class StepCounterConfig(BaseModel):
    """Complete step counting pipeline configuration"""
    model_config = ConfigDict(frozen=True)

    target_sample_rate_hz: float = Field(
        default=DEFAULT_SAMPLE_RATE_HZ,
        description="Uniform rate the raw stream is resampled to (Hz)"
    )

    filter_low_cutoff_hz: float = Field(
        default=DEFAULT_LOW_CUTOFF_HZ,
        description="Band-pass low edge; removes gravity and slow drift"
    )

    filter_high_cutoff_hz: float = Field(
        default=DEFAULT_HIGH_CUTOFF_HZ,
        description="Band-pass high edge; removes sensor noise above gait cadence"
    )

    filter_order: int = Field(
        default=DEFAULT_FILTER_ORDER,
        description="Butterworth order of each band edge"
    )

    score_mode: Literal["rectified", "energy", "contrast"] = Field(
        default=DEFAULT_SCORE_MODE,
        description="How filtered magnitude maps to step likelihood"
    )

    score_window_size: int = Field(
        default=DEFAULT_SCORE_WINDOW_SIZE,
        description="Trailing ticks the scorer may look back over"
    )

    variance_penalty: float = Field(
        default=DEFAULT_VARIANCE_PENALTY,
        description="Weight of the trailing-variance penalty against device shake"
    )

    peak_threshold: ThresholdSettings = Field(
        default_factory=AdaptiveThreshold,
        description="Fixed or adaptive peak threshold"
    )

    min_step_interval_ms: float = Field(
        default=DEFAULT_MIN_STEP_INTERVAL_MS,
        description="Peaks closer than this to the last accepted step are dropped"
    )

    debounce_policy: Literal["first", "strongest"] = Field(
        default=DEFAULT_DEBOUNCE_POLICY,
        description="first: earlier peak wins; strongest: higher score wins within a cluster"
    )

    @property
    def min_step_interval_s(self) -> float:
        return self.min_step_interval_ms / MS_PER_SECOND

    @property
    def nyquist_hz(self) -> float:
        return self.target_sample_rate_hz * NYQUIST_FRACTION

    def check(self) -> 'StepCounterConfig':
        """
        Validate parameter ranges.

        Returns:
            self, so calls can be chained

        Raises:
            InvalidInputError: Non-positive rate or cutoff, negative interval
            ConfigurationError: Empty pass-band, cutoff at/above Nyquist,
                threshold parameters out of range
        """
        _require_positive("target_sample_rate_hz", self.target_sample_rate_hz)
        _require_positive("filter_low_cutoff_hz", self.filter_low_cutoff_hz)
        _require_positive("filter_high_cutoff_hz", self.filter_high_cutoff_hz)

        if not math.isfinite(self.min_step_interval_ms) or self.min_step_interval_ms < 0:
            raise InvalidInputError(
                "min_step_interval_ms must be >= 0",
                field="min_step_interval_ms",
                value=self.min_step_interval_ms
            )

        if self.filter_low_cutoff_hz >= self.filter_high_cutoff_hz:
            raise IncompatibleConfigError(
                {"filter_low_cutoff_hz": self.filter_low_cutoff_hz,
                 "filter_high_cutoff_hz": self.filter_high_cutoff_hz},
                "low cutoff must be below high cutoff"
            )

        if self.filter_high_cutoff_hz >= self.nyquist_hz:
            raise IncompatibleConfigError(
                {"filter_high_cutoff_hz": self.filter_high_cutoff_hz,
                 "target_sample_rate_hz": self.target_sample_rate_hz},
                f"high cutoff must be below the Nyquist frequency ({self.nyquist_hz} Hz)"
            )

        if not (1 <= self.filter_order <= MAX_FILTER_ORDER):
            raise ConfigValidationError("filter_order", self.filter_order, f"must be in [1, {MAX_FILTER_ORDER}]")

        if self.score_window_size < 1:
            raise ConfigValidationError("score_window_size", self.score_window_size, "must be >= 1")

        if not math.isfinite(self.variance_penalty) or self.variance_penalty < 0:
            raise ConfigValidationError("variance_penalty", self.variance_penalty, "must be >= 0")

        self.peak_threshold.check()
        return self

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'StepCounterConfig':
        """Load config from YAML file (types validated, ranges checked on use)"""
        import yaml

        yaml_file = Path(yaml_path)
        if not yaml_file.exists():
            raise ConfigFileNotFoundError(str(yaml_path))

        with open(yaml_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        return cls(**raw_config)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'StepCounterConfig':
        """Load config from dictionary"""
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dictionary"""
        return self.model_dump()


def load_config(config_path: str) -> StepCounterConfig:
    """
    Load and validate a step counter config.

    Args:
        config_path: Path to YAML config file

    Returns:
        Range-checked StepCounterConfig

    Raises:
        ConfigFileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If a value has the wrong type
        ConfigurationError / InvalidInputError: If a value is out of range
    """
    return StepCounterConfig.from_yaml(config_path).check()
