"""Windowed peak detection step counting for wrist-worn accelerometers."""

from .config_schema import AdaptiveThreshold, FixedThreshold, StepCounterConfig, load_config
from .counter import count_steps, count_steps_detailed, count_steps_many
from .exceptions import (
    StepCountError,
    ConfigurationError,
    InvalidInputError,
    InsufficientDataError,
    PipelineStageError,
)
from .models import Peak, Sample, StepCountResult, StepEvent, Window

__version__ = "1.0.0"

__all__ = [
    'AdaptiveThreshold',
    'FixedThreshold',
    'StepCounterConfig',
    'load_config',
    'count_steps',
    'count_steps_detailed',
    'count_steps_many',
    'StepCountError',
    'ConfigurationError',
    'InvalidInputError',
    'InsufficientDataError',
    'PipelineStageError',
    'Peak',
    'Sample',
    'StepCountResult',
    'StepEvent',
    'Window',
]
