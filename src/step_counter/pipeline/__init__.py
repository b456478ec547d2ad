"""Pipeline architecture for wrist step counting.

This package contains the stages of one step counting run. Each stage has a
single responsibility and clear input/output contracts:

    Empty -> Resampled -> Filtered -> Scored -> PeaksFound -> Debounced
"""

from .context import PipelineContext, STATES
from .executor import PipelineExecutor
from .stages import (
    ConfigurationStage,
    ResamplingStage,
    FilteringStage,
    ScoringStage,
    PeakDetectionStage,
    DebouncingStage
)

__all__ = [
    'PipelineContext',
    'STATES',
    'PipelineExecutor',
    'ConfigurationStage',
    'ResamplingStage',
    'FilteringStage',
    'ScoringStage',
    'PeakDetectionStage',
    'DebouncingStage'
]
