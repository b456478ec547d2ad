"""Pipeline context for state flow between stages.

This module defines the PipelineContext dataclass that carries one window's
intermediate results through the stages. Stages never mutate a context; they
return a copy with their outputs filled in.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config_schema import StepCounterConfig
from ..models import FilteredSeries, Peak, ResampledSeries, ScoreSeries, StepEvent, Window

# Run states in execution order; Debounced is terminal
STATES = ("Empty", "Resampled", "Filtered", "Scored", "PeaksFound", "Debounced")


@dataclass
class PipelineContext:
    """State container for one step counting run.

    Attributes:
        window: Input samples (read only)
        config: Immutable configuration for this run
        logger: Logger instance

        # Stage outputs (populated during execution)
        state: Last completed state, see STATES
        resampled: Uniform magnitude series
        filtered: Band-passed series
        scores: Step score series
        peaks: Thresholded local maxima
        steps: Debounced step events
        metadata: Per-stage counts for diagnostics
    """

    # Input parameters
    window: Window
    config: StepCounterConfig
    logger: logging.Logger

    # Stage outputs
    state: str = "Empty"
    resampled: Optional[ResampledSeries] = None
    filtered: Optional[FilteredSeries] = None
    scores: Optional[ScoreSeries] = None
    peaks: List[Peak] = field(default_factory=list)
    steps: List[StepEvent] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def update(self, **kwargs) -> 'PipelineContext':
        """Create new context with updated fields.

        ``metadata`` entries are merged into a fresh dict rather than
        replacing the existing one.

        Args:
            **kwargs: Fields to update

        Returns:
            New PipelineContext with updated fields
        """
        new_ctx = copy.copy(self)
        for key, value in kwargs.items():
            if not hasattr(new_ctx, key):
                raise AttributeError(f"PipelineContext has no attribute '{key}'")
            if key == "metadata":
                value = {**self.metadata, **value}
            setattr(new_ctx, key, value)
        return new_ctx
