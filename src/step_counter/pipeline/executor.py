"""Pipeline executor orchestrates stage execution.

This module contains the PipelineExecutor class that runs the five signal
stages for one window. A run is all or nothing: the first failing stage
aborts it and no partial step list is returned.
"""

import logging
from typing import Optional

from ..config_schema import StepCounterConfig
from ..exceptions import PipelineStageError, StepCountError
from ..models import StepCountResult, Window
from .context import PipelineContext
from .stages import (
    ConfigurationStage,
    ResamplingStage,
    FilteringStage,
    ScoringStage,
    PeakDetectionStage,
    DebouncingStage
)


class PipelineExecutor:
    """Orchestrates pipeline stage execution.

    The executor holds no per-run state, so one instance may serve many
    threads at once.

    Attributes:
        stages: Ordered list of pipeline stages to execute
        logger: Logger used for run-level messages
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize executor with default stages."""
        self.stages = [
            ConfigurationStage(),
            ResamplingStage(),
            FilteringStage(),
            ScoringStage(),
            PeakDetectionStage(),
            DebouncingStage()
        ]
        self.logger = logger or logging.getLogger(__name__)

    def execute(self, window: Window, config: Optional[StepCounterConfig] = None) -> StepCountResult:
        """Count steps in one window.

        Args:
            window: Accelerometer samples
            config: Configuration; defaults to StepCounterConfig()

        Returns:
            StepCountResult with step events and per-stage metadata

        Raises:
            ConfigurationError, InvalidInputError, InsufficientDataError:
                annotated with the failing stage in ``details['stage']``
            PipelineStageError: for any other failure inside a stage
        """
        ctx = PipelineContext(
            window=window,
            config=config if config is not None else StepCounterConfig(),
            logger=self.logger
        )

        for stage in self.stages:
            stage_name = stage.__class__.__name__
            try:
                ctx = stage.execute(ctx)
            except StepCountError as e:
                e.details.setdefault("stage", stage_name)
                self.logger.error(f"Step counting failed in {stage_name}: {e}")
                raise
            except Exception as e:
                self.logger.error(f"Step counting failed in {stage_name}: {str(e)}", exc_info=True)
                raise PipelineStageError(stage_name, e) from e

        self.logger.info(
            f"Counted {len(ctx.steps)} steps from {ctx.metadata.get('n_samples')} samples "
            f"({ctx.metadata.get('n_peaks')} peaks before debouncing)"
        )

        return StepCountResult(steps=ctx.steps, metadata=dict(ctx.metadata, state=ctx.state))
