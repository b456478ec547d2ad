"""Pipeline stages for step counting.

Each stage is a focused unit with a single responsibility.
Stages follow the pattern: receive context -> process -> return updated context.
A stage checks that the previous stage's output exists before running.
"""

from ..analysis.debouncer import TemporalDebouncer
from ..analysis.peak_detector import PeakDetector
from ..analysis.scoring import StepScorer
from ..core.filtering import GaitBandpassFilter
from ..core.resampler import Resampler
from ..exceptions import PipelineStateError

from .context import PipelineContext


def _require(ctx: PipelineContext, stage: str, *fields: str) -> None:
    missing = [name for name in fields if getattr(ctx, name) is None]
    if missing:
        raise PipelineStateError(missing, stage)


class ConfigurationStage:
    """Validate configuration before the window is touched.

    Responsibility: range-check every parameter so configuration mistakes are
    reported as such and never masquerade as bad sensor data.
    """

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        config = ctx.config.check()

        threshold = config.peak_threshold
        ctx.logger.debug(
            f"Config: rate={config.target_sample_rate_hz} Hz, "
            f"band={config.filter_low_cutoff_hz}-{config.filter_high_cutoff_hz} Hz, "
            f"score={config.score_mode}, threshold={threshold.mode}, "
            f"min_interval={config.min_step_interval_ms} ms ({config.debounce_policy})"
        )

        return ctx


class ResamplingStage:
    """Validate the window and interpolate it onto the uniform tick grid.

    Responsibility: Empty -> Resampled.
    """

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        resampler = Resampler(target_rate_hz=ctx.config.target_sample_rate_hz)
        resampled = resampler.resample(ctx.window)

        return ctx.update(
            resampled=resampled,
            state="Resampled",
            metadata={"n_samples": len(ctx.window), "n_ticks": len(resampled)}
        )


class FilteringStage:
    """Band-pass the magnitude series to the gait band.

    Responsibility: Resampled -> Filtered.
    """

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        _require(ctx, self.__class__.__name__, "resampled")
        config = ctx.config

        gait_filter = GaitBandpassFilter(
            sample_rate_hz=config.target_sample_rate_hz,
            low_cutoff_hz=config.filter_low_cutoff_hz,
            high_cutoff_hz=config.filter_high_cutoff_hz,
            order=config.filter_order
        )

        return ctx.update(filtered=gait_filter.apply(ctx.resampled), state="Filtered")


class ScoringStage:
    """Turn filtered magnitude into a per-tick step score.

    Responsibility: Filtered -> Scored.
    """

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        _require(ctx, self.__class__.__name__, "filtered")
        config = ctx.config

        scorer = StepScorer(
            mode=config.score_mode,
            window_size=config.score_window_size,
            variance_penalty=config.variance_penalty
        )

        return ctx.update(scores=scorer.score(ctx.filtered), state="Scored")


class PeakDetectionStage:
    """Find thresholded local maxima of the score.

    Responsibility: Scored -> PeaksFound.
    """

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        _require(ctx, self.__class__.__name__, "scores")

        peaks = PeakDetector(threshold=ctx.config.peak_threshold).detect(ctx.scores)

        return ctx.update(peaks=peaks, state="PeaksFound", metadata={"n_peaks": len(peaks)})


class DebouncingStage:
    """Enforce the minimum step interval and emit step events.

    Responsibility: PeaksFound -> Debounced (terminal).
    """

    def execute(self, ctx: PipelineContext) -> PipelineContext:
        if ctx.state != "PeaksFound":
            raise PipelineStateError(["peaks"], self.__class__.__name__)

        debouncer = TemporalDebouncer(
            min_interval_ms=ctx.config.min_step_interval_ms,
            policy=ctx.config.debounce_policy
        )
        steps = debouncer.apply(ctx.peaks)

        return ctx.update(steps=steps, state="Debounced", metadata={"n_steps": len(steps)})
