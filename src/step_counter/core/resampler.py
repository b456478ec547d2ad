"""Resampling of irregular accelerometer windows onto a uniform time grid"""
import logging

import numpy as np

from ..constants import DEFAULT_SAMPLE_RATE_HZ, TICK_ROUNDING_TOLERANCE
from ..models import ResampledSeries, Window
from ..utils.signal_processing import compute_magnitude
from ..utils.validation import validate_sample_rate, validate_window

logger = logging.getLogger(__name__)


def tick_count(duration_s: float, sample_rate_hz: float) -> int:
    """
    Number of uniform ticks covering a time span, both ends included.

    Args:
        duration_s: end_time - start_time (seconds)
        sample_rate_hz: Target rate (Hz)

    Returns:
        floor(duration * rate) + 1
    """
    return int(np.floor(duration_s * sample_rate_hz + TICK_ROUNDING_TOLERANCE)) + 1


class Resampler:
    """Convert irregular (timestamp, acceleration) samples to a fixed rate

    Axes are combined into Euclidean magnitude at the raw samples, then the
    magnitude is interpolated. The same rule applies to every window, and a
    window of two samples becomes an exact straight line.
    """

    def __init__(self, target_rate_hz: float = DEFAULT_SAMPLE_RATE_HZ):
        """
        Args:
            target_rate_hz: Output sample rate (Hz)
        """
        self.target_rate_hz = target_rate_hz

    def resample(self, window: Window) -> ResampledSeries:
        """
        Linearly interpolate magnitude onto uniform ticks.

        Ticks before the first or after the last raw sample take the boundary
        value; nothing is extrapolated.

        Args:
            window: Raw samples, validated here before use

        Returns:
            ResampledSeries with one magnitude value per tick

        Raises:
            InvalidInputError: Bad rate, non-finite values, unordered timestamps
            InsufficientDataError: Fewer than two samples
        """
        validate_sample_rate(self.target_rate_hz)
        validate_window(window)

        start_time = float(window.timestamps[0])
        # relative times keep sub-millisecond precision for Unix-epoch inputs
        raw_times = window.timestamps - start_time
        n_ticks = tick_count(float(raw_times[-1]), self.target_rate_hz)
        tick_times = np.arange(n_ticks) / self.target_rate_hz

        magnitude = compute_magnitude(window.acceleration)
        values = np.interp(tick_times, raw_times, magnitude)

        logger.debug(
            f"Resampled {len(window)} samples over {raw_times[-1]:.3f}s "
            f"to {n_ticks} ticks at {self.target_rate_hz} Hz"
        )

        return ResampledSeries(
            start_time=start_time,
            sample_rate_hz=self.target_rate_hz,
            values=values
        )


def resample(window: Window, target_rate_hz: float = DEFAULT_SAMPLE_RATE_HZ) -> ResampledSeries:
    """Functional shortcut for Resampler(target_rate_hz).resample(window)"""
    return Resampler(target_rate_hz).resample(window)
