"""Step likelihood scoring of filtered magnitude"""
import logging

import numpy as np

from ..constants import DEFAULT_SCORE_MODE, DEFAULT_SCORE_WINDOW_SIZE, DEFAULT_VARIANCE_PENALTY
from ..exceptions import ConfigValidationError
from ..models import FilteredSeries, ScoreSeries
from ..utils.signal_processing import rolling_mean_std, trailing_windows

logger = logging.getLogger(__name__)

SCORE_MODES = ("rectified", "energy", "contrast")


def score_rectified(filtered: np.ndarray) -> np.ndarray:
    """Positive half of the filtered magnitude; troughs score zero"""
    return np.clip(filtered, 0.0, None)


def score_energy(filtered: np.ndarray) -> np.ndarray:
    """Squared positive half; sharpens tall peaks against small ripples"""
    return score_rectified(filtered) ** 2


def score_contrast(filtered: np.ndarray, window_size: int) -> np.ndarray:
    """
    Height of each tick above the mean of the previous ``window_size`` ticks.

    Trailing counterpart of the classic centred "midpoint minus neighbours"
    step score. Negative contrast is floored at zero.
    """
    windows = trailing_windows(filtered, window_size + 1)
    history_mean = windows[:, :-1].mean(axis=1)
    return np.clip(filtered - history_mean, 0.0, None)


class StepScorer:
    """Map filtered magnitude to a per-tick step score

    The score at tick i only depends on filtered values in [i - W, i], so the
    stage could run on a live stream with W ticks of latency.
    """

    def __init__(self,
                 mode: str = DEFAULT_SCORE_MODE,
                 window_size: int = DEFAULT_SCORE_WINDOW_SIZE,
                 variance_penalty: float = DEFAULT_VARIANCE_PENALTY):
        """
        Args:
            mode: 'rectified', 'energy' or 'contrast'
            window_size: Trailing ticks W used by contrast and variance terms
            variance_penalty: Weight k in score / (1 + k * trailing variance);
                damps sustained high-amplitude motion such as shaking
        """
        if mode not in SCORE_MODES:
            raise ConfigValidationError("score_mode", mode, f"must be one of {SCORE_MODES}")
        self.mode = mode
        self.window_size = window_size
        self.variance_penalty = variance_penalty

    def score(self, series: FilteredSeries) -> ScoreSeries:
        filtered = series.values

        if len(filtered) == 0:
            scores = filtered.copy()
        elif self.mode == "rectified":
            scores = score_rectified(filtered)
        elif self.mode == "energy":
            scores = score_energy(filtered)
        else:
            scores = score_contrast(filtered, self.window_size)

        if self.variance_penalty > 0 and len(filtered):
            _, std = rolling_mean_std(filtered, self.window_size + 1)
            scores = scores / (1.0 + self.variance_penalty * std ** 2)

        logger.debug(f"Scored {len(scores)} ticks with mode={self.mode}")

        return ScoreSeries(
            start_time=series.start_time,
            sample_rate_hz=series.sample_rate_hz,
            scores=scores
        )
