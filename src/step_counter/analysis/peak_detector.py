"""Peak detection on step score series"""
import logging
from typing import List, Optional, Union

import numpy as np

from ..config_schema import AdaptiveThreshold, FixedThreshold
from ..models import Peak, ScoreSeries
from ..utils.signal_processing import rolling_max, rolling_mean_std

logger = logging.getLogger(__name__)

ThresholdSpec = Union[FixedThreshold, AdaptiveThreshold]


def find_local_maxima(scores: np.ndarray) -> np.ndarray:
    """
    Indices of local maxima, boundaries excluded.

    A tick qualifies when it is >= both neighbours and strictly greater than
    at least one of them. Within a plateau of equal scores only the first
    qualifying index is kept.

    Args:
        scores: 1D score array

    Returns:
        Sorted array of indices
    """
    n = len(scores)
    if n < 3:
        return np.array([], dtype=int)

    left, mid, right = scores[:-2], scores[1:-1], scores[2:]
    candidates = (mid >= left) & (mid >= right) & ((mid > left) | (mid > right))
    indices = np.flatnonzero(candidates) + 1
    if indices.size == 0:
        return indices

    # plateau id for every tick; equal consecutive scores share an id
    new_run = np.concatenate([[True], scores[1:] != scores[:-1]])
    run_id = np.cumsum(new_run)
    _, first = np.unique(run_id[indices], return_index=True)
    return indices[np.sort(first)]


def compute_threshold(series: ScoreSeries, threshold: ThresholdSpec) -> np.ndarray:
    """
    Per-tick threshold a peak must exceed.

    Fixed mode is a constant. Adaptive mode looks at a trailing window of
    ``window_seconds`` (current tick included):

    - rolling_max:      max(min_score, fraction * trailing max)
    - rolling_mean_std: max(min_score, trailing mean + std_factor * trailing std)

    Args:
        series: Score series
        threshold: FixedThreshold or AdaptiveThreshold settings

    Returns:
        Threshold array, same length as the series
    """
    scores = series.scores

    if isinstance(threshold, FixedThreshold):
        return np.full(len(scores), threshold.value, dtype=float)

    window = max(1, int(round(threshold.window_seconds * series.sample_rate_hz)))

    if threshold.method == "rolling_max":
        level = threshold.fraction * rolling_max(scores, window)
    else:
        mean, std = rolling_mean_std(scores, window)
        level = mean + threshold.std_factor * std

    return np.maximum(level, threshold.min_score)


class PeakDetector:
    """Find step candidates as thresholded local maxima of the score"""

    def __init__(self, threshold: Optional[ThresholdSpec] = None):
        """
        Args:
            threshold: FixedThreshold or AdaptiveThreshold; adaptive defaults
                when omitted
        """
        self.threshold = threshold if threshold is not None else AdaptiveThreshold()

    def detect(self, series: ScoreSeries) -> List[Peak]:
        """
        Detect peaks in a score series.

        Args:
            series: Score series

        Returns:
            Peaks in increasing index order
        """
        maxima = find_local_maxima(series.scores)
        if maxima.size == 0:
            return []

        levels = compute_threshold(series, self.threshold)
        kept = maxima[series.scores[maxima] > levels[maxima]]

        logger.debug(
            f"Peak detection ({self.threshold.mode}): {maxima.size} local maxima, "
            f"{kept.size} above threshold"
        )

        return [
            Peak(index=int(i), timestamp=series.time_of(int(i)), score=float(series.scores[i]))
            for i in kept
        ]
