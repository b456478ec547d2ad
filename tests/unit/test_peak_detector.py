"""
Unit tests for peak detection.

Tests the local maximum rule, plateau tie-breaking, boundary exclusion and
both threshold modes.
"""

import pytest
import numpy as np

from src.step_counter.analysis.peak_detector import (
    PeakDetector,
    find_local_maxima,
    compute_threshold
)
from src.step_counter.config_schema import AdaptiveThreshold, FixedThreshold
from src.step_counter.models import ScoreSeries


def make_scores(values, rate=1.0, start_time=0.0):
    return ScoreSeries(start_time=start_time, sample_rate_hz=rate, scores=np.asarray(values, dtype=float))


class TestFindLocalMaxima:
    """Test the local maximum rule"""

    def test_simple_peaks(self):
        """Strict maxima are found"""
        np.testing.assert_array_equal(find_local_maxima(np.array([0.0, 1.0, 0.0, 2.0, 0.0])), [1, 3])

    def test_plateau_takes_first_index(self):
        """A flat top reports its first tick"""
        np.testing.assert_array_equal(find_local_maxima(np.array([0.0, 2.0, 2.0, 2.0, 0.0])), [1])

    def test_plateau_falling_edge(self):
        """Two-tick plateau followed by a drop"""
        np.testing.assert_array_equal(find_local_maxima(np.array([0.0, 2.0, 2.0, 1.0])), [1])

    def test_boundaries_never_peaks(self):
        """First and last ticks have only one neighbour"""
        assert find_local_maxima(np.array([5.0, 1.0, 5.0])).size == 0
        assert find_local_maxima(np.array([3.0, 2.0, 1.0])).size == 0

    def test_flat_signal(self):
        """No strict side means no peak"""
        assert find_local_maxima(np.zeros(10)).size == 0

    @pytest.mark.parametrize("n", [0, 1, 2])
    def test_too_short(self, n):
        """Fewer than three ticks cannot contain an interior peak"""
        assert find_local_maxima(np.ones(n)).size == 0

    def test_valley_plateau_ignored(self):
        """Flat minima are not maxima"""
        assert find_local_maxima(np.array([3.0, 1.0, 1.0, 3.0])).size == 0


class TestComputeThreshold:
    """Test fixed and adaptive thresholds"""

    def test_fixed(self):
        """Fixed threshold is constant"""
        levels = compute_threshold(make_scores([0.0, 1.0, 0.0]), FixedThreshold(value=0.4))
        np.testing.assert_array_equal(levels, [0.4, 0.4, 0.4])

    def test_rolling_max(self):
        """Fraction of the trailing max, floored at min_score"""
        settings = AdaptiveThreshold(window_seconds=2.0, fraction=0.5, min_score=0.01)
        levels = compute_threshold(make_scores([0.0, 1.0, 0.0, 0.2, 0.0]), settings)
        np.testing.assert_allclose(levels, [0.01, 0.5, 0.5, 0.1, 0.1])

    def test_rolling_mean_std(self):
        """Trailing mean plus k standard deviations"""
        settings = AdaptiveThreshold(method="rolling_mean_std", window_seconds=2.0,
                                     std_factor=1.0, min_score=0.0)
        levels = compute_threshold(make_scores([2.0, 4.0, 6.0]), settings)
        np.testing.assert_allclose(levels, [2.0, 4.0, 6.0])

    def test_window_in_ticks_follows_rate(self):
        """window_seconds is converted with the series rate"""
        settings = AdaptiveThreshold(window_seconds=0.1, fraction=0.5, min_score=0.0)
        levels = compute_threshold(make_scores([4.0, 0.0, 0.0, 0.0], rate=20.0), settings)
        # 0.1 s at 20 Hz is 2 ticks
        np.testing.assert_allclose(levels, [2.0, 2.0, 0.0, 0.0])


class TestPeakDetector:
    """Test the detection stage"""

    def test_peaks_must_exceed_threshold(self):
        """Maxima at or below the threshold are dropped"""
        series = make_scores([0.0, 0.5, 0.0, 0.4, 0.0, 0.9, 0.0])
        peaks = PeakDetector(FixedThreshold(value=0.4)).detect(series)

        assert [p.index for p in peaks] == [1, 5]

    def test_adaptive_rejects_small_ripple(self):
        """A ripple next to a strong step is ignored"""
        series = make_scores([0.0, 2.0, 0.0, 0.3, 0.0, 2.0, 0.0])
        peaks = PeakDetector(AdaptiveThreshold(window_seconds=3.0, fraction=0.3)).detect(series)

        assert [p.index for p in peaks] == [1, 5]

    def test_peak_fields(self):
        """Peaks carry tick index, time and score"""
        series = make_scores([0.0, 1.5, 0.0], rate=25.0, start_time=100.0)
        peak = PeakDetector(FixedThreshold(value=0.1)).detect(series)[0]

        assert peak.index == 1
        assert peak.timestamp == pytest.approx(100.04)
        assert peak.score == 1.5

    def test_default_threshold_is_adaptive(self):
        """Omitting the threshold uses adaptive defaults"""
        assert PeakDetector().threshold.mode == "adaptive"

    def test_silent_scores(self):
        """Numerical dust never crosses the floor"""
        series = make_scores(np.abs(np.random.default_rng(0).normal(0, 1e-12, 50)), rate=25.0)
        assert PeakDetector().detect(series) == []
