"""Signal processing utilities for step detection"""
from functools import lru_cache

import numpy as np
from scipy import signal


@lru_cache(maxsize=32)
def design_bandpass(sample_rate_hz: float,
                    low_cutoff_hz: float,
                    high_cutoff_hz: float,
                    order: int = 2) -> np.ndarray:
    """
    Design a Butterworth band-pass filter as second-order sections.

    Coefficients are a pure function of the arguments and are cached
    process-wide. The returned array is read-only so the cache can be
    shared between concurrent runs.

    Args:
        sample_rate_hz: Sampling rate of the series to be filtered (Hz)
        low_cutoff_hz: Lower -3 dB edge (Hz)
        high_cutoff_hz: Upper -3 dB edge (Hz), below Nyquist
        order: Butterworth order of each band edge

    Returns:
        SOS array of shape (n_sections, 6)
    """
    sos = signal.butter(order, [low_cutoff_hz, high_cutoff_hz],
                        btype='bandpass', output='sos', fs=sample_rate_hz)
    sos.setflags(write=False)
    return sos


def compute_magnitude(values: np.ndarray) -> np.ndarray:
    """
    Reduce per-axis acceleration to Euclidean magnitude.

    Args:
        values: Array of shape (n, k); k = 1 is returned unchanged

    Returns:
        Magnitude array of shape (n,)
    """
    if values.ndim == 1:
        return values.astype(float)
    if values.shape[1] == 1:
        return values[:, 0].astype(float)
    return np.sqrt(np.sum(values ** 2, axis=1))


def sosfiltfilt_padded(sos: np.ndarray, data: np.ndarray) -> np.ndarray:
    """
    Zero-phase filtering that accepts series of any length >= 1.

    scipy pads with an odd extension of 3 x ntaps samples by default and
    refuses shorter inputs; the pad is clamped to len(data) - 1 instead.
    """
    # writable copy: the cached coefficients are read-only
    sos = np.array(sos, dtype=float)
    n_sections = sos.shape[0]
    ntaps = 2 * n_sections + 1
    ntaps -= min((sos[:, 2] == 0).sum(), (sos[:, 5] == 0).sum())
    padlen = min(3 * ntaps, len(data) - 1)
    return signal.sosfiltfilt(sos, data, padlen=padlen)


def trailing_windows(data: np.ndarray, size: int) -> np.ndarray:
    """
    Trailing windows ending at every index, left-padded with the first value.

    Row i holds data[i - size + 1 .. i]; for i < size - 1 the missing history
    repeats data[0].

    Args:
        data: 1D array
        size: Window length in samples

    Returns:
        Array of shape (len(data), size)
    """
    padded = np.concatenate([np.full(size - 1, data[0]), data])
    return np.lib.stride_tricks.sliding_window_view(padded, size)


def rolling_max(data: np.ndarray, size: int) -> np.ndarray:
    """Trailing maximum over the last ``size`` samples, current one included"""
    if len(data) == 0:
        return data.copy()
    return trailing_windows(data, size).max(axis=1)


def rolling_mean_std(data: np.ndarray, size: int):
    """
    Trailing mean and standard deviation over the last ``size`` samples.

    The warm-up region only uses the samples seen so far, so early ticks are
    not biased by padding.

    Returns:
        Tuple of (mean, std) arrays, same length as data
    """
    n = len(data)
    if n == 0:
        return data.copy(), data.copy()

    csum = np.concatenate([[0.0], np.cumsum(data)])
    csum_sq = np.concatenate([[0.0], np.cumsum(data ** 2)])

    end = np.arange(1, n + 1)
    start = np.maximum(0, end - size)
    count = end - start

    mean = (csum[end] - csum[start]) / count
    mean_sq = (csum_sq[end] - csum_sq[start]) / count
    var = np.clip(mean_sq - mean ** 2, 0.0, None)
    return mean, np.sqrt(var)
