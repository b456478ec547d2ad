"""Validation utilities for incoming sensor windows"""
import logging

import numpy as np

from ..constants import MIN_SAMPLES_FOR_INTERPOLATION
from ..exceptions import (
    InsufficientDataError,
    InvalidInputError,
    NonFiniteValueError,
    NonMonotonicTimestampsError,
)
from ..models import Window

logger = logging.getLogger(__name__)


def validate_sample_count(window: Window,
                          min_samples: int = MIN_SAMPLES_FOR_INTERPOLATION) -> bool:
    """
    Validate the window has enough samples to interpolate.

    Raises:
        InsufficientDataError: If fewer than min_samples samples are present
    """
    if len(window) < min_samples:
        raise InsufficientDataError(
            "window has too few samples for interpolation",
            required=min_samples,
            actual=len(window)
        )
    return True


def validate_finite(window: Window) -> bool:
    """
    Validate that no timestamp or acceleration component is NaN or infinite.

    Raises:
        NonFiniteValueError: Naming the offending field and how many values
    """
    bad_times = int(np.sum(~np.isfinite(window.timestamps)))
    if bad_times:
        raise NonFiniteValueError("timestamps", bad_times)

    bad_acc = int(np.sum(~np.isfinite(window.acceleration)))
    if bad_acc:
        raise NonFiniteValueError("acceleration", bad_acc)

    return True


def validate_monotonic(window: Window) -> bool:
    """
    Validate timestamps are strictly increasing.

    Raises:
        NonMonotonicTimestampsError: At the first duplicate or decreasing sample
    """
    steps = np.diff(window.timestamps)
    bad = np.flatnonzero(steps <= 0)
    if bad.size:
        i = int(bad[0]) + 1
        raise NonMonotonicTimestampsError(
            i, float(window.timestamps[i - 1]), float(window.timestamps[i])
        )
    return True


def validate_window(window: Window) -> bool:
    """Run every window check in order: count, finiteness, ordering"""
    validate_sample_count(window)
    validate_finite(window)
    validate_monotonic(window)

    if window.n_axes not in (1, 3):
        logger.warning(f"Window has {window.n_axes} axes; magnitude is taken over all of them")

    return True


def validate_sample_rate(sample_rate_hz: float) -> bool:
    """
    Validate a sampling rate is positive and finite.

    Raises:
        InvalidInputError: If the rate is not > 0
    """
    if not np.isfinite(sample_rate_hz) or sample_rate_hz <= 0:
        raise InvalidInputError(
            "sample rate must be positive",
            field="target_sample_rate_hz",
            value=sample_rate_hz
        )
    return True
