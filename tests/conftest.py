"""
Pytest configuration and shared fixtures for step counter tests.

Provides synthetic accelerometer windows and configuration dictionaries used
across unit and integration tests.
"""

import pytest
import numpy as np
import yaml

from src.step_counter.models import Window


SAMPLE_RATE_HZ = 25.0
TICK_S = 1.0 / SAMPLE_RATE_HZ
GRAVITY = 9.81

# Bump centres sit exactly on the 25 Hz tick grid (0.48 s = tick 12)
STEP_CENTERS = 0.48 + np.arange(10)


# ============================================================================
# Signal Builders
# ============================================================================

def gaussian_bumps(t, centers, amplitude=3.0, width=0.08):
    """Sum of Gaussian bumps, one per step"""
    signal = np.zeros_like(t, dtype=float)
    for c in centers:
        signal += amplitude * np.exp(-0.5 * ((t - c) / width) ** 2)
    return signal


def wrist_window(t, bumps, noise_std=0.0, seed=42):
    """3-axis window: constant x/y, gravity plus bumps on z"""
    acc = np.column_stack([
        np.full_like(t, 0.3, dtype=float),
        np.full_like(t, 0.2, dtype=float),
        GRAVITY + bumps
    ])
    if noise_std:
        rng = np.random.default_rng(seed)
        acc = acc + rng.normal(0.0, noise_std, acc.shape)
    return Window.from_arrays(t, acc)


def uniform_times(duration_s=10.0, rate_hz=SAMPLE_RATE_HZ):
    """Evenly spaced timestamps covering [0, duration]"""
    n = int(round(duration_s * rate_hz)) + 1
    return np.arange(n) / rate_hz


# ============================================================================
# Window Fixtures
# ============================================================================

@pytest.fixture
def walking_window():
    """10 s at 25 Hz with 10 steps, one per second"""
    t = uniform_times()
    return wrist_window(t, gaussian_bumps(t, STEP_CENTERS))


@pytest.fixture
def double_bump_window():
    """Walking window with an extra bump 100 ms after the fourth step"""
    t = uniform_times()
    centers = np.append(STEP_CENTERS, STEP_CENTERS[3] + 0.1)
    return wrist_window(t, gaussian_bumps(t, centers))


@pytest.fixture
def noisy_walking_window():
    """Walking window with sensor noise on every axis"""
    t = uniform_times()
    return wrist_window(t, gaussian_bumps(t, STEP_CENTERS), noise_std=0.05)


@pytest.fixture
def irregular_walking_window():
    """Walking signal sampled at jittered ~50 Hz timestamps"""
    rng = np.random.default_rng(7)
    t = np.concatenate([[0.0], np.cumsum(rng.uniform(0.015, 0.025, 600))])
    t = t[t <= 10.0]
    return wrist_window(t, gaussian_bumps(t, STEP_CENTERS))


@pytest.fixture
def silent_window():
    """Device lying still: constant acceleration, no noise"""
    t = uniform_times()
    return wrist_window(t, np.zeros_like(t))


@pytest.fixture
def single_sample_window():
    """Window with only one sample"""
    return Window.from_arrays([0.0], [[0.0, 0.0, GRAVITY]])


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def config_dict():
    """Complete configuration dictionary with an adaptive threshold"""
    return {
        "target_sample_rate_hz": 25.0,
        "filter_low_cutoff_hz": 0.5,
        "filter_high_cutoff_hz": 3.0,
        "filter_order": 2,
        "score_mode": "rectified",
        "score_window_size": 5,
        "variance_penalty": 0.0,
        "peak_threshold": {
            "mode": "adaptive",
            "method": "rolling_max",
            "window_seconds": 2.0,
            "fraction": 0.3,
            "std_factor": 1.2,
            "min_score": 0.01
        },
        "min_step_interval_ms": 250.0,
        "debounce_policy": "first"
    }


@pytest.fixture
def temp_yaml_config(tmp_path, config_dict):
    """Create temporary YAML config file"""
    config_file = tmp_path / "step_config.yaml"
    with open(config_file, 'w') as f:
        yaml.dump(config_dict, f)
    return config_file


# ============================================================================
# Utility Functions
# ============================================================================

def step_times(steps):
    """Timestamps of a list of StepEvents as an array"""
    return np.array([s.timestamp for s in steps])


def assert_close(actual, expected, rtol=1e-5, atol=1e-8):
    """Assert arrays/values are approximately equal"""
    np.testing.assert_allclose(actual, expected, rtol=rtol, atol=atol)
