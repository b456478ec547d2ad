"""
Centralized constants for the wrist step counting pipeline.

Every tuning default used by the pipeline lives here so it can be overridden
through StepCounterConfig instead of being hard-coded in algorithm code.

Version: 1.0.0
Date: 2026-10-19
"""

# ============================================================================
# Resampling Constants
# ============================================================================

DEFAULT_SAMPLE_RATE_HZ = 25.0  # Uniform rate the raw stream is resampled to
MIN_SAMPLES_FOR_INTERPOLATION = 2  # Linear interpolation needs two anchors
TICK_ROUNDING_TOLERANCE = 1e-9  # Absorbs float error in (end - start) * rate

# ============================================================================
# Filter Constants
# ============================================================================

# Gait band: 0.5-3 Hz is 30-180 steps/min
DEFAULT_LOW_CUTOFF_HZ = 0.5
DEFAULT_HIGH_CUTOFF_HZ = 3.0
DEFAULT_FILTER_ORDER = 2  # Butterworth order per band edge
MAX_FILTER_ORDER = 8
NYQUIST_FRACTION = 0.5

# ============================================================================
# Scoring Constants
# ============================================================================

DEFAULT_SCORE_MODE = "rectified"
DEFAULT_SCORE_WINDOW_SIZE = 5  # Trailing ticks used by contrast/variance terms
DEFAULT_VARIANCE_PENALTY = 0.0  # 0 disables the shake penalty

# ============================================================================
# Peak Detection Constants
# ============================================================================

DEFAULT_THRESHOLD_METHOD = "rolling_max"
DEFAULT_THRESHOLD_WINDOW_SEC = 2.0  # Trailing window for adaptive statistics
DEFAULT_THRESHOLD_FRACTION = 0.3  # Fraction of the trailing max score
DEFAULT_THRESHOLD_STD_FACTOR = 1.2  # Multiplier for mean + k*std thresholds
DEFAULT_MIN_SCORE = 0.01  # Absolute floor, keeps flat signals silent

# ============================================================================
# Debouncing Constants
# ============================================================================

DEFAULT_MIN_STEP_INTERVAL_MS = 250.0  # 240 steps/min cadence ceiling
DEFAULT_DEBOUNCE_POLICY = "first"
MS_PER_SECOND = 1000.0

# ============================================================================
# Evaluation Constants
# ============================================================================

# Precision buckets reported by the validation harness
PRECISION_BUCKET_HIGH = 0.80
PRECISION_BUCKET_MEDIUM = 0.50
PRECISION_BUCKET_LOW = 0.20

# ============================================================================
# Parallel Processing Constants
# ============================================================================

DEFAULT_MAX_WORKERS = 4
