"""Data model for windows, intermediate series and step events"""
import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .exceptions import InvalidInputError

Timestamp = Union[float, int, dt.datetime]
Acceleration = Union[float, Sequence[float]]


def _to_seconds(timestamp: Timestamp) -> float:
    if isinstance(timestamp, dt.datetime):
        return timestamp.timestamp()
    return float(timestamp)


@dataclass(frozen=True)
class Sample:
    """One raw accelerometer reading.

    Attributes:
        timestamp: Unix time in seconds (sub-second precision) or a datetime
        acceleration: 3-axis vector, or a single pre-reduced magnitude
    """
    timestamp: Timestamp
    acceleration: Acceleration


@dataclass(frozen=True)
class Window:
    """Ordered batch of samples submitted for one step counting run.

    Stored column-wise: ``timestamps`` has shape (n,) in seconds and
    ``acceleration`` has shape (n, k) with k = 3 for raw axes or k = 1 for a
    device that already reports magnitude. The pipeline only reads a Window.
    """
    timestamps: np.ndarray
    acceleration: np.ndarray

    def __post_init__(self):
        # frozen: coerce array-likes in place of plain assignment
        object.__setattr__(self, "timestamps", np.asarray(self.timestamps, dtype=float))
        object.__setattr__(self, "acceleration", np.asarray(self.acceleration, dtype=float))
        if self.timestamps.ndim != 1:
            raise InvalidInputError(
                "timestamps must be one-dimensional",
                shape=self.timestamps.shape
            )
        if self.acceleration.ndim != 2 or self.acceleration.shape[0] != self.timestamps.shape[0]:
            raise InvalidInputError(
                "acceleration must have one row per timestamp",
                timestamps_shape=self.timestamps.shape,
                acceleration_shape=self.acceleration.shape
            )

    def __len__(self) -> int:
        return int(self.timestamps.shape[0])

    @property
    def n_axes(self) -> int:
        return int(self.acceleration.shape[1])

    @property
    def duration(self) -> float:
        """Time span covered by the window (seconds)"""
        if len(self) < 2:
            return 0.0
        return float(self.timestamps[-1] - self.timestamps[0])

    @classmethod
    def from_arrays(cls, timestamps: Any, acceleration: Any) -> 'Window':
        """
        Build a window from array-likes.

        Args:
            timestamps: Sequence of n timestamps (seconds)
            acceleration: Array of shape (n, 3), (n, 1) or (n,)

        Returns:
            Window holding float64 copies of the inputs
        """
        ts = np.array(timestamps, dtype=float)
        acc = np.array(acceleration, dtype=float)
        if acc.ndim == 1:
            acc = acc.reshape(-1, 1)
        return cls(timestamps=ts, acceleration=acc)

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> 'Window':
        """Build a window from Sample objects; all samples must share one axis count"""
        samples = list(samples)
        timestamps = [_to_seconds(s.timestamp) for s in samples]
        rows = [np.atleast_1d(np.asarray(s.acceleration, dtype=float)) for s in samples]

        widths = {row.shape[0] for row in rows}
        if len(widths) > 1:
            raise InvalidInputError("samples mix different axis counts", axis_counts=sorted(widths))

        width = widths.pop() if widths else 3
        acc = np.vstack(rows) if rows else np.empty((0, width))
        return cls.from_arrays(timestamps, acc)

    @classmethod
    def from_dataframe(cls,
                       frame: pd.DataFrame,
                       time_column: str = "timestamp",
                       axis_columns: Tuple[str, ...] = ("x", "y", "z")) -> 'Window':
        """
        Build a window from a pandas DataFrame.

        Args:
            frame: One row per sample
            time_column: Column with datetimes or numeric Unix seconds
            axis_columns: Acceleration columns, one per axis (a single column
                for pre-reduced magnitude)

        Returns:
            Window in row order of the frame
        """
        missing = [c for c in (time_column, *axis_columns) if c not in frame.columns]
        if missing:
            raise InvalidInputError("dataframe missing columns", missing=missing)

        times = frame[time_column]
        if pd.api.types.is_numeric_dtype(times):
            seconds = times.to_numpy(dtype=float)
        else:
            parsed = pd.to_datetime(times, utc=True)
            epoch = pd.Timestamp(0, tz="UTC")
            seconds = ((parsed - epoch) / pd.Timedelta(seconds=1)).to_numpy(dtype=float)

        acc = frame[list(axis_columns)].to_numpy(dtype=float)
        return cls.from_arrays(seconds, acc)


@dataclass(frozen=True)
class ResampledSeries:
    """Acceleration magnitude on a uniform grid; tick i sits at start_time + i / sample_rate_hz"""
    start_time: float
    sample_rate_hz: float
    values: np.ndarray

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def tick_times(self) -> np.ndarray:
        return self.start_time + np.arange(len(self)) / self.sample_rate_hz


@dataclass(frozen=True)
class FilteredSeries:
    """Band-passed magnitude, one value per resampled tick"""
    start_time: float
    sample_rate_hz: float
    values: np.ndarray

    def __len__(self) -> int:
        return int(self.values.shape[0])


@dataclass(frozen=True)
class ScoreSeries:
    """Step likelihood score, one scalar per resampled tick"""
    start_time: float
    sample_rate_hz: float
    scores: np.ndarray

    def __len__(self) -> int:
        return int(self.scores.shape[0])

    def time_of(self, index: int) -> float:
        return self.start_time + index / self.sample_rate_hz


@dataclass(frozen=True)
class Peak:
    """Candidate step event before debouncing"""
    index: int
    timestamp: float
    score: float


@dataclass(frozen=True)
class StepEvent:
    """Final output unit: one detected step"""
    timestamp: float
    confidence: Optional[float] = None


@dataclass
class StepCountResult:
    """Steps found in one window plus per-stage diagnostics"""
    steps: List[StepEvent] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.steps)

    @property
    def timestamps(self) -> List[float]:
        return [step.timestamp for step in self.steps]
