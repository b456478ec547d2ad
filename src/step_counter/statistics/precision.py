"""Step count precision against annotated ground truth"""
from typing import Iterable, Mapping

import pandas as pd

from ..constants import PRECISION_BUCKET_HIGH, PRECISION_BUCKET_MEDIUM, PRECISION_BUCKET_LOW
from ..exceptions import InvalidInputError


def count_precision(expected: int, actual: int) -> float:
    """
    Ratio of the smaller to the larger count, so over- and under-counting are
    penalised alike.

    Args:
        expected: Annotated step count
        actual: Detected step count

    Returns:
        Precision in [0, 1]; 1.0 when both counts are zero
    """
    if expected < 0 or actual < 0:
        raise InvalidInputError("step counts must be non-negative", expected=expected, actual=actual)
    if expected == actual:
        return 1.0
    return min(expected, actual) / max(expected, actual)


def precision_bucket(precision: float) -> str:
    """Label a precision value with its validation bucket"""
    if precision >= PRECISION_BUCKET_HIGH:
        return ">=80%"
    if precision >= PRECISION_BUCKET_MEDIUM:
        return ">=50%"
    if precision >= PRECISION_BUCKET_LOW:
        return ">=20%"
    return "<20%"


def summarize_precision(records: Iterable[Mapping]) -> pd.DataFrame:
    """
    Build a per-recording precision report.

    Args:
        records: Mappings with 'name', 'expected' and 'actual' keys

    Returns:
        DataFrame sorted by name with columns
        name, expected, actual, precision, bucket
    """
    frame = pd.DataFrame(list(records), columns=["name", "expected", "actual"])
    frame["precision"] = [
        count_precision(int(e), int(a)) for e, a in zip(frame["expected"], frame["actual"])
    ]
    frame["bucket"] = frame["precision"].map(precision_bucket)
    return frame.sort_values("name").reset_index(drop=True)
