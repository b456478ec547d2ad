"""Public entry points for counting steps in accelerometer windows"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence, Union

from .config_schema import StepCounterConfig
from .constants import DEFAULT_MAX_WORKERS
from .models import StepCountResult, StepEvent, Window
from .pipeline import PipelineExecutor

logger = logging.getLogger(__name__)

_executor = PipelineExecutor()


def count_steps_detailed(window: Window, config: Optional[StepCounterConfig] = None) -> StepCountResult:
    """
    Run the full pipeline on one window and keep per-stage diagnostics.

    Args:
        window: Accelerometer samples
        config: Configuration; defaults to StepCounterConfig()

    Returns:
        StepCountResult
    """
    return _executor.execute(window, config)


def count_steps(window: Window, config: Optional[StepCounterConfig] = None) -> List[StepEvent]:
    """
    Detect steps in one window.

    The pipeline keeps no memory between calls. When a live stream is cut
    into windows, overlap them so steps at the cut are not lost.

    Args:
        window: Accelerometer samples
        config: Configuration; defaults to StepCounterConfig()

    Returns:
        Step events in strictly increasing time order; len() is the count
    """
    return count_steps_detailed(window, config).steps


def count_steps_many(windows: Sequence[Window],
                     config: Optional[StepCounterConfig] = None,
                     max_workers: int = DEFAULT_MAX_WORKERS,
                     return_exceptions: bool = False) -> List[Union[StepCountResult, Exception]]:
    """
    Process independent windows in parallel.

    Windows share nothing but the read-only configuration and the filter
    coefficient cache, so no coordination is needed.

    Args:
        windows: Windows to process (e.g. different users or time ranges)
        config: Configuration applied to every window
        max_workers: Thread pool size
        return_exceptions: Put a failed window's exception in its result slot
            instead of raising it

    Returns:
        One StepCountResult (or exception) per window, in input order
    """
    config = config if config is not None else StepCounterConfig()
    results: List[Union[StepCountResult, Exception, None]] = [None] * len(windows)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            pool.submit(_executor.execute, window, config): i
            for i, window in enumerate(windows)
        }

        for future in as_completed(futures):
            i = futures[future]
            try:
                results[i] = future.result()
            except Exception as e:
                if not return_exceptions:
                    raise
                logger.warning(f"Window {i} failed: {e}")
                results[i] = e

    return results
