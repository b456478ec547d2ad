"""Temporal debouncing of step candidates"""
import logging
from typing import List, Sequence, TypeVar

from ..constants import DEFAULT_MIN_STEP_INTERVAL_MS, DEFAULT_DEBOUNCE_POLICY, MS_PER_SECOND
from ..exceptions import ConfigValidationError
from ..models import Peak, StepEvent

logger = logging.getLogger(__name__)

DEBOUNCE_POLICIES = ("first", "strongest")

Event = TypeVar("Event", Peak, StepEvent)


def _strength(event) -> float:
    value = getattr(event, "score", None)
    if value is None:
        value = getattr(event, "confidence", None)
    return float("-inf") if value is None else value


def debounce(events: Sequence[Event],
             min_interval_ms: float = DEFAULT_MIN_STEP_INTERVAL_MS,
             policy: str = DEFAULT_DEBOUNCE_POLICY) -> List[Event]:
    """
    Drop events closer than the minimum step interval to the last accepted one.

    Single left-to-right scan. An event is accepted when its timestamp minus
    the last accepted timestamp exceeds the interval.

    - 'first':     the earlier event of a close pair is kept
    - 'strongest': a close follower with a higher score replaces the last
                   accepted event

    Works on Peaks and StepEvents alike; running it on its own output returns
    the same sequence.

    Args:
        events: Events ordered by timestamp
        min_interval_ms: Minimum spacing between accepted events (ms)
        policy: 'first' or 'strongest'

    Returns:
        Accepted events, strictly increasing in time
    """
    if policy not in DEBOUNCE_POLICIES:
        raise ConfigValidationError("debounce_policy", policy, f"must be one of {DEBOUNCE_POLICIES}")

    min_interval_s = min_interval_ms / MS_PER_SECOND
    accepted: List[Event] = []

    for event in events:
        if not accepted:
            accepted.append(event)
            continue

        last = accepted[-1]
        if event.timestamp - last.timestamp > min_interval_s:
            accepted.append(event)
            continue

        if policy == "strongest" and _strength(event) > _strength(last):
            # replacing keeps the spacing to the event before `last`, which
            # only grows because `event` is later
            accepted[-1] = event

    return accepted


def to_step_events(peaks: Sequence[Peak]) -> List[StepEvent]:
    """Convert accepted peaks into output step events (confidence = score)"""
    return [StepEvent(timestamp=p.timestamp, confidence=p.score) for p in peaks]


class TemporalDebouncer:
    """Enforce a minimum physiologically plausible interval between steps"""

    def __init__(self,
                 min_interval_ms: float = DEFAULT_MIN_STEP_INTERVAL_MS,
                 policy: str = DEFAULT_DEBOUNCE_POLICY):
        self.min_interval_ms = min_interval_ms
        self.policy = policy

    def apply(self, peaks: Sequence[Peak]) -> List[StepEvent]:
        kept = debounce(peaks, self.min_interval_ms, self.policy)

        logger.debug(
            f"Debounce ({self.policy}, {self.min_interval_ms} ms): "
            f"{len(peaks)} peaks -> {len(kept)} steps"
        )

        return to_step_events(kept)
