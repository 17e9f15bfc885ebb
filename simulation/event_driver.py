"""
Discrete Event Driver - simulated clock and time-ordered dispatch queue.

Events are kept in a heap keyed by (due tick, submission sequence), so events
due on the same tick are dispatched in the order they were submitted. Every
dispatch pops exactly one step from the front of the due event's chain and
hands it to that step's recipient; the recipient decides whether and when the
event comes back.
"""
import heapq
import itertools
import logging
from typing import List, Optional, Tuple

from interfaces.event_driver_interface import IEventDriver, EventDriverError
from simulation.event import Event


logger = logging.getLogger(__name__)


class DiscreteEventDriver(IEventDriver):
    """
    Single-threaded discrete-event driver.

    **Threading Model**: not thread-safe. Recipients call schedule_event()
    re-entrantly from within a dispatch, which is safe because dispatch has
    already removed the event from the queue.
    """

    def __init__(self, start_time: int = 0):
        self._current_time = start_time
        self._queue: List[Tuple[int, int, Event]] = []
        self._sequence = itertools.count()
        self._dispatch_count = 0
        self._completed_event_count = 0

    @property
    def current_time(self) -> int:
        return self._current_time

    @property
    def pending_event_count(self) -> int:
        return len(self._queue)

    @property
    def completed_event_count(self) -> int:
        """Events whose chain ran out."""
        return self._completed_event_count

    @property
    def dispatch_count(self) -> int:
        return self._dispatch_count

    def schedule_event(self, event: Event, delay: int = 0) -> None:
        if delay < 0:
            raise EventDriverError(f"Cannot schedule {event!r} {-delay} ticks in the past")
        due = self._current_time + delay
        heapq.heappush(self._queue, (due, next(self._sequence), event))

    def next_event_time(self) -> Optional[int]:
        """Due tick of the earliest pending event, or None if the queue is empty."""
        return self._queue[0][0] if self._queue else None

    def step(self) -> bool:
        if not self._queue:
            return False

        due, _, event = heapq.heappop(self._queue)
        self._current_time = max(self._current_time, due)

        if event.is_empty():
            self._completed_event_count += 1
            logger.debug("[t=%d] %r completed", self._current_time, event)
            return True

        task, recipient = event.pop_next_task()
        self._dispatch_count += 1
        logger.debug("[t=%d] dispatching %r from %r to %s",
                     self._current_time, task, event, recipient.__class__.__name__)
        recipient.handle_task_event(task, event)
        return True

    def run(self, max_ticks: Optional[int] = None) -> int:
        dispatched_before = self._dispatch_count
        while self._queue:
            if max_ticks is not None and self._queue[0][0] > max_ticks:
                logger.info("Stopping at t=%d: next event due at t=%d exceeds limit %d",
                            self._current_time, self._queue[0][0], max_ticks)
                break
            self.step()
        return self._dispatch_count - dispatched_before
