"""
Interface for the EventDriver - owns simulated time and the pending event queue.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from simulation.event import Event


class EventDriverError(Exception):
    """Raised when an event cannot be scheduled."""
    pass


class IEventDriver(ABC):
    """
    Interface for the discrete-event driver.

    Responsibilities:
    - Keep events ordered by due time (FIFO among events due at the same tick)
    - Dispatch the front task of each due event to its recipient
    - Advance simulated time in whole ticks

    **Threading Model**: single-threaded; recipients call schedule_event()
    re-entrantly from inside dispatch.
    """

    @abstractmethod
    def schedule_event(self, event: "Event", delay: int = 0) -> None:
        """
        Submit an event for dispatch.

        Args:
            event: Event to dispatch
            delay: Ticks to wait before dispatch (0 = current tick)

        Raises:
            EventDriverError: If delay is negative
        """
        pass

    @property
    @abstractmethod
    def current_time(self) -> int:
        """Current simulated time in ticks."""
        pass

    @abstractmethod
    def step(self) -> bool:
        """
        Dispatch the next due event.

        Returns:
            bool: False when the queue is empty
        """
        pass

    @abstractmethod
    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Dispatch events until the queue drains or max_ticks is passed.

        Returns:
            int: Number of dispatches performed
        """
        pass

    @property
    @abstractmethod
    def pending_event_count(self) -> int:
        """Number of events waiting in the queue."""
        pass

    @property
    @abstractmethod
    def completed_event_count(self) -> int:
        """Number of events whose chain ran out and were dropped from the queue."""
        pass
