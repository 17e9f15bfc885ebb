"""
Tests for Event chains and the DiscreteEventDriver.

Tests focus on:
- Chain ordering (single and bulk prepends)
- Time ordering and FIFO tie-break between events
- Delays, completion counting and the tick limit
"""
import pytest
from unittest.mock import Mock

from interfaces.event_driver_interface import EventDriverError
from interfaces.task_scheduler_interface import ITaskRecipient, Task
from simulation.event import Event
from simulation.event_driver import DiscreteEventDriver


class RecordingRecipient(ITaskRecipient):
    """Logs each dispatch and hands the event back after a fixed delay."""

    def __init__(self, driver, log, name, delay=0):
        self.driver = driver
        self.log = log
        self.name = name
        self.delay = delay

    def handle_task_event(self, task, event):
        self.log.append((self.driver.current_time, self.name, task.location))
        self.driver.schedule_event(event, self.delay)


class TestEvent:

    def test_prepend_task_puts_step_first(self):
        recipient = Mock(spec=ITaskRecipient)
        event = Event()
        event.prepend_task(Task.move_to((1, 0)), recipient)
        event.prepend_task(Task.move_to((0, 0)), recipient)

        assert len(event) == 2
        task, owner = event.pop_next_task()
        assert task.location == (0, 0)
        assert owner is recipient

    def test_prepend_tasks_keeps_forward_order_ahead_of_existing_chain(self):
        recipient = Mock(spec=ITaskRecipient)
        event = Event()
        event.prepend_task(Task.move_to((9, 9)), recipient)
        event.prepend_tasks([(Task.move_to((x, 0)), recipient) for x in range(3)])

        order = []
        while not event.is_empty():
            order.append(event.pop_next_task()[0].location)
        assert order == [(0, 0), (1, 0), (2, 0), (9, 9)]

    def test_prepend_tasks_accepts_generator(self):
        recipient = Mock(spec=ITaskRecipient)
        event = Event()
        event.prepend_tasks((Task.move_to((x, 1)), recipient) for x in range(2))
        assert [step[0].location for step in event] == [(0, 1), (1, 1)]

    def test_peek_and_empty(self):
        event = Event(label="order-1")
        assert event.peek_next_task() is None
        assert event.is_empty()
        assert event.label == "order-1"
        with pytest.raises(IndexError):
            event.pop_next_task()

    def test_events_get_distinct_ids(self):
        assert Event().event_id != Event().event_id


class TestDiscreteEventDriver:

    @pytest.fixture
    def driver(self):
        return DiscreteEventDriver()

    def test_runs_chain_front_to_back(self, driver):
        log = []
        recipient = RecordingRecipient(driver, log, "r", delay=2)
        event = Event()
        event.prepend_tasks([(Task.move_to((x, 0)), recipient) for x in range(3)])

        driver.schedule_event(event)
        dispatched = driver.run()

        assert dispatched == 3
        assert log == [(0, "r", (0, 0)), (2, "r", (1, 0)), (4, "r", (2, 0))]
        assert driver.current_time == 6
        assert driver.completed_event_count == 1
        assert driver.pending_event_count == 0

    def test_same_tick_events_dispatch_in_submission_order(self, driver):
        log = []
        first = RecordingRecipient(driver, log, "first", delay=1)
        second = RecordingRecipient(driver, log, "second", delay=1)
        a, b = Event(), Event()
        a.prepend_task(Task.move_to((0, 0)), first)
        a.append_task(Task.move_to((0, 1)), first)
        b.prepend_task(Task.move_to((1, 0)), second)
        b.append_task(Task.move_to((1, 1)), second)

        driver.schedule_event(a)
        driver.schedule_event(b)
        driver.run()

        assert [entry[1] for entry in log] == ["first", "second", "first", "second"]
        assert [entry[0] for entry in log] == [0, 0, 1, 1]

    def test_earlier_due_time_wins(self, driver):
        log = []
        recipient = RecordingRecipient(driver, log, "r")
        late, early = Event(), Event()
        late.prepend_task(Task.move_to((5, 5)), recipient)
        early.prepend_task(Task.move_to((1, 1)), recipient)

        driver.schedule_event(late, 5)
        driver.schedule_event(early, 1)
        driver.run()

        assert log == [(1, "r", (1, 1)), (5, "r", (5, 5))]

    def test_empty_event_counts_as_completed(self, driver):
        driver.schedule_event(Event())
        assert driver.step() is True
        assert driver.completed_event_count == 1
        assert driver.step() is False

    def test_negative_delay_rejected(self, driver):
        with pytest.raises(EventDriverError):
            driver.schedule_event(Event(), -1)

    def test_run_stops_at_tick_limit(self, driver):
        log = []
        recipient = RecordingRecipient(driver, log, "r", delay=10)
        event = Event()
        event.prepend_tasks([(Task.move_to((x, 0)), recipient) for x in range(5)])

        driver.schedule_event(event)
        driver.run(max_ticks=25)

        assert [entry[0] for entry in log] == [0, 10, 20]
        assert driver.pending_event_count == 1
        assert driver.next_event_time() == 30

    def test_recipient_that_drops_event_ends_chain(self, driver):
        recipient = Mock(spec=ITaskRecipient)
        event = Event()
        event.prepend_tasks([(Task.move_to((0, 0)), recipient), (Task.move_to((1, 0)), recipient)])

        driver.schedule_event(event)
        driver.run()

        recipient.handle_task_event.assert_called_once()
        assert len(event) == 1
        assert driver.completed_event_count == 0
