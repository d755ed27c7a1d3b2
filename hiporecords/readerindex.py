"""Event bookkeeping across the records of a HIPO file."""

from __future__ import annotations

import bisect


class ReaderIndex:
    """Maps a running event number onto a record and an event inside it.

    ``record_events`` holds cumulative event counts: a leading 0 followed by
    the running total after each record.  ``event_number``,
    ``record_number`` and ``record_event_number`` track the current
    position.
    """

    def __init__(self) -> None:
        self.record_events: list[int] = []
        self.record_positions: list[int] = []
        self.record_number = 0
        self.event_number = 0
        self.record_event_number = 0

    def add_size(self, size: int) -> None:
        """Register a record holding *size* events."""
        if not self.record_events:
            self.record_events.extend((0, size))
        else:
            self.record_events.append(self.record_events[-1] + size)

    def add_position(self, position: int) -> None:
        """Register the file offset of the next record."""
        self.record_positions.append(position)

    def position(self, index: int) -> int:
        """File offset of record *index*."""
        return self.record_positions[index]

    def max_events(self) -> int:
        """Total number of events in all records."""
        return self.record_events[-1] if self.record_events else 0

    def record_count(self) -> int:
        """Length of the cumulative table: the number of records plus one."""
        return len(self.record_events)

    def can_advance(self) -> bool:
        """True while there are events after the current one."""
        return self.event_number < self.max_events() - 1

    def can_advance_in_record(self) -> bool:
        """True if the next event lies in the current record."""
        return self.event_number < self.record_events[self.record_number + 1] - 1

    def advance(self) -> bool:
        """Move to the next event, crossing into the next record when needed."""
        if not self.record_events:
            return False
        if self.event_number + 1 < self.record_events[self.record_number + 1]:
            self.event_number += 1
            self.record_event_number += 1
            return True
        if len(self.record_events) < self.record_number + 3:
            print("advance(): Warning, reached the limit of events.")
            return False
        self.event_number += 1
        self.record_number += 1
        self.record_event_number = 0
        return True

    def backup(self) -> bool:
        """Step back one event, moving to the previous record at a boundary."""
        if not self.record_events:
            return False
        if self.record_number != 0 and self.event_number == self.record_events[self.record_number]:
            self.event_number -= 1
            self.record_number -= 1
            if self.record_number > 0:
                self.record_event_number = (
                    self.record_events[self.record_number + 1]
                    - self.record_events[self.record_number]
                    - 1
                )
            else:
                self.record_event_number = self.event_number - 1
            return True
        self.event_number -= 1
        self.record_event_number -= 1
        return True

    def goto_event(self, event_number: int) -> bool:
        """Jump to *event_number*; return False if there is no such event.

        The record and the event inside it are found by binary search over
        the cumulative counts; ``event_number`` is set to the search position.
        """
        if event_number < 0 or event_number >= self.max_events():
            return False
        bound = bisect.bisect_left(self.record_events, event_number + 1)
        self.record_number = bound - 1
        self.record_event_number = event_number - self.record_events[self.record_number]
        self.event_number = bound
        return True

    def goto_record(self, record_number: int) -> bool:
        """Place the pointer just before the first event of *record_number*."""
        if record_number == 0:
            self.event_number = -1
            self.record_number = 0
            self.record_event_number = -1
            return True
        if record_number < 0 or record_number + 1 > len(self.record_events):
            return False
        self.event_number = self.record_events[record_number] - 1
        self.record_number = record_number
        self.record_event_number = -1
        return True

    def load_record(self, record_number: int) -> bool:
        """Same as :meth:`goto_record`."""
        return self.goto_record(record_number)

    def rewind(self) -> None:
        """Place the pointer before the first event of the file."""
        self.record_number = -1
        self.event_number = -1
        self.record_event_number = -1

    def reset(self) -> None:
        """Set all counters to zero."""
        self.record_number = 0
        self.event_number = 0
        self.record_event_number = 0

    def clear(self) -> None:
        """Forget all records; the counters are left alone."""
        self.record_events.clear()
        self.record_positions.clear()

    def show(self) -> None:
        """Print the cumulative event table."""
        for index, total in enumerate(self.record_events):
            print(f"record = {index:8d}, {total:8d}")