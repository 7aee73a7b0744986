"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import date, time
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class PlaygroundId:
    """Unique identifier for a Playground."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ReportId:
    """Unique identifier for a Report."""

    value: UUID

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TimeSlot:
    """A calendar day plus a half-open [start, end) time interval."""

    day: date
    start: time
    end: time

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError("TimeSlot start must be earlier than end")

    def overlaps(self, other: "TimeSlot") -> bool:
        return overlaps(self, other)


def overlaps(a: TimeSlot, b: TimeSlot) -> bool:
    """Return True when two slots share at least one instant.

    Slots on different days never overlap. Touching boundaries
    (09:00-10:00 and 10:00-11:00) do not overlap.
    """
    return a.day == b.day and a.start < b.end and b.start < a.end
