"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in playgrounds/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Self

from playgrounds.domain.value_objects import BookingId, PlaygroundId, ReportId, TimeSlot

REPORT_THRESHOLD = 5
MIN_RATING = 1
MAX_RATING = 5


def _now() -> datetime:
    return datetime.now(UTC)


class Category(Enum):
    FOOTBALL = "football"
    PICKLEBALL = "pickleball"
    BADMINTON = "badminton"
    BASKETBALL = "basketball"


class BookingStatus(Enum):
    """Booking lifecycle.

    pending -> confirmed (owner)
    pending -> cancelled (requester)
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


@dataclass(frozen=True)
class Playground:
    """Domain representation of a bookable Playground."""

    id: PlaygroundId
    owner_id: int
    name: str
    category: Category
    address: str
    image_url: str
    description: str = ""
    rating: Decimal = Decimal("0.0")
    report_count: int = 0
    active: bool = True
    created_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    playground_id: PlaygroundId
    requester_id: int
    slot: TimeSlot
    status: BookingStatus = BookingStatus.PENDING
    rating: int | None = None
    rated: bool = False
    created_at: datetime = field(default_factory=_now)

    @classmethod
    def request(cls, playground_id: PlaygroundId, requester_id: int, slot: TimeSlot) -> Self:
        """Build a new pending booking."""
        return cls(
            id=BookingId.new(),
            playground_id=playground_id,
            requester_id=requester_id,
            slot=slot,
        )

    @property
    def blocks_slot(self) -> bool:
        return self.status is not BookingStatus.CANCELLED


@dataclass(frozen=True)
class Report:
    """Domain representation of an abuse Report against a Playground."""

    id: ReportId
    playground_id: PlaygroundId
    reporter_id: int
    reason: str
    created_at: datetime = field(default_factory=_now)

    @classmethod
    def file(cls, playground_id: PlaygroundId, reporter_id: int, reason: str) -> Self:
        return cls(
            id=ReportId.new(),
            playground_id=playground_id,
            reporter_id=reporter_id,
            reason=reason,
        )
