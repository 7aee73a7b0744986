"""Unit tests for domain primitives, rules and validators.

Run with: pytest tests/test_domain.py -v
"""

from datetime import date, time
from decimal import Decimal
from uuid import UUID

import pytest

from helpers import DAY, slot
from playgrounds.domain import Booking, BookingId, BookingStatus, PlaygroundId, TimeSlot, overlaps
from playgrounds.domain.errors import ErrorCode, ValidationError
from playgrounds.domain.models import can_transition
from playgrounds.domain.rules import average_rating, crosses_report_threshold, find_conflicts
from playgrounds.domain.validation import (
    unwrap,
    validate_category,
    validate_image_url,
    validate_playground_id,
    validate_rating,
    validate_reason,
    validate_slot,
)


class TestTimeSlot:
    """Tests for TimeSlot value object and the overlap predicate."""

    def test_rejects_start_not_before_end(self):
        """TimeSlot raises ValueError when start >= end."""
        with pytest.raises(ValueError):
            TimeSlot(day=DAY, start=time(10), end=time(10))

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            (("09:00", "10:00"), ("09:30", "10:30"), True),
            (("09:00", "10:00"), ("10:00", "11:00"), False),
            (("09:00", "12:00"), ("10:00", "11:00"), True),
            (("10:00", "11:00"), ("09:00", "12:00"), True),
            (("09:00", "11:00"), ("09:00", "10:00"), True),
            (("08:00", "09:00"), ("10:00", "11:00"), False),
        ],
    )
    def test_overlaps_is_symmetric(self, a, b, expected):
        """overlaps(a, b) == overlaps(b, a) and matches the expected answer."""
        first, second = slot(*a), slot(*b)
        assert overlaps(first, second) is expected
        assert overlaps(second, first) is expected

    def test_slot_overlaps_itself(self):
        """Any valid slot overlaps itself."""
        s = slot("07:15", "07:16")
        assert s.overlaps(s)

    def test_different_days_never_overlap(self):
        """Same times on another day do not overlap."""
        assert not overlaps(slot("09:00", "10:00"), slot("09:00", "10:00", day=date(2025, 1, 11)))

    def test_new_slot_containing_existing_with_shared_start(self):
        """A longer slot sharing the start of an existing one conflicts."""
        assert overlaps(slot("09:00", "11:00"), slot("09:00", "09:30"))


class TestRules:
    """Tests for conflict, rating and threshold rules."""

    def _booking(self, start: str, end: str, status=BookingStatus.PENDING) -> Booking:
        return Booking(
            id=BookingId.new(),
            playground_id=PlaygroundId.new(),
            requester_id=2,
            slot=slot(start, end),
            status=status,
        )

    def test_find_conflicts_ignores_cancelled(self):
        """Cancelled bookings never block a slot."""
        cancelled = self._booking("09:00", "10:00", BookingStatus.CANCELLED)
        assert find_conflicts(slot("09:00", "10:00"), [cancelled]) == []

    def test_find_conflicts_returns_overlapping(self):
        """Pending and confirmed overlapping bookings are returned."""
        pending = self._booking("09:30", "10:30")
        confirmed = self._booking("08:00", "09:15", BookingStatus.CONFIRMED)
        clear = self._booking("10:30", "11:00")
        found = find_conflicts(slot("09:00", "10:00"), [pending, confirmed, clear])
        assert found == [pending, confirmed]

    def test_find_conflicts_excludes_given_booking(self):
        """The excluded booking does not conflict with itself."""
        booking = self._booking("09:00", "10:00")
        assert find_conflicts(booking.slot, [booking], exclude=booking.id) == []

    def test_average_rating(self):
        """Ratings {5, 3} average to 4.0."""
        assert average_rating([5, 3]) == Decimal("4.0")

    def test_average_rating_empty_is_zero(self):
        """No ratings average to 0."""
        assert average_rating([]) == Decimal("0.0")

    def test_average_rating_rounds_half_up(self):
        """Means are rounded to one decimal place."""
        assert average_rating([5, 4, 4]) == Decimal("4.3")
        assert average_rating([4, 5, 5, 5]) == Decimal("4.8")
        assert average_rating([5, None, 4]) == Decimal("4.5")

    def test_threshold(self):
        """The threshold is inclusive."""
        assert not crosses_report_threshold(4)
        assert crosses_report_threshold(5)
        assert crosses_report_threshold(6)

    def test_transitions(self):
        """Only pending bookings may move, and only to confirmed or cancelled."""
        assert can_transition(BookingStatus.PENDING, BookingStatus.CANCELLED)
        assert can_transition(BookingStatus.PENDING, BookingStatus.CONFIRMED)
        assert not can_transition(BookingStatus.CANCELLED, BookingStatus.CONFIRMED)
        assert not can_transition(BookingStatus.CONFIRMED, BookingStatus.CANCELLED)


class TestValidation:
    """Validators return values or ValidationError instances, never raise."""

    def test_slot_start_after_end(self):
        """start >= end yields a ValidationError for the slot field."""
        result = validate_slot(DAY, time(11), time(10))
        assert isinstance(result, ValidationError)
        assert result.code is ErrorCode.VALIDATION_ERROR
        assert result.field == "slot"

    def test_slot_valid(self):
        """A well-formed slot comes back as a TimeSlot."""
        assert validate_slot(DAY, time(9), time(10)) == slot("09:00", "10:00")

    @pytest.mark.parametrize("value", [0, 6, -1, True, "4", 4.5, None])
    def test_rating_rejects(self, value):
        """Out-of-range and non-integer ratings are rejected."""
        assert isinstance(validate_rating(value), ValidationError)

    @pytest.mark.parametrize("value", [1, 3, 5])
    def test_rating_accepts(self, value):
        """Integers from 1 to 5 are accepted."""
        assert validate_rating(value) == value

    def test_reason_is_stripped(self):
        """Reasons are trimmed; blank reasons are rejected."""
        assert validate_reason("  spam  ") == "spam"
        assert isinstance(validate_reason("   "), ValidationError)

    def test_playground_id(self):
        """Playground IDs must be UUIDs."""
        value = "12345678-1234-5678-1234-567812345678"
        assert validate_playground_id(value) == PlaygroundId(UUID(value))
        assert isinstance(validate_playground_id("not-a-uuid"), ValidationError)

    def test_category(self):
        """Unknown categories are rejected."""
        assert validate_category("football").value == "football"
        assert isinstance(validate_category("curling"), ValidationError)

    @pytest.mark.parametrize(
        "url", ["not a url", "ftp://example.com/x.png", "", "https://" + "a" * 500 + ".com"]
    )
    def test_image_url_rejects(self, url):
        """Image URLs must be absolute http(s) URLs of at most 500 characters."""
        assert isinstance(validate_image_url(url), ValidationError)

    def test_image_url_accepts(self):
        """A normal https URL passes through."""
        assert validate_image_url("https://cdn.example.com/a.jpg") == "https://cdn.example.com/a.jpg"

    def test_unwrap_raises_error_results(self):
        """unwrap raises ValidationError results and returns other values."""
        assert unwrap(3) == 3
        with pytest.raises(ValidationError):
            unwrap(validate_rating(9))
