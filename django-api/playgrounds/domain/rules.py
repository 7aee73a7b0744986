"""Pure business rules shared by the scheduler and the reputation service."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from playgrounds.domain.models import REPORT_THRESHOLD, Booking
from playgrounds.domain.value_objects import BookingId, TimeSlot

_ONE_PLACE = Decimal("0.1")


def find_conflicts(
    slot: TimeSlot,
    bookings: Iterable[Booking],
    *,
    exclude: BookingId | None = None,
) -> list[Booking]:
    """Return the non-cancelled bookings whose slot overlaps ``slot``."""
    return [
        booking
        for booking in bookings
        if booking.blocks_slot and booking.id != exclude and booking.slot.overlaps(slot)
    ]


def average_rating(ratings: Iterable[int | None]) -> Decimal:
    """Mean of the given ratings rounded to one decimal place, 0.0 when empty."""
    values = [r for r in ratings if r is not None]
    if not values:
        return Decimal("0.0")
    mean = Decimal(sum(values)) / Decimal(len(values))
    return mean.quantize(_ONE_PLACE, rounding=ROUND_HALF_UP)


def crosses_report_threshold(report_count: int, threshold: int = REPORT_THRESHOLD) -> bool:
    return report_count >= threshold
