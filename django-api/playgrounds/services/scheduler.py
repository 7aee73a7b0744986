"""Reservation scheduler - slot admission and the booking state machine.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from dataclasses import replace
from datetime import date, time

from playgrounds.domain import Booking, BookingStatus
from playgrounds.domain.errors import (
    InvalidStateError,
    NotFoundError,
    SelfBookingNotAllowedError,
    SlotConflictError,
    UnauthorizedError,
)
from playgrounds.domain.models import can_transition
from playgrounds.domain.rules import find_conflicts
from playgrounds.domain.validation import (
    unwrap,
    validate_booking_id,
    validate_playground_id,
    validate_slot,
)
from playgrounds.stores.interfaces import PlaygroundStore

logger = logging.getLogger(__name__)


class ReservationScheduler:
    """Service for booking requests and their lifecycle."""

    def __init__(self, store: PlaygroundStore, *, confirm_requires_pending: bool = False) -> None:
        self._store = store
        self._confirm_requires_pending = confirm_requires_pending

    def request_booking(
        self,
        playground_id: str,
        requester_id: int,
        day: date,
        start: time,
        end: time,
    ) -> Booking:
        """Admit a pending booking if the slot is free.

        Raises:
            ValidationError: Malformed playground ID or start >= end.
            NotFoundError: Playground missing or inactive.
            SelfBookingNotAllowedError: The requester owns the playground.
            SlotConflictError: A non-cancelled booking overlaps the slot.
        """
        pid = unwrap(validate_playground_id(playground_id))
        slot = unwrap(validate_slot(day, start, end))

        with self._store.schedule_lock(pid, slot.day):
            playground = self._store.find_active_playground(pid)
            if playground is None:
                raise NotFoundError("Playground", playground_id)
            if playground.owner_id == requester_id:
                raise SelfBookingNotAllowedError()

            conflicts = find_conflicts(slot, self._store.find_bookings(pid, slot.day))
            if conflicts:
                raise SlotConflictError(tuple(str(b.id) for b in conflicts))

            booking = self._store.insert_booking(Booking.request(pid, requester_id, slot))

        logger.info(
            "Booking %s requested on playground %s for %s %s-%s by user %s",
            booking.id, pid, slot.day, slot.start, slot.end, requester_id,
        )
        return booking

    def cancel(self, booking_id: str, requester_id: int) -> Booking:
        """Cancel a pending booking on behalf of its requester.

        Raises:
            ValidationError: Malformed booking ID.
            NotFoundError: The booking does not exist.
            UnauthorizedError: The caller did not request this booking.
            InvalidStateError: The booking is no longer pending.
        """
        booking = self._get_booking(booking_id)

        with self._store.schedule_lock(booking.playground_id, booking.slot.day):
            booking = self._get_booking(booking_id)
            if booking.requester_id != requester_id:
                raise UnauthorizedError("Only the requester can cancel this booking")
            if not can_transition(booking.status, BookingStatus.CANCELLED):
                raise InvalidStateError("Only pending bookings can be cancelled")
            self._store.update_booking_status(booking.id, BookingStatus.CANCELLED)

        logger.info("Booking %s cancelled by user %s", booking.id, requester_id)
        return replace(booking, status=BookingStatus.CANCELLED)

    def confirm(self, booking_id: str, owner_id: int) -> Booking:
        """Confirm a booking on behalf of the playground's owner.

        With ``confirm_requires_pending`` off, a confirmed booking is returned
        unchanged and a cancelled one is re-admitted only while its slot is
        still free.

        Raises:
            ValidationError: Malformed booking ID.
            NotFoundError: The booking or its playground does not exist.
            UnauthorizedError: The caller does not own the playground.
            InvalidStateError: Not pending while ``confirm_requires_pending`` is on.
            SlotConflictError: Re-admitting a cancelled booking whose slot was taken.
        """
        booking = self._get_booking(booking_id)

        with self._store.schedule_lock(booking.playground_id, booking.slot.day):
            booking = self._get_booking(booking_id)
            playground = self._store.get_playground(booking.playground_id)
            if playground is None:
                raise NotFoundError("Playground", str(booking.playground_id))
            if playground.owner_id != owner_id:
                raise UnauthorizedError("Only the playground owner can confirm bookings")

            if booking.status is BookingStatus.CONFIRMED and not self._confirm_requires_pending:
                return booking
            if not can_transition(booking.status, BookingStatus.CONFIRMED):
                if self._confirm_requires_pending:
                    raise InvalidStateError("Only pending bookings can be confirmed")
                self._ensure_slot_free(booking)

            self._store.update_booking_status(booking.id, BookingStatus.CONFIRMED)

        logger.info("Booking %s confirmed by owner %s", booking.id, owner_id)
        return replace(booking, status=BookingStatus.CONFIRMED)

    def bookings_for(self, requester_id: int) -> list[Booking]:
        """Return the requester's bookings, latest day first."""
        return self._store.list_bookings_for_requester(requester_id)

    def incoming_for(self, owner_id: int) -> list[Booking]:
        """Return pending bookings on the owner's playgrounds, earliest day first."""
        return self._store.list_pending_bookings_for_owner(owner_id)

    def _get_booking(self, booking_id: str) -> Booking:
        bid = unwrap(validate_booking_id(booking_id))
        booking = self._store.get_booking(bid)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking

    def _ensure_slot_free(self, booking: Booking) -> None:
        existing = self._store.find_bookings(booking.playground_id, booking.slot.day)
        conflicts = find_conflicts(booking.slot, existing, exclude=booking.id)
        if conflicts:
            raise SlotConflictError(tuple(str(b.id) for b in conflicts))
