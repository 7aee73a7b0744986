"""In-memory implementation of the PlaygroundStore.

Used by the service tests and handy for running the scheduler without a
database. All transactions are serialized through one re-entrant lock and a
failed transaction restores the state it started from.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from decimal import Decimal

from playgrounds.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Playground,
    PlaygroundId,
    Report,
)
from playgrounds.domain.errors import DuplicateReportError
from playgrounds.stores.interfaces import PlaygroundStore


class MemoryPlaygroundStore(PlaygroundStore):
    """Dictionary-backed store, safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._playgrounds: dict[PlaygroundId, Playground] = {}
        self._bookings: dict[BookingId, Booking] = {}
        self._reports: dict[tuple[PlaygroundId, int], Report] = {}

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        with self._lock:
            saved = (dict(self._playgrounds), dict(self._bookings), dict(self._reports))
            try:
                yield
            except Exception:
                self._playgrounds, self._bookings, self._reports = saved
                raise

    def schedule_lock(self, playground_id: PlaygroundId, day: date):
        return self._transaction()

    def playground_lock(self, playground_id: PlaygroundId):
        return self._transaction()

    # Playgrounds

    def get_playground(self, playground_id: PlaygroundId) -> Playground | None:
        with self._lock:
            return self._playgrounds.get(playground_id)

    def find_active_playground(self, playground_id: PlaygroundId) -> Playground | None:
        playground = self.get_playground(playground_id)
        if playground is None or not playground.active:
            return None
        return playground

    def list_active_playgrounds(self) -> list[Playground]:
        with self._lock:
            found = [p for p in self._playgrounds.values() if p.active]
        return sorted(found, key=lambda p: p.created_at, reverse=True)

    def list_playgrounds_for_owner(self, owner_id: int) -> list[Playground]:
        with self._lock:
            found = [p for p in self._playgrounds.values() if p.owner_id == owner_id]
        return sorted(found, key=lambda p: p.created_at, reverse=True)

    def insert_playground(self, playground: Playground) -> Playground:
        with self._lock:
            self._playgrounds[playground.id] = playground
        return playground

    def update_playground(self, playground: Playground) -> Playground:
        with self._lock:
            current = self._playgrounds[playground.id]
            updated = replace(
                current,
                name=playground.name,
                category=playground.category,
                address=playground.address,
                image_url=playground.image_url,
                description=playground.description,
            )
            self._playgrounds[playground.id] = updated
        return updated

    def delete_playground(self, playground_id: PlaygroundId) -> None:
        with self._lock:
            self._playgrounds.pop(playground_id, None)
            self._bookings = {
                k: b for k, b in self._bookings.items() if b.playground_id != playground_id
            }
            self._reports = {k: r for k, r in self._reports.items() if k[0] != playground_id}

    def update_playground_rating(self, playground_id: PlaygroundId, value: Decimal) -> None:
        self._modify_playground(playground_id, rating=value)

    def increment_report_count(self, playground_id: PlaygroundId) -> int:
        with self._lock:
            count = self._playgrounds[playground_id].report_count + 1
            self._modify_playground(playground_id, report_count=count)
        return count

    def deactivate_playground(self, playground_id: PlaygroundId) -> None:
        self._modify_playground(playground_id, active=False)

    def _modify_playground(self, playground_id: PlaygroundId, **changes) -> None:
        with self._lock:
            self._playgrounds[playground_id] = replace(self._playgrounds[playground_id], **changes)

    # Bookings

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        with self._lock:
            return self._bookings.get(booking_id)

    def find_bookings(self, playground_id: PlaygroundId, day: date) -> list[Booking]:
        with self._lock:
            return [
                b
                for b in self._bookings.values()
                if b.playground_id == playground_id and b.slot.day == day
            ]

    def insert_booking(self, booking: Booking) -> Booking:
        with self._lock:
            self._bookings[booking.id] = booking
        return booking

    def update_booking_status(self, booking_id: BookingId, status: BookingStatus) -> None:
        with self._lock:
            self._bookings[booking_id] = replace(self._bookings[booking_id], status=status)

    def update_booking_rating(self, booking_id: BookingId, rating: int) -> None:
        with self._lock:
            self._bookings[booking_id] = replace(
                self._bookings[booking_id], rating=rating, rated=True
            )

    def list_ratings(self, playground_id: PlaygroundId) -> list[int]:
        with self._lock:
            return [
                b.rating
                for b in self._bookings.values()
                if b.playground_id == playground_id and b.rated and b.rating is not None
            ]

    def list_bookings_for_requester(self, requester_id: int) -> list[Booking]:
        with self._lock:
            found = [b for b in self._bookings.values() if b.requester_id == requester_id]
        return sorted(found, key=lambda b: (b.slot.day, b.slot.start), reverse=True)

    def list_pending_bookings_for_owner(self, owner_id: int) -> list[Booking]:
        with self._lock:
            owned = {p.id for p in self._playgrounds.values() if p.owner_id == owner_id}
            found = [
                b
                for b in self._bookings.values()
                if b.playground_id in owned and b.status is BookingStatus.PENDING
            ]
        return sorted(found, key=lambda b: (b.slot.day, b.slot.start))

    # Reports

    def find_report(self, playground_id: PlaygroundId, reporter_id: int) -> Report | None:
        with self._lock:
            return self._reports.get((playground_id, reporter_id))

    def insert_report(self, report: Report) -> Report:
        key = (report.playground_id, report.reporter_id)
        with self._lock:
            if key in self._reports:
                raise DuplicateReportError()
            self._reports[key] = report
        return report
