"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Services receive a store
through their constructor and never touch a storage backend directly.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
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


class PlaygroundStore(ABC):
    """Interface for playground, booking and report persistence."""

    # Transactions

    @abstractmethod
    def schedule_lock(self, playground_id: PlaygroundId, day: date) -> AbstractContextManager[None]:
        """Open a transaction that serializes writers on (playground, day).

        Everything done inside commits together or not at all.
        """
        ...

    @abstractmethod
    def playground_lock(self, playground_id: PlaygroundId) -> AbstractContextManager[None]:
        """Open a transaction that serializes writers on the playground."""
        ...

    # Playgrounds

    @abstractmethod
    def get_playground(self, playground_id: PlaygroundId) -> Playground | None:
        """Return a playground by ID regardless of its active flag, or None."""
        ...

    @abstractmethod
    def find_active_playground(self, playground_id: PlaygroundId) -> Playground | None:
        """Return a playground by ID only if it is active, or None."""
        ...

    @abstractmethod
    def list_active_playgrounds(self) -> list[Playground]:
        """Return active playgrounds ordered by created_at descending."""
        ...

    @abstractmethod
    def list_playgrounds_for_owner(self, owner_id: int) -> list[Playground]:
        """Return every playground of an owner, newest first."""
        ...

    @abstractmethod
    def insert_playground(self, playground: Playground) -> Playground:
        ...

    @abstractmethod
    def update_playground(self, playground: Playground) -> Playground:
        """Persist the listing fields (name, category, address, image, description)."""
        ...

    @abstractmethod
    def delete_playground(self, playground_id: PlaygroundId) -> None:
        """Delete a playground together with its bookings and reports."""
        ...

    @abstractmethod
    def update_playground_rating(self, playground_id: PlaygroundId, value: Decimal) -> None:
        ...

    @abstractmethod
    def increment_report_count(self, playground_id: PlaygroundId) -> int:
        """Add one to the report counter and return the new count."""
        ...

    @abstractmethod
    def deactivate_playground(self, playground_id: PlaygroundId) -> None:
        ...

    # Bookings

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        ...

    @abstractmethod
    def find_bookings(self, playground_id: PlaygroundId, day: date) -> list[Booking]:
        """Return all bookings (any status) of a playground on a day."""
        ...

    @abstractmethod
    def insert_booking(self, booking: Booking) -> Booking:
        ...

    @abstractmethod
    def update_booking_status(self, booking_id: BookingId, status: BookingStatus) -> None:
        ...

    @abstractmethod
    def update_booking_rating(self, booking_id: BookingId, rating: int) -> None:
        """Store the rating and mark the booking as rated."""
        ...

    @abstractmethod
    def list_ratings(self, playground_id: PlaygroundId) -> list[int]:
        """Return the ratings of every rated booking of a playground."""
        ...

    @abstractmethod
    def list_bookings_for_requester(self, requester_id: int) -> list[Booking]:
        """Return a user's bookings ordered by day descending."""
        ...

    @abstractmethod
    def list_pending_bookings_for_owner(self, owner_id: int) -> list[Booking]:
        """Return pending bookings on an owner's playgrounds, day ascending."""
        ...

    # Reports

    @abstractmethod
    def find_report(self, playground_id: PlaygroundId, reporter_id: int) -> Report | None:
        ...

    @abstractmethod
    def insert_report(self, report: Report) -> Report:
        """Persist a report.

        Raises:
            DuplicateReportError: If the reporter already reported the playground.
        """
        ...
