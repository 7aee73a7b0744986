"""Django ORM implementation of the PlaygroundStore.

Transactions use ``transaction.atomic`` and serialize writers by taking a
``SELECT ... FOR UPDATE`` lock on the playground row. Backends without row
locks (SQLite) ignore ``select_for_update``.
"""

import functools
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

from django.db import DatabaseError, IntegrityError, transaction

from playgrounds import models as orm
from playgrounds.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Category,
    Playground,
    PlaygroundId,
    Report,
    ReportId,
    TimeSlot,
)
from playgrounds.domain.errors import DuplicateReportError, StorageError
from playgrounds.stores.interfaces import PlaygroundStore

logger = logging.getLogger(__name__)


def _storage_errors(method):
    """Surface database failures as StorageError, chaining the cause."""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            logger.error("Storage failure in %s", method.__name__, exc_info=True)
            raise StorageError() from exc

    return wrapper


def _to_playground(row: orm.Playground) -> Playground:
    return Playground(
        id=PlaygroundId(row.id),
        owner_id=row.owner_id,
        name=row.name,
        category=Category(row.category),
        address=row.address,
        image_url=row.image_url,
        description=row.description,
        rating=Decimal(row.rating),
        report_count=row.report_count,
        active=row.is_active,
        created_at=row.created_at,
    )


def _to_booking(row: orm.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        playground_id=PlaygroundId(row.playground_id),
        requester_id=row.requester_id,
        slot=TimeSlot(day=row.date, start=row.start_time, end=row.end_time),
        status=BookingStatus(row.status),
        rating=row.rating,
        rated=row.rated,
        created_at=row.created_at,
    )


def _to_report(row: orm.PlaygroundReport) -> Report:
    return Report(
        id=ReportId(row.id),
        playground_id=PlaygroundId(row.playground_id),
        reporter_id=row.reporter_id,
        reason=row.reason,
        created_at=row.created_at,
    )


class DjangoPlaygroundStore(PlaygroundStore):
    """Relational store using the Django ORM."""

    @contextmanager
    def _atomic(self, playground_id: PlaygroundId) -> Iterator[None]:
        try:
            with transaction.atomic():
                # Row lock held until commit; serializes writers per playground.
                list(
                    orm.Playground.objects.select_for_update()
                    .filter(pk=playground_id.value)
                    .values_list("pk", flat=True)
                )
                yield
        except DatabaseError as exc:
            logger.error("Transaction failed for playground %s", playground_id, exc_info=True)
            raise StorageError() from exc

    def schedule_lock(self, playground_id: PlaygroundId, day: date):
        return self._atomic(playground_id)

    def playground_lock(self, playground_id: PlaygroundId):
        return self._atomic(playground_id)

    # Playgrounds

    @_storage_errors
    def get_playground(self, playground_id: PlaygroundId) -> Playground | None:
        row = orm.Playground.objects.filter(pk=playground_id.value).first()
        return _to_playground(row) if row else None

    @_storage_errors
    def find_active_playground(self, playground_id: PlaygroundId) -> Playground | None:
        row = orm.Playground.objects.filter(pk=playground_id.value, is_active=True).first()
        return _to_playground(row) if row else None

    @_storage_errors
    def list_active_playgrounds(self) -> list[Playground]:
        rows = orm.Playground.objects.filter(is_active=True).order_by("-created_at")
        return [_to_playground(row) for row in rows]

    @_storage_errors
    def list_playgrounds_for_owner(self, owner_id: int) -> list[Playground]:
        rows = orm.Playground.objects.filter(owner_id=owner_id).order_by("-created_at")
        return [_to_playground(row) for row in rows]

    @_storage_errors
    def insert_playground(self, playground: Playground) -> Playground:
        row = orm.Playground.objects.create(
            id=playground.id.value,
            owner_id=playground.owner_id,
            name=playground.name,
            category=playground.category.value,
            address=playground.address,
            image_url=playground.image_url,
            description=playground.description,
        )
        return _to_playground(row)

    @_storage_errors
    def update_playground(self, playground: Playground) -> Playground:
        row = orm.Playground.objects.get(pk=playground.id.value)
        row.name = playground.name
        row.category = playground.category.value
        row.address = playground.address
        row.image_url = playground.image_url
        row.description = playground.description
        row.save(
            update_fields=["name", "category", "address", "image_url", "description", "updated_at"]
        )
        return _to_playground(row)

    @_storage_errors
    def delete_playground(self, playground_id: PlaygroundId) -> None:
        # Instance delete so post_delete fires; bookings and reports cascade.
        row = orm.Playground.objects.filter(pk=playground_id.value).first()
        if row is not None:
            row.delete()

    @_storage_errors
    def update_playground_rating(self, playground_id: PlaygroundId, value: Decimal) -> None:
        row = orm.Playground.objects.get(pk=playground_id.value)
        row.rating = value
        row.save(update_fields=["rating", "updated_at"])

    @_storage_errors
    def increment_report_count(self, playground_id: PlaygroundId) -> int:
        row = orm.Playground.objects.select_for_update().get(pk=playground_id.value)
        row.report_count += 1
        row.save(update_fields=["report_count", "updated_at"])
        return row.report_count

    @_storage_errors
    def deactivate_playground(self, playground_id: PlaygroundId) -> None:
        row = orm.Playground.objects.get(pk=playground_id.value)
        row.is_active = False
        row.save(update_fields=["is_active", "updated_at"])

    # Bookings

    @_storage_errors
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = orm.Booking.objects.filter(pk=booking_id.value).first()
        return _to_booking(row) if row else None

    @_storage_errors
    def find_bookings(self, playground_id: PlaygroundId, day: date) -> list[Booking]:
        rows = orm.Booking.objects.filter(playground_id=playground_id.value, date=day)
        return [_to_booking(row) for row in rows]

    @_storage_errors
    def insert_booking(self, booking: Booking) -> Booking:
        row = orm.Booking.objects.create(
            id=booking.id.value,
            playground_id=booking.playground_id.value,
            requester_id=booking.requester_id,
            date=booking.slot.day,
            start_time=booking.slot.start,
            end_time=booking.slot.end,
            status=booking.status.value,
        )
        return _to_booking(row)

    @_storage_errors
    def update_booking_status(self, booking_id: BookingId, status: BookingStatus) -> None:
        orm.Booking.objects.filter(pk=booking_id.value).update(status=status.value)

    @_storage_errors
    def update_booking_rating(self, booking_id: BookingId, rating: int) -> None:
        orm.Booking.objects.filter(pk=booking_id.value).update(rating=rating, rated=True)

    @_storage_errors
    def list_ratings(self, playground_id: PlaygroundId) -> list[int]:
        return list(
            orm.Booking.objects.filter(
                playground_id=playground_id.value, rated=True, rating__isnull=False
            ).values_list("rating", flat=True)
        )

    @_storage_errors
    def list_bookings_for_requester(self, requester_id: int) -> list[Booking]:
        rows = orm.Booking.objects.filter(requester_id=requester_id).order_by(
            "-date", "-start_time"
        )
        return [_to_booking(row) for row in rows]

    @_storage_errors
    def list_pending_bookings_for_owner(self, owner_id: int) -> list[Booking]:
        rows = orm.Booking.objects.filter(
            playground__owner_id=owner_id, status=orm.Booking.Status.PENDING
        ).order_by("date", "start_time")
        return [_to_booking(row) for row in rows]

    # Reports

    @_storage_errors
    def find_report(self, playground_id: PlaygroundId, reporter_id: int) -> Report | None:
        row = orm.PlaygroundReport.objects.filter(
            playground_id=playground_id.value, reporter_id=reporter_id
        ).first()
        return _to_report(row) if row else None

    @_storage_errors
    def insert_report(self, report: Report) -> Report:
        try:
            with transaction.atomic():
                row = orm.PlaygroundReport.objects.create(
                    id=report.id.value,
                    playground_id=report.playground_id.value,
                    reporter_id=report.reporter_id,
                    reason=report.reason,
                )
        except IntegrityError as exc:
            # Only the (playground, reporter) unique constraint means a duplicate.
            if orm.PlaygroundReport.objects.filter(
                playground_id=report.playground_id.value, reporter_id=report.reporter_id
            ).exists():
                raise DuplicateReportError() from exc
            raise
        return _to_report(row)
