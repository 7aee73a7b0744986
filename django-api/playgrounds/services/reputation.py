"""Rating aggregation and report-threshold moderation."""

import logging
from dataclasses import dataclass, replace

from playgrounds.domain import REPORT_THRESHOLD, Booking, Report
from playgrounds.domain.errors import (
    DuplicateReportError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from playgrounds.domain.rules import average_rating, crosses_report_threshold
from playgrounds.domain.validation import (
    unwrap,
    validate_booking_id,
    validate_playground_id,
    validate_rating,
    validate_reason,
)
from playgrounds.stores.interfaces import PlaygroundStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportOutcome:
    """Result of filing a report."""

    report: Report
    report_count: int
    active: bool


class ReputationService:
    """Folds ratings and abuse reports into playground state."""

    def __init__(self, store: PlaygroundStore, *, report_threshold: int = REPORT_THRESHOLD) -> None:
        self._store = store
        self._report_threshold = report_threshold

    def rate_booking(self, booking_id: str, rater_id: int, rating: object) -> Booking:
        """Rate a booking once and refresh the playground's average.

        Both writes happen in one transaction.

        Raises:
            ValidationError: Malformed ID or rating not an integer in 1..5.
            NotFoundError: The booking does not exist.
            UnauthorizedError: The rater did not make the booking.
            InvalidStateError: The booking was already rated.
        """
        bid = unwrap(validate_booking_id(booking_id))
        value = unwrap(validate_rating(rating))

        booking = self._store.get_booking(bid)
        if booking is None:
            raise NotFoundError("Booking", booking_id)

        with self._store.playground_lock(booking.playground_id):
            booking = self._store.get_booking(bid)
            if booking is None:
                raise NotFoundError("Booking", booking_id)
            if booking.requester_id != rater_id:
                raise UnauthorizedError("Only the requester can rate this booking")
            if booking.rated:
                raise InvalidStateError("This booking has already been rated")

            self._store.update_booking_rating(bid, value)
            average = average_rating(self._store.list_ratings(booking.playground_id))
            self._store.update_playground_rating(booking.playground_id, average)

        logger.info(
            "Booking %s rated %s; playground %s average is now %s",
            bid, value, booking.playground_id, average,
        )
        return replace(booking, rating=value, rated=True)

    def report_playground(self, playground_id: str, reporter_id: int, reason: str) -> ReportOutcome:
        """File an abuse report and deactivate the playground at the threshold.

        Deactivation is permanent; nothing here reactivates a playground.

        Raises:
            ValidationError: Malformed ID or blank reason.
            NotFoundError: The playground does not exist.
            DuplicateReportError: The reporter already reported this playground.
        """
        pid = unwrap(validate_playground_id(playground_id))
        text = unwrap(validate_reason(reason))

        with self._store.playground_lock(pid):
            playground = self._store.get_playground(pid)
            if playground is None:
                raise NotFoundError("Playground", playground_id)
            if self._store.find_report(pid, reporter_id) is not None:
                raise DuplicateReportError()

            report = self._store.insert_report(Report.file(pid, reporter_id, text))
            count = self._store.increment_report_count(pid)
            active = playground.active
            if active and crosses_report_threshold(count, self._report_threshold):
                self._store.deactivate_playground(pid)
                active = False
                logger.warning(
                    "Playground %s deactivated after %s reports", pid, count
                )

        logger.info("Playground %s reported by user %s (%s reports)", pid, reporter_id, count)
        return ReportOutcome(report=report, report_count=count, active=active)
