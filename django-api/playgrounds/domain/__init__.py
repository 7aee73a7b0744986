from playgrounds.domain.models import (
    REPORT_THRESHOLD,
    Booking,
    BookingStatus,
    Category,
    Playground,
    Report,
)
from playgrounds.domain.value_objects import (
    BookingId,
    PlaygroundId,
    ReportId,
    TimeSlot,
    overlaps,
)

__all__ = [
    "Playground",
    "Booking",
    "Report",
    "BookingStatus",
    "Category",
    "REPORT_THRESHOLD",
    "PlaygroundId",
    "BookingId",
    "ReportId",
    "TimeSlot",
    "overlaps",
]
