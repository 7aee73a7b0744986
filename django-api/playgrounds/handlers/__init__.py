from playgrounds.handlers.views import (
    BookingCancelView,
    BookingConfirmView,
    BookingListView,
    BookingRatingView,
    IncomingBookingListView,
    OwnedPlaygroundListView,
    PlaygroundDetailView,
    PlaygroundListView,
    PlaygroundReportView,
)

__all__ = [
    "BookingCancelView",
    "BookingConfirmView",
    "BookingListView",
    "BookingRatingView",
    "IncomingBookingListView",
    "OwnedPlaygroundListView",
    "PlaygroundDetailView",
    "PlaygroundListView",
    "PlaygroundReportView",
]
