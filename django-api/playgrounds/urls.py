from django.urls import path

from playgrounds.handlers import (
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

urlpatterns = [
    path("playgrounds", PlaygroundListView.as_view(), name="playground-list"),
    path("playgrounds/mine", OwnedPlaygroundListView.as_view(), name="playground-mine"),
    path(
        "playgrounds/<str:playground_id>",
        PlaygroundDetailView.as_view(),
        name="playground-detail",
    ),
    path(
        "playgrounds/<str:playground_id>/report",
        PlaygroundReportView.as_view(),
        name="playground-report",
    ),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/incoming", IncomingBookingListView.as_view(), name="booking-incoming"),
    path("bookings/<str:booking_id>/cancel", BookingCancelView.as_view(), name="booking-cancel"),
    path("bookings/<str:booking_id>/confirm", BookingConfirmView.as_view(), name="booking-confirm"),
    path("bookings/<str:booking_id>/rating", BookingRatingView.as_view(), name="booking-rating"),
]
