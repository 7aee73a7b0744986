"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.conf import settings
from django.core.cache import cache
from rest_framework import exceptions, status
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from playgrounds.cache import ACTIVE_LIST_KEY
from playgrounds.domain.errors import DomainError, ErrorCode
from playgrounds.handlers.serializers import (
    BookingRequestSerializer,
    BookingSerializer,
    PlaygroundInputSerializer,
    PlaygroundSerializer,
    RatingInputSerializer,
    ReportInputSerializer,
    ReportOutcomeSerializer,
)
from playgrounds.services import PlaygroundCatalog, ReputationService, ReservationScheduler
from playgrounds.stores.django_store import DjangoPlaygroundStore

STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.SLOT_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.SELF_BOOKING_NOT_ALLOWED: status.HTTP_403_FORBIDDEN,
    ErrorCode.DUPLICATE_REPORT: status.HTTP_409_CONFLICT,
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORAGE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(code: ErrorCode, message: str, **extra) -> Response:
    body = {"code": code.value, "message": message, **extra}
    return Response({"error": body}, status=STATUS_BY_CODE[code])


def _catalog() -> PlaygroundCatalog:
    return PlaygroundCatalog(DjangoPlaygroundStore())


def _scheduler() -> ReservationScheduler:
    return ReservationScheduler(
        DjangoPlaygroundStore(),
        confirm_requires_pending=settings.PLAYGROUNDS["CONFIRM_REQUIRES_PENDING"],
    )


def _reputation() -> ReputationService:
    return ReputationService(
        DjangoPlaygroundStore(),
        report_threshold=settings.PLAYGROUNDS["REPORT_THRESHOLD"],
    )


class DomainAPIView(APIView):
    """APIView that renders domain and input errors in one stable shape."""

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            return error_response(exc.code, exc.message)
        if isinstance(exc, exceptions.ValidationError):
            return error_response(
                ErrorCode.VALIDATION_ERROR, "Invalid request body", fields=exc.detail
            )
        return super().handle_exception(exc)

    @staticmethod
    def parse_body(serializer_class, request: Request, *, partial: bool = False) -> dict:
        serializer = serializer_class(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class PlaygroundListView(DomainAPIView):
    """Handler for GET/POST /api/playgrounds"""

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get(self, request: Request) -> Response:
        data = cache.get(ACTIVE_LIST_KEY)
        if data is None:
            data = list(PlaygroundSerializer(_catalog().list_active(), many=True).data)
            cache.set(ACTIVE_LIST_KEY, data, timeout=settings.PLAYGROUNDS["LIST_CACHE_TIMEOUT"])
        return Response(data)

    def post(self, request: Request) -> Response:
        fields = self.parse_body(PlaygroundInputSerializer, request)
        playground = _catalog().create(request.user.id, **fields)
        return Response(PlaygroundSerializer(playground).data, status=status.HTTP_201_CREATED)


class OwnedPlaygroundListView(DomainAPIView):
    """Handler for GET /api/playgrounds/mine"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        playgrounds = _catalog().list_owned(request.user.id)
        return Response(PlaygroundSerializer(playgrounds, many=True).data)


class PlaygroundDetailView(DomainAPIView):
    """Handler for PATCH/DELETE /api/playgrounds/{playground_id}"""

    permission_classes = [IsAuthenticated]

    def patch(self, request: Request, playground_id: str) -> Response:
        changes = self.parse_body(PlaygroundInputSerializer, request, partial=True)
        playground = _catalog().update(playground_id, request.user.id, **changes)
        return Response(PlaygroundSerializer(playground).data)

    def delete(self, request: Request, playground_id: str) -> Response:
        _catalog().delete(playground_id, request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PlaygroundReportView(DomainAPIView):
    """Handler for POST /api/playgrounds/{playground_id}/report"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, playground_id: str) -> Response:
        body = self.parse_body(ReportInputSerializer, request)
        outcome = _reputation().report_playground(playground_id, request.user.id, body["reason"])
        return Response(ReportOutcomeSerializer(outcome).data, status=status.HTTP_201_CREATED)


class BookingListView(DomainAPIView):
    """Handler for GET/POST /api/bookings"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        bookings = _scheduler().bookings_for(request.user.id)
        return Response(BookingSerializer(bookings, many=True).data)

    def post(self, request: Request) -> Response:
        body = self.parse_body(BookingRequestSerializer, request)
        booking = _scheduler().request_booking(
            body["playground_id"],
            request.user.id,
            body["date"],
            body["time_start"],
            body["time_end"],
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class IncomingBookingListView(DomainAPIView):
    """Handler for GET /api/bookings/incoming"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        bookings = _scheduler().incoming_for(request.user.id)
        return Response(BookingSerializer(bookings, many=True).data)


class BookingCancelView(DomainAPIView):
    """Handler for PATCH /api/bookings/{booking_id}/cancel"""

    permission_classes = [IsAuthenticated]

    def patch(self, request: Request, booking_id: str) -> Response:
        booking = _scheduler().cancel(booking_id, request.user.id)
        return Response(BookingSerializer(booking).data)


class BookingConfirmView(DomainAPIView):
    """Handler for PATCH /api/bookings/{booking_id}/confirm"""

    permission_classes = [IsAuthenticated]

    def patch(self, request: Request, booking_id: str) -> Response:
        booking = _scheduler().confirm(booking_id, request.user.id)
        return Response(BookingSerializer(booking).data)


class BookingRatingView(DomainAPIView):
    """Handler for PATCH /api/bookings/{booking_id}/rating"""

    permission_classes = [IsAuthenticated]

    def patch(self, request: Request, booking_id: str) -> Response:
        body = self.parse_body(RatingInputSerializer, request)
        booking = _reputation().rate_booking(booking_id, request.user.id, body["rating"])
        return Response(BookingSerializer(booking).data)
