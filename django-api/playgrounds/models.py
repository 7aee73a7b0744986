"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F, Q


class Playground(models.Model):
    """Persistence model for playgrounds."""

    class Category(models.TextChoices):
        FOOTBALL = "football"
        PICKLEBALL = "pickleball"
        BADMINTON = "badminton"
        BASKETBALL = "basketball"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="playgrounds"
    )
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=Category.choices)
    address = models.CharField(max_length=255)
    image_url = models.URLField(max_length=500)
    description = models.TextField(blank=True, default="")
    rating = models.DecimalField(max_digits=3, decimal_places=1, default=Decimal("0.0"))
    report_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "-created_at"], name="playground_active_created_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Booking(models.Model):
    """Persistence model for bookings."""

    class Status(models.TextChoices):
        PENDING = "pending"
        CONFIRMED = "confirmed"
        CANCELLED = "cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    playground = models.ForeignKey(
        Playground, on_delete=models.CASCADE, related_name="bookings"
    )
    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="bookings"
    )
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    rating = models.PositiveSmallIntegerField(null=True, blank=True)
    rated = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-start_time"]
        indexes = [
            models.Index(fields=["playground", "date"], name="booking_playground_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(start_time__lt=F("end_time")),
                name="booking_start_before_end",
            ),
            models.CheckConstraint(
                condition=Q(rating__isnull=True) | Q(rating__gte=1, rating__lte=5),
                name="booking_rating_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.playground.name} - {self.date} {self.start_time}-{self.end_time}"


class PlaygroundReport(models.Model):
    """Persistence model for abuse reports."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    playground = models.ForeignKey(
        Playground, on_delete=models.CASCADE, related_name="reports"
    )
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="playground_reports"
    )
    reason = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["playground", "reporter"], name="unique_playground_report"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.playground.name} reported by {self.reporter_id}"
