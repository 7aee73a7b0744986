"""Serializers for request bodies and for transforming domain models to API responses.

Input serializers only check shape and types; business validation happens in
the services.
"""

from rest_framework import serializers

HH_MM = "%H:%M"


class PlaygroundSerializer(serializers.Serializer):
    """Serializer for Playground domain model."""

    id = serializers.UUIDField(source="id.value")
    owner_id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField(source="category.value")
    address = serializers.CharField()
    image_url = serializers.CharField()
    description = serializers.CharField()
    rating = serializers.DecimalField(max_digits=3, decimal_places=1)
    report_count = serializers.IntegerField()
    active = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.UUIDField(source="id.value")
    playground_id = serializers.UUIDField(source="playground_id.value")
    requester_id = serializers.IntegerField()
    date = serializers.DateField(source="slot.day")
    time_start = serializers.TimeField(source="slot.start", format=HH_MM)
    time_end = serializers.TimeField(source="slot.end", format=HH_MM)
    status = serializers.CharField(source="status.value")
    rating = serializers.IntegerField(allow_null=True)
    rated = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class ReportSerializer(serializers.Serializer):
    """Serializer for Report domain model."""

    id = serializers.UUIDField(source="id.value")
    playground_id = serializers.UUIDField(source="playground_id.value")
    reporter_id = serializers.IntegerField()
    reason = serializers.CharField()
    created_at = serializers.DateTimeField()


class ReportOutcomeSerializer(serializers.Serializer):
    report = ReportSerializer()
    report_count = serializers.IntegerField()
    active = serializers.BooleanField()


class PlaygroundInputSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, trim_whitespace=False)
    category = serializers.CharField()
    address = serializers.CharField(allow_blank=True, trim_whitespace=False)
    image_url = serializers.CharField(allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class BookingRequestSerializer(serializers.Serializer):
    playground_id = serializers.CharField()
    date = serializers.DateField()
    time_start = serializers.TimeField(input_formats=[HH_MM, "iso-8601"])
    time_end = serializers.TimeField(input_formats=[HH_MM, "iso-8601"])


class RatingInputSerializer(serializers.Serializer):
    rating = serializers.IntegerField()


class ReportInputSerializer(serializers.Serializer):
    reason = serializers.CharField(allow_blank=True)
