"""Integration tests for the playground and booking HTTP API.

These go through DRF views, the services and the Django ORM store.
Run with: pytest tests/test_api.py -v
"""

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from playgrounds import models as orm

DAY = "2025-03-01"


@pytest.fixture
def owner(django_user_model):
    return django_user_model.objects.create_user(username="owner", password="pw")


@pytest.fixture
def player(django_user_model):
    return django_user_model.objects.create_user(username="player", password="pw")


@pytest.fixture
def other_player(django_user_model):
    return django_user_model.objects.create_user(username="other", password="pw")


@pytest.fixture
def playground(owner) -> orm.Playground:
    return orm.Playground.objects.create(
        owner=owner,
        name="Riverside Court",
        category=orm.Playground.Category.FOOTBALL,
        address="1 River Rd",
        image_url="https://example.com/court.jpg",
    )


def client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user)
    return client


def request_booking(user, playground, start="09:00", end="10:00"):
    return client_for(user).post(
        reverse("booking-list"),
        {"playground_id": str(playground.id), "date": DAY, "time_start": start, "time_end": end},
        format="json",
    )


def error_code(response) -> str:
    return response.json()["error"]["code"]


@pytest.mark.django_db
class TestPlaygroundEndpoints:
    """Tests for /api/playgrounds"""

    def test_list_is_public_and_hides_inactive(self, api_client, playground, owner):
        """Anyone can list active playgrounds."""
        orm.Playground.objects.create(
            owner=owner,
            name="Closed Court",
            category=orm.Playground.Category.BADMINTON,
            address="2 River Rd",
            image_url="https://example.com/closed.jpg",
            is_active=False,
        )
        response = api_client.get(reverse("playground-list"))
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Riverside Court"]
        assert response.json()[0]["rating"] == "0.0"

    def test_create_playground(self, player):
        """An authenticated user creates a playground they own."""
        response = client_for(player).post(
            reverse("playground-list"),
            {
                "name": "Sunset Pitch",
                "category": "pickleball",
                "address": "5 Beach Ave",
                "image_url": "https://example.com/sunset.jpg",
            },
            format="json",
        )
        assert response.status_code == 201
        body = response.json()
        assert body["owner_id"] == player.id
        assert body["active"] is True
        assert orm.Playground.objects.filter(owner=player, name="Sunset Pitch").exists()

    def test_create_requires_authentication(self, api_client):
        """Anonymous users cannot create playgrounds."""
        response = api_client.post(reverse("playground-list"), {}, format="json")
        assert response.status_code in (401, 403)

    def test_create_rejects_bad_image_url(self, player):
        """Invalid image URLs are a validation error."""
        response = client_for(player).post(
            reverse("playground-list"),
            {"name": "X", "category": "football", "address": "Y", "image_url": "not a url"},
            format="json",
        )
        assert response.status_code == 400
        assert error_code(response) == "VALIDATION_ERROR"

    def test_create_rejects_missing_fields(self, player):
        """Missing fields are reported with the same error code."""
        response = client_for(player).post(reverse("playground-list"), {}, format="json")
        assert response.status_code == 400
        assert error_code(response) == "VALIDATION_ERROR"
        assert "name" in response.json()["error"]["fields"]

    def test_list_mine(self, owner, playground, player):
        """Owners see their own playgrounds."""
        response = client_for(owner).get(reverse("playground-mine"))
        assert [p["id"] for p in response.json()] == [str(playground.id)]
        assert client_for(player).get(reverse("playground-mine")).json() == []

    def test_owner_updates_playground(self, owner, playground):
        """Owners can partially update their listing."""
        response = client_for(owner).patch(
            reverse("playground-detail", args=[playground.id]),
            {"name": "Riverside Arena"},
            format="json",
        )
        assert response.status_code == 200
        playground.refresh_from_db()
        assert playground.name == "Riverside Arena"
        assert playground.address == "1 River Rd"

    def test_stranger_cannot_update(self, player, playground):
        """Only the owner may update."""
        response = client_for(player).patch(
            reverse("playground-detail", args=[playground.id]), {"name": "Mine"}, format="json"
        )
        assert response.status_code == 403
        assert error_code(response) == "UNAUTHORIZED"

    def test_owner_deletes_playground_with_bookings(self, owner, player, playground):
        """Deleting a playground removes its bookings."""
        request_booking(player, playground)
        response = client_for(owner).delete(reverse("playground-detail", args=[playground.id]))
        assert response.status_code == 204
        assert not orm.Playground.objects.filter(pk=playground.pk).exists()
        assert not orm.Booking.objects.exists()

    def test_delete_unknown(self, owner):
        """Deleting an unknown playground is a 404."""
        response = client_for(owner).delete(
            reverse("playground-detail", args=["12345678-1234-5678-1234-567812345678"])
        )
        assert response.status_code == 404
        assert error_code(response) == "NOT_FOUND"


@pytest.mark.django_db
class TestBookingEndpoints:
    """Tests for /api/bookings"""

    def test_request_booking(self, player, playground):
        """A free slot is booked as pending."""
        response = request_booking(player, playground)
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert (body["time_start"], body["time_end"]) == ("09:00", "10:00")
        assert body["rated"] is False and body["rating"] is None

    def test_overlap_conflicts(self, player, other_player, playground):
        """09:00-10:00 against 09:30-10:30 is a 409 SLOT_CONFLICT."""
        request_booking(player, playground, "09:30", "10:30")
        response = request_booking(other_player, playground, "09:00", "10:00")
        assert response.status_code == 409
        assert error_code(response) == "SLOT_CONFLICT"

    def test_touching_slots_succeed(self, player, other_player, playground):
        """09:00-10:00 against 10:00-11:00 succeeds."""
        request_booking(player, playground, "10:00", "11:00")
        assert request_booking(other_player, playground, "09:00", "10:00").status_code == 201

    def test_self_booking(self, owner, playground):
        """Owners cannot book their own playground."""
        response = request_booking(owner, playground)
        assert response.status_code == 403
        assert error_code(response) == "SELF_BOOKING_NOT_ALLOWED"

    def test_start_after_end(self, player, playground):
        """start >= end is a validation error."""
        response = request_booking(player, playground, "11:00", "10:00")
        assert response.status_code == 400
        assert error_code(response) == "VALIDATION_ERROR"

    def test_malformed_time(self, player, playground):
        """Times must be HH:MM."""
        response = request_booking(player, playground, "nine", "10:00")
        assert response.status_code == 400
        assert error_code(response) == "VALIDATION_ERROR"

    def test_cancel_then_cancel_again(self, player, playground):
        """Cancel works once; the second attempt is INVALID_STATE."""
        booking_id = request_booking(player, playground).json()["id"]
        url = reverse("booking-cancel", args=[booking_id])
        first = client_for(player).patch(url)
        assert first.status_code == 200
        assert first.json()["status"] == "cancelled"
        second = client_for(player).patch(url)
        assert second.status_code == 409
        assert error_code(second) == "INVALID_STATE"

    def test_confirm_by_owner(self, owner, player, playground):
        """The owner confirms; the booking leaves the incoming list."""
        booking_id = request_booking(player, playground).json()["id"]
        incoming = client_for(owner).get(reverse("booking-incoming")).json()
        assert [b["id"] for b in incoming] == [booking_id]

        response = client_for(owner).patch(reverse("booking-confirm", args=[booking_id]))
        assert response.status_code == 200
        assert orm.Booking.objects.get(pk=booking_id).status == "confirmed"
        assert client_for(owner).get(reverse("booking-incoming")).json() == []

    def test_confirm_by_stranger(self, player, playground):
        """Non-owners cannot confirm."""
        booking_id = request_booking(player, playground).json()["id"]
        response = client_for(player).patch(reverse("booking-confirm", args=[booking_id]))
        assert response.status_code == 403

    def test_confirm_strict_mode(self, owner, player, playground, settings):
        """With CONFIRM_REQUIRES_PENDING on, confirming a cancelled booking fails."""
        settings.PLAYGROUNDS = {**settings.PLAYGROUNDS, "CONFIRM_REQUIRES_PENDING": True}
        booking_id = request_booking(player, playground).json()["id"]
        client_for(player).patch(reverse("booking-cancel", args=[booking_id]))
        response = client_for(owner).patch(reverse("booking-confirm", args=[booking_id]))
        assert response.status_code == 409
        assert error_code(response) == "INVALID_STATE"

    def test_my_bookings(self, player, other_player, playground):
        """Users list only their own bookings."""
        mine = request_booking(player, playground).json()["id"]
        request_booking(other_player, playground, "12:00", "13:00")
        response = client_for(player).get(reverse("booking-list"))
        assert [b["id"] for b in response.json()] == [mine]

    def test_invalid_booking_id(self, player):
        """Malformed booking IDs are a validation error."""
        response = client_for(player).patch(reverse("booking-cancel", args=["abc"]))
        assert response.status_code == 400


@pytest.mark.django_db
class TestReputationEndpoints:
    """Tests for rating and reporting."""

    def test_ratings_average(self, player, other_player, playground):
        """Ratings 5 and 3 give the playground 4.0."""
        first = request_booking(player, playground, "09:00", "10:00").json()["id"]
        second = request_booking(other_player, playground, "10:00", "11:00").json()["id"]
        client_for(player).patch(reverse("booking-rating", args=[first]), {"rating": 5}, format="json")
        client_for(other_player).patch(
            reverse("booking-rating", args=[second]), {"rating": 3}, format="json"
        )
        playground.refresh_from_db()
        assert str(playground.rating) == "4.0"

    def test_rate_twice(self, player, playground):
        """A second rating is INVALID_STATE."""
        booking_id = request_booking(player, playground).json()["id"]
        url = reverse("booking-rating", args=[booking_id])
        assert client_for(player).patch(url, {"rating": 4}, format="json").status_code == 200
        response = client_for(player).patch(url, {"rating": 2}, format="json")
        assert response.status_code == 409
        assert error_code(response) == "INVALID_STATE"

    def test_rating_out_of_range(self, player, playground):
        """Ratings outside 1..5 are rejected and nothing is stored."""
        booking_id = request_booking(player, playground).json()["id"]
        response = client_for(player).patch(
            reverse("booking-rating", args=[booking_id]), {"rating": 9}, format="json"
        )
        assert response.status_code == 400
        assert orm.Booking.objects.get(pk=booking_id).rated is False

    def test_report_and_duplicate(self, player, playground):
        """A second report by the same user is DUPLICATE_REPORT."""
        url = reverse("playground-report", args=[playground.id])
        first = client_for(player).post(url, {"reason": "Scam"}, format="json")
        assert first.status_code == 201
        assert first.json()["report_count"] == 1
        second = client_for(player).post(url, {"reason": "Scam"}, format="json")
        assert second.status_code == 409
        assert error_code(second) == "DUPLICATE_REPORT"
        playground.refresh_from_db()
        assert playground.report_count == 1
        assert orm.PlaygroundReport.objects.count() == 1

    def test_five_reports_deactivate(self, django_user_model, playground):
        """Five distinct reporters deactivate the playground for good."""
        url = reverse("playground-report", args=[playground.id])
        for n in range(6):
            reporter = django_user_model.objects.create_user(username=f"r{n}", password="pw")
            response = client_for(reporter).post(url, {"reason": "Fake"}, format="json")
            assert response.json()["active"] is (n < 4)
        playground.refresh_from_db()
        assert playground.is_active is False
        assert playground.report_count == 6

    def test_inactive_playground_cannot_be_booked(self, player, playground):
        """Deactivated playgrounds are not bookable."""
        playground.is_active = False
        playground.save()
        response = request_booking(player, playground)
        assert response.status_code == 404
