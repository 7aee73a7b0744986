"""Input validators.

Each validator returns either the cleaned value or a ``ValidationError``
instance; nothing here raises. Callers check the result with ``isinstance``
and decide whether to raise.
"""

from datetime import date, time
from urllib.parse import urlparse

from playgrounds.domain.errors import ValidationError
from playgrounds.domain.models import MAX_RATING, MIN_RATING, Category
from playgrounds.domain.value_objects import BookingId, PlaygroundId, TimeSlot

MAX_IMAGE_URL_LENGTH = 500


def validate_playground_id(value: str) -> PlaygroundId | ValidationError:
    try:
        return PlaygroundId.from_string(str(value))
    except ValueError:
        return ValidationError("Invalid playground ID format", field="playground_id")


def validate_booking_id(value: str) -> BookingId | ValidationError:
    try:
        return BookingId.from_string(str(value))
    except ValueError:
        return ValidationError("Invalid booking ID format", field="booking_id")


def validate_slot(day: date, start: time, end: time) -> TimeSlot | ValidationError:
    if day is None or start is None or end is None:
        return ValidationError("date, start and end are required", field="slot")
    if start >= end:
        return ValidationError("Start time must be earlier than end time", field="slot")
    return TimeSlot(day=day, start=start, end=end)


def validate_rating(value: object) -> int | ValidationError:
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(value, bool) or not isinstance(value, int):
        return ValidationError("Rating must be an integer", field="rating")
    if not MIN_RATING <= value <= MAX_RATING:
        return ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}", field="rating"
        )
    return value


def validate_reason(value: str | None) -> str | ValidationError:
    reason = (value or "").strip()
    if not reason:
        return ValidationError("A reason is required", field="reason")
    return reason


def validate_required_text(value: str | None, field: str) -> str | ValidationError:
    text = (value or "").strip()
    if not text:
        return ValidationError(f"{field} is required", field=field)
    return text


def validate_category(value: str) -> Category | ValidationError:
    try:
        return Category(value)
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        return ValidationError(f"Category must be one of: {allowed}", field="category")


def validate_image_url(value: str | None) -> str | ValidationError:
    url = (value or "").strip()
    if len(url) > MAX_IMAGE_URL_LENGTH:
        return ValidationError(
            f"Image URL is too long (max {MAX_IMAGE_URL_LENGTH} characters)",
            field="image_url",
        )
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return ValidationError("Image URL is not valid", field="image_url")
    return url


def unwrap(result):
    """Raise a validator's error result, otherwise hand back the value."""
    if isinstance(result, ValidationError):
        raise result
    return result
