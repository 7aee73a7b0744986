"""Builders shared by the test modules."""

from datetime import date, time

from playgrounds.domain import Category, Playground, PlaygroundId, TimeSlot
from playgrounds.stores import PlaygroundStore

OWNER_ID = 1
PLAYER_ID = 2
DAY = date(2025, 1, 10)


def slot(start: str, end: str, day: date = DAY) -> TimeSlot:
    return TimeSlot(day=day, start=time.fromisoformat(start), end=time.fromisoformat(end))


def make_playground(store: PlaygroundStore, owner_id: int = OWNER_ID, **overrides) -> Playground:
    fields = {
        "id": PlaygroundId.new(),
        "owner_id": owner_id,
        "name": "Riverside Court",
        "category": Category.BASKETBALL,
        "address": "1 River Rd",
        "image_url": "https://example.com/court.jpg",
    }
    fields.update(overrides)
    return store.insert_playground(Playground(**fields))
