"""Playground listing management used by the HTTP layer."""

import logging
from dataclasses import replace

from playgrounds.domain import Playground, PlaygroundId
from playgrounds.domain.errors import NotFoundError, UnauthorizedError
from playgrounds.domain.validation import (
    unwrap,
    validate_category,
    validate_image_url,
    validate_playground_id,
    validate_required_text,
)
from playgrounds.stores.interfaces import PlaygroundStore

logger = logging.getLogger(__name__)


class PlaygroundCatalog:
    """Service for listing, creating, editing and removing playgrounds."""

    def __init__(self, store: PlaygroundStore) -> None:
        self._store = store

    def list_active(self) -> list[Playground]:
        return self._store.list_active_playgrounds()

    def list_owned(self, owner_id: int) -> list[Playground]:
        return self._store.list_playgrounds_for_owner(owner_id)

    def create(
        self,
        owner_id: int,
        *,
        name: str,
        category: str,
        address: str,
        image_url: str,
        description: str = "",
    ) -> Playground:
        """Create a playground owned by ``owner_id``.

        Raises:
            ValidationError: Blank name or address, unknown category, bad image URL.
        """
        playground = Playground(
            id=PlaygroundId.new(),
            owner_id=owner_id,
            name=unwrap(validate_required_text(name, "name")),
            category=unwrap(validate_category(category)),
            address=unwrap(validate_required_text(address, "address")),
            image_url=unwrap(validate_image_url(image_url)),
            description=(description or "").strip(),
        )
        created = self._store.insert_playground(playground)
        logger.info("Playground %s created by user %s", created.id, owner_id)
        return created

    def update(self, playground_id: str, owner_id: int, **changes) -> Playground:
        """Apply a partial update of the listing fields.

        Accepted keys: name, category, address, image_url, description.
        Rating, report count and the active flag cannot be changed here.

        Raises:
            ValidationError: Malformed ID or invalid field value.
            NotFoundError: The playground does not exist.
            UnauthorizedError: The caller does not own the playground.
        """
        playground = self._owned(playground_id, owner_id)

        cleaned = {}
        if "name" in changes:
            cleaned["name"] = unwrap(validate_required_text(changes["name"], "name"))
        if "category" in changes:
            cleaned["category"] = unwrap(validate_category(changes["category"]))
        if "address" in changes:
            cleaned["address"] = unwrap(validate_required_text(changes["address"], "address"))
        if "image_url" in changes:
            cleaned["image_url"] = unwrap(validate_image_url(changes["image_url"]))
        if "description" in changes:
            cleaned["description"] = (changes["description"] or "").strip()

        updated = self._store.update_playground(replace(playground, **cleaned))
        logger.info("Playground %s updated by user %s", updated.id, owner_id)
        return updated

    def delete(self, playground_id: str, owner_id: int) -> None:
        """Delete a playground and, by cascade, its bookings and reports.

        Raises:
            ValidationError: Malformed ID.
            NotFoundError: The playground does not exist.
            UnauthorizedError: The caller does not own the playground.
        """
        playground = self._owned(playground_id, owner_id)
        self._store.delete_playground(playground.id)
        logger.info("Playground %s deleted by user %s", playground.id, owner_id)

    def _owned(self, playground_id: str, owner_id: int) -> Playground:
        pid = unwrap(validate_playground_id(playground_id))
        playground = self._store.get_playground(pid)
        if playground is None:
            raise NotFoundError("Playground", playground_id)
        if playground.owner_id != owner_id:
            raise UnauthorizedError("Only the owner can change this playground")
        return playground
