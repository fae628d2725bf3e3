"""Poll use cases."""

from __future__ import annotations

import logging
from typing import List

from voting_api.domain.models import Poll
from voting_api.repositories.entity_store import EntityStore

logger = logging.getLogger(__name__)


class PollService:
    """Thin layer over the poll store; links are attached by the store."""

    def __init__(self, store: EntityStore[Poll]) -> None:
        self.store = store

    def list_polls(self) -> List[Poll]:
        return self.store.list_all()

    def get_poll(self, poll_id: int) -> Poll:
        return self.store.get(poll_id)

    def create_poll(self, poll: Poll) -> Poll:
        created = self.store.create(poll)
        logger.info("Created poll %s", poll.poll_id)
        return created

    def update_poll(self, poll: Poll) -> Poll:
        updated = self.store.update(poll)
        logger.info("Updated poll %s", poll.poll_id)
        return updated

    def delete_poll(self, poll_id: int) -> None:
        self.store.delete(poll_id)
        logger.info("Deleted poll %s", poll_id)

    def delete_all_polls(self) -> int:
        return self.store.delete_all()
