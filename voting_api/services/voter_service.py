"""Voter use cases, including edits of a voter's poll history."""

from __future__ import annotations

import logging
from typing import List

from voting_api.core.errors import AlreadyExistsError, MalformedInputError, NotFoundError
from voting_api.domain.models import Voter, VoterPoll
from voting_api.repositories.entity_store import EntityStore

logger = logging.getLogger(__name__)


class HistoryEntryNotFoundError(NotFoundError):
    """Raised when a voter has no history entry for the requested poll."""


class HistoryEntryExistsError(AlreadyExistsError):
    """Raised when adding a second history entry for the same poll."""


def _find_entry(history: List[VoterPoll], poll_id: int) -> int:
    for index, entry in enumerate(history):
        if entry.poll_id == poll_id:
            return index
    return -1


class VoterService:
    """CRUD over voters plus add/find/replace/remove on ``VoteHistory``.

    History edits re-read the whole voter, change the in-memory copy and write
    the full record back; the backend has no field-level update.
    """

    def __init__(self, store: EntityStore[Voter]) -> None:
        self.store = store

    # -------------------------- voters --------------------------
    def list_voters(self) -> List[Voter]:
        return self.store.list_all()

    def get_voter(self, voter_id: int) -> Voter:
        return self.store.get(voter_id)

    def create_voter(self, voter: Voter) -> Voter:
        created = self.store.create(voter)
        logger.info("Created voter %s", voter.voter_id)
        return created

    def update_voter(self, voter: Voter) -> Voter:
        updated = self.store.update(voter)
        logger.info("Updated voter %s", voter.voter_id)
        return updated

    def delete_voter(self, voter_id: int) -> None:
        self.store.delete(voter_id)
        logger.info("Deleted voter %s", voter_id)

    def delete_all_voters(self) -> int:
        return self.store.delete_all()

    # -------------------------- history --------------------------
    def list_polls(self, voter_id: int) -> List[VoterPoll]:
        return self.store.get(voter_id).vote_history

    def get_poll(self, voter_id: int, poll_id: int) -> VoterPoll:
        history = self.list_polls(voter_id)
        index = _find_entry(history, poll_id)
        if index < 0:
            raise HistoryEntryNotFoundError(f"poll {poll_id} not found for voter {voter_id}")
        return history[index]

    def add_poll(self, voter_id: int, entry: VoterPoll) -> VoterPoll:
        voter = self.store.get(voter_id)
        if _find_entry(voter.vote_history, entry.poll_id) >= 0:
            raise HistoryEntryExistsError(f"poll {entry.poll_id} already exists in voter {voter_id}")
        voter.vote_history.append(entry)
        self.store.update(voter)
        logger.info("Added poll %s to voter %s", entry.poll_id, voter_id)
        return entry

    def replace_poll(self, voter_id: int, poll_id: int, entry: VoterPoll) -> VoterPoll:
        if entry.poll_id != poll_id:
            raise MalformedInputError(f"PollID {entry.poll_id} does not match poll {poll_id}")
        voter = self.store.get(voter_id)
        index = _find_entry(voter.vote_history, poll_id)
        if index < 0:
            raise HistoryEntryNotFoundError(f"poll {poll_id} does not exist in voter {voter_id}")
        voter.vote_history[index] = entry
        self.store.update(voter)
        logger.info("Replaced poll %s of voter %s", poll_id, voter_id)
        return entry

    def remove_poll(self, voter_id: int, poll_id: int) -> None:
        voter = self.store.get(voter_id)
        history = voter.vote_history
        index = _find_entry(history, poll_id)
        if index < 0:
            raise HistoryEntryNotFoundError(f"poll {poll_id} does not exist in voter {voter_id}")
        # swap with the last entry and truncate; order is not preserved
        history[index] = history[-1]
        history.pop()
        self.store.update(voter)
        logger.info("Removed poll %s from voter %s", poll_id, voter_id)
