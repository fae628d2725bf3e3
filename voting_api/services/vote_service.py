"""Vote use cases: creation checks that the voter and the poll exist."""

from __future__ import annotations

import logging
from typing import List

from voting_api.core.errors import AlreadyExistsError, NotFoundError
from voting_api.domain.models import Poll, Vote, Voter
from voting_api.repositories.entity_store import EntityStore

logger = logging.getLogger(__name__)


class VoterNotFoundError(NotFoundError):
    """Raised when a new vote references a voter that does not exist."""


class PollNotFoundError(NotFoundError):
    """Raised when a new vote references a poll that does not exist."""


class VoteService:
    """Votes plus the reference checks run before a vote is first written.

    The voter and poll stores are only read. References are not re-checked
    on update, and deleting a voter or poll leaves its votes in place.
    """

    def __init__(
        self,
        store: EntityStore[Vote],
        voters: EntityStore[Voter],
        polls: EntityStore[Poll],
    ) -> None:
        self.store = store
        self.voters = voters
        self.polls = polls

    def list_votes(self) -> List[Vote]:
        return self.store.list_all()

    def get_vote(self, vote_id: int) -> Vote:
        return self.store.get(vote_id)

    def create_vote(self, vote: Vote) -> Vote:
        if self.store.exists(vote.vote_id):
            raise AlreadyExistsError(f"vote {vote.vote_id} already exists")
        if not self.voters.exists(vote.voter_id):
            raise VoterNotFoundError(f"voter {vote.voter_id} does not exist")
        if not self.polls.exists(vote.poll_id):
            raise PollNotFoundError(f"poll {vote.poll_id} does not exist")
        created = self.store.create(vote)
        logger.info("Created vote %s (voter %s, poll %s)", vote.vote_id, vote.voter_id, vote.poll_id)
        return created

    def update_vote(self, vote: Vote) -> Vote:
        updated = self.store.update(vote)
        logger.info("Updated vote %s", vote.vote_id)
        return updated

    def delete_vote(self, vote_id: int) -> None:
        self.store.delete(vote_id)
        logger.info("Deleted vote %s", vote_id)

    def delete_all_votes(self) -> int:
        return self.store.delete_all()
