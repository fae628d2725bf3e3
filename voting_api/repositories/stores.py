"""Entity stores for the three namespaces sharing one backend."""
from __future__ import annotations

from voting_api.core.config import Settings
from voting_api.domain.links import poll_links, vote_links
from voting_api.domain.models import Poll, Vote, Voter
from voting_api.repositories.entity_store import EntityStore
from voting_api.repositories.kv_store import KeyValueStore

VOTERS_NAMESPACE = "voters"
POLLS_NAMESPACE = "polls"
VOTES_NAMESPACE = "votes"


def voter_store(backend: KeyValueStore) -> EntityStore[Voter]:
    return EntityStore(backend, VOTERS_NAMESPACE, Voter, "voter_id")


def poll_store(backend: KeyValueStore, settings: Settings) -> EntityStore[Poll]:
    return EntityStore(backend, POLLS_NAMESPACE, Poll, "poll_id", links=poll_links(settings))


def vote_store(backend: KeyValueStore, settings: Settings) -> EntityStore[Vote]:
    return EntityStore(backend, VOTES_NAMESPACE, Vote, "vote_id", links=vote_links(settings))
