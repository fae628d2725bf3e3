#!/usr/bin/env python3
"""
Remove every record of one namespace (voters, polls or votes) from the backend.

Usage:
  python scripts/clear_namespace.py votes
"""
from __future__ import annotations

import argparse
import sys

from voting_api.core.config import get_settings
from voting_api.core.errors import VotingError
from voting_api.repositories.entity_store import EntityStore
from voting_api.repositories.kv_store import KeyValueStore
from voting_api.repositories.stores import (
    POLLS_NAMESPACE,
    VOTERS_NAMESPACE,
    VOTES_NAMESPACE,
    poll_store,
    vote_store,
    voter_store,
)


def store_for(namespace: str, backend: KeyValueStore) -> EntityStore:
    settings = get_settings()
    if namespace == VOTERS_NAMESPACE:
        return voter_store(backend)
    if namespace == POLLS_NAMESPACE:
        return poll_store(backend, settings)
    return vote_store(backend, settings)


def main() -> None:
    ap = argparse.ArgumentParser(description="Clear one namespace of the voting backend")
    ap.add_argument("namespace", choices=(VOTERS_NAMESPACE, POLLS_NAMESPACE, VOTES_NAMESPACE))
    args = ap.parse_args()

    store = store_for(args.namespace, KeyValueStore())
    removed = store.delete_all()
    print(f"OK: {removed} record(s) removed from {args.namespace}")


if __name__ == "__main__":
    try:
        main()
    except VotingError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
