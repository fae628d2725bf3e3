"""Hypermedia action strings attached to stored polls and votes.

The strings only depend on the configured ports, so every record of a
deployment carries the same list.
"""

from __future__ import annotations

from voting_api.core.config import Settings


def _voter_actions(settings: Settings) -> list[str]:
    port = settings.voters_port
    return [f"GET All Voters: {port}/voters/", f"POST Voter: {port}/voters/:id"]


def _poll_actions(settings: Settings, *, deletes: bool = False) -> list[str]:
    port = settings.polls_port
    actions = [f"GET All Polls: {port}/polls/", f"POST Poll: {port}/polls/:id"]
    if deletes:
        actions += [f"DELETE All Polls: {port}/polls", f"DELETE Poll: {port}/polls/:id"]
    return actions


def _vote_actions(settings: Settings, *, deletes: bool = False) -> list[str]:
    port = settings.votes_port
    actions = [f"GET All Votes: {port}/votes/", f"POST Vote: {port}/votes/:id"]
    if deletes:
        actions += [f"DELETE All Votes: {port}/votes", f"DELETE Vote: {port}/votes/:id"]
    return actions


def poll_links(settings: Settings) -> list[str]:
    return _poll_actions(settings, deletes=True) + _vote_actions(settings) + _voter_actions(settings)


def vote_links(settings: Settings) -> list[str]:
    return _vote_actions(settings, deletes=True) + _voter_actions(settings) + _poll_actions(settings)
