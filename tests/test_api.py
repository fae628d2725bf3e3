"""
HTTP-level tests for the three services, using FastAPI's TestClient.
"""
from __future__ import annotations

import logging
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from voting_api.app import create_app
from voting_api.core.errors import BackendUnavailableError
from voting_api.db.session import build_engine
from voting_api.domain.links import poll_links, vote_links
from voting_api.repositories.kv_store import KeyValueStore


@pytest.fixture()
def clients(temp_db, settings):
    with TestClient(create_app("voters", settings=settings)) as voters:
        with TestClient(create_app("polls", settings=settings)) as polls:
            with TestClient(create_app("votes", settings=settings)) as votes:
                yield voters, polls, votes


def _voter(voter_id: int, **extra) -> dict:
    return {"VoterID": voter_id, "FirstName": "Ada", "LastName": "Lovelace", **extra}


def _poll(poll_id: int) -> dict:
    return {
        "PollID": poll_id,
        "PollTitle": "Lunch",
        "PollQuestion": "Where do we eat?",
        "PollOptions": [{"PollOptionID": 1, "PollOptionText": "Pizza"}],
    }


def test_voter_crud(clients):
    voters, _, _ = clients

    assert voters.get("/voters").json() == []

    resp = voters.post("/voters", json=_voter(1))
    assert resp.status_code == 200
    assert resp.json()["VoterID"] == 1
    assert voters.post("/voters", json=_voter(1)).status_code == 409

    assert voters.get("/voters/1").json()["FirstName"] == "Ada"
    assert voters.put("/voters", json=_voter(1, FirstName="Grace")).status_code == 200
    assert voters.get("/voters/1").json()["FirstName"] == "Grace"
    assert voters.put("/voters", json=_voter(2)).status_code == 404

    assert voters.delete("/voters/1").status_code == 200
    assert voters.get("/voters/1").status_code == 404
    assert voters.delete("/voters/1").status_code == 404


def test_invalid_ids_and_payloads_are_bad_requests(clients):
    voters, polls, _ = clients

    assert voters.get("/voters/abc").status_code == 400
    assert voters.get("/voters/-1").status_code == 400
    assert polls.post("/polls", json={"PollTitle": "no id"}).status_code == 400
    dup_history = _voter(3, VoteHistory=[{"PollID": 1}, {"PollID": 1}])
    assert voters.post("/voters", json=dup_history).status_code == 400


def test_voter_poll_history(clients):
    voters, _, _ = clients
    voters.post("/voters", json=_voter(1))

    assert voters.post("/voters/1/polls", json={"PollID": 5, "VoteDate": "2024-03-01T10:00:00Z"}).status_code == 200
    assert voters.post("/voters/1/polls", json={"PollID": 5}).status_code == 409
    assert voters.post("/voters/99/polls", json={"PollID": 5}).status_code == 404
    voters.post("/voters/1/polls", json={"PollID": 6})

    assert [e["PollID"] for e in voters.get("/voters/1/polls").json()] == [5, 6]
    assert voters.get("/voters/1/polls/6").json()["PollID"] == 6
    assert voters.get("/voters/1/polls/7").status_code == 404

    resp = voters.put("/voters/1/polls", json={"PollID": 6, "VoteDate": "2024-04-01T00:00:00Z"})
    assert resp.status_code == 200
    assert voters.get("/voters/1/polls/6").json()["VoteDate"].startswith("2024-04-01")
    assert voters.put("/voters/1/polls/6", json={"PollID": 5}).status_code == 400

    assert voters.delete("/voters/1/polls/5").status_code == 200
    assert [e["PollID"] for e in voters.get("/voters/1/polls").json()] == [6]
    assert voters.delete("/voters/1/polls/5").status_code == 404


def test_polls_carry_links(clients, settings):
    _, polls, _ = clients

    assert polls.get("/polls").json() == []
    created = polls.post("/polls", json=_poll(5)).json()

    assert created["Links"] == poll_links(settings)
    assert polls.get("/polls/5").json()["PollOptions"] == [{"PollOptionID": 1, "PollOptionText": "Pizza"}]

    resp = polls.delete("/polls")
    assert resp.status_code == 200
    assert resp.json()["deleted"] == 1
    assert polls.get("/polls").json() == []


def test_votes_require_existing_voter_and_poll(clients, settings):
    voters, polls, votes = clients
    voters.post("/voters", json=_voter(1))
    polls.post("/polls", json=_poll(5))

    resp = votes.post("/votes", json={"VoteID": 10, "VoterID": 1, "PollID": 5, "VoteValue": 1})
    assert resp.status_code == 200
    assert resp.json()["Links"] == vote_links(settings)

    resp = votes.post("/votes", json={"VoteID": 11, "VoterID": 99, "PollID": 5, "VoteValue": 1})
    assert resp.status_code == 404
    assert "voter 99" in resp.json()["detail"]
    assert votes.post("/votes", json={"VoteID": 12, "VoterID": 1, "PollID": 6}).status_code == 404

    assert [v["VoteID"] for v in votes.get("/votes").json()] == [10]


@pytest.mark.parametrize("service", ["voters", "polls", "votes"])
def test_health_counts_calls(temp_db, settings, service):
    with TestClient(create_app(service, settings=settings)) as client:
        first = client.get(f"/{service}/health").json()
        second = client.get(f"/{service}/health").json()

    assert set(first) == {"Uptime", "APIcalls"}
    assert second["APIcalls"] == first["APIcalls"] + 1
    assert second["Uptime"] >= first["Uptime"]


def test_crash_returns_500_and_service_keeps_running(temp_db, settings):
    app = create_app("polls", settings=settings)
    with TestClient(app, raise_server_exceptions=False) as client:
        assert client.get("/crash").status_code == 500
        assert client.get("/polls/health").status_code == 200


def test_unknown_service():
    with pytest.raises(ValueError):
        create_app("ballots")


def test_vote_update_and_delete_over_http(clients):
    voters, polls, votes = clients
    voters.post("/voters", json=_voter(1))
    polls.post("/polls", json=_poll(5))
    votes.post("/votes", json={"VoteID": 10, "VoterID": 1, "PollID": 5, "VoteValue": 1})

    resp = votes.put("/votes", json={"VoteID": 10, "VoterID": 1, "PollID": 5, "VoteValue": 2})
    assert resp.status_code == 200
    assert votes.get("/votes/10").json()["VoteValue"] == 2
    assert votes.put("/votes", json={"VoteID": 11, "VoterID": 1, "PollID": 5}).status_code == 404

    assert votes.delete("/votes/10").status_code == 200
    assert votes.get("/votes/10").status_code == 404
    assert votes.delete("/votes/10").status_code == 404


def test_poll_update_over_http(clients):
    _, polls, _ = clients
    polls.post("/polls", json=_poll(5))

    changed = {**_poll(5), "PollTitle": "Dinner"}
    resp = polls.put("/polls", json=changed)
    assert resp.status_code == 200
    assert polls.get("/polls/5").json()["PollTitle"] == "Dinner"
    assert polls.put("/polls", json=_poll(6)).status_code == 404


def test_app_uses_database_url_from_given_settings(temp_db, settings, tmp_path):
    other_url = f"sqlite:///{tmp_path / 'other.db'}"
    app = create_app("voters", settings=replace(settings, database_url=other_url))

    with TestClient(app) as client:
        assert client.post("/voters", json=_voter(1)).status_code == 200

    assert (tmp_path / "other.db").exists()
    other_engine = build_engine(other_url)
    try:
        assert KeyValueStore(other_engine).get("voters:1")["VoterID"] == 1
    finally:
        other_engine.dispose()
    assert KeyValueStore().get("voters:1") is None


class _UnreachableBackend(KeyValueStore):
    def get(self, key):
        raise BackendUnavailableError("backend unavailable during get")


class _LossyBackend(KeyValueStore):
    """Reports one key fewer than it removed, as if another client raced the clear."""

    def delete(self, *keys):
        return max(0, super().delete(*keys) - 1)


def test_backend_failure_maps_to_500(temp_db, settings, caplog):
    app = create_app("voters", settings=settings, backend=_UnreachableBackend())

    with TestClient(app) as client, caplog.at_level(logging.ERROR, logger="voting_api.app"):
        resp = client.get("/voters/1")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "backend unavailable during get"}
    assert any("GET /voters/1 failed" in rec.getMessage() for rec in caplog.records)


def test_partial_delete_maps_to_500(temp_db, settings):
    app = create_app("voters", settings=settings, backend=_LossyBackend())

    with TestClient(app) as client:
        client.post("/voters", json=_voter(1))
        resp = client.delete("/voters")

    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("removed 0 of 1 voters")
