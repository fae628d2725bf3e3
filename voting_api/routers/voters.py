from __future__ import annotations

from typing import List

from fastapi import APIRouter, Path, Request

from voting_api.domain.models import Voter, VoterPoll
from voting_api.services.voter_service import VoterService

router = APIRouter(prefix="/voters", tags=["voters"])


def _get_voter_service(request: Request) -> VoterService:
    svc = getattr(getattr(request.app, "state", None), "voter_service", None)
    if not svc:
        raise RuntimeError("VoterService not configured")
    return svc


@router.get("", response_model=List[Voter])
def list_voters(request: Request):
    return _get_voter_service(request).list_voters()


@router.post("", response_model=Voter)
def add_voter(voter: Voter, request: Request):
    return _get_voter_service(request).create_voter(voter)


@router.put("", response_model=Voter)
def update_voter(voter: Voter, request: Request):
    return _get_voter_service(request).update_voter(voter)


@router.delete("")
def delete_all_voters(request: Request):
    deleted = _get_voter_service(request).delete_all_voters()
    return {"ok": True, "deleted": deleted}


@router.get("/{voter_id}", response_model=Voter)
def get_voter(request: Request, voter_id: int = Path(..., ge=0)):
    return _get_voter_service(request).get_voter(voter_id)


@router.delete("/{voter_id}")
def delete_voter(request: Request, voter_id: int = Path(..., ge=0)):
    _get_voter_service(request).delete_voter(voter_id)
    return {"ok": True}


# -------------------------- vote history --------------------------
@router.get("/{voter_id}/polls", response_model=List[VoterPoll])
def list_voter_polls(request: Request, voter_id: int = Path(..., ge=0)):
    return _get_voter_service(request).list_polls(voter_id)


@router.get("/{voter_id}/polls/{poll_id}", response_model=VoterPoll)
def get_voter_poll(request: Request, voter_id: int = Path(..., ge=0), poll_id: int = Path(..., ge=0)):
    return _get_voter_service(request).get_poll(voter_id, poll_id)


@router.post("/{voter_id}/polls", response_model=VoterPoll)
def add_voter_poll(entry: VoterPoll, request: Request, voter_id: int = Path(..., ge=0)):
    return _get_voter_service(request).add_poll(voter_id, entry)


@router.put("/{voter_id}/polls", response_model=VoterPoll)
def update_voter_poll(entry: VoterPoll, request: Request, voter_id: int = Path(..., ge=0)):
    return _get_voter_service(request).replace_poll(voter_id, entry.poll_id, entry)


@router.put("/{voter_id}/polls/{poll_id}", response_model=VoterPoll)
def replace_voter_poll(
    entry: VoterPoll,
    request: Request,
    voter_id: int = Path(..., ge=0),
    poll_id: int = Path(..., ge=0),
):
    return _get_voter_service(request).replace_poll(voter_id, poll_id, entry)


@router.delete("/{voter_id}/polls/{poll_id}")
def delete_voter_poll(request: Request, voter_id: int = Path(..., ge=0), poll_id: int = Path(..., ge=0)):
    _get_voter_service(request).remove_poll(voter_id, poll_id)
    return {"ok": True}
