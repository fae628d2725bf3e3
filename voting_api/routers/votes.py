from __future__ import annotations

from typing import List

from fastapi import APIRouter, Path, Request

from voting_api.domain.models import Vote
from voting_api.services.vote_service import VoteService

router = APIRouter(prefix="/votes", tags=["votes"])


def _get_vote_service(request: Request) -> VoteService:
    svc = getattr(getattr(request.app, "state", None), "vote_service", None)
    if not svc:
        raise RuntimeError("VoteService not configured")
    return svc


@router.get("", response_model=List[Vote])
def list_votes(request: Request):
    return _get_vote_service(request).list_votes()


@router.post("", response_model=Vote)
def add_vote(vote: Vote, request: Request):
    return _get_vote_service(request).create_vote(vote)


@router.put("", response_model=Vote)
def update_vote(vote: Vote, request: Request):
    return _get_vote_service(request).update_vote(vote)


@router.delete("")
def delete_all_votes(request: Request):
    deleted = _get_vote_service(request).delete_all_votes()
    return {"ok": True, "deleted": deleted}


@router.get("/{vote_id}", response_model=Vote)
def get_vote(request: Request, vote_id: int = Path(..., ge=0)):
    return _get_vote_service(request).get_vote(vote_id)


@router.delete("/{vote_id}")
def delete_vote(request: Request, vote_id: int = Path(..., ge=0)):
    _get_vote_service(request).delete_vote(vote_id)
    return {"ok": True}
