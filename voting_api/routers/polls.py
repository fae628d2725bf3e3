from __future__ import annotations

from typing import List

from fastapi import APIRouter, Path, Request

from voting_api.domain.models import Poll
from voting_api.services.poll_service import PollService

router = APIRouter(prefix="/polls", tags=["polls"])


def _get_poll_service(request: Request) -> PollService:
    svc = getattr(getattr(request.app, "state", None), "poll_service", None)
    if not svc:
        raise RuntimeError("PollService not configured")
    return svc


@router.get("", response_model=List[Poll])
def list_polls(request: Request):
    return _get_poll_service(request).list_polls()


@router.post("", response_model=Poll)
def add_poll(poll: Poll, request: Request):
    return _get_poll_service(request).create_poll(poll)


@router.put("", response_model=Poll)
def update_poll(poll: Poll, request: Request):
    return _get_poll_service(request).update_poll(poll)


@router.delete("")
def delete_all_polls(request: Request):
    deleted = _get_poll_service(request).delete_all_polls()
    return {"ok": True, "deleted": deleted}


@router.get("/{poll_id}", response_model=Poll)
def get_poll(request: Request, poll_id: int = Path(..., ge=0)):
    return _get_poll_service(request).get_poll(poll_id)


@router.delete("/{poll_id}")
def delete_poll(request: Request, poll_id: int = Path(..., ge=0)):
    _get_poll_service(request).delete_poll(poll_id)
    return {"ok": True}
