"""
Pydantic models for voters, polls and votes.

Attributes are snake_case in Python and PascalCase on the wire (``VoterID``,
``PollOptions``...). Stored documents and HTTP payloads both use the aliases.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class VoterPoll(_Document):
    """One entry of a voter's vote history."""

    poll_id: int = Field(..., alias="PollID", ge=0)
    vote_date: Optional[datetime] = Field(None, alias="VoteDate")


class Voter(_Document):
    voter_id: int = Field(..., alias="VoterID", ge=0)
    first_name: str = Field("", alias="FirstName")
    last_name: str = Field("", alias="LastName")
    vote_history: List[VoterPoll] = Field(default_factory=list, alias="VoteHistory")

    @field_validator("vote_history")
    @classmethod
    def unique_poll_ids(cls, value: List[VoterPoll]) -> List[VoterPoll]:
        seen = set()
        for entry in value:
            if entry.poll_id in seen:
                raise ValueError(f"duplicate PollID {entry.poll_id} in VoteHistory")
            seen.add(entry.poll_id)
        return value


class PollOption(_Document):
    option_id: int = Field(..., alias="PollOptionID", ge=0)
    option_text: str = Field("", alias="PollOptionText")


class Poll(_Document):
    poll_id: int = Field(..., alias="PollID", ge=0)
    poll_title: str = Field("", alias="PollTitle")
    poll_question: str = Field("", alias="PollQuestion")
    poll_options: List[PollOption] = Field(default_factory=list, alias="PollOptions")
    links: List[str] = Field(default_factory=list, alias="Links")


class Vote(_Document):
    vote_id: int = Field(..., alias="VoteID", ge=0)
    voter_id: int = Field(..., alias="VoterID", ge=0)
    poll_id: int = Field(..., alias="PollID", ge=0)
    vote_value: int = Field(0, alias="VoteValue", ge=0)
    links: List[str] = Field(default_factory=list, alias="Links")
