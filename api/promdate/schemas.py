from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    display_name: str
    designated_attribute: str
    organization: str
    cohort_year: str
    track: str
    bio_prompt: str | None = None
    interests: list[str] = Field(default_factory=list)


class MyProfileOut(ProfileOut):
    is_privileged: bool
    invite_quota_used: int
    quota_reset_date: date | None = None
    remaining_invites: int | None = None


class CandidateResponse(BaseModel):
    candidate: ProfileOut | None
    message: str | None = None


class CandidateListResponse(BaseModel):
    candidates: list[ProfileOut]


class SkipResponse(BaseModel):
    status: Literal["skipped"] = "skipped"
    skipped_user_id: str
    created: bool


class InviteRequest(BaseModel):
    to_user_id: str = Field(min_length=1)
    from_user_id: str | None = None


class RespondRequest(BaseModel):
    decision: Literal["accept", "reject"]


class InviteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    from_user_id: str
    to_user_id: str
    status: str
    created_at: datetime
    updated_at: datetime


class MatchOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user1_id: str
    user2_id: str
    created_at: datetime


class InviteResult(BaseModel):
    is_match: bool
    invite: InviteOut | None = None
    match: MatchOut | None = None
    already_matched: bool = False


class ReceivedInviteOut(BaseModel):
    invite: InviteOut
    sender: ProfileOut | None


class MessageIn(BaseModel):
    content: str


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    match_id: str
    sender_id: str
    content: str
    created_at: datetime


class MatchWithPartnerOut(BaseModel):
    match: MatchOut
    partner: ProfileOut | None
    latest_message: MessageOut | None = None


class BlockRequest(BaseModel):
    blocked_user_id: str = Field(min_length=1)


class ReportRequest(BaseModel):
    reported_user_id: str = Field(min_length=1)
    reason: str = Field(min_length=1, max_length=500)


class EventCountdownOut(BaseModel):
    event_date: datetime | None
    is_active: bool
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

