import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB

from .database import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")

GROUP_A = "group_a"
GROUP_B = "group_b"
DESIGNATED_ATTRIBUTES = (GROUP_A, GROUP_B)
COHORT_YEARS = ("1st", "2nd", "3rd", "4th")

INVITE_PENDING = "pending"
INVITE_ACCEPTED = "accepted"
INVITE_REJECTED = "rejected"
ACTIVE_INVITE_STATUSES = (INVITE_PENDING, INVITE_ACCEPTED)

_ACTIVE_INVITE_WHERE = text("status IN ('pending', 'accepted')")


def _uuid() -> str:
    return str(uuid.uuid4())


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def canonical_pair(user_a: str, user_b: str) -> tuple[str, str]:
    a, b = sorted([str(user_a), str(user_b)])
    return a, b


def pair_key(user_a: str, user_b: str) -> str:
    a, b = canonical_pair(user_a, user_b)
    return f"{a}:{b}"


class Profile(Base):
    __tablename__ = "profile"

    user_id = Column(String(36), primary_key=True)
    display_name = Column(String(80), nullable=False)
    designated_attribute = Column(String(16), nullable=False)
    organization = Column(String(120), nullable=False)
    cohort_year = Column(String(8), nullable=False)
    track = Column(String(120), nullable=False)
    bio_prompt = Column(Text, nullable=True)
    interests = Column(JSONType, nullable=False, default=list)
    invite_quota_used = Column(Integer, nullable=False, default=0)
    quota_reset_date = Column(Date, nullable=True)
    is_privileged = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc, onupdate=_now_utc)

    __table_args__ = (
        CheckConstraint("designated_attribute IN ('group_a', 'group_b')", name="ck_profile_attribute"),
        CheckConstraint("invite_quota_used >= 0", name="ck_profile_quota_non_negative"),
        Index("idx_profile_pool", "designated_attribute", "organization"),
    )


class UserPreferences(Base):
    __tablename__ = "user_preferences"

    user_id = Column(String(36), ForeignKey("profile.user_id", ondelete="CASCADE"), primary_key=True)
    preferred_cohort = Column(String(8), nullable=False, default="any")
    preferred_track = Column(String(16), nullable=False, default="any")
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc, onupdate=_now_utc)

    __table_args__ = (
        CheckConstraint("preferred_cohort IN ('same', 'any')", name="ck_pref_cohort"),
        CheckConstraint("preferred_track IN ('same', 'different', 'any')", name="ck_pref_track"),
    )


class Invite(Base):
    __tablename__ = "invite"

    id = Column(String(36), primary_key=True, default=_uuid)
    from_user_id = Column(String(36), nullable=False)
    to_user_id = Column(String(36), nullable=False)
    status = Column(String(16), nullable=False, default=INVITE_PENDING)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name="ck_invite_status"),
        CheckConstraint("from_user_id <> to_user_id", name="ck_invite_not_self"),
        Index(
            "uq_invite_active_pair",
            "from_user_id",
            "to_user_id",
            unique=True,
            postgresql_where=_ACTIVE_INVITE_WHERE,
            sqlite_where=_ACTIVE_INVITE_WHERE,
        ),
        Index("idx_invite_to_user_status", "to_user_id", "status"),
        Index("idx_invite_from_user", "from_user_id"),
    )


class Match(Base):
    __tablename__ = "user_match"

    id = Column(String(36), primary_key=True, default=_uuid)
    user1_id = Column(String(36), nullable=False)
    user2_id = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    __table_args__ = (
        UniqueConstraint("user1_id", "user2_id", name="uq_match_pair"),
        CheckConstraint("user1_id < user2_id", name="ck_match_canonical_order"),
        Index("idx_match_user2", "user2_id"),
    )

    def partner_of(self, user_id: str) -> str:
        return self.user2_id if str(user_id) == self.user1_id else self.user1_id

    def has_participant(self, user_id: str) -> bool:
        return str(user_id) in {self.user1_id, self.user2_id}


class InvitePairLock(Base):
    __tablename__ = "invite_pair_lock"

    pair_key = Column(String(80), primary_key=True)
    touched_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)


class SkippedProfile(Base):
    __tablename__ = "skipped_profile"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), nullable=False)
    skipped_user_id = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    __table_args__ = (UniqueConstraint("user_id", "skipped_user_id", name="uq_skipped_pair"),)


class BlockedUser(Base):
    __tablename__ = "blocked_user"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), nullable=False)
    blocked_user_id = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    __table_args__ = (
        UniqueConstraint("user_id", "blocked_user_id", name="uq_blocked_pair"),
        Index("idx_blocked_user_blocked", "blocked_user_id"),
    )


class UserReport(Base):
    __tablename__ = "user_report"

    id = Column(String(36), primary_key=True, default=_uuid)
    reporter_id = Column(String(36), nullable=False)
    reported_user_id = Column(String(36), nullable=False)
    reason = Column(String(500), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)


class Message(Base):
    __tablename__ = "message"

    id = Column(String(36), primary_key=True, default=_uuid)
    match_id = Column(String(36), ForeignKey("user_match.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(String(36), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)

    __table_args__ = (Index("idx_message_match_created", "match_id", "created_at"),)


class EventSettings(Base):
    __tablename__ = "event_settings"

    id = Column(String(36), primary_key=True, default=_uuid)
    event_date = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)


class ProductEvent(Base):
    __tablename__ = "product_event"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), nullable=True, index=True)
    event_name = Column(String(64), nullable=False)
    properties = Column(JSONType, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now_utc)
