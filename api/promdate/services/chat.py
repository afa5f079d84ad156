import logging
import re

from .. import repo
from ..config import CHAT_BLOCKED_WORDS, CHAT_MAX_MESSAGE_LENGTH
from ..errors import InvalidState, NotFound, Unauthorized
from ..models import Match, Message
from .events import log_product_event
from .notifications import MessageCreated, Notifier, notifier as default_notifier

logger = logging.getLogger(__name__)


def filter_content(content: str, blocked_words: list[str] | None = None) -> str:
    words = CHAT_BLOCKED_WORDS if blocked_words is None else blocked_words
    filtered = content
    for word in words:
        filtered = re.sub(re.escape(word), "***", filtered, flags=re.IGNORECASE)
    return filtered


def require_participant(db, match_id: str, user_id: str) -> Match:
    match = repo.get_match(db, match_id)
    if match is None:
        raise NotFound("Match not found")
    if not match.has_participant(user_id):
        raise Unauthorized("Only participants of this match can access it")
    return match


def list_match_messages(db, *, acting_user_id: str, match_id: str) -> list[Message]:
    require_participant(db, match_id, acting_user_id)
    return repo.list_messages(db, match_id)


def send_message(
    db,
    *,
    acting_user_id: str,
    match_id: str,
    content: str,
    notify: Notifier | None = None,
) -> Message:
    body = str(content or "").strip()
    if not body:
        raise InvalidState("Message body required")
    if len(body) > CHAT_MAX_MESSAGE_LENGTH:
        raise InvalidState("Message too long")

    match = require_participant(db, match_id, acting_user_id)
    message = repo.create_message(db, match.id, str(acting_user_id), filter_content(body))
    log_product_event(db, event_name="message_sent", user_id=str(acting_user_id), properties={"match_id": match.id})
    db.commit()

    (notify or default_notifier).publish(
        MessageCreated(
            message_id=message.id,
            match_id=match.id,
            sender_id=message.sender_id,
            recipient_id=match.partner_of(acting_user_id),
            content=message.content,
            created_at=message.created_at,
        )
    )
    return message
