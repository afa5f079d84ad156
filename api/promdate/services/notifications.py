"""
Post-commit hand-off to the realtime channel.

The engine only guarantees that the durable row exists before anything is
published; delivery to connected clients belongs to whatever subscribes here
(websocket fan-out, push service, ...).
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchCreated:
    match_id: str
    user1_id: str
    user2_id: str
    created_at: datetime | None = None

    @property
    def recipients(self) -> tuple[str, str]:
        return (self.user1_id, self.user2_id)


@dataclass(frozen=True)
class MessageCreated:
    message_id: str
    match_id: str
    sender_id: str
    recipient_id: str
    content: str
    created_at: datetime | None = None

    @property
    def recipients(self) -> tuple[str, ...]:
        return (self.recipient_id,)


Subscriber = Callable[[object], None]


@dataclass
class Notifier:
    _subscribers: list[Subscriber] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(fn)

        def _unsubscribe() -> None:
            with self._lock:
                if fn in self._subscribers:
                    self._subscribers.remove(fn)

        return _unsubscribe

    def publish(self, event: object) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for fn in subscribers:
            try:
                fn(event)
            except Exception:
                # the row is already committed; a broken subscriber must not fail the request
                logger.exception(f"[notify] subscriber failed for {type(event).__name__}")


notifier = Notifier()
