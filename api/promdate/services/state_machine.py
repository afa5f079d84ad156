from ..errors import InvalidState
from ..models import INVITE_ACCEPTED, INVITE_PENDING, INVITE_REJECTED

NO_INVITE = "none"

ACTION_INVITE = "invite"
ACTION_ACCEPT = "accept"
ACTION_REJECT = "reject"


def transition_invite(current: str | None, action: str) -> str:
    current = current or NO_INVITE

    if action == ACTION_INVITE:
        if current in {NO_INVITE, INVITE_REJECTED}:
            return INVITE_PENDING
        if current in {INVITE_PENDING, INVITE_ACCEPTED}:
            return current
        raise InvalidState(f"cannot invite from state {current}")

    if action == ACTION_ACCEPT:
        if current in {INVITE_PENDING, INVITE_ACCEPTED}:
            return INVITE_ACCEPTED
        raise InvalidState(f"cannot accept invite in state {current}")

    if action == ACTION_REJECT:
        if current in {INVITE_PENDING, INVITE_REJECTED}:
            return INVITE_REJECTED
        raise InvalidState(f"cannot reject invite in state {current}")

    raise InvalidState(f"unknown invite action {action}")
