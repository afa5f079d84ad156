"""
Identity for request handlers.

The identity provider issues a bearer JWT whose ``sub`` is the user id. The
engine trusts that id as the acting user and does no further authentication.
"""

import logging
import uuid
from typing import Any

from fastapi import Header, HTTPException

from ..config import DEV_MODE
from .security import decode_access_token

logger = logging.getLogger(__name__)


def _unauthorized(reason: str, trace_id: str) -> HTTPException:
    logger.warning(f"[AUTH_FAILURE] reason={reason} trace_id={trace_id}")
    detail: dict[str, Any] = {"message": "unauthorized", "trace_id": trace_id}
    if DEV_MODE:
        detail["reason"] = reason
    return HTTPException(status_code=401, detail=detail)


def _extract_bearer(authorization: str | None, trace_id: str) -> str:
    if not authorization:
        raise _unauthorized("missing_token", trace_id)
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise _unauthorized("malformed_token", trace_id)
    return parts[1].strip()


def get_current_user(authorization: str | None = Header(default=None, alias="Authorization")) -> dict[str, Any]:
    trace_id = str(uuid.uuid4())
    token = _extract_bearer(authorization, trace_id)
    try:
        payload = decode_access_token(token)
    except HTTPException as exc:
        if exc.status_code != 401:
            raise
        reason = "token_expired" if "expired" in str(exc.detail).lower() else "signature_invalid"
        raise _unauthorized(reason, trace_id) from exc

    user_id = str(payload.get("sub") or "").strip()
    if not user_id:
        raise _unauthorized("token_missing_subject", trace_id)
    logger.debug(f"[auth] token valid, sub={user_id}")
    return {"id": user_id}
