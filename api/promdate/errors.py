"""
Error taxonomy of the matching engine.

Services raise these; ``main.py`` maps them onto HTTP responses. A uniqueness
collision while creating a match is not an error: it surfaces as
``InviteOutcome.conflict_resolved`` on a successful result.
"""


class MatchEngineError(Exception):
    status_code = 400
    code = "match_engine_error"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class Unauthorized(MatchEngineError):
    """The acting identity is not the party the operation requires."""

    status_code = 403
    code = "unauthorized"


class QuotaExceeded(MatchEngineError):
    """Daily invite allowance used up for a non-privileged user."""

    status_code = 429
    code = "quota_exceeded"

    def __init__(self, detail: str = "Daily invite limit reached", remaining: int = 0):
        self.remaining = remaining
        super().__init__(detail)


class InvalidState(MatchEngineError):
    status_code = 409
    code = "invalid_state"


class NotFound(MatchEngineError):
    status_code = 404
    code = "not_found"
