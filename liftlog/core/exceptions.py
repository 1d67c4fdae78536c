"""Domain errors raised by the session engine.

All errors are synchronous rejections of the triggering operation. The API
layer maps them to HTTP status codes; nothing here is retried.
"""


class WorkoutEngineError(Exception):
    """Base for all engine errors."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ConflictError(WorkoutEngineError):
    """A session is already active."""

    status_code = 409


class NotFoundError(WorkoutEngineError):
    """No active session, or an unresolvable reference."""

    status_code = 404


class ValidationError(WorkoutEngineError):
    """Malformed input (e.g. voice-derived log missing reps/weight/exercise)."""

    status_code = 422
