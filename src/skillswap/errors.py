"""Classified service errors.

Every failure a service can report is one of these kinds. The API layer
renders them with the matching HTTP status and a short message in
``{"detail": ...}``, the same shape FastAPI uses for HTTPException.
"""


class SkillSwapError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(SkillSwapError):
    """A required field is missing or malformed."""

    status_code = 400
    default_detail = "Invalid request"


class ConflictError(SkillSwapError):
    """The write would violate a uniqueness rule."""

    status_code = 409
    default_detail = "Conflict"


class AuthenticationError(SkillSwapError):
    """Bad credentials, or a missing, invalid or stale token."""

    status_code = 401
    default_detail = "Authentication required"


class AuthorizationError(SkillSwapError):
    """Authenticated, but not allowed to act on this resource."""

    status_code = 403
    default_detail = "Forbidden"


class NotFoundError(SkillSwapError):
    """Unknown id, including ids that don't parse."""

    status_code = 404
    default_detail = "Not found"
