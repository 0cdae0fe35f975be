"""Domain errors shared by services and the API layer.

Each error carries a stable machine-readable ``kind`` and the HTTP status the
route layer answers with. Services raise them; ``devfeeds.main`` renders them
as ``{"detail": ..., "kind": ...}`` JSON bodies.
"""

from typing import Any

from fastapi import status


class DomainError(Exception):
    """Base class for errors surfaced to API callers."""

    kind = "error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "kind": self.kind, **self.context}


class NotFoundError(DomainError):
    """Referenced feed, post or user does not exist."""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(DomainError):
    """Identity resolved but does not own the resource."""

    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(DomainError):
    """Malformed input."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class UsernameFormatError(ValidationError):
    def __init__(self, username: str) -> None:
        super().__init__(
            "Username must be 3-20 characters and contain only letters, numbers, "
            "dashes, and underscores",
            username=username,
        )


class ConflictError(DomainError):
    """Uniqueness violation."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class UsernameTakenError(ConflictError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Username '{username}' is already taken", username=username)


class SlugExhaustedError(ConflictError):
    def __init__(self, base_slug: str, attempts: int) -> None:
        super().__init__(
            f"Could not find a free slug for '{base_slug}' after {attempts} attempts",
            slug=base_slug,
        )


class CooldownError(DomainError):
    """Username change attempted inside the cooldown window."""

    kind = "cooldown"
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, remaining_days: int) -> None:
        unit = "day" if remaining_days == 1 else "days"
        super().__init__(
            f"You can change your username again in {remaining_days} {unit}",
            remaining_days=remaining_days,
        )
        self.remaining_days = remaining_days


class UpstreamFailure(DomainError):
    """Relational store, identity provider or blob store failed."""

    kind = "upstream_failure"
    status_code = status.HTTP_502_BAD_GATEWAY


class StoreUnavailableError(UpstreamFailure):
    """The relational store could not serve the request."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
