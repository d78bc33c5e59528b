"""Error hierarchy for RoleGate.

Error layers:
- RoleGateError: Base class for all RoleGate errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage outages (500 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rolegate.domain.auth.authorization.decision import DenyReason


class RoleGateError(Exception):
    """Base class for all RoleGate errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(RoleGateError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class ConflictError(DomainError):
    """Resource already exists."""


class AuthorizationError(DomainError):
    """User not authorized for this operation.

    ``code="missing_token"`` marks an unauthenticated request (401); any other
    code is a refusal for an authenticated principal (403).
    """


class ForbiddenError(AuthorizationError):
    """Role-hierarchy policy denied the operation.

    The deny reason is surfaced verbatim as the error code.
    """

    def __init__(self, reason: DenyReason, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or f"Access denied: {reason.value}", code=reason.value)


# =============================================================================
# Infrastructure Errors (system-level failures)
# =============================================================================


class InfrastructureError(RoleGateError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database) is unavailable or the lookup timed out."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
