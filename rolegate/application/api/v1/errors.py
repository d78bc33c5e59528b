"""Centralized error transformation for API routes.

Maps RoleGate errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from rolegate.domain.shared.error import (
    AuthorizationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    RoleGateError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    ConflictError: 409,
    AuthorizationError: 403,
    ForbiddenError: 403,
}


def map_error(error: RoleGateError) -> HTTPException:
    """Map a RoleGate error to an HTTPException.

    The body is always ``{"code": ..., "message": ...}``; validation errors
    add ``field`` when they know which input was at fault.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Backing store failures abort the request before any mutation
        return HTTPException(status_code=500, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        # Distinguish 401 (unauthenticated) from 403 (unauthorized)
        if isinstance(error, AuthorizationError) and error.code == "missing_token":
            return HTTPException(
                status_code=401,
                detail=detail,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown RoleGateError subclasses
    return HTTPException(status_code=500, detail=detail)
