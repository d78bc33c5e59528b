"""Role-hierarchy authorization: pure policy plus request/decision values."""

from .decision import AuthorizationRequest, Decision, DenyReason, Operation
from .policy import (
    can_change_role,
    can_create,
    can_modify_capability,
    can_modify_or_delete,
    can_view,
    evaluate,
)

__all__ = [
    "AuthorizationRequest",
    "Decision",
    "DenyReason",
    "Operation",
    "can_change_role",
    "can_create",
    "can_modify_capability",
    "can_modify_or_delete",
    "can_view",
    "evaluate",
]
