"""Authorization request and decision values for role-hierarchy checks."""

from dataclasses import dataclass, replace
from enum import StrEnum

from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId


class Operation(StrEnum):
    """Kinds of admin operation subject to the role hierarchy."""

    CREATE = "create"
    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"
    CHANGE_ROLE = "change_role"


class DenyReason(StrEnum):
    """Why the policy refused. Surfaced verbatim as the 403 error code."""

    INVALID_ROLE = "invalid_role"
    ROLE_TOO_HIGH = "role_too_high"
    SELF_ACTION = "self_action"
    INSUFFICIENT_HIERARCHY = "insufficient_hierarchy"
    PROMOTION_CEILING = "promotion_ceiling"
    TIER_CEILING = "tier_ceiling"


@dataclass(frozen=True)
class Decision:
    """ALLOW, or DENY with exactly one reason. Never touches storage."""

    allowed: bool
    reason: DenyReason | None = None

    def __post_init__(self) -> None:
        if self.allowed == (self.reason is not None):
            raise ValueError("An allow carries no reason; a deny carries exactly one")

    @classmethod
    def allow(cls) -> "Decision":
        return _ALLOW

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)

    @property
    def denied(self) -> bool:
        return not self.allowed

    def __str__(self) -> str:
        return "ALLOW" if self.allowed else f"DENY:{self.reason}"


_ALLOW = Decision(allowed=True)


@dataclass(frozen=True)
class AuthorizationRequest:
    """One authorization decision to make, built per incoming operation.

    ``target_role`` is filled in by the gate's lookup; ``requested_role`` is
    the raw integer from the payload and may be out of range.
    """

    acting_id: AccountId
    acting_role: Role
    operation: Operation
    target_id: AccountId | None = None
    target_role: Role | None = None
    requested_role: int | None = None

    def with_target_role(self, role: Role) -> "AuthorizationRequest":
        return replace(self, target_role=role)
