"""Role-hierarchy policy: pure predicates over role levels.

Nothing in this module performs I/O or keeps state, so every function is safe
to call concurrently and returns the same Decision for the same inputs.

Rules at a glance:
- create: the new account's role may be equal to or below the actor's
- view: any privileged tier (Admin and above) may read the admin surface
- update/delete: the actor must rank strictly above the target; nobody
  deletes themself
- change role: see ``can_change_role`` for the ordered rule list
"""

from collections.abc import Hashable

from rolegate.domain.auth.authorization.decision import (
    AuthorizationRequest,
    Decision,
    DenyReason,
    Operation,
)
from rolegate.domain.auth.model.role import MIN_PRIVILEGED_ROLE, Role, is_valid_role_level


def can_create(acting_role: Role, requested_role: int) -> Decision:
    """Decide whether ``acting_role`` may create an account at ``requested_role``."""
    if not is_valid_role_level(requested_role):
        return Decision.deny(DenyReason.INVALID_ROLE)
    if requested_role <= acting_role:
        return Decision.allow()
    return Decision.deny(DenyReason.ROLE_TOO_HIGH)


def can_view(acting_role: Role) -> Decision:
    """Coarse read gate for the admin surface, independent of any target."""
    if acting_role.is_privileged:
        return Decision.allow()
    return Decision.deny(DenyReason.INSUFFICIENT_HIERARCHY)


def can_modify_or_delete(
    acting_role: Role,
    acting_id: Hashable,
    target_role: Role,
    target_id: Hashable,
    operation: Operation,
) -> Decision:
    """Decide an update or delete against an existing account.

    Requires a strictly higher role than the target, so peers are protected
    from each other. Self-delete is always refused, whatever the roles.
    """
    if operation == Operation.DELETE and acting_id == target_id:
        return Decision.deny(DenyReason.SELF_ACTION)
    if acting_role > target_role:
        return Decision.allow()
    return Decision.deny(DenyReason.INSUFFICIENT_HIERARCHY)


def can_change_role(
    acting_role: Role,
    acting_id: Hashable,
    target_id: Hashable,
    target_current_role: Role,
    requested_new_role: int,
) -> Decision:
    """Decide a role change. Rules are checked in order; the first failure wins.

    1. nobody changes their own role
    2. the new role must be a valid level
    3. nobody promotes above their own role
    4. the target must currently rank strictly below the actor
    5. an Admin may only assign roles up to Admin
    """
    if acting_id == target_id:
        return Decision.deny(DenyReason.SELF_ACTION)
    if not is_valid_role_level(requested_new_role):
        return Decision.deny(DenyReason.INVALID_ROLE)
    if requested_new_role > acting_role:
        return Decision.deny(DenyReason.PROMOTION_CEILING)
    if target_current_role >= acting_role:
        return Decision.deny(DenyReason.INSUFFICIENT_HIERARCHY)
    if acting_role == MIN_PRIVILEGED_ROLE and requested_new_role > MIN_PRIVILEGED_ROLE:
        return Decision.deny(DenyReason.TIER_CEILING)
    return Decision.allow()


def can_modify_capability(modifier_role: Role, target_role: Role) -> bool:
    """Simplified capability check for use outside the request pipeline.

    Owners may modify anyone, including other Owners. This differs from
    ``can_modify_or_delete``, which never lets a peer modify a peer.
    """
    if modifier_role == Role.OWNER:
        return True
    return modifier_role > target_role


def evaluate(request: AuthorizationRequest) -> Decision:
    """Dispatch a fully-resolved request to the matching rule set.

    Raises:
        ValueError: if a field the operation needs is missing. That is a
            wiring bug in the caller, not a deny.
    """
    op = request.operation

    if op == Operation.CREATE:
        if request.requested_role is None:
            raise ValueError("CREATE requires requested_role")
        return can_create(request.acting_role, request.requested_role)

    if op == Operation.VIEW:
        return can_view(request.acting_role)

    if request.target_id is None or request.target_role is None:
        raise ValueError(f"{op.value} requires target_id and target_role")

    if op in (Operation.UPDATE, Operation.DELETE):
        return can_modify_or_delete(
            request.acting_role,
            request.acting_id,
            request.target_role,
            request.target_id,
            op,
        )

    if request.requested_role is None:
        raise ValueError("CHANGE_ROLE requires requested_role")
    return can_change_role(
        request.acting_role,
        request.acting_id,
        request.target_id,
        request.target_role,
        request.requested_role,
    )
