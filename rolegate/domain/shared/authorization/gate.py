"""Handler-level authorization gates: at_least(Role)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rolegate.domain.auth.model.role import Role

logger = logging.getLogger("rolegate.authz")


class Gate:
    """Base for handler-level authorization gates.

    Every CommandHandler/QueryHandler must declare ``__auth__: ClassVar[Gate]``.
    Subclasses define specific gate behaviors.
    """


@dataclass(frozen=True)
class AtLeast(Gate):
    """Gate that requires the principal to hold at least the given role tier."""

    role: "Role"


def at_least(role: "Role") -> AtLeast:
    """Mark a handler as requiring at least the given role."""
    return AtLeast(role=role)


def enforce_gate(handler: Any) -> None:
    """Evaluate the handler's ``__auth__`` gate against its ``identity`` field.

    Raises:
        ConfigurationError: if the handler declares no gate.
        AuthorizationError: ``missing_token`` when unauthenticated,
            ``access_denied`` when the role tier is too low.
    """
    from rolegate.domain.auth.model.principal import Principal
    from rolegate.domain.shared.error import AuthorizationError, ConfigurationError

    gate = getattr(type(handler), "__auth__", None)
    if not isinstance(gate, Gate):
        raise ConfigurationError(f"Handler {type(handler).__name__} has no __auth__ declaration")

    if isinstance(gate, AtLeast):
        principal = getattr(handler, "identity", None)
        if not isinstance(principal, Principal):
            raise AuthorizationError("Authentication required", code="missing_token")

        logger.debug(
            "Gate check: handler=%s, required=%s, principal_role=%s, account_id=%s",
            type(handler).__name__,
            gate.role.name,
            principal.role.name,
            principal.account_id,
        )

        if not principal.has_role(gate.role):
            raise AuthorizationError(
                f"Access denied: {type(handler).__name__} requires {gate.role.label}",
                code="access_denied",
            )
        return

    raise ConfigurationError(  # pragma: no cover
        f"Handler {type(handler).__name__} has unhandled __auth__ type: {type(gate).__name__}"
    )
