"""Principal: authenticated identity resolved per request from token claims."""

from dataclasses import dataclass

from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role import Role
from rolegate.domain.auth.model.value import AccountId


@dataclass(frozen=True)
class Principal(Identity):
    """The acting account of the current request.

    Built from the ``sub`` and ``role`` claims. Immutable after creation and
    passed explicitly to the gate; nothing reads it from ambient state.
    """

    account_id: AccountId
    role: Role

    def has_role(self, role: Role) -> bool:
        """Check if the principal's role is at or above ``role`` (hierarchy comparison)."""
        return self.role >= role
