"""Role hierarchy for authorization."""

from enum import IntEnum


class Role(IntEnum):
    """Hierarchical account roles with numeric ordering.

    Higher values are more privileged. Levels 3-5 are the privileged
    (administrative) tiers; 1-2 are ordinary accounts.
    """

    USER = 1
    MODERATOR = 2
    ADMIN = 3
    SUPER_ADMIN = 4
    OWNER = 5

    @property
    def label(self) -> str:
        """Human-readable tier name, e.g. ``"Super Admin"``."""
        return self.name.replace("_", " ").title()

    @property
    def is_privileged(self) -> bool:
        return self >= MIN_PRIVILEGED_ROLE


MIN_ROLE_LEVEL = int(Role.USER)
MAX_ROLE_LEVEL = int(Role.OWNER)
MIN_PRIVILEGED_ROLE = Role.ADMIN


def is_valid_role_level(level: int) -> bool:
    """True if ``level`` is an integer inside the closed role range [1, 5]."""
    return isinstance(level, int) and not isinstance(level, bool) and (
        MIN_ROLE_LEVEL <= level <= MAX_ROLE_LEVEL
    )
