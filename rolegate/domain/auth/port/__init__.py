from .credential import CredentialHasher
from .repository import AccountRepository

__all__ = ["AccountRepository", "CredentialHasher"]
