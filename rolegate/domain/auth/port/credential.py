"""Port for the opaque credential-hashing capability."""

from abc import abstractmethod
from typing import Protocol

from rolegate.domain.auth.model.account import Credential
from rolegate.domain.shared.port import Port


class CredentialHasher(Port, Protocol):
    @abstractmethod
    def hash(self, password: str) -> Credential:
        """Hash a password with a fresh salt."""
        ...

    @abstractmethod
    def verify(self, password: str, credential: Credential) -> bool:
        """Check a password against a stored credential."""
        ...
