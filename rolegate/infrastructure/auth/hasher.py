"""bcrypt implementation of CredentialHasher."""

import bcrypt

from rolegate.domain.auth.model.account import Credential
from rolegate.domain.auth.port.credential import CredentialHasher

DEFAULT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password; newer releases reject longer input.
_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


class BcryptCredentialHasher(CredentialHasher):
    """bcrypt with a fresh ``gensalt()`` per credential.

    The salt is stored alongside the hash so the credential row keeps both
    columns populated, though bcrypt also embeds it in the hash itself.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> Credential:
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(_password_bytes(password), salt)
        return Credential(salted_hash=hashed.decode("utf-8"), salt=salt.decode("utf-8"))

    def verify(self, password: str, credential: Credential) -> bool:
        return bcrypt.checkpw(_password_bytes(password), credential.salted_hash.encode("utf-8"))
