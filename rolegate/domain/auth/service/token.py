"""Token service: validates bearer JWTs and turns their claims into a Principal.

Tokens are issued elsewhere; this service only reads them.
"""

import logging
from typing import Any

import jwt
from pydantic import ValidationError as PydanticValidationError

from rolegate.config import JwtConfig
from rolegate.domain.auth.model.principal import Principal
from rolegate.domain.auth.model.role import Role, is_valid_role_level
from rolegate.domain.auth.model.value import AccountId
from rolegate.domain.shared.service import Service

logger = logging.getLogger(__name__)


class TokenService(Service):
    """Decode access tokens signed with the configured secret.

    Expected claims: ``sub`` (account id), ``role`` (level 1-5), ``aud``, ``exp``.
    """

    _config: JwtConfig

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a JWT access token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        return jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience=self._config.audience,
            options={"require": ["sub", "exp"]},
        )

    def principal_from_token(self, token: str) -> Principal:
        """Decode a token and build the acting Principal from its claims.

        Raises:
            jwt.InvalidTokenError: If the token is invalid, expired, or its
                ``sub``/``role`` claims are malformed.
        """
        payload = self.validate_access_token(token)
        role = payload.get("role")
        if not is_valid_role_level(role):
            raise jwt.InvalidTokenError(f"Invalid role claim: {role!r}")
        try:
            account_id = AccountId(int(payload["sub"]))
        except (TypeError, ValueError, PydanticValidationError) as e:
            raise jwt.InvalidTokenError(f"Invalid sub claim: {payload['sub']!r}") from e
        return Principal(account_id=account_id, role=Role(role))
