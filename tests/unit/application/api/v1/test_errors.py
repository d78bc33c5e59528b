"""Tests for mapping RoleGate errors onto HTTP responses."""

import pytest

from rolegate.application.api.v1.errors import map_error
from rolegate.domain.auth.authorization.decision import DenyReason
from rolegate.domain.shared.error import (
    AuthorizationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RoleGateError,
    StorageUnavailableError,
    ValidationError,
)


class TestMapError:
    def test_missing_token_is_401(self) -> None:
        exc = map_error(AuthorizationError("Authentication required", code="missing_token"))

        assert exc.status_code == 401
        assert exc.headers == {"WWW-Authenticate": "Bearer"}
        assert exc.detail["code"] == "missing_token"

    def test_tier_gate_refusal_is_403(self) -> None:
        exc = map_error(AuthorizationError("Access denied", code="access_denied"))
        assert exc.status_code == 403

    @pytest.mark.parametrize("reason", list(DenyReason))
    def test_policy_deny_surfaces_reason(self, reason: DenyReason) -> None:
        exc = map_error(ForbiddenError(reason))

        assert exc.status_code == 403
        assert exc.detail["code"] == reason.value

    def test_not_found_is_404(self) -> None:
        assert map_error(NotFoundError("gone", code="account_not_found")).status_code == 404

    def test_conflict_is_409(self) -> None:
        assert map_error(ConflictError("taken", code="account_exists")).status_code == 409

    def test_validation_is_422_with_field(self) -> None:
        exc = map_error(ValidationError("bad", field="fields"))

        assert exc.status_code == 422
        assert exc.detail == {"code": "VALIDATION_ERROR", "message": "bad", "field": "fields"}

    def test_storage_failure_is_500(self) -> None:
        exc = map_error(StorageUnavailableError("down", code="lookup_timeout"))

        assert exc.status_code == 500
        assert exc.detail["code"] == "lookup_timeout"

    def test_unknown_error_is_500(self) -> None:
        assert map_error(RoleGateError("odd")).status_code == 500
