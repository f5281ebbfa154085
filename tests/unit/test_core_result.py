"""Unit tests for Result types and DomainError."""

import pytest

from parcel_portal.core.enums import ErrorCode
from parcel_portal.core.result import Failure, Success
from parcel_portal.domain.errors import AuditError, AuthError


@pytest.mark.unit
class TestResult:
    """Test Success/Failure pattern matching."""

    def test_success_matches_value(self):
        match Success(value=42):
            case Success(value=value):
                assert value == 42
            case Failure():
                pytest.fail("expected Success")

    def test_failure_matches_error(self):
        error = AuditError(code=ErrorCode.AUDIT_RECORD_FAILED, message="rejected")

        match Failure(error=error):
            case Failure(error=matched):
                assert matched is error
            case Success():
                pytest.fail("expected Failure")

    def test_results_are_immutable(self):
        result = Success(value=1)

        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]


@pytest.mark.unit
class TestDomainError:
    """Test error values."""

    def test_str_includes_code_and_message(self):
        error = AuthError(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid login credentials",
            status=400,
        )

        assert str(error) == "invalid_credentials: Invalid login credentials"
        assert error.status == 400

    def test_errors_are_not_exceptions(self):
        assert not issubclass(AuthError, Exception)
