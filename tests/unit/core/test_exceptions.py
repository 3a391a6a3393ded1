"""Unit tests for src/core/exceptions.py."""

import pytest
import pytest_check

from src.core.exceptions import (
    BridgeError,
    ConfigurationError,
    ErrorCode,
    ExternalServiceError,
    Severity,
    UnauthorizedError,
    ValidationError,
)


@pytest.mark.unit
class TestBridgeError:
    """Test cases for the base exception."""

    def test_attributes(self) -> None:
        """Error code enums are stored by value with context and cause."""
        cause = ValueError("root")
        error = BridgeError(
            ErrorCode.INTERNAL_ERROR, "Something broke", context={"a": 1}, cause=cause
        )

        with pytest_check.check:
            assert error.error_code == "INTERNAL_ERROR"
        with pytest_check.check:
            assert error.message == "Something broke"
        with pytest_check.check:
            assert error.severity == Severity.MEDIUM
        with pytest_check.check:
            assert error.context == {"a": 1}
        with pytest_check.check:
            assert error.__cause__ is cause
        with pytest_check.check:
            assert len(error.fingerprint) == 16

    def test_string_representations(self) -> None:
        """str shows code and message, repr shows the context."""
        error = BridgeError("CUSTOM", "msg", context={"k": "v"})

        assert str(error) == "[CUSTOM] msg"
        assert repr(error) == (
            "BridgeError(error_code='CUSTOM', message='msg', "
            "severity=MEDIUM, context={'k': 'v'})"
        )

    def test_fingerprint_is_stable(self) -> None:
        """Errors raised from the same place group together."""

        def make() -> BridgeError:
            return BridgeError(ErrorCode.INTERNAL_ERROR, "x")

        assert make().fingerprint == make().fingerprint


@pytest.mark.unit
class TestSpecializedErrors:
    """Test cases for the specialised exceptions."""

    @pytest.mark.parametrize(
        ("error", "code", "severity"),
        [
            (ValidationError("v"), "VALIDATION_ERROR", Severity.LOW),
            (UnauthorizedError("u"), "UNAUTHORIZED", Severity.HIGH),
            (ConfigurationError("c"), "CONFIGURATION_ERROR", Severity.MEDIUM),
            (
                ExternalServiceError("e", service="avatax"),
                "EXTERNAL_SERVICE_ERROR",
                Severity.HIGH,
            ),
        ],
    )
    def test_codes_and_severity(
        self, error: BridgeError, code: str, severity: Severity
    ) -> None:
        """Each subclass has its own code and severity."""
        assert error.error_code == code
        assert error.severity == severity
        assert error.should_alert == (severity == Severity.HIGH)
        assert error.is_expected == (severity != Severity.HIGH)

    def test_external_service_context(self) -> None:
        """Service and status code are recorded in the context."""
        error = ExternalServiceError(
            "AvaTax down", service="avatax", status_code=503, context={"op": "x"}
        )

        assert error.service == "avatax"
        assert error.status_code == 503
        assert error.context == {"service": "avatax", "op": "x", "status_code": 503}
