"""
Tests for the error hierarchy and handling helpers
"""

from unittest.mock import AsyncMock, patch

import pytest

from ircduplex.errors.handling import guard_transport, log_error
from ircduplex.errors.internal import (
    ConfigurationError,
    InternalError,
    NetworkError,
    SessionStateError,
)
from ircduplex.logging_config import error_aggregator


class TestInternalError:
    """Test InternalError metadata handling"""

    def test_data_is_copied(self):
        source = {"operation": "inbound read"}
        error = NetworkError("boom", data=source)
        source["operation"] = "changed"
        assert error.data == {"operation": "inbound read"}

    def test_data_defaults_to_empty(self):
        assert InternalError("boom").data == {}

    @pytest.mark.parametrize("cls", [NetworkError, ConfigurationError, SessionStateError])
    def test_subclasses_share_base(self, cls):
        assert issubclass(cls, InternalError)


class TestLogError:
    """Test error categorisation in log_error"""

    @pytest.mark.parametrize(
        ("error", "expected_type"),
        [
            (NetworkError("x"), "network"),
            (BrokenPipeError("x"), "network"),
            (TimeoutError("x"), "network"),
            (ConfigurationError("x"), "config"),
            (SessionStateError("x"), "session"),
            (InternalError("x"), "internal"),
            (ValueError("x"), "unknown"),
        ],
    )
    def test_error_type_classification(self, error, expected_type):
        with patch("ircduplex.errors.handling.log_structured_error") as mock_log:
            log_error("Something failed", error, context={"k": "v"})
        kwargs = mock_log.call_args.kwargs
        assert kwargs["error_type"] == expected_type
        assert kwargs["message"] == "Something failed: x"
        assert kwargs["exception"] is error
        assert kwargs["context"] == {"k": "v"}

    def test_encoding_errors_get_their_own_category(self):
        with pytest.raises(UnicodeEncodeError) as exc_info:
            "\udcff".encode("utf-8")
        with patch("ircduplex.errors.handling.log_structured_error") as mock_log:
            log_error("Line cannot be encoded", exc_info.value)
        kwargs = mock_log.call_args.kwargs
        assert kwargs["error_type"] == "encoding"
        assert kwargs["exception"] is exc_info.value


class TestGuardTransport:
    """Test transport error normalisation"""

    @pytest.mark.asyncio
    async def test_returns_result(self):
        operation = AsyncMock(return_value=b"data")
        assert await guard_transport(operation, "inbound read") == b"data"
        operation.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_os_error_wrapped(self):
        operation = AsyncMock(side_effect=ConnectionResetError(104, "Connection reset by peer"))
        with pytest.raises(NetworkError) as exc_info:
            await guard_transport(operation, "outbound write")
        error = exc_info.value
        assert "outbound write" in str(error)
        assert error.data["operation"] == "outbound write"
        assert error.data["errno"] == 104
        assert isinstance(error.__cause__, ConnectionResetError)
        assert error_aggregator.get_error_summary()["network"]["total_count"] == 1

    @pytest.mark.asyncio
    async def test_internal_error_passes_through_unlogged(self):
        original = NetworkError("already wrapped")
        operation = AsyncMock(side_effect=original)
        with pytest.raises(NetworkError) as exc_info:
            await guard_transport(operation, "inbound read")
        assert exc_info.value is original
        assert error_aggregator.get_error_summary() == {}

    @pytest.mark.asyncio
    async def test_unrelated_errors_propagate(self):
        operation = AsyncMock(side_effect=ValueError("bug"))
        with pytest.raises(ValueError):
            await guard_transport(operation, "inbound read")

    def test_guard_transport_is_generic_over_result(self):
        (param,) = guard_transport.__type_params__
        assert param.__name__ == "T"
