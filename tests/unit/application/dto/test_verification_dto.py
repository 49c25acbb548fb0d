"""
Unit tests for verification DTOs.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from siwe_auth.application.dto import VerificationResult, VerifyOpts, VerifyParams
from siwe_auth.application.dto.verification_dto import check_invalid_keys
from siwe_auth.domain.exceptions import (
    ExpiredMessageError,
    InvalidVerifyOptsError,
    InvalidVerifyParamsError,
    SiweErrorType,
)


class TestVerifyParams:
    """Unit tests for VerifyParams."""

    def test_from_mapping(self):
        """Test building params from a plain dict."""
        params = VerifyParams.from_input(
            {"signature": "0xabc", "domain": "example.com", "nonce": "abcdefgh12"}
        )

        assert params.signature == "0xabc"
        assert params.domain == "example.com"
        assert params.nonce == "abcdefgh12"
        assert params.time is None

    def test_from_model_passthrough(self):
        """Test an existing model is returned unchanged."""
        params = VerifyParams(signature="0xabc")

        assert VerifyParams.from_input(params) is params

    def test_time_accepts_datetime(self):
        """Test check time given as datetime."""
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert VerifyParams.from_input({"signature": "0xabc", "time": now}).time == now

    def test_unknown_keys_rejected(self):
        """Test unknown keys raise InvalidVerifyParamsError."""
        with pytest.raises(InvalidVerifyParamsError) as exc_info:
            VerifyParams.from_input({"signature": "0xabc", "sig": "x", "chain": 1})

        assert exc_info.value.invalid_keys == ["chain", "sig"]

    @pytest.mark.parametrize("params", [{}, {"signature": ""}, {"domain": "example.com"}])
    def test_missing_signature_rejected(self, params):
        """Test params without a signature are rejected."""
        with pytest.raises(InvalidVerifyParamsError):
            VerifyParams.from_input(params)

    def test_non_mapping_rejected(self):
        """Test non-mapping params are rejected."""
        with pytest.raises(InvalidVerifyParamsError):
            VerifyParams.from_input("0xabc")

    def test_wrong_value_type_rejected(self):
        """Test invalid field types are reported as params errors."""
        with pytest.raises(InvalidVerifyParamsError):
            VerifyParams.from_input({"signature": "0xabc", "domain": 42})

    def test_params_are_frozen(self):
        """Test params cannot be mutated."""
        params = VerifyParams(signature="0xabc")

        with pytest.raises(ValidationError):
            params.signature = "0xdef"


class TestVerifyOpts:
    """Unit tests for VerifyOpts."""

    def test_defaults(self):
        """Test None yields default options."""
        opts = VerifyOpts.from_input(None)

        assert opts.suppress_exceptions is False
        assert opts.chain_client is None

    def test_chain_client_accepted(self):
        """Test object with is_valid_signature is accepted."""
        client = AsyncMock()

        opts = VerifyOpts.from_input({"chain_client": client})

        assert opts.chain_client is client

    def test_chain_client_without_method_rejected(self):
        """Test object lacking is_valid_signature is rejected."""
        with pytest.raises(InvalidVerifyOptsError):
            VerifyOpts.from_input({"chain_client": object()})

    def test_unknown_keys_rejected(self):
        """Test unknown keys raise InvalidVerifyOptsError."""
        with pytest.raises(InvalidVerifyOptsError) as exc_info:
            VerifyOpts.from_input({"provider": "http://localhost:8545"})

        assert exc_info.value.invalid_keys == ["provider"]

    def test_non_mapping_rejected(self):
        """Test non-mapping opts are rejected."""
        with pytest.raises(InvalidVerifyOptsError):
            VerifyOpts.from_input(["suppress_exceptions"])

    @pytest.mark.parametrize(
        "opts, expected",
        [
            (None, False),
            ({}, False),
            ({"suppress_exceptions": True}, True),
            ({"suppress_exceptions": True, "unknown": 1}, True),
            ({"suppress_exceptions": "false"}, False),
            ({"suppress_exceptions": "true"}, True),
            ({"suppress_exceptions": None}, False),
            ({"suppress_exceptions": "maybe"}, False),
            (VerifyOpts(suppress_exceptions=True), True),
        ],
    )
    def test_suppression_requested(self, opts, expected):
        """Test suppression is read even from invalid options."""
        assert VerifyOpts.suppression_requested(opts) is expected


class TestHelpers:
    """Unit tests for DTO helpers."""

    def test_check_invalid_keys(self):
        """Test only unrecognized keys are returned."""
        keys = frozenset({"a", "b"})

        assert check_invalid_keys({"a": 1, "c": 2}, keys) == ["c"]
        assert check_invalid_keys({"a": 1}, keys) == []

    def test_verification_result_error_type(self):
        """Test error_type exposes the message error kind."""
        failed = VerificationResult(
            success=False,
            data=None,
            error=ExpiredMessageError("now", "then"),
        )
        succeeded = VerificationResult(success=True, data=None)

        assert failed.error_type == SiweErrorType.EXPIRED_MESSAGE
        assert succeeded.error_type is None
