"""Application DTOs."""

from siwe_auth.application.dto.verification_dto import (
    VERIFY_OPTS_KEYS,
    VERIFY_PARAMS_KEYS,
    VerificationResult,
    VerifyOpts,
    VerifyParams,
)

__all__ = [
    "VERIFY_OPTS_KEYS",
    "VERIFY_PARAMS_KEYS",
    "VerificationResult",
    "VerifyOpts",
    "VerifyParams",
]
