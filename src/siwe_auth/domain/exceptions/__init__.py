"""
Domain exceptions package.
"""

# Base exceptions
from siwe_auth.domain.exceptions.base import SiweAuthException

# Message exceptions
from siwe_auth.domain.exceptions.message import (
    DomainMismatchError,
    ExpiredMessageError,
    InvalidAddressError,
    InvalidDomainError,
    InvalidMessageVersionError,
    InvalidNonceError,
    InvalidSignatureError,
    InvalidTimeFormatError,
    InvalidUriError,
    NonceMismatchError,
    NotYetValidMessageError,
    SiweError,
    SiweErrorType,
    UnableToParseError,
)

# Verification exceptions
from siwe_auth.domain.exceptions.verification import (
    ChainClientError,
    InvalidVerifyOptsError,
    InvalidVerifyParamsError,
)

__all__ = [
    # Base
    "SiweAuthException",
    # Message
    "SiweError",
    "SiweErrorType",
    "InvalidDomainError",
    "InvalidAddressError",
    "InvalidUriError",
    "InvalidMessageVersionError",
    "InvalidNonceError",
    "InvalidTimeFormatError",
    "UnableToParseError",
    "DomainMismatchError",
    "NonceMismatchError",
    "ExpiredMessageError",
    "NotYetValidMessageError",
    "InvalidSignatureError",
    # Verification
    "InvalidVerifyParamsError",
    "InvalidVerifyOptsError",
    "ChainClientError",
]
