"""
Sign-In with Ethereum message exceptions.

Every failure of message construction, formatting or verification is a
SiweError carrying a SiweErrorType plus the expected/received pair that
explains it.
"""

from enum import Enum
from typing import Optional

from siwe_auth.domain.exceptions.base import SiweAuthException


class SiweErrorType(str, Enum):
    """Kinds of message errors, valued with their human-readable description."""

    # Construction / formatting
    INVALID_DOMAIN = "Invalid domain."
    INVALID_ADDRESS = "Invalid address."
    INVALID_URI = "URI does not conform to RFC 3986."
    INVALID_MESSAGE_VERSION = "Invalid message version."
    INVALID_NONCE = "Nonce size smaller then 8 characters or is not alphanumeric."
    INVALID_TIME_FORMAT = "Invalid time format."
    UNABLE_TO_PARSE = "Unable to parse the message."

    # Verification
    DOMAIN_MISMATCH = "Domain does not match provided domain for verification."
    NONCE_MISMATCH = "Nonce does not match provided nonce for verification."
    EXPIRED_MESSAGE = "Expired message."
    NOT_YET_VALID_MESSAGE = "Message is not valid yet."
    INVALID_SIGNATURE = "Signature does not match address of the message."


class SiweError(SiweAuthException):
    """
    Raised when a message invariant or a verification check fails.

    Attributes:
        error_type: Kind of failure
        expected: What the check expected (e.g. checksummed address)
        received: What it actually got
    """

    error_type: SiweErrorType = SiweErrorType.UNABLE_TO_PARSE

    def __init__(
        self,
        error_type: Optional[SiweErrorType] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
    ):
        """
        Initialize message error.

        Args:
            error_type: Kind of failure (defaults to the class kind)
            expected: Expected value, if meaningful
            received: Received value, if meaningful
        """
        self.error_type = error_type or self.error_type
        self.expected = expected
        self.received = received

        message = self.error_type.value
        if expected is not None or received is not None:
            message = f"{message} Expected: {expected}; Received: {received}"
        super().__init__(message, code=self.error_type.name)

    def to_dict(self) -> dict:
        """Convert error to dictionary representation."""
        return {
            "type": self.error_type.name,
            "message": self.error_type.value,
            "expected": self.expected,
            "received": self.received,
        }


class _TypedSiweError(SiweError):
    """SiweError whose kind is fixed by the subclass."""

    def __init__(
        self,
        expected: Optional[str] = None,
        received: Optional[str] = None,
    ):
        super().__init__(type(self).error_type, expected, received)


class InvalidDomainError(_TypedSiweError):
    """Raised when the domain is empty or contains `#` or `?`."""

    error_type = SiweErrorType.INVALID_DOMAIN


class InvalidAddressError(_TypedSiweError):
    """Raised when the address is not EIP-55 checksummed."""

    error_type = SiweErrorType.INVALID_ADDRESS


class InvalidUriError(_TypedSiweError):
    """Raised when the uri or a resource is not an absolute URI."""

    error_type = SiweErrorType.INVALID_URI


class InvalidMessageVersionError(_TypedSiweError):
    """Raised when the version is not "1"."""

    error_type = SiweErrorType.INVALID_MESSAGE_VERSION


class InvalidNonceError(_TypedSiweError):
    """Raised when the nonce is short or not alphanumeric."""

    error_type = SiweErrorType.INVALID_NONCE


class InvalidTimeFormatError(_TypedSiweError):
    """Raised when a timestamp is not an ISO-8601 date-time."""

    error_type = SiweErrorType.INVALID_TIME_FORMAT


class UnableToParseError(_TypedSiweError):
    """Raised when a message cannot be parsed or represented."""

    error_type = SiweErrorType.UNABLE_TO_PARSE


class DomainMismatchError(_TypedSiweError):
    error_type = SiweErrorType.DOMAIN_MISMATCH


class NonceMismatchError(_TypedSiweError):
    error_type = SiweErrorType.NONCE_MISMATCH


class ExpiredMessageError(_TypedSiweError):
    error_type = SiweErrorType.EXPIRED_MESSAGE


class NotYetValidMessageError(_TypedSiweError):
    error_type = SiweErrorType.NOT_YET_VALID_MESSAGE


class InvalidSignatureError(_TypedSiweError):
    """Raised when neither the account key nor its contract accepts the signature."""

    error_type = SiweErrorType.INVALID_SIGNATURE
