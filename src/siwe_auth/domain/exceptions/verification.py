"""
Verification usage and collaborator exceptions.
"""

from typing import Iterable, Optional

from siwe_auth.domain.exceptions.base import SiweAuthException


class InvalidVerifyParamsError(SiweAuthException):
    """Raised when verification parameters contain unknown or missing keys."""

    def __init__(self, invalid_keys: Iterable[str] = (), reason: Optional[str] = None):
        """
        Initialize invalid params error.

        Args:
            invalid_keys: Keys outside the recognized set
            reason: Explanation when the keys themselves are fine
        """
        self.invalid_keys = sorted(invalid_keys)
        if reason is None:
            reason = (
                f"{', '.join(self.invalid_keys)} is/are not valid key(s) "
                "for VerifyParams."
            )
        super().__init__(reason, code="INVALID_VERIFY_PARAMS")


class InvalidVerifyOptsError(SiweAuthException):
    """Raised when verification options contain unknown keys or bad values."""

    def __init__(self, invalid_keys: Iterable[str] = (), reason: Optional[str] = None):
        """
        Initialize invalid opts error.

        Args:
            invalid_keys: Keys outside the recognized set
            reason: Explanation when the keys themselves are fine
        """
        self.invalid_keys = sorted(invalid_keys)
        if reason is None:
            reason = (
                f"{', '.join(self.invalid_keys)} is/are not valid key(s) "
                "for VerifyOpts."
            )
        super().__init__(reason, code="INVALID_VERIFY_OPTS")


class ChainClientError(SiweAuthException):
    """Raised when the ERC-1271 contract call fails."""

    def __init__(self, message: str, address: Optional[str] = None):
        """
        Initialize chain client error.

        Args:
            message: Error description
            address: Contract account that was called
        """
        super().__init__(message, code="CHAIN_CLIENT_ERROR")
        self.address = address
