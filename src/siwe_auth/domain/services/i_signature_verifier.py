"""
Message signature verifier interface.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IMessageSignatureVerifier(ABC):
    """
    Abstract interface for EIP-191 personal-message signatures.

    Covers externally-owned accounts: the signature must recover to the
    account that claims to have signed.
    """

    @abstractmethod
    def verify(self, message: str, signature: str, address: str) -> bool:
        """
        Verify a personal-message signature.

        Args:
            message: Text that was signed
            signature: Signature (0x-prefixed hex)
            address: Account claiming ownership

        Returns:
            True if the signature recovers to address, False otherwise
        """

    @abstractmethod
    def recover_address(self, message: str, signature: str) -> Optional[str]:
        """
        Recover the signer of a personal-message signature.

        Diagnostic only; a recovered address says nothing about validity.

        Args:
            message: Text that was signed
            signature: Signature (0x-prefixed hex)

        Returns:
            Checksummed address, or None if the signature is unrecoverable
        """
