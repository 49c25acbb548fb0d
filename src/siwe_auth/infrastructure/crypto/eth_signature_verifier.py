"""
Ethereum personal-message signature adapter.

Implements EIP-191 signature verification using eth_account.
"""

from typing import Optional

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import is_hex_address, to_checksum_address

from siwe_auth.domain.services.i_signature_verifier import (
    IMessageSignatureVerifier,
)
from siwe_auth.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class EthSignatureVerifier(IMessageSignatureVerifier):
    """
    EIP-191 signature verification for externally-owned accounts.

    The text is prefixed with "\\x19Ethereum Signed Message:\\n<len>" before
    hashing, matching what wallets do for personal_sign.
    """

    def verify(self, message: str, signature: str, address: str) -> bool:
        """
        Verify EIP-191 signature.

        Args:
            message: Text that was signed
            signature: 65-byte signature (0x-prefixed hex)
            address: Account claiming ownership

        Returns:
            True if signature recovers to address, False otherwise
        """
        if not is_hex_address(address):
            return False

        recovered = self._recover(message, signature)
        if recovered is None:
            return False

        return recovered == to_checksum_address(address)

    def recover_address(self, message: str, signature: str) -> Optional[str]:
        """
        Recover the signing account, for diagnostics.

        Args:
            message: Text that was signed
            signature: Signature (0x-prefixed hex)

        Returns:
            Checksummed address or None if unrecoverable
        """
        return self._recover(message, signature)

    def _recover(self, message: str, signature: str) -> Optional[str]:
        """Recover signer address, None on malformed signatures."""
        try:
            signable = encode_defunct(text=message)
            return Account.recover_message(signable, signature=signature)
        except Exception as e:
            # eth_account/eth_keys raise several unrelated types here
            logger.debug(
                "Signature recovery failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            return None
