"""
Chain client interface.
"""

from abc import ABC, abstractmethod

# ERC-1271 magic value: bytes4(keccak256("isValidSignature(bytes32,bytes)"))
ERC1271_MAGIC_VALUE = bytes.fromhex("1626ba7e")


class IChainClient(ABC):
    """
    Abstract interface for contract-account (ERC-1271) signature checks.

    Implementations call `isValidSignature(bytes32, bytes)` on the account
    and hand back the raw return value; the caller compares it with the
    magic value.
    """

    @abstractmethod
    async def is_valid_signature(
        self,
        address: str,
        message_hash: bytes,
        signature: bytes,
    ) -> bytes:
        """
        Call isValidSignature on a contract account.

        Args:
            address: Contract account address
            message_hash: 32-byte EIP-191 hash of the message
            signature: Signature bytes as submitted

        Returns:
            Raw bytes4 returned by the contract

        Raises:
            ChainClientError: If the call fails
        """
