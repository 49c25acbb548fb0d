"""
Web3 chain client for contract-account signatures.

Calls ERC-1271 `isValidSignature` on smart-contract wallets through an
async JSON-RPC provider.
"""

from typing import Optional

import aiohttp
from eth_utils import to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from siwe_auth.config.settings import Settings, get_settings
from siwe_auth.domain.exceptions import ChainClientError
from siwe_auth.domain.services.i_chain_client import IChainClient
from siwe_auth.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

# Minimal ABI for ERC-1271 isValidSignature function
ERC1271_ABI = [
    {
        "inputs": [
            {"internalType": "bytes32", "name": "_hash", "type": "bytes32"},
            {"internalType": "bytes", "name": "_signature", "type": "bytes"},
        ],
        "name": "isValidSignature",
        "outputs": [{"internalType": "bytes4", "name": "magicValue", "type": "bytes4"}],
        "stateMutability": "view",
        "type": "function",
    }
]


class Web3ChainClient(IChainClient):
    """
    ERC-1271 client over web3's AsyncWeb3.

    No retry and no timeout beyond the provider's request timeout; callers
    own the retry policy.
    """

    def __init__(self, w3: AsyncWeb3):
        """
        Initialize chain client.

        Args:
            w3: Async web3 instance bound to the chain the message names
        """
        self.w3 = w3

    @classmethod
    def from_url(
        cls,
        rpc_url: str,
        request_timeout: float = 10.0,
    ) -> "Web3ChainClient":
        """
        Create client for a JSON-RPC endpoint.

        Args:
            rpc_url: HTTP(S) JSON-RPC URL
            request_timeout: Request timeout in seconds

        Returns:
            Web3ChainClient instance
        """
        provider = AsyncHTTPProvider(
            rpc_url,
            request_kwargs={"timeout": aiohttp.ClientTimeout(total=request_timeout)},
        )
        return cls(AsyncWeb3(provider))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Web3ChainClient":
        """
        Create client from ETH_RPC_URL and RPC_REQUEST_TIMEOUT.

        Raises:
            ChainClientError: If ETH_RPC_URL is not configured
        """
        settings = settings or get_settings()
        if not settings.ETH_RPC_URL:
            raise ChainClientError("ETH_RPC_URL not configured")

        return cls.from_url(settings.ETH_RPC_URL, settings.RPC_REQUEST_TIMEOUT)

    async def is_valid_signature(
        self,
        address: str,
        message_hash: bytes,
        signature: bytes,
    ) -> bytes:
        """
        Call isValidSignature(bytes32, bytes) on a contract account.

        An account without code, or one that reverts, answers with empty
        bytes so the caller treats the signature as invalid.

        Args:
            address: Contract account address
            message_hash: 32-byte EIP-191 hash
            signature: Signature bytes

        Returns:
            Raw bytes4 result

        Raises:
            ChainClientError: If the RPC call itself fails
        """
        contract = self.w3.eth.contract(
            address=to_checksum_address(address),
            abi=ERC1271_ABI,
        )

        try:
            result = await contract.functions.isValidSignature(
                message_hash, signature
            ).call()
        except (BadFunctionCallOutput, ContractLogicError) as e:
            logger.debug(
                "isValidSignature rejected by account",
                extra={"address": address, "error": str(e)},
            )
            return b""
        except Exception as e:
            logger.error(
                "isValidSignature call failed",
                extra={
                    "address": address,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            raise ChainClientError(
                f"ERC-1271 contract call failed: {e}", address=address
            ) from e

        return bytes(result)
