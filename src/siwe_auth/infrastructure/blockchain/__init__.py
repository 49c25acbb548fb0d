"""Blockchain infrastructure."""

from siwe_auth.infrastructure.blockchain.web3_chain_client import (
    ERC1271_ABI,
    Web3ChainClient,
)

__all__ = ["ERC1271_ABI", "Web3ChainClient"]
