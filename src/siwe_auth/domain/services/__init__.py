"""Domain service interfaces."""

from siwe_auth.domain.services.i_chain_client import (
    ERC1271_MAGIC_VALUE,
    IChainClient,
)
from siwe_auth.domain.services.i_message_parser import IMessageParser
from siwe_auth.domain.services.i_signature_verifier import (
    IMessageSignatureVerifier,
)

__all__ = [
    "ERC1271_MAGIC_VALUE",
    "IChainClient",
    "IMessageParser",
    "IMessageSignatureVerifier",
]
