"""
Dependency Injection Container for siwe-auth.

Manages the adapters behind SiweMessage.from_message() and verify().
"""

from typing import Optional

from siwe_auth.application.use_cases.verify_siwe_message import VerifySiweMessage
from siwe_auth.config.settings import get_settings
from siwe_auth.domain.services.i_chain_client import IChainClient
from siwe_auth.domain.services.i_message_parser import IMessageParser
from siwe_auth.domain.services.i_signature_verifier import (
    IMessageSignatureVerifier,
)
from siwe_auth.infrastructure.blockchain.web3_chain_client import Web3ChainClient
from siwe_auth.infrastructure.crypto.eth_signature_verifier import (
    EthSignatureVerifier,
)
from siwe_auth.infrastructure.parsing.regex_message_parser import (
    RegexMessageParser,
)


class DIContainer:
    """
    Dependency Injection Container.

    Adapters are stateless and created once; use cases are built per call.
    """

    def __init__(self):
        """Initialize container with None instances."""
        # Domain Services
        self._message_parser: Optional[IMessageParser] = None
        self._signature_verifier: Optional[IMessageSignatureVerifier] = None
        self._chain_client: Optional[IChainClient] = None

    # ================================================================
    # Domain Service Getters
    # ================================================================

    @property
    def message_parser(self) -> IMessageParser:
        """Get EIP-4361 text parser."""
        if self._message_parser is None:
            self._message_parser = RegexMessageParser()
        return self._message_parser

    @property
    def signature_verifier(self) -> IMessageSignatureVerifier:
        """Get EIP-191 signature verifier."""
        if self._signature_verifier is None:
            self._signature_verifier = EthSignatureVerifier()
        return self._signature_verifier

    @property
    def chain_client(self) -> Optional[IChainClient]:
        """
        Get ERC-1271 chain client, if ETH_RPC_URL is configured.

        Verification never uses it implicitly; pass it as the
        chain_client option.
        """
        if self._chain_client is None and get_settings().ETH_RPC_URL:
            self._chain_client = Web3ChainClient.from_settings()
        return self._chain_client

    # ================================================================
    # Use Case Factories
    # ================================================================

    def get_verify_siwe_message(self) -> VerifySiweMessage:
        """Get verify SIWE message use case."""
        return VerifySiweMessage(signature_verifier=self.signature_verifier)


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Drop the global container (tests swap settings between runs)."""
    global _container
    _container = None
