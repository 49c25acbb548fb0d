"""
siwe-auth - Sign-In with Ethereum (EIP-4361) messages.

Create, format, parse and verify EIP-4361 messages for EOA and
ERC-1271 contract accounts.
"""

from siwe_auth.application.dto.verification_dto import (
    VerificationResult,
    VerifyOpts,
    VerifyParams,
)
from siwe_auth.domain.entities.siwe_message import SiweMessage
from siwe_auth.domain.exceptions import (
    ChainClientError,
    DomainMismatchError,
    ExpiredMessageError,
    InvalidAddressError,
    InvalidDomainError,
    InvalidMessageVersionError,
    InvalidNonceError,
    InvalidSignatureError,
    InvalidTimeFormatError,
    InvalidUriError,
    InvalidVerifyOptsError,
    InvalidVerifyParamsError,
    NonceMismatchError,
    NotYetValidMessageError,
    SiweAuthException,
    SiweError,
    SiweErrorType,
    UnableToParseError,
)
from siwe_auth.domain.services.i_chain_client import IChainClient
from siwe_auth.infrastructure.blockchain.web3_chain_client import Web3ChainClient
from siwe_auth.infrastructure.crypto.eth_signature_verifier import (
    EthSignatureVerifier,
)
from siwe_auth.infrastructure.parsing.regex_message_parser import (
    RegexMessageParser,
)
from siwe_auth.utils.nonce import generate_nonce

__version__ = "0.1.0"

__all__ = [
    "SiweMessage",
    "VerifyParams",
    "VerifyOpts",
    "VerificationResult",
    "generate_nonce",
    "IChainClient",
    "Web3ChainClient",
    "EthSignatureVerifier",
    "RegexMessageParser",
    "SiweAuthException",
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
    "InvalidVerifyParamsError",
    "InvalidVerifyOptsError",
    "ChainClientError",
]
