"""Crypto infrastructure."""

from siwe_auth.infrastructure.crypto.eth_signature_verifier import (
    EthSignatureVerifier,
)

__all__ = ["EthSignatureVerifier"]
