"""Utility modules for siwe-auth."""

from siwe_auth.utils.nonce import generate_nonce
from siwe_auth.utils.time import parse_iso8601, to_iso8601, utc_now
from siwe_auth.utils.validation import (
    checksum_address,
    validate_checksum_address,
    validate_domain,
    validate_iso8601,
    validate_nonce,
    validate_uri,
)

__all__ = [
    "generate_nonce",
    "parse_iso8601",
    "to_iso8601",
    "utc_now",
    "checksum_address",
    "validate_checksum_address",
    "validate_domain",
    "validate_iso8601",
    "validate_nonce",
    "validate_uri",
]
