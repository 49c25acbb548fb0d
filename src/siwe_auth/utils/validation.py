"""
Validation utility functions for siwe-auth.

Pure predicates for the field formats of an EIP-4361 message: domains,
EIP-55 addresses, URIs, nonces and ISO-8601 timestamps.
"""

import re
from datetime import date
from typing import Optional

from eth_utils import is_checksum_address, is_hex_address, to_checksum_address
from pydantic import AnyUrl, TypeAdapter, ValidationError

NONCE_PATTERN = re.compile(r"[a-zA-Z0-9]{8,}")

ISO8601_PATTERN = re.compile(
    r"^(?P<date>(?P<year>[0-9]{4})-(?P<month>0[1-9]|1[012])"
    r"-(?P<day>0[1-9]|[12][0-9]|3[01]))"
    r"[Tt](?P<hour>[01][0-9]|2[0-3]):(?P<minute>[0-5][0-9])"
    r":(?P<second>[0-5][0-9]|60)(?P<fraction>\.[0-9]+)?"
    r"(?P<offset>[Zz]|[+-](?:[01][0-9]|2[0-3]):[0-5][0-9])\Z"
)

AnyUrlTypeAdapter = TypeAdapter(AnyUrl)

_WHITESPACE_PATTERN = re.compile(r"\s")


def validate_domain(domain: Optional[str]) -> bool:
    """
    Validate the RFC 4501 authority requesting the signing.

    Args:
        domain: Domain string

    Returns:
        True if non-empty and free of `#` and `?`, False otherwise

    Examples:
        >>> validate_domain("example.com")
        True
        >>> validate_domain("example.com?x=1")
        False
    """
    if not domain or not isinstance(domain, str):
        return False

    return "#" not in domain and "?" not in domain


def validate_checksum_address(address: Optional[str]) -> bool:
    """
    Validate an Ethereum address in EIP-55 mixed-case checksum encoding.

    An address that differs from its checksum form only in letter case is
    rejected.

    Args:
        address: Address string (0x-prefixed)

    Returns:
        True if checksummed, False otherwise
    """
    if not address or not isinstance(address, str):
        return False

    return is_checksum_address(address)


def checksum_address(address: Optional[str]) -> Optional[str]:
    """
    Return the EIP-55 form of a hex address.

    Args:
        address: Address string in any casing

    Returns:
        Checksummed address, or None if it is not a 20-byte hex address
    """
    if not address or not isinstance(address, str) or not is_hex_address(address):
        return None

    return to_checksum_address(address)


def validate_uri(uri: Optional[str]) -> bool:
    """
    Validate an absolute URI with pydantic's AnyUrl parser.

    Args:
        uri: URI string

    Returns:
        True if valid, False otherwise

    Examples:
        >>> validate_uri("https://example.com/login")
        True
        >>> validate_uri("did:key:z6MkfXJX")
        True
        >>> validate_uri("not a uri")
        False
    """
    if not uri or not isinstance(uri, str):
        return False

    # AnyUrl silently strips tabs and newlines
    if _WHITESPACE_PATTERN.search(uri):
        return False

    try:
        AnyUrlTypeAdapter.validate_python(uri)
    except ValidationError:
        return False

    return True


def validate_nonce(nonce: Optional[str]) -> bool:
    """
    Validate a replay-protection nonce.

    The whole nonce must be alphanumeric and at least 8 characters long;
    containing an alphanumeric run of 8 is not enough.

    Args:
        nonce: Nonce string

    Returns:
        True if valid, False otherwise

    Examples:
        >>> validate_nonce("abcdefgh12")
        True
        >>> validate_nonce("abcdefgh-12")
        False
    """
    if not nonce or not isinstance(nonce, str):
        return False

    return NONCE_PATTERN.fullmatch(nonce) is not None


def validate_iso8601(value: Optional[str]) -> bool:
    """
    Validate an RFC 3339 / ISO-8601 date-time string.

    The date part must be a real calendar date (no 2023-02-30).

    Args:
        value: Timestamp string

    Returns:
        True if valid, False otherwise

    Examples:
        >>> validate_iso8601("2024-01-01T00:00:00.000Z")
        True
        >>> validate_iso8601("2024-01-01")
        False
    """
    if not value or not isinstance(value, str):
        return False

    match = ISO8601_PATTERN.match(value)
    if not match:
        return False

    try:
        date(int(match.group("year")), int(match.group("month")), int(match.group("day")))
    except ValueError:
        return False

    return True
