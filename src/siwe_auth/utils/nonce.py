"""
Nonce generation for replay protection.
"""

import secrets
import string

_ALPHANUMERICS = string.ascii_letters + string.digits

MIN_NONCE_LENGTH = 8
DEFAULT_NONCE_LENGTH = 11


def generate_nonce(length: int = DEFAULT_NONCE_LENGTH) -> str:
    """
    Generate a cryptographically random alphanumeric nonce.

    Args:
        length: Number of characters (at least 8)

    Returns:
        Nonce string

    Raises:
        ValueError: If length is below the EIP-4361 minimum
    """
    if length < MIN_NONCE_LENGTH:
        raise ValueError(
            f"Nonce length must be at least {MIN_NONCE_LENGTH}, got {length}"
        )

    return "".join(secrets.choice(_ALPHANUMERICS) for _ in range(length))
