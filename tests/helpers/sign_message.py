"""
Helper to sign messages with a fixed Ethereum test key.

The key is the first well-known development account of local nodes
(anvil / hardhat); it must never hold real funds.
"""

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount

TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"

# Second development account, used as "someone else"
OTHER_PRIVATE_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"


def load_account(private_key: str = None) -> LocalAccount:
    """
    Load test account from a private key.

    Args:
        private_key: Hex private key. Defaults to the main test key.

    Returns:
        LocalAccount instance for signing operations
    """
    return Account.from_key(private_key or TEST_PRIVATE_KEY)


def sign_message(message: str, private_key: str = None) -> str:
    """
    Sign a message the way a wallet's personal_sign does (EIP-191).

    Args:
        message: Message text to sign
        private_key: Optional hex private key. Defaults to the main test key.

    Returns:
        0x-prefixed hex signature
    """
    account = load_account(private_key)
    signed = account.sign_message(encode_defunct(text=message))
    return "0x" + bytes(signed.signature).hex()


def get_wallet_address(private_key: str = None) -> str:
    """
    Get checksummed wallet address of a test key.

    Args:
        private_key: Optional hex private key. Defaults to the main test key.

    Returns:
        EIP-55 address
    """
    return load_account(private_key).address
