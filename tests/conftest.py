"""
Test fixtures and configuration.
"""

from typing import Callable, Generator

import pytest

from siwe_auth.config.settings import Settings, override_settings, reset_settings
from siwe_auth.di.container import reset_container
from siwe_auth.domain.entities.siwe_message import SiweMessage
from tests.helpers.sign_message import get_wallet_address

ISSUED_AT = "2024-01-01T00:00:00.000Z"
NONCE = "abcdefgh12"


@pytest.fixture(autouse=True)
def test_settings() -> Generator[Settings, None, None]:
    """
    Provide isolated settings for every test.

    No RPC endpoint is configured, so nothing reaches a network.
    """
    settings = Settings(
        _env_file=None,
        ENV="test",
        LOG_LEVEL="DEBUG",
        JSON_LOGS=False,
        ETH_RPC_URL=None,
    )
    override_settings(settings)
    reset_container()

    yield settings

    reset_container()
    reset_settings()


@pytest.fixture
def wallet_address() -> str:
    """Checksummed address of the test signing key."""
    return get_wallet_address()


@pytest.fixture
def message_factory(wallet_address: str) -> Callable[..., SiweMessage]:
    """
    Build example.com messages signed-in by the test wallet.

    Keyword arguments override individual fields.
    """

    def _make(**overrides) -> SiweMessage:
        fields = {
            "domain": "example.com",
            "address": wallet_address,
            "uri": "https://example.com/login",
            "version": "1",
            "chain_id": 1,
            "nonce": NONCE,
            "issued_at": ISSUED_AT,
        }
        fields.update(overrides)
        return SiweMessage(**fields)

    return _make
