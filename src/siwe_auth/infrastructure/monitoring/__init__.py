"""Monitoring infrastructure - structured logging."""

from siwe_auth.infrastructure.monitoring.logger import (
    JSONFormatter,
    configure_logging,
    get_logger,
    get_verification_id,
    set_verification_id,
    setup_logging,
)

__all__ = [
    "JSONFormatter",
    "configure_logging",
    "get_logger",
    "get_verification_id",
    "set_verification_id",
    "setup_logging",
]
