"""Domain entities."""

from siwe_auth.domain.entities.siwe_message import SiweMessage, parse_chain_id

__all__ = ["SiweMessage", "parse_chain_id"]
