"""Domain value objects."""

from siwe_auth.domain.value_objects.parsed_message import ParsedMessage

__all__ = ["ParsedMessage"]
