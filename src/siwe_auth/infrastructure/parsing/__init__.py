"""Parsing infrastructure."""

from siwe_auth.infrastructure.parsing.regex_message_parser import (
    MESSAGE_PATTERN,
    RegexMessageParser,
)

__all__ = ["MESSAGE_PATTERN", "RegexMessageParser"]
