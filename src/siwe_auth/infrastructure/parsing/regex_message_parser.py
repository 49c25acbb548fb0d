"""
EIP-4361 message parser.

Parses the text a wallet signed back into structured fields with a single
anchored regular expression that follows the EIP-4361 ABNF layout.
"""

import re
from typing import List, Optional

from siwe_auth.domain.exceptions import UnableToParseError
from siwe_auth.domain.services.i_message_parser import IMessageParser
from siwe_auth.domain.value_objects.parsed_message import ParsedMessage

# Field values are captured loosely (one line each) so that format errors
# surface from entity validation with a precise error type.
MESSAGE_PATTERN = re.compile(
    r"^(?P<domain>[^\n?#]+?) wants you to sign in with your Ethereum account:\n"
    r"(?P<address>0x[a-fA-F0-9]{40})\n"
    r"\n"
    r"(?:(?P<statement>[^\n]+)\n)?"
    r"\n"
    r"URI: (?P<uri>[^\n]+)\n"
    r"Version: (?P<version>[^\n]+)\n"
    r"Chain ID: (?P<chain_id>[0-9]+)\n"
    r"Nonce: (?P<nonce>[^\n]+)\n"
    r"Issued At: (?P<issued_at>[^\n]+)"
    r"(?:\nExpiration Time: (?P<expiration_time>[^\n]+))?"
    r"(?:\nNot Before: (?P<not_before>[^\n]+))?"
    r"(?:\nRequest ID: (?P<request_id>[^\n]*))?"
    r"(?:\nResources:(?P<resources>(?:\n- [^\n]+)*))?"
    r"\Z"
)


class RegexMessageParser(IMessageParser):
    """
    Grammar parser for Sign-In with Ethereum messages.

    Only structure is checked here; field rules (checksum, nonce charset,
    timestamps, URIs) are enforced by SiweMessage.
    """

    def parse(self, message: str) -> ParsedMessage:
        """
        Parse a Sign-In with Ethereum message.

        Args:
            message: Message text as signed

        Returns:
            ParsedMessage with the raw field values

        Raises:
            UnableToParseError: If the text does not follow the grammar
        """
        if not isinstance(message, str):
            raise UnableToParseError("EIP-4361 message text", type(message).__name__)

        match = MESSAGE_PATTERN.match(message)
        if not match:
            raise UnableToParseError(
                "EIP-4361 message text", self._first_line(message)
            )

        return ParsedMessage(
            domain=match.group("domain"),
            address=match.group("address"),
            statement=match.group("statement"),
            uri=match.group("uri"),
            version=match.group("version"),
            chain_id=match.group("chain_id"),
            nonce=match.group("nonce"),
            issued_at=match.group("issued_at"),
            expiration_time=match.group("expiration_time"),
            not_before=match.group("not_before"),
            request_id=match.group("request_id"),
            resources=self._split_resources(match.group("resources")),
        )

    @staticmethod
    def _split_resources(block: Optional[str]) -> Optional[List[str]]:
        """Split the "\\n- a\\n- b" resources block into entries."""
        if block is None:
            return None
        return block.split("\n- ")[1:]

    @staticmethod
    def _first_line(message: str) -> str:
        return message.split("\n", 1)[0][:120]
