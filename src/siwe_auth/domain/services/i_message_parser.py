"""
Message parser interface.
"""

from abc import ABC, abstractmethod

from siwe_auth.domain.value_objects.parsed_message import ParsedMessage


class IMessageParser(ABC):
    """
    Abstract interface for the EIP-4361 grammar parser.

    Turns the exact text a wallet signed back into structured fields.
    """

    @abstractmethod
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
