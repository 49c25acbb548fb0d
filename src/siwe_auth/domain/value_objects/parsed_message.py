"""
ParsedMessage value object - fields extracted from a signed message text.
"""

from dataclasses import asdict, dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ParsedMessage:
    """
    Raw fields produced by a message parser.

    Values are kept as they appeared in the text; chain_id stays textual
    and is coerced by the message entity.
    """

    domain: str
    address: str
    uri: str
    version: str
    chain_id: str
    nonce: str
    issued_at: str
    statement: Optional[str] = None
    expiration_time: Optional[str] = None
    not_before: Optional[str] = None
    request_id: Optional[str] = None
    resources: Optional[List[str]] = field(default=None)

    def to_dict(self) -> dict:
        """Convert to keyword arguments for SiweMessage."""
        return asdict(self)
