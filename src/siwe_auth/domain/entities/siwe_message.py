"""
SiweMessage entity - Sign-In with Ethereum (EIP-4361) message.
"""

import re
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional, Union

from siwe_auth.domain.exceptions import (
    InvalidAddressError,
    InvalidDomainError,
    InvalidMessageVersionError,
    InvalidNonceError,
    InvalidTimeFormatError,
    InvalidUriError,
    UnableToParseError,
)
from siwe_auth.utils.nonce import generate_nonce
from siwe_auth.utils.time import to_iso8601, utc_now
from siwe_auth.utils.validation import (
    checksum_address,
    validate_checksum_address,
    validate_domain,
    validate_iso8601,
    validate_nonce,
    validate_uri,
)

if TYPE_CHECKING:
    from siwe_auth.application.dto.verification_dto import (
        VerificationResult,
        VerifyOpts,
        VerifyParams,
    )
    from siwe_auth.domain.services.i_message_parser import IMessageParser

SUPPORTED_VERSION = "1"

_CHAIN_ID_PATTERN = re.compile(r"[0-9]+")

_FIELDS = (
    "domain",
    "address",
    "statement",
    "uri",
    "version",
    "chain_id",
    "nonce",
    "issued_at",
    "expiration_time",
    "not_before",
    "request_id",
    "resources",
)


def parse_chain_id(value: Union[int, str]) -> int:
    """
    Coerce an EIP-155 chain ID given as text into an integer.

    Args:
        value: Chain ID as int or decimal string

    Returns:
        Chain ID

    Raises:
        UnableToParseError: If value is not a non-negative decimal integer
    """
    if isinstance(value, bool):
        raise UnableToParseError("integer chain ID", repr(value))

    if isinstance(value, int):
        return value

    if isinstance(value, str) and _CHAIN_ID_PATTERN.fullmatch(value):
        return int(value)

    raise UnableToParseError("integer chain ID", repr(value))


class SiweMessage:
    """
    Sign-In with Ethereum message entity.

    Binds an Ethereum account to a login request from a relying-party
    domain. The message is validated on construction and again every time
    its canonical text is produced, so an instance never formats invalid
    fields.

    Business rules:
    - domain is non-empty and contains no `#` or `?`
    - address is EIP-55 checksummed
    - uri and every resource are absolute URIs
    - version is "1"
    - nonce is at least 8 alphanumeric characters (generated if absent)
    - issued_at, expiration_time and not_before are ISO-8601 when present
    - statement holds a single line
    """

    def __init__(
        self,
        *,
        domain: str,
        address: str,
        uri: str,
        version: str,
        chain_id: Union[int, str],
        statement: Optional[str] = None,
        nonce: Optional[str] = None,
        issued_at: Optional[str] = None,
        expiration_time: Optional[str] = None,
        not_before: Optional[str] = None,
        request_id: Optional[str] = None,
        resources: Optional[Iterable[str]] = None,
    ):
        """
        Initialize and validate a message.

        Empty optional strings are stored as None, the same as absent fields.

        Raises:
            SiweError: On the first field that breaks its format rule
        """
        # RFC 4501 dns authority requesting the signing
        self.domain = domain
        # EIP-55 checksummed account performing the signing
        self.address = address
        # Human-readable assertion, no line breaks
        self.statement = statement or None
        # RFC 3986 URI referring to the subject of the signing
        self.uri = uri
        self.version = version
        # EIP-155 chain where contract accounts are resolved
        self.chain_id = parse_chain_id(chain_id)
        # Replay protection token
        self.nonce = nonce or generate_nonce()
        self.issued_at = issued_at
        self.expiration_time = expiration_time or None
        self.not_before = not_before or None
        # System-specific identifier of the sign-in request
        self.request_id = request_id or None
        # URIs the user wishes to have resolved as part of authentication
        self.resources: Optional[List[str]] = (
            list(resources) if resources is not None else None
        )

        self.validate_message()

    # ================================================================
    # Construction
    # ================================================================

    @classmethod
    def from_message(
        cls,
        message: str,
        parser: Optional["IMessageParser"] = None,
    ) -> "SiweMessage":
        """
        Create a message from its signed EIP-4361 text.

        Args:
            message: Text as produced by to_message() and signed by a wallet
            parser: Grammar parser (defaults to the container's parser)

        Returns:
            Validated SiweMessage

        Raises:
            UnableToParseError: If the text does not follow the grammar
            SiweError: If a parsed field breaks its format rule
        """
        if parser is None:
            from siwe_auth.di.container import get_container

            parser = get_container().message_parser

        parsed = parser.parse(message)
        return cls(**parsed.to_dict())

    def replace(self, **changes: Any) -> "SiweMessage":
        """
        Return a new validated message with some fields changed.

        Args:
            **changes: Field values to override

        Returns:
            New SiweMessage

        Raises:
            TypeError: If a change names an unknown field
            SiweError: If the changed message is invalid
        """
        fields = self.to_dict()
        fields.update(changes)
        return SiweMessage(**fields)

    # ================================================================
    # Validation
    # ================================================================

    def validate_message(self) -> None:
        """
        Validate every field, stopping at the first violation.

        Order: domain, address, uri, version, nonce, issued_at,
        expiration_time, not_before, then statement and resources.

        Raises:
            SiweError: Typed error for the first violated rule
        """
        if not validate_domain(self.domain):
            raise InvalidDomainError(
                "non-empty domain without '#' or '?'", self.domain
            )

        if not validate_checksum_address(self.address):
            raise InvalidAddressError(
                checksum_address(self.address) or "EIP-55 checksum address",
                self.address,
            )

        if not validate_uri(self.uri):
            raise InvalidUriError("absolute URI", self.uri)

        if self.version != SUPPORTED_VERSION:
            raise InvalidMessageVersionError(SUPPORTED_VERSION, self.version)

        if not validate_nonce(self.nonce):
            raise InvalidNonceError(
                "at least 8 alphanumeric characters", self.nonce
            )

        for name in ("issued_at", "expiration_time", "not_before"):
            value = getattr(self, name)
            if value and not validate_iso8601(value):
                raise InvalidTimeFormatError(f"ISO-8601 {name}", value)

        if self.statement and ("\n" in self.statement or "\r" in self.statement):
            raise UnableToParseError("single-line statement", self.statement)

        for resource in self.resources or []:
            if not validate_uri(resource):
                raise InvalidUriError("absolute resource URI", resource)

    # ================================================================
    # Formatting
    # ================================================================

    def fill_defaults(self) -> None:
        """
        Backfill the fields that default at signing time.

        Sets a fresh nonce if it was cleared and issued_at to the current
        time if absent. Both are persisted, so a populated message is left
        untouched and repeated formatting yields the same text.
        """
        if not self.nonce:
            self.nonce = generate_nonce()

        if not self.issued_at:
            self.issued_at = to_iso8601(utc_now())

    def to_message(self) -> str:
        """
        Build the EIP-4361 text to be signed.

        Returns:
            Canonical message, ready for EIP-191 signing

        Raises:
            SiweError: If a field no longer satisfies its rule
        """
        self.fill_defaults()
        self.validate_message()

        header = f"{self.domain} wants you to sign in with your Ethereum account:"
        prefix = "\n".join([header, self.address])

        suffix_array = [
            f"URI: {self.uri}",
            f"Version: {self.version}",
            f"Chain ID: {self.chain_id}",
            f"Nonce: {self.nonce}",
            f"Issued At: {self.issued_at}",
        ]

        if self.expiration_time:
            suffix_array.append(f"Expiration Time: {self.expiration_time}")

        if self.not_before:
            suffix_array.append(f"Not Before: {self.not_before}")

        if self.request_id:
            suffix_array.append(f"Request ID: {self.request_id}")

        if self.resources is not None:
            suffix_array.append(
                "\n".join(["Resources:"] + [f"- {x}" for x in self.resources])
            )

        # Blank line after the address, then the statement line if any
        prefix = "\n\n".join([prefix, self.statement or ""])
        if self.statement:
            prefix += "\n"

        return "\n".join([prefix, "\n".join(suffix_array)])

    def prepare_message(self) -> str:
        """Return the text to sign for this message's format."""
        return self.to_message()

    # ================================================================
    # Verification
    # ================================================================

    async def verify(
        self,
        params: Union["VerifyParams", Mapping[str, Any]],
        opts: Union["VerifyOpts", Mapping[str, Any], None] = None,
    ) -> "VerificationResult":
        """
        Verify a signature over this message.

        Args:
            params: signature (required), domain, nonce, time
            opts: suppress_exceptions, chain_client

        Returns:
            VerificationResult (success or, when suppressing, failure)

        Raises:
            SiweAuthException: On failure unless suppress_exceptions is set
        """
        from siwe_auth.di.container import get_container

        use_case = get_container().get_verify_siwe_message()
        return await use_case.execute(self, params, opts)

    # ================================================================
    # Representation
    # ================================================================

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        fields = {name: getattr(self, name) for name in _FIELDS}
        if fields["resources"] is not None:
            fields["resources"] = list(fields["resources"])
        return fields

    def __eq__(self, other) -> bool:
        """Compare messages by field values."""
        if not isinstance(other, SiweMessage):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    # Mutable (defaults are backfilled), so not hashable
    __hash__ = None

    def __repr__(self) -> str:
        """Detailed representation."""
        return (
            f"SiweMessage(domain={self.domain!r}, address={self.address!r}, "
            f"chain_id={self.chain_id}, nonce={self.nonce!r})"
        )
