"""
Unit tests for SiweMessage entity.

Tests field validation, canonical formatting and parsing back from text.
"""

import pytest

from siwe_auth.domain.entities.siwe_message import SiweMessage, parse_chain_id
from siwe_auth.domain.exceptions import (
    InvalidAddressError,
    InvalidDomainError,
    InvalidMessageVersionError,
    InvalidNonceError,
    InvalidTimeFormatError,
    InvalidUriError,
    SiweErrorType,
    UnableToParseError,
)
from siwe_auth.utils.validation import validate_iso8601, validate_nonce

HEADER = "example.com wants you to sign in with your Ethereum account:"


class TestSiweMessage:
    """Unit tests for SiweMessage entity."""

    # ================================================================
    # Creation tests
    # ================================================================

    def test_create_message(self, message_factory, wallet_address):
        """Test creating SiweMessage with required fields."""
        message = message_factory()

        assert message.domain == "example.com"
        assert message.address == wallet_address
        assert message.uri == "https://example.com/login"
        assert message.version == "1"
        assert message.chain_id == 1
        assert message.nonce == "abcdefgh12"
        assert message.statement is None
        assert message.resources is None

    def test_chain_id_from_string(self, message_factory):
        """Test decimal string chain ID is coerced to int."""
        message = message_factory(chain_id="137")

        assert message.chain_id == 137

    def test_missing_nonce_is_generated(self, message_factory):
        """Test nonce is generated when not provided."""
        message = message_factory(nonce=None)

        assert validate_nonce(message.nonce)
        assert len(message.nonce) >= 8

    def test_empty_nonce_is_generated(self, message_factory):
        """Test empty nonce is replaced with a generated one."""
        message = message_factory(nonce="")

        assert validate_nonce(message.nonce)

    def test_resources_are_copied(self, message_factory):
        """Test resources passed as a tuple are stored as a list."""
        message = message_factory(resources=("https://example.com/a",))

        assert message.resources == ["https://example.com/a"]

    # ================================================================
    # Validation tests
    # ================================================================

    def test_empty_domain_rejected(self, message_factory):
        """Test empty domain raises InvalidDomainError."""
        with pytest.raises(InvalidDomainError) as exc_info:
            message_factory(domain="")

        assert exc_info.value.error_type == SiweErrorType.INVALID_DOMAIN

    @pytest.mark.parametrize("domain", ["example.com?x=1", "example.com#top"])
    def test_domain_with_query_or_fragment_rejected(self, message_factory, domain):
        """Test domain containing '?' or '#' is rejected."""
        with pytest.raises(InvalidDomainError):
            message_factory(domain=domain)

    def test_domain_with_port_accepted(self, message_factory):
        """Test domain with port is an accepted authority."""
        message = message_factory(domain="localhost:4361")

        assert message.domain == "localhost:4361"

    def test_lowercase_address_rejected_with_checksum_hint(
        self, message_factory, wallet_address
    ):
        """Test non-checksummed address reports its checksum form."""
        with pytest.raises(InvalidAddressError) as exc_info:
            message_factory(address=wallet_address.lower())

        assert exc_info.value.expected == wallet_address
        assert exc_info.value.received == wallet_address.lower()

    def test_malformed_address_rejected(self, message_factory):
        """Test address that is not 20 bytes of hex is rejected."""
        with pytest.raises(InvalidAddressError) as exc_info:
            message_factory(address="0x1234")

        assert exc_info.value.expected == "EIP-55 checksum address"

    @pytest.mark.parametrize("uri", ["", "not a uri", "example.com/login"])
    def test_invalid_uri_rejected(self, message_factory, uri):
        """Test uri without scheme or with spaces is rejected."""
        with pytest.raises(InvalidUriError):
            message_factory(uri=uri)

    def test_did_uri_accepted(self, message_factory):
        """Test non-http URI is accepted."""
        message = message_factory(uri="did:key:z6MkrJVnaZkeFzdQyMZu1cgjg7k1pZZ6pvBQ7XJPt4swbTQ2")

        assert message.uri.startswith("did:key:")

    def test_unsupported_version_rejected(self, message_factory):
        """Test version other than "1" is rejected."""
        with pytest.raises(InvalidMessageVersionError) as exc_info:
            message_factory(version="2")

        assert exc_info.value.expected == "1"
        assert exc_info.value.received == "2"

    @pytest.mark.parametrize("nonce", ["abc1234", "abcdefgh-12", "abcd efgh"])
    def test_invalid_nonce_rejected(self, message_factory, nonce):
        """Test short or non-alphanumeric nonce is rejected."""
        with pytest.raises(InvalidNonceError):
            message_factory(nonce=nonce)

    @pytest.mark.parametrize(
        "field",
        ["issued_at", "expiration_time", "not_before"],
    )
    def test_invalid_timestamp_rejected(self, message_factory, field):
        """Test timestamps that are not ISO-8601 are rejected."""
        with pytest.raises(InvalidTimeFormatError) as exc_info:
            message_factory(**{field: "2024-02-30T00:00:00Z"})

        assert exc_info.value.received == "2024-02-30T00:00:00Z"

    def test_multiline_statement_rejected(self, message_factory):
        """Test statement with a line break is rejected."""
        with pytest.raises(UnableToParseError):
            message_factory(statement="line one\nline two")

    def test_invalid_resource_rejected(self, message_factory):
        """Test resource that is not a URI is rejected."""
        with pytest.raises(InvalidUriError) as exc_info:
            message_factory(resources=["https://example.com/ok", "not a uri"])

        assert exc_info.value.received == "not a uri"

    def test_first_violation_wins(self, message_factory):
        """Test domain error is reported before address error."""
        with pytest.raises(InvalidDomainError):
            message_factory(domain="", address="0x1234")

    def test_address_checked_before_nonce(self, message_factory):
        """Test address error is reported before nonce error."""
        with pytest.raises(InvalidAddressError):
            message_factory(address="0x1234", nonce="short")

    @pytest.mark.parametrize("chain_id", ["abc", "-1", "1.5", True, None])
    def test_invalid_chain_id_rejected(self, chain_id):
        """Test chain ID that is not a non-negative integer is rejected."""
        with pytest.raises(UnableToParseError):
            parse_chain_id(chain_id)

    # ================================================================
    # Formatting tests
    # ================================================================

    def test_to_message_without_statement(self, message_factory, wallet_address):
        """Test formatting leaves two blank lines when no statement."""
        message = message_factory()

        expected = (
            f"{HEADER}\n"
            f"{wallet_address}\n"
            "\n"
            "\n"
            "URI: https://example.com/login\n"
            "Version: 1\n"
            "Chain ID: 1\n"
            "Nonce: abcdefgh12\n"
            "Issued At: 2024-01-01T00:00:00.000Z"
        )
        assert message.to_message() == expected

    def test_to_message_with_statement(self, message_factory, wallet_address):
        """Test statement sits between blank lines."""
        message = message_factory(statement="I accept the Terms of Service.")

        expected = (
            f"{HEADER}\n"
            f"{wallet_address}\n"
            "\n"
            "I accept the Terms of Service.\n"
            "\n"
            "URI: https://example.com/login\n"
            "Version: 1\n"
            "Chain ID: 1\n"
            "Nonce: abcdefgh12\n"
            "Issued At: 2024-01-01T00:00:00.000Z"
        )
        assert message.to_message() == expected

    def test_to_message_with_optional_fields(self, message_factory):
        """Test optional fields are appended in fixed order."""
        message = message_factory(
            expiration_time="2024-01-02T00:00:00.000Z",
            not_before="2024-01-01T12:00:00.000Z",
            request_id="req-42",
            resources=["https://example.com/a", "ipfs://bafybeiemxf5abjwjbikoz4mc3a3dla6ual3jsgpdr4cjr3oz3evfyavhwq"],
        )

        lines = message.to_message().split("\n")

        assert lines[-6:] == [
            "Expiration Time: 2024-01-02T00:00:00.000Z",
            "Not Before: 2024-01-01T12:00:00.000Z",
            "Request ID: req-42",
            "Resources:",
            "- https://example.com/a",
            "- ipfs://bafybeiemxf5abjwjbikoz4mc3a3dla6ual3jsgpdr4cjr3oz3evfyavhwq",
        ]

    def test_to_message_empty_resources(self, message_factory):
        """Test empty resources list still renders the Resources line."""
        message = message_factory(resources=[])

        assert message.to_message().endswith("\nResources:")

    def test_to_message_fills_issued_at(self, message_factory):
        """Test missing issued_at is set at formatting time."""
        message = message_factory(issued_at=None)

        text = message.to_message()

        assert message.issued_at is not None
        assert validate_iso8601(message.issued_at)
        assert f"Issued At: {message.issued_at}" in text

    def test_to_message_is_idempotent(self, message_factory):
        """Test repeated formatting yields identical text."""
        message = message_factory(issued_at=None)

        assert message.to_message() == message.to_message()
        assert message.prepare_message() == message.to_message()

    def test_to_message_revalidates_mutated_fields(self, message_factory):
        """Test a field mutated after construction is caught at formatting."""
        message = message_factory()
        message.domain = "example.com?evil"

        with pytest.raises(InvalidDomainError):
            message.to_message()

    def test_to_message_refills_cleared_nonce(self, message_factory):
        """Test a nonce cleared after construction is regenerated."""
        message = message_factory()
        message.nonce = None

        text = message.to_message()

        assert validate_nonce(message.nonce)
        assert f"Nonce: {message.nonce}" in text

    # ================================================================
    # Parsing tests
    # ================================================================

    def test_from_message_round_trip(self, message_factory):
        """Test parsing formatted text restores every field."""
        message = message_factory(
            statement="Sign in to Example.",
            expiration_time="2024-01-02T00:00:00.000Z",
            not_before="2024-01-01T00:00:00.000Z",
            request_id="abc",
            resources=["https://example.com/a", "https://example.com/b"],
        )

        parsed = SiweMessage.from_message(message.to_message())

        assert parsed == message
        assert parsed.to_message() == message.to_message()

    def test_from_message_without_optional_fields(self, message_factory):
        """Test absent optional fields parse as None."""
        message = message_factory()

        parsed = SiweMessage.from_message(message.to_message())

        assert parsed.statement is None
        assert parsed.expiration_time is None
        assert parsed.not_before is None
        assert parsed.request_id is None
        assert parsed.resources is None

    def test_from_message_keeps_empty_resources(self, message_factory):
        """Test bare Resources line parses as an empty list."""
        message = message_factory(resources=[])

        parsed = SiweMessage.from_message(message.to_message())

        assert parsed.resources == []

    def test_empty_optional_strings_stored_as_none(self, message_factory):
        """Test empty statement and request id round-trip as absent fields."""
        message = message_factory(statement="", request_id="")

        parsed = SiweMessage.from_message(message.to_message())

        assert message.statement is None
        assert message.request_id is None
        assert parsed == message

    def test_from_message_rejects_garbage(self):
        """Test non-message text raises UnableToParseError."""
        with pytest.raises(UnableToParseError):
            SiweMessage.from_message("hello world")

    def test_from_message_validates_fields(self, message_factory, wallet_address):
        """Test parsed text with a lowercase address fails field validation."""
        text = message_factory().to_message().replace(
            wallet_address, wallet_address.lower()
        )

        with pytest.raises(InvalidAddressError):
            SiweMessage.from_message(text)

    # ================================================================
    # Representation tests
    # ================================================================

    def test_replace_returns_new_message(self, message_factory):
        """Test replace() leaves the original untouched."""
        message = message_factory()

        changed = message.replace(nonce="zyxwvuts98")

        assert changed.nonce == "zyxwvuts98"
        assert message.nonce == "abcdefgh12"

    def test_replace_validates(self, message_factory):
        """Test replace() validates the new field values."""
        with pytest.raises(InvalidNonceError):
            message_factory().replace(nonce="bad")

    def test_replace_unknown_field(self, message_factory):
        """Test replace() rejects unknown field names."""
        with pytest.raises(TypeError):
            message_factory().replace(color="blue")

    def test_to_dict(self, message_factory, wallet_address):
        """Test to_dict() exposes all fields."""
        data = message_factory(resources=["https://example.com/a"]).to_dict()

        assert data["address"] == wallet_address
        assert data["chain_id"] == 1
        assert data["resources"] == ["https://example.com/a"]
        assert set(data) == {
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
        }

    def test_equality(self, message_factory):
        """Test messages with equal fields compare equal."""
        assert message_factory() == message_factory()
        assert message_factory() != message_factory(nonce="zyxwvuts98")

    def test_not_hashable(self, message_factory):
        """Test messages cannot be hashed."""
        with pytest.raises(TypeError):
            hash(message_factory())

    def test_repr(self, message_factory):
        """Test repr includes domain and nonce."""
        text = repr(message_factory())

        assert "example.com" in text
        assert "abcdefgh12" in text
