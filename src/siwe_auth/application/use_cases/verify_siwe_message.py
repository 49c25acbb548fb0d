"""
Verify SIWE Message use case.

Binds a submitted signature, domain, nonce and check time to a message and
proves the signature came from the message's account.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from eth_account.messages import defunct_hash_message
from eth_utils import decode_hex

from siwe_auth.application.dto.verification_dto import (
    VerificationResult,
    VerifyOpts,
    VerifyParams,
)
from siwe_auth.domain.exceptions import (
    ChainClientError,
    DomainMismatchError,
    ExpiredMessageError,
    InvalidSignatureError,
    InvalidTimeFormatError,
    NonceMismatchError,
    NotYetValidMessageError,
    SiweAuthException,
)
from siwe_auth.domain.services.i_chain_client import (
    ERC1271_MAGIC_VALUE,
    IChainClient,
)
from siwe_auth.domain.services.i_signature_verifier import (
    IMessageSignatureVerifier,
)
from siwe_auth.infrastructure.monitoring import get_logger, set_verification_id
from siwe_auth.utils.time import coerce_datetime, parse_iso8601, to_iso8601, utc_now

if TYPE_CHECKING:
    from siwe_auth.domain.entities.siwe_message import SiweMessage

logger = get_logger(__name__)


class VerifySiweMessage:
    """
    Verify a signature over a Sign-In with Ethereum message.

    Business rules (checked in order, first failure wins):
    - params and opts only use recognized keys; signature is required
    - supplied domain and nonce must equal the message's
    - check time t must satisfy not_before <= t < expiration_time
    - signature must verify over the freshly formatted message text,
      either as an EOA signature or through ERC-1271 when a chain client
      is configured

    Every failure becomes a failed VerificationResult; suppress_exceptions
    decides whether that result is returned or its error raised.
    """

    def __init__(self, signature_verifier: IMessageSignatureVerifier):
        """
        Initialize use case with dependencies.

        Args:
            signature_verifier: EIP-191 verifier for externally-owned accounts
        """
        self.signature_verifier = signature_verifier

    async def execute(
        self,
        message: "SiweMessage",
        params: Union[VerifyParams, Mapping[str, Any]],
        opts: Union[VerifyOpts, Mapping[str, Any], None] = None,
    ) -> VerificationResult:
        """
        Execute message verification.

        Args:
            message: Message the signature claims to cover
            params: signature (required), domain, nonce, time
            opts: suppress_exceptions, chain_client

        Returns:
            VerificationResult

        Raises:
            SiweAuthException: On failure, unless suppress_exceptions is set
        """
        set_verification_id()

        try:
            result = await self._verify(message, params, opts)
        except SiweAuthException as error:
            result = VerificationResult(success=False, data=message, error=error)

        if result.success:
            logger.info(
                "SIWE message verified",
                extra={"address": message.address, "domain": message.domain},
            )
            return result

        logger.warning(
            f"SIWE verification failed: {result.error.code}",
            extra={
                "address": message.address,
                "domain": message.domain,
                "error_code": result.error.code,
            },
        )

        if VerifyOpts.suppression_requested(opts):
            return result

        raise result.error

    # ================================================================
    # Pipeline
    # ================================================================

    async def _verify(
        self,
        message: "SiweMessage",
        params: Union[VerifyParams, Mapping[str, Any]],
        opts: Union[VerifyOpts, Mapping[str, Any], None],
    ) -> VerificationResult:
        """Run the guard chain, raising the first failure."""
        # 1. Closed key sets
        verify_params = VerifyParams.from_input(params)
        verify_opts = VerifyOpts.from_input(opts)

        # 2-4. Bindings
        self._validate_domain_binding(message, verify_params.domain)
        self._validate_nonce_binding(message, verify_params.nonce)
        self._validate_message_time(message, verify_params.time)

        # 5. Sign over the current fields, never a cached text
        text = message.prepare_message()

        # 6. Strategies
        signature = verify_params.signature
        if self.signature_verifier.verify(text, signature, message.address):
            return VerificationResult(success=True, data=message)

        if verify_opts.chain_client is not None:
            if await self._check_contract_wallet_signature(
                message, text, signature, verify_opts.chain_client
            ):
                return VerificationResult(success=True, data=message)

        recovered = self._recover_address_for_diagnostics(text, signature)
        raise InvalidSignatureError(expected=message.address, received=recovered)

    def _validate_domain_binding(
        self,
        message: "SiweMessage",
        domain: Optional[str],
    ) -> None:
        if domain and domain != message.domain:
            raise DomainMismatchError(expected=domain, received=message.domain)

    def _validate_nonce_binding(
        self,
        message: "SiweMessage",
        nonce: Optional[str],
    ) -> None:
        if nonce and nonce != message.nonce:
            raise NonceMismatchError(expected=nonce, received=message.nonce)

    def _validate_message_time(
        self,
        message: "SiweMessage",
        time: Union[str, datetime, None],
    ) -> None:
        """
        Check the validity window against one effective time.

        Expiration is exclusive (t == expiration_time fails), not-before is
        inclusive (t == not_before passes).
        """
        if time:
            try:
                check_time = coerce_datetime(time)
            except ValueError:
                raise InvalidTimeFormatError("ISO-8601 check time", str(time)) from None
        else:
            check_time = utc_now()

        if message.expiration_time:
            expiration_time = self._parse_message_time(
                "expiration_time", message.expiration_time
            )
            if check_time >= expiration_time:
                raise ExpiredMessageError(
                    expected=to_iso8601(check_time),
                    received=message.expiration_time,
                )

        if message.not_before:
            not_before = self._parse_message_time("not_before", message.not_before)
            if check_time < not_before:
                raise NotYetValidMessageError(
                    expected=to_iso8601(check_time),
                    received=message.not_before,
                )

    @staticmethod
    def _parse_message_time(name: str, value: str) -> datetime:
        """Parse a message timestamp, which may have been mutated since validation."""
        try:
            return parse_iso8601(value)
        except ValueError:
            raise InvalidTimeFormatError(f"ISO-8601 {name}", value) from None

    async def _check_contract_wallet_signature(
        self,
        message: "SiweMessage",
        text: str,
        signature: str,
        chain_client: IChainClient,
    ) -> bool:
        """
        Ask the account contract whether it accepts the signature (ERC-1271).

        Raises:
            ChainClientError: If the contract call fails
        """
        try:
            signature_bytes = decode_hex(signature)
        except (ValueError, TypeError):
            return False

        message_hash = bytes(defunct_hash_message(text=text))

        logger.debug(
            "Falling back to ERC-1271 check",
            extra={"address": message.address},
        )

        try:
            response = await chain_client.is_valid_signature(
                message.address, message_hash, signature_bytes
            )
        except ChainClientError:
            raise
        except Exception as e:
            raise ChainClientError(
                f"ERC-1271 contract call failed: {e}", address=message.address
            ) from e

        return self._normalize_chain_response(response) == ERC1271_MAGIC_VALUE

    @staticmethod
    def _normalize_chain_response(response: Any) -> bytes:
        """Coerce a bytes4 answer given as bytes or hex text; anything else is empty."""
        if isinstance(response, (bytes, bytearray)):
            return bytes(response)

        if isinstance(response, str):
            try:
                return decode_hex(response)
            except ValueError:
                return b""

        return b""

    def _recover_address_for_diagnostics(
        self,
        text: str,
        signature: str,
    ) -> Optional[str]:
        """Recover the signer for the error payload only."""
        return self.signature_verifier.recover_address(text, signature)
