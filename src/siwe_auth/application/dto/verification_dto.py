"""
DTOs for message verification.

VerifyParams and VerifyOpts arrive from untyped callers as plain mappings,
so their key sets are checked explicitly before the models are built.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from siwe_auth.domain.exceptions import (
    InvalidVerifyOptsError,
    InvalidVerifyParamsError,
    SiweAuthException,
    SiweErrorType,
)

if TYPE_CHECKING:
    from siwe_auth.domain.entities.siwe_message import SiweMessage

VERIFY_PARAMS_KEYS = frozenset({"signature", "domain", "nonce", "time"})
VERIFY_OPTS_KEYS = frozenset({"suppress_exceptions", "chain_client"})

# Same bool coercion VerifyOpts applies to suppress_exceptions
SuppressFlagTypeAdapter = TypeAdapter(bool)


def check_invalid_keys(obj: Mapping[Any, Any], keys: frozenset) -> list:
    """
    Return the keys of obj outside the recognized set.

    Args:
        obj: Mapping received from the caller
        keys: Recognized key names

    Returns:
        Unrecognized keys as strings (empty if none)
    """
    return [str(key) for key in obj if key not in keys]


class VerifyParams(BaseModel):
    """
    Parameters bound to a single verification.

    Attributes:
        signature: Signature over the message text (0x-prefixed hex)
        domain: Domain the relying party expects, if it should be checked
        nonce: Nonce the relying party issued, if it should be checked
        time: Check time for the validity window (defaults to now)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    signature: str = Field(..., min_length=1, description="Message signature")
    domain: Optional[str] = Field(default=None, description="Expected domain")
    nonce: Optional[str] = Field(default=None, description="Expected nonce")
    time: Optional[Union[str, datetime]] = Field(
        default=None,
        description="ISO-8601 check time or datetime",
    )

    @classmethod
    def from_input(
        cls,
        params: Union["VerifyParams", Mapping[str, Any]],
    ) -> "VerifyParams":
        """
        Build params from a model or a loosely-typed mapping.

        Raises:
            InvalidVerifyParamsError: On unknown keys or a missing signature
        """
        if isinstance(params, VerifyParams):
            return params

        if not isinstance(params, Mapping):
            raise InvalidVerifyParamsError(
                reason=f"VerifyParams must be a mapping, got {type(params).__name__}."
            )

        invalid_keys = check_invalid_keys(params, VERIFY_PARAMS_KEYS)
        if invalid_keys:
            raise InvalidVerifyParamsError(invalid_keys)

        if not params.get("signature"):
            raise InvalidVerifyParamsError(
                reason="signature is required for VerifyParams."
            )

        try:
            return cls(**params)
        except ValidationError as e:
            raise InvalidVerifyParamsError(reason=str(e)) from e


class VerifyOpts(BaseModel):
    """
    Options that shape how a verification reports and what it may call.

    Attributes:
        suppress_exceptions: Return failures in the result instead of raising
        chain_client: ERC-1271 client for contract accounts (optional)
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    suppress_exceptions: bool = Field(default=False)
    chain_client: Optional[Any] = Field(default=None)

    @field_validator("chain_client")
    @classmethod
    def validate_chain_client(cls, v: Any) -> Any:
        """Validate chain client exposes is_valid_signature."""
        if v is not None and not callable(getattr(v, "is_valid_signature", None)):
            raise ValueError("chain_client must implement is_valid_signature")
        return v

    @classmethod
    def from_input(
        cls,
        opts: Union["VerifyOpts", Mapping[str, Any], None],
    ) -> "VerifyOpts":
        """
        Build options from a model, a loosely-typed mapping or None.

        Raises:
            InvalidVerifyOptsError: On unknown keys or invalid values
        """
        if opts is None:
            return cls()

        if isinstance(opts, VerifyOpts):
            return opts

        if not isinstance(opts, Mapping):
            raise InvalidVerifyOptsError(
                reason=f"VerifyOpts must be a mapping, got {type(opts).__name__}."
            )

        invalid_keys = check_invalid_keys(opts, VERIFY_OPTS_KEYS)
        if invalid_keys:
            raise InvalidVerifyOptsError(invalid_keys)

        try:
            return cls(**opts)
        except ValidationError as e:
            raise InvalidVerifyOptsError(reason=str(e)) from e

    @staticmethod
    def suppression_requested(
        opts: Union["VerifyOpts", Mapping[str, Any], None],
    ) -> bool:
        """Read suppress_exceptions even from options that fail validation."""
        if isinstance(opts, VerifyOpts):
            return opts.suppress_exceptions
        if isinstance(opts, Mapping):
            try:
                return SuppressFlagTypeAdapter.validate_python(
                    opts.get("suppress_exceptions", False)
                )
            except ValidationError:
                return False
        return False


@dataclass
class VerificationResult:
    """Result of message verification."""

    success: bool
    data: "SiweMessage"
    error: Optional[SiweAuthException] = None

    @property
    def error_type(self) -> Optional[SiweErrorType]:
        """Kind of failure, for message errors."""
        return getattr(self.error, "error_type", None)
