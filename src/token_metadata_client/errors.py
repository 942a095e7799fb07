from __future__ import annotations


class TokenMetadataError(Exception):
    """Base class for all SDK errors."""


class InvalidInputError(TokenMetadataError, ValueError):
    """Raised when caller-supplied arguments violate an operation's preconditions."""


class AddressParseError(InvalidInputError):
    """Raised when an address parameter cannot be parsed into a public key."""


class AccountNotFoundError(TokenMetadataError, LookupError):
    """Raised when an expected on-chain account does not exist."""


class HolderNotFoundError(AccountNotFoundError):
    """Raised when no token account holds exactly one unit of a mint."""


class AmbiguousHolderError(TokenMetadataError, LookupError):
    """Raised when more than one token account holds exactly one unit of a mint."""


class DecodeError(TokenMetadataError, ValueError):
    """Raised when on-chain account bytes cannot be deserialized into the expected record."""


class RuleSetRevisionNotAvailableError(DecodeError):
    """Raised when the requested rule-set revision is not present in the revision map."""


class NumericalOverflowError(DecodeError, ArithmeticError):
    """Raised when a rule-set revision offset computation overflows."""


class TransportError(TokenMetadataError, RuntimeError):
    """
    Raised when the RPC node returns an error or cannot be reached.

    The original exception is chained as ``__cause__``. ``signature`` is set when the
    failure happened after the transaction was accepted (e.g. confirmation failed).
    """

    def __init__(self, message: str, *, signature: object | None = None) -> None:
        super().__init__(message)
        self.signature = signature


class SimulationError(TokenMetadataError, RuntimeError):
    """Raised when a transaction simulation reports an error; ``err`` holds it verbatim."""

    def __init__(self, err: object, *, logs: list[str] | None = None) -> None:
        super().__init__(f"Transaction simulation failed: {err}")
        self.err = err
        self.logs = logs or []


class UnsupportedTokenStandardError(TokenMetadataError, ValueError):
    """Raised when an operation is attempted on an asset class that does not support it."""
