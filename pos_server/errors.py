"""Error types for the POS terminal."""

from typing import Optional


class PosError(Exception):
    """Base class for recoverable errors surfaced to the cashier."""


class EmptyInput(PosError):
    """Product code is empty or whitespace only. Never reaches the backend."""


class NotFound(PosError):
    """Product code is not registered in the master data."""


class BackendRejected(PosError):
    """Backend answered with a non-success status or an unusable body."""

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or "backend rejected the request")
        self.detail = detail


class Unreachable(PosError):
    """No response from the backend (connection or timeout failure)."""


class EmptyCart(PosError):
    """Checkout attempted with nothing in the cart."""


class CheckoutFailed(PosError):
    """Transaction was rejected or could not be delivered."""


class LineItemNotFound(LookupError):
    """No cart line with the requested line id."""


class ConfigurationError(ValueError):
    """Missing or invalid configuration."""
