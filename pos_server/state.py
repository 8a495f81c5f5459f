"""Terminal session state and its transitions.

`SessionState` is immutable. Every user action or backend outcome is a pure
function taking the current state and returning the next one, so the whole
interaction flow can be exercised without any UI.

Lookups and checkouts each carry a generation number. `start_lookup` and
`start_checkout` bump it and hand it to the caller; a completion reporting an
older generation is discarded, so only the latest request of each kind can
change the state.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .errors import LineItemNotFound
from .models import EMPTY_PRODUCT, CartItem, ErrorNotice, Product, Receipt


class Status(str, Enum):
    """What the status region currently shows."""

    IDLE = "idle"
    ERROR = "error"
    EMPTY_CART_WARNING = "empty_cart_warning"


class SessionState(BaseModel):
    """Everything one terminal session knows. Lives in memory only."""

    model_config = ConfigDict(frozen=True)

    code_input: str = ""
    staged: Product = EMPTY_PRODUCT
    cart: tuple[CartItem, ...] = ()
    error: Optional[ErrorNotice] = None
    empty_cart_warning: bool = False
    last_receipt: Optional[Receipt] = None
    lookup_generation: int = 0
    checkout_generation: int = 0

    @property
    def status(self) -> Status:
        if self.error is not None:
            return Status.ERROR
        if self.empty_cart_warning:
            return Status.EMPTY_CART_WARNING
        return Status.IDLE

    @property
    def can_add(self) -> bool:
        """Whether the add-to-cart control is enabled."""
        return not self.staged.is_empty

    @property
    def cart_total(self) -> int:
        return sum(item.price for item in self.cart)


def _update(state: SessionState, **changes) -> SessionState:
    return state.model_copy(update=changes)


def enter_code(state: SessionState, text: str) -> SessionState:
    return _update(state, code_input=text)


def reject_input(state: SessionState, error: ErrorNotice) -> SessionState:
    """Client-side validation failure; the staged product is left alone."""
    return _update(state, error=error, empty_cart_warning=False, last_receipt=None)


def start_lookup(state: SessionState) -> tuple[SessionState, int]:
    """Begin a lookup: clear the previous error and take a new generation."""
    generation = state.lookup_generation + 1
    new_state = _update(state, error=None, last_receipt=None, lookup_generation=generation)
    return new_state, generation


def lookup_succeeded(state: SessionState, product: Product, generation: int) -> SessionState:
    if generation != state.lookup_generation:
        return state
    return _update(state, staged=product, error=None, empty_cart_warning=False)


def lookup_failed(state: SessionState, error: ErrorNotice, generation: int) -> SessionState:
    if generation != state.lookup_generation:
        return state
    return _update(state, staged=EMPTY_PRODUCT, error=error, empty_cart_warning=False)


def add_staged(state: SessionState) -> SessionState:
    """
    Move the staged product into the cart.

    Appends a snapshot line, resets the staged product and clears the code
    input as one step. No-op when nothing is staged.
    """
    if state.staged.is_empty:
        return state
    item = CartItem.from_product(state.staged)
    return _update(
        state,
        cart=state.cart + (item,),
        staged=EMPTY_PRODUCT,
        code_input="",
        empty_cart_warning=False,
        last_receipt=None,
    )


def remove_line(state: SessionState, line_id: str) -> SessionState:
    """
    Remove the cart line with the given line id.

    Raises:
        LineItemNotFound: If no line has that id
    """
    remaining = tuple(item for item in state.cart if item.line_id != line_id)
    if len(remaining) == len(state.cart):
        raise LineItemNotFound(line_id)
    return _update(state, cart=remaining)


def remove_at(state: SessionState, index: int) -> SessionState:
    """
    Remove the cart line at a zero-based position; later lines shift down.

    Raises:
        IndexError: If index is outside the cart
    """
    if not 0 <= index < len(state.cart):
        raise IndexError(f"cart index {index} out of range (cart has {len(state.cart)} lines)")
    return _update(state, cart=state.cart[:index] + state.cart[index + 1:])


def block_empty_checkout(state: SessionState) -> SessionState:
    return _update(state, empty_cart_warning=True, error=None, last_receipt=None)


def start_checkout(state: SessionState) -> tuple[SessionState, int]:
    generation = state.checkout_generation + 1
    return _update(state, last_receipt=None, checkout_generation=generation), generation


def checkout_succeeded(state: SessionState, receipt: Receipt, generation: int) -> SessionState:
    if generation != state.checkout_generation:
        return state
    return _update(
        state,
        cart=(),
        empty_cart_warning=False,
        error=None,
        last_receipt=receipt,
    )


def checkout_failed(state: SessionState, error: ErrorNotice, generation: int) -> SessionState:
    """The cart is kept as-is so the cashier can retry."""
    if generation != state.checkout_generation:
        return state
    return _update(state, error=error, empty_cart_warning=False)
