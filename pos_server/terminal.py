"""Cashier-facing terminal session."""

import logging
from typing import Optional

import httpx

from .config import Settings
from .errors import EmptyInput, PosError
from .messages import LANGUAGES, notice_for, notice_text
from .models import Receipt
from .pos_client import PosApiClient
from . import state as transitions
from .state import SessionState

logger = logging.getLogger(__name__)


class PosTerminal:
    """
    One cashier session: code entry, product lookup, cart and purchase.

    Every action updates `self.state` through the pure transitions in
    `pos_server.state`. Backend failures end up as the session's error
    message; only precondition violations on cart removal are raised.
    """

    def __init__(self, client: PosApiClient, operator_code: str = "", language: str = "ja") -> None:
        """
        Initialize the terminal.

        Args:
            client: Backend API client
            operator_code: Operator identifier sent with each purchase ("" = backend default)
            language: Message language (ja or en)
        """
        self.client = client
        self.operator_code = operator_code
        self.language = language
        self.state = SessionState()

    def set_language(self, language: str) -> None:
        if language not in LANGUAGES:
            raise ValueError(f"Language must be one of: {', '.join(LANGUAGES)}")
        self.language = language

    @property
    def error_message(self) -> str:
        """The current error in the session language, or "" when there is none."""
        if self.state.error is None:
            return ""
        return notice_text(self.state.error, self.language)

    def enter_code(self, code: str) -> SessionState:
        """Replace the contents of the code entry field."""
        self.state = transitions.enter_code(self.state, code)
        return self.state

    def lookup(self, code: Optional[str] = None) -> SessionState:
        """
        Look up the product for the current code (or `code`, if given).

        Blank input is rejected without contacting the backend.
        """
        if code is not None:
            self.enter_code(code)

        if not self.state.code_input.strip():
            self.state = transitions.reject_input(self.state, notice_for(EmptyInput()))
            return self.state

        self.state, generation = transitions.start_lookup(self.state)
        try:
            product = self.client.get_product(self.state.code_input)
        except PosError as e:
            logger.info(f"Lookup of {self.state.code_input!r} failed: {type(e).__name__}")
            self.state = transitions.lookup_failed(self.state, notice_for(e), generation)
        else:
            self.state = transitions.lookup_succeeded(self.state, product, generation)
        return self.state

    def add_to_cart(self) -> SessionState:
        """Add the staged product to the cart. Does nothing when nothing is staged."""
        if not self.state.can_add:
            logger.debug("Add ignored: no product staged")
            return self.state

        self.state = transitions.add_staged(self.state)
        logger.info(f"Added to cart: {self.state.cart[-1].model_dump(by_alias=True)}")
        return self.state

    def remove_line(self, line_id: str) -> SessionState:
        """
        Remove a cart line by its line id.

        Raises:
            LineItemNotFound: If the line is not in the cart
        """
        self.state = transitions.remove_line(self.state, line_id)
        logger.info(f"Removed cart line {line_id}")
        return self.state

    def remove_at(self, index: int) -> SessionState:
        """
        Remove the cart line at a zero-based position.

        Raises:
            IndexError: If index is outside the cart
        """
        self.state = transitions.remove_at(self.state, index)
        logger.info(f"Removed cart line at position {index}")
        return self.state

    def purchase(self) -> Optional[Receipt]:
        """
        Submit the cart as a transaction.

        Returns:
            The receipt on success, None if the cart was empty or the backend
            refused the transaction (see `error_message`)
        """
        if not self.state.cart:
            self.state = transitions.block_empty_checkout(self.state)
            return None

        items = self.state.cart
        self.state, generation = transitions.start_checkout(self.state)
        try:
            receipt = self.client.create_transaction(items, emp_cd=self.operator_code)
        except PosError as e:
            self.state = transitions.checkout_failed(self.state, notice_for(e), generation)
            return None

        self.state = transitions.checkout_succeeded(self.state, receipt, generation)
        return receipt

    def close(self) -> None:
        self.client.close()


def build_terminal(settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> PosTerminal:
    """Create a terminal wired to the configured backend."""
    client = PosApiClient(settings.api_url, timeout=settings.timeout, transport=transport)
    return PosTerminal(client, operator_code=settings.operator_code, language=settings.language)
