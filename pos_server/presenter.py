"""Rendering of the terminal session for text and JSON surfaces."""

from typing import Any

from .messages import notice_text, text
from .state import SessionState, Status


def render_lookup_panel(state: SessionState, language: str = "ja") -> list[str]:
    """
    Lookup panel: code field, then either the error or the staged product.

    The error and the product share the same region; only one is shown.
    """
    lines = [f"[{state.code_input or text('code_prompt', language)}]"]
    if state.error is not None:
        lines.append(f"! {notice_text(state.error, language)}")
    else:
        staged = state.staged
        lines.append(staged.name or text("name_placeholder", language))
        lines.append(text("price", language, price=staged.price) if staged.price else text("price_placeholder", language))
    lines.append("(add)" if state.can_add else "(add: disabled)")
    return lines


def render_cart_panel(state: SessionState, language: str = "ja") -> list[str]:
    """Cart panel: title, empty-cart warning, one line per item, running total."""
    lines = [text("cart_title", language)]
    if state.status is Status.EMPTY_CART_WARNING:
        lines.append(f"! {text('empty_cart', language)}")
    for i, item in enumerate(state.cart, 1):
        lines.append(f"{i}. {text('cart_line', language, name=item.name, price=item.price)}")
    if state.cart:
        lines.append(text("cart_total", language, total=state.cart_total))
    return lines


def render_session(state: SessionState, language: str = "ja") -> str:
    lines = render_lookup_panel(state, language)
    lines.append("")
    lines.extend(render_cart_panel(state, language))
    if state.last_receipt is not None:
        lines.append("")
        lines.append(text("purchase_complete", language, total=state.last_receipt.total))
    return "\n".join(lines)


def session_payload(state: SessionState, language: str = "ja") -> dict[str, Any]:
    """JSON-ready view of the session."""
    return {
        "code_input": state.code_input,
        "status": state.status.value,
        "error_message": notice_text(state.error, language) if state.error is not None else None,
        "empty_cart_warning": state.empty_cart_warning,
        "staged": None if state.staged.is_empty else state.staged.model_dump(),
        "can_add": state.can_add,
        "cart": [item.model_dump() for item in state.cart],
        "cart_total": state.cart_total,
        "receipt": (
            {
                "total": state.last_receipt.total,
                "message": text("purchase_complete", language, total=state.last_receipt.total),
            }
            if state.last_receipt is not None
            else None
        ),
    }
