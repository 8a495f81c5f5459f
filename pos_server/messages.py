"""User-facing text for the terminal."""

from .errors import BackendRejected, CheckoutFailed, EmptyCart, EmptyInput, NotFound, PosError, Unreachable
from .models import ErrorNotice

LANGUAGES = ("ja", "en")

MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        "empty_input": "商品コードを入力してください",
        "not_found": "商品がマスタ未登録です",
        "backend_error": "エラーが発生しました",
        "unreachable": "サーバーエラーが発生しました。",
        "empty_cart": "購入リストが空です",
        "checkout_failed": "取引の登録に失敗しました",
        "purchase_complete": "購入が完了しました。合計金額: {total}円",
        "name_placeholder": "商品名",
        "price_placeholder": "価格",
        "price": "{price}円",
        "cart_title": "購入リスト",
        "cart_line": "{name} x1 {price}円",
        "cart_total": "合計: {total}円",
        "code_prompt": "商品コードを入力",
    },
    "en": {
        "empty_input": "Please enter a product code",
        "not_found": "Product is not registered in the master data",
        "backend_error": "An error occurred",
        "unreachable": "A server error occurred.",
        "empty_cart": "The purchase list is empty",
        "checkout_failed": "Failed to register the transaction",
        "purchase_complete": "Purchase complete. Total: {total} yen",
        "name_placeholder": "Product name",
        "price_placeholder": "Price",
        "price": "{price} yen",
        "cart_title": "Purchase list",
        "cart_line": "{name} x1 {price} yen",
        "cart_total": "Total: {total} yen",
        "code_prompt": "Enter product code",
    },
}

_ERROR_KEYS = {
    EmptyInput: "empty_input",
    NotFound: "not_found",
    Unreachable: "unreachable",
    EmptyCart: "empty_cart",
    CheckoutFailed: "checkout_failed",
}


def text(key: str, language: str = "ja", **values) -> str:
    """Look up a message and fill in its placeholders."""
    catalog = MESSAGES.get(language, MESSAGES["ja"])
    return catalog[key].format(**values)


def notice_for(error: PosError) -> ErrorNotice:
    """Language-independent notice for a terminal error."""
    if isinstance(error, BackendRejected):
        return ErrorNotice(key="backend_error", detail=error.detail)
    for error_type, key in _ERROR_KEYS.items():
        if isinstance(error, error_type):
            return ErrorNotice(key=key)
    return ErrorNotice(key="backend_error")


def notice_text(notice: ErrorNotice, language: str = "ja") -> str:
    """Human-readable message for a notice. Server-provided detail wins over the catalog text."""
    return notice.detail or text(notice.key, language)
