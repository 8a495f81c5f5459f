"""POS backend API client."""

import logging
from typing import Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .errors import BackendRejected, CheckoutFailed, EmptyInput, NotFound, Unreachable
from .models import CartItem, ErrorBody, Product, ProductResponse, Receipt, TransactionRequest

logger = logging.getLogger(__name__)


class PosApiClient:
    """Client for the POS backend (product master and transactions)."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize the POS client.

        Args:
            base_url: Backend base URL, e.g. https://pos-api.example.com
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to plug in a fake backend)
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def get_product(self, code: str) -> Product:
        """
        Look up a product by its scanned code.

        Args:
            code: Product code (barcode); surrounding whitespace is ignored

        Returns:
            The product as registered in the master data

        Raises:
            EmptyInput: If code is blank; no request is made
            NotFound: If the backend answers 404
            BackendRejected: On any other non-2xx status or a malformed body
            Unreachable: If the backend could not be reached
        """
        code = code.strip()
        if not code:
            raise EmptyInput("product code is empty")

        try:
            response = self.client.get(f"/products/{quote(code, safe='')}")
        except httpx.HTTPError as e:
            logger.error(f"Product lookup failed for {code}: {e}", exc_info=True)
            raise Unreachable(str(e)) from e

        if response.status_code == 404:
            logger.info(f"Product {code} not in master data")
            raise NotFound(code)

        if not response.is_success:
            detail = self._error_detail(response)
            logger.warning(f"Product lookup rejected: status={response.status_code}, detail={detail}")
            raise BackendRejected(detail)

        try:
            product = ProductResponse.model_validate(response.json()).to_product()
        except (ValueError, ValidationError) as e:
            logger.warning(f"Malformed product response for {code}: {e}")
            raise BackendRejected(None) from e

        logger.info(f"Fetched product: {product.model_dump(by_alias=True)}")
        return product

    def create_transaction(self, items: Sequence[CartItem], emp_cd: str = "") -> Receipt:
        """
        Submit a purchase transaction.

        No idempotency key is sent: resubmitting after a timeout may record
        the transaction twice on the backend.

        Args:
            items: Cart lines in display order
            emp_cd: Operator code; empty lets the backend apply its default

        Returns:
            Receipt with the total computed by the backend

        Raises:
            CheckoutFailed: On a non-2xx status, a malformed body or a transport failure
        """
        payload = TransactionRequest(emp_cd=emp_cd, items=[item.to_wire() for item in items])
        logger.info(f"Submitting transaction: emp_cd={emp_cd!r}, items={len(payload.items)}")

        try:
            response = self.client.post("/transactions", json=payload.model_dump())
        except httpx.HTTPError as e:
            logger.error(f"Transaction submission failed: {e}", exc_info=True)
            raise CheckoutFailed(str(e)) from e

        if not response.is_success:
            logger.warning(
                f"Transaction rejected: status={response.status_code}, "
                f"detail={self._error_detail(response)}"
            )
            raise CheckoutFailed(f"status {response.status_code}")

        try:
            receipt = Receipt.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Malformed transaction response: {e}")
            raise CheckoutFailed("malformed response") from e

        logger.info(f"Transaction recorded: total={receipt.total}")
        return receipt

    def _error_detail(self, response: httpx.Response) -> Optional[str]:
        """Extract the optional `detail` field of an error body."""
        try:
            return ErrorBody.model_validate(response.json()).detail
        except (ValueError, ValidationError):
            return None

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()
