"""Data models for the POS terminal and its backend."""

from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A product as returned by the backend master data."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(0, alias="PRD_ID", description="Product ID (0 means no product)")
    name: str = Field("", alias="NAME", description="Product name")
    code: str = Field("", alias="CODE", description="Scanned product code")
    price: int = Field(0, alias="PRICE", ge=0, description="Unit price in yen")

    @property
    def is_empty(self) -> bool:
        """True for the sentinel product (nothing staged)."""
        return not self.name


EMPTY_PRODUCT = Product()


class ProductResponse(Product):
    """Body of a successful product lookup. Every field is required and no type coercion is done."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    id: int = Field(alias="PRD_ID")
    name: str = Field(alias="NAME", min_length=1)
    code: str = Field(alias="CODE")
    price: int = Field(alias="PRICE", ge=0)

    def to_product(self) -> Product:
        return Product(id=self.id, name=self.name, code=self.code, price=self.price)


class CartItem(Product):
    """A line in the cart: a snapshot of the staged product at add time."""

    line_id: str = Field(default_factory=lambda: uuid4().hex, description="Stable line key")

    @classmethod
    def from_product(cls, product: Product) -> "CartItem":
        return cls(id=product.id, name=product.name, code=product.code, price=product.price)

    def to_wire(self) -> dict:
        """Line item as sent in a transaction request."""
        return {"PRD_ID": self.id, "CODE": self.code, "NAME": self.name, "PRICE": self.price}


class TransactionRequest(BaseModel):
    """Body of POST /transactions."""

    emp_cd: str = ""
    items: list[dict] = Field(default_factory=list)


class Receipt(BaseModel):
    """Successful transaction result."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    total: int = Field(alias="TOTAL_AMT", ge=0, description="Total charged by the backend")


class ErrorBody(BaseModel):
    """Error body returned by the backend on non-2xx responses."""

    detail: Optional[str] = None


class ErrorNotice(BaseModel):
    """An error to show the cashier, kept as a message key so it can be shown in any language."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Message catalog key, e.g. not_found")
    detail: Optional[str] = Field(None, description="Server-provided text shown instead of the catalog message")
