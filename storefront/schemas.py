from decimal import Decimal
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ProductId = Union[int, str]


class Product(BaseModel):
    """Catalog product as returned by GET /products."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: ProductId
    title: str
    price: Decimal = Field(ge=0)
    image: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)

    @field_validator("rating", mode="before")
    @classmethod
    def clamp_rating(cls, value: Any) -> Any:
        # Out-of-range numeric ratings are pinned to the 0-5 scale
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return min(max(float(value), 0.0), 5.0)
        return value


class Category(BaseModel):
    """Category as returned by GET /categories."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    slug: str
    name: str

    @model_validator(mode="before")
    @classmethod
    def slug_from_id(cls, data: Any) -> Any:
        # The backend may key categories by `id` instead of `slug`
        if isinstance(data, dict) and data.get("slug") in (None, "") and data.get("id") is not None:
            data = {**data, "slug": str(data["id"])}
        return data


class CartLine(BaseModel):
    """One aggregated cart entry; `product` is the snapshot from the first add."""

    model_config = ConfigDict(frozen=True)

    product_id: ProductId
    quantity: int = Field(ge=1)
    product: Product

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class CartState(BaseModel):
    """Cart lines in order of first add. Counts and totals are derived."""

    model_config = ConfigDict(frozen=True)

    lines: Tuple[CartLine, ...] = ()

    @model_validator(mode="after")
    def unique_product_ids(self) -> "CartState":
        ids = [line.product_id for line in self.lines]
        if len(ids) != len(set(ids)):
            raise ValueError("cart lines must not share a product_id")
        return self

    @property
    def cart_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total_amount(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))


class QueryState(BaseModel):
    """Filter inputs plus the product list of the last applied response."""

    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    category: Optional[str] = None
    items: Tuple[Product, ...] = ()
    loading: bool = False
    # Tags the most recently issued fetch, not the most recently completed one
    generation: int = 0
