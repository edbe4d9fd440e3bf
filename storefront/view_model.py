from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from storefront.schemas import CartLine, CartState, Category, Product, QueryState

ALL_CATEGORIES_LABEL = "All"


class DisplayState(str, Enum):
    """What the product area should render."""

    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


class CategoryOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    selected: bool = False


class StorefrontView(BaseModel):
    """Everything the presentation layer reads; rebuilt on every state change."""

    model_config = ConfigDict(frozen=True)

    display: DisplayState
    items: Tuple[Product, ...] = ()
    search_text: str = ""
    selected_category: Optional[str] = None
    categories: Tuple[CategoryOption, ...] = ()
    cart_lines: Tuple[CartLine, ...] = ()
    cart_count: int = 0
    cart_total: Decimal = Decimal("0")


def display_state(query_state: QueryState) -> DisplayState:
    if query_state.loading:
        return DisplayState.LOADING
    if not query_state.items:
        return DisplayState.EMPTY
    return DisplayState.POPULATED


def category_options(categories: Iterable[Category], selected: Optional[str]) -> Tuple[CategoryOption, ...]:
    """Category filter options, always headed by "All"."""
    options = [CategoryOption(slug="", name=ALL_CATEGORIES_LABEL, selected=not selected)]
    options.extend(
        CategoryOption(slug=c.slug, name=c.name, selected=c.slug == selected) for c in categories
    )
    return tuple(options)


def compose_view(
    query_state: QueryState,
    cart_state: CartState,
    categories: Iterable[Category] = (),
) -> StorefrontView:
    """Pure function of the query and cart state."""
    return StorefrontView(
        display=display_state(query_state),
        items=query_state.items,
        search_text=query_state.search_text,
        selected_category=query_state.category,
        categories=category_options(categories, query_state.category),
        cart_lines=cart_state.lines,
        cart_count=cart_state.cart_count,
        cart_total=cart_state.total_amount,
    )
