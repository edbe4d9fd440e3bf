"""
Cart Store Module

In-memory cart aggregation for one storefront session.

Key Features:
    - One line per distinct product id; repeated adds increment the quantity
    - Lines keep the order of the first add for each product
    - Increments replace the line with a new CartLine value instead of
      mutating it, so observers holding the old state see the change
    - cart_count and total_amount are recomputed from the lines on every call

Example Usage:
    ```python
    cart = CartStore()
    cart.add_item(laptop)
    cart.add_item(laptop)
    cart.add_item(mouse)

    cart.cart_count()      # 3
    [(line.product_id, line.quantity) for line in cart.lines]
    # [("laptop", 2), ("mouse", 1)]
    ```
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from shared.event_bus import EventBus
from shared.events import CartItemAddedEvent
from storefront.schemas import CartLine, CartState, Product, ProductId

logger = logging.getLogger(__name__)


class CartStore:
    """Owns CartState; add_item is its only mutation."""

    def __init__(self, bus: Optional[EventBus] = None):
        self.bus = bus
        # dict keeps insertion order, and replacing a value keeps its position
        self._lines: Dict[ProductId, CartLine] = {}

    def add_item(self, product: Product) -> None:
        """Add one unit of product. Increment quantity if the product is already in the cart."""
        existing = self._lines.get(product.id)

        if existing is not None:
            line = existing.model_copy(update={"quantity": existing.quantity + 1})
        else:
            line = CartLine(product_id=product.id, quantity=1, product=product)

        self._lines[product.id] = line
        logger.info(f"Added product {product.id} to cart (quantity {line.quantity})")

        if self.bus is not None:
            self.bus.publish(
                "cart.item_added",
                CartItemAddedEvent(
                    product_id=str(product.id),
                    quantity=line.quantity,
                    cart_count=self.cart_count(),
                ),
            )

    def cart_count(self) -> int:
        """Sum of quantities over all lines."""
        return sum(line.quantity for line in self._lines.values())

    def total_amount(self) -> Decimal:
        return sum((line.line_total for line in self._lines.values()), Decimal("0"))

    def get_line(self, product_id: ProductId) -> Optional[CartLine]:
        return self._lines.get(product_id)

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def state(self) -> CartState:
        return CartState(lines=tuple(self._lines.values()))
