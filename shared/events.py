"""
events.py - Storefront Event Schema Definitions

PURPOSE:
    Defines the events published on the in-process event bus whenever storefront
    state changes. Uses Pydantic for validation and serialization so the same
    payloads can be logged as JSON.

EVENT CATEGORIES:
    1. Catalog Events: Product query lifecycle
       - catalog.query_issued
       - catalog.items_applied
       - catalog.response_discarded

    2. Category Events: Category directory
       - categories.loaded

    3. Cart Events: Shopping cart operations
       - cart.item_added

COMMON FIELDS (BaseEvent):
    - event_id: Unique identifier (UUID)
    - event_type: Event category and action
    - timestamp: UTC timestamp of event creation

USAGE:
    event = CatalogItemsAppliedEvent(generation=3, item_count=12, failed=False)
    bus.publish(event.event_type, event)
"""

from datetime import datetime, timezone
from typing import Dict, Optional, Type
from uuid import uuid4

from pydantic import BaseModel, Field


class BaseEvent(BaseModel):
    """
    Base event model for all storefront events.

    All events inherit from this class and include:
    - Unique event ID
    - Event type identifier
    - Timezone-aware timestamp
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ============================================================================
# CATALOG EVENTS - Product query lifecycle
# ============================================================================

class CatalogQueryIssuedEvent(BaseEvent):
    """
    Published when the debounce timer fires and a product fetch is issued.
    Triggers: CatalogQueryController on settle
    Consumers: StorefrontSession (view switches to loading)
    """

    event_type: str = "catalog.query_issued"
    generation: int
    search_text: str = ""
    category: Optional[str] = None


class CatalogItemsAppliedEvent(BaseEvent):
    """
    Published when the response for the current generation is applied.
    `failed` is True when a transport or parse failure collapsed to no items.
    """

    event_type: str = "catalog.items_applied"
    generation: int
    item_count: int
    failed: bool = False


class CatalogResponseDiscardedEvent(BaseEvent):
    """Published when a superseded response completes and is dropped."""

    event_type: str = "catalog.response_discarded"
    generation: int
    current_generation: int


# ============================================================================
# CATEGORY EVENTS
# ============================================================================

class CategoriesLoadedEvent(BaseEvent):
    """Published once per session after the category directory resolves."""

    event_type: str = "categories.loaded"
    category_count: int
    failed: bool = False


# ============================================================================
# CART EVENTS
# ============================================================================

class CartItemAddedEvent(BaseEvent):
    """
    Published after every add, whether it created a line or incremented one.
    Consumers: StorefrontSession (cart badge count)
    """

    event_type: str = "cart.item_added"
    product_id: str
    quantity: int
    cart_count: int


EVENT_TYPE_MAP: Dict[str, Type[BaseEvent]] = {
    "catalog.query_issued": CatalogQueryIssuedEvent,
    "catalog.items_applied": CatalogItemsAppliedEvent,
    "catalog.response_discarded": CatalogResponseDiscardedEvent,
    "categories.loaded": CategoriesLoadedEvent,
    "cart.item_added": CartItemAddedEvent,
}

ALL_TOPICS = list(EVENT_TYPE_MAP.keys())
