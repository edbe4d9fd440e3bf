import asyncio
import logging
from typing import List, Optional

from shared.event_bus import EventBus
from shared.events import CategoriesLoadedEvent
from storefront.catalog_client import CatalogClient
from storefront.errors import CatalogError
from storefront.schemas import Category

logger = logging.getLogger(__name__)


class CategoryDirectory:
    """Loads the category list once per session.

    A failed load resolves to an empty list and is not retried; the storefront
    then only offers the "All" filter.
    """

    def __init__(self, client: CatalogClient, bus: Optional[EventBus] = None):
        self.client = client
        self.bus = bus
        self._categories: Optional[List[Category]] = None
        self._lock = asyncio.Lock()

    @property
    def categories(self) -> List[Category]:
        """Loaded categories, empty until load() has resolved."""
        return list(self._categories or [])

    @property
    def loaded(self) -> bool:
        return self._categories is not None

    async def load(self) -> List[Category]:
        # Concurrent callers wait for the first fetch instead of issuing their own
        async with self._lock:
            if self._categories is None:
                failed = False
                try:
                    self._categories = await self.client.fetch_categories()
                    logger.info(f"Loaded {len(self._categories)} categories")
                except CatalogError as e:
                    logger.warning(f"Category load failed, continuing without categories: {e}")
                    self._categories = []
                    failed = True

                if self.bus is not None:
                    self.bus.publish(
                        "categories.loaded",
                        CategoriesLoadedEvent(category_count=len(self._categories), failed=failed),
                    )

        return self.categories
