"""
session.py - Storefront Session Wiring

PURPOSE:
    Composes the storefront core for one user session: the catalog client,
    category directory, query controller and cart, connected through an
    in-process event bus so the view is recomputed after every state change.

RESPONSIBILITIES:
    - Load categories once at start, independently of the product query
    - Schedule the initial unfiltered product query
    - Forward search/category/add-to-cart input to the owning component
    - Notify view listeners with a fresh StorefrontView after each change
    - Release the HTTP client and pending timers on close

USAGE:
    async with StorefrontSession() as session:
        session.subscribe(render)
        session.set_search_text("shoe")
        await session.wait_idle()
        session.add_to_cart(session.view().items[0])
"""

import asyncio
import logging
from typing import Callable, List, Optional

from shared.event_bus import WILDCARD, EventBus
from shared.events import BaseEvent
from shared.logging_config import setup_logging
from storefront.cart_store import CartStore
from storefront.catalog_client import CatalogClient
from storefront.category_directory import CategoryDirectory
from storefront.config import Settings, load_settings
from storefront.query_controller import CatalogQueryController
from storefront.scheduler import Scheduler
from storefront.schemas import Product
from storefront.view_model import StorefrontView, compose_view

logger = logging.getLogger(__name__)

ViewListener = Callable[[StorefrontView], None]


class StorefrontSession:
    """One browsing session against the catalog backend."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[CatalogClient] = None,
        scheduler: Optional[Scheduler] = None,
        configure_logging: bool = False,
    ):
        self.settings = settings or load_settings()
        if configure_logging:
            setup_logging("storefront", level=self.settings.log_level, tz_name=self.settings.log_timezone)

        self._owns_client = client is None
        self.client = client or CatalogClient(self.settings.backend_url, timeout=self.settings.request_timeout)

        self.bus = EventBus()
        self.categories = CategoryDirectory(self.client, bus=self.bus)
        self.query = CatalogQueryController(
            self.client,
            scheduler=scheduler,
            debounce_ms=self.settings.debounce_ms,
            bus=self.bus,
        )
        self.cart = CartStore(bus=self.bus)

        self._listeners: List[ViewListener] = []
        self._category_task: Optional[asyncio.Future] = None
        self.bus.subscribe(WILDCARD, self._on_event)

    def start(self) -> None:
        """Kick off the category load and the initial product query. Needs a running loop."""
        logger.info(f"Starting storefront session against {self.client.base_url}")
        # Runs alongside the product query; neither waits on the other
        self._category_task = asyncio.ensure_future(self.categories.load())
        self.query.start()
        self._notify()

    def set_search_text(self, text: str) -> None:
        self.query.set_search_text(text)
        self._notify()

    def set_category(self, slug: Optional[str]) -> None:
        self.query.set_category(slug)
        self._notify()

    def add_to_cart(self, product: Product) -> None:
        self.cart.add_item(product)

    def view(self) -> StorefrontView:
        return compose_view(self.query.state, self.cart.state, self.categories.categories)

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Call listener with a new view after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def wait_idle(self) -> None:
        """Wait for the category load and any pending product query to settle."""
        if self._category_task is not None:
            await self._category_task
        await self.query.wait_idle()

    async def aclose(self) -> None:
        logger.info("Shutting down storefront session")
        self.query.close()
        if self._category_task is not None and not self._category_task.done():
            self._category_task.cancel()
            await asyncio.gather(self._category_task, return_exceptions=True)
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "StorefrontSession":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _on_event(self, event: BaseEvent) -> None:
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        view = self.view()
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                logger.exception("View listener failed")
