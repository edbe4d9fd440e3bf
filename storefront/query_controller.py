"""
Catalog Query Controller

Turns a stream of search-text / category-filter changes into a debounced,
cancellable sequence of product fetches.

Protocol:
    1. Every filter change (re)starts a single trailing-edge debounce timer.
    2. When the timer fires the generation counter is incremented, the state is
       marked loading, the in-flight fetch of the previous generation is
       cancelled and a new fetch is issued tagged with the new generation.
    3. A completed fetch is applied only if its generation is still the current
       one. Superseded responses are dropped, so the last *issued* fetch wins
       even when an older request completes later.
    4. Transport and parse failures of the current generation resolve to an
       empty product list with loading cleared.

Task cancellation only saves bandwidth. The generation check in `_apply` is
what keeps stale data out of the state, and it still runs when a transport
ignores cancellation and completes anyway.

Example:
    controller = CatalogQueryController(client, AsyncioScheduler())
    controller.start()
    controller.set_search_text("shoe")
    await controller.wait_idle()
    controller.state.items
"""

import asyncio
import logging
from typing import Optional, Sequence

from shared.event_bus import EventBus
from shared.events import (
    CatalogItemsAppliedEvent,
    CatalogQueryIssuedEvent,
    CatalogResponseDiscardedEvent,
)
from storefront.catalog_client import CatalogClient
from storefront.errors import CatalogError
from storefront.scheduler import AsyncioScheduler, Scheduler, TimerHandle
from storefront.schemas import Product, QueryState

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 300


class CatalogQueryController:
    """Owns QueryState; the only writer of it."""

    def __init__(
        self,
        client: CatalogClient,
        scheduler: Optional[Scheduler] = None,
        debounce_ms: float = DEFAULT_DEBOUNCE_MS,
        bus: Optional[EventBus] = None,
    ):
        self.client = client
        self.scheduler = scheduler or AsyncioScheduler()
        self.debounce_ms = debounce_ms
        self.bus = bus

        self._state = QueryState()
        self._timer: Optional[TimerHandle] = None
        self._inflight: Optional[asyncio.Task] = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def generation(self) -> int:
        return self._state.generation

    def start(self) -> None:
        """Schedule the initial unfiltered query; placeholders show until it lands."""
        self._state = self._state.model_copy(update={"loading": True})
        self._schedule()

    def set_search_text(self, text: str) -> None:
        text = text or ""
        if text == self._state.search_text:
            return
        self._state = self._state.model_copy(update={"search_text": text})
        self._schedule()

    def set_category(self, category: Optional[str]) -> None:
        # "" and None both mean "all categories"
        category = category or None
        if category == self._state.category:
            return
        self._state = self._state.model_copy(update={"category": category})
        self._schedule()

    async def wait_idle(self) -> None:
        """Wait until no debounce timer is pending and no fetch is in flight."""
        await self._idle.wait()

    def close(self) -> None:
        """Cancel the pending timer and the in-flight fetch."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None
        self._idle.set()

    def _schedule(self) -> None:
        # Single timer slot: a new change always replaces the pending timer
        if self._timer is not None:
            self._timer.cancel()
        self._idle.clear()
        self._timer = self.scheduler.call_later(self.debounce_ms, self._fire)

    def _fire(self) -> None:
        self._timer = None
        generation = self._state.generation + 1

        previous = self._inflight
        if previous is not None and not previous.done():
            previous.cancel()
            logger.debug("Cancelled superseded catalog fetch", extra={"generation": generation - 1})

        self._state = self._state.model_copy(update={"generation": generation, "loading": True})
        search_text, category = self._state.search_text, self._state.category

        task = asyncio.ensure_future(self._fetch(generation, search_text, category))
        task.add_done_callback(self._on_fetch_done)
        self._inflight = task

        logger.info(
            f"Issued catalog query q={search_text!r} category={category!r}",
            extra={"generation": generation},
        )
        self._publish(
            CatalogQueryIssuedEvent(generation=generation, search_text=search_text, category=category)
        )

    async def _fetch(self, generation: int, search_text: str, category: Optional[str]) -> None:
        failed = False
        try:
            items: Sequence[Product] = await self.client.fetch_products(category=category, query=search_text)
        except CatalogError as e:
            logger.warning(f"Catalog query failed: {e}", extra={"generation": generation})
            items, failed = [], True
        except Exception:
            logger.exception("Unexpected error during catalog query", extra={"generation": generation})
            items, failed = [], True

        self._apply(generation, items, failed)

    def _apply(self, generation: int, items: Sequence[Product], failed: bool = False) -> None:
        current = self._state.generation
        if generation != current:
            logger.debug(
                f"Discarded stale catalog response (current generation {current})",
                extra={"generation": generation},
            )
            self._publish(CatalogResponseDiscardedEvent(generation=generation, current_generation=current))
            return

        self._state = self._state.model_copy(update={"items": tuple(items), "loading": False})
        logger.info(f"Applied {len(items)} catalog items", extra={"generation": generation})
        self._publish(CatalogItemsAppliedEvent(generation=generation, item_count=len(items), failed=failed))

    def _on_fetch_done(self, task: asyncio.Task) -> None:
        if task is self._inflight:
            self._inflight = None
            if self._timer is None:
                self._idle.set()

    def _publish(self, event) -> None:
        if self.bus is not None:
            self.bus.publish(event.event_type, event)
