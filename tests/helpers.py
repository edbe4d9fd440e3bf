"""Test doubles: virtual timers and a scriptable catalog client."""

import asyncio
from typing import Callable, Dict, List, Optional, Tuple

from storefront.errors import CatalogError
from storefront.schemas import Category, Product


class ManualTimer:
    def __init__(self, scheduler: "ManualScheduler", due: float, callback: Callable[[], None]):
        self.scheduler = scheduler
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when the test calls advance()."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[ManualTimer] = []

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self, self.now + delay_ms, callback)
        self.timers.append(timer)
        return timer

    def advance(self, ms: float) -> None:
        target = self.now + ms
        while True:
            due = [t for t in self.timers if not t.cancelled and t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            self.now = timer.due
            timer.callback()
        self.now = target

    @property
    def pending(self) -> int:
        return len([t for t in self.timers if not t.cancelled])


class FakeCatalogClient:
    """Catalog client whose product responses are resolved by the test.

    With abortable=False the fake ignores cancellation and still completes,
    like a transport that cannot abort an in-flight request.
    """

    base_url = "http://catalog.test"

    def __init__(self, abortable: bool = True):
        self.abortable = abortable
        self.requests: List[Tuple[Optional[str], Optional[str]]] = []
        self.cancelled: List[int] = []
        self._pending: Dict[int, asyncio.Future] = {}
        self.categories: List[Category] = []
        self.category_error: Optional[CatalogError] = None
        self.category_calls = 0

    async def fetch_categories(self) -> List[Category]:
        self.category_calls += 1
        await asyncio.sleep(0)
        if self.category_error is not None:
            raise self.category_error
        return list(self.categories)

    async def fetch_products(self, category=None, query=None) -> List[Product]:
        index = len(self.requests)
        self.requests.append((category, query))
        future = asyncio.get_running_loop().create_future()
        self._pending[index] = future
        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            self.cancelled.append(index)
            if self.abortable:
                raise
            return await future

    def resolve(self, index: int, items: List[Product]) -> None:
        self._pending[index].set_result(items)

    def fail(self, index: int, error: Exception) -> None:
        self._pending[index].set_exception(error)

    async def aclose(self) -> None:
        pass


def make_product(product_id, title: str = None, price: float = 10.5, **extra) -> Product:
    return Product(id=product_id, title=title or f"Product {product_id}", price=price, **extra)


async def settle() -> None:
    """Let pending tasks and callbacks run."""
    for _ in range(5):
        await asyncio.sleep(0)


