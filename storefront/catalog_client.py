"""
Catalog HTTP Client.

Purpose:
- Issues the two read requests the storefront needs against the catalog backend:
  GET /categories and GET /products?category=<slug>&q=<text>
- Validates response bodies into Product / Category models

Implementation notes:
- Uses httpx for async requests; cancelling the awaiting task aborts the request
- Empty filter values are omitted from the query string, never sent as ""
- Every failure is raised as TransportFailure or ParseFailure; callers decide
  how to degrade

Important:
- Keep this client as the ONLY place where catalog HTTP calls are made.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from storefront.errors import ParseFailure, TransportFailure
from storefront.schemas import Category, Product

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CatalogClient:
    """Thin async wrapper over the catalog read endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Only close the client we created ourselves
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def fetch_categories(self) -> List[Category]:
        """GET /categories."""
        items = await self._get_items("/categories")
        return self._validate_items(Category, items, "/categories")

    async def fetch_products(self, category: Optional[str] = None, query: Optional[str] = None) -> List[Product]:
        """GET /products, filtered by category slug and/or free text."""
        params: Dict[str, str] = {}
        if category:
            params["category"] = category
        if query:
            params["q"] = query

        items = await self._get_items("/products", params)
        return self._validate_items(Product, items, "/products")

    async def _get_items(self, path: str, params: Optional[Dict[str, str]] = None) -> List[Any]:
        """Fetch path and return the raw `items` array of the response body."""
        url = f"{self.base_url}{path}"
        try:
            response = await self._http.get(url, params=params or None, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportFailure(
                f"GET {path} returned {e.response.status_code}",
                path=path,
                status_code=e.response.status_code,
            ) from e
        # InvalidURL does not derive from HTTPError
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportFailure(f"GET {path} failed: {e!r}", path=path) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ParseFailure(f"GET {path} returned a non-JSON body", path=path) from e

        if not isinstance(data, dict):
            raise ParseFailure(f"GET {path} returned {type(data).__name__}, expected an object", path=path)

        # A missing or null items key is an empty result
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ParseFailure(f"GET {path} returned non-list items", path=path)

        logger.debug(f"GET {path} returned {len(items)} items")
        return items

    def _validate_items(self, model: Type[ModelT], items: List[Any], path: str) -> List[ModelT]:
        """Validate each raw item; an invalid item is dropped without failing the rest."""
        valid: List[ModelT] = []
        for index, item in enumerate(items):
            try:
                valid.append(model.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid item {index} from GET {path}: {e.error_count()} validation errors")
        return valid

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
