"""Storefront client core: catalog query coordination, cart aggregation and view state."""

from storefront.cart_store import CartStore
from storefront.catalog_client import CatalogClient
from storefront.category_directory import CategoryDirectory
from storefront.config import Settings, load_settings
from storefront.errors import CatalogError, ParseFailure, TransportFailure
from storefront.query_controller import CatalogQueryController
from storefront.schemas import CartLine, CartState, Category, Product, QueryState
from storefront.session import StorefrontSession
from storefront.view_model import DisplayState, StorefrontView, compose_view

__all__ = [
    "CartLine",
    "CartState",
    "CartStore",
    "CatalogClient",
    "CatalogError",
    "CatalogQueryController",
    "Category",
    "CategoryDirectory",
    "DisplayState",
    "ParseFailure",
    "Product",
    "QueryState",
    "Settings",
    "StorefrontSession",
    "StorefrontView",
    "TransportFailure",
    "compose_view",
    "load_settings",
]
