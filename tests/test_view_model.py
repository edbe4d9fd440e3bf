from decimal import Decimal

from storefront.schemas import CartState, Category, QueryState
from storefront.cart_store import CartStore
from storefront.view_model import DisplayState, category_options, compose_view
from tests.helpers import make_product

CATEGORIES = [Category(slug="electronics", name="Electronics"), Category(slug="books", name="Books")]


def test_loading_wins_over_items():
    state = QueryState(items=(make_product(1),), loading=True)

    assert compose_view(state, CartState()).display == DisplayState.LOADING


def test_empty_when_settled_without_items():
    assert compose_view(QueryState(loading=False), CartState()).display == DisplayState.EMPTY


def test_populated_when_settled_with_items():
    items = (make_product(1), make_product(2))

    view = compose_view(QueryState(items=items), CartState())

    assert view.display == DisplayState.POPULATED
    assert view.items == items


def test_all_option_selected_without_category_filter():
    options = category_options(CATEGORIES, None)

    assert [(o.slug, o.name, o.selected) for o in options] == [
        ("", "All", True),
        ("electronics", "Electronics", False),
        ("books", "Books", False),
    ]


def test_selected_category_is_marked():
    view = compose_view(QueryState(category="books"), CartState(), CATEGORIES)

    assert [o.slug for o in view.categories if o.selected] == ["books"]
    assert view.selected_category == "books"


def test_all_option_present_without_categories():
    view = compose_view(QueryState(), CartState(), [])

    assert [o.name for o in view.categories] == ["All"]


def test_cart_summary_is_exposed():
    cart = CartStore()
    cart.add_item(make_product("a", price=2.25))
    cart.add_item(make_product("a", price=2.25))

    view = compose_view(QueryState(search_text="mug"), cart.state)

    assert view.cart_count == 2
    assert view.cart_total == Decimal("4.5")
    assert view.search_text == "mug"
    assert len(view.cart_lines) == 1
