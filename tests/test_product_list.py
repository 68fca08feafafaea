import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from dataclasses import replace
from decimal import Decimal

import pytest

from shop_core.cart import CartItemAction, Close, DeleteItem
from shop_core.cart_item import RequestDelete
from shop_core.domain import DataLoadingStatus, Product
from shop_core.effects import Effect
from shop_core.exceptions import CatalogFetchError
from shop_core.ftypes import Either
from shop_core.identified import IdentifiedArray
from shop_core.product_list import (
    CartAction,
    FetchProducts,
    FetchProductsResponse,
    ProductAction,
    ProductListState,
    ResetProduct,
    SetCartView,
    make_product_list_reducer,
)
from shop_core.product_row import AddToCartAction, DidTapPlusButton, ProductRowState


@pytest.fixture
def reducer(make_env):
    return make_product_list_reducer(make_env())


@pytest.fixture
def loaded(reducer, product_a, product_b):
    state, _ = reducer(ProductListState(), FetchProductsResponse(Either.right([product_a, product_b])))
    return state


def select(reducer, state, row_id, times):
    for _ in range(times):
        state, _ = reducer(state, ProductAction(row_id, AddToCartAction(DidTapPlusButton())))
    return state


def row_for(state, product):
    return next(r for r in state.rows if r.product.id == product.id)


# ============ Загрузка каталога ============


@pytest.mark.asyncio
async def test_fetch_products_schedules_effect(reducer, product_a, product_b):
    state, effects = reducer(ProductListState(), FetchProducts())

    assert state.is_loading
    assert len(effects) == 1

    response = await effects[0].operation()
    assert response == FetchProductsResponse(Either.right([product_a, product_b]))


def test_fetch_response_builds_fresh_rows(loaded, product_a, product_b):
    assert [r.product for r in loaded.rows] == [product_a, product_b]
    assert all(r.count == 0 for r in loaded.rows)
    assert all(r.id != str(r.product.id) for r in loaded.rows)
    assert loaded.data_loading_status == DataLoadingStatus.SUCCESS


def test_refetch_replaces_rows(reducer, loaded, product_a, product_b):
    """Повторная загрузка полностью заменяет строки, выбор не сохраняется"""
    first_id = loaded.rows.ids[0]
    state = select(reducer, loaded, first_id, 3)

    state, _ = reducer(state, FetchProductsResponse(Either.right([product_a, product_b])))

    assert first_id not in state.rows
    assert all(r.count == 0 for r in state.rows)
    assert len(state.rows) == 2


def test_fetch_failure_keeps_rows(reducer, loaded):
    state, effects = reducer(loaded, FetchProductsResponse(Either.left(CatalogFetchError("down"))))

    assert state.rows == loaded.rows
    assert state.should_show_error
    assert effects == ()


# ============ Строки ============


def test_product_action_routed_by_row_id(reducer, loaded, product_a, product_b):
    row_a = row_for(loaded, product_a)
    state = select(reducer, loaded, row_a.id, 2)

    assert row_for(state, product_a).count == 2
    assert row_for(state, product_b).count == 0


def test_product_action_unknown_row_dropped(reducer, loaded):
    state, effects = reducer(loaded, ProductAction("missing", AddToCartAction(DidTapPlusButton())))

    assert state == loaded
    assert effects == ()


# ============ Корзина ============


def test_open_cart_snapshot(reducer, loaded, product_a, product_b):
    """A $10 x2 + B $5 x1 -> корзина {A x2, B x1}, итог 25.00"""
    state = select(reducer, loaded, row_for(loaded, product_a).id, 2)
    state = select(reducer, state, row_for(state, product_b).id, 1)

    state, _ = reducer(state, SetCartView(is_presented=True))

    items = [i.cart_item for i in state.cart.items]
    assert state.should_open_cart
    assert [(i.product, i.quantity) for i in items] == [(product_a, 2), (product_b, 1)]
    assert state.cart.total_price == Decimal("25")
    assert state.cart.total_price_string == "$25.00"
    assert not state.cart.is_pay_button_hidden


def test_open_cart_skips_unselected_rows(reducer, loaded, product_b):
    state = select(reducer, loaded, row_for(loaded, product_b).id, 1)
    state, _ = reducer(state, SetCartView(is_presented=True))

    assert [i.cart_item.product for i in state.cart.items] == [product_b]


def test_close_cart_discards_state(reducer, loaded, product_a):
    state = select(reducer, loaded, row_for(loaded, product_a).id, 1)
    opened, _ = reducer(state, SetCartView(is_presented=True))

    closed, _ = reducer(opened, SetCartView(is_presented=False))
    assert closed.cart is None
    assert not closed.should_open_cart

    via_child, _ = reducer(opened, CartAction(Close()))
    assert via_child.cart is None
    assert not via_child.should_open_cart

    reopened, _ = reducer(closed, SetCartView(is_presented=True))
    assert reopened.cart.items.ids != opened.cart.items.ids
    assert reopened.cart.id != opened.cart.id


def test_cart_is_not_synced_with_rows(reducer, loaded, product_a):
    row_id = row_for(loaded, product_a).id
    state = select(reducer, loaded, row_id, 1)
    state, _ = reducer(state, SetCartView(is_presented=True))

    state = select(reducer, state, row_id, 2)

    assert next(iter(state.cart.items)).cart_item.quantity == 1


def test_cart_action_without_cart_dropped(reducer, loaded):
    state, effects = reducer(loaded, CartAction(DeleteItem("x")))

    assert state == loaded
    assert effects == ()


def test_request_delete_translates_to_reset(reducer, loaded, product_a):
    state = select(reducer, loaded, row_for(loaded, product_a).id, 1)
    state, _ = reducer(state, SetCartView(is_presented=True))
    item_id = state.cart.items.ids[0]

    _, effects = reducer(state, CartAction(CartItemAction(item_id, RequestDelete())))

    assert effects == (
        Effect.send(CartAction(DeleteItem(item_id))),
        Effect.send(ResetProduct(product_a)),
    )


# ============ ResetProduct ============


def test_reset_product_zeroes_matching_row(reducer, loaded, product_a, product_b):
    state = select(reducer, loaded, row_for(loaded, product_a).id, 2)
    state = select(reducer, state, row_for(state, product_b).id, 1)

    state, _ = reducer(state, ResetProduct(product_a))

    assert row_for(state, product_a).count == 0
    assert row_for(state, product_a).add_to_cart.count == 0
    assert row_for(state, product_b).count == 1


def test_reset_unknown_product_is_noop(reducer, loaded):
    ghost = Product(id=99, name="Ghost", price=Decimal("1"), image="")
    state, effects = reducer(loaded, ResetProduct(ghost))

    assert state == loaded
    assert effects == ()


def test_reset_matches_by_product_id(reducer, product_a):
    rows = IdentifiedArray([ProductRowState(id="r1", product=product_a, count=3)])
    state = ProductListState(rows=rows)

    same_id = replace(product_a, name="Renamed")
    state, _ = reducer(state, ResetProduct(same_id))

    assert state.rows.get("r1").value.count == 0
