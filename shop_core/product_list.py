"""
Машина каталога.

Держит строки каталога, необязательную корзину и эффект загрузки
товаров. Корзина — одноразовая проекция выбранных строк: она не
синхронизируется со строками, а удаления из неё возвращаются в
каталог явным действием ResetProduct.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Hashable, List, Optional

from .cart import CartItemAction, CartState, Close, make_cart_reducer
from .cart_item import CartItemState, RequestDelete
from .domain import CartItem, DataLoadingStatus, Product
from .effects import NONE, Effect
from .environment import Environment
from .ftypes import Either, Maybe
from .identified import IdentifiedArray
from .product_row import ProductRowState, product_row_reducer, reset_row
from .reducer import Reducer, ReducerFn, combine, for_each, optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductListState:
    rows: IdentifiedArray = field(default_factory=IdentifiedArray)
    should_open_cart: bool = False
    cart: Optional[CartState] = None
    data_loading_status: DataLoadingStatus = DataLoadingStatus.NOT_STARTED

    @property
    def is_loading(self) -> bool:
        return self.data_loading_status == DataLoadingStatus.LOADING

    @property
    def should_show_error(self) -> bool:
        return self.data_loading_status == DataLoadingStatus.ERROR


# ============ Действия ============


@dataclass(frozen=True)
class FetchProducts:
    pass


@dataclass(frozen=True)
class FetchProductsResponse:
    result: Either  # Either[Exception, List[Product]]


@dataclass(frozen=True)
class SetCartView:
    is_presented: bool


@dataclass(frozen=True)
class ResetProduct:
    product: Product


@dataclass(frozen=True)
class CartAction:
    action: Any


@dataclass(frozen=True)
class ProductAction:
    id: Hashable
    action: Any


# ============ Чистые функции ============


def build_rows(products: List[Product], new_id) -> IdentifiedArray:
    """Свежие строки (новые id, count=0) в порядке загрузки"""
    return IdentifiedArray(ProductRowState(id=new_id(), product=p) for p in products)


def project_cart(rows: IdentifiedArray, new_id) -> CartState:
    """
    Снимок корзины: только строки с count > 0,
    у каждой позиции свой id и свой id CartItem
    """
    items = IdentifiedArray(
        CartItemState(
            id=new_id(),
            cart_item=CartItem(id=new_id(), product=row.product, quantity=row.count),
        )
        for row in rows
        if row.count > 0
    )
    return CartState(id=new_id(), items=items)


def reset_product(state: ProductListState, product: Product) -> ProductListState:
    """Обнуляет строку с тем же id товара; если строки нет — состояние не меняется"""
    row = Maybe.first(state.rows, lambda r: r.product.id == product.id)
    if row.is_none():
        return state
    return replace(state, rows=state.rows.update(row.value.id, reset_row))


# ============ Редьюсер ============


def make_product_list_reducer(env: Environment) -> ReducerFn:
    def fetch_products(state: ProductListState, action: FetchProducts):
        effect = Effect.task(env.fetch_products, FetchProductsResponse)
        return replace(state, data_loading_status=DataLoadingStatus.LOADING), (effect,)

    def fetch_products_response(state: ProductListState, action: FetchProductsResponse):
        def loaded(products: List[Product]) -> ProductListState:
            return replace(
                state,
                rows=build_rows(products, env.new_id),
                data_loading_status=DataLoadingStatus.SUCCESS,
            )

        def failed(error: Exception) -> ProductListState:
            logger.error("Error getting products, try again later: %r", error)
            return replace(state, data_loading_status=DataLoadingStatus.ERROR)

        return action.result.fold(failed, loaded), NONE

    def set_cart_view(state: ProductListState, action: SetCartView):
        if action.is_presented:
            return replace(state, should_open_cart=True, cart=project_cart(state.rows, env.new_id)), NONE
        return replace(state, should_open_cart=False, cart=None), NONE

    def cart_action(state: ProductListState, action: CartAction):
        inner = action.action
        if isinstance(inner, Close):
            return set_cart_view(state, SetCartView(is_presented=False))
        if (
            isinstance(inner, CartItemAction)
            and isinstance(inner.action, RequestDelete)
            and state.cart is not None
        ):
            item = state.cart.items.get(inner.id)
            return state, tuple(
                item.map(lambda i: (Effect.send(ResetProduct(i.cart_item.product)),)).get_or_else(())
            )
        return state, NONE

    def reset(state: ProductListState, action: ResetProduct):
        return reset_product(state, action.product), NONE

    core = (
        Reducer()
        .on(FetchProducts, fetch_products)
        .on(FetchProductsResponse, fetch_products_response)
        .on(SetCartView, set_cart_view)
        .on(CartAction, cart_action)
        .on(ResetProduct, reset)
    )
    return combine(
        for_each(product_row_reducer, field="rows", action_type=ProductAction),
        optional(make_cart_reducer(env), field="cart", action_type=CartAction),
        core,
    )
