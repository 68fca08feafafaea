from dataclasses import dataclass, field, replace
from typing import Any

from .domain import Product
from .effects import NONE
from .reducer import Reducer, combine, scope


# ============ Счётчик «в корзину» ============


@dataclass(frozen=True)
class AddToCartState:
    count: int = 0


@dataclass(frozen=True)
class DidTapPlusButton:
    pass


@dataclass(frozen=True)
class DidTapMinusButton:
    pass


add_to_cart_reducer = (
    Reducer()
    .on(DidTapPlusButton, lambda s, a: (replace(s, count=s.count + 1), NONE))
    .on(DidTapMinusButton, lambda s, a: (replace(s, count=max(0, s.count - 1)), NONE))
)


# ============ Строка каталога ============


@dataclass(frozen=True)
class ProductRowState:
    id: str  # id строки списка, не товара
    product: Product
    count: int = 0
    add_to_cart: AddToCartState = field(default_factory=AddToCartState)


@dataclass(frozen=True)
class AddToCartAction:
    action: Any


def reset_row(row: ProductRowState) -> ProductRowState:
    """Обнуляет выбранное количество и вложенный счётчик"""
    return replace(row, count=0, add_to_cart=AddToCartState(count=0))


def _mirror_count(row: ProductRowState, action: AddToCartAction):
    return replace(row, count=row.add_to_cart.count), NONE


product_row_reducer = combine(
    scope(add_to_cart_reducer, field="add_to_cart", action_type=AddToCartAction),
    Reducer().on(AddToCartAction, _mirror_count),
)
