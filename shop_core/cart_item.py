from dataclasses import dataclass

from .domain import CartItem
from .effects import NONE
from .reducer import Reducer


@dataclass(frozen=True)
class CartItemState:
    id: str  # идентичность строки корзины, не id товара
    cart_item: CartItem


@dataclass(frozen=True)
class RequestDelete:
    """Пользователь хочет удалить позицию; обрабатывает родитель"""


def _request_delete(state: CartItemState, action: RequestDelete):
    return state, NONE


cart_item_reducer = Reducer().on(RequestDelete, _request_delete)
