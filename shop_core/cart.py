"""
Машина корзины.

Владеет списком позиций, производными полями (сумма, видимость кнопки
оплаты), модальным окном и эффектом отправки заказа.
"""

import logging
from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Decimal
from functools import reduce
from typing import Any, Hashable, Optional

from .cart_item import RequestDelete, cart_item_reducer
from .destination import (
    CancelConfirmation,
    ConfirmationAlert,
    ConfirmPurchase,
    Destination,
    ErrorAlert,
    SuccessAlert,
    destination_reducer,
)
from .domain import DataLoadingStatus
from .effects import NONE, Effect
from .environment import Environment
from .ftypes import Either
from .identified import IdentifiedArray
from .reducer import Reducer, ReducerFn, combine, for_each, optional

logger = logging.getLogger(__name__)

ORDER_ERROR_MESSAGE = "Unable to send order, try again later."
CENTS = Decimal("0.01")


# ============ Состояние ============


@dataclass(frozen=True)
class CartState:
    """
    total_price и is_pay_button_hidden — производные поля, в конструктор
    не передаются, пересчитываются в __post_init__ (в т.ч. при replace).
    id — идентичность экземпляра корзины: ответ на заказ принимает
    только та корзина, которая его отправила.
    """

    id: str = ""
    items: IdentifiedArray = field(default_factory=IdentifiedArray)
    data_loading_status: DataLoadingStatus = DataLoadingStatus.NOT_STARTED
    destination: Optional[Destination] = None
    total_price: Decimal = field(init=False, default=Decimal("0"))
    is_pay_button_hidden: bool = field(init=False, default=True)

    def __post_init__(self):
        total = compute_total(self.items)
        object.__setattr__(self, "total_price", total)
        object.__setattr__(self, "is_pay_button_hidden", total == 0)

    @property
    def total_price_string(self) -> str:
        # округление только для отображения
        return f"${self.total_price.quantize(CENTS, rounding=ROUND_HALF_UP)}"

    @property
    def is_request_in_process(self) -> bool:
        return self.data_loading_status == DataLoadingStatus.LOADING


def compute_total(items: IdentifiedArray) -> Decimal:
    """Сумма price * quantity через reduce, полная точность"""
    return reduce(lambda acc, item: acc + item.cart_item.subtotal, items, Decimal("0"))


def recompute_total(state: CartState) -> CartState:
    return replace(state)


# ============ Действия ============


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class RecomputeTotal:
    pass


@dataclass(frozen=True)
class Pay:
    pass


@dataclass(frozen=True)
class DismissSuccess:
    pass


@dataclass(frozen=True)
class DismissError:
    pass


@dataclass(frozen=True)
class DismissDestination:
    """Окно закрыто жестом, без нажатия кнопки"""


@dataclass(frozen=True)
class DeleteItem:
    id: Hashable


@dataclass(frozen=True)
class PurchaseResponse:
    cart_id: str
    result: Either  # Either[Exception, str]


@dataclass(frozen=True)
class CartItemAction:
    id: Hashable
    action: Any


@dataclass(frozen=True)
class DestinationAction:
    action: Any


# ============ Обработчики ============


def _close(state: CartState, action: Close):
    # закрытие обрабатывает родитель
    return state, NONE


def _recompute(state: CartState, action: RecomputeTotal):
    return recompute_total(state), NONE


def _pay(state: CartState, action: Pay):
    if state.total_price == 0:
        logger.warning("Pay pressed with empty total, ignored")
        return state, NONE
    prompt = f"Do you want to proceed with your purchase of {state.total_price_string}?"
    return replace(state, destination=ConfirmationAlert(message=prompt)), NONE


def _clear_destination(state: CartState, action):
    return replace(state, destination=None), NONE


def _delete_item(state: CartState, action: DeleteItem):
    if action.id not in state.items:
        return state, NONE
    return recompute_total(replace(state, items=state.items.remove(action.id))), NONE


def _cart_item(state: CartState, action: CartItemAction):
    if isinstance(action.action, RequestDelete) and action.id in state.items:
        return state, (Effect.send(DeleteItem(action.id)),)
    return state, NONE


def _purchase_response(state: CartState, action: PurchaseResponse):
    if action.cart_id != state.id:
        logger.warning(
            "Order response for cart %r reached cart %r, dropped", action.cart_id, state.id
        )
        return state, NONE

    def succeeded(message: str) -> CartState:
        logger.info("Order sent: %s", message)
        return replace(
            state,
            data_loading_status=DataLoadingStatus.SUCCESS,
            destination=SuccessAlert(message=message),
        )

    def failed(error: Exception) -> CartState:
        logger.error("Unable to send order: %r", error)
        return replace(
            state,
            data_loading_status=DataLoadingStatus.ERROR,
            destination=ErrorAlert(message=ORDER_ERROR_MESSAGE),
        )

    return action.result.fold(failed, succeeded), NONE


def _make_destination_handler(env: Environment):
    def confirm(state: CartState):
        if state.is_request_in_process:
            logger.warning("Order submission already in flight, confirmation ignored")
            return state, NONE

        # снимок позиций на момент подтверждения
        items = tuple(item.cart_item for item in state.items)
        cart_id = state.id
        effect = Effect.task(
            lambda: env.send_order(items),
            lambda result: PurchaseResponse(cart_id, result),
        )
        return (
            replace(state, destination=None, data_loading_status=DataLoadingStatus.LOADING),
            (effect,),
        )

    def handle(state: CartState, action: DestinationAction):
        if not isinstance(state.destination, ConfirmationAlert):
            return state, NONE
        if isinstance(action.action, ConfirmPurchase):
            return confirm(state)
        if isinstance(action.action, CancelConfirmation):
            return replace(state, destination=None), NONE
        return state, NONE

    return handle


def make_cart_reducer(env: Environment) -> ReducerFn:
    core = (
        Reducer()
        .on(Close, _close)
        .on(RecomputeTotal, _recompute)
        .on(Pay, _pay)
        .on(DismissSuccess, _clear_destination)
        .on(DismissError, _clear_destination)
        .on(DismissDestination, _clear_destination)
        .on(DeleteItem, _delete_item)
        .on(CartItemAction, _cart_item)
        .on(PurchaseResponse, _purchase_response)
        .on(DestinationAction, _make_destination_handler(env))
    )
    return combine(
        for_each(cart_item_reducer, field="items", action_type=CartItemAction),
        optional(destination_reducer, field="destination", action_type=DestinationAction),
        core,
    )
