"""
Модальное окно корзины: подтверждение покупки, успех или ошибка.

Активно не более одного варианта: CartState.destination — одно
Optional-поле, новое окно целиком заменяет старое.
"""

from dataclasses import dataclass
from typing import Union

from .effects import NONE
from .reducer import Reducer


@dataclass(frozen=True)
class ConfirmationAlert:
    message: str
    title: str = "Confirm your purchase"


@dataclass(frozen=True)
class SuccessAlert:
    message: str
    title: str = "Thank you!"


@dataclass(frozen=True)
class ErrorAlert:
    message: str
    title: str = "Oops!"


Destination = Union[ConfirmationAlert, SuccessAlert, ErrorAlert]


# ============ Действия кнопок окна ============


@dataclass(frozen=True)
class ConfirmPurchase:
    pass


@dataclass(frozen=True)
class CancelConfirmation:
    pass


def _keep(state, action):
    return state, NONE


# Окно только хранит данные; переходы делает корзина
destination_reducer = (
    Reducer().on(ConfirmPurchase, _keep).on(CancelConfirmation, _keep)
)
