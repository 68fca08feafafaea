import uuid
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Tuple

from .domain import CartItem, Product


def _uuid() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Environment:
    """
    Внешние зависимости редьюсеров: источник каталога, приёмник заказов
    и генератор идентификаторов. В тестах подменяются заглушками.
    """

    fetch_products: Callable[[], Awaitable[List[Product]]]
    send_order: Callable[[Tuple[CartItem, ...]], Awaitable[str]]
    new_id: Callable[[], str] = field(default=_uuid)
