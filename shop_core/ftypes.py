# shop_core/ftypes.py
# Maybe для поиска по коллекциям, Either как результат асинхронной задачи.

from __future__ import annotations
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
L = TypeVar("L")
R = TypeVar("R")

# Maybe (optional value)


@dataclass(frozen=True)
class Maybe(Generic[T]):
    """
    Maybe-обёртка для результатов поиска (строка каталога, позиция корзины).
    Maybe.some(value) / Maybe.nothing(); map, get_or_else.
    """

    value: Optional[T]

    @staticmethod
    def some(value: T) -> "Maybe[T]":
        return Maybe(value)

    @staticmethod
    def nothing() -> "Maybe[None]":
        return Maybe(None)

    @staticmethod
    def first(items, predicate: Callable[[T], bool]) -> "Maybe[T]":
        """Первый элемент, удовлетворяющий предикату"""
        return Maybe(next((item for item in items if predicate(item)), None))

    def __init__(self, value: Optional[T]):
        object.__setattr__(self, "value", value)

    def is_some(self) -> bool:
        return self.value is not None

    def is_none(self) -> bool:
        return self.value is None

    def map(self, fn: Callable[[T], U]) -> "Maybe[U]":
        return Maybe.some(fn(self.value)) if self.is_some() else Maybe.nothing()

    def get_or_else(self, default: U) -> T | U:
        return self.value if self.is_some() else default

    def __repr__(self) -> str:
        return f"Some({self.value})" if self.is_some() else "Nothing"


# Either (Left / Right)


@dataclass(frozen=True)
class Either(Generic[L, R]):
    """
    Either<L, R> — результат эффекта.
    Left хранит исключение (ошибка сети, невалидный ответ),
    Right — полученное значение.
    """

    is_left: bool
    value: Union[L, R]

    @staticmethod
    def left(value: L) -> "Either[L, R]":
        return Either(True, value)

    @staticmethod
    def right(value: R) -> "Either[L, R]":
        return Either(False, value)

    def __init__(self, is_left: bool, value: Union[L, R]):
        object.__setattr__(self, "is_left", is_left)
        object.__setattr__(self, "value", value)

    @property
    def is_right(self) -> bool:
        return not self.is_left

    def fold(self, on_left: Callable[[L], U], on_right: Callable[[R], U]) -> U:
        """Сворачивает обе ветви в одно значение"""
        return on_left(self.value) if self.is_left else on_right(self.value)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"Left({self.value!r})" if self.is_left else f"Right({self.value!r})"


async def attempt(work: Callable[[], Awaitable[R]]) -> Either[Exception, R]:
    """
    Выполняет асинхронную работу и упаковывает исход в Either.
    Любое Exception становится Left, поэтому ошибка доходит до редьюсера как данные.
    """
    try:
        return Either.right(await work())
    except Exception as exc:
        return Either.left(exc)
