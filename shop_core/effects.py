from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple

from .ftypes import Either, attempt


@dataclass(frozen=True)
class Effect:
    """
    Запланированный побочный эффект редьюсера.

    Два вида:
      - immediate: `action` отправляется обратно в стор сразу после текущего действия
      - task: `operation` выполняется асинхронно, её результат (действие) отправляется в стор
    Редьюсер только описывает эффект, выполняет его Store.
    """

    action: Optional[Any] = None
    operation: Optional[Callable[[], Awaitable[Any]]] = None

    @property
    def is_immediate(self) -> bool:
        return self.operation is None

    @staticmethod
    def send(action: Any) -> "Effect":
        return Effect(action=action)

    @staticmethod
    def task(
        work: Callable[[], Awaitable[Any]],
        to_action: Callable[[Either], Any],
    ) -> "Effect":
        """
        Асинхронная задача: исход work() упаковывается в Either
        и превращается в действие-результат через to_action
        """

        async def operation():
            return to_action(await attempt(work))

        return Effect(operation=operation)

    def map(self, fn: Callable[[Any], Any]) -> "Effect":
        """Поднимает действие-результат в объединение действий родителя"""
        if self.is_immediate:
            return Effect.send(fn(self.action))

        inner = self.operation

        async def lifted():
            return fn(await inner())

        return Effect(operation=lifted)


Effects = Tuple[Effect, ...]
NONE: Effects = ()


def map_effects(effects: Effects, fn: Callable[[Any], Any]) -> Effects:
    return tuple(e.map(fn) for e in effects)
