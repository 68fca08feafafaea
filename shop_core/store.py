"""
Store — рантайм дерева редьюсеров.

Действия обрабатываются строго по одному в порядке поступления.
Immediate-эффекты ставятся в очередь и выполняются до возврата из send(),
асинхронные — запускаются как asyncio-задачи, их результат отправляется
обратно в тот же стор.
"""

import asyncio
import logging
from collections import deque
from typing import Any, Callable, Set, Tuple

from .effects import Effect
from .reducer import ReducerFn

logger = logging.getLogger(__name__)


class Store:
    def __init__(self, reducer: ReducerFn, initial_state: Any) -> None:
        self._reducer = reducer
        self._state = initial_state
        self._tasks: Set[asyncio.Task] = set()
        self._listeners: Tuple[Callable[[Any], None], ...] = ()

    @property
    def state(self) -> Any:
        return self._state

    @property
    def in_flight(self) -> int:
        """Сколько асинхронных эффектов ещё не завершилось"""
        return len(self._tasks)

    def subscribe(self, listener: Callable[[Any], None]) -> None:
        """listener(state) вызывается после каждого обработанного действия"""
        self._listeners = self._listeners + (listener,)

    async def send(self, action: Any) -> None:
        self._dispatch(action)

    async def settle(self) -> None:
        """Ждёт все эффекты, включая порождённые их результатами"""
        while self._tasks:
            await asyncio.gather(*tuple(self._tasks))

    def run(self, *actions: Any) -> Any:
        """Синхронная обёртка для UI: отправляет действия и ждёт все эффекты"""

        async def drive():
            for action in actions:
                await self.send(action)
            await self.settle()
            return self._state

        return asyncio.run(drive())

    # ============ Внутреннее ============

    def _dispatch(self, action: Any) -> None:
        queue = deque([action])
        while queue:
            current = queue.popleft()
            logger.debug("Action %r", current)
            self._state, effects = self._reducer(self._state, current)
            for effect in effects:
                if effect.is_immediate:
                    queue.append(effect.action)
                else:
                    self._spawn(effect)
            for listener in self._listeners:
                listener(self._state)

    def _spawn(self, effect: Effect) -> None:
        task = asyncio.get_running_loop().create_task(self._run_effect(effect))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_effect(self, effect: Effect) -> None:
        result = await effect.operation()
        self._dispatch(result)
