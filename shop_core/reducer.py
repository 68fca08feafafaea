"""
Редьюсеры и их композиция.

Редьюсер — чистая функция (state, action) -> (new_state, effects).
Родитель не знает о внутреннем устройстве ребёнка: он только
вырезает свой срез состояния, разворачивает обёртку действия
и поднимает эффекты ребёнка обратно в своё объединение действий.
"""

import logging
from dataclasses import dataclass, replace
from functools import reduce
from typing import Any, Callable, Tuple

from .effects import NONE, Effects, map_effects

logger = logging.getLogger(__name__)

Step = Tuple[Any, Effects]
ReducerFn = Callable[[Any, Any], Step]


@dataclass(frozen=True)
class Reducer:
    """
    Иммутабельный набор обработчиков по типу действия.
    Обработчик: (state, action) -> (new_state, effects)
    """

    handlers: Tuple[Tuple[type, Callable], ...] = ()

    def on(self, action_type: type, handler: Callable[[Any, Any], Step]) -> "Reducer":
        """Возвращает новый редьюсер с добавленным обработчиком"""
        return Reducer(handlers=self.handlers + ((action_type, handler),))

    def __call__(self, state, action) -> Step:
        matching = tuple(h for t, h in self.handlers if isinstance(action, t))
        return combine(*matching)(state, action)


def combine(*reducers: ReducerFn) -> ReducerFn:
    """
    Последовательно применяет редьюсеры к одному действию (fold),
    эффекты склеиваются в порядке применения
    """

    def run(state, action) -> Step:
        def apply(acc: Step, reducer: ReducerFn) -> Step:
            current, effects = acc
            new_state, more = reducer(current, action)
            return new_state, effects + tuple(more)

        return reduce(apply, reducers, (state, NONE))

    return run


def scope(child: ReducerFn, *, field: str, action_type: type) -> ReducerFn:
    """Встраивает ребёнка, состояние которого всегда существует (state.<field>)"""

    def run(state, action) -> Step:
        if not isinstance(action, action_type):
            return state, NONE
        child_state, effects = child(getattr(state, field), action.action)
        return replace(state, **{field: child_state}), map_effects(effects, action_type)

    return run


def optional(child: ReducerFn, *, field: str, action_type: type) -> ReducerFn:
    """Встраивает ребёнка, состояние которого может отсутствовать (None)"""

    def run(state, action) -> Step:
        if not isinstance(action, action_type):
            return state, NONE
        child_state = getattr(state, field)
        if child_state is None:
            logger.warning(
                "%s received while %s is absent, dropped", type(action.action).__name__, field
            )
            return state, NONE
        new_child, effects = child(child_state, action.action)
        return replace(state, **{field: new_child}), map_effects(effects, action_type)

    return run


def for_each(child: ReducerFn, *, field: str, action_type: type) -> ReducerFn:
    """
    Маршрутизирует действие action_type(id, action) в элемент IdentifiedArray
    state.<field> с этим id
    """

    def run(state, action) -> Step:
        if not isinstance(action, action_type):
            return state, NONE
        collection = getattr(state, field)
        element = collection.get(action.id)
        if element.is_none():
            logger.warning(
                "%s for unknown id %r in %s, dropped",
                type(action.action).__name__,
                action.id,
                field,
            )
            return state, NONE

        new_element, effects = child(element.value, action.action)
        element_id = action.id
        return (
            replace(state, **{field: collection.update(element_id, lambda _: new_element)}),
            map_effects(effects, lambda a: action_type(element_id, a)),
        )

    return run
