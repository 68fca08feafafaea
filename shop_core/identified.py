from typing import Callable, Dict, Generic, Hashable, Iterable, Iterator, Tuple, TypeVar

from .ftypes import Maybe

T = TypeVar("T")


class IdentifiedArray(Generic[T]):
    """
    Иммутабельная упорядоченная коллекция состояний с ключом по `id`.

    Порядок вставки = порядок отображения, поиск по id за O(1).
    Все операции изменения возвращают новую коллекцию.
    """

    __slots__ = ("_by_id",)

    def __init__(self, elements: Iterable[T] = ()):
        by_id: Dict[Hashable, T] = {}
        for element in elements:
            if element.id in by_id:
                raise ValueError(f"Duplicate id in IdentifiedArray: {element.id!r}")
            by_id[element.id] = element
        self._by_id = by_id

    @classmethod
    def _from_dict(cls, by_id: Dict[Hashable, T]) -> "IdentifiedArray[T]":
        arr = cls.__new__(cls)
        arr._by_id = by_id
        return arr

    # ============ Чтение ============

    @property
    def ids(self) -> Tuple[Hashable, ...]:
        return tuple(self._by_id)

    def get(self, element_id: Hashable) -> Maybe[T]:
        return Maybe(self._by_id.get(element_id))

    def __contains__(self, element_id: Hashable) -> bool:
        return element_id in self._by_id

    def __iter__(self) -> Iterator[T]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __bool__(self) -> bool:
        return bool(self._by_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IdentifiedArray):
            return NotImplemented
        # порядок важен
        return tuple(self._by_id.items()) == tuple(other._by_id.items())

    def __repr__(self) -> str:
        return f"IdentifiedArray({list(self._by_id.values())!r})"

    # ============ Изменение (возвращают новую коллекцию) ============

    def update(self, element_id: Hashable, fn: Callable[[T], T]) -> "IdentifiedArray[T]":
        """Применяет fn к элементу с element_id; если элемента нет — коллекция не меняется"""
        if element_id not in self._by_id:
            return self
        return IdentifiedArray._from_dict(
            {**self._by_id, element_id: fn(self._by_id[element_id])}
        )

    def remove(self, element_id: Hashable) -> "IdentifiedArray[T]":
        if element_id not in self._by_id:
            return self
        return IdentifiedArray._from_dict(
            {k: v for k, v in self._by_id.items() if k != element_id}
        )
