from typing import ItemsView, Iterator, KeysView, Tuple, TypeVar, ValuesView

from slotmap.internal.keys import Key

T = TypeVar("T")


def guard_structure(slot_map, iterator: Iterator[T]) -> Iterator[T]:
    """Fail like dict does when the slot map gains or loses entries mid-iteration.

    Replacing values through `slot_map[key] = value` is fine and does not trip the guard.
    """
    version = slot_map._version
    for entry in iterator:
        yield entry
        if slot_map._version != version:
            raise RuntimeError("SlotMap changed size during iteration")


class SlotKeysView(KeysView[Key]):
    def __iter__(self) -> Iterator[Key]:
        for key, _ in guard_structure(self._mapping, self._mapping._iter_items(reverse=False)):
            yield key

    def __reversed__(self) -> Iterator[Key]:
        for key, _ in guard_structure(self._mapping, self._mapping._iter_items(reverse=True)):
            yield key


class SlotValuesView(ValuesView[T]):
    def __iter__(self) -> Iterator[T]:
        for _, value in guard_structure(self._mapping, self._mapping._iter_items(reverse=False)):
            yield value

    def __reversed__(self) -> Iterator[T]:
        for _, value in guard_structure(self._mapping, self._mapping._iter_items(reverse=True)):
            yield value


class SlotItemsView(ItemsView[Key, T]):
    def __iter__(self) -> Iterator[Tuple[Key, T]]:
        return guard_structure(self._mapping, self._mapping._iter_items(reverse=False))

    def __reversed__(self) -> Iterator[Tuple[Key, T]]:
        return guard_structure(self._mapping, self._mapping._iter_items(reverse=True))
