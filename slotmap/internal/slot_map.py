import logging
from typing import Iterable, Iterator, List, MutableMapping, Optional, Tuple, TypeVar

import objproxies

from slotmap.internal.errors import SlotMapCorruptedError, StaleKeyError
from slotmap.internal.keys import Key
from slotmap.internal.proxies import proxy_for
from slotmap.internal.slots import FreeList, Slot, Vacant
from slotmap.internal.views import SlotItemsView, SlotKeysView, SlotValuesView

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SlotMap(MutableMapping[Key, T]):
    """Mapping surface shared by the slot map layouts.

    Layouts provide `insert`, `remove`, `__len__`, `copy` and the `_locate`, `_load`, `_store` and `_iter_items`
    primitives. Everything else is expressed in terms of those.

    `__setitem__` only ever replaces the value of a live key. New values go in through `insert`, which is the
    only way to obtain a key.
    """

    _slots: List[Slot]
    _free: FreeList
    # Bumped whenever an entry is inserted or removed.
    _version: int

    def __init__(self, values: Iterable[T] = ()):
        self._version = 0
        self.extend(values)

    def insert(self, value: T) -> Key:
        raise NotImplementedError()

    def remove(self, key: Key) -> Optional[T]:
        raise NotImplementedError()

    def copy(self) -> "SlotMap[T]":
        raise NotImplementedError()

    def __len__(self) -> int:
        raise NotImplementedError()

    def _locate(self, key: Key) -> Optional[int]:
        """Return where the value for a live key is stored, or None."""
        raise NotImplementedError()

    def _load(self, location: int) -> T:
        raise NotImplementedError()

    def _store(self, location: int, value: T) -> None:
        raise NotImplementedError()

    def _iter_items(self, reverse: bool) -> Iterator[Tuple[Key, T]]:
        raise NotImplementedError()

    def _find(self, key) -> Optional[int]:
        if not isinstance(key, Key):
            return None
        return self._locate(key)

    def get(self, key: Key, default=None):
        location = self._find(key)
        if location is None:
            return default
        return self._load(location)

    def is_empty(self) -> bool:
        return len(self) == 0

    def extend(self, values: Iterable[T]) -> List[Key]:
        return [self.insert(value) for value in values]

    def drain(self, reverse: bool = False) -> Iterator[Tuple[Key, T]]:
        """Remove and yield every entry, front to back (or back to front).

        Only the entries present when draining starts are drained. Entries removed by the caller in the
        meantime are skipped.
        """
        for key, _ in list(self._iter_items(reverse)):
            if self._find(key) is None:
                continue
            yield key, self.remove(key)

    def clear(self) -> None:
        # Remove one by one so that every outstanding key goes stale. We keep the slots around.
        for _ in self.drain(reverse=True):
            pass

    def proxy(self, key: Key) -> objproxies.CallbackProxy:
        return proxy_for(self, key)

    def keys(self) -> SlotKeysView:
        return SlotKeysView(self)

    def values(self) -> SlotValuesView[T]:
        return SlotValuesView(self)

    def items(self) -> SlotItemsView[T]:
        return SlotItemsView(self)

    def check_invariants(self) -> None:
        """Verify the free list against the slots. Raises `SlotMapCorruptedError` on the first violation."""
        free_positions = set(self._free)
        if len(free_positions) != len(self._free):
            self._corrupted("Free list contains duplicate positions!")

        for position, slot in enumerate(self._slots):
            is_vacant = isinstance(slot, Vacant)
            if is_vacant != (position in free_positions):
                self._corrupted(f"Slot {position} is {slot} but free list membership disagrees!")

        if len(self) != len(self._slots) - len(self._free):
            self._corrupted(f"Length {len(self)} does not match the number of occupied slots!")

    @staticmethod
    def _corrupted(message: str):
        logger.error(message)
        raise SlotMapCorruptedError(message)

    def __getitem__(self, key: Key) -> T:
        location = self._find(key)
        if location is None:
            raise StaleKeyError(key)
        return self._load(location)

    def __setitem__(self, key: Key, value: T) -> None:
        location = self._find(key)
        if location is None:
            raise StaleKeyError(key)
        self._store(location, value)

    def __delitem__(self, key: Key) -> None:
        if self._find(key) is None:
            raise StaleKeyError(key)
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return self._find(key) is not None

    def __iter__(self) -> Iterator[Key]:
        return iter(self.keys())

    def __reversed__(self) -> Iterator[Key]:
        return reversed(self.keys())

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __repr__(self):
        entries = ", ".join(f"{key!r}: {value!r}" for key, value in self._iter_items(reverse=False))
        return f"{type(self).__name__}({{{entries}}})"
