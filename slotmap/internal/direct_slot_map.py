import dataclasses
import logging
from typing import Iterable, Iterator, List, Optional, Tuple, TypeVar

from slotmap.internal.keys import Key, next_generation
from slotmap.internal.slot_map import SlotMap
from slotmap.internal.slots import FreeList, Occupied, Slot, Vacant

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DirectSlotMap(SlotMap[T]):
    """A slot map backed by a single list of slots.

    Insertion, removal and lookup are constant time and cost roughly one list access. Removing a value never
    shifts other values because vacated slots are reused. The slot list never shrinks.

    Iteration has to scan every slot to skip over the vacant ones. A map that has seen many removals can have
    long runs of vacant slots that slow iteration down. Use `IndirectSlotMap` when iteration dominates and an
    extra level of indirection per lookup is acceptable.
    """

    _slots: List[Slot[T]]
    _free: FreeList

    def __init__(self, values: Iterable[T] = ()):
        self._slots = []
        self._free = FreeList()
        super().__init__(values)

    def insert(self, value: T) -> Key:
        """Insert a value and return the key that designates it from now on.

        Vacant slots are reused before the slot list grows.
        """
        reused = self._free.take(self._slots)
        if reused is None:
            position, generation = len(self._slots), 0
            self._slots.append(Occupied(generation, value))
            logger.debug("Grew slots to %d", len(self._slots))
        else:
            position, generation = reused
            self._slots[position] = Occupied(generation, value)

        self._version += 1
        return Key(position, generation)

    def remove(self, key: Key) -> Optional[T]:
        """Remove the value for `key` and return it.

        Returns None for stale or unknown keys, so removing twice is harmless.
        """
        position = self._find(key)
        if position is None:
            return None

        value = self._slots[position].payload
        self._free.push(position)
        self._slots[position] = Vacant(next_generation(key.generation))
        self._version += 1
        return value

    def copy(self) -> "DirectSlotMap[T]":
        clone = type(self)()
        clone._slots = [dataclasses.replace(slot) for slot in self._slots]
        clone._free = self._free.copy()
        return clone

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)

    def _locate(self, key: Key) -> Optional[int]:
        # Negative positions would wrap around.
        if not 0 <= key.position < len(self._slots):
            return None

        slot = self._slots[key.position]
        if isinstance(slot, Occupied) and slot.generation == key.generation:
            return key.position
        return None

    def _load(self, location: int) -> T:
        return self._slots[location].payload

    def _store(self, location: int, value: T) -> None:
        self._slots[location].payload = value

    def _iter_items(self, reverse: bool) -> Iterator[Tuple[Key, T]]:
        positions = range(len(self._slots))
        if reverse:
            positions = reversed(positions)

        for position in positions:
            slot = self._slots[position]
            if isinstance(slot, Occupied):
                yield Key(position, slot.generation), slot.payload
