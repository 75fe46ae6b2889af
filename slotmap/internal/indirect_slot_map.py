import dataclasses
import logging
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from slotmap.internal.keys import Key, next_generation
from slotmap.internal.slot_map import SlotMap
from slotmap.internal.slots import FreeList, Occupied, Slot, Vacant

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DenseItem(Generic[T]):
    value: T
    # Position of the slot that points at this item.
    position: int


class IndirectSlotMap(SlotMap[T]):
    """A slot map that packs its values next to each other.

    Slots do not hold values but the index of a `DenseItem` in a separate, gap-free list. Every access costs two
    list accesses instead of one, in exchange iteration only ever touches live values.

    Removal swaps the last dense item into the hole and rewrites the slot that points at it, so removal stays
    constant time but does not preserve iteration order.

    Invariant: for every occupied slot at position p holding index i, `_items[i].position == p`, and every dense
    item is pointed at by exactly one occupied slot.
    """

    _slots: List[Slot[int]]
    _items: List[DenseItem[T]]
    _free: FreeList

    def __init__(self, values: Iterable[T] = ()):
        self._slots = []
        self._items = []
        self._free = FreeList()
        super().__init__(values)

    def insert(self, value: T) -> Key:
        reused = self._free.take(self._slots)
        if reused is None:
            position, generation = len(self._slots), 0
        else:
            position, generation = reused

        self._items.append(DenseItem(value, position))
        occupied = Occupied(generation, len(self._items) - 1)
        if reused is None:
            self._slots.append(occupied)
            logger.debug("Grew slots to %d", len(self._slots))
        else:
            self._slots[position] = occupied

        self._version += 1
        return Key(position, generation)

    def remove(self, key: Key) -> Optional[T]:
        index = self._find(key)
        if index is None:
            return None

        last_index = len(self._items) - 1
        moved_slot = None
        if index != last_index:
            moved_slot = self._slots[self._items[last_index].position]
            # Check before we touch anything, so a broken map is not made worse.
            if not isinstance(moved_slot, Occupied) or moved_slot.payload != last_index:
                self._corrupted(
                    f"Dense item {last_index} is not pointed at by its slot {self._items[last_index].position}!"
                )

        self._slots[key.position] = Vacant(next_generation(key.generation))
        self._free.push(key.position)
        self._version += 1

        if moved_slot is None:
            return self._items.pop().value

        removed = self._items[index]
        self._items[index] = self._items.pop()
        moved_slot.payload = index
        return removed.value

    def copy(self) -> "IndirectSlotMap[T]":
        clone = type(self)()
        clone._slots = [dataclasses.replace(slot) for slot in self._slots]
        clone._items = [dataclasses.replace(item) for item in self._items]
        clone._free = self._free.copy()
        return clone

    def check_invariants(self) -> None:
        super().check_invariants()

        for position, slot in enumerate(self._slots):
            if not isinstance(slot, Occupied):
                continue
            if not 0 <= slot.payload < len(self._items):
                self._corrupted(f"Slot {position} points past the dense items at {slot.payload}!")
            if self._items[slot.payload].position != position:
                self._corrupted(
                    f"Slot {position} points at dense item {slot.payload} "
                    f"which belongs to slot {self._items[slot.payload].position}!"
                )

        for index, item in enumerate(self._items):
            if not 0 <= item.position < len(self._slots):
                self._corrupted(f"Dense item {index} belongs to unknown slot {item.position}!")
            slot = self._slots[item.position]
            if not isinstance(slot, Occupied) or slot.payload != index:
                self._corrupted(f"Dense item {index} is not pointed at by its slot {item.position}!")

    def __len__(self) -> int:
        return len(self._items)

    def _locate(self, key: Key) -> Optional[int]:
        if not 0 <= key.position < len(self._slots):
            return None

        slot = self._slots[key.position]
        if isinstance(slot, Occupied) and slot.generation == key.generation:
            return slot.payload
        return None

    def _load(self, location: int) -> T:
        return self._items[location].value

    def _store(self, location: int, value: T) -> None:
        self._items[location].value = value

    def _iter_items(self, reverse: bool) -> Iterator[Tuple[Key, T]]:
        indices = range(len(self._items))
        if reverse:
            indices = reversed(indices)

        for index in indices:
            item = self._items[index]
            yield Key(item.position, self._slots[item.position].generation), item.value
