import logging
from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from slotmap.internal.errors import SlotMapCorruptedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Occupied(Generic[T]):
    generation: int
    # The value itself for DirectSlotMap, the index into the dense items for IndirectSlotMap.
    payload: T


@dataclass
class Vacant:
    # Generation the next occupant will be issued.
    generation: int


Slot = Union[Occupied[T], Vacant]


class FreeList:
    """Stack of vacant slot positions.

    Positions are reused last in, first out so that churn keeps hitting the same few slots instead of growing
    the slot list.
    """

    positions: List[int]

    def __init__(self, positions=()):
        self.positions = list(positions)

    def push(self, position: int) -> None:
        self.positions.append(position)

    def take(self, slots: List[Slot]) -> Optional[Tuple[int, int]]:
        """Pop a position for reuse and return it with the generation its next occupant gets.

        Returns None when there is nothing to reuse.
        """
        if not self.positions:
            return None

        # Only pop once the slot checks out, so a corrupted map is left as it was.
        position = self.positions[-1]
        if not 0 <= position < len(slots):
            logger.error("Free list yielded position %d outside of %d slots", position, len(slots))
            raise SlotMapCorruptedError(f"Free list yielded position {position} which does not exist!")

        slot = slots[position]
        if not isinstance(slot, Vacant):
            logger.error("Free list yielded position %d holding %r", position, slot)
            raise SlotMapCorruptedError(f"Free list yielded position {position} which is not vacant!")

        self.positions.pop()
        logger.debug("Reusing slot %d at generation %d", position, slot.generation)
        return position, slot.generation

    def copy(self) -> "FreeList":
        return FreeList(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[int]:
        return iter(self.positions)

