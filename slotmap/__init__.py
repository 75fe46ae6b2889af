from slotmap.internal.direct_slot_map import DirectSlotMap
from slotmap.internal.errors import SlotMapCorruptedError, StaleKeyError
from slotmap.internal.indirect_slot_map import IndirectSlotMap
from slotmap.internal.keys import Key
from slotmap.internal.slot_map import SlotMap

__all__ = [
    "DirectSlotMap",
    "IndirectSlotMap",
    "Key",
    "SlotMap",
    "SlotMapCorruptedError",
    "StaleKeyError",
]
