import random
from dataclasses import dataclass
from typing import Dict

from slotmap import Key, SlotMap


@dataclass(frozen=True)
class BoxedValue:
    value: int


def churn(slot_map: SlotMap, rng: random.Random, steps: int, check_every: int = 0) -> Dict[Key, int]:
    """Run random inserts and removals against `slot_map` and a plain dict, asserting they agree.

    Returns the dict model, which maps every live key to its value.
    """
    model: Dict[Key, int] = {}
    issued = []

    for step in range(steps):
        if not issued or rng.random() < 0.55:
            key = slot_map.insert(step)
            # A fresh key never collides with a live one.
            assert key not in model
            model[key] = step
            issued.append(key)
        else:
            # Stale keys are picked on purpose, too.
            key = rng.choice(issued)
            assert slot_map.remove(key) == model.pop(key, None)

        assert len(slot_map) == len(model)
        if check_every and step % check_every == 0:
            slot_map.check_invariants()

    return model
