from dataclasses import dataclass


def next_generation(generation: int) -> int:
    return generation + 1


@dataclass(frozen=True)
class Key:
    """A handle to a value in a slot map.

    Keys are plain values: copying one is free and the map keeps no record of the keys it has handed out.
    A key only says where a value was and which occupant it referred to. Whether that occupant is still
    alive is decided by the map that issued it.
    """

    position: int
    generation: int

    def __repr__(self):
        return f"Key({self.position}, {self.generation})"
