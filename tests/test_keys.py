import dataclasses

import pytest

from slotmap import Key
from slotmap.internal.keys import next_generation


def test_keys_compare_by_position_and_generation():
    assert Key(1, 2) == Key(1, 2)
    assert Key(1, 2) != Key(1, 3)
    assert Key(1, 2) != Key(2, 2)

    assert {Key(1, 2): "a"}[Key(1, 2)] == "a"
    assert len({Key(0, 0), Key(0, 0), Key(0, 1)}) == 2


def test_keys_are_immutable():
    key = Key(0, 0)

    with pytest.raises(dataclasses.FrozenInstanceError):
        key.generation = 1


def test_repr():
    assert repr(Key(3, 4)) == "Key(3, 4)"


def test_next_generation():
    assert next_generation(0) == 1
    # No wrap-around.
    assert next_generation(2 ** 64 - 1) == 2 ** 64
