import pytest

from slotmap import SlotMapCorruptedError
from slotmap.internal.slots import FreeList, Occupied, Vacant


def test_take_from_empty_free_list():
    free_list = FreeList()

    assert free_list.take([Vacant(0)]) is None
    assert len(free_list) == 0


def test_take_is_last_in_first_out():
    slots = [Vacant(3), Occupied(0, "b"), Vacant(1)]
    free_list = FreeList()
    free_list.push(0)
    free_list.push(2)

    assert free_list.take(slots) == (2, 1)
    assert free_list.take(slots) == (0, 3)
    assert free_list.take(slots) is None


def test_take_refuses_occupied_slots():
    free_list = FreeList([1])

    with pytest.raises(SlotMapCorruptedError):
        free_list.take([Vacant(0), Occupied(0, "b")])


def test_copy_is_independent():
    free_list = FreeList([0, 1])

    clone = free_list.copy()
    clone.push(2)

    assert list(free_list) == [0, 1]
    assert list(clone) == [0, 1, 2]


def test_take_leaves_free_list_alone_when_corrupted():
    slots = [Vacant(0), Occupied(0, "b")]

    for position in (1, 2, -1):
        free_list = FreeList([0, position])

        with pytest.raises(SlotMapCorruptedError):
            free_list.take(slots)

        assert list(free_list) == [0, position]
