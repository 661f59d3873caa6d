from math import atan2, degrees, hypot

import pytest

from hexflash.config import HEX_SPACING_FACTOR
from hexflash.geometry import compute_hex_slots, hex_capacity


def test_empty_count_gives_no_slots():
    assert compute_hex_slots(0, 800, 600, 50) == []


@pytest.mark.parametrize("count", [1, 2, 6, 7, 8, 19, 20, 50])
def test_slot_count_and_center(count):
    slots = compute_hex_slots(count, 800, 600, 50)
    assert len(slots) == count
    assert (slots[0].x, slots[0].y) == (400, 300)
    assert slots[0].ring == 0


def test_same_inputs_same_slots():
    assert compute_hex_slots(25, 640, 480, 60) == compute_hex_slots(25, 640, 480, 60)


def test_first_ring_is_six_slots_sixty_degrees_apart():
    radius = 50
    slots = compute_hex_slots(7, 800, 600, radius)
    ring = slots[1:]
    assert [s.ring for s in ring] == [1] * 6
    for i, slot in enumerate(ring):
        dx, dy = slot.x - 400, slot.y - 300
        assert hypot(dx, dy) == pytest.approx(radius * HEX_SPACING_FACTOR)
        assert degrees(atan2(dy, dx)) % 360 == pytest.approx(60 * i, abs=1e-9)


def test_rings_fill_in_order():
    slots = compute_hex_slots(19, 800, 600, 40)
    assert [s.ring for s in slots] == [0] + [1] * 6 + [2] * 12
    assert [s.step for s in slots[7:]] == list(range(12))
    # ring 2 sits twice as far out as ring 1
    d1 = hypot(slots[1].x - 400, slots[1].y - 300)
    d2 = hypot(slots[7].x - 400, slots[7].y - 300)
    assert d2 == pytest.approx(2 * d1)


def test_capacity_of_nine_rings():
    assert hex_capacity() == 271
    slots = compute_hex_slots(271, 4000, 4000, 10)
    assert slots[-1].ring == 9
    assert len(set(slots)) == 271


def test_overflow_repeats_last_slot():
    slots = compute_hex_slots(280, 4000, 4000, 10)
    assert len(slots) == 280
    last = slots[270]
    assert all(s == last for s in slots[271:])
