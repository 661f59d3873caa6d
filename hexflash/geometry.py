from __future__ import annotations

from math import cos, sin, radians
from typing import NamedTuple

from .config import HEX_SPACING_FACTOR, MAX_HEX_RINGS


class HexSlot(NamedTuple):
    x: float
    y: float
    ring: int
    step: int     # position along the ring, 0 .. 6 * ring - 1


def hex_capacity(max_rings: int = MAX_HEX_RINGS) -> int:
    """Number of slots available in the centre plus ``max_rings`` rings."""
    return 1 + 3 * max_rings * (max_rings + 1)


def compute_hex_slots(count: int, width: float, height: float, node_radius: float,
                      spacing_factor: float = HEX_SPACING_FACTOR,
                      max_rings: int = MAX_HEX_RINGS) -> list[HexSlot]:
    """Target positions for ``count`` nodes on hexagonal rings.

    Slot 0 is the centre of the ``width`` x ``height`` rectangle. Ring ``k``
    holds ``6k`` slots at radius ``k * spacing`` starting from the six
    principal angles, each side split into ``k`` sub-steps. Slot ``i`` is
    always the target of node ``i``.

    When ``count`` exceeds :func:`hex_capacity` the remaining entries repeat
    the last generated slot, so the result always has ``count`` items.
    """
    if count <= 0:
        return []

    cx, cy = width / 2, height / 2
    spacing = node_radius * spacing_factor
    slots = [HexSlot(cx, cy, 0, 0)]

    ring = 1
    while len(slots) < count and ring <= max_rings:
        distance = ring * spacing
        step = 0
        for side in range(6):
            for sub in range(ring):
                if len(slots) >= count:
                    break
                angle = radians(side * 60 + sub * (60 / ring))
                slots.append(HexSlot(cx + distance * cos(angle),
                                     cy + distance * sin(angle),
                                     ring, step))
                step += 1
        ring += 1

    # overflow beyond the last ring shares the outermost slot
    if len(slots) < count:
        slots.extend([slots[-1]] * (count - len(slots)))
    return slots
