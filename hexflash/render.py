from __future__ import annotations

from math import floor
from typing import Protocol

from .card_model import SimulationNode
from .config import EXPANDED_Z_VALUE


class Renderer(Protocol):
    """Where the engine projects node state. The engine never reads back."""

    def attach(self, node: SimulationNode) -> None:
        """Create ``node.handle`` and hook pointer events to the drag controller."""
        ...

    def apply_transform(self, node: SimulationNode) -> None:
        ...

    def clear(self) -> None:
        """Drop the handles of the previous node set."""
        ...


class NullRenderer:
    """Headless renderer; keeps the engine usable without any display."""

    def attach(self, node: SimulationNode) -> None:
        pass

    def apply_transform(self, node: SimulationNode) -> None:
        pass

    def clear(self) -> None:
        pass


def stacking_order(node: SimulationNode) -> int:
    if node.is_expanded:
        return EXPANDED_Z_VALUE
    # half-up rounding, 5.5 -> 6
    return int(floor(node.importance + 0.5))


def node_transform(node: SimulationNode) -> tuple[float, float]:
    """Top-left corner of the node's bounding square."""
    return node.x - node.radius, node.y - node.radius
