from __future__ import annotations

import logging
from dataclasses import dataclass
from math import hypot
from typing import Optional

from .card_model import SimulationNode
from .config import CLICK_TOLERANCE


@dataclass
class DragState:
    node: SimulationNode
    offset_x: float
    offset_y: float
    start_x: float
    start_y: float
    moved: bool = False


class DragController:
    """Single-pointer drag state machine: ``Idle`` or ``Dragging``.

    While a node is dragged it carries ``is_dragging`` and its position is
    written only here, from the pointer minus the offset captured on
    press, so the node does not jump under the cursor.
    """

    def __init__(self, click_tolerance: float = CLICK_TOLERANCE):
        self.click_tolerance = click_tolerance
        self._state: Optional[DragState] = None

    @property
    def is_dragging(self) -> bool:
        return self._state is not None

    @property
    def node(self) -> SimulationNode | None:
        return self._state.node if self._state else None

    def pointer_down(self, node: SimulationNode, x: float, y: float) -> None:
        if self._state is not None:
            self.pointer_up()
        node.is_dragging = True
        node.vx = 0.0
        node.vy = 0.0
        self._state = DragState(node, x - node.x, y - node.y, x, y)
        logging.debug(f"drag start on node {node.id}")

    def pointer_move(self, x: float, y: float) -> None:
        state = self._state
        if state is None:
            return
        state.node.x = x - state.offset_x
        state.node.y = y - state.offset_y
        if hypot(x - state.start_x, y - state.start_y) > self.click_tolerance:
            state.moved = True

    def pointer_up(self) -> bool:
        """End the drag. Returns True when the pointer actually travelled."""
        state = self._state
        if state is None:
            return False
        state.node.is_dragging = False
        self._state = None
        return state.moved

    def cancel(self) -> None:
        """Forget the current drag, e.g. when the node set is replaced."""
        if self._state is not None:
            self._state.node.is_dragging = False
            self._state = None
