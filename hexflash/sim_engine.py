from __future__ import annotations

import logging
from dataclasses import dataclass, field
from math import cos, sin, sqrt, hypot, pi
from typing import Callable, Iterable, Optional, Protocol

import numpy as np

from .card_model import FlashcardRecord, SimulationNode, make_node
from .config import PhysicsConfig, COLLISION_BUFFER, SEPARATION_STRENGTH
from .drag import DragController
from .geometry import HexSlot, compute_hex_slots
from .render import Renderer, NullRenderer

# heading used for pairs sitting exactly on top of each other
GOLDEN_ANGLE = pi * (3.0 - sqrt(5.0))


class Ticker(Protocol):
    """Render loop driving :meth:`SimulationEngine.tick` once per frame."""

    @property
    def is_active(self) -> bool:
        ...

    def start(self, callback: Callable[[float], None]) -> None:
        ...

    def stop(self) -> None:
        ...


class ManualTicker:
    """Ticker driven by hand; ``fire`` plays the role of a display refresh."""

    def __init__(self):
        self._callback: Optional[Callable[[float], None]] = None

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[float], None]) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def fire(self, timestamp_ms: float) -> None:
        if self._callback is not None:
            self._callback(timestamp_ms)


@dataclass
class SimulationState:
    width: float
    height: float
    nodes: list[SimulationNode] = field(default_factory=list)

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


def needs_collision_check(nodes: list[SimulationNode], buffer: float) -> bool:
    """True if any pair is closer than the sum of radii plus ``buffer``."""
    if len(nodes) < 2:
        return False
    pos = np.array([(n.x, n.y) for n in nodes], dtype=np.float64)
    radii = np.array([n.radius for n in nodes], dtype=np.float64)

    delta = pos[:, None, :] - pos[None, :, :]
    dist = np.sqrt((delta ** 2).sum(-1))
    min_dist = radii[:, None] + radii[None, :] + buffer
    upper = np.triu_indices(len(nodes), k=1)
    return bool(np.any(dist[upper] < min_dist[upper]))


def resolve_overlaps(nodes: list[SimulationNode],
                     buffer: float = COLLISION_BUFFER,
                     strength: float = SEPARATION_STRENGTH) -> None:
    """One relaxation pass pushing overlapping pairs apart.

    Only positions move. Pairs with a dragged member are left alone; an
    expanded node never moves and its partner takes the whole push.
    """
    n = len(nodes)
    for i in range(n - 1):
        a = nodes[i]
        for j in range(i + 1, n):
            b = nodes[j]
            if a.is_dragging or b.is_dragging:
                continue
            if a.is_expanded and b.is_expanded:
                # cannot happen while toggle_expansion keeps a single one
                continue

            dx = a.x - b.x
            dy = a.y - b.y
            distance = sqrt(dx * dx + dy * dy)
            min_distance = a.radius + b.radius + buffer
            if distance >= min_distance:
                continue
            if distance == 0.0:
                distance = 1.0
                heading = GOLDEN_ANGLE * (i + j)
                dx, dy = cos(heading), sin(heading)

            overlap = min_distance - distance
            offset_x = dx / distance * overlap * strength
            offset_y = dy / distance * overlap * strength

            if a.is_expanded:
                b.x -= offset_x
                b.y -= offset_y
            elif b.is_expanded:
                a.x += offset_x
                a.y += offset_y
            else:
                a.x += offset_x / 2
                a.y += offset_y / 2
                b.x -= offset_x / 2
                b.y -= offset_y / 2


class SimulationEngine:
    """Spring-damper layout of flashcard nodes on hexagonal rings.

    One engine owns one :class:`SimulationState`, one drag controller, one
    renderer and one ticker. Nodes converge towards their hex slot (or the
    viewport centre when expanded), overlaps are relaxed, and every node
    is kept inside the viewport. Dragged nodes are never touched here.
    """

    def __init__(self, width: float, height: float,
                 renderer: Renderer | None = None,
                 ticker: Ticker | None = None,
                 config: PhysicsConfig | None = None):
        self.config = config or PhysicsConfig()
        self.state = SimulationState(float(width), float(height))
        self.renderer: Renderer = renderer or NullRenderer()
        self.ticker: Ticker = ticker or ManualTicker()
        self.drag = DragController()
        self._last_time: float | None = None

    # ------------------------------------------------------------------
    @property
    def nodes(self) -> list[SimulationNode]:
        return self.state.nodes

    @property
    def is_running(self) -> bool:
        return self.ticker.is_active

    def set_viewport(self, width: float, height: float) -> None:
        self.state.width = float(width)
        self.state.height = float(height)

    def node_by_id(self, node_id: int) -> SimulationNode | None:
        for node in self.state.nodes:
            if node.id == node_id:
                return node
        return None

    def hex_slots(self) -> list[HexSlot]:
        """Current targets, from the live node count and average radius."""
        nodes = self.state.nodes
        if not nodes:
            return []
        avg_radius = sum(n.radius for n in nodes) / len(nodes)
        return compute_hex_slots(
            len(nodes), self.state.width, self.state.height, avg_radius,
            self.config.hex_spacing_factor, self.config.max_rings,
        )

    # ------------------------------------------------------------------
    def create_nodes(self, records: Iterable[FlashcardRecord]) -> list[SimulationNode]:
        """Replace the node set with fresh nodes built from ``records``."""
        self.stop_simulation()
        self.drag.cancel()
        self.renderer.clear()

        cfg = self.config
        nodes = [make_node(i, rec, cfg.min_radius, cfg.max_radius)
                 for i, rec in enumerate(records)]
        self.state.nodes = nodes

        # start on the slots to avoid a fly-in from the origin
        for node, slot in zip(nodes, self.hex_slots()):
            node.x, node.y = slot.x, slot.y
        for node in nodes:
            self.renderer.attach(node)

        logging.debug(f"created {len(nodes)} nodes in "
                      f"{self.state.width:.0f}x{self.state.height:.0f}")
        self.render()
        self.start_simulation()
        return nodes

    def clear(self) -> None:
        """Stop the loop and drop every node (view reset)."""
        self.stop_simulation()
        self.drag.cancel()
        self.renderer.clear()
        self.state.nodes = []

    def start_simulation(self) -> None:
        self.stop_simulation()
        self._last_time = None
        self.ticker.start(self.tick)
        logging.debug("simulation started")

    def stop_simulation(self) -> None:
        if self.ticker.is_active:
            self.ticker.stop()
            logging.debug("simulation stopped")
        self._last_time = None

    def toggle_expansion(self, node: SimulationNode) -> bool:
        """Flip ``node`` open or closed, closing any other open node first."""
        for other in self.state.nodes:
            if other is not node and other.is_expanded:
                other.is_expanded = False
        node.is_expanded = not node.is_expanded
        if node.is_expanded and not self.is_running:
            self.start_simulation()
        return node.is_expanded

    def collapse_all(self) -> None:
        for node in self.state.nodes:
            node.is_expanded = False

    # ------------------------------------------------------------------
    def tick(self, timestamp_ms: float) -> None:
        """Frame callback: integrate for the elapsed time, then render."""
        if self._last_time is None:
            self._last_time = timestamp_ms
        delta_time = (timestamp_ms - self._last_time) / self.config.frame_ms
        self._last_time = timestamp_ms
        self.advance(delta_time)
        self.render()

    def advance(self, delta_time: float) -> None:
        """One integration step; ``delta_time`` is in 60 Hz frames."""
        nodes = self.state.nodes
        if not nodes:
            return

        cfg = self.config
        dt = min(max(delta_time, 0.0), cfg.max_delta_time)
        cx, cy = self.state.center
        slots = self.hex_slots()

        for node, slot in zip(nodes, slots):
            if node.is_dragging:
                continue

            if node.is_expanded:
                tx, ty = cx, cy
                k = cfg.spring_constant * cfg.expanded_spring_multiplier
            else:
                tx, ty = slot.x, slot.y
                k = cfg.spring_constant

            dx = tx - node.x
            dy = ty - node.y
            if hypot(dx, dy) > cfg.snap_threshold:
                node.vx = (node.vx + dx * k * dt) * cfg.damping
                node.vy = (node.vy + dy * k * dt) * cfg.damping
                node.x += node.vx * dt
                node.y += node.vy * dt
            else:
                node.x, node.y = tx, ty
                node.vx *= cfg.snap_velocity_decay
                node.vy *= cfg.snap_velocity_decay

        if needs_collision_check(nodes, cfg.precheck_buffer):
            resolve_overlaps(nodes, cfg.collision_buffer, cfg.separation_strength)

        self._contain(nodes)

    def _contain(self, nodes: list[SimulationNode]) -> None:
        width, height = self.state.width, self.state.height
        bounce = self.config.boundary_bounce
        for node in nodes:
            if node.is_dragging:
                continue
            r = node.radius
            if node.x - r < 0:
                node.x = r
                node.vx *= bounce
            if node.x + r > width:
                node.x = width - r
                node.vx *= bounce
            if node.y - r < 0:
                node.y = r
                node.vy *= bounce
            if node.y + r > height:
                node.y = height - r
                node.vy *= bounce

    def render(self) -> None:
        for node in self.state.nodes:
            self.renderer.apply_transform(node)
