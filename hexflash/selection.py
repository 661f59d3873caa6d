from __future__ import annotations

from .card_model import SimulationNode
from .config import MAX_SELECTED_CARDS


class SelectionFull(ValueError):
    """Raised when one card too many is selected."""


class CardSelection:
    """Cards picked for chatting or for spawning a combined topic."""

    def __init__(self, limit: int = MAX_SELECTED_CARDS):
        self.limit = limit
        self._nodes: list[SimulationNode] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: SimulationNode) -> bool:
        return any(n is node for n in self._nodes)

    @property
    def nodes(self) -> list[SimulationNode]:
        return list(self._nodes)

    @property
    def terms(self) -> list[str]:
        return [n.term for n in self._nodes]

    @property
    def combined_topic(self) -> str:
        return " + ".join(self.terms)

    def toggle(self, node: SimulationNode) -> bool:
        """Select or deselect ``node``. Returns True when now selected."""
        if node in self:
            self._nodes = [n for n in self._nodes if n is not node]
            return False
        if len(self._nodes) >= self.limit:
            raise SelectionFull(f"at most {self.limit} cards can be selected")
        self._nodes.append(node)
        return True

    def remove(self, node_id: int) -> None:
        self._nodes = [n for n in self._nodes if n.id != node_id]

    def clear(self) -> None:
        self._nodes.clear()
