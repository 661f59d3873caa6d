from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from .config import MIN_NODE_RADIUS, MAX_NODE_RADIUS

MIN_IMPORTANCE = 1.0
MAX_IMPORTANCE = 10.0

_TERM_WITH_TRANSLATION = re.compile(r"^(.+?)\s*\((.+?)\)$")


@dataclass(frozen=True)
class FlashcardRecord:
    """One term/definition pair as returned by the generator."""

    term: str
    definition: str
    importance: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FlashcardRecord":
        """Build a record from a decoded JSON object.

        Raises ``KeyError`` for a missing field, ``ValueError`` when
        ``importance`` is not a number and ``OverflowError`` when it is an
        integer too large for a float. Importance is clamped to [1, 10].
        """
        importance = float(data["importance"])
        if importance != importance:  # NaN
            raise ValueError("importance is NaN")
        importance = min(max(importance, MIN_IMPORTANCE), MAX_IMPORTANCE)
        return cls(
            term=str(data["term"]).strip(),
            definition=str(data["definition"]).strip(),
            importance=importance,
        )


@dataclass(eq=False)
class SimulationNode:
    """Mutable simulation state of a single card.

    Nodes compare by identity; ``id`` is only unique inside one batch.
    """

    id: int
    term: str
    definition: str
    importance: float
    radius: float
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    is_expanded: bool = False
    is_dragging: bool = False
    handle: Any = None


def radius_for_importance(importance: float,
                          min_radius: float = MIN_NODE_RADIUS,
                          max_radius: float = MAX_NODE_RADIUS) -> float:
    """Linear map of importance 1..10 onto ``min_radius..max_radius``."""
    t = (importance - MIN_IMPORTANCE) / (MAX_IMPORTANCE - MIN_IMPORTANCE)
    return min_radius + (max_radius - min_radius) * t


def make_node(index: int, record: FlashcardRecord,
              min_radius: float = MIN_NODE_RADIUS,
              max_radius: float = MAX_NODE_RADIUS) -> SimulationNode:
    return SimulationNode(
        id=index,
        term=record.term,
        definition=record.definition,
        importance=record.importance,
        radius=radius_for_importance(record.importance, min_radius, max_radius),
    )


def format_card_term(term: str) -> tuple[str, str | None]:
    """Split ``"한국어 (Korean)"`` into ``("한국어", "Korean")``.

    Terms without a trailing parenthesised part come back unchanged with
    ``None`` as the translation.
    """
    match = _TERM_WITH_TRANSLATION.match(term)
    if match is None:
        return term, None
    return match.group(1).strip(), match.group(2).strip()
