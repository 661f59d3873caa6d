from __future__ import annotations

from dataclasses import dataclass

from .card_model import FlashcardRecord


@dataclass
class HistoryEntry:
    topic: str
    records: list[FlashcardRecord]


class ExplorationHistory:
    """Breadcrumb trail of explored topics, oldest first."""

    def __init__(self):
        self._entries: list[HistoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    @property
    def current(self) -> HistoryEntry | None:
        return self._entries[-1] if self._entries else None

    def push(self, topic: str, records: list[FlashcardRecord]) -> HistoryEntry:
        entry = HistoryEntry(topic, list(records))
        self._entries.append(entry)
        return entry

    def navigate_back(self, index: int) -> HistoryEntry:
        """Drop every entry after ``index`` and return the one at ``index``."""
        if not 0 <= index < len(self._entries):
            raise IndexError(f"no history entry {index} (have {len(self._entries)})")
        del self._entries[index + 1:]
        return self._entries[index]

    def reset(self) -> None:
        self._entries.clear()

    def breadcrumbs(self, home_label: str = "Home") -> list[tuple[str, int | None]]:
        """``(label, index)`` pairs; home has index ``None``.

        Every crumb but the last one is a link back to its entry.
        """
        crumbs: list[tuple[str, int | None]] = [(home_label, None)]
        crumbs.extend((entry.topic, i) for i, entry in enumerate(self._entries))
        return crumbs
