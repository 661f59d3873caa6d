from __future__ import annotations

import os
os.environ["PYQTGRAPH_QT_LIB"] = "PyQt5"   # force pyqtgraph to PyQt5

import html
import logging
from typing import Callable, Optional

import pyqtgraph as pg
from PyQt5.QtCore import Qt, QTimer, QElapsedTimer, pyqtSignal as Signal
from PyQt5.QtGui import QPainter
from PyQt5.QtWidgets import (
    QGraphicsView, QGraphicsScene, QGraphicsEllipseItem, QGraphicsTextItem
)

from .card_model import FlashcardRecord, SimulationNode, format_card_term
from .render import node_transform, stacking_order
from .selection import CardSelection, SelectionFull
from .selection_bus import SelectionBus
from .sim_engine import SimulationEngine

FRAME_INTERVAL_MS = 16
EXPANDED_SCALE = 1.6
IMPORTANCE_HUES = 10
SELECTED_PEN_WIDTH = 4
LABEL_WIDTH_RATIO = 1.5   # label width in radii


class QTimerTicker:
    """Render loop on a ``QTimer``; hands the callback a millisecond clock."""

    def __init__(self, parent=None, interval_ms: int = FRAME_INTERVAL_MS):
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)
        self._clock = QElapsedTimer()
        self._clock.start()
        self._callback: Optional[Callable[[float], None]] = None

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self, callback: Callable[[float], None]) -> None:
        self._callback = callback
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    def _on_timeout(self):
        if self._callback is not None:
            self._callback(float(self._clock.elapsed()))


class CardItem(QGraphicsEllipseItem):
    """Circle for one card. Pointer events go to the engine's drag controller."""

    def __init__(self, node: SimulationNode, canvas: "FlashcardCanvas"):
        d = 2 * node.radius
        super().__init__(0, 0, d, d)
        self.node = node
        self.canvas = canvas
        self._expanded = False
        self._selected = False

        self.setTransformOriginPoint(node.radius, node.radius)
        self.setAcceptedMouseButtons(Qt.LeftButton)
        self.setCursor(Qt.OpenHandCursor)

        color = pg.intColor(int(round(node.importance)) - 1, hues=IMPORTANCE_HUES, alpha=220)
        self.setBrush(pg.mkBrush(color))
        self._base_pen = pg.mkPen(color.darker(150), width=1.5)
        self.setPen(self._base_pen)

        self._label = QGraphicsTextItem(self)
        self._label.setAcceptedMouseButtons(Qt.NoButton)
        self._label.setDefaultTextColor(pg.mkColor("w"))
        self._label.setTextWidth(node.radius * LABEL_WIDTH_RATIO)
        self._refresh_label()

    def _refresh_label(self):
        term, translation = format_card_term(self.node.term)
        parts = [f"<b>{html.escape(term)}</b>"]
        if translation:
            parts.append(f"<br><i>({html.escape(translation)})</i>")
        if self._expanded:
            parts.append(f"<br><small>{html.escape(self.node.definition)}</small>")
        self._label.setHtml(f"<div align='center'>{''.join(parts)}</div>")
        rect = self._label.boundingRect()
        r = self.node.radius
        self._label.setPos(r - rect.width() / 2, r - rect.height() / 2)

    def set_expanded_look(self, expanded: bool):
        if expanded == self._expanded:
            return
        self._expanded = expanded
        self.setScale(EXPANDED_SCALE if expanded else 1.0)
        self._refresh_label()

    def set_selected_look(self, selected: bool):
        if selected == self._selected:
            return
        self._selected = selected
        self.setPen(pg.mkPen("y", width=SELECTED_PEN_WIDTH) if selected else self._base_pen)

    # pointer hooks ----------------------------------------------------------
    def mousePressEvent(self, ev):
        if ev.button() != Qt.LeftButton:
            super().mousePressEvent(ev)
            return
        if ev.modifiers() & Qt.ControlModifier:
            self.canvas.toggle_selection(self.node)
            ev.accept()
            return
        p = ev.scenePos()
        self.canvas.engine.drag.pointer_down(self.node, p.x(), p.y())
        self.setCursor(Qt.ClosedHandCursor)
        ev.accept()

    def mouseMoveEvent(self, ev):
        p = ev.scenePos()
        self.canvas.engine.drag.pointer_move(p.x(), p.y())
        ev.accept()

    def mouseReleaseEvent(self, ev):
        drag = self.canvas.engine.drag
        if drag.node is not self.node:
            super().mouseReleaseEvent(ev)
            return
        moved = drag.pointer_up()
        self.setCursor(Qt.OpenHandCursor)
        if not moved:
            self.canvas.toggle_expansion(self.node)
        ev.accept()


class QtCardRenderer:
    """Renderer writing node state onto ``CardItem``s in a scene."""

    def __init__(self, canvas: "FlashcardCanvas"):
        self.canvas = canvas

    def attach(self, node: SimulationNode) -> None:
        item = CardItem(node, self.canvas)
        self.canvas.scene().addItem(item)
        node.handle = item

    def apply_transform(self, node: SimulationNode) -> None:
        item: CardItem = node.handle
        if item is None:
            return
        item.setPos(*node_transform(node))
        item.setZValue(stacking_order(node))
        item.set_expanded_look(node.is_expanded)

    def clear(self) -> None:
        self.canvas.scene().clear()


class FlashcardCanvas(QGraphicsView):
    """Graphics view hosting the card simulation."""

    selectionRefused = Signal()

    def __init__(self, bus: SelectionBus, selection: CardSelection, parent=None):
        super().__init__(parent)
        self.bus = bus
        self.selection = selection
        self.setScene(QGraphicsScene(self))
        self.setRenderHint(QPainter.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setBackgroundBrush(pg.mkBrush("#202124"))

        size = self.viewport().size()
        self.engine = SimulationEngine(
            size.width(), size.height(),
            renderer=QtCardRenderer(self),
            ticker=QTimerTicker(self),
        )
        self.bus.cardsChanged.connect(self._on_cards_changed)

    # ------------------------------------------------------------------
    def show_cards(self, records: list[FlashcardRecord]):
        self.selection.clear()
        self.bus.set_cards([])
        self.engine.create_nodes(records)
        logging.info(f"Showing {len(records)} cards")

    def clear(self):
        self.selection.clear()
        self.bus.set_cards([])
        self.engine.clear()

    def toggle_expansion(self, node: SimulationNode):
        self.engine.toggle_expansion(node)

    def toggle_selection(self, node: SimulationNode):
        try:
            self.selection.toggle(node)
        except SelectionFull:
            self.selectionRefused.emit()
            return
        self.bus.set_cards([n.id for n in self.selection.nodes])

    def _on_cards_changed(self, ids: list[int]):
        chosen = set(ids)
        for node in self.engine.nodes:
            if node.handle is not None:
                node.handle.set_selected_look(node.id in chosen)

    # Qt events ----------------------------------------------------------
    def resizeEvent(self, ev):
        super().resizeEvent(ev)
        size = self.viewport().size()
        self.scene().setSceneRect(0, 0, size.width(), size.height())
        self.engine.set_viewport(size.width(), size.height())

    def mousePressEvent(self, ev):
        if self.itemAt(ev.pos()) is None:
            self.engine.collapse_all()
        super().mousePressEvent(ev)

    def closeEvent(self, ev):
        self.engine.stop_simulation()
        super().closeEvent(ev)
