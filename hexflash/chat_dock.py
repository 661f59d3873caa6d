from __future__ import annotations

import html

from PyQt5.QtCore import Qt, pyqtSignal as Signal
from PyQt5.QtWidgets import (
    QDockWidget, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QListWidget,
    QListWidgetItem, QLineEdit, QPushButton
)

from .i18n import translate
from .selection import CardSelection
from .selection_bus import SelectionBus


def chat_title(lang: str, topic: str = "") -> str:
    title = translate(lang, "chatTitle")
    return f"{title}: {topic}" if topic else title


def format_answer(terms: list[str], question: str, answer: str) -> str:
    """Rich text for the answer label; model and user text are escaped."""
    about = html.escape(", ".join(terms))
    return (f"<b>About:</b> {about}<br>{html.escape(answer)}"
            f"<br><b>Q:</b> {html.escape(question)}")


class ChatDock(QDockWidget):
    """Selected cards, a question box and the model's answer."""

    askRequested = Signal(str)
    drillDownRequested = Signal()
    backRequested = Signal()
    removeRequested = Signal(int)   # node id

    def __init__(self, bus: SelectionBus, selection: CardSelection, parent=None):
        super().__init__(parent)
        self.bus = bus
        self.selection = selection
        self.language = "en"
        self.topic = ""

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(10, 10, 10, 10)

        self.selected_label = QLabel()
        self.card_list = QListWidget()
        self.card_list.itemDoubleClicked.connect(self._on_item_double_clicked)

        self.question = QLineEdit()
        self.question.returnPressed.connect(self._emit_question)
        self.btn_ask = QPushButton()
        self.btn_ask.clicked.connect(self._emit_question)

        self.answer = QLabel()
        self.answer.setWordWrap(True)
        self.answer.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.answer.hide()

        self.btn_drill = QPushButton()
        self.btn_drill.clicked.connect(self.drillDownRequested)
        self.btn_back = QPushButton()
        self.btn_back.clicked.connect(self.backRequested)

        row = QHBoxLayout()
        row.addWidget(self.question)
        row.addWidget(self.btn_ask)

        layout.addWidget(self.selected_label)
        layout.addWidget(self.card_list)
        layout.addLayout(row)
        layout.addWidget(self.answer)
        layout.addWidget(self.btn_drill)
        layout.addWidget(self.btn_back)
        layout.addStretch(1)
        self.setWidget(container)

        self.bus.cardsChanged.connect(self._refresh)
        self.bus.topicChanged.connect(self._on_topic_changed)
        self.retranslate(self.language)

    def retranslate(self, lang: str):
        self.language = lang
        self.setWindowTitle(chat_title(lang, self.topic))
        self.selected_label.setText(translate(lang, "selectedCards"))
        self.btn_ask.setText(translate(lang, "askButton"))
        self.btn_drill.setText(translate(lang, "generateFromSelection"))
        self.btn_back.setText(translate(lang, "backToGeneration"))

    def set_busy(self, busy: bool):
        self.btn_ask.setEnabled(not busy)
        self.btn_ask.setText(translate(self.language, "thinking" if busy else "askButton"))

    def show_answer(self, terms: list[str], question: str, answer: str):
        self.answer.setText(format_answer(terms, question, answer))
        self.answer.show()
        self.question.clear()

    def _on_topic_changed(self, topic: str):
        self.topic = topic
        self.setWindowTitle(chat_title(self.language, topic))

    def _refresh(self, ids: list[int]):
        self.card_list.clear()
        for node in self.selection.nodes:
            item = QListWidgetItem(node.term)
            item.setData(Qt.UserRole, node.id)
            self.card_list.addItem(item)
        terms = self.selection.terms
        if terms:
            self.question.setPlaceholderText(f"Ask something about: {', '.join(terms)}...")
        else:
            self.question.setPlaceholderText("Select some cards first with Ctrl+click...")
            self.answer.hide()

    def _on_item_double_clicked(self, item: QListWidgetItem):
        self.removeRequested.emit(int(item.data(Qt.UserRole)))

    def _emit_question(self):
        self.askRequested.emit(self.question.text().strip())
