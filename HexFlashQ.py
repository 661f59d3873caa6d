# HexFlashQ.py --------------------------------------------------------------
import os
os.environ["PYQTGRAPH_QT_LIB"] = "PyQt5"   # force pyqtgraph to PyQt5
os.environ.pop("QT_API", None)             # avoid other libs nudging Qt differently

import sys
import html
import logging
from functools import partial

from PyQt5.QtWidgets import (
    QApplication,
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QComboBox,
    QSpinBox,
    QProgressBar,
)
from PyQt5.QtGui import QPalette, QColor
from PyQt5.QtCore import Qt, QTimer

from hexflash.config import AppConfig
from hexflash.card_view import FlashcardCanvas
from hexflash.chat_dock import ChatDock
from hexflash.generation import FlashcardGenerator, CUSTOM_CARD_RANGE
from hexflash.history import ExplorationHistory
from hexflash.i18n import (
    LANGUAGES, PLACEHOLDER_INTERVAL_MS, language_name, placeholder_examples, translate
)
from hexflash.selection import CardSelection
from hexflash.selection_bus import SelectionBus
from hexflash.workers import GenerationWorker

try:
    import darkdetect
    SYSTEM_DARK_MODE = darkdetect.isDark()
except Exception:
    SYSTEM_DARK_MODE = False

ERROR_CLEAR_MS = 3000
DEFAULT_CUSTOM_COUNT = 8


def crumb_html(label: str) -> str:
    """Bold label for the current breadcrumb; topics are user text."""
    return f"<b>{html.escape(label)}</b>"


def apply_dark_palette(app: QApplication) -> None:
    """Apply a dark color palette to the given QApplication."""
    app.setStyle("Fusion")
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor(53, 53, 53))
    palette.setColor(QPalette.WindowText, Qt.white)
    palette.setColor(QPalette.Base, QColor(35, 35, 35))
    palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    palette.setColor(QPalette.Text, Qt.white)
    palette.setColor(QPalette.Button, QColor(53, 53, 53))
    palette.setColor(QPalette.ButtonText, Qt.white)
    palette.setColor(QPalette.Link, QColor(42, 130, 218))
    palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    palette.setColor(QPalette.HighlightedText, Qt.black)
    app.setPalette(palette)


class MainWin(QMainWindow):
    def __init__(self, config: AppConfig):
        super().__init__()
        self.setWindowTitle("HexFlash")
        self.resize(1200, 800)

        self.config = config
        self.language = config.language
        self.history = ExplorationHistory()
        self.selection = CardSelection()
        self.bus = SelectionBus()
        self.bus.cardsChanged.connect(self._on_cards_changed)

        self.generator = FlashcardGenerator(config)
        self.worker = GenerationWorker(self.generator, self)
        self.worker.cardsReady.connect(self._on_cards_ready)
        self.worker.answerReady.connect(self._on_answer)
        self.worker.error.connect(self._on_generation_error)
        self._pending_question: tuple[list[str], str] | None = None
        self._placeholder_index = 0

        # ----------------- WIDGETS ------------------------------------------
        self.canvas = FlashcardCanvas(self.bus, self.selection)
        self.canvas.selectionRefused.connect(
            lambda: self._show_error(translate(self.language, "maxCardsSelected"), ERROR_CLEAR_MS)
        )

        self.btn_home = QPushButton("HexFlash")
        self.btn_home.setFlat(True)
        self.btn_home.clicked.connect(self.reset_app)

        self.topic_input = QLineEdit()
        self.topic_input.returnPressed.connect(self._on_generate_clicked)
        self.btn_generate = QPushButton()
        self.btn_generate.clicked.connect(self._on_generate_clicked)

        self.detail_combo = QComboBox()
        self.detail_combo.currentIndexChanged.connect(self._on_options_changed)

        self.count_label = QLabel()
        self.count_combo = QComboBox()
        self.count_combo.currentIndexChanged.connect(self._on_options_changed)
        self.count_spin = QSpinBox()
        self.count_spin.setRange(*CUSTOM_CARD_RANGE)
        self.count_spin.setValue(DEFAULT_CUSTOM_COUNT)
        self.count_spin.valueChanged.connect(self._on_options_changed)

        self.lang_combo = QComboBox()
        for code in LANGUAGES:
            self.lang_combo.addItem(language_name(code), code)
        self.lang_combo.setCurrentIndex(max(self.lang_combo.findData(self.language), 0))
        self.lang_combo.currentIndexChanged.connect(
            lambda i: self.set_language(self.lang_combo.itemData(i))
        )

        self.breadcrumb_bar = QWidget()
        self.breadcrumb_layout = QHBoxLayout(self.breadcrumb_bar)
        self.breadcrumb_layout.setContentsMargins(0, 0, 0, 0)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("color: #e06c75;")
        self._error_timer = QTimer(self)
        self._error_timer.setSingleShot(True)
        self._error_timer.timeout.connect(self.error_label.clear)

        self.progress = QProgressBar()
        self.progress.setRange(0, 0)
        self.progress.hide()

        controls = QHBoxLayout()
        controls.addWidget(self.btn_home)
        controls.addWidget(self.topic_input, 1)
        controls.addWidget(self.btn_generate)
        controls.addWidget(self.detail_combo)
        controls.addWidget(self.count_label)
        controls.addWidget(self.count_combo)
        controls.addWidget(self.count_spin)
        controls.addWidget(self.lang_combo)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addLayout(controls)
        layout.addWidget(self.breadcrumb_bar)
        layout.addWidget(self.error_label)
        layout.addWidget(self.progress)
        layout.addWidget(self.canvas, 1)
        self.setCentralWidget(central)

        self.chat_dock = ChatDock(self.bus, self.selection, self)
        self.chat_dock.askRequested.connect(self._on_ask)
        self.chat_dock.drillDownRequested.connect(self._on_drill_down)
        self.chat_dock.backRequested.connect(self._leave_chat_mode)
        self.chat_dock.removeRequested.connect(self._on_remove_card)
        self.addDockWidget(Qt.RightDockWidgetArea, self.chat_dock)
        self.chat_dock.hide()

        self._placeholder_timer = QTimer(self)
        self._placeholder_timer.setInterval(PLACEHOLDER_INTERVAL_MS)
        self._placeholder_timer.timeout.connect(self._rotate_placeholder)

        self.set_language(self.language)

    # ----------------- LANGUAGE -----------------------------------------------
    def set_language(self, lang: str):
        self.language = lang
        self.generator.language = lang
        t = partial(translate, lang)
        self.btn_generate.setText(t("generateButton"))
        self.count_label.setText(t("cardsLabel"))

        with_blocked = [self.detail_combo, self.count_combo]
        for combo in with_blocked:
            combo.blockSignals(True)
        detail_idx = max(self.detail_combo.currentIndex(), 0)
        count_idx = max(self.count_combo.currentIndex(), 0)
        self.detail_combo.clear()
        self.detail_combo.addItem(t("detailBasic"), "basic")
        self.detail_combo.addItem(t("detailDetailed"), "detailed")
        self.count_combo.clear()
        self.count_combo.addItem(t("countAuto"), "auto")
        self.count_combo.addItem(t("countCustom"), "custom")
        self.detail_combo.setCurrentIndex(detail_idx)
        self.count_combo.setCurrentIndex(count_idx)
        for combo in with_blocked:
            combo.blockSignals(False)
        self._on_options_changed()

        self.chat_dock.retranslate(lang)
        self.reset_app()

    def _on_options_changed(self, *_):
        self.generator.detail = self.detail_combo.currentData() or "basic"
        self.generator.count_mode = self.count_combo.currentData() or "auto"
        self.generator.custom_count = self.count_spin.value()
        self.count_spin.setEnabled(self.generator.count_mode == "custom")

    # ----------------- GENERATION ---------------------------------------------
    def _on_generate_clicked(self):
        self._generate(self.topic_input.text().strip(), drill_down=False)

    def _generate(self, topic: str, drill_down: bool):
        if not topic:
            self._show_error(translate(self.language, "errorTopic"))
            return
        self._set_busy(True)
        self.error_label.clear()
        self.worker.request_cards(topic, drill_down)

    def _on_cards_ready(self, topic: str, records: list, drill_down: bool):
        self._set_busy(False)
        if not records:
            self._show_error(translate(self.language, "errorNoCards"))
            return
        if not drill_down:
            self.history.reset()
        self.history.push(topic, records)
        self._render_breadcrumbs()
        self.canvas.show_cards(records)
        self.bus.set_topic(topic)
        self.topic_input.clear()

    def _on_generation_error(self, message: str):
        self._set_busy(False)
        self.chat_dock.set_busy(False)
        self._show_error(translate(self.language, "errorUnknown") + message)

    def _set_busy(self, busy: bool):
        self.progress.setVisible(busy)
        self.progress.setFormat(translate(self.language, "generating"))
        self.btn_generate.setEnabled(not busy)

    # ----------------- HISTORY ------------------------------------------------
    def _render_breadcrumbs(self):
        while self.breadcrumb_layout.count():
            item = self.breadcrumb_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        if not len(self.history):
            self.breadcrumb_bar.hide()
            return

        crumbs = self.history.breadcrumbs(translate(self.language, "home"))
        last = len(crumbs) - 1
        for pos, (label, index) in enumerate(crumbs):
            if pos:
                self.breadcrumb_layout.addWidget(QLabel(">"))
            if pos == last:
                self.breadcrumb_layout.addWidget(QLabel(crumb_html(label)))
                continue
            link = QPushButton(label)
            link.setFlat(True)
            if index is None:
                link.clicked.connect(self.reset_app)
            else:
                link.clicked.connect(partial(self._navigate_back, index))
            self.breadcrumb_layout.addWidget(link)
        self.breadcrumb_layout.addStretch(1)
        self.breadcrumb_bar.show()

    def _navigate_back(self, index: int):
        entry = self.history.navigate_back(index)
        self.canvas.show_cards(entry.records)
        self.bus.set_topic(entry.topic)
        self._render_breadcrumbs()

    def reset_app(self):
        self.canvas.clear()
        self.bus.set_topic("")
        self.history.reset()
        self._render_breadcrumbs()
        self.topic_input.clear()
        self.error_label.clear()
        self._placeholder_index = 0
        self._rotate_placeholder()
        self._placeholder_timer.start()
        self.topic_input.setFocus()

    def _rotate_placeholder(self):
        if self.topic_input.hasFocus() or self.topic_input.text():
            self.topic_input.setPlaceholderText(translate(self.language, "placeholder"))
            return
        examples = placeholder_examples(self.language)
        self.topic_input.setPlaceholderText(examples[self._placeholder_index % len(examples)])
        self._placeholder_index += 1

    # ----------------- SELECTION / CHAT ---------------------------------------
    def _on_cards_changed(self, ids: list):
        # chat mode lasts while anything is selected
        self.chat_dock.setVisible(bool(ids))

    def _leave_chat_mode(self):
        self.selection.clear()
        self.bus.set_cards([])

    def _on_remove_card(self, node_id: int):
        self.selection.remove(node_id)
        self.bus.set_cards([n.id for n in self.selection.nodes])

    def _on_ask(self, question: str):
        if not question:
            self._show_error(translate(self.language, "errorQuestion"))
            return
        if not len(self.selection):
            self._show_error(translate(self.language, "errorNoCardsSelected"))
            return
        self.error_label.clear()
        terms = self.selection.terms
        self._pending_question = (terms, question)
        self.chat_dock.set_busy(True)
        self.worker.request_answer(terms, question)

    def _on_answer(self, answer: str):
        self.chat_dock.set_busy(False)
        if self._pending_question is None:
            return
        terms, question = self._pending_question
        self._pending_question = None
        self.chat_dock.show_answer(terms, question, answer)

    def _on_drill_down(self):
        if not len(self.selection):
            self._show_error(translate(self.language, "errorNoCardsSelected"))
            return
        topic = self.selection.combined_topic
        self._leave_chat_mode()
        self._generate(topic, drill_down=True)

    # ----------------- MISC ---------------------------------------------------
    def _show_error(self, message: str, timeout_ms: int | None = None):
        self.error_label.setText(message)
        if timeout_ms:
            self._error_timer.start(timeout_ms)

    def closeEvent(self, e):
        self._placeholder_timer.stop()
        self.canvas.engine.stop_simulation()
        self.worker.shutdown()
        super().closeEvent(e)


# ---------- main -----------------------------------------------------------
def main():
    config = AppConfig.from_env()
    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(levelname)s %(message)s")
    if not config.has_api_key:
        logging.error("Gemini API key not configured. Set GEMINI_API_KEY in .env")

    app = QApplication(sys.argv)
    if SYSTEM_DARK_MODE:
        apply_dark_palette(app)
    win = MainWin(config)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
