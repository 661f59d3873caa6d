from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

from PyQt5.QtCore import QObject, pyqtSignal as Signal

from .generation import FlashcardGenerator, GenerationError


class GenerationWorker(QObject):
    """Runs the async generator off the GUI thread and reports via signals."""

    cardsReady = Signal(str, list, bool)   # topic, records, drill-down
    answerReady = Signal(str)
    error = Signal(str)

    def __init__(self, generator: FlashcardGenerator, parent=None):
        super().__init__(parent)
        self.generator = generator
        self._executor = ThreadPoolExecutor(max_workers=1)

    def request_cards(self, topic: str, drill_down: bool = False):
        self._executor.submit(self._run_cards, topic, drill_down)

    def request_answer(self, terms: list[str], question: str):
        self._executor.submit(self._run_answer, list(terms), question)

    def _run_cards(self, topic: str, drill_down: bool):
        try:
            records = asyncio.run(self.generator.generate_flashcards(topic))
        except GenerationError as e:
            logging.error(f"Flashcard generation failed for {topic!r}: {e}")
            self.error.emit(str(e))
            return
        except Exception as e:
            logging.exception(f"Unexpected error while generating cards for {topic!r}")
            self.error.emit(repr(e))
            return
        self.cardsReady.emit(topic, records, drill_down)

    def _run_answer(self, terms: list[str], question: str):
        try:
            answer = asyncio.run(self.generator.generate_chat_response(terms, question))
        except GenerationError as e:
            logging.error(f"Chat response failed: {e}")
            self.error.emit(str(e))
            return
        except Exception as e:
            logging.exception("Unexpected error while answering")
            self.error.emit(repr(e))
            return
        self.answerReady.emit(answer)

    def shutdown(self):
        self._executor.shutdown(wait=False)
