from PyQt5.QtCore import QObject, pyqtSignal as Signal

class SelectionBus(QObject):
    """Broadcasts the selected cards and the active topic across views."""

    cardsChanged = Signal(list)   # selected node ids
    topicChanged = Signal(str)    # topic whose cards are on the canvas

    def set_cards(self, ids: list[int]):
        self.cardsChanged.emit(ids)

    def set_topic(self, topic: str):
        self.topicChanged.emit(topic)
