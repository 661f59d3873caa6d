import pytest

from hexflash.card_model import FlashcardRecord


class RecordingRenderer:
    """Renderer keeping every call so tests can assert on the render step."""

    def __init__(self):
        self.attached = []
        self.transforms = []
        self.clears = 0

    def attach(self, node):
        node.handle = f"card-{node.id}"
        self.attached.append(node)

    def apply_transform(self, node):
        self.transforms.append((node.id, node.x, node.y, node.is_expanded))

    def clear(self):
        self.clears += 1
        self.attached = []


def make_records(*importances):
    return [FlashcardRecord(f"term {i}", f"definition {i}", imp)
            for i, imp in enumerate(importances)]


@pytest.fixture
def renderer():
    return RecordingRenderer()
