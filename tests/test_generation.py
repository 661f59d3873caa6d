import asyncio
import json
import random
from types import SimpleNamespace

import pytest

from hexflash.card_model import FlashcardRecord
from hexflash.config import AppConfig
from hexflash.generation import (
    CHAT_FALLBACK, FlashcardGenerator, GenerationError, build_chat_prompt,
    build_flashcard_prompt, parse_flashcards, pick_card_count
)

CARDS = [
    {"term": "Chlorophyll", "definition": "Green pigment", "importance": 9},
    {"term": "Stomata", "definition": "Leaf pores", "importance": 4},
]


class FakeModels:
    def __init__(self, text=None, exc=None):
        self.text = text
        self.exc = exc
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return SimpleNamespace(text=self.text)


def fake_client(**kw):
    models = FakeModels(**kw)
    return SimpleNamespace(aio=SimpleNamespace(models=models)), models


# ---------------------------------------------------------------- parsing

def test_parse_plain_json():
    records = parse_flashcards(json.dumps(CARDS))
    assert records == [FlashcardRecord("Chlorophyll", "Green pigment", 9.0),
                       FlashcardRecord("Stomata", "Leaf pores", 4.0)]


def test_parse_json_inside_chatter():
    text = "Here you go:\n```json\n" + json.dumps(CARDS) + "\n```"
    assert len(parse_flashcards(text)) == 2


def test_parse_wrapped_list():
    assert len(parse_flashcards(json.dumps({"flashcards": CARDS}))) == 2


def test_broken_items_are_skipped():
    items = CARDS + [{"term": "x"}, "oops", {"term": "y", "definition": "z", "importance": "n/a"}]
    assert [r.term for r in parse_flashcards(json.dumps(items))] == ["Chlorophyll", "Stomata"]


def test_importance_too_large_for_float_is_skipped():
    huge = '{"term": "a", "definition": "b", "importance": 1' + "0" * 400 + "}"
    text = "[" + huge + ", " + json.dumps(CARDS[0]) + "]"
    assert [r.term for r in parse_flashcards(text)] == ["Chlorophyll"]
    assert parse_flashcards("[" + huge + "]") == []


def test_empty_reply_gives_no_cards():
    assert parse_flashcards("") == []
    assert parse_flashcards("   ") == []


@pytest.mark.parametrize("text", ["no json here", "[{broken", '"just a string"'])
def test_malformed_reply_raises(text):
    with pytest.raises(GenerationError):
        parse_flashcards(text)


# ---------------------------------------------------------------- prompts

def test_pick_card_count():
    rng = random.Random(1)
    assert all(5 <= pick_card_count("auto", rng=rng) <= 12 for _ in range(50))
    assert pick_card_count("custom", 30) == 25
    assert pick_card_count("custom", 1) == 3
    assert pick_card_count("custom", 9) == 9


def test_flashcard_prompt():
    prompt = build_flashcard_prompt("Photosynthesis", "de", "detailed", 7)
    assert 'Generate 7 flashcards about "Photosynthesis"' in prompt
    assert "German" in prompt
    assert "detailed and comprehensive" in prompt
    assert "concise" in build_flashcard_prompt("x", "en", "basic", 5)


def test_chat_prompt():
    prompt = build_chat_prompt(["Mitosis", "Meiosis"], "How do they differ?", "ja")
    assert "Mitosis, Meiosis" in prompt
    assert "How do they differ?" in prompt
    assert "Japanese" in prompt


# ---------------------------------------------------------------- generator

def test_generate_flashcards_with_client():
    client, models = fake_client(text=json.dumps(CARDS))
    gen = FlashcardGenerator(AppConfig(api_key="k", model="m"), client=client)
    gen.count_mode = "custom"
    gen.custom_count = 6
    records = asyncio.run(gen.generate_flashcards("Photosynthesis"))
    assert len(records) == 2
    (call,) = models.calls
    assert call["model"] == "m"
    assert "Generate 6 flashcards" in call["contents"]
    assert call["config"].response_mime_type == "application/json"


def test_missing_api_key():
    gen = FlashcardGenerator(AppConfig(api_key=None))
    with pytest.raises(GenerationError):
        asyncio.run(gen.generate_flashcards("anything"))


def test_client_failure_becomes_generation_error():
    client, _ = fake_client(exc=RuntimeError("quota exceeded"))
    gen = FlashcardGenerator(AppConfig(api_key="k"), client=client)
    with pytest.raises(GenerationError, match="quota exceeded"):
        asyncio.run(gen.generate_flashcards("anything"))


def test_chat_response():
    client, models = fake_client(text="  Both are cell divisions.  ")
    gen = FlashcardGenerator(AppConfig(api_key="k"), client=client)
    answer = asyncio.run(gen.generate_chat_response(["Mitosis"], "What is it?"))
    assert answer == "Both are cell divisions."
    assert "Mitosis" in models.calls[0]["contents"]


def test_empty_chat_response_uses_fallback():
    client, _ = fake_client(text=None)
    gen = FlashcardGenerator(AppConfig(api_key="k"), client=client)
    assert asyncio.run(gen.generate_chat_response(["a"], "q")) == CHAT_FALLBACK
