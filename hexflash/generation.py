"""Flashcard and chat generation through the Gemini API."""

from __future__ import annotations

import json
import logging
import random
import re
from typing import Any

from google import genai
from google.genai import types

from .card_model import FlashcardRecord
from .config import AppConfig
from .i18n import language_name

AUTO_CARD_RANGE = (5, 12)
CUSTOM_CARD_RANGE = (3, 25)
CHAT_FALLBACK = "I couldn't generate a response. Please try again."

FLASHCARD_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "term": types.Schema(type=types.Type.STRING),
            "definition": types.Schema(type=types.Type.STRING),
            "importance": types.Schema(type=types.Type.NUMBER),
        },
        required=["term", "definition", "importance"],
    ),
)


class GenerationError(RuntimeError):
    """The model could not produce usable output."""


def pick_card_count(mode: str, custom: int | None = None,
                    rng: random.Random | None = None) -> int:
    if mode == "auto" or custom is None:
        return (rng or random).randint(*AUTO_CARD_RANGE)
    lo, hi = CUSTOM_CARD_RANGE
    return min(max(int(custom), lo), hi)


def build_flashcard_prompt(topic: str, language: str, detail: str, card_count: int) -> str:
    prompt = (f'Generate {card_count} flashcards about "{topic}". '
              f"The flashcards should be in {language_name(language)}.")
    if detail == "detailed":
        prompt += " The definition should be detailed and comprehensive."
    else:
        prompt += " The definition should be concise."
    prompt += (' Return a JSON array of objects. Each object must have three properties: '
               '"term", "definition", and "importance" (a number from 1 to 10, where 10 '
               'is the most central concept to the main topic).')
    return prompt


def build_chat_prompt(terms: list[str], question: str, language: str) -> str:
    return (
        f"You are a knowledgeable AI assistant. The user has selected these concepts: "
        f"{', '.join(terms)}. They are asking: \"{question}\". "
        f"Please provide a concise, logical, and fundamental answer in {language_name(language)}. "
        "Focus on the core relationships and principles. Limit to 2-3 sentences maximum."
    )


def parse_json_lenient(text: str) -> Any:
    """Decode ``text``, falling back to the largest bracketed block in it."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    arr_match = re.search(r"\[[\s\S]*\]", text)
    obj_match = re.search(r"\{[\s\S]*\}", text)
    candidates = [m.group(0) for m in (arr_match, obj_match) if m]
    if not candidates:
        raise GenerationError("model output is not JSON")
    candidate = max(candidates, key=len)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise GenerationError(f"malformed JSON in model output: {exc}") from exc


def parse_flashcards(text: str) -> list[FlashcardRecord]:
    """Turn the model's JSON reply into records, skipping broken items."""
    text = (text or "").strip()
    if not text:
        return []
    data = parse_json_lenient(text)
    if isinstance(data, dict):
        # some replies wrap the list, e.g. {"flashcards": [...]}
        data = next((v for v in data.values() if isinstance(v, list)), None)
    if not isinstance(data, list):
        raise GenerationError("model output is not a list of flashcards")

    records: list[FlashcardRecord] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            logging.warning(f"Skipping flashcard {i}: not an object")
            continue
        try:
            records.append(FlashcardRecord.from_mapping(item))
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            logging.warning(f"Skipping flashcard {i}: {e!r}")
    return records


class FlashcardGenerator:
    """Async access to the model for a topic or a chat question.

    The generation options mirror the controls of the main window and may
    be changed between calls.
    """

    def __init__(self, config: AppConfig, client: Any = None):
        self.config = config
        self.language = config.language
        self.detail = "basic"
        self.count_mode = "auto"
        self.custom_count = 8
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.config.has_api_key:
                raise GenerationError(
                    "API key not configured. Set GEMINI_API_KEY in the environment or .env file."
                )
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    async def generate_flashcards(self, topic: str) -> list[FlashcardRecord]:
        count = pick_card_count(self.count_mode, self.custom_count)
        prompt = build_flashcard_prompt(topic, self.language, self.detail, count)
        logging.info(f"Requesting {count} flashcards for {topic!r} ({self.config.model})")
        try:
            resp = await self.client.aio.models.generate_content(
                model=self.config.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=FLASHCARD_SCHEMA,
                ),
            )
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(str(exc)) from exc

        records = parse_flashcards(getattr(resp, "text", None) or "")
        logging.info(f"Received {len(records)} flashcards for {topic!r}")
        return records

    async def generate_chat_response(self, terms: list[str], question: str) -> str:
        prompt = build_chat_prompt(terms, question, self.language)
        try:
            resp = await self.client.aio.models.generate_content(
                model=self.config.model,
                contents=prompt,
            )
        except GenerationError:
            raise
        except Exception as exc:
            raise GenerationError(str(exc)) from exc
        return (getattr(resp, "text", None) or "").strip() or CHAT_FALLBACK
