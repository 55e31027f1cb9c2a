from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from . import prompts
from .client import AIClient
from .media import InlineMedia, media_from_payload

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_PROMPT = "Describe this image."


class CogniCraftService:
    """Teaching-assistant tools built on the AI client.

    Text tools return a string; structured tools (presentation, quiz,
    lesson plan) return the parsed JSON object.
    """

    def __init__(self, client: AIClient):
        self._client = client
        self._tools: dict[str, Callable[[Mapping[str, Any]], Any]] = {
            "summarize_notes": lambda p: self.summarize_notes(p.get("text")),
            "generate_questions": lambda p: self.generate_questions(p.get("text")),
            "create_story": lambda p: self.create_story(p.get("text")),
            "create_mind_map": lambda p: self.create_mind_map(p.get("text")),
            "explain_concept": lambda p: self.explain_concept(p.get("text")),
            "quick_answer": lambda p: self.quick_answer(p.get("text")),
            "complex_query": lambda p: self.complex_query(p.get("text")),
            "generate_ppt": lambda p: self.generate_ppt(p.get("text")),
            "generate_quiz": lambda p: self.generate_quiz(p.get("text")),
            "generate_lesson_plan": lambda p: self.generate_lesson_plan(p.get("text")),
            "analyze_image": lambda p: self.analyze_image(p.get("text"), media_from_payload(p.get("media") or {})),
            "transcribe_audio": lambda p: self.transcribe_audio(media_from_payload(p.get("media") or {})),
        }

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._tools)

    def status(self) -> dict:
        return self._client.status()

    def run_tool(self, tool: str, payload: Mapping[str, Any]) -> Any:
        handler = self._tools.get(tool)
        if handler is None:
            raise NotFoundError(f"Unknown AI tool: {tool}")
        logger.info("Running AI tool %s", tool)
        return handler(payload)

    # ---- text tools --------------------------------------------------
    def _text(self, template: str, text: Optional[str], *, model: Optional[str] = None) -> str:
        text = require_non_empty(text, "text")
        return self._client.generate(template.format(text=text), model=model)

    def summarize_notes(self, text: str) -> str:
        return self._text(prompts.SUMMARIZE_NOTES, text)

    def generate_questions(self, topic: str) -> str:
        return self._text(prompts.GENERATE_QUESTIONS, topic)

    def create_story(self, text: str) -> str:
        return self._text(prompts.CREATE_STORY, text)

    def create_mind_map(self, topic: str) -> str:
        return self._text(prompts.CREATE_MIND_MAP, topic)

    def explain_concept(self, concept: str) -> str:
        return self._text(prompts.EXPLAIN_CONCEPT, concept)

    def quick_answer(self, prompt: str) -> str:
        return self._text("{text}", prompt, model=self._client.fast_model)

    def complex_query(self, prompt: str) -> str:
        return self._text("{text}", prompt, model=self._client.pro_model)

    # ---- structured tools --------------------------------------------
    def generate_ppt(self, notes: str) -> dict:
        notes = require_non_empty(notes, "text")
        return self._client.generate_json(prompts.GENERATE_PPT.format(text=notes), schema=prompts.PPT_SCHEMA)

    def generate_quiz(self, topic: str) -> dict:
        topic = require_non_empty(topic, "text")
        return self._client.generate_json(prompts.GENERATE_QUIZ.format(text=topic), schema=prompts.QUIZ_SCHEMA)

    def generate_lesson_plan(self, topic: str) -> dict:
        topic = require_non_empty(topic, "text")
        return self._client.generate_json(
            prompts.GENERATE_LESSON_PLAN.format(text=topic),
            schema=prompts.LESSON_PLAN_SCHEMA,
        )

    # ---- media tools -------------------------------------------------
    def analyze_image(self, prompt: Optional[str], image: InlineMedia) -> str:
        return self._client.generate([image.as_part(), prompt or DEFAULT_IMAGE_PROMPT])

    def transcribe_audio(self, audio: InlineMedia) -> str:
        return self._client.generate([audio.as_part(), prompts.TRANSCRIBE_AUDIO])
