from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

import google.generativeai as genai

from ..core.constants import DEFAULT_AI_FAST_MODEL, DEFAULT_AI_MODEL, DEFAULT_AI_PRO_MODEL
from ..core.exceptions import AIServiceError

logger = logging.getLogger(__name__)

PROVIDER_ERROR_MESSAGE = (
    "Could not generate content from the AI service. Please check your API key and network connection."
)


class AIClient:
    """Thin wrapper over the Gemini SDK.

    The client never raises at construction time: a missing key or a failed
    configure call leaves it uninitialized and every call raises AIServiceError
    carrying the initialization error.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        default_model: str = DEFAULT_AI_MODEL,
        fast_model: str = DEFAULT_AI_FAST_MODEL,
        pro_model: str = DEFAULT_AI_PRO_MODEL,
        model_factory: Callable[[str], Any] = genai.GenerativeModel,
        configure: Callable[..., None] = genai.configure,
    ):
        self.default_model = default_model
        self.fast_model = fast_model
        self.pro_model = pro_model
        self._model_factory = model_factory
        self._models: dict[str, Any] = {}
        self._initialized = False
        self.initialization_error: Optional[str] = None

        if not api_key:
            self.initialization_error = "GEMINI_API_KEY is not set. AI features are disabled."
            logger.warning(self.initialization_error)
            return

        try:
            configure(api_key=api_key)
        except Exception as e:
            self.initialization_error = f"Failed to initialize the AI client: {e}"
            logger.critical(self.initialization_error)
            return

        self._initialized = True
        logger.info("AI client ready (default model %s)", default_model)

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def status(self) -> dict:
        return {"isInitialized": self._initialized, "error": self.initialization_error}

    def _model(self, name: str):
        if name not in self._models:
            self._models[name] = self._model_factory(name)
        return self._models[name]

    def generate(self, contents: Any, *, model: Optional[str] = None, response_schema: Optional[dict] = None) -> str:
        if not self._initialized:
            raise AIServiceError(self.initialization_error or "AI client is not initialized.")

        model_name = model or self.default_model
        generation_config = None
        if response_schema is not None:
            generation_config = genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=response_schema,
            )

        try:
            response = self._model(model_name).generate_content(contents, generation_config=generation_config)
            return response.text
        except Exception as e:
            logger.error("Error calling AI model %s: %s", model_name, e)
            raise AIServiceError(PROVIDER_ERROR_MESSAGE) from e

    def generate_json(self, contents: Any, *, schema: dict, model: Optional[str] = None) -> Any:
        text = self.generate(contents, model=model, response_schema=schema)
        try:
            return json.loads(text)
        except (TypeError, ValueError) as e:
            logger.error("AI model returned malformed JSON: %.200s", text)
            raise AIServiceError("The AI service returned an unreadable response.") from e
