from __future__ import annotations

from typing import Any, Dict, Optional

import google.generativeai as genai

from tiebreaker_web.ports.llm import LlmClient


class GeminiClient(LlmClient):
    """
    Google Gemini adapter (google-generativeai SDK).
    One request per call: no retries, no streaming, no chat history.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str,
        *,
        temperature: Optional[float] = None,
        timeout_seconds: Optional[int] = None,
    ):
        if not (api_key or "").strip():
            raise RuntimeError("Gemini API key is not configured (set GEMINI_API_KEY or [gemini] api_key)")
        if not (model_name or "").strip():
            raise RuntimeError("Gemini model name is not configured ([gemini] model)")

        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model_name=model_name)
        self._model_name = model_name
        self._temperature = temperature
        self._timeout_seconds = timeout_seconds

    @property
    def model_name(self) -> str:
        return self._model_name

    def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        config_kwargs: Dict[str, Any] = {
            "response_mime_type": "application/json",
            "response_schema": response_schema,
        }
        if self._temperature is not None:
            config_kwargs["temperature"] = self._temperature

        request_options = {"timeout": self._timeout_seconds} if self._timeout_seconds else None

        response = self._model.generate_content(
            prompt,
            generation_config=genai.GenerationConfig(**config_kwargs),
            request_options=request_options,
        )

        try:
            text = response.text
        except ValueError as e:
            # .text raises when the candidate was blocked or has no parts
            if response.candidates:
                reason = response.candidates[0].finish_reason
                raise RuntimeError(f"Gemini returned no usable content. Finish reason: {reason}") from e
            raise RuntimeError("Gemini returned no candidates.") from e

        if not text:
            raise RuntimeError("Gemini returned an empty response")

        return text
