from __future__ import annotations

from typing import Any, Dict


class LlmClient:
    """Strategy interface for the external generative-AI collaborator."""

    def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        """
        Send one instruction with a response-shape specification.
        Returns the raw response text, expected (not guaranteed) to be JSON.
        """
        raise NotImplementedError
