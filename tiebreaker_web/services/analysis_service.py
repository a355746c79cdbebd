from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from tiebreaker_web.domain.errors import AnalysisFailed
from tiebreaker_web.domain.models import AnalysisMode, AnalysisResult, parse_result
from tiebreaker_web.ports.llm import LlmClient
from tiebreaker_web.services.prompt_builder import build_prompt, response_schema_for

logger = logging.getLogger(__name__)


@dataclass
class AnalysisService:
    """
    Service layer: prompt/schema selection + one collaborator call + parsing.
    Keeps controllers/routes thin.
    """
    llm: LlmClient

    def generate_analysis(self, dilemma: str, mode: AnalysisMode) -> AnalysisResult:
        if not isinstance(mode, AnalysisMode):
            raise ValueError(f"Unsupported analysis mode: {mode!r}")

        prompt = build_prompt(dilemma, mode)
        schema = response_schema_for(mode)

        logger.debug("Requesting %s analysis (dilemma length=%d)", mode.value, len(dilemma))

        try:
            raw = self.llm.generate_json(prompt, schema)
        except Exception as e:
            raise AnalysisFailed(f"Collaborator call failed: {e}") from e

        try:
            payload = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as e:
            raise AnalysisFailed(f"Response is not valid JSON: {e}") from e

        try:
            return parse_result(mode, payload)
        except ValueError as e:
            raise AnalysisFailed(f"Response does not match the {mode.value} schema: {e}") from e
