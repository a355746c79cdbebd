from .analysis_service import AnalysisService
from .prompt_builder import build_prompt, response_schema_for

__all__ = [
    "AnalysisService",
    "build_prompt",
    "response_schema_for",
]
