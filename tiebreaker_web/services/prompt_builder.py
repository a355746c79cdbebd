from __future__ import annotations

import copy
from typing import Any, Dict

from tiebreaker_web.domain.models import AnalysisMode

PROMPT_TEMPLATES: Dict[AnalysisMode, str] = {
    AnalysisMode.PROS_CONS: (
        "Analyze the following decision and provide a list of pros and cons, "
        'along with a final verdict: "{dilemma}"'
    ),
    AnalysisMode.COMPARISON: (
        "Analyze the following decision by comparing different options. "
        "Identify the options and criteria. "
        "Provide a list of comparison entries where each entry links an option and a criterion to a specific value. "
        'Also provide a final verdict: "{dilemma}"'
    ),
    AnalysisMode.SWOT: (
        "Perform a SWOT analysis (Strengths, Weaknesses, Opportunities, Threats) "
        'for the following decision, along with a final verdict: "{dilemma}"'
    ),
}

_TEXT = {"type": "STRING"}
_TEXT_LIST = {"type": "ARRAY", "items": _TEXT}

RESPONSE_SCHEMAS: Dict[AnalysisMode, Dict[str, Any]] = {
    AnalysisMode.PROS_CONS: {
        "type": "OBJECT",
        "properties": {
            "pros": _TEXT_LIST,
            "cons": _TEXT_LIST,
            "verdict": _TEXT,
        },
        "required": ["pros", "cons", "verdict"],
    },
    AnalysisMode.COMPARISON: {
        "type": "OBJECT",
        "properties": {
            "options": _TEXT_LIST,
            "criteria": _TEXT_LIST,
            "entries": {
                "type": "ARRAY",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "option": {"type": "STRING", "description": "The name of the option being compared"},
                        "criterion": {"type": "STRING", "description": "The specific criterion for comparison"},
                        "value": {"type": "STRING", "description": "The value or description for this option and criterion"},
                    },
                    "required": ["option", "criterion", "value"],
                },
            },
            "verdict": _TEXT,
        },
        "required": ["options", "criteria", "entries", "verdict"],
    },
    AnalysisMode.SWOT: {
        "type": "OBJECT",
        "properties": {
            "strengths": _TEXT_LIST,
            "weaknesses": _TEXT_LIST,
            "opportunities": _TEXT_LIST,
            "threats": _TEXT_LIST,
            "verdict": _TEXT,
        },
        "required": ["strengths", "weaknesses", "opportunities", "threats", "verdict"],
    },
}


def build_prompt(dilemma: str, mode: AnalysisMode) -> str:
    """Dilemma is embedded verbatim; callers trim/validate beforehand."""
    # str.replace, not .format: the dilemma may itself contain braces
    return PROMPT_TEMPLATES[mode].replace("{dilemma}", dilemma)


def response_schema_for(mode: AnalysisMode) -> Dict[str, Any]:
    # SDKs may mutate the schema they are handed
    return copy.deepcopy(RESPONSE_SCHEMAS[mode])
