######## models.py
########

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class AnalysisMode(str, Enum):
    PROS_CONS = "PROS_CONS"
    COMPARISON = "COMPARISON"
    SWOT = "SWOT"

    @classmethod
    def parse(cls, raw: str | None) -> "AnalysisMode":
        key = (raw or "").strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown analysis mode: {raw!r}") from None


@dataclass(frozen=True)
class AnalysisRequest:
    dilemma: str
    mode: AnalysisMode


# -----------------------------
# Result variants (one flat record per mode, tagged by `mode`)
# -----------------------------
class ProsConsResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Literal[AnalysisMode.PROS_CONS] = AnalysisMode.PROS_CONS
    pros: List[str]
    cons: List[str]
    verdict: str


class ComparisonEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    option: str
    criterion: str
    value: str


class ComparisonResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Literal[AnalysisMode.COMPARISON] = AnalysisMode.COMPARISON
    options: List[str]
    criteria: List[str]
    entries: List[ComparisonEntry]
    verdict: str

    def find_entry(self, option: str, criterion: str) -> Optional[ComparisonEntry]:
        """Case-insensitive match on both labels. Missing pairs are normal."""
        opt = (option or "").casefold()
        crit = (criterion or "").casefold()
        for e in self.entries:
            if e.option.casefold() == opt and e.criterion.casefold() == crit:
                return e
        return None

    def cell(self, option: str, criterion: str, placeholder: str = "—") -> str:
        entry = self.find_entry(option, criterion)
        if entry is None or not entry.value:
            return placeholder
        return entry.value


class SwotResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Literal[AnalysisMode.SWOT] = AnalysisMode.SWOT
    strengths: List[str]
    weaknesses: List[str]
    opportunities: List[str]
    threats: List[str]
    verdict: str


AnalysisResult = Union[ProsConsResult, ComparisonResult, SwotResult]

RESULT_TYPES: Dict[AnalysisMode, type] = {
    AnalysisMode.PROS_CONS: ProsConsResult,
    AnalysisMode.COMPARISON: ComparisonResult,
    AnalysisMode.SWOT: SwotResult,
}


def parse_result(mode: AnalysisMode, payload: Any) -> AnalysisResult:
    """
    Validate a decoded JSON payload against the variant for `mode`.
    Raises ValueError (pydantic.ValidationError included) on a shape mismatch.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")

    # the tag comes from the request, never from the collaborator
    fields = {k: v for k, v in payload.items() if k != "mode"}
    return RESULT_TYPES[mode].model_validate(fields)
