######## form_state.py
########
#
# Page state for the single decision form, plus a pure reducer.
#
#   Idle --Submit--> Submitting --AnalysisSucceeded--> Displaying
#                         |  \--AnalysisErrored----> Failed
#   Displaying/Failed --Submit--> Submitting
#   any (except Submitting) --NewDecision--> Idle (dilemma cleared)
#
# SelectMode / EditDilemma never trigger a request.

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from tiebreaker_web.domain.models import AnalysisMode, AnalysisRequest, AnalysisResult

GENERIC_ERROR_MESSAGE = "Failed to generate analysis. Please try again."


class Phase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    DISPLAYING = "displaying"
    FAILED = "failed"


@dataclass(frozen=True)
class FormState:
    dilemma: str = ""
    mode: AnalysisMode = AnalysisMode.PROS_CONS
    phase: Phase = Phase.IDLE
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.SUBMITTING

    @property
    def can_submit(self) -> bool:
        return not self.is_loading and bool(self.dilemma.strip())

    def to_request(self) -> AnalysisRequest:
        return AnalysisRequest(dilemma=self.dilemma.strip(), mode=self.mode)

    @property
    def visible_result(self) -> Optional[AnalysisResult]:
        # result and error may both be set from different cycles; only the latest outcome shows
        return self.result if self.phase is Phase.DISPLAYING else None

    @property
    def visible_error(self) -> Optional[str]:
        return self.error if self.phase is Phase.FAILED else None


# -----------------------------
# Actions
# -----------------------------
@dataclass(frozen=True)
class EditDilemma:
    text: str


@dataclass(frozen=True)
class SelectMode:
    mode: AnalysisMode


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class AnalysisSucceeded:
    result: AnalysisResult


@dataclass(frozen=True)
class AnalysisErrored:
    message: str = GENERIC_ERROR_MESSAGE


@dataclass(frozen=True)
class NewDecision:
    pass


Action = Union[EditDilemma, SelectMode, Submit, AnalysisSucceeded, AnalysisErrored, NewDecision]


def reduce(state: FormState, action: Action) -> FormState:
    if isinstance(action, EditDilemma):
        return replace(state, dilemma=action.text or "")

    if isinstance(action, SelectMode):
        return replace(state, mode=action.mode)

    if isinstance(action, Submit):
        if not state.can_submit:
            return state
        return replace(state, phase=Phase.SUBMITTING, error=None)

    if isinstance(action, AnalysisSucceeded):
        if state.phase is not Phase.SUBMITTING:
            return state
        return replace(state, phase=Phase.DISPLAYING, result=action.result, error=None)

    if isinstance(action, AnalysisErrored):
        if state.phase is not Phase.SUBMITTING:
            return state
        return replace(state, phase=Phase.FAILED, error=action.message)

    if isinstance(action, NewDecision):
        if state.is_loading:
            return state
        return replace(state, dilemma="", phase=Phase.IDLE, result=None, error=None)

    raise TypeError(f"Unsupported action: {action!r}")
