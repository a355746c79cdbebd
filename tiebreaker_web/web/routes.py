## routes.py
from __future__ import annotations

from flask import Blueprint, abort, current_app, render_template, request

from tiebreaker_web.config import AppSettings
from tiebreaker_web.domain.errors import AnalysisFailed
from tiebreaker_web.domain.form_state import (
    GENERIC_ERROR_MESSAGE,
    AnalysisErrored,
    AnalysisSucceeded,
    EditDilemma,
    FormState,
    NewDecision,
    Phase,
    SelectMode,
    Submit,
    reduce,
)
from tiebreaker_web.domain.models import AnalysisMode

MODE_CHOICES = [
    (AnalysisMode.PROS_CONS, "Pros & Cons", "Simple list of advantages and drawbacks"),
    (AnalysisMode.COMPARISON, "Comparison", "Side-by-side table of options"),
    (AnalysisMode.SWOT, "SWOT Analysis", "Strategic strengths and weaknesses"),
]


def _mode_or_400(raw: str | None, default: AnalysisMode) -> AnalysisMode:
    if not (raw or "").strip():
        return default
    try:
        return AnalysisMode.parse(raw)
    except ValueError:
        abort(400, description=f"Unknown analysis mode: {raw}")


def create_blueprint(analysis_service, settings: AppSettings) -> Blueprint:
    bp = Blueprint("web", __name__)

    def render_page(state: FormState, code: int = 200):
        return render_template(
            "index.html",
            state=state,
            modes=MODE_CHOICES,
            placeholder=settings.missing_cell_placeholder,
        ), code

    @bp.get("/")
    def index():
        mode = _mode_or_400(request.args.get("mode"), settings.default_mode)
        return render_page(FormState(mode=mode))

    @bp.post("/analyze")
    def run_analysis():
        state = FormState(mode=settings.default_mode)
        state = reduce(state, EditDilemma(request.form.get("dilemma") or ""))
        state = reduce(state, SelectMode(_mode_or_400(request.form.get("mode"), settings.default_mode)))

        state = reduce(state, Submit())
        if state.phase is not Phase.SUBMITTING:
            # blank dilemma: nothing is sent to the collaborator
            return render_page(state)

        analysis_request = state.to_request()
        try:
            result = analysis_service.generate_analysis(analysis_request.dilemma, analysis_request.mode)
        except AnalysisFailed:
            current_app.logger.exception("Analysis failed (mode=%s)", state.mode.value)
            return render_page(reduce(state, AnalysisErrored(GENERIC_ERROR_MESSAGE)), 500)

        current_app.logger.info("Analysis ok (mode=%s)", state.mode.value)
        return render_page(reduce(state, AnalysisSucceeded(result)))

    @bp.post("/reset")
    def new_decision():
        mode = _mode_or_400(request.form.get("mode"), settings.default_mode)
        state = reduce(FormState(mode=mode), NewDecision())
        return render_page(state)

    return bp
