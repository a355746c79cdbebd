from __future__ import annotations

import json
import re

import pytest

from tiebreaker_web.app_factory import create_app
from tiebreaker_web.config.ini_config import AppSettings
from tiebreaker_web.domain.errors import AnalysisFailed
from tiebreaker_web.domain.form_state import GENERIC_ERROR_MESSAGE
from tiebreaker_web.domain.models import AnalysisMode
from tiebreaker_web.services.analysis_service import AnalysisService


# -----------------------------
# Test doubles
# -----------------------------
class ScriptedLlmClient:
    """Returns queued responses in order; an Exception in the queue is raised."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.prompts = []

    def generate_json(self, prompt, response_schema):
        self.prompts.append(prompt)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def make_settings(**overrides) -> AppSettings:
    values = dict(
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        gemini_temperature=None,
        gemini_timeout_seconds=None,
        default_mode=AnalysisMode.PROS_CONS,
        missing_cell_placeholder="—",
        log_level="WARNING",
        flask_host="127.0.0.1",
        flask_port=5000,
        flask_debug=False,
    )
    values.update(overrides)
    return AppSettings(**values)


def make_client(*responses, **setting_overrides):
    llm = ScriptedLlmClient(*responses)
    app = create_app(settings=make_settings(**setting_overrides), analysis_service=AnalysisService(llm=llm))
    app.config["TESTING"] = True
    return app.test_client(), llm


def _list_items(html: str, section_id: str) -> list[str]:
    block = re.search(rf'<div id="{section_id}">(.*?)</div>', html, flags=re.S).group(1)
    return re.findall(r"<li>(.*?)</li>", block, flags=re.S)


def _cells(html: str) -> list[str]:
    body = re.search(r"<tbody>(.*?)</tbody>", html, flags=re.S).group(1)
    return re.findall(r"<td>(.*?)</td>", body, flags=re.S)


DOG = {"pros": ["Companionship"], "cons": ["Responsibility"], "verdict": "Adopt if you have time."}


def test_index_renders_idle_form():
    client, _ = make_client()

    resp = client.get("/")
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert 'id="dilemma"' in html
    assert 'value="PROS_CONS" checked' in html
    assert 'id="results"' not in html
    assert 'id="error-banner"' not in html


def test_index_preselects_mode_from_query():
    client, _ = make_client()
    html = client.get("/?mode=swot").get_data(as_text=True)
    assert 'value="SWOT" checked' in html


def test_pros_cons_scenario_renders_exact_fields():
    client, llm = make_client(json.dumps(DOG))

    resp = client.post("/analyze", data={"dilemma": "Should I adopt a dog?", "mode": "PROS_CONS"})
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert _list_items(html, "pros") == ["Companionship"]
    assert _list_items(html, "cons") == ["Responsibility"]
    assert '<h3 id="verdict-text">Adopt if you have time.</h3>' in html
    assert 'id="error-banner"' not in html
    assert len(llm.prompts) == 1
    assert llm.prompts[0].endswith('"Should I adopt a dog?"')


def test_swot_layout_renders_four_quadrants():
    payload = {
        "strengths": ["Savings"],
        "weaknesses": ["No network", "No visa"],
        "opportunities": ["New market"],
        "threats": [],
        "verdict": "Go, cautiously.",
    }
    client, _ = make_client(json.dumps(payload))

    html = client.post("/analyze", data={"dilemma": "Move abroad?", "mode": "SWOT"}).get_data(as_text=True)

    assert 'data-mode="SWOT"' in html
    assert _list_items(html, "strengths") == ["Savings"]
    assert _list_items(html, "weaknesses") == ["No network", "No visa"]
    assert _list_items(html, "opportunities") == ["New market"]
    assert _list_items(html, "threats") == []
    assert "Go, cautiously." in html


def test_comparison_matrix_uses_case_insensitive_lookup_and_dash():
    payload = {
        "options": ["stay", "Move"],
        "criteria": ["COST", "Career"],
        "entries": [
            {"option": "Stay", "criterion": "Cost", "value": "Low"},
            {"option": "move", "criterion": "career", "value": "Big upside"},
        ],
        "verdict": "Move if the offer is firm.",
    }
    client, _ = make_client(json.dumps(payload))

    html = client.post("/analyze", data={"dilemma": "Stay or move?", "mode": "COMPARISON"}).get_data(as_text=True)

    # rows are criteria, columns are options
    assert _cells(html) == ["COST", "Low", "—", "Career", "—", "Big upside"]


def test_comparison_placeholder_is_configurable():
    payload = {"options": ["A"], "criteria": ["C"], "entries": [], "verdict": "v"}
    client, _ = make_client(json.dumps(payload), missing_cell_placeholder="n/a")

    html = client.post("/analyze", data={"dilemma": "A?", "mode": "COMPARISON"}).get_data(as_text=True)

    assert _cells(html) == ["C", "n/a"]


@pytest.mark.parametrize("dilemma", ["", "   ", "\n"])
def test_blank_dilemma_does_not_call_collaborator(dilemma):
    client, llm = make_client()

    resp = client.post("/analyze", data={"dilemma": dilemma, "mode": "SWOT"})
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert llm.prompts == []
    assert 'id="results"' not in html
    assert 'id="error-banner"' not in html


@pytest.mark.parametrize(
    "failure",
    [
        ConnectionError("socket exploded at 10.0.0.1"),
        "this is {not json",
        json.dumps({"pros": ["Companionship"], "verdict": "missing cons"}),
    ],
)
def test_failures_show_only_generic_message(failure):
    client, _ = make_client(failure)

    resp = client.post("/analyze", data={"dilemma": "Should I adopt a dog?", "mode": "PROS_CONS"})
    html = resp.get_data(as_text=True)

    assert resp.status_code == 500
    assert GENERIC_ERROR_MESSAGE in html
    assert "socket exploded" not in html
    assert "missing cons" not in html
    assert 'id="results"' not in html
    # form stays editable with the user's text
    assert "Should I adopt a dog?" in html


def test_error_after_success_suppresses_stale_result():
    client, _ = make_client(json.dumps(DOG), AnalysisFailed("boom"))

    first = client.post("/analyze", data={"dilemma": "Dog?", "mode": "PROS_CONS"}).get_data(as_text=True)
    second = client.post("/analyze", data={"dilemma": "Dog?", "mode": "PROS_CONS"}).get_data(as_text=True)

    assert "Companionship" in first
    assert GENERIC_ERROR_MESSAGE in second
    assert "Companionship" not in second


def test_unknown_mode_is_rejected():
    client, llm = make_client()

    resp = client.post("/analyze", data={"dilemma": "Dog?", "mode": "RANKING"})

    assert resp.status_code == 400
    assert llm.prompts == []


def test_new_decision_returns_to_idle_with_cleared_text():
    client, _ = make_client()

    resp = client.post("/reset", data={"mode": "COMPARISON"})
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert 'value="COMPARISON" checked' in html
    assert re.search(r'<textarea id="dilemma"[^>]*>\s*</textarea>', html)
    assert 'id="results"' not in html


def test_result_page_offers_export_and_new_decision():
    client, _ = make_client(json.dumps(DOG))
    html = client.post("/analyze", data={"dilemma": "Dog?", "mode": "PROS_CONS"}).get_data(as_text=True)

    assert 'onclick="window.print()"' in html
    assert 'action="/reset"' in html


def test_create_app_wires_gemini_adapter_from_settings():
    app = create_app(settings=make_settings(flask_port=8123))

    assert "web" in app.blueprints
    assert app.config["PORT"] == 8123


def test_create_app_without_api_key_fails_at_startup():
    with pytest.raises(RuntimeError):
        create_app(settings=make_settings(gemini_api_key=""))


def test_deeply_nested_reply_shows_generic_message():
    client, _ = make_client("[" * 100000 + "]" * 100000)

    resp = client.post("/analyze", data={"dilemma": "Should I adopt a dog?", "mode": "PROS_CONS"})
    html = resp.get_data(as_text=True)

    assert resp.status_code == 500
    assert GENERIC_ERROR_MESSAGE in html
    assert "recursion" not in html.lower()
    assert 'id="results"' not in html


def test_new_decision_page_shows_no_stale_panels():
    client, _ = make_client()

    html = client.post("/reset", data={"mode": "SWOT"}).get_data(as_text=True)

    assert 'value="SWOT" checked' in html
    assert 'id="error-banner"' not in html
    assert 'id="results"' not in html
    assert re.search(r'<button id="submit" type="submit"\s+disabled', html)
