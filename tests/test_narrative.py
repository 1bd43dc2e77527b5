import json
import logging
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from analysis.metrics import compute_derived_metrics
from analysis.narrative import (
    FALLBACK_NARRATIVE,
    Narrative,
    NarrativeRequest,
    analyze_simulation,
    build_prompt,
)
from core.config import NarrativeConfig, SimulationParameters
from engine.projection import project


class _FakeResponses:
    def __init__(self, output_text=None, error=None):
        self.output_text = output_text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output_text=self.output_text)


class _FakeClient:
    def __init__(self, **kwargs):
        self.responses = _FakeResponses(**kwargs)


@pytest.fixture
def request_a():
    params = SimulationParameters(
        starting_customers=1,
        monthly_new_customers=2,
        price_per_customer=20,
        churn_rate_percent=3,
        months=1,
        one_time_sale_price=150,
    )
    return NarrativeRequest.from_results(params, compute_derived_metrics(project(params), params))


@pytest.fixture
def config():
    return NarrativeConfig(model="test-model", max_insights=3)


GOOD = {
    "headline": "Small numbers, real momentum",
    "insights": ["Churn is low.", "Every month stacks.", "Price is modest."],
    "verdict": "Keep going.",
}


def test_request_carries_parameters_and_final_numbers(request_a):
    assert request_a.starting_customers == 1
    assert request_a.monthly_new_customers == 2
    assert request_a.price_per_customer == 20
    assert request_a.churn_rate_percent == 3
    assert request_a.months == 1
    assert request_a.final_mrr == 59
    assert request_a.total_revenue == 79


def test_prompt_embeds_the_numbers(request_a):
    prompt = build_prompt(request_a)
    assert "Starting Customers: 1" in prompt
    assert "Monthly Price: $20" in prompt
    assert "Churn Rate: 3%" in prompt
    assert "Duration: 1 months" in prompt
    assert "(MRR): $59" in prompt
    assert "Total Cumulative Revenue: $79" in prompt


def test_prompt_formats_thousands():
    request = NarrativeRequest(50, 15, 99, 5, 24, 12345, 1234567)
    prompt = build_prompt(request)
    assert "$12,345" in prompt
    assert "$1,234,567" in prompt


def test_parses_structured_answer(request_a, config):
    client = _FakeClient(output_text=json.dumps(GOOD))
    narrative = analyze_simulation(request_a, client=client, config=config)

    assert narrative == Narrative(**GOOD)
    (call,) = client.responses.calls
    assert call["model"] == "test-model"
    assert call["text"]["format"]["type"] == "json_schema"
    assert "(MRR): $59" in call["input"][1]["content"]


def test_extra_insights_are_trimmed(request_a, config):
    answer = dict(GOOD, insights=[f"insight {i}" for i in range(6)])
    narrative = analyze_simulation(request_a, client=_FakeClient(output_text=json.dumps(answer)), config=config)
    assert narrative.insights == ["insight 0", "insight 1", "insight 2"]


def test_client_error_returns_fallback(request_a, config, caplog):
    client = _FakeClient(error=ConnectionError("network down"))
    with caplog.at_level(logging.WARNING, logger="analysis.narrative"):
        narrative = analyze_simulation(request_a, client=client, config=config)

    assert narrative is FALLBACK_NARRATIVE
    assert narrative.headline == "The Power of Compound Growth"
    assert len(narrative.insights) == 3
    assert narrative.verdict == "A subscription model transforms a treadmill business into an escalator."
    assert "network down" in caplog.text


@pytest.mark.parametrize(
    "output_text",
    [
        None,
        "",
        "not json at all",
        json.dumps({"headline": "x", "insights": ["a"]}),
        json.dumps({"headline": "x", "insights": [], "verdict": "y"}),
        json.dumps({"headline": "x", "insights": "a", "verdict": "y"}),
    ],
)
def test_malformed_answers_return_fallback(request_a, config, output_text):
    narrative = analyze_simulation(request_a, client=_FakeClient(output_text=output_text), config=config)
    assert narrative == FALLBACK_NARRATIVE


def test_missing_api_key_returns_fallback(request_a, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert analyze_simulation(request_a, config=NarrativeConfig()) is FALLBACK_NARRATIVE


def test_fallback_is_immutable():
    with pytest.raises(ValidationError):
        FALLBACK_NARRATIVE.headline = "changed"


def test_unparseable_timeout_setting_still_returns_a_narrative(request_a, monkeypatch):
    monkeypatch.setenv("SAAS_STACK_NARRATIVE_TIMEOUT", "thirty")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert analyze_simulation(request_a) is FALLBACK_NARRATIVE


def test_unparseable_timeout_setting_keeps_default_timeout_for_the_client(request_a, monkeypatch):
    monkeypatch.setenv("SAAS_STACK_NARRATIVE_TIMEOUT", "thirty")
    client = _FakeClient(output_text=json.dumps(GOOD))
    assert analyze_simulation(request_a, client=client) == Narrative(**GOOD)
