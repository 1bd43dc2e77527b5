"""
Plain-English breakdown of a simulation from an external text model.

The projection never depends on this: analyze_simulation() always returns a
Narrative, falling back to FALLBACK_NARRATIVE when the service is unavailable
or answers with something that does not match the schema.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from openai import OpenAI
from pydantic import BaseModel, ConfigDict, Field

from core.config import NarrativeConfig, SimulationParameters
from .metrics import DerivedMetrics

logger = logging.getLogger(__name__)


class Narrative(BaseModel):
    model_config = ConfigDict(frozen=True)

    headline: str
    insights: List[str] = Field(min_length=1)
    verdict: str


FALLBACK_NARRATIVE = Narrative(
    headline="The Power of Compound Growth",
    insights=[
        "Recurring revenue creates a stable baseline that builds month over month.",
        "Even small churn rates can significantly impact long-term scalability.",
        "New customer acquisition is the engine, but retention is the fuel tank.",
    ],
    verdict="A subscription model transforms a treadmill business into an escalator.",
)

SYSTEM = """You are a friendly startup finance teacher explaining subscription
businesses to beginners. Be concrete and refer to the numbers you are given.

Return JSON only, strictly matching the schema.
"""

JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "headline": {"type": "string"},
        "insights": {"type": "array", "items": {"type": "string"}},
        "verdict": {"type": "string"},
    },
    "required": ["headline", "insights", "verdict"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class NarrativeRequest:
    """The numbers sent to the text model."""
    starting_customers: float
    monthly_new_customers: float
    price_per_customer: float
    churn_rate_percent: float
    months: int
    final_mrr: int
    total_revenue: int

    @classmethod
    def from_results(cls, params: SimulationParameters, metrics: DerivedMetrics) -> "NarrativeRequest":
        return cls(
            starting_customers=params.starting_customers,
            monthly_new_customers=params.monthly_new_customers,
            price_per_customer=params.price_per_customer,
            churn_rate_percent=params.churn_rate_percent,
            months=params.months,
            final_mrr=metrics.next_month_revenue,
            total_revenue=metrics.total_revenue_earned,
        )


def build_prompt(request: NarrativeRequest) -> str:
    return f"""
Analyze this recurring revenue simulation:
- Starting Customers: {request.starting_customers:g}
- Monthly New Customers: {request.monthly_new_customers:g}
- Monthly Price: ${request.price_per_customer:g}
- Churn Rate: {request.churn_rate_percent:g}%
- Duration: {request.months} months
- Resulting Monthly Recurring Revenue (MRR): ${request.final_mrr:,}
- Total Cumulative Revenue: ${request.total_revenue:,}

Explain why these numbers matter. Compare the "stacking" effect of subscriptions vs one-time sales.
Provide actionable insights on how churn impacts the ceiling of the business.
"""


def _make_client(config: NarrativeConfig) -> Optional[OpenAI]:
    api_key = config.api_key
    if not api_key:
        return None
    return OpenAI(api_key=api_key, timeout=config.timeout_seconds)


def request_narrative(request: NarrativeRequest, *, client: Any, config: NarrativeConfig) -> Narrative:
    """
    Call the text model and parse its answer. Raises on any failure;
    use analyze_simulation() for the fallback-absorbing version.
    """
    r = client.responses.create(
        model=config.model,
        input=[
            {"role": "system", "content": SYSTEM},
            {"role": "user", "content": build_prompt(request)},
        ],
        text={
            "format": {
                "type": "json_schema",
                "name": "simulation_analysis",
                "schema": JSON_SCHEMA,
                "strict": True,
            }
        },
    )

    raw = r.output_text or ""
    narrative = Narrative.model_validate_json(raw)
    if len(narrative.insights) > config.max_insights:
        narrative = narrative.model_copy(update={"insights": narrative.insights[: config.max_insights]})
    return narrative


def analyze_simulation(
    request: NarrativeRequest,
    *,
    client: Any = None,
    config: Optional[NarrativeConfig] = None,
) -> Narrative:
    """
    Fetch a narrative for one simulation, never raising.

    Parameters
    ----------
    request : NarrativeRequest
        Parameters plus final MRR and total revenue.
    client : optional
        An OpenAI-compatible client. Built from the environment if omitted.
    config : NarrativeConfig, optional
        Model/timeout settings. Read from the environment if omitted.
    """
    cfg = config or NarrativeConfig()
    try:
        if config is None:
            cfg = NarrativeConfig.from_env()
        if client is None:
            client = _make_client(cfg)
        if client is None:
            logger.warning("%s is not set; using fallback narrative.", cfg.api_key_env)
            return FALLBACK_NARRATIVE
        return request_narrative(request, client=client, config=cfg)
    except Exception as exc:
        logger.warning("AI analysis failed, using fallback narrative: %s", exc, exc_info=True)
        return FALLBACK_NARRATIVE
