import pytest

from core.config import SimulationParameters
from core.schema import SNAPSHOT_COLUMNS
from engine.runner import run_simulation
from inputs.presets import get_preset
from inputs.validators import ParameterValidationError


def test_run_simulation_bundles_snapshots_and_metrics():
    params = get_preset("Default")
    result = run_simulation(params)

    assert result.parameters is params
    assert len(result.snapshots) == params.months + 1
    assert result.metrics.next_month_revenue == result.snapshots[-1].monthly_recurring_revenue
    assert result.metrics.total_revenue_earned == result.snapshots[-1].cumulative_recurring_revenue


def test_to_dataframe_has_canonical_columns():
    result = run_simulation(
        SimulationParameters(
            starting_customers=1,
            monthly_new_customers=2,
            price_per_customer=20,
            churn_rate_percent=3,
            months=1,
            one_time_sale_price=150,
        )
    )
    df = result.to_dataframe()
    assert tuple(df.columns) == SNAPSHOT_COLUMNS
    assert len(df) == 2
    assert df["monthly_recurring_revenue"].tolist() == [20, 59]
    assert df["cumulative_recurring_revenue"].tolist() == [20, 79]
    assert df["cumulative_one_time_revenue"].tolist() == [150, 450]
    assert df["total_customers"].tolist() == [1.0, 3.0]


def test_subscription_overtakes_one_time_sales_for_growth_startup():
    df = run_simulation(get_preset("Growth Startup")).to_dataframe()
    last = df.iloc[-1]
    assert last["cumulative_recurring_revenue"] > last["cumulative_one_time_revenue"]
    assert df["cumulative_recurring_revenue"].is_monotonic_increasing


def test_invalid_parameters_raise():
    with pytest.raises(ParameterValidationError):
        run_simulation(SimulationParameters(price_per_customer=-5))
