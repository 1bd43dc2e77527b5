import math

import pytest

from core.config import SimulationParameters
from inputs.validators import (
    ParameterValidationError,
    ensure_valid,
    validate_parameters,
)


def test_default_parameters_pass_cleanly():
    result = validate_parameters(SimulationParameters())
    assert result.is_valid
    assert result.warnings == []
    assert result.summary() == "✓ All checks passed."


def test_collects_every_range_error():
    params = SimulationParameters(
        starting_customers=-1,
        monthly_new_customers=-2,
        price_per_customer=0,
        churn_rate_percent=120,
        months=-3,
        one_time_sale_price=0,
    )
    result = validate_parameters(params)
    assert not result.is_valid
    assert len(result.errors) == 6
    assert "ERRORS (6):" in result.summary()


@pytest.mark.parametrize("bad", [math.nan, math.inf, "10", None, True])
def test_non_numeric_values_are_errors(bad):
    result = validate_parameters(SimulationParameters(price_per_customer=bad))
    assert not result.is_valid
    assert "price_per_customer" in result.errors[0]


def test_fractional_months_rejected():
    result = validate_parameters(SimulationParameters(months=12.5))
    assert result.errors == ["months must be a whole number, got 12.5."]


def test_boundary_values_are_valid():
    for churn in (0, 100):
        params = SimulationParameters(starting_customers=0, monthly_new_customers=0, churn_rate_percent=churn, months=0)
        assert validate_parameters(params).is_valid


def test_high_churn_is_a_warning_not_an_error():
    result = validate_parameters(SimulationParameters(churn_rate_percent=40))
    assert result.is_valid
    assert len(result.warnings) == 1
    assert "WARNINGS (1):" in result.summary()


def test_subscription_pricier_than_one_time_sale_warns():
    result = validate_parameters(SimulationParameters(price_per_customer=200, one_time_sale_price=100))
    assert result.is_valid
    assert any("one_time_sale_price" in w for w in result.warnings)


def test_ensure_valid_raises_value_error_with_summary():
    with pytest.raises(ValueError) as excinfo:
        ensure_valid(SimulationParameters(churn_rate_percent=150))
    assert isinstance(excinfo.value, ParameterValidationError)
    assert "churn_rate_percent" in str(excinfo.value)
    assert not excinfo.value.result.is_valid
