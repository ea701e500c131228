import math

import pytest

from fctcast.config import ChainConstants
from fctcast.engine.projector import clamp_rate, project_forecast, project_issuance, rate_bounds
from fctcast.errors import InvalidStateError

PERIOD = 10_000


def test_over_target_halves_rate(constants: ChainConstants) -> None:
    projection = project_forecast(PERIOD, 400_000, 800_000, 1_000_000, constants)
    assert projection.projected_issuance == 800_000
    assert projection.ideal_rate == 500_000
    assert projection.lower_bound == 500_000
    assert projection.forecasted_rate == 500_000
    assert projection.percent_change == pytest.approx(-50.0)
    assert projection.target_completion_percent == pytest.approx(200.0)


def test_under_target_capped_at_double(constants: ChainConstants) -> None:
    projection = project_forecast(PERIOD, 400_000, 100_000, 1_000_000, constants)
    assert projection.ideal_rate == 4_000_000
    assert projection.upper_bound == 2_000_000
    assert projection.forecasted_rate == 2_000_000
    assert projection.percent_change == pytest.approx(100.0)


def test_linear_extrapolation_mid_period(constants: ChainConstants) -> None:
    projection = project_forecast(2_500, 400_000, 100_000, 1_000_000, constants)
    assert projection.projected_issuance == 400_000
    assert projection.forecasted_rate == 1_000_000
    assert projection.percent_change == 0.0
    assert projection.target_completion_percent == pytest.approx(100.0)


def test_projection_rounds_to_nearest() -> None:
    # 1 FCT over 3 blocks -> 3,333.33 FCT per period
    assert project_issuance(3, 1, PERIOD) == 3_333
    assert project_issuance(3, 2, PERIOD) == 6_667


def test_protocol_ceiling_applies(constants: ChainConstants) -> None:
    projection = project_forecast(PERIOD, 400_000, 100_000, 8_000_000, constants)
    assert projection.upper_bound == constants.max_mint_rate
    assert projection.forecasted_rate == 10_000_000


def test_ceiling_wins_over_lower_bound(constants: ChainConstants) -> None:
    projection = project_forecast(PERIOD, 400_000, 800_000, 30_000_000, constants)
    assert projection.lower_bound == 15_000_000
    assert projection.upper_bound == 10_000_000
    assert projection.forecasted_rate == 10_000_000


def test_clamp_returns_ceiling_when_bounds_cross() -> None:
    assert clamp_rate(12, 15, 10) == 10
    assert clamp_rate(20, 15, 10) == 10
    assert clamp_rate(5, 2, 10) == 5


def test_nothing_minted_keeps_rate(constants: ChainConstants) -> None:
    projection = project_forecast(1, 400_000, 0, 1_000_000, constants)
    assert projection.projected_issuance == 0
    assert projection.ideal_rate == 1_000_000
    assert projection.forecasted_rate == 1_000_000
    assert projection.percent_change == 0.0
    assert projection.target_completion_percent == 0.0


def test_zero_target_after_final_halving(constants: ChainConstants) -> None:
    projection = project_forecast(PERIOD, 0, 5, 1_000, constants)
    assert projection.ideal_rate == 0
    assert projection.forecasted_rate == 500
    assert math.isinf(projection.target_completion_percent)


def test_lower_bound_rounds_half_up(constants: ChainConstants) -> None:
    assert rate_bounds(3, constants) == (2, 6)
    assert rate_bounds(1, constants) == (1, 2)


@pytest.mark.parametrize("elapsed", [0, -1])
def test_non_positive_elapsed_rejected(constants: ChainConstants, elapsed: int) -> None:
    with pytest.raises(InvalidStateError):
        project_forecast(elapsed, 400_000, 1_000, 1_000_000, constants)


@pytest.mark.parametrize("rate", [0, -10])
def test_non_positive_rate_rejected(constants: ChainConstants, rate: int) -> None:
    with pytest.raises(InvalidStateError):
        project_forecast(PERIOD, 400_000, 1_000, rate, constants)


def test_forecast_stays_within_bounds(constants: ChainConstants) -> None:
    rates = [1, 2, 3, 17, 999, 123_457, 1_000_000, 4_999_999, 5_000_000, 10_000_000]
    minted = [1, 7, 1_000, 99_999, 400_000, 2_500_000, 10**9]
    targets = [1, 1_562, 50_000, 400_000]
    for rate in rates:
        lower = math.floor(rate * 0.5 + 0.5)
        upper = min(constants.max_mint_rate, rate * 2)
        for issued in minted:
            for target in targets:
                for elapsed in (1, 4_321, PERIOD):
                    projection = project_forecast(elapsed, target, issued, rate, constants)
                    assert projection.projected_issuance > 0
                    assert lower <= projection.forecasted_rate <= upper
                    assert projection.lower_bound == lower
                    assert projection.upper_bound == upper
