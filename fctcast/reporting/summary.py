"""Text and tabular rendering of a forecast."""

from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from fctcast.engine.state import ForecastResult, IssuanceSample


def _pct(value: float) -> str:
    return f"{value:.1f}%"


def format_forecast(result: ForecastResult) -> str:
    """Render the adjustment-period stats and prediction as plain text."""

    period = result.period
    lines: List[str] = [
        "Adjustment Period Stats:",
        f"- Current block height: {result.block_height:,}",
        f"- Halvings occurred: {result.halving.epoch}",
        f"- Current Target FCT: {result.target:,}",
        f"- Current mint rate: {result.current_rate:,} (gwei)",
        f"- Current adjustment period: {period.index}",
        f"- Period start block: {period.start:,}",
        f"- Period end block: {period.end:,}",
        f"- Blocks elapsed in period: {period.elapsed:,}",
        f"- Blocks remaining in period: {period.remaining:,}",
        f"- Percent complete: {_pct(period.percent_complete)}",
        f"- Total FCT mined: {result.issuance_so_far:,} ({_pct(result.minted_percent_of_target)} of Target)",
        "",
        "Prediction:",
        f"- Forecasted issuance: {result.projected_issuance:,} FCT"
        f" ({_pct(result.target_completion_percent)} of Target)",
    ]
    if result.target_deviation > 0:
        lines.append(f"- Over target by {result.target_deviation:,} FCT")
    else:
        lines.append(f"- Under target by {-result.target_deviation:,} FCT")
    lines.extend(
        [
            f"- Forecasted change in mint rate: {_pct(result.percent_change)}",
            f"- Forecasted new mint rate: {result.forecasted_rate:,} (gwei)",
        ]
    )
    if result.forecasted_rate != result.ideal_rate:
        lines.append(
            f"- Unbounded rate {result.ideal_rate:,} (gwei) clamped to "
            f"[{result.lower_bound:,}, {result.upper_bound:,}]"
        )
    return "\n".join(lines)


def summary_table(result: ForecastResult) -> pd.DataFrame:
    """Return headline numbers as a ``metric``/``value`` table."""

    rows = {
        "block_height": result.block_height,
        "halvings": result.halving.epoch,
        "target_fct": result.target,
        "period": result.period.index,
        "percent_complete": result.percent_complete,
        "blocks_remaining": result.blocks_remaining,
        "issuance_so_far": result.issuance_so_far,
        "projected_issuance": result.projected_issuance,
        "target_completion_percent": result.target_completion_percent,
        "current_rate_gwei": result.current_rate,
        "forecasted_rate_gwei": result.forecasted_rate,
        "percent_change": result.percent_change,
    }
    return pd.DataFrame({"metric": list(rows), "value": list(rows.values())})


def samples_frame(samples: Iterable[IssuanceSample]) -> pd.DataFrame:
    """Tabulate issuance samples ordered by height."""

    records = [
        {"height": sample.height, "minted": sample.minted, "timestamp": sample.timestamp}
        for sample in samples
    ]
    frame = pd.DataFrame(records, columns=["height", "minted", "timestamp"])
    return frame.sort_values("height", ignore_index=True)


__all__ = ["format_forecast", "summary_table", "samples_frame"]
