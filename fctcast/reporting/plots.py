"""Plotting utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt

from fctcast.engine.state import IssuanceSample


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def plot_issuance(
    samples: Sequence[IssuanceSample],
    path: Path,
    target: Optional[int] = None,
    title: str = "FCT issuance this adjustment period",
) -> Path:
    """Line chart of minted FCT by block height; format follows the file suffix (png, svg)."""

    if not samples:
        raise ValueError("no issuance samples to plot")
    path = _ensure_parent(Path(path))
    ordered = sorted(samples, key=lambda sample: sample.height)
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(
        [sample.height for sample in ordered],
        [sample.minted for sample in ordered],
        marker="o",
        markersize=3,
        label="FCT minted",
        color="#3F19D9",
    )
    if target is not None:
        ax.axhline(target, linestyle="--", color="#9C9EA4", label="Period target")
    ax.set_title(title)
    ax.set_xlabel("Block height")
    ax.set_ylabel("FCT minted")
    ax.ticklabel_format(style="plain", useOffset=False)
    ax.legend()
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


__all__ = ["plot_issuance"]
