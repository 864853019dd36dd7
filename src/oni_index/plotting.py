from __future__ import annotations

import calendar
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import xarray as xr


def plot_area_means(
    unweighted: xr.DataArray,
    weighted: xr.DataArray,
    *,
    output_path: str | Path | None = None,
    show: bool = False,
) -> Path | None:
    """Plot plain and cosine-weighted area means, with their difference underneath."""

    fig, (ax_top, ax_bottom) = plt.subplots(
        2, 1, figsize=(11, 6), sharex=True, gridspec_kw={"height_ratios": [3, 1]}
    )
    times = unweighted["time"].values
    ax_top.plot(times, unweighted.values, label="Unweighted", linewidth=1.5)
    ax_top.plot(times, weighted.values, label="Weighted (cos lat)", linewidth=1.5, linestyle="--")
    ax_top.set_ylabel(unweighted.attrs.get("units", "Value"))
    ax_top.set_title("Area-mean SST")
    ax_top.grid(True, alpha=0.4)
    ax_top.legend()

    difference = weighted - unweighted
    ax_bottom.plot(times, difference.values, color="k", linewidth=1)
    ax_bottom.axhline(0, color="grey", linewidth=0.8)
    ax_bottom.set_ylabel("Weighted - unweighted")
    ax_bottom.grid(True, alpha=0.4)

    return _save_or_show(fig, output_path, show)


def plot_climatology(
    climatology: xr.DataArray,
    *,
    output_path: str | Path | None = None,
    show: bool = False,
) -> Path | None:
    """Plot a 12-month climatology of an area-mean series."""

    if "month" not in climatology.dims:
        raise ValueError("Climatology must include a 'month' dimension.")

    months = climatology["month"].values
    fig, ax = plt.subplots(figsize=(8, 4.5))
    ax.plot(months, climatology.values, marker="o", linewidth=2)
    ax.set_xticks(months)
    ax.set_xticklabels([calendar.month_abbr[int(m)] for m in months])
    ax.set_ylabel(climatology.attrs.get("units", "Value"))
    ax.set_title("Monthly Climatology")
    ax.grid(True, alpha=0.4)

    return _save_or_show(fig, output_path, show)


def plot_oni(
    oni: xr.DataArray,
    *,
    threshold: float = 0.5,
    anomaly: Optional[xr.DataArray] = None,
    output_path: str | Path | None = None,
    show: bool = False,
) -> Path | None:
    """Plot the ONI, shading warm (red) and cold (blue) excursions beyond the threshold."""

    times = oni["time"].values
    values = np.asarray(oni.values, dtype=float)

    fig, ax = plt.subplots(figsize=(12, 4.5))
    if anomaly is not None:
        ax.plot(
            anomaly["time"].values,
            anomaly.values,
            color="grey",
            linewidth=0.8,
            alpha=0.7,
            label="Monthly anomaly",
        )
    ax.plot(times, values, color="k", linewidth=1.2, label="ONI")
    ax.fill_between(times, threshold, values, where=values >= threshold, color="red", alpha=0.6)
    ax.fill_between(times, -threshold, values, where=values <= -threshold, color="blue", alpha=0.6)
    ax.axhline(threshold, color="red", linestyle=":", linewidth=0.8)
    ax.axhline(-threshold, color="blue", linestyle=":", linewidth=0.8)
    ax.axhline(0, color="grey", linewidth=0.8)
    ax.set_ylabel(oni.attrs.get("units", "Anomaly"))
    ax.set_title("Oceanic Nino Index")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")

    return _save_or_show(fig, output_path, show)


def _save_or_show(fig: plt.Figure, output_path: str | Path | None, show: bool) -> Path | None:
    saved_path: Path | None = None
    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=200, bbox_inches="tight")
        saved_path = output_path

    if show:
        plt.show()
    else:
        plt.close(fig)

    return saved_path
