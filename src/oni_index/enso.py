from __future__ import annotations

import numpy as np
import pandas as pd
import xarray as xr

# Indexed by the centre month of each overlapping 3-month season
SEASON_LABELS = (
    "DJF", "JFM", "FMA", "MAM", "AMJ", "MJJ",
    "JJA", "JAS", "ASO", "SON", "OND", "NDJ",
)

EL_NINO = "El Nino"
LA_NINA = "La Nina"
NEUTRAL = "Neutral"

# (lower bound on |ONI|, label), checked from strongest down
INTENSITY_THRESHOLDS = (
    (2.0, "Very Strong"),
    (1.5, "Strong"),
    (1.0, "Moderate"),
    (0.5, "Weak"),
)


def season_labels(series: xr.DataArray) -> xr.DataArray:
    """Label each value of a monthly series by its centered 3-month season."""
    if "time" not in series.coords:
        raise ValueError("Input DataArray must include a 'time' coordinate.")
    months = series["time"].dt.month.values
    labels = np.array([SEASON_LABELS[int(m) - 1] for m in months], dtype=object)
    return xr.DataArray(labels, coords={"time": series["time"]}, dims="time", name="season")


def _persistent(mask: np.ndarray, min_duration: int) -> np.ndarray:
    flags = pd.Series(mask, dtype=bool)
    run_id = (flags != flags.shift()).cumsum()
    run_length = flags.groupby(run_id).transform("size")
    return (flags & (run_length >= min_duration)).to_numpy()


def classify_phase(
    oni: xr.DataArray,
    threshold: float = 0.5,
    min_duration: int = 5,
) -> xr.DataArray:
    """
    Mark El Nino / La Nina episodes in an ONI series.

    A value belongs to an episode when it is part of at least ``min_duration``
    consecutive seasons at or beyond ``+threshold`` (El Nino) or
    ``-threshold`` (La Nina). Everything else, NaN included, is neutral.
    """
    if oni.ndim != 1:
        raise ValueError(f"Expected a one-dimensional ONI series, got dims {oni.dims}.")
    if threshold <= 0:
        raise ValueError("threshold must be positive.")
    if min_duration < 1:
        raise ValueError("min_duration must be at least 1.")

    values = np.asarray(oni.values, dtype=float)
    with np.errstate(invalid="ignore"):
        warm = _persistent(values >= threshold, min_duration)
        cold = _persistent(values <= -threshold, min_duration)

    phase = np.full(values.shape, NEUTRAL, dtype=object)
    phase[warm] = EL_NINO
    phase[cold] = LA_NINA
    return xr.DataArray(phase, coords=oni.coords, dims=oni.dims, name="phase")


def classify_intensity(value: float) -> str:
    if value is None or pd.isna(value):
        return NEUTRAL
    magnitude = abs(float(value))
    for bound, label in INTENSITY_THRESHOLDS:
        if magnitude >= bound:
            return label
    return NEUTRAL


def oni_table(
    oni: xr.DataArray,
    threshold: float = 0.5,
    min_duration: int = 5,
) -> pd.DataFrame:
    """Tabulate an ONI series: one row per season with phase and intensity."""
    phase = classify_phase(oni, threshold=threshold, min_duration=min_duration)
    seasons = season_labels(oni)
    table = pd.DataFrame(
        {
            "year": oni["time"].dt.year.values,
            "season": seasons.values,
            "oni": np.asarray(oni.values, dtype=float),
            "phase": phase.values,
        },
        index=pd.Index(oni["time"].values, name="time"),
    )
    table["intensity"] = [
        classify_intensity(value) if label != NEUTRAL else NEUTRAL
        for value, label in zip(table["oni"], table["phase"])
    ]
    return table
