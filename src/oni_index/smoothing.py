from __future__ import annotations

import numbers

import xarray as xr


def running_mean(
    series: xr.DataArray,
    window: int = 3,
    *,
    dim: str = "time",
    drop_edges: bool = True,
) -> xr.DataArray:
    """
    Centered moving average over ``window`` steps along ``dim``.

    The first and last ``(window - 1) // 2`` positions have an incomplete
    window and are undefined; with ``drop_edges`` they are removed, so an
    N-step series yields ``N - window + 1`` values. Gaps inside the series
    stay as NaN.
    """
    if isinstance(window, bool) or not isinstance(window, numbers.Integral):
        raise ValueError(f"window must be an integer, got {window!r}.")
    if window < 1 or window % 2 == 0:
        raise ValueError(f"window must be a positive odd integer, got {window}.")
    if dim not in series.dims:
        raise ValueError(f"Dimension '{dim}' not found; available: {series.dims}.")
    size = series.sizes[dim]
    if window > size:
        raise ValueError(f"window ({window}) is longer than the series ({size} steps).")

    smoothed = series.rolling({dim: window}, center=True, min_periods=window).mean()

    if drop_edges:
        half = (window - 1) // 2
        smoothed = smoothed.isel({dim: slice(half, size - half)})

    smoothed.name = series.name
    smoothed.attrs.update(series.attrs)
    smoothed.attrs["long_name"] = f"{window}-step centered running mean"
    return smoothed
