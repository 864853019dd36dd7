from __future__ import annotations

import warnings
from typing import Optional

import numpy as np
import xarray as xr

MONTHS = np.arange(1, 13)


def _check_time(data: xr.DataArray) -> None:
    if "time" not in data.coords:
        raise ValueError("Input DataArray must include a 'time' coordinate.")
    if not np.issubdtype(data["time"].dtype, np.datetime64):
        try:
            data["time"].dt.month
        except (AttributeError, TypeError) as exc:
            raise TypeError(
                "The 'time' coordinate must be datetime-like and support .dt accessors."
            ) from exc


def _base_period(
    data: xr.DataArray,
    base_start_year: Optional[int],
    base_end_year: Optional[int],
) -> xr.DataArray:
    if base_start_year is None and base_end_year is None:
        return data
    if (
        base_start_year is not None
        and base_end_year is not None
        and base_start_year > base_end_year
    ):
        raise ValueError(
            f"Base period start ({base_start_year}) is after its end ({base_end_year})."
        )
    years = data["time"].dt.year
    mask = xr.ones_like(years, dtype=bool)
    if base_start_year is not None:
        mask = mask & (years >= base_start_year)
    if base_end_year is not None:
        mask = mask & (years <= base_end_year)
    subset = data.isel(time=np.flatnonzero(mask.values))
    if subset.sizes["time"] == 0:
        raise ValueError(
            f"No time steps inside base period {base_start_year}-{base_end_year}."
        )
    return subset


def _group_by_month(
    data: xr.DataArray,
    reducer: str,
    base_start_year: Optional[int],
    base_end_year: Optional[int],
) -> xr.DataArray:
    _check_time(data)
    base = _base_period(data, base_start_year, base_end_year)

    present = set(int(m) for m in np.unique(base["time"].dt.month.values))
    missing = [int(m) for m in MONTHS if m not in present]
    if missing:
        raise ValueError(
            f"Cannot build a 12-month climatology: no data for month(s) {missing}."
        )

    grouped = getattr(base.groupby("time.month"), reducer)(dim="time")
    grouped = grouped.reindex(month=MONTHS)
    grouped.attrs.update(data.attrs)
    return grouped


def monthly_climatology(
    data: xr.DataArray,
    base_start_year: Optional[int] = None,
    base_end_year: Optional[int] = None,
) -> xr.DataArray:
    """
    Compute the calendar-month climatology (mean per month) of a time-indexed array.

    Parameters
    ----------
    data:
        Input array with a ``time`` coordinate containing datetime-like values.
    base_start_year, base_end_year:
        Optional inclusive base period, e.g. 1991-2020. Defaults to the whole record.

    Returns
    -------
    xarray.DataArray
        Array reduced over ``time`` with a ``month`` dimension of exactly 12 entries.
    """
    climatology = _group_by_month(data, "mean", base_start_year, base_end_year)

    all_nan = climatology.isnull()
    for dim in climatology.dims:
        if dim != "month":
            all_nan = all_nan.all(dim=dim)
    if bool(all_nan.any()):
        empty = [int(m) for m in climatology["month"].values[all_nan.values]]
        warnings.warn(f"Climatology is entirely missing for month(s) {empty}.")

    climatology.name = data.name
    climatology.attrs["long_name"] = "Monthly climatology"
    return climatology


def monthly_std(
    data: xr.DataArray,
    base_start_year: Optional[int] = None,
    base_end_year: Optional[int] = None,
) -> xr.DataArray:
    """Standard deviation per calendar month over the base period."""
    spread = _group_by_month(data, "std", base_start_year, base_end_year)
    spread.attrs["long_name"] = "Monthly standard deviation"
    return spread


def _check_monthly(climatology: xr.DataArray) -> None:
    if "month" not in climatology.dims or climatology.sizes["month"] != 12:
        raise ValueError("Climatology must have a 'month' dimension with 12 entries.")
    months = sorted(int(m) for m in climatology["month"].values)
    if months != list(MONTHS):
        raise ValueError(f"Climatology months must be 1..12; found {months}.")


def monthly_anomaly(
    data: xr.DataArray,
    climatology: Optional[xr.DataArray] = None,
    *,
    base_start_year: Optional[int] = None,
    base_end_year: Optional[int] = None,
) -> xr.DataArray:
    """
    Subtract the matching calendar month's climatology from every time step.

    Alignment is by month label, so the 12-point climatology broadcasts over
    any number of years, including records that start or stop mid-year.
    """
    _check_time(data)
    if climatology is None:
        climatology = monthly_climatology(data, base_start_year, base_end_year)
    _check_monthly(climatology)

    anomaly = data.groupby("time.month") - climatology
    if "month" in anomaly.coords:
        anomaly = anomaly.drop_vars("month")
    anomaly.name = data.name
    anomaly.attrs.update(data.attrs)
    anomaly.attrs["long_name"] = "Anomaly from monthly climatology"
    return anomaly


def standardized_anomaly(
    data: xr.DataArray,
    *,
    base_start_year: Optional[int] = None,
    base_end_year: Optional[int] = None,
) -> xr.DataArray:
    """Anomaly divided by the monthly standard deviation (dimensionless)."""
    anomaly = monthly_anomaly(
        data, base_start_year=base_start_year, base_end_year=base_end_year
    )
    spread = monthly_std(data, base_start_year, base_end_year)
    spread = spread.where(spread > 0)
    standardized = anomaly.groupby("time.month") / spread
    if "month" in standardized.coords:
        standardized = standardized.drop_vars("month")
    standardized.name = data.name
    standardized.attrs = {"long_name": "Standardized anomaly", "units": "1"}
    return standardized
