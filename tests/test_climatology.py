import numpy as np
import pandas as pd
import pytest
import xarray as xr

from oni_index.climatology import (
    monthly_anomaly,
    monthly_climatology,
    monthly_std,
    standardized_anomaly,
)


@pytest.mark.parametrize("n_years", [1, 3, 7])
def test_climatology_has_twelve_months(n_years):
    time = pd.date_range("1990-01-01", periods=12 * n_years, freq="MS")
    series = xr.DataArray(np.arange(time.size, dtype=float), coords={"time": time}, dims="time")
    climatology = monthly_climatology(series)
    assert climatology.dims == ("month",)
    assert climatology.sizes["month"] == 12
    assert list(climatology["month"].values) == list(range(1, 13))


def test_climatology_is_mean_per_month(monthly_series):
    climatology = monthly_climatology(monthly_series)
    january = monthly_series.values[::12].mean()
    np.testing.assert_allclose(float(climatology.sel(month=1)), january)


def test_climatology_keeps_spatial_dims(sst):
    climatology = monthly_climatology(sst)
    assert climatology.dims == ("month", "lat", "lon")


def test_climatology_base_period(monthly_series):
    climatology = monthly_climatology(monthly_series, 2001, 2001)
    np.testing.assert_allclose(climatology.values, monthly_series.values[12:24])


def test_climatology_missing_month_raises():
    time = pd.date_range("2000-01-01", periods=6, freq="MS")
    series = xr.DataArray(np.ones(6), coords={"time": time}, dims="time")
    with pytest.raises(ValueError, match="month"):
        monthly_climatology(series)


def test_climatology_requires_datetime_time():
    series = xr.DataArray(np.ones(24), coords={"time": np.arange(24)}, dims="time")
    with pytest.raises(TypeError):
        monthly_climatology(series)


def test_climatology_requires_time():
    with pytest.raises(ValueError, match="time"):
        monthly_climatology(xr.DataArray(np.ones(3), dims="x"))


def test_anomaly_averages_to_zero_per_month(monthly_series):
    anomaly = monthly_anomaly(monthly_series)
    per_month = anomaly.groupby("time.month").mean()
    np.testing.assert_allclose(per_month.values, 0.0, atol=1e-12)
    assert anomaly.sizes["time"] == monthly_series.sizes["time"]
    assert "month" not in anomaly.coords


def test_anomaly_aligns_partial_years(monthly_series):
    climatology = monthly_climatology(monthly_series)
    # starts in April, ends in February
    partial = monthly_series.isel(time=slice(3, 26))
    anomaly = monthly_anomaly(partial, climatology)
    months = partial["time"].dt.month.values
    expected = partial.values - climatology.sel(month=months).values
    np.testing.assert_allclose(anomaly.values, expected)


def test_anomaly_rejects_short_climatology(monthly_series):
    climatology = monthly_climatology(monthly_series).isel(month=slice(0, 6))
    with pytest.raises(ValueError, match="12 entries"):
        monthly_anomaly(monthly_series, climatology)


def test_monthly_std_and_standardized_anomaly(sst):
    spread = monthly_std(sst)
    assert spread.sizes["month"] == 12
    standardized = standardized_anomaly(sst)
    assert set(standardized.dims) == set(sst.dims)
    assert standardized.attrs["units"] == "1"
    assert np.isfinite(standardized.values).all()


def test_climatology_warns_for_empty_month(monthly_series):
    gappy = monthly_series.where(monthly_series["time"].dt.month != 1)
    with pytest.warns(UserWarning, match="entirely missing"):
        climatology = monthly_climatology(gappy)
    assert np.isnan(float(climatology.sel(month=1)))
    assert climatology.sizes["month"] == 12


def test_climatology_inverted_base_period(monthly_series):
    with pytest.raises(ValueError, match="after its end"):
        monthly_climatology(monthly_series, 2002, 2000)
