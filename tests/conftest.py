import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest
import xarray as xr


def make_sst(n_years=4, lat=None, lon=None, start="2000-01-01", seed=0):
    """Synthetic monthly SST: seasonal cycle + trend-free noise on a lat/lon grid."""
    if lat is None:
        lat = np.arange(-10.0, 10.1, 2.5)
    if lon is None:
        lon = np.arange(180.0, 290.1, 5.0)
    time = pd.date_range(start, periods=12 * n_years, freq="MS")
    rng = np.random.default_rng(seed)
    seasonal = 27.0 + np.cos(2 * np.pi * (time.month.values - 3) / 12.0)
    values = (
        seasonal[:, None, None]
        - 0.02 * np.abs(np.asarray(lat))[None, :, None]
        + 0.3 * rng.standard_normal((time.size, len(lat), len(lon)))
    )
    return xr.DataArray(
        values,
        coords={"time": time, "lat": lat, "lon": lon},
        dims=("time", "lat", "lon"),
        name="sst",
        attrs={"units": "degC"},
    )


@pytest.fixture
def sst():
    return make_sst()


@pytest.fixture
def monthly_series():
    time = pd.date_range("2000-01-01", periods=36, freq="MS")
    values = 26.0 + np.sin(np.arange(36) / 2.0)
    return xr.DataArray(values, coords={"time": time}, dims="time", name="sst")
