from __future__ import annotations

import os
from glob import glob
from typing import Optional

import numpy as np
import xarray as xr

_VERTICAL_DIMS = ("zlev", "lev", "depth", "altitude")


def _is_glob(path: str) -> bool:
    return any(ch in path for ch in "*?[")


def load_sst(
    path: str | os.PathLike,
    variable: str = "sst",
    *,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    engine: Optional[str] = None,
    chunks: Optional[dict[str, int]] = None,
) -> xr.DataArray:
    """
    Open a sea-surface-temperature variable read-only as a (time, lat, lon) DataArray.

    Parameters
    ----------
    path:
        A single NetCDF file or a glob pattern matching several files
        (e.g. ``'sst.mnmean.*.nc'``).
    variable:
        Name of the variable stored within the file(s).
    start_year, end_year:
        Optional inclusive bounds applied to the ``time`` coordinate.
    engine:
        Backend engine passed to xarray (``None`` lets xarray choose).
    chunks:
        Optional chunk sizes for dask-backed arrays.

    Returns
    -------
    xarray.DataArray
        Array with dims named ``time``, ``lat`` and ``lon``, sorted by time and
        by ascending latitude.
    """
    path = os.fspath(path)
    if _is_glob(path):
        files = sorted(glob(path))
        if not files:
            raise FileNotFoundError(f"No files matched pattern {path}.")
        ds = xr.open_mfdataset(files, combine="by_coords", engine=engine, chunks=chunks)
    else:
        if not os.path.exists(path):
            raise FileNotFoundError(f"SST file not found: {path}")
        ds = xr.open_dataset(path, engine=engine, chunks=chunks)

    if variable not in ds:
        available = list(ds.data_vars)
        ds.close()
        raise KeyError(f"Variable '{variable}' not present in dataset. Available: {available}")

    data_array = ds[variable]

    dim_renames = {}
    if "latitude" in data_array.dims:
        dim_renames["latitude"] = "lat"
    if "longitude" in data_array.dims:
        dim_renames["longitude"] = "lon"
    if dim_renames:
        data_array = data_array.rename(dim_renames)

    for dim in _VERTICAL_DIMS:
        if dim in data_array.dims and data_array.sizes[dim] == 1:
            data_array = data_array.squeeze(dim, drop=True)

    missing = [dim for dim in ("time", "lat", "lon") if dim not in data_array.dims]
    if missing:
        ds.close()
        raise ValueError(
            f"Variable '{variable}' lacks required dimension(s) {missing}; found {data_array.dims}."
        )

    data_array = data_array.sortby("time").sortby("lat")
    data_array = data_array.transpose("time", "lat", "lon", ...)

    if start_year is not None or end_year is not None:
        start = str(start_year) if start_year is not None else None
        end = str(end_year) if end_year is not None else None
        data_array = data_array.sel(time=slice(start, end))
        if data_array.sizes["time"] == 0:
            raise ValueError(f"No time steps between {start_year} and {end_year}.")

    return data_array


def normalize_longitude(data: xr.DataArray) -> xr.DataArray:
    """Convert 0..360 longitudes to -180..180 and sort them."""
    if "lon" not in data.coords:
        raise ValueError("Input DataArray must include a 'lon' coordinate.")
    if float(data["lon"].max()) <= 180:
        return data
    wrapped = ((data["lon"] + 180) % 360) - 180
    result = data.assign_coords(lon=wrapped).sortby("lon")
    result["lon"].attrs.update(data["lon"].attrs)
    return result


def select_region(
    data: xr.DataArray,
    lat_min: float,
    lat_max: float,
    lon_min: float,
    lon_max: float,
) -> xr.DataArray:
    """
    Select a latitude/longitude box, bounds given with longitudes in -180..180.

    ``lon_min > lon_max`` selects a box crossing the dateline (e.g. Nino 4).
    Works for data stored on either longitude convention.
    """
    for dim in ("lat", "lon"):
        if dim not in data.dims:
            raise ValueError(f"Input DataArray must include a '{dim}' dimension.")

    data = normalize_longitude(data)

    lat = data["lat"].values
    lon = data["lon"].values
    lat_idx = np.flatnonzero((lat >= lat_min) & (lat <= lat_max))
    if lon_min <= lon_max:
        lon_mask = (lon >= lon_min) & (lon <= lon_max)
    else:
        lon_mask = (lon >= lon_min) | (lon <= lon_max)
    lon_idx = np.flatnonzero(lon_mask)

    if lat_idx.size == 0 or lon_idx.size == 0:
        raise ValueError(
            f"Region lat=[{lat_min}, {lat_max}], lon=[{lon_min}, {lon_max}] "
            "contains no grid points."
        )

    return data.isel(lat=lat_idx, lon=lon_idx)
