from __future__ import annotations

from typing import Optional

import numpy as np
import xarray as xr

SPATIAL_DIMS = ("lat", "lon")


def _check_spatial_dims(data: xr.DataArray) -> None:
    missing = [dim for dim in SPATIAL_DIMS if dim not in data.dims]
    if missing:
        raise ValueError(f"Expected spatial dimension(s) {missing}; found {data.dims}.")


def spatial_mean(data: xr.DataArray) -> xr.DataArray:
    """
    Arithmetic mean over latitude and longitude.

    Every grid cell counts equally, which is a reasonable approximation for a
    small tropical box. Missing cells (land) are skipped.
    """
    _check_spatial_dims(data)
    result = data.mean(dim=list(SPATIAL_DIMS), skipna=True, keep_attrs=True)
    result.attrs["cell_methods"] = "lat, lon: mean"
    return result


def latitude_weights(lat: xr.DataArray) -> xr.DataArray:
    """Cosine-of-latitude weights, proportional to grid-cell area on a regular grid."""
    if not isinstance(lat, xr.DataArray):
        lat = xr.DataArray(np.asarray(lat, dtype=float), dims="lat", coords={"lat": lat})
    weights = np.cos(np.deg2rad(lat))
    weights.name = "weights"
    weights.attrs["long_name"] = "cosine of latitude"
    return weights


def weighted_spatial_mean(
    data: xr.DataArray,
    weights: Optional[xr.DataArray | np.ndarray] = None,
) -> xr.DataArray:
    """
    Area-weighted mean over latitude and longitude.

    ``weights`` defaults to :func:`latitude_weights` of the data's latitudes and
    is broadcast across longitude and time. A plain one-dimensional vector is
    taken to run along the data's latitudes. Weights built on a larger grid are
    cut down to the data's latitudes, so the mean is normalised by the weights
    of the same region, and only of the cells that hold data.
    """
    _check_spatial_dims(data)
    if weights is None:
        weights = latitude_weights(data["lat"])
    elif not isinstance(weights, xr.DataArray):
        vector = np.asarray(weights, dtype=float)
        if vector.ndim != 1 or vector.size != data.sizes["lat"]:
            raise ValueError(
                f"Weight vector of shape {vector.shape} does not match "
                f"{data.sizes['lat']} latitudes."
            )
        weights = xr.DataArray(vector, dims="lat", coords={"lat": data["lat"].values})

    if "lat" not in weights.dims:
        raise ValueError("Weights must be defined along the 'lat' dimension.")
    if "lat" not in weights.coords:
        weights = weights.assign_coords(lat=data["lat"].values)
    weights = weights.reindex(lat=data["lat"].values)
    if bool(weights.isnull().any()):
        raise ValueError("Weights do not cover every latitude of the data.")
    if bool((weights < 0).any()):
        raise ValueError("Weights must be non-negative.")

    result = data.weighted(weights).mean(dim=list(SPATIAL_DIMS))

    result.name = data.name
    result.attrs.update(data.attrs)
    result.attrs["cell_methods"] = "lat, lon: mean (weighted by cos(lat))"
    return result


def weighting_difference(data: xr.DataArray) -> xr.DataArray:
    """Weighted minus unweighted area mean."""
    difference = weighted_spatial_mean(data) - spatial_mean(data)
    difference.name = "weighting_difference"
    difference.attrs["units"] = data.attrs.get("units", "")
    return difference
