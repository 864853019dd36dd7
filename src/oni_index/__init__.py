"""
Oceanic Nino Index from gridded sea-surface temperature.
"""

from .io import load_sst, normalize_longitude, select_region
from .spatial import latitude_weights, spatial_mean, weighted_spatial_mean
from .climatology import monthly_anomaly, monthly_climatology
from .smoothing import running_mean
from .enso import classify_phase, oni_table
from .processing import run_pipeline

__all__ = [
    "load_sst",
    "normalize_longitude",
    "select_region",
    "latitude_weights",
    "spatial_mean",
    "weighted_spatial_mean",
    "monthly_climatology",
    "monthly_anomaly",
    "running_mean",
    "classify_phase",
    "oni_table",
    "run_pipeline",
]
