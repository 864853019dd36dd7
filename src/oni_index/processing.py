from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import xarray as xr

from .climatology import monthly_anomaly, monthly_climatology
from .config import PipelineConfig
from .enso import oni_table
from .io import load_sst, select_region
from .plotting import plot_area_means, plot_climatology, plot_oni
from .smoothing import running_mean
from .spatial import spatial_mean, weighted_spatial_mean


def run_pipeline(
    config: PipelineConfig,
    *,
    make_plots: bool = True,
    show_plots: bool = False,
    verbose: bool = True,
    data: Optional[xr.DataArray] = None,
) -> Dict[str, object]:
    """
    Execute the ONI workflow: load, box-average, climatology, anomaly, smoothing.

    ``data`` may be passed to skip reading ``config.data_path``.
    """
    if data is None:
        data = load_sst(
            config.data_path,
            config.variable,
            start_year=config.start_year,
            end_year=config.end_year,
        )
    _report(verbose, f"Loaded '{config.variable}' with shape {dict(data.sizes)}")

    region = select_region(data, *config.region)
    _report(
        verbose,
        f"Selected region lat=[{config.lat_min}, {config.lat_max}], "
        f"lon=[{config.lon_min}, {config.lon_max}]: "
        f"{region.sizes['lat']} x {region.sizes['lon']} cells",
    )

    unweighted = spatial_mean(region)
    weighted = weighted_spatial_mean(region)
    series = weighted if config.weighted else unweighted
    _report(verbose, f"Area mean ({'weighted' if config.weighted else 'unweighted'}) computed")

    climatology = monthly_climatology(series, config.base_start_year, config.base_end_year)
    anomaly = monthly_anomaly(series, climatology)
    oni = running_mean(anomaly, config.window)
    oni.name = "oni"
    table = oni_table(oni)
    _report(verbose, f"ONI computed: {oni.sizes['time']} of {anomaly.sizes['time']} months")

    area_plot = None
    climatology_plot = None
    oni_plot = None
    if make_plots:
        base_path = Path(config.output_dir) if config.output_dir else None

        def _target(name: str) -> Path | None:
            return base_path / name if base_path is not None else None

        area_plot = plot_area_means(
            unweighted, weighted, output_path=_target("area_means.png"), show=show_plots
        )
        climatology_plot = plot_climatology(
            climatology, output_path=_target("climatology.png"), show=show_plots
        )
        oni_plot = plot_oni(
            oni, anomaly=anomaly, output_path=_target("oni.png"), show=show_plots
        )

    return {
        "data_shape": tuple(data.shape),
        "data_dims": tuple(data.dims),
        "region": region,
        "unweighted_mean": unweighted,
        "weighted_mean": weighted,
        "area_mean": series,
        "climatology": climatology,
        "anomaly": anomaly,
        "oni": oni,
        "table": table,
        "area_plot": area_plot,
        "climatology_plot": climatology_plot,
        "oni_plot": oni_plot,
    }


def _report(verbose: bool, message: str) -> None:
    if verbose:
        print(f"✓ {message}")
