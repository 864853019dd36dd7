import numpy as np

from conftest import make_sst
from oni_index.cli import build_arg_parser, main
from oni_index.config import PipelineConfig
from oni_index.processing import run_pipeline


def test_run_pipeline_in_memory(sst):
    config = PipelineConfig(data_path="unused.nc")
    results = run_pipeline(config, data=sst, make_plots=False, verbose=False)

    assert results["area_mean"].dims == ("time",)
    assert results["climatology"].sizes["month"] == 12
    assert results["anomaly"].sizes["time"] == sst.sizes["time"]
    assert results["oni"].sizes["time"] == sst.sizes["time"] - 2
    assert len(results["table"]) == results["oni"].sizes["time"]
    per_month = results["anomaly"].groupby("time.month").mean()
    np.testing.assert_allclose(per_month.values, 0.0, atol=1e-10)
    assert results["oni_plot"] is None


def test_run_pipeline_unweighted_uses_plain_mean(sst):
    config = PipelineConfig(data_path="unused.nc", weighted=False)
    results = run_pipeline(config, data=sst, make_plots=False, verbose=False)
    np.testing.assert_allclose(
        results["area_mean"].values, results["unweighted_mean"].values
    )


def test_run_pipeline_saves_plots(sst, tmp_path, capsys):
    config = PipelineConfig(data_path="unused.nc", output_dir=tmp_path / "plots")
    results = run_pipeline(config, data=sst)

    for key in ("area_plot", "climatology_plot", "oni_plot"):
        assert results[key].exists()
    assert "ONI computed" in capsys.readouterr().out


def test_cli_end_to_end(tmp_path, capsys):
    data_file = tmp_path / "sst.nc"
    make_sst(n_years=3).to_dataset().to_netcdf(data_file)
    config_file = tmp_path / "oni_config.txt"
    config_file.write_text(f"data_path = {data_file}\nbase_start_year = 2000\n")

    exit_code = main(["--config", str(config_file), "--no-plots", "--quiet", "--unweighted"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Monthly climatology entries: 12" in out
    assert "ONI length: 34" in out
    assert "Latest ONI" in out


def test_arg_parser_window():
    args = build_arg_parser().parse_args(["--config", "c.txt", "--window", "5"])
    assert args.window == 5
    assert not args.no_plots
