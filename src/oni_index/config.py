from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

# (lat_min, lat_max, lon_min, lon_max), longitudes in -180..180
NINO_REGIONS: Dict[str, Tuple[float, float, float, float]] = {
    "nino12": (-10.0, 0.0, -90.0, -80.0),
    "nino3": (-5.0, 5.0, -150.0, -90.0),
    "nino34": (-5.0, 5.0, -170.0, -120.0),
    "nino4": (-5.0, 5.0, 160.0, -150.0),
}

_TRUE = {"true", "yes", "1", "on"}
_FALSE = {"false", "no", "0", "off"}


@dataclass
class PipelineConfig:
    data_path: str
    variable: str = "sst"
    lat_min: float = -5.0
    lat_max: float = 5.0
    lon_min: float = -170.0
    lon_max: float = -120.0
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    base_start_year: Optional[int] = None
    base_end_year: Optional[int] = None
    window: int = 3
    weighted: bool = True
    output_dir: Optional[Path] = None

    @property
    def region(self) -> Tuple[float, float, float, float]:
        return (self.lat_min, self.lat_max, self.lon_min, self.lon_max)


def parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Cannot interpret {raw!r} as a boolean.")


def parse_config_file(path: str | Path) -> PipelineConfig:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    values: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip().lower()] = value.strip()

    if not values.get("data_path"):
        raise ValueError("Missing required config key: 'data_path'")

    def _maybe_int(key: str) -> Optional[int]:
        raw = values.get(key)
        return int(raw) if raw else None

    region_name = values.get("region")
    if region_name:
        key = region_name.lower().replace(".", "").replace("_", "")
        if key not in NINO_REGIONS:
            raise ValueError(
                f"Unknown region '{region_name}'. Available: {sorted(NINO_REGIONS)}"
            )
        lat_min, lat_max, lon_min, lon_max = NINO_REGIONS[key]
    else:
        lat_min, lat_max, lon_min, lon_max = NINO_REGIONS["nino34"]

    # explicit bounds win over a named region
    lat_min = float(values.get("lat_min", lat_min))
    lat_max = float(values.get("lat_max", lat_max))
    lon_min = float(values.get("lon_min", lon_min))
    lon_max = float(values.get("lon_max", lon_max))
    if lat_min >= lat_max:
        raise ValueError(f"lat_min ({lat_min}) must be smaller than lat_max ({lat_max}).")

    output_dir = values.get("output_dir")

    return PipelineConfig(
        data_path=values["data_path"],
        variable=values.get("variable", "sst"),
        lat_min=lat_min,
        lat_max=lat_max,
        lon_min=lon_min,
        lon_max=lon_max,
        start_year=_maybe_int("start_year"),
        end_year=_maybe_int("end_year"),
        base_start_year=_maybe_int("base_start_year"),
        base_end_year=_maybe_int("base_end_year"),
        window=int(values.get("window", 3)),
        weighted=parse_bool(values["weighted"]) if "weighted" in values else True,
        output_dir=Path(output_dir) if output_dir else None,
    )
