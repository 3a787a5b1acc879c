"""RF signal coverage modelling and heatmap rendering over 2D floorplans."""

from rfcoverage.schemas.floorplan import (
    AccessPoint, BlendMode, FloorplanSnapshot, Point, Wall, WallMaterial
)
from rfcoverage.services.geometry import intersects
from rfcoverage.services.rf_propagation import calculate_rssi
from rfcoverage.services.heatmap_generator import (
    SignalGrid,
    compute_signal_grid,
    generate_coverage_report,
    generate_heatmap,
    generate_heatmap_from_snapshot,
    save_heatmap_image,
)
from rfcoverage.services.scale_calibration import calibrate_scale

__version__ = "0.1.0"
__all__ = [
    "AccessPoint",
    "BlendMode",
    "FloorplanSnapshot",
    "Point",
    "Wall",
    "WallMaterial",
    "SignalGrid",
    "intersects",
    "calculate_rssi",
    "compute_signal_grid",
    "generate_coverage_report",
    "generate_heatmap",
    "generate_heatmap_from_snapshot",
    "save_heatmap_image",
    "calibrate_scale",
]
