"""Signal coverage raster compositor and heatmap export."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging
import math
import os

from rfcoverage.core.config import settings, ensure_directories
from rfcoverage.schemas.floorplan import AccessPoint, BlendMode, FloorplanSnapshot, Point, Wall
from rfcoverage.services.rf_propagation import (
    FREQUENCY_MHZ, FSPL_CONSTANT_DB, MIN_DISTANCE_KM, NO_SIGNAL_DBM
)

logger = logging.getLogger(__name__)

# Overlay transparency for every heatmap pixel
HEATMAP_ALPHA = 150

# Color ramp: (lower bound in dBm, RGB), strongest band first
SIGNAL_COLOR_BANDS: List[Tuple[float, Tuple[int, int, int]]] = [
    (-50.0, (255, 0, 0)),      # Red
    (-60.0, (255, 165, 0)),    # Orange
    (-70.0, (255, 255, 0)),    # Yellow
    (-80.0, (0, 255, 0)),      # Green
    (-90.0, (0, 255, 255)),    # Cyan
]
NO_COVERAGE_COLOR = (0, 0, 255)  # Blue

# Binary threshold view
THRESHOLD_PASS_COLOR = (0, 255, 0)
THRESHOLD_FAIL_COLOR = (255, 0, 0)

# Coverage report labels for each color band, then the remainder
COVERAGE_BAND_NAMES = ["excellent", "good", "fair", "weak", "poor"]
DEAD_ZONE_NAME = "dead_zone"


@dataclass
class SignalGrid:
    """Grid of blended signal strength values, one per pixel."""
    width: int  # Grid width in pixels
    height: int  # Grid height in pixels
    grid: np.ndarray  # 2D array (height, width) of signal strengths in dBm
    meters_per_pixel: float


def color_for_rssi(rssi: float, threshold: Optional[float] = None) -> Tuple[int, int, int]:
    """Map one RSSI value to an RGB color."""
    if threshold is not None:
        return THRESHOLD_PASS_COLOR if rssi >= threshold else THRESHOLD_FAIL_COLOR
    for lower_bound, color in SIGNAL_COLOR_BANDS:
        if rssi >= lower_bound:
            return color
    return NO_COVERAGE_COLOR


def _wall_loss_grid(
    tx: Point,
    xs: np.ndarray,
    ys: np.ndarray,
    walls: Sequence[Wall]
) -> np.ndarray:
    """
    Cumulative wall loss from tx to every receiver pixel.

    Vectorized form of the orientation test in geometry.intersects, with
    the receiver as the second endpoint of the signal path. The comparisons
    are written term for term like the scalar version so both make the same
    decision for every pixel.
    """
    loss = np.zeros(xs.shape)

    for wall in walls:
        q1, q2 = wall.start, wall.end

        # Side of the wall line for each end of the signal path
        tx_side = (q2.y - tx.y) * (q1.x - tx.x) > (q1.y - tx.y) * (q2.x - tx.x)
        rx_side = (q2.y - ys) * (q1.x - xs) > (q1.y - ys) * (q2.x - xs)

        # Side of the signal path for each end of the wall
        q1_side = (q1.y - tx.y) * (xs - tx.x) > (ys - tx.y) * (q1.x - tx.x)
        q2_side = (q2.y - tx.y) * (xs - tx.x) > (ys - tx.y) * (q2.x - tx.x)

        crossing = (tx_side != rx_side) & (q1_side != q2_side)
        loss[crossing] += wall.material.attenuation

    return loss


def _rssi_grid(
    ap: AccessPoint,
    xs: np.ndarray,
    ys: np.ndarray,
    walls: Sequence[Wall],
    meters_per_pixel: float
) -> np.ndarray:
    """RSSI (dBm) from a single access point at every pixel."""
    dx = xs - ap.location.x
    dy = ys - ap.location.y
    distance_px = np.sqrt(dx * dx + dy * dy)
    distance_km = np.maximum(distance_px * meters_per_pixel / 1000.0, MIN_DISTANCE_KM)

    path_loss_db = 20 * np.log10(distance_km) + 20 * math.log10(FREQUENCY_MHZ) + FSPL_CONSTANT_DB
    wall_loss_db = _wall_loss_grid(ap.location, xs, ys, walls)

    return ap.tx_power - path_loss_db - wall_loss_db


def _validate_raster_args(width: int, height: int, meters_per_pixel: float):
    if width < 0 or height < 0:
        raise ValueError(f"Raster size must be non-negative, got {width}x{height}")
    if not meters_per_pixel > 0:
        raise ValueError(f"meters_per_pixel must be positive, got {meters_per_pixel}")


def compute_signal_grid(
    width: int,
    height: int,
    access_points: Sequence[AccessPoint],
    walls: Sequence[Wall],
    meters_per_pixel: float,
    blend_mode: BlendMode = BlendMode.STRONGEST
) -> SignalGrid:
    """
    Predict blended signal strength at every pixel of the floor plan.

    Pixel (x, y) is evaluated at integer coordinates. Only enabled access
    points contribute. STRONGEST keeps the best access point, never
    dropping below NO_SIGNAL_DBM; COMBINED adds the access points' power
    in milliwatts and converts back to dBm.

    Args:
        width: Raster width in pixels
        height: Raster height in pixels
        access_points: Access points, enabled or not
        walls: Obstructing walls
        meters_per_pixel: Floorplan scale
        blend_mode: Combination policy

    Returns:
        SignalGrid with one dBm value per pixel
    """
    _validate_raster_args(width, height, meters_per_pixel)
    blend_mode = BlendMode(blend_mode)

    enabled = [ap for ap in access_points if ap.is_enabled]
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)

    if blend_mode == BlendMode.STRONGEST:
        grid = np.full((height, width), NO_SIGNAL_DBM)
        for ap in enabled:
            grid = np.maximum(grid, _rssi_grid(ap, xs, ys, walls, meters_per_pixel))
    else:
        linear_sum = np.zeros((height, width))
        for ap in enabled:
            linear_sum += 10.0 ** (_rssi_grid(ap, xs, ys, walls, meters_per_pixel) / 10)
        grid = np.full((height, width), NO_SIGNAL_DBM)
        has_power = linear_sum > 0
        grid[has_power] = 10 * np.log10(linear_sum[has_power])

    logger.debug(
        f"Signal grid {width}x{height}: {len(enabled)}/{len(access_points)} access points enabled, "
        f"{len(walls)} walls, blend={blend_mode.value}"
    )

    return SignalGrid(width=width, height=height, grid=grid, meters_per_pixel=meters_per_pixel)


def colorize_signal_grid(grid: np.ndarray, threshold: Optional[float] = None) -> np.ndarray:
    """
    Map a dBm grid to RGBA pixels.

    Returns:
        uint8 array of shape (height, width, 4)
    """
    height, width = grid.shape
    rgba = np.empty((height, width, 4), dtype=np.uint8)

    if threshold is not None:
        rgba[..., :3] = np.where(
            (grid >= threshold)[..., None],
            np.array(THRESHOLD_PASS_COLOR, dtype=np.uint8),
            np.array(THRESHOLD_FAIL_COLOR, dtype=np.uint8)
        )
    else:
        # np.select picks the first matching band
        palette = np.array(
            [color for _, color in SIGNAL_COLOR_BANDS] + [NO_COVERAGE_COLOR],
            dtype=np.uint8
        )
        band_index = np.select(
            [grid >= lower_bound for lower_bound, _ in SIGNAL_COLOR_BANDS],
            list(range(len(SIGNAL_COLOR_BANDS))),
            default=len(SIGNAL_COLOR_BANDS)
        )
        rgba[..., :3] = palette[band_index]

    rgba[..., 3] = HEATMAP_ALPHA
    return rgba


def generate_heatmap(
    width: int,
    height: int,
    access_points: Sequence[AccessPoint],
    walls: Sequence[Wall],
    meters_per_pixel: float,
    blend_mode: BlendMode = BlendMode.STRONGEST,
    threshold: Optional[float] = None
) -> bytes:
    """
    Render the coverage heatmap as a raw RGBA pixel buffer.

    Args:
        width: Raster width in pixels
        height: Raster height in pixels
        access_points: Access points, disabled ones are skipped
        walls: Obstructing walls
        meters_per_pixel: Floorplan scale, must be calibrated (> 0)
        blend_mode: STRONGEST or COMBINED
        threshold: Optional pass/fail cutoff in dBm

    Returns:
        width * height * 4 bytes, row-major, top row first
    """
    signal_grid = compute_signal_grid(
        width, height, access_points, walls, meters_per_pixel, blend_mode
    )
    buffer = colorize_signal_grid(signal_grid.grid, threshold).tobytes()

    logger.info(
        f"Generated {width}x{height} heatmap "
        f"({BlendMode(blend_mode).value}, threshold={threshold})"
    )
    return buffer


def generate_heatmap_from_snapshot(snapshot: FloorplanSnapshot) -> bytes:
    """Render a heatmap from a floorplan snapshot."""
    return generate_heatmap(
        snapshot.width,
        snapshot.height,
        snapshot.access_points,
        snapshot.walls,
        snapshot.meters_per_pixel,
        snapshot.blend_mode,
        snapshot.threshold
    )


def save_heatmap_image(
    buffer: bytes,
    width: int,
    height: int,
    output_path: Optional[str] = None
) -> str:
    """
    Save an RGBA heatmap buffer as a PNG image.

    Args:
        buffer: Pixel buffer from generate_heatmap
        width: Raster width in pixels
        height: Raster height in pixels
        output_path: Where to save the image, defaults to HEATMAP_PATH/heatmap.png

    Returns:
        Path to generated image
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot save an empty {width}x{height} heatmap")
    if len(buffer) != width * height * 4:
        raise ValueError(
            f"Buffer has {len(buffer)} bytes, expected {width * height * 4} for {width}x{height} RGBA"
        )

    if output_path is None:
        ensure_directories()
        output_path = os.path.join(settings.HEATMAP_PATH, "heatmap.png")
    else:
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

    rgba = np.frombuffer(buffer, dtype=np.uint8).reshape(height, width, 4)
    plt.imsave(output_path, rgba, format="png")

    logger.info(f"Saved heatmap image to {output_path}")
    return output_path


def generate_coverage_report(
    signal_grid: SignalGrid,
    threshold_dbm: Optional[float] = None
) -> dict:
    """
    Generate a coverage report with statistics.

    Args:
        signal_grid: Signal strength grid
        threshold_dbm: Minimum acceptable signal strength,
            defaults to settings.COVERAGE_THRESHOLD_DBM

    Returns:
        Dictionary with coverage statistics
    """
    if threshold_dbm is None:
        threshold_dbm = settings.COVERAGE_THRESHOLD_DBM

    grid = signal_grid.grid
    total_cells = grid.size

    def percentage(cells) -> float:
        return float(cells / total_cells * 100) if total_cells else 0.0

    breakdown = {}
    upper_bound = None
    for name, (lower_bound, _) in zip(COVERAGE_BAND_NAMES, SIGNAL_COLOR_BANDS):
        in_band = grid >= lower_bound
        if upper_bound is not None:
            in_band &= grid < upper_bound
        cells = int(np.sum(in_band))
        breakdown[name] = {
            "cells": cells,
            "percentage": percentage(cells),
            "threshold": (
                f">= {lower_bound} dBm" if upper_bound is None
                else f"{lower_bound} to {upper_bound} dBm"
            )
        }
        upper_bound = lower_bound

    dead_cells = int(np.sum(grid < upper_bound))
    breakdown[DEAD_ZONE_NAME] = {
        "cells": dead_cells,
        "percentage": percentage(dead_cells),
        "threshold": f"< {upper_bound} dBm"
    }

    # Signal statistics, ignoring pixels with no access point in reach
    valid_signals = grid[grid > NO_SIGNAL_DBM]
    has_signal = valid_signals.size > 0

    return {
        "total_area": total_cells,
        "coverage_breakdown": breakdown,
        "total_coverage_percent": percentage(total_cells - dead_cells),
        "acceptable_coverage_percent": percentage(np.sum(grid >= threshold_dbm)),
        "signal_statistics": {
            "mean": float(np.mean(valid_signals)) if has_signal else NO_SIGNAL_DBM,
            "median": float(np.median(valid_signals)) if has_signal else NO_SIGNAL_DBM,
            "std": float(np.std(valid_signals)) if has_signal else 0.0,
            "min": float(np.min(valid_signals)) if has_signal else NO_SIGNAL_DBM,
            "max": float(np.max(valid_signals)) if has_signal else NO_SIGNAL_DBM
        }
    }
