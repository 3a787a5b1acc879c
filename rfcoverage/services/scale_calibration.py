"""Floorplan scale calibration from a measured reference line."""

import logging

from rfcoverage.schemas.floorplan import Point
from rfcoverage.services.geometry import pixel_distance

logger = logging.getLogger(__name__)


def calibrate_scale(start: Point, end: Point, real_length_m: float) -> float:
    """
    Derive meters per pixel from a reference line of known length.

    Args:
        start: First endpoint of the reference line in pixels
        end: Second endpoint of the reference line in pixels
        real_length_m: Real-world length of the line in meters

    Returns:
        Meters per pixel
    """
    if not real_length_m > 0:
        raise ValueError(f"Reference length must be positive, got {real_length_m}")

    length_px = pixel_distance(start, end)
    if length_px <= 0:
        raise ValueError("Reference line has zero length")

    meters_per_pixel = real_length_m / length_px
    logger.info(
        f"Calibrated scale: {real_length_m}m over {length_px:.1f}px = {meters_per_pixel:.5f} m/px"
    )
    return meters_per_pixel


def pixel_distance_to_meters(distance_px: float, meters_per_pixel: float) -> float:
    """Convert a pixel distance to meters, 0 while the scale is uncalibrated."""
    if meters_per_pixel <= 0:
        return 0.0
    return distance_px * meters_per_pixel
