"""Line-of-sight RF propagation model.

Received signal strength is the transmit power minus:
- Free Space Path Loss (distance in km, frequency in MHz)
- Penetration loss of every wall crossing the direct path
"""

from typing import Iterable, Sequence
import math

from rfcoverage.schemas.floorplan import AccessPoint, Point, Wall, WallMaterial, WALL_ATTENUATION_DB
from rfcoverage.services.geometry import intersects, pixel_distance

# 2.4 GHz Wi-Fi
FREQUENCY_MHZ = 2400.0

# FSPL constant for distance in km and frequency in MHz
FSPL_CONSTANT_DB = 32.45

# Minimum distance so a receiver on top of the transmitter stays finite
MIN_DISTANCE_KM = 0.0001

# Signal floor meaning "no usable signal"
NO_SIGNAL_DBM = -150.0


def calculate_fspl(distance_km: float, frequency_mhz: float) -> float:
    """
    Calculate Free Space Path Loss.

    FSPL(dB) = 20*log10(d_km) + 20*log10(f_MHz) + 32.45

    Args:
        distance_km: Distance in kilometers (clamped to MIN_DISTANCE_KM)
        frequency_mhz: Frequency in MHz

    Returns:
        Path loss in dB
    """
    distance_km = max(distance_km, MIN_DISTANCE_KM)
    return 20 * math.log10(distance_km) + 20 * math.log10(frequency_mhz) + FSPL_CONSTANT_DB


def get_material_attenuation(material: WallMaterial) -> float:
    """Get wall attenuation in dB for a material."""
    return WALL_ATTENUATION_DB[WallMaterial(material)]


def calculate_wall_loss(tx: Point, rx: Point, walls: Iterable[Wall]) -> float:
    """
    Sum the attenuation of every wall crossing the segment tx-rx.

    Each crossing wall counts once at its full attenuation; incidence angle
    and stacking order are ignored and the total is not capped.
    """
    total_loss_db = 0.0
    for wall in walls:
        if intersects(tx, rx, wall.start, wall.end):
            total_loss_db += wall.material.attenuation
    return total_loss_db


def calculate_rssi(
    ap: AccessPoint,
    receiver: Point,
    frequency_mhz: float,
    walls: Sequence[Wall],
    meters_per_pixel: float
) -> float:
    """
    Predict received signal strength from one access point at one point.

    Does not look at ``ap.is_enabled``; callers filter disabled access points.

    Args:
        ap: Transmitting access point
        receiver: Receiver location in pixels
        frequency_mhz: Operating frequency in MHz
        walls: Walls that may obstruct the direct path
        meters_per_pixel: Floorplan scale

    Returns:
        RSSI in dBm
    """
    distance_px = pixel_distance(ap.location, receiver)
    distance_km = max(distance_px * meters_per_pixel / 1000.0, MIN_DISTANCE_KM)

    path_loss_db = calculate_fspl(distance_km, frequency_mhz)
    wall_loss_db = calculate_wall_loss(ap.location, receiver, walls)

    return ap.tx_power - path_loss_db - wall_loss_db


def dbm_to_linear(power_dbm: float) -> float:
    """Convert dBm to milliwatts."""
    return 10 ** (power_dbm / 10)


def linear_to_dbm(power_mw: float) -> float:
    """Convert milliwatts to dBm, NO_SIGNAL_DBM for non-positive power."""
    return 10 * math.log10(power_mw) if power_mw > 0 else NO_SIGNAL_DBM


def power_sum_db(powers_dbm: Iterable[float]) -> float:
    """
    Sum multiple power levels in dB domain.

    Converts to linear, sums, converts back to dB.
    """
    total_linear = sum(dbm_to_linear(p) for p in powers_dbm)
    return linear_to_dbm(total_linear)
