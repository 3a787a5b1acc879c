"""Floorplan Pydantic schemas: walls, access points and raster inputs."""

from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    """2D point in floorplan pixel coordinates."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class WallMaterial(str, Enum):
    """Wall material with a fixed RF attenuation."""
    DRYWALL = "drywall"
    CONCRETE = "concrete"
    GLASS = "glass"
    METAL = "metal"

    @property
    def attenuation(self) -> float:
        """Signal loss in dB when the wall obstructs the direct path."""
        return WALL_ATTENUATION_DB[self]


# 2.4 GHz penetration loss per material (dB)
WALL_ATTENUATION_DB = {
    WallMaterial.DRYWALL: 3.0,
    WallMaterial.GLASS: 6.0,
    WallMaterial.CONCRETE: 8.0,
    WallMaterial.METAL: 12.0,
}


class BlendMode(str, Enum):
    """How signals from several access points combine at one point."""
    STRONGEST = "strongest"
    COMBINED = "combined"


class Wall(BaseModel):
    """Wall segment in the floor plan."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    start: Point
    end: Point
    material: WallMaterial = WallMaterial.DRYWALL

    def __eq__(self, other):
        if not isinstance(other, Wall):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


class AccessPoint(BaseModel):
    """Wireless transmitter placed on the floor plan."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    location: Point
    tx_power: float = Field(20.0, allow_inf_nan=False, description="Transmit power in dBm")
    is_enabled: bool = True

    def __eq__(self, other):
        if not isinstance(other, AccessPoint):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


class FloorplanSnapshot(BaseModel):
    """Read-only copy of everything one heatmap pass needs."""
    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=0, description="Raster width in pixels")
    height: int = Field(..., ge=0, description="Raster height in pixels")
    meters_per_pixel: float = Field(..., gt=0, allow_inf_nan=False)
    walls: List[Wall] = Field(default_factory=list)
    access_points: List[AccessPoint] = Field(default_factory=list)
    blend_mode: BlendMode = BlendMode.STRONGEST
    threshold: Optional[float] = Field(
        None,
        allow_inf_nan=False,
        description="Pass/fail RSSI cutoff in dBm; None renders the full color ramp"
    )
