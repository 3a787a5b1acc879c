# Pydantic schemas
from rfcoverage.schemas.floorplan import (
    Point, Wall, WallMaterial, AccessPoint, BlendMode, FloorplanSnapshot,
    WALL_ATTENUATION_DB
)
