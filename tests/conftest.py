"""Shared fixtures for coverage tests."""

import pytest

from rfcoverage.schemas.floorplan import AccessPoint, Point, Wall, WallMaterial


@pytest.fixture
def origin_ap():
    """9 dBm access point at the origin."""
    return AccessPoint(location=Point(x=0, y=0), tx_power=9.0)


@pytest.fixture
def concrete_wall():
    """Concrete wall crossing the x axis at x=50."""
    return Wall(start=Point(x=50, y=-10), end=Point(x=50, y=10), material=WallMaterial.CONCRETE)


@pytest.fixture
def office_walls():
    """A handful of walls of mixed materials inside a 40x30 px floor plan."""
    return [
        Wall(start=Point(x=10.5, y=0), end=Point(x=10.5, y=20), material=WallMaterial.DRYWALL),
        Wall(start=Point(x=0, y=15.5), end=Point(x=30, y=15.5), material=WallMaterial.CONCRETE),
        Wall(start=Point(x=25.5, y=5), end=Point(x=35, y=28), material=WallMaterial.GLASS),
        Wall(start=Point(x=20.25, y=22), end=Point(x=39, y=22), material=WallMaterial.METAL),
    ]


@pytest.fixture
def office_aps():
    """Two enabled access points and one disabled one."""
    return [
        AccessPoint(location=Point(x=4.3, y=6.7), tx_power=20.0),
        AccessPoint(location=Point(x=31.2, y=12.9), tx_power=17.0),
        AccessPoint(location=Point(x=18.0, y=27.0), tx_power=30.0, is_enabled=False),
    ]
