"""Shared fixtures for intersection tests."""

import pytest

from junction_mesher.generators.intersection.intersection_model import (
    IntersectionParameters, build_model,
)
from junction_mesher.generators.profiles.geometry_config import IntersectionGeometryConfig

SITE = 12.0
TOL = 1e-4


def make_params(north=False, east=False, south=False, west=False,
                size=(SITE, SITE), corner_size=3.0, depth=3.0, road_height=0.0):
    return IntersectionParameters(
        size_x=size[0],
        size_z=size[1],
        road_height=road_height,
        connect_north=north,
        connect_east=east,
        connect_south=south,
        connect_west=west,
        geometry=IntersectionGeometryConfig.uniform(corner_size=corner_size,
                                                    footpath_depth=depth),
    )


@pytest.fixture
def plaza_params():
    return make_params()


@pytest.fixture
def cross_params():
    return make_params(north=True, east=True, south=True, west=True)


@pytest.fixture
def plaza_model(plaza_params):
    return build_model(plaza_params)


@pytest.fixture
def cross_model(cross_params):
    return build_model(cross_params)


def close(a, b, tol=TOL):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


def contains_point(points, p, tol=TOL):
    return any(close(q, p, tol) for q in points)
