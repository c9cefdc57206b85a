"""Shared test fixtures."""

import random

import pytest

from diffdrive_dwa.dwa_planner import DWAPlanner, DwaWeights
from diffdrive_dwa.environment import Obstacle, ObstacleField
from diffdrive_dwa.geometry import Point, Pose
from diffdrive_dwa.robot import DifferentialDriveRobot


class FixedRng:
    """Stands in for random.Random; always picks the same index."""

    def __init__(self, index):
        self.index = index
        self.calls = 0

    def randrange(self, n):
        self.calls += 1
        return self.index % n


@pytest.fixture
def origin_pose():
    return Pose(Point(0.0, 0.0), 0.0)


@pytest.fixture
def robot(origin_pose):
    return DifferentialDriveRobot(
        radius=5.0,
        max_velocity=20.0,
        max_acceleration=5.0,
        start_pose=origin_pose,
    )


@pytest.fixture
def planner(robot):
    return DWAPlanner(robot)


@pytest.fixture
def far_target_field():
    return ObstacleField([Obstacle(Point(100.0, 0.0), 1.0)], target_index=0)


@pytest.fixture
def progress_only_weights():
    return DwaWeights(obstacle_weight=0.0, safe_distance=0.0, fwd_weight=1.0)


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def fixed_rng():
    return FixedRng(1)
