"""
diffdrive_dwa - Dynamic Window Approach local planner

A modular implementation of the Dynamic Window Approach for local path planning
with a differential drive robot among circular obstacles.

Modules:
    geometry: Point and pose value types
    robot: Differential drive robot kinematics and pose history
    environment: Obstacle field and active target
    dwa_planner: Dynamic Window Approach planning algorithm
    simulation: Per-tick composition of planning, motion and arrival check
    visualizer: Pygame visualization
    config_loader: YAML configuration management
"""

from .dwa_planner import DWAPlanner, DwaWeights
from .environment import Obstacle, ObstacleField
from .geometry import Point, Pose
from .robot import Arc, DifferentialDriveRobot, Motion, Rotation, Translation
from .simulation import Simulation

__version__ = "1.0.0"

__all__ = [
    "Arc",
    "DWAPlanner",
    "DifferentialDriveRobot",
    "DwaWeights",
    "Motion",
    "Obstacle",
    "ObstacleField",
    "Point",
    "Pose",
    "Rotation",
    "Simulation",
    "Translation",
]
