"""
Robot Model and Kinematics

This module defines the differential drive robot model and its kinematic equations.
The robot body is a disc of radius R; the two wheels sit on its rim, so R is
also half the wheel track.

Kinematics:
- Straight motion: vL = vR
- Pure rotation: vL = -vR
- Arc motion: General case with signed turning radius r
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, Tuple, Union

from .environment import ObstacleField
from .geometry import Point, Pose

logger = logging.getLogger(__name__)

# Wheel velocities are rounded to this many decimals before the
# straight/rotation/arc branch is chosen.
VELOCITY_DECIMALS = 3

HISTORY_CAPACITY = 300


def round_velocity(v: float) -> float:
    """Round to VELOCITY_DECIMALS places, halves away from zero."""
    factor = 10.0 ** VELOCITY_DECIMALS
    scaled = v * factor
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / factor


@dataclass(frozen=True)
class Translation:
    """Straight-line motion; distance is signed (negative when reversing)."""

    distance: float


@dataclass(frozen=True)
class Rotation:
    """In-place rotation. The heading change itself is carried by the pose."""

    angle: float = 0.0


@dataclass(frozen=True)
class Arc:
    """
    Circular-arc motion.

    Attributes:
        radius: Signed turning radius; the sign gives the side of the turning centre
        start_angle: Sweep start angle (radians) seen from the turning centre
        stop_angle: Sweep end angle, start_angle + heading change
    """

    radius: float
    start_angle: float
    stop_angle: float


Motion = Union[Translation, Rotation, Arc]


class DifferentialDriveRobot:
    """Differential drive robot with kinematic motion model."""

    def __init__(self, radius: float, max_velocity: float, max_acceleration: float,
                 start_pose: Pose = Pose(Point(0.0, 0.0), 0.0)):
        """
        Initialize robot parameters.

        Args:
            radius: Robot radius, used for collision checks and as half the wheel track
            max_velocity: Maximum magnitude of either wheel velocity
            max_acceleration: Maximum change of wheel velocity per unit time
            start_pose: Initial pose
        """
        self.radius = radius
        self.max_velocity = max_velocity
        self.max_acceleration = max_acceleration

        # Current state
        self.pose = start_pose

        # Pose history for visualization, oldest first
        self.location_history: Deque[Pose] = deque(maxlen=HISTORY_CAPACITY)

    def predict_position(self, left_v: float, right_v: float,
                         dt: float) -> Tuple[Pose, Motion]:
        """
        Predict robot pose after time dt with given wheel velocities.

        Does not change the robot's state.

        Args:
            left_v: Left wheel velocity
            right_v: Right wheel velocity
            dt: Elapsed time

        Returns:
            Tuple of (new_pose, motion); motion describes the shape of the path
            and is only used for drawing
        """
        left_r = round_velocity(left_v)
        right_r = round_velocity(right_v)
        x, y, theta = self.pose.x, self.pose.y, self.pose.orientation

        # Straight motion: vL ≈ vR
        if left_r == right_r:
            distance = left_r * dt
            new_pose = Pose.from_xy(x + distance * math.cos(theta),
                                    y + distance * math.sin(theta),
                                    theta)
            return new_pose, Translation(distance)

        # Pure rotation: vL ≈ -vR
        if left_r == -right_r:
            new_theta = theta + (left_r - right_r) * dt / (2.0 * self.radius)
            return Pose(self.pose.position, new_theta), Rotation()

        # Arc motion around the instantaneous centre of curvature
        r = self.radius * (left_v + right_v) / (right_v - left_v)
        d_theta = (right_v - left_v) * dt / (2.0 * self.radius)

        new_pose = Pose.from_xy(x + r * (math.sin(theta + d_theta) - math.sin(theta)),
                                y - r * (math.cos(theta + d_theta) - math.cos(theta)),
                                theta + d_theta)

        start_angle = theta + math.pi / 2.0
        if r > 0:
            start_angle -= math.pi
        stop_angle = start_angle + d_theta

        return new_pose, Arc(r, start_angle, stop_angle)

    def integrate(self, left_v: float, right_v: float, dt: float) -> Pose:
        """Pose reached after dt with the given wheel velocities."""
        new_pose, _ = self.predict_position(left_v, right_v, dt)
        return new_pose

    def advance(self, new_pose: Pose):
        """
        Commit a new pose.

        The current pose goes to the back of the history first; once the
        history holds HISTORY_CAPACITY entries the oldest one is dropped.
        """
        self.location_history.append(self.pose)
        self.pose = new_pose

    def check_arrival(self, field: ObstacleField) -> bool:
        """
        Check whether the robot touches the active target.

        On arrival the field picks a new active target.

        Returns:
            True if the target was reached (and reselected)
        """
        target = field.target
        distance = self.pose.position.distance_to(target.center)
        if distance < self.radius + target.radius:
            logger.debug("Reached target at (%.2f, %.2f)", target.center.x, target.center.y)
            field.pick_new_target()
            return True
        return False

    def get_pose(self) -> Tuple[float, float, float]:
        """Get current robot pose as a bare tuple."""
        return (self.pose.x, self.pose.y, self.pose.orientation)

    def wheel_positions(self) -> Tuple[Point, Point]:
        """Left and right wheel contact points, for drawing."""
        x, y, theta = self.get_pose()
        left = Point(x - self.radius * math.sin(theta), y + self.radius * math.cos(theta))
        right = Point(x + self.radius * math.sin(theta), y - self.radius * math.cos(theta))
        return left, right
