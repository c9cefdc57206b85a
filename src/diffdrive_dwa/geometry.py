"""
Geometric primitives for the planar simulation.

This module provides the two value types every other module works with:
a 2D point and a pose (point plus heading). Both are immutable, so a pose
can be handed to the renderer or stored in the robot's history without
copying.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """
    Position in the plane.

    Attributes:
        x: X coordinate (world units)
        y: Y coordinate (world units)
    """

    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        """
        Euclidean distance to another point.

        Example:
            >>> Point(0.0, 0.0).distance_to(Point(3.0, 4.0))
            5.0
        """
        return math.hypot(self.x - other.x, self.y - other.y)

    def angle_to(self, other: "Point") -> float:
        """
        Bearing from this point to another point.

        Returns:
            Angle in radians in (-pi, pi], measured from the +x axis
        """
        return math.atan2(other.y - self.y, other.x - self.x)


@dataclass(frozen=True)
class Pose:
    """
    Full state of the robot at an instant.

    The heading is left unbounded; it accumulates across rotations and is
    never wrapped into [-pi, pi).

    Attributes:
        position: Location of the robot centre
        orientation: Heading in radians
    """

    position: Point
    orientation: float = 0.0

    @classmethod
    def from_xy(cls, x: float, y: float, orientation: float = 0.0) -> "Pose":
        """Build a pose from bare coordinates."""
        return cls(Point(x, y), orientation)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def distance_to(self, other: "Pose") -> float:
        """Euclidean distance between the two positions."""
        return self.position.distance_to(other.position)

    def angle_to(self, other: "Pose") -> float:
        """Bearing from this position to the other pose's position."""
        return self.position.angle_to(other.position)
