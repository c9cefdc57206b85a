"""
Environment and Obstacle Management

This module holds the circular obstacles of the playfield. One of them is
the active target the robot drives towards; when it is reached a new one is
drawn at random.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .geometry import Point, Pose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Obstacle:
    """Circular obstacle."""

    center: Point
    radius: float

    def distance_to(self, point: Point) -> float:
        """Distance from the obstacle centre to a point."""
        return self.center.distance_to(point)


class ObstacleField:
    """Fixed set of obstacles with one active target."""

    def __init__(self, obstacles: Sequence[Obstacle],
                 target_index: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the field.

        Args:
            obstacles: Obstacles in scan order; the set is fixed afterwards
            target_index: Index of the initial target (random if None)
            rng: Random source for target selection (module-level random if None)

        Raises:
            ValueError: If there are no obstacles or target_index is out of range
        """
        if not obstacles:
            raise ValueError("Obstacle field needs at least one obstacle")

        self._obstacles: Tuple[Obstacle, ...] = tuple(obstacles)
        self._rng = rng if rng is not None else random.Random()

        if target_index is None:
            target_index = self._rng.randrange(len(self._obstacles))
        elif not 0 <= target_index < len(self._obstacles):
            raise ValueError(f"Target index {target_index} out of range "
                             f"for {len(self._obstacles)} obstacles")
        self._target_index = target_index

    @classmethod
    def generate(cls, count: int, radius: float,
                 bounds: Tuple[float, float, float, float],
                 rng: Optional[random.Random] = None) -> "ObstacleField":
        """
        Generate a field of equally sized obstacles at random positions.

        Obstacles are kept fully inside the playfield.

        Args:
            count: Number of obstacles
            radius: Radius of every obstacle
            bounds: (x_min, y_min, x_max, y_max) of the playfield
            rng: Random source (a fresh one if None)

        Raises:
            ValueError: If count is not positive
        """
        if count <= 0:
            raise ValueError(f"Obstacle count must be positive, got {count}")

        rng = rng if rng is not None else random.Random()
        x_min, y_min, x_max, y_max = bounds

        obstacles = []
        for _ in range(count):
            x = rng.uniform(x_min + radius, x_max - radius)
            y = rng.uniform(y_min + radius, y_max - radius)
            obstacles.append(Obstacle(Point(x, y), radius))

        return cls(obstacles, rng=rng)

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        return self._obstacles

    @property
    def target_index(self) -> int:
        return self._target_index

    @property
    def target(self) -> Obstacle:
        """The active target obstacle."""
        return self._obstacles[self._target_index]

    def __len__(self) -> int:
        return len(self._obstacles)

    def closest_obstacle_distance(self, pose: Pose) -> float:
        """
        Distance from a pose to the nearest obstacle centre.

        Only the active target and the obstacles after it in field order are
        scanned; obstacles before the target index are ignored.

        Args:
            pose: Pose to measure from

        Returns:
            Smallest centre distance among the scanned obstacles
        """
        closest = float("inf")
        for obstacle in self.obstacles_in_play():
            distance = obstacle.distance_to(pose.position)
            if distance < closest:
                closest = distance
        return closest

    def pick_new_target(self):
        """Choose a new active target uniformly over all obstacles (repeats allowed)."""
        self._target_index = self._rng.randrange(len(self._obstacles))
        logger.info("Random target index set: %d", self._target_index)

    def obstacles_in_play(self) -> List[Obstacle]:
        """The active target and the obstacles after it, the ones the planner scans."""
        return list(self._obstacles[self._target_index:])

    def __repr__(self) -> str:
        return (f"ObstacleField(obstacles={len(self._obstacles)}, "
                f"target_index={self._target_index})")
