"""
Control tick composition.

One tick runs the planner, moves the robot with the chosen command, and
checks whether the active target was reached.
"""

import logging
from typing import Tuple

from .dwa_planner import DWAPlanner, DwaWeights
from .environment import ObstacleField
from .robot import DifferentialDriveRobot

logger = logging.getLogger(__name__)


class Simulation:
    """Tick-driven DWA simulation of one robot in one obstacle field."""

    def __init__(self, robot: DifferentialDriveRobot, field: ObstacleField,
                 weights: DwaWeights, dt: float, steps_ahead: int):
        self.robot = robot
        self.field = field
        self.planner = DWAPlanner(robot)
        self.weights = weights
        self.dt = dt
        self.steps_ahead = steps_ahead

        self.command: Tuple[float, float] = (0.0, 0.0)
        self.ticks = 0
        self.targets_reached = 0

    def tick(self) -> Tuple[float, float]:
        """
        Advance the simulation by one control step.

        Returns:
            The wheel command (vL, vR) applied during this step
        """
        left_v, right_v = self.planner.plan(self.command[0], self.command[1], self.dt,
                                            self.field, self.weights, self.steps_ahead)
        self.command = (left_v, right_v)

        self.robot.advance(self.robot.integrate(left_v, right_v, self.dt))

        if self.robot.check_arrival(self.field):
            self.targets_reached += 1
            logger.info("Target reached (%d so far), new target %d",
                        self.targets_reached, self.field.target_index)

        self.ticks += 1
        return self.command

    def run(self, ticks: int):
        """Run a fixed number of ticks."""
        for _ in range(ticks):
            self.tick()
