"""
Dynamic Window Approach (DWA) Local Planner

The DWA algorithm samples wheel velocity pairs (vL, vR) within the dynamic
window (velocities reachable in the next time step) and scores each
trajectory based on:
1. Forward progress toward the active target
2. Obstacle clearance

The trajectory with highest score is selected for execution.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .environment import ObstacleField
from .geometry import Pose
from .robot import DifferentialDriveRobot, Motion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DwaWeights:
    """
    Cost function parameters.

    Attributes:
        obstacle_weight: Penalty per unit of clearance missing below safe_distance
        safe_distance: Clearance below which the obstacle penalty applies
        fwd_weight: Reward per unit of progress toward the target
    """

    obstacle_weight: float
    safe_distance: float
    fwd_weight: float


class DWAPlanner:
    """Dynamic Window Approach local path planner."""

    def __init__(self, robot: DifferentialDriveRobot):
        """
        Initialize DWA planner.

        Args:
            robot: Robot whose pose and limits are used for planning
        """
        self.robot = robot

        # Motions of the candidates evaluated by the last plan() call
        self.paths_to_draw: List[Motion] = []

    def plan(self, left_v: float, right_v: float, dt: float, field: ObstacleField,
             weights: DwaWeights, steps_ahead: int) -> Tuple[float, float]:
        """
        Execute one DWA planning cycle.

        Algorithm:
        1. Build three candidates per wheel: v - a*dt, v, v + a*dt
        2. Drop pairs where either wheel exceeds the speed limit
        3. For each remaining pair:
           - Predict the pose after dt * steps_ahead
           - Score progress toward the target minus the obstacle penalty
        4. Keep the first pair with the strictly highest score

        Args:
            left_v: Previous left wheel velocity
            right_v: Previous right wheel velocity
            dt: Control timestep
            field: Obstacle field with the active target
            weights: Cost function parameters
            steps_ahead: Number of timesteps to look ahead

        Returns:
            Tuple of (vL_chosen, vR_chosen); (0.0, 0.0) if every pair exceeds the
            speed limit
        """
        self.paths_to_draw.clear()

        dv = self.robot.max_acceleration * dt
        vL_possible_array = (left_v - dv, left_v, left_v + dv)
        vR_possible_array = (right_v - dv, right_v, right_v + dv)
        tau = dt * steps_ahead
        max_v = self.robot.max_velocity

        best_benefit = float("-inf")
        vL_chosen = 0.0
        vR_chosen = 0.0

        for vL_possible in vL_possible_array:
            for vR_possible in vR_possible_array:
                if not (-max_v <= vL_possible <= max_v and -max_v <= vR_possible <= max_v):
                    continue

                new_pose, motion = self.robot.predict_position(vL_possible, vR_possible, tau)
                self.paths_to_draw.append(motion)

                benefit = self.evaluate_trajectory(new_pose, field, weights)
                if benefit > best_benefit:
                    best_benefit = benefit
                    vL_chosen = vL_possible
                    vR_chosen = vR_possible

        logger.debug("Evaluated %d candidates, chose (%.3f, %.3f)",
                     len(self.paths_to_draw), vL_chosen, vR_chosen)
        return (vL_chosen, vR_chosen)

    def evaluate_trajectory(self, new_pose: Pose, field: ObstacleField,
                            weights: DwaWeights) -> float:
        """
        Evaluate trajectory benefit.

        Scoring function:
        benefit = fwd_weight * (progress toward target) - obstacle penalty

        Args:
            new_pose: Predicted pose at the end of the look-ahead horizon
            field: Obstacle field with the active target
            weights: Cost function parameters

        Returns:
            Trajectory benefit score (higher is better)
        """
        target = field.target.center

        # 1. Forward progress toward goal
        previous_target_distance = self.robot.pose.position.distance_to(target)
        new_target_distance = new_pose.position.distance_to(target)
        distance_benefit = weights.fwd_weight * (previous_target_distance - new_target_distance)

        # 2. Obstacle clearance
        distance_to_obstacle = field.closest_obstacle_distance(new_pose)
        if distance_to_obstacle < weights.safe_distance:
            obstacle_cost = weights.obstacle_weight * (weights.safe_distance - distance_to_obstacle)
        else:
            obstacle_cost = 0.0

        return distance_benefit - obstacle_cost

    def get_visualization_data(self) -> List[Motion]:
        """Candidate motions from the last planning cycle."""
        return list(self.paths_to_draw)
