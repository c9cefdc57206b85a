"""Differential drive kinematics and pose history tests."""

import math

import pytest

from diffdrive_dwa.environment import Obstacle, ObstacleField
from diffdrive_dwa.geometry import Point, Pose
from diffdrive_dwa.robot import (HISTORY_CAPACITY, Arc, DifferentialDriveRobot,
                                 Rotation, Translation, round_velocity)


class TestStraightMotion:
    @pytest.mark.parametrize("velocity", [0.5, 7.0, -3.25])
    @pytest.mark.parametrize("heading", [0.0, 0.75, -2.0, 10.0])
    def test_translates_along_heading(self, velocity, heading):
        robot = DifferentialDriveRobot(5.0, 20.0, 5.0, Pose.from_xy(1.0, -2.0, heading))

        new_pose, motion = robot.predict_position(velocity, velocity, 0.5)

        assert new_pose.x == pytest.approx(1.0 + velocity * 0.5 * math.cos(heading))
        assert new_pose.y == pytest.approx(-2.0 + velocity * 0.5 * math.sin(heading))
        assert new_pose.orientation == heading
        assert isinstance(motion, Translation)
        assert motion.distance == pytest.approx(velocity * 0.5)

    def test_rounding_makes_near_equal_velocities_straight(self, robot):
        new_pose, motion = robot.predict_position(1.0001, 1.0004, 2.0)

        assert isinstance(motion, Translation)
        assert motion.distance == pytest.approx(2.0)
        assert new_pose.orientation == 0.0

    @pytest.mark.parametrize("left, right, expected", [
        (1.0005, 1.001, 1.001),
        (1.0625, 1.063, 1.063),
    ])
    def test_halfway_velocities_round_away_from_zero(self, robot, left, right, expected):
        new_pose, motion = robot.predict_position(left, right, 1.0)

        assert isinstance(motion, Translation)
        assert motion.distance == pytest.approx(expected)
        assert new_pose.x == pytest.approx(expected)
        assert new_pose.orientation == 0.0

    def test_zero_velocity_does_not_move(self, robot, origin_pose):
        first = robot.integrate(0.0, 0.0, 1.0)
        robot.advance(first)
        second = robot.integrate(0.0, 0.0, 1.0)

        assert first == origin_pose
        assert second == first


class TestRotation:
    @pytest.mark.parametrize("velocity", [5.0, -2.5, 0.125])
    def test_rotates_in_place(self, robot, velocity):
        new_pose, motion = robot.predict_position(velocity, -velocity, 1.0)

        assert new_pose.position == robot.pose.position
        assert new_pose.orientation == pytest.approx(2 * velocity / (2 * robot.radius))
        assert motion == Rotation(0.0)

    def test_heading_accumulates_without_wrapping(self, robot):
        for _ in range(10):
            robot.advance(robot.integrate(5.0, -5.0, 1.0))

        assert robot.pose.orientation == pytest.approx(10.0)


class TestArcMotion:
    def test_left_turn(self, robot):
        new_pose, motion = robot.predict_position(0.0, 10.0, 1.0)

        # r = 5 * 10 / 10, d_theta = 10 / 10
        assert new_pose.x == pytest.approx(5.0 * math.sin(1.0))
        assert new_pose.y == pytest.approx(5.0 * (1.0 - math.cos(1.0)))
        assert new_pose.orientation == pytest.approx(1.0)
        assert isinstance(motion, Arc)
        assert motion.radius == pytest.approx(5.0)
        assert motion.start_angle == pytest.approx(-math.pi / 2)
        assert motion.stop_angle == pytest.approx(-math.pi / 2 + 1.0)

    def test_negative_radius_keeps_start_angle(self, robot):
        _, motion = robot.predict_position(-5.0, 0.0, 1.0)

        assert motion.radius == pytest.approx(-5.0)
        assert motion.start_angle == pytest.approx(math.pi / 2)
        assert motion.stop_angle == pytest.approx(math.pi / 2 + 0.5)

    def test_stays_on_turning_circle(self):
        start = Pose.from_xy(3.0, 4.0, 0.3)
        robot = DifferentialDriveRobot(5.0, 20.0, 5.0, start)

        new_pose, motion = robot.predict_position(4.0, 12.0, 0.7)

        cx = start.x - motion.radius * math.sin(start.orientation)
        cy = start.y + motion.radius * math.cos(start.orientation)
        assert math.hypot(new_pose.x - cx, new_pose.y - cy) == pytest.approx(abs(motion.radius))

    def test_predict_does_not_change_state(self, robot):
        before = robot.pose
        robot.predict_position(3.0, 9.0, 1.0)

        assert robot.pose == before
        assert len(robot.location_history) == 0


class TestHistory:
    def test_advance_pushes_previous_pose(self, robot, origin_pose):
        new_pose = Pose.from_xy(1.0, 1.0, 0.0)
        robot.advance(new_pose)

        assert list(robot.location_history) == [origin_pose]
        assert robot.pose == new_pose

    def test_evicts_oldest_beyond_capacity(self, robot):
        for i in range(1, HISTORY_CAPACITY + 2):
            robot.advance(Pose.from_xy(float(i), 0.0, 0.0))

        history = list(robot.location_history)
        assert len(history) == 300
        # The start pose (x = 0) was the oldest of the 301 pushed entries
        assert history[0].x == 1.0
        assert history[-1].x == 300.0
        assert robot.pose.x == 301.0


class TestArrival:
    def test_triggers_inside_combined_radius(self, fixed_rng):
        robot = DifferentialDriveRobot(5.0, 20.0, 5.0, Pose.from_xy(0.0, 0.0))
        field = ObstacleField([Obstacle(Point(8.0, 0.0), 4.0),
                               Obstacle(Point(50.0, 50.0), 4.0)],
                              target_index=0, rng=fixed_rng)

        assert robot.check_arrival(field) is True
        assert fixed_rng.calls == 1
        assert field.target_index == 1

    def test_touching_exactly_is_not_arrival(self, fixed_rng):
        robot = DifferentialDriveRobot(5.0, 20.0, 5.0, Pose.from_xy(0.0, 0.0))
        field = ObstacleField([Obstacle(Point(9.0, 0.0), 4.0),
                               Obstacle(Point(50.0, 50.0), 4.0)],
                              target_index=0, rng=fixed_rng)

        assert robot.check_arrival(field) is False
        assert fixed_rng.calls == 0
        assert field.target_index == 0

    def test_wheel_positions(self, robot):
        left, right = robot.wheel_positions()

        assert (left.x, left.y) == pytest.approx((0.0, 5.0))
        assert (right.x, right.y) == pytest.approx((0.0, -5.0))


class TestRoundVelocity:
    @pytest.mark.parametrize("value, expected", [
        (1.0625, 1.063),
        (-1.0625, -1.063),
        (2.5, 2.5),
        (0.0004, 0.0),
        (-0.0004, 0.0),
        (7.1234, 7.123),
    ])
    def test_three_decimals_half_away_from_zero(self, value, expected):
        assert round_velocity(value) == pytest.approx(expected)

    def test_opposite_halfway_velocities_rotate(self, robot):
        new_pose, motion = robot.predict_position(1.0625, -1.063, 1.0)

        assert isinstance(motion, Rotation)
        assert new_pose.position == robot.pose.position
        assert new_pose.orientation == pytest.approx(2 * 1.063 / (2 * robot.radius))
