"""YAML configuration loader tests."""

import math

import pytest

from diffdrive_dwa.config_loader import (get_environment_params, get_planning_params,
                                         get_robot_params, get_visualization_params,
                                         get_weights, load_config)
from diffdrive_dwa.dwa_planner import DwaWeights


class TestLoadConfig:
    def test_bundled_config(self):
        config = load_config("configs/dwa.yaml")

        robot = get_robot_params(config)
        assert robot['radius'] == 20.0
        assert robot['max_velocity'] == 100.0
        assert robot['max_acceleration'] == 5.0
        assert robot['start_pose'].orientation == pytest.approx(math.pi / 2)

        planning = get_planning_params(config)
        assert planning['timestep'] == 0.01
        assert planning['steps_ahead'] == 10

        env = get_environment_params(config)
        assert env['playfield'] == (-600.0, -375.0, 600.0, 375.0)
        assert env['num_obstacles'] == 20
        assert env['seed'] is None

        vis = get_visualization_params(config)
        assert (vis['width'], vis['height']) == (1200, 750)
        assert vis['record_gif'] is False

    def test_default_found_outside_project(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert get_robot_params(config)['radius'] == 20.0

    def test_working_directory_takes_precedence(self, tmp_path, monkeypatch):
        (tmp_path / "configs").mkdir()
        (tmp_path / "configs" / "dwa.yaml").write_text(
            "robot: {radius: 3.0, max_velocity: 1.0, max_acceleration: 1.0}\n"
            "planning: {}\nenvironment: {}\nvisualization: {}\n")
        monkeypatch.chdir(tmp_path)

        assert get_robot_params(load_config())['radius'] == 3.0

    def test_weights(self):
        weights = get_weights(load_config())

        assert weights == DwaWeights(obstacle_weight=1000.0, safe_distance=50.0, fwd_weight=100.0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("robot: [unclosed\n")

        with pytest.raises(ValueError):
            load_config(str(path))

    def test_missing_section(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("robot: {}\nplanning: {}\nenvironment: {}\n")

        with pytest.raises(ValueError, match="visualization"):
            load_config(str(path))

    def test_start_pose_defaults(self):
        config = {'robot': {'radius': 1.0, 'max_velocity': 2.0, 'max_acceleration': 3.0}}

        start = get_robot_params(config)['start_pose']
        assert (start.x, start.y, start.orientation) == (0.0, 0.0, 0.0)
