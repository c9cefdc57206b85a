"""
YAML Configuration Loader

Loads simulation parameters from YAML configuration files.
This allows easy experimentation without modifying code.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .dwa_planner import DwaWeights
from .geometry import Pose

DEFAULT_CONFIG = "configs/dwa.yaml"

REQUIRED_SECTIONS = ("robot", "planning", "environment", "visualization")

# Package directory; the default configs/dwa.yaml ships inside it
_PACKAGE_DIR = Path(__file__).resolve().parent


def load_config(config_path: str = DEFAULT_CONFIG) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Relative paths are tried against the working directory first, then
    against the installed package, so the bundled default is found from
    any working directory.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Dictionary containing all configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed or misses a section
    """
    path = Path(config_path)
    if not path.is_absolute() and not path.exists():
        path = _PACKAGE_DIR / path

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML configuration: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")

    # Validate required sections
    for section in REQUIRED_SECTIONS:
        if section not in config:
            raise ValueError(f"Missing required configuration section: {section}")

    return config


def get_robot_params(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract robot parameters from configuration.

    Args:
        config: Full configuration dictionary

    Returns:
        Dictionary of robot parameters, start pose as a Pose
    """
    robot = config['robot']
    start = robot.get('start', {})
    return {
        'radius': robot['radius'],
        'max_velocity': robot['max_velocity'],
        'max_acceleration': robot['max_acceleration'],
        'start_pose': Pose.from_xy(start.get('x', 0.0), start.get('y', 0.0),
                                   start.get('theta', 0.0)),
    }


def get_planning_params(config: Dict[str, Any]) -> Dict[str, Any]:
    """Extract planning parameters from configuration."""
    planning = config['planning']
    return {
        'timestep': planning['timestep'],
        'steps_ahead': planning['steps_ahead'],
        'fwd_weight': planning['fwd_weight'],
        'obstacle_weight': planning['obstacle_weight'],
        'safe_distance': planning['safe_distance'],
    }


def get_weights(config: Dict[str, Any]) -> DwaWeights:
    """Build the planner cost weights from the planning section."""
    planning = get_planning_params(config)
    return DwaWeights(
        obstacle_weight=planning['obstacle_weight'],
        safe_distance=planning['safe_distance'],
        fwd_weight=planning['fwd_weight'],
    )


def get_environment_params(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract environment parameters from configuration.

    Args:
        config: Full configuration dictionary

    Returns:
        Dictionary of environment parameters
    """
    env = config['environment']
    seed: Optional[int] = env.get('seed')
    return {
        'playfield': (
            env['playfield']['x_min'],
            env['playfield']['y_min'],
            env['playfield']['x_max'],
            env['playfield']['y_max']
        ),
        'num_obstacles': env['obstacles']['count'],
        'obstacle_radius': env['obstacles']['radius'],
        'seed': seed,
    }


def get_visualization_params(config: Dict[str, Any]) -> Dict[str, Any]:
    """Extract visualization parameters from configuration."""
    vis = config['visualization']
    return {
        'width': vis['width'],
        'height': vis['height'],
        'scale': vis['scale'],
        'record_gif': vis.get('record_gif', False),
        'gif_duration': vis.get('gif_duration', 15.0),
        'frame_skip': vis.get('frame_skip', 5),
        'gif_filename': vis.get('gif_filename', 'outputs/simulation.gif'),
    }
