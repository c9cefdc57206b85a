#!/usr/bin/env python3
"""
Dynamic Window Approach (DWA) Simulation

Main entry point for DWA local planning simulation with a differential drive robot.

This simulation demonstrates:
- Dynamic Window Approach for local path planning
- Differential drive kinematics
- Static circular obstacles with a randomly chosen target
- Real-time trajectory visualization
- Optional GIF recording

Usage:
    dwa-sim [--config path/to/config.yaml] [--seed N] [--headless --ticks N]
"""

import argparse
import logging
import random
import sys

from .config_loader import (DEFAULT_CONFIG, load_config, get_robot_params,
                            get_planning_params, get_environment_params,
                            get_visualization_params, get_weights)
from .environment import ObstacleField
from .robot import DifferentialDriveRobot
from .simulation import Simulation


def build_simulation(config, seed=None) -> Simulation:
    """Create robot, obstacle field and planner from a loaded configuration."""
    robot_params = get_robot_params(config)
    planning_params = get_planning_params(config)
    env_params = get_environment_params(config)

    if seed is None:
        seed = env_params['seed']
    rng = random.Random(seed)

    robot = DifferentialDriveRobot(
        radius=robot_params['radius'],
        max_velocity=robot_params['max_velocity'],
        max_acceleration=robot_params['max_acceleration'],
        start_pose=robot_params['start_pose'],
    )

    field = ObstacleField.generate(
        count=env_params['num_obstacles'],
        radius=env_params['obstacle_radius'],
        bounds=env_params['playfield'],
        rng=rng,
    )

    return Simulation(
        robot=robot,
        field=field,
        weights=get_weights(config),
        dt=planning_params['timestep'],
        steps_ahead=planning_params['steps_ahead'],
    )


def run_windowed(sim: Simulation, config):
    """Run the simulation with the pygame window until it is closed."""
    # pygame is only needed here
    from .visualizer import Visualizer

    vis_params = get_visualization_params(config)
    visualizer = Visualizer(
        width=vis_params['width'],
        height=vis_params['height'],
        scale=vis_params['scale'],
        record_gif=vis_params['record_gif'],
        gif_duration=vis_params['gif_duration'],
        frame_skip=vis_params['frame_skip'],
        gif_filename=vis_params['gif_filename'],
    )
    visualizer.start_recording()

    print("\nSimulation running... (Close window to exit)")

    try:
        while visualizer.handle_events():
            sim.tick()
            visualizer.render(sim.robot, sim.field, sim.planner.get_visualization_data())

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")

    finally:
        visualizer.cleanup()


def main(argv=None):
    """Main simulation loop."""
    parser = argparse.ArgumentParser(description='Dynamic Window Approach Simulation')
    parser.add_argument('--config', type=str, default=DEFAULT_CONFIG,
                        help='Path to configuration file')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for obstacle placement and target choice')
    parser.add_argument('--headless', action='store_true',
                        help='Run without a window')
    parser.add_argument('--ticks', type=int, default=1000,
                        help='Number of ticks to run in headless mode')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    print(f"Loading configuration from: {args.config}")
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}")
        sys.exit(1)

    sim = build_simulation(config, seed=args.seed)

    print("\n=== Dynamic Window Approach Simulation ===")
    print(f"Robot radius: {sim.robot.radius}")
    print(f"Max velocity: {sim.robot.max_velocity}")
    print(f"Planning horizon: {sim.dt * sim.steps_ahead} s")
    print(f"Number of obstacles: {len(sim.field)}")
    print(f"Target obstacle: {sim.field.target_index}")
    print("==========================================\n")

    if args.headless:
        sim.run(args.ticks)
        x, y, theta = sim.robot.get_pose()
        print(f"Ran {sim.ticks} ticks, reached {sim.targets_reached} targets, "
              f"final pose ({x:.2f}, {y:.2f}, {theta:.3f})")
    else:
        run_windowed(sim, config)

    print("Simulation ended.")


if __name__ == "__main__":
    main()
