"""
Pygame Visualization

This module handles all visualization including:
- Robot rendering with differential drive wheels
- Obstacle rendering (obstacles in play), active target highlighted
- Candidate trajectory visualization for DWA planning
- GIF recording for demonstrations
"""

import math
import os
import time
from typing import List, Optional, Tuple

import pygame
from PIL import Image

from .environment import ObstacleField
from .geometry import Pose
from .robot import Arc, DifferentialDriveRobot, Motion, Translation


def arc_bounds(pose: Pose, arc: Arc) -> Tuple[float, float, float, float, float]:
    """
    World-space geometry of an arc motion.

    The turning centre sits at distance |r| from the robot, perpendicular
    to its heading.

    Returns:
        Tuple of (cx, cy, abs_radius, start_angle, stop_angle) with
        start_angle <= stop_angle and start_angle >= 0 for pygame.draw.arc
    """
    x, y, theta = pose.x, pose.y, pose.orientation
    cx = x - arc.radius * math.sin(theta)
    cy = y + arc.radius * math.cos(theta)

    start_a, stop_a = sorted((arc.start_angle, arc.stop_angle))
    if start_a < 0:
        start_a += 2 * math.pi
        stop_a += 2 * math.pi

    return (cx, cy, abs(arc.radius), start_a, stop_a)


class Visualizer:
    """Pygame-based visualization for DWA simulation."""

    def __init__(self, width: int, height: int, scale: float,
                 record_gif: bool = False, gif_duration: float = 15.0,
                 frame_skip: int = 5, gif_filename: str = "outputs/simulation.gif"):
        """
        Initialize visualizer.

        Args:
            width: Screen width (pixels)
            height: Screen height (pixels)
            scale: Pixels per world unit
            record_gif: Whether to record simulation as GIF
            gif_duration: GIF recording duration (seconds)
            frame_skip: Only capture every Nth frame (reduces file size)
            gif_filename: Output path of the GIF
        """
        pygame.init()

        self.width = width
        self.height = height
        self.scale = scale
        self.u0 = width / 2  # Center X
        self.v0 = height / 2  # Center Y

        # Colors
        self.background = (255, 255, 255)
        self.trail = (200, 200, 200)
        self.robot_color = (255, 161, 0)
        self.wheel_color = (0, 121, 241)
        self.obstacle_color = (0, 82, 82)
        self.target_color = (154, 205, 50)
        self.path_color = (230, 41, 55)

        # Create screen
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Dynamic Window Approach - Differential Drive Robot")

        # GIF recording
        self.record_gif = record_gif
        self.gif_duration = gif_duration
        self.frame_skip = frame_skip
        self.gif_filename = gif_filename
        self.frames: List[Image.Image] = []
        self.recording = False
        self.start_time: Optional[float] = None
        self.frame_count = 0

    def world_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """
        Convert world coordinates to screen coordinates.

        Args:
            x: World x coordinate
            y: World y coordinate

        Returns:
            Tuple of (screen_x, screen_y) in pixels
        """
        u = int(self.u0 + self.scale * x)
        v = int(self.v0 - self.scale * y)
        return (u, v)

    def start_recording(self):
        """Start GIF recording."""
        if self.record_gif and not self.recording:
            self.recording = True
            self.start_time = time.time()
            print("Started recording GIF...")

    def render(self, robot: DifferentialDriveRobot, field: ObstacleField,
               paths: Optional[List[Motion]] = None):
        """
        Render complete scene.

        Args:
            robot: Robot instance
            field: Obstacle field
            paths: Candidate motions from the last planning cycle
        """
        self.screen.fill(self.background)

        # Robot location history (trail)
        for pose in robot.location_history:
            pygame.draw.circle(self.screen, self.trail, self.world_to_screen(pose.x, pose.y), 3)

        self._draw_robot(robot)

        if paths:
            self._draw_trajectories(robot.pose, paths)

        self._draw_obstacles(field)

        pygame.display.flip()

        if self.record_gif and self.recording:
            self._capture_frame()

    def _draw_robot(self, robot: DifferentialDriveRobot):
        """Draw robot body and its two wheels."""
        wheel_size = 4
        for wheel in robot.wheel_positions():
            pygame.draw.circle(self.screen, self.wheel_color,
                               self.world_to_screen(wheel.x, wheel.y), wheel_size)

        pygame.draw.circle(self.screen, self.robot_color,
                           self.world_to_screen(robot.pose.x, robot.pose.y),
                           max(1, int(self.scale * robot.radius)))

    def _draw_obstacles(self, field: ObstacleField):
        """
        Draw obstacles.

        Only obstacles from the target index onward are drawn, as those are
        the ones the planner avoids. The target is drawn on top.
        """
        for obstacle in field.obstacles_in_play():
            pygame.draw.circle(self.screen, self.obstacle_color,
                               self.world_to_screen(obstacle.center.x, obstacle.center.y),
                               max(1, int(self.scale * obstacle.radius)))

        target = field.target
        pygame.draw.circle(self.screen, self.target_color,
                           self.world_to_screen(target.center.x, target.center.y),
                           max(1, int(self.scale * target.radius)))

    def _draw_trajectories(self, pose: Pose, paths: List[Motion]):
        """
        Draw predicted trajectories from DWA planning.

        Translations are drawn as lines, arcs as circle arcs; rotations in
        place have no extent and are skipped.
        """
        for motion in paths:
            if isinstance(motion, Translation):
                end_x = pose.x + motion.distance * math.cos(pose.orientation)
                end_y = pose.y + motion.distance * math.sin(pose.orientation)
                pygame.draw.line(self.screen, self.path_color,
                                 self.world_to_screen(pose.x, pose.y),
                                 self.world_to_screen(end_x, end_y), 1)

            elif isinstance(motion, Arc):
                cx, cy, radius, start_a, stop_a = arc_bounds(pose, motion)

                tlx, tly = self.world_to_screen(cx - radius, cy + radius)
                size = int(self.scale * 2 * radius)

                # Only draw if the bounding box is usable
                if size > 1:
                    pygame.draw.arc(self.screen, self.path_color,
                                    (tlx, tly, size, size), start_a, stop_a, 1)

    def _capture_frame(self):
        """Capture current frame for GIF recording."""
        elapsed_time = time.time() - self.start_time

        if elapsed_time <= self.gif_duration:
            # Only capture every frame_skip frames
            self.frame_count += 1
            if self.frame_count % self.frame_skip == 0:
                # Scale down to 50% to reduce file size
                scaled_surface = pygame.transform.scale(
                    self.screen, (self.width // 2, self.height // 2)
                )

                frame_string = pygame.image.tostring(scaled_surface, 'RGB')
                frame_image = Image.frombytes('RGB',
                                              (self.width // 2, self.height // 2),
                                              frame_string)
                self.frames.append(frame_image)

                if len(self.frames) % 20 == 0:
                    print(f"Recording: {elapsed_time:.1f}/{self.gif_duration} seconds "
                          f"({len(self.frames)} frames)")
        else:
            self._save_gif()

    def _save_gif(self):
        """Save recorded frames as GIF."""
        self.recording = False
        self.record_gif = False
        if not self.frames:
            return

        print(f"Saving GIF with {len(self.frames)} frames... Please wait.")
        directory = os.path.dirname(self.gif_filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        try:
            self.frames[0].save(
                self.gif_filename,
                save_all=True,
                append_images=self.frames[1:],
                duration=int(self.frame_skip * 100 / 5),
                loop=0,
                optimize=False
            )
            print(f"GIF saved successfully as {self.gif_filename}")
        except OSError as e:
            print(f"Error saving GIF: {e}")
        finally:
            self.frames = []

    def handle_events(self) -> bool:
        """
        Handle pygame events.

        Returns:
            False if quit event received, True otherwise
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
        return True

    def cleanup(self):
        """Save any pending GIF and release pygame resources."""
        if self.recording:
            self._save_gif()
        pygame.quit()
