"""The player: start position, rotation, movement and wall collisions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from raycube.parser import GameMap
from raycube.timing import lerp

BLOCK_SIZE = 64
PLAYER_SIZE = 8.0
MIN_DISTANCE = 2.0
MOVE_SPEED = 3.0
ROTATE_SPEED = 0.05

TWO_PI = 2 * math.pi

START_ANGLES = {
    "N": math.pi / 2,
    "S": 3 * math.pi / 2,
    "E": 0.0,
    "W": math.pi,
}


def collision_check(px: float, py: float, game_map: GameMap) -> bool:
    """True when the world point lies in a wall or outside the map."""
    x = int(px / BLOCK_SIZE)
    y = int(py / BLOCK_SIZE)
    if x < 0 or y < 0 or y >= game_map.height or x >= game_map.width:
        return True
    return game_map.cell(x, y) == "1"


def is_collision(x: float, y: float, game_map: GameMap) -> bool:
    """True when any corner of the player's box around ``(x, y)`` hits."""
    reach = PLAYER_SIZE + MIN_DISTANCE
    return any(
        collision_check(x + sx * reach, y + sy * reach, game_map)
        for sx, sy in ((-1, -1), (1, -1), (-1, 1), (1, 1))
    )


def _wrap_angle(angle: float) -> float:
    if angle < 0:
        return angle + TWO_PI
    if angle >= TWO_PI:
        return angle - TWO_PI
    return angle


@dataclass
class Player:
    """Position in world units, view angle and the current input state."""

    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0
    dx: float = 1.0
    dy: float = 0.0
    game_map: Optional[GameMap] = None
    move_up: bool = False
    move_down: bool = False
    move_left: bool = False
    move_right: bool = False
    rotate_left: bool = False
    rotate_right: bool = False
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    acceleration: float = 0.8
    deceleration: float = 12.0
    max_speed: float = MOVE_SPEED * 20.0

    @classmethod
    def from_map(cls, game_map: GameMap) -> "Player":
        """Place the player at the centre of the map's start cell."""
        player = cls(
            x=(game_map.player_x + 0.5) * BLOCK_SIZE,
            y=(game_map.player_y + 0.5) * BLOCK_SIZE,
            angle=START_ANGLES.get(game_map.player_dir, 0.0),
            game_map=game_map,
        )
        player.update_direction()
        return player

    def _collides(self, x: float, y: float) -> bool:
        if self.game_map is None:
            raise ValueError("Player has no map to collide with")
        return is_collision(x, y, self.game_map)

    def update_direction(self) -> None:
        """Recompute the unit direction from the angle."""
        self.dx = math.cos(self.angle)
        self.dy = math.sin(self.angle)

    def rotate(self) -> None:
        """Apply the held rotation keys to the angle."""
        if self.rotate_left:
            self.angle -= ROTATE_SPEED
        if self.rotate_right:
            self.angle += ROTATE_SPEED
        self.angle = _wrap_angle(self.angle)

    def turn(self, delta: float) -> None:
        """Turn by ``delta`` radians and update the direction."""
        self.angle = _wrap_angle(self.angle + delta)
        self.update_direction()

    def _step(self, new_x: float, new_y: float) -> None:
        if not self._collides(new_x, new_y):
            self.x, self.y = new_x, new_y
            return
        if not self._collides(new_x, self.y):
            self.x = new_x
        if not self._collides(self.x, new_y):
            self.y = new_y

    def move(self) -> None:
        """Rotate and take one fixed-size step per held movement key.

        A blocked step slides along the wall on whichever axis is free.
        """
        self.update_direction()
        dx, dy = self.dx, self.dy
        self.rotate()
        steps = (
            (self.move_up, dx, dy),
            (self.move_down, -dx, -dy),
            (self.move_left, -dy, dx),
            (self.move_right, dy, -dx),
        )
        for held, ox, oy in steps:
            if held:
                self._step(self.x + ox * MOVE_SPEED, self.y + oy * MOVE_SPEED)

    def swept_collision(self, new_x: float, new_y: float) -> bool:
        """True when the path to ``(new_x, new_y)`` hits a wall."""
        steps = 10
        step_x = (new_x - self.x) / steps
        step_y = (new_y - self.y) / steps
        if any(
            self._collides(self.x + step_x * i, self.y + step_y * i)
            for i in range(steps)
        ):
            return True
        return self._collides(new_x, new_y)

    def _apply_velocity(self, delta_time: float) -> None:
        new_x = self.x + self.velocity_x * delta_time
        new_y = self.y + self.velocity_y * delta_time
        if not self.swept_collision(new_x, new_y):
            self.x, self.y = new_x, new_y
        elif not self.swept_collision(new_x, self.y):
            self.x = new_x
            self.velocity_y = 0.0
        elif not self.swept_collision(self.x, new_y):
            self.y = new_y
            self.velocity_x = 0.0
        else:
            self.velocity_x = self.velocity_y = 0.0

    def smooth_move(self, delta_time: float) -> None:
        """Ease the velocity toward the held direction and move by it."""
        self.rotate()
        self.update_direction()
        target_x = target_y = 0.0
        speed = self.max_speed
        if self.move_up:
            target_x, target_y = self.dx * speed, self.dy * speed
        if self.move_down:
            target_x, target_y = -self.dx * speed, -self.dy * speed
        if self.move_left:
            target_x, target_y = -self.dy * speed, self.dx * speed
        if self.move_right:
            target_x, target_y = self.dy * speed, -self.dx * speed
        if target_x != 0 or target_y != 0:
            rate = self.acceleration
        else:
            rate = self.deceleration
        self.velocity_x = lerp(self.velocity_x, target_x, rate * delta_time)
        self.velocity_y = lerp(self.velocity_y, target_y, rate * delta_time)
        if abs(self.velocity_x) > 0.01 or abs(self.velocity_y) > 0.01:
            self._apply_velocity(delta_time)