"""
spawner.py: Periodic generator of pipe pairs and their collectible.
"""

from dataclasses import dataclass

from .constants import (
    HEART_CHANCE, PIPE_MAX_HEIGHT_RATIO, PIPE_MIN_HEIGHT_RATIO, PIPE_SPAWN_INTERVAL_FRAMES,
    PIPE_WIDTH, POWER_UP_CHANCE, RINGS_PER_PIPE
)
from .data_models import Collectible, CollectibleKind, Obstacle, Ring
from .world import World


def roll_collectible_kind(roll: float) -> CollectibleKind:
    if roll < POWER_UP_CHANCE:
        return CollectibleKind.POWER_UP
    if roll < HEART_CHANCE:
        return CollectibleKind.HEART
    return CollectibleKind.COIN


@dataclass
class Spawner:
    """Emits one pipe pair plus one collectible every `interval` frames."""
    interval: int = PIPE_SPAWN_INTERVAL_FRAMES

    def maybe_spawn(self, world: World) -> bool:
        if world.frame % self.interval != 0:
            return False
        self._spawn_pair(world)
        return True

    def _make_obstacle(self, world: World, height: float, is_top: bool) -> Obstacle:
        rng = world.rng
        rings = [
            Ring(y=rng.random() * height, speed=(rng.random() - 0.5) * 0.5)
            for _ in range(RINGS_PER_PIPE)
        ]
        return Obstacle(x=float(world.width), height=height, is_top=is_top, rings=rings)

    def _spawn_pair(self, world: World):
        """Generates a new pipe pair off-screen to the right."""
        rng = world.rng
        gap = world.current_gap
        min_height = world.height * PIPE_MIN_HEIGHT_RATIO
        max_height = world.height * PIPE_MAX_HEIGHT_RATIO
        pipe_height = rng.random() * (max_height - min_height) + min_height

        world.obstacles.append(self._make_obstacle(world, pipe_height, True))
        world.obstacles.append(
            self._make_obstacle(world, world.height - pipe_height - gap, False))

        kind = roll_collectible_kind(rng.random())
        world.collectibles.append(Collectible(
            x=world.width + PIPE_WIDTH / 2,
            y=pipe_height + gap / 2,
            kind=kind,
        ))
