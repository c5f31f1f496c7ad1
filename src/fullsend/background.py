"""
background.py: Cosmetic star field and nebula drift.
"""

from .constants import BACKGROUND_STAGE_SCORE, NEBULA_COUNT, STAR_COUNT
from .data_models import Nebula, Star
from .world import World


def stage_for_score(score: int) -> int:
    return score // BACKGROUND_STAGE_SCORE


def generate_background(world: World):
    """Rolls a fresh star field and nebula set."""
    rng = world.rng
    world.stars = [
        Star(
            x=rng.random() * world.width,
            y=rng.random() * world.height,
            speed=rng.random() * 0.8 + 0.5,
            size=rng.random() * 3 + 1,
        )
        for _ in range(STAR_COUNT)
    ]
    world.nebulas = [
        Nebula(
            x=rng.random() * world.width,
            y=rng.random() * world.height,
            size=rng.random() * 120 + 60,
            hue=rng.random() * 360,
        )
        for _ in range(NEBULA_COUNT)
    ]


def step_background(world: World):
    """Drifts stars and nebulas left, wrapping them at the left edge."""
    stage = stage_for_score(world.progression.score)
    star_scale = 1 + stage * 0.1

    for star in world.stars:
        star.x -= star.speed * star_scale
        if star.x < 0:
            star.x = world.width

    nebula_speed = world.current_speed * 0.5
    for nebula in world.nebulas:
        nebula.x -= nebula_speed
        if nebula.x + nebula.size < 0:
            nebula.x = world.width + nebula.size
            nebula.y = world.rng.random() * world.height
            nebula.hue = world.rng.random() * 360
