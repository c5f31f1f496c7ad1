"""
effects.py: Capped particle spawning and particle kinematics.
"""

import colorsys

from .constants import MAX_PARTICLES, PARTICLE_SHRINK
from .data_models import Particle
from .world import World

# kind -> (life in frames, fixed colour or None for a random hue)
PARTICLE_KINDS = {
    "coin": (20, (255, 215, 0)),
    "heart": (20, (255, 68, 68)),
    "crash": (30, (255, 0, 0)),
    "victory": (50, None),
    "trail": (15, (255, 69, 0)),
}


def random_hue_color(rng, saturation: float = 1.0, lightness: float = 0.5) -> tuple[int, int, int]:
    r, g, b = colorsys.hls_to_rgb(rng.random(), lightness, saturation)
    return int(r * 255), int(g * 255), int(b * 255)


def spawn_particles(world: World, x: float, y: float, kind: str, count: int = 10) -> bool:
    """
    Adds a burst of particles. The whole request is dropped when it would
    push the live count past the cap; existing particles are never evicted.
    """
    if len(world.particles) + count > MAX_PARTICLES:
        return False

    rng = world.rng
    life, color = PARTICLE_KINDS[kind]
    for _ in range(count):
        world.particles.append(Particle(
            x=x,
            y=y,
            vx=(rng.random() - 0.5) * 5,
            vy=(rng.random() - 0.5) * 5,
            life=life,
            size=rng.random() * 4 + 2,
            color=color if color is not None else random_hue_color(rng),
        ))
    return True


def spawn_trail(world: World, count: int = 3) -> bool:
    """Boost exhaust streaming backwards from the player's centre."""
    if len(world.particles) + count > MAX_PARTICLES:
        return False

    rng = world.rng
    life, color = PARTICLE_KINDS["trail"]
    cx, cy = world.player.center
    for _ in range(count):
        world.particles.append(Particle(
            x=cx,
            y=cy,
            vx=-(rng.random() * 3 + 1),
            vy=(rng.random() - 0.5) * 2,
            life=life,
            size=rng.random() * 3 + 1,
            color=color,
        ))
    return True


def step_particles(world: World):
    """Moves, ages and shrinks particles, dropping the expired ones."""
    for p in world.particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= 1
        p.size *= PARTICLE_SHRINK
    world.particles = [p for p in world.particles if p.life > 0]
