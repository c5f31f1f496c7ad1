"""
physics_core.py: The deterministic kinematic functions and collision logic.
"""

from typing import List

from .constants import BOOST_LIFT_PER_FRAME, COLLECTIBLE_SIZE, REFERENCE_FRAME_MS, RING_FADE_PER_FRAME
from .data_models import Collectible, Obstacle, Player, PowerUpKind
from .world import World


class PhysicsCore:
    """
    Deterministic motion step used by the session every playing frame.
    Player motion and timers scale with dt; scrolling counts whole frames.
    """

    REFERENCE_FRAME_MS = REFERENCE_FRAME_MS

    def normalize(self, delta_ms: float) -> float:
        """Converts elapsed milliseconds into multiples of a 60Hz frame."""
        return delta_ms / self.REFERENCE_FRAME_MS

    def apply_gravity_and_movement(self, y: float, velocity: float, gravity: float,
                                   dt: float) -> tuple[float, float]:
        """
        Calculates new velocity and position after dt reference frames.
        """
        velocity += gravity * dt
        y += velocity * dt
        return y, velocity

    def flap(self, player: Player):
        """A flap sets the velocity outright, it does not add to it."""
        player.velocity = player.lift

    def step_player(self, player: Player, dt: float):
        player.y, player.velocity = self.apply_gravity_and_movement(
            player.y, player.velocity, player.gravity, dt)

        if player.boost:
            player.velocity -= BOOST_LIFT_PER_FRAME * dt
            player.boost_timer -= dt
            if player.boost_timer <= 0:
                player.boost = False
                player.boost_timer = 0.0

    def step_timers(self, world: World, dt: float):
        """Counts down the active power-up and invincibility windows."""
        power_up = world.power_up
        # Blast counts down through its own burst instead
        if power_up is not None and power_up.kind is not PowerUpKind.BLAST:
            power_up.timer -= dt
            if power_up.timer <= 0:
                world.power_up = None

        player = world.player
        if player.invincible:
            player.invincible_timer -= dt
            if player.invincible_timer <= 0:
                player.invincible = False
                player.invincible_timer = 0.0

    def step_rings(self, obstacle: Obstacle):
        for ring in obstacle.rings:
            ring.y += ring.speed
            ring.alpha = max(0.0, ring.alpha - RING_FADE_PER_FRAME)
            if ring.y < 0 or ring.y > obstacle.height or ring.alpha <= 0:
                ring.y = obstacle.height if obstacle.is_top else 0.0
                ring.alpha = 1.0

    def step_entities(self, world: World):
        """Scrolls obstacles and collectibles left by the current speed."""
        speed = world.current_speed
        for obstacle in world.obstacles:
            obstacle.x -= speed
            self.step_rings(obstacle)
        for collectible in world.collectibles:
            collectible.x -= speed

    # ---------- Overlap tests ----------

    @staticmethod
    def overlaps(ax: float, ay: float, aw: float, ah: float,
                 bx: float, by: float, bw: float, bh: float) -> bool:
        return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by

    def touches_collectible(self, player: Player, collectible: Collectible) -> bool:
        return self.overlaps(
            player.x, player.y, player.width, player.height,
            collectible.x, collectible.y, COLLECTIBLE_SIZE, COLLECTIBLE_SIZE)

    def hits_boundary(self, player: Player, screen_height: float) -> bool:
        return player.y < 0 or player.y + player.height > screen_height

    def hits_obstacle(self, player: Player, obstacle: Obstacle, screen_height: float) -> bool:
        if not (player.x + player.width > obstacle.x and player.x < obstacle.right):
            return False
        if obstacle.is_top:
            return player.y < obstacle.height
        return player.y + player.height > screen_height - obstacle.height

    def check_collision(self, player: Player, obstacles: List[Obstacle],
                        screen_height: float) -> bool:
        """Checks for collisions with floor, ceiling, or pipes."""
        if self.hits_boundary(player, screen_height):
            return True
        return any(self.hits_obstacle(player, o, screen_height) for o in obstacles)
