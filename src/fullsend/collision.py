"""
collision.py: Pickup and hazard resolution with their state-dependent consequences.
"""

from dataclasses import dataclass, field

from .constants import (
    BOOST_DURATION, COIN_SCORE, COINS_PER_BOOST, COLLISION_DEBOUNCE_MS, DOUBLE_MULTIPLIER,
    MAX_LIVES, POWER_UP_DURATIONS, POWER_UP_ROLLS, SHAKE_FRAMES
)
from .data_models import (
    ActivePowerUp, Collectible, CollectibleKind, Cue, PowerUpKind, SessionMode
)
from .effects import spawn_particles
from .logger import get_logger
from .physics_core import PhysicsCore
from .world import World

log = get_logger("collision")


def roll_power_up(roll: float) -> PowerUpKind:
    for threshold, name in POWER_UP_ROLLS:
        if roll < threshold:
            return PowerUpKind(name)
    return PowerUpKind.BLAST


@dataclass
class CollisionResolver:
    """
    Runs once per playing frame, after motion:
    1. pickups (always), 2. hazards (unless invincible or debounced), 3. blast burst.
    """
    physics: PhysicsCore = field(default_factory=PhysicsCore)
    debounce_ms: float = COLLISION_DEBOUNCE_MS

    def resolve(self, world: World, now_ms: float):
        self.collect_pickups(world)

        if not world.player.invincible and not self._debounced(world, now_ms):
            if self.physics.check_collision(world.player, world.obstacles, world.height):
                self.apply_hit(world, now_ms)

        self.apply_blast(world)

    def _debounced(self, world: World, now_ms: float) -> bool:
        last = world.last_collision_ms
        return last is not None and now_ms - last < self.debounce_ms

    # ---------- Pickups ----------

    def collect_pickups(self, world: World):
        for i in range(len(world.collectibles) - 1, -1, -1):
            collectible = world.collectibles[i]
            if self.physics.touches_collectible(world.player, collectible):
                self._apply_pickup(world, collectible)
                # Consumed whichever branch applied
                del world.collectibles[i]

    def _apply_pickup(self, world: World, collectible: Collectible):
        progression = world.progression

        if collectible.kind is CollectibleKind.POWER_UP:
            kind = roll_power_up(world.rng.random())
            if world.power_up is not None:
                log.debug(f"Power-up {world.power_up.kind.value} replaced by {kind.value}")
            world.power_up = ActivePowerUp(kind, float(POWER_UP_DURATIONS[kind.value]))
            world.emit(Cue.POWER_UP)
            spawn_particles(world, collectible.x, collectible.y, "coin")

        elif collectible.kind is CollectibleKind.HEART:
            if progression.lives < MAX_LIVES:
                progression.lives += 1
                world.emit(Cue.HEART)
                spawn_particles(world, collectible.x, collectible.y, "heart")

        else:
            multiplier = DOUBLE_MULTIPLIER if world.has_power_up(PowerUpKind.DOUBLE) else 1
            progression.score += COIN_SCORE * multiplier
            progression.coin_count += 1
            world.emit(Cue.COIN)
            spawn_particles(world, collectible.x, collectible.y, "coin")

            if progression.coin_count >= COINS_PER_BOOST:
                world.player.boost = True
                world.player.boost_timer = float(BOOST_DURATION)
                progression.coin_count = 0
                world.emit(Cue.FULL_SEND)

    # ---------- Hazards ----------

    def apply_hit(self, world: World, now_ms: float):
        """Applies one resolved collision: shield, life loss or game over."""
        world.last_collision_ms = now_ms
        progression = world.progression
        player = world.player
        progression.pipe_streak = 0

        if world.has_power_up(PowerUpKind.SHIELD):
            world.power_up = None
            log.debug("Shield absorbed a collision")

        elif progression.lives > 1:
            progression.lives -= 1
            player.y = world.height / 2
            player.velocity = 0.0
            # Only obstacles the player has fully cleared survive
            world.obstacles = [o for o in world.obstacles if o.right < player.x]
            world.shake_timer = SHAKE_FRAMES
            log.debug(f"Life lost, {progression.lives} remaining")

        else:
            progression.lives = 0
            world.mode = SessionMode.GAME_OVER
            world.shake_timer = SHAKE_FRAMES
            log.info("Game over", extra={"data": {
                "score": progression.score, "level": progression.level}})

        cx, cy = player.center
        spawn_particles(world, cx, cy, "crash", 20)
        world.emit(Cue.CRASH)

    def apply_blast(self, world: World):
        """Clears every obstacle once per frame until the blast runs out."""
        power_up = world.power_up
        if power_up is None or power_up.kind is not PowerUpKind.BLAST:
            return
        if power_up.timer > 0:
            world.obstacles = []
            power_up.timer -= 1
            spawn_particles(world, world.width / 2, world.height / 2, "crash")
        if power_up.timer <= 0:
            world.power_up = None
