"""
session.py: The session state machine and the per-frame simulation step.
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .background import generate_background, step_background
from .collision import CollisionResolver
from .constants import COLLECTIBLE_SIZE, SCREEN_HEIGHT, SCREEN_WIDTH
from .data_models import (
    FLYING_OBJECTS, Craft, Cue, Intent, IntentKind, Player, SessionMode
)
from .effects import spawn_trail, step_particles
from .logger import get_logger
from .physics_core import PhysicsCore
from .progression import ProgressionEngine
from .share import share_text
from .spawner import Spawner
from .storage import ProgressStore
from .timing import FrameClock, InputDebouncer
from .world import World

log = get_logger("session")


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view handed to the presentation layer after every frame."""
    frame: int
    mode: SessionMode
    player: dict
    obstacles: Tuple[dict, ...]
    collectibles: Tuple[dict, ...]
    particles: Tuple[dict, ...]
    stars: Tuple[tuple, ...]
    nebulas: Tuple[tuple, ...]
    power_up: Optional[dict]
    hud: dict
    unlocks: Tuple[bool, ...]
    cues: Tuple[Cue, ...]
    shake_frames: int


class GameSession:
    """
    Owns the World and drives it. The external driver calls handle_intent()
    for discrete input and advance_frame() once per display refresh.
    """

    def __init__(self, progress_store: Optional[ProgressStore] = None,
                 width: float = SCREEN_WIDTH, height: float = SCREEN_HEIGHT,
                 rng: Optional[random.Random] = None):
        self.progress_store = progress_store
        self.width = width
        self.height = height

        self.physics = PhysicsCore()
        self.spawner = Spawner()
        self.collisions = CollisionResolver(self.physics)
        self.progression = ProgressionEngine(progress_store)
        self.clock = FrameClock()
        self.debouncer = InputDebouncer()

        self.selected_craft = Craft.UFO
        self.last_share_text: Optional[str] = None

        self.world = World(width=width, height=height, rng=rng or random.Random())
        if progress_store:
            self.world.progression.high_score = progress_store.load_high_score()
            self.world.progression.unlocks = progress_store.load_unlocks()
        generate_background(self.world)

    @property
    def mode(self) -> SessionMode:
        return self.world.mode

    # ---------- Intents ----------

    def handle_intent(self, intent: Intent, now_ms: float) -> bool:
        """
        Applies one intent. Returns False when it was debounced; intents that
        do not apply to the current mode are accepted but change nothing.
        """
        if not self.debouncer.accept(now_ms):
            return False

        mode = self.world.mode
        kind = intent.kind

        if mode is SessionMode.INTRO:
            if kind is IntentKind.SELECT_OBJECT:
                self.select(intent.index)
            elif kind is IntentKind.SELECT_DEFAULT:
                self.start(Craft.UFO)
            elif kind is IntentKind.RESTART:
                self.reset()

        elif mode is SessionMode.PLAYING:
            if kind is IntentKind.FLAP:
                self.physics.flap(self.world.player)
                self.world.emit(Cue.LAUNCH)

        else:
            if kind is IntentKind.RESTART:
                self.reset()
            elif kind is IntentKind.SHARE_RESULT:
                self.share()

        return True

    def select(self, index: Optional[int]):
        """Starts with the craft at `index`; locked or unknown crafts are ignored."""
        if index is None or not 0 <= index < len(FLYING_OBJECTS):
            log.debug(f"Ignoring selection of unknown craft {index}")
            return
        if not self.world.progression.unlocks[index]:
            log.debug(f"Ignoring selection of locked craft {FLYING_OBJECTS[index].name}")
            return
        self.start(Craft(index))

    def start(self, craft: Craft):
        self.selected_craft = craft
        self.world.player.apply_craft(craft)
        self.world.mode = SessionMode.PLAYING
        self.world.emit(Cue.LAUNCH)
        log.info(f"Selected {craft.spec.name}")

    def share(self) -> str:
        progression = self.world.progression
        self.last_share_text = share_text(
            progression.score, self.world.mode is SessionMode.VICTORY)
        return self.last_share_text

    def reset(self):
        """Back to the intro with fresh transient state; persisted progress survives."""
        old = self.world.progression
        world = World(width=self.width, height=self.height, rng=self.world.rng)
        world.progression.high_score = old.high_score
        world.progression.unlocks = list(old.unlocks)
        world.player = Player.from_craft(self.selected_craft, self.height / 2)
        generate_background(world)
        self.world = world
        self.last_share_text = None
        log.debug("Session reset")

    # ---------- Frame step ----------

    def advance_frame(self, timestamp_ms: float) -> Optional[FrameSnapshot]:
        """
        Runs one frame for the driver timestamp. Returns None when frame
        admission skips it.
        """
        delta_ms = self.clock.admit(timestamp_ms)
        if delta_ms is None:
            log.debug(f"Skipped frame at {timestamp_ms:.0f}ms")
            return None

        world = self.world
        if world.shake_timer > 0:
            world.shake_timer -= 1
        step_background(world)

        if world.mode is SessionMode.PLAYING:
            self._simulate(self.physics.normalize(delta_ms), timestamp_ms)
        else:
            step_particles(world)

        return self._snapshot(tuple(world.drain_cues()))

    def _simulate(self, dt: float, now_ms: float):
        world = self.world
        player = world.player

        # 1. Motion
        self.physics.step_player(player, dt)
        self.physics.step_timers(world, dt)
        if player.boost and world.frame % 2 == 0:
            spawn_trail(world)
        self.spawner.maybe_spawn(world)
        self.physics.step_entities(world)

        # 2. Pickups and hazards
        self.collisions.resolve(world, now_ms)

        # 3. Progression; a game over this frame only records what was already scored
        if world.mode is SessionMode.GAME_OVER:
            self.progression.record_progress(world)
        else:
            self.progression.update(world)

        # 4. Lifecycle
        step_particles(world)
        world.obstacles = [o for o in world.obstacles if o.right > 0]
        world.collectibles = [c for c in world.collectibles if c.x + COLLECTIBLE_SIZE > 0]
        world.frame += 1

    # ---------- Snapshots ----------

    def snapshot(self) -> FrameSnapshot:
        return self._snapshot(tuple(self.world.cues))

    def _snapshot(self, cues: Tuple[Cue, ...]) -> FrameSnapshot:
        world = self.world
        return FrameSnapshot(
            frame=world.frame,
            mode=world.mode,
            player=world.player.to_client_state(),
            obstacles=tuple(o.to_client_state() for o in world.obstacles),
            collectibles=tuple(c.to_client_state() for c in world.collectibles),
            particles=tuple(p.to_client_state() for p in world.particles),
            stars=tuple((s.x, s.y, s.size) for s in world.stars),
            nebulas=tuple((n.x, n.y, n.size, n.hue) for n in world.nebulas),
            power_up=world.power_up.to_client_state() if world.power_up else None,
            hud=world.progression.to_client_state(),
            unlocks=tuple(world.progression.unlocks),
            cues=cues,
            shake_frames=world.shake_timer,
        )
