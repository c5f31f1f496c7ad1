"""
world.py: The single aggregate owning all mutable session state.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import BOOST_GAP, SCREEN_HEIGHT, SCREEN_WIDTH, SLOW_PIPE_SPEED
from .data_models import (
    ActivePowerUp, Collectible, Cue, Nebula, Obstacle, Particle, Player,
    PowerUpKind, ProgressionState, SessionMode, Star
)


@dataclass
class World:
    """
    Everything the simulation step reads and writes. Components receive the
    world explicitly; nothing else holds game state.
    """
    width: float = SCREEN_WIDTH
    height: float = SCREEN_HEIGHT
    rng: random.Random = field(default_factory=random.Random)

    mode: SessionMode = SessionMode.INTRO
    player: Optional[Player] = None
    progression: ProgressionState = field(default_factory=ProgressionState)
    power_up: Optional[ActivePowerUp] = None

    obstacles: List[Obstacle] = field(default_factory=list)
    collectibles: List[Collectible] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    stars: List[Star] = field(default_factory=list)
    nebulas: List[Nebula] = field(default_factory=list)

    frame: int = 0
    shake_timer: int = 0
    last_collision_ms: Optional[float] = None
    cues: List[Cue] = field(default_factory=list)

    def __post_init__(self):
        if self.player is None:
            self.player = Player(y=self.height / 2)

    @property
    def current_speed(self) -> float:
        if self.has_power_up(PowerUpKind.SLOW):
            return SLOW_PIPE_SPEED
        return self.progression.pipe_speed

    @property
    def current_gap(self) -> float:
        if self.player.boost:
            return BOOST_GAP
        return self.progression.pipe_gap

    def has_power_up(self, kind: PowerUpKind) -> bool:
        return self.power_up is not None and self.power_up.kind is kind

    def emit(self, cue: Cue):
        self.cues.append(cue)

    def drain_cues(self) -> List[Cue]:
        cues, self.cues = self.cues, []
        return cues
