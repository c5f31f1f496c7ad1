"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .constants import (
    BASE_PIPE_GAP, BASE_PIPE_SPEED, PIPE_WIDTH, PLAYER_X, SCREEN_HEIGHT, START_LIVES
)


@dataclass(frozen=True)
class FlyingObjectSpec:
    """Immutable craft archetype: unlock threshold plus flight constants."""
    name: str
    unlock_score: int
    width: int
    height: int
    lift: float
    gravity: float


class Craft(Enum):
    """The selectable crafts, in catalog order."""
    UFO = 0
    ROCKET = 1
    SPACESHIP = 2
    DRONE = 3

    @property
    def spec(self) -> FlyingObjectSpec:
        return FLYING_OBJECTS[self.value]


FLYING_OBJECTS = (
    FlyingObjectSpec("UFO", 0, 60, 60, -10.0, 0.5),
    FlyingObjectSpec("Rocket", 500, 60, 60, -12.0, 0.5),
    FlyingObjectSpec("Spaceship", 1000, 60, 60, -10.0, 0.45),
    FlyingObjectSpec("Drone", 5000, 50, 50, -10.0, 0.5),
)

DEFAULT_UNLOCKS = [spec.unlock_score == 0 for spec in FLYING_OBJECTS]


class SessionMode(Enum):
    INTRO = "intro"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    VICTORY = "victory"


class CollectibleKind(Enum):
    COIN = "coin"
    HEART = "heart"
    POWER_UP = "powerUp"


class PowerUpKind(Enum):
    DOUBLE = "double"
    SLOW = "slow"
    SHIELD = "shield"
    BLAST = "blast"


class Cue(Enum):
    """Feedback triggers handed to the presentation layer (sound + flashes)."""
    LAUNCH = "launch"
    COIN = "coin"
    PIPE_PASS = "pipe_pass"
    CRASH = "crash"
    FULL_SEND = "full_send"
    POWER_UP = "power_up"
    HEART = "heart"
    VICTORY = "victory"


class IntentKind(Enum):
    FLAP = "flap"
    SELECT_OBJECT = "select_object"
    SELECT_DEFAULT = "select_default"
    RESTART = "restart"
    SHARE_RESULT = "share_result"


@dataclass(frozen=True)
class Intent:
    """A discrete player intent, already abstracted from raw input."""
    kind: IntentKind
    index: Optional[int] = None

    @classmethod
    def flap(cls) -> "Intent":
        return cls(IntentKind.FLAP)

    @classmethod
    def select(cls, index: int) -> "Intent":
        return cls(IntentKind.SELECT_OBJECT, index)

    @classmethod
    def select_default(cls) -> "Intent":
        return cls(IntentKind.SELECT_DEFAULT)

    @classmethod
    def restart(cls) -> "Intent":
        return cls(IntentKind.RESTART)

    @classmethod
    def share(cls) -> "Intent":
        return cls(IntentKind.SHARE_RESULT)


@dataclass
class Player:
    """The single player craft. x is fixed, y is never clamped."""
    craft: Craft = Craft.UFO
    x: float = PLAYER_X
    y: float = SCREEN_HEIGHT / 2
    width: int = 60
    height: int = 60
    velocity: float = 0.0
    gravity: float = 0.5
    lift: float = -10.0

    boost: bool = False
    boost_timer: float = 0.0
    invincible: bool = False
    invincible_timer: float = 0.0
    invincible_count: int = 0

    @classmethod
    def from_craft(cls, craft: Craft, y: float) -> "Player":
        player = cls(craft=craft, y=y)
        player.apply_craft(craft)
        return player

    def apply_craft(self, craft: Craft):
        """Copies the craft's size and flight constants onto the player."""
        spec = craft.spec
        self.craft = craft
        self.width = spec.width
        self.height = spec.height
        self.lift = spec.lift
        self.gravity = spec.gravity

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def to_client_state(self):
        """Prepares a minimal state dictionary for the presentation layer."""
        return {
            "craft": self.craft.name,
            "x": self.x,
            "y": round(self.y, 2),
            "w": self.width,
            "h": self.height,
            "v": round(self.velocity, 2),
            "boost": self.boost,
            "invincible": self.invincible,
        }


@dataclass
class Ring:
    """Decorative ring drifting inside an obstacle."""
    y: float
    speed: float
    alpha: float = 1.0


@dataclass
class Obstacle:
    """One member of a top/bottom pipe pair."""
    x: float
    height: float
    is_top: bool
    width: int = PIPE_WIDTH
    passed: bool = False
    rings: List[Ring] = field(default_factory=list)

    @property
    def right(self) -> float:
        return self.x + self.width

    def to_client_state(self):
        return {
            "x": round(self.x, 2),
            "height": round(self.height, 2),
            "top": self.is_top,
            "w": self.width,
            "rings": [(round(r.y, 2), round(r.alpha, 2)) for r in self.rings],
        }


@dataclass
class Collectible:
    x: float
    y: float
    kind: CollectibleKind = CollectibleKind.COIN

    def to_client_state(self):
        return {"x": round(self.x, 2), "y": round(self.y, 2), "kind": self.kind.value}


@dataclass
class ActivePowerUp:
    kind: PowerUpKind
    timer: float

    def to_client_state(self):
        return {"kind": self.kind.value, "timer": round(self.timer, 2)}


@dataclass
class Particle:
    """Cosmetic particle; shrinks every frame until its life runs out."""
    x: float
    y: float
    vx: float
    vy: float
    life: int
    size: float
    color: Tuple[int, int, int]

    def to_client_state(self):
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "size": round(self.size, 2),
            "color": self.color,
        }


@dataclass
class Star:
    x: float
    y: float
    speed: float
    size: float


@dataclass
class Nebula:
    x: float
    y: float
    size: float
    hue: float


@dataclass
class ProgressionState:
    """Score, lives and level bookkeeping. high_score and unlocks are persisted."""
    score: int = 0
    high_score: int = 0
    level: int = 1
    lives: int = START_LIVES
    coin_count: int = 0
    pipe_streak: int = 0
    pipe_speed: float = BASE_PIPE_SPEED
    pipe_gap: float = BASE_PIPE_GAP
    background_stage: int = 0
    unlocks: List[bool] = field(default_factory=lambda: list(DEFAULT_UNLOCKS))

    def to_client_state(self):
        return {
            "score": self.score,
            "high_score": self.high_score,
            "level": self.level,
            "lives": self.lives,
        }
