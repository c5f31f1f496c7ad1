"""
progression.py: Scoring, levels, unlocks, milestones and the victory condition.
"""

from dataclasses import dataclass
from typing import Optional

from .background import generate_background, stage_for_score
from .constants import (
    BASE_PIPE_GAP, BASE_PIPE_SPEED, DOUBLE_MULTIPLIER, INVINCIBILITY_DURATION,
    INVINCIBILITY_MILESTONE, MIN_PIPE_GAP, PIPE_GAP_SHRINK_PER_LEVEL, PIPE_SCORE,
    PIPE_SPEED_PER_LEVEL, STREAK_BONUS, STREAK_LENGTH, VICTORY_SCORE
)
from .data_models import FLYING_OBJECTS, Cue, PowerUpKind, SessionMode
from .effects import spawn_particles
from .logger import get_logger
from .storage import ProgressStore
from .world import World

log = get_logger("progression")


def level_threshold(level: int) -> int:
    """Score needed to leave `level`."""
    if level == 1:
        return 50
    if level == 2:
        return 100
    if level == 3:
        return 175
    if level == 4:
        return 275
    return 275 + (level - 4) * 100


def pipe_speed_for_level(level: int) -> float:
    return BASE_PIPE_SPEED + (level - 1) * PIPE_SPEED_PER_LEVEL


def pipe_gap_for_level(level: int) -> float:
    if level < 3:
        return BASE_PIPE_GAP
    return max(MIN_PIPE_GAP, BASE_PIPE_GAP - (level - 2) * PIPE_GAP_SHRINK_PER_LEVEL)


@dataclass
class ProgressionEngine:
    """Per-frame bookkeeping that runs after collisions are resolved."""
    progress_store: Optional[ProgressStore] = None

    def update(self, world: World):
        self.score_pipes(world)
        self.record_progress(world)
        self.check_victory(world)
        self.update_level(world)
        self.check_invincibility(world)
        self.update_background_stage(world)

    def record_progress(self, world: World):
        """High score and unlocks; these also run on the frame a run ends."""
        self.update_high_score(world)
        self.update_unlocks(world)

    def score_pipes(self, world: World):
        """Marks cleared obstacles; only the bottom member of a pair scores."""
        progression = world.progression
        player_x = world.player.x
        multiplier = DOUBLE_MULTIPLIER if world.has_power_up(PowerUpKind.DOUBLE) else 1

        for obstacle in world.obstacles:
            if obstacle.passed or obstacle.right >= player_x:
                continue
            obstacle.passed = True
            if obstacle.is_top:
                continue

            progression.score += PIPE_SCORE * multiplier
            progression.pipe_streak += 1
            if progression.pipe_streak % STREAK_LENGTH == 0:
                progression.score += STREAK_BONUS
                world.emit(Cue.COIN)
            world.emit(Cue.PIPE_PASS)

    def update_high_score(self, world: World):
        progression = world.progression
        if progression.score > progression.high_score:
            progression.high_score = progression.score
            if self.progress_store:
                self.progress_store.save_high_score(progression.high_score)

    def update_unlocks(self, world: World):
        progression = world.progression
        changed = False
        for i, spec in enumerate(FLYING_OBJECTS):
            if not progression.unlocks[i] and progression.score >= spec.unlock_score:
                progression.unlocks[i] = True
                changed = True
                log.info(f"Unlocked {spec.name}",
                         extra={"data": {"craft": spec.name, "score": progression.score}})
        if changed and self.progress_store:
            self.progress_store.save_unlocks(progression.unlocks)

    def check_victory(self, world: World):
        if world.progression.score >= VICTORY_SCORE and world.mode is not SessionMode.VICTORY:
            world.mode = SessionMode.VICTORY
            world.emit(Cue.VICTORY)
            spawn_particles(world, world.width / 2, world.height / 2, "victory", 50)
            log.info(f"Victory with score {world.progression.score}")

    def update_level(self, world: World):
        """Steps at most one level per frame; later frames keep catching up."""
        progression = world.progression
        if progression.score >= level_threshold(progression.level):
            progression.level += 1
            progression.pipe_speed = pipe_speed_for_level(progression.level)
            progression.pipe_gap = pipe_gap_for_level(progression.level)
            log.debug(f"Level {progression.level}", extra={"data": {
                "level": progression.level,
                "pipe_speed": round(progression.pipe_speed, 2),
                "pipe_gap": progression.pipe_gap,
            }})

    def check_invincibility(self, world: World):
        player = world.player
        next_milestone = INVINCIBILITY_MILESTONE * (player.invincible_count + 1)
        if (world.progression.score >= next_milestone and not player.invincible
                and world.power_up is None):
            player.invincible = True
            player.invincible_timer = float(INVINCIBILITY_DURATION)
            player.invincible_count += 1
            world.emit(Cue.POWER_UP)
            log.debug(f"Invincibility milestone {next_milestone} reached")

    def update_background_stage(self, world: World):
        progression = world.progression
        stage = stage_for_score(progression.score)
        if stage > progression.background_stage:
            progression.background_stage = stage
            generate_background(world)
