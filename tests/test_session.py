import random

import pytest

from conftest import obstacle_at
from fullsend.data_models import (
    ActivePowerUp, Collectible, Craft, Cue, Intent, PowerUpKind, SessionMode
)
from fullsend.session import GameSession
from fullsend.storage import MemoryStore, ProgressStore


def start(session, now=0):
    assert session.handle_intent(Intent.select_default(), now)
    assert session.mode is SessionMode.PLAYING


def test_starts_in_intro(session):
    snap = session.snapshot()
    assert snap.mode is SessionMode.INTRO
    assert snap.hud == {"score": 0, "high_score": 0, "level": 1, "lives": 3}
    assert snap.unlocks == (True, False, False, False)
    assert len(snap.stars) == 100


def test_loads_persisted_progress():
    store = MemoryStore({"highScore": "750", "unlocks": "[true, true, false, false]"})
    session = GameSession(ProgressStore(store), rng=random.Random(3))
    assert session.world.progression.high_score == 750
    assert session.world.progression.unlocks == [True, True, False, False]


def test_locked_and_unknown_selections_are_ignored(session):
    assert session.handle_intent(Intent.select(1), 0)
    assert session.handle_intent(Intent.select(9), 200)
    assert session.handle_intent(Intent.select(-1), 400)
    assert session.mode is SessionMode.INTRO


def test_select_applies_craft_stats(session):
    session.world.progression.unlocks[3] = True
    session.handle_intent(Intent.select(3), 0)
    player = session.world.player
    assert session.mode is SessionMode.PLAYING
    assert session.selected_craft is Craft.DRONE
    assert (player.width, player.height, player.lift, player.gravity) == (50, 50, -10.0, 0.5)
    assert Cue.LAUNCH in session.world.cues


def test_intents_are_debounced(session):
    start(session, now=1000)
    assert not session.handle_intent(Intent.flap(), 1100)
    assert session.handle_intent(Intent.flap(), 1150)


def test_flap_only_while_playing(session):
    session.handle_intent(Intent.flap(), 0)
    assert session.mode is SessionMode.INTRO
    assert session.world.player.velocity == 0

    start(session, now=200)
    session.handle_intent(Intent.flap(), 400)
    assert session.world.player.velocity == -10.0


def test_first_frame_spawns_pipes(session):
    start(session)
    snap = session.advance_frame(0)
    assert snap is not None
    assert len(snap.obstacles) == 2
    assert len(snap.collectibles) == 1
    assert snap.cues == (Cue.LAUNCH,)
    assert snap.frame == 1


def test_gravity_applies_with_frame_delta(session):
    start(session)
    session.advance_frame(0)
    y = session.world.player.y
    session.advance_frame(16.67)
    assert session.world.player.velocity == pytest.approx(0.5)
    assert session.world.player.y == pytest.approx(y + 0.5)


def test_skipped_frame_does_not_simulate(session):
    start(session)
    session.advance_frame(0)
    frame = session.world.frame
    assert session.advance_frame(500) is None
    assert session.world.frame == frame
    assert session.advance_frame(516) is not None


def test_collision_on_last_life_ends_game_without_scoring(session):
    start(session)
    world = session.world
    world.progression.lives = 1
    world.player.y = -10
    world.obstacles = [obstacle_at(-40, is_top=False)]

    snap = session.advance_frame(0)
    assert snap.mode is SessionMode.GAME_OVER
    assert snap.hud["lives"] == 0
    assert snap.hud["score"] == 0
    assert snap.shake_frames == 10
    assert Cue.CRASH in snap.cues

    frame = world.frame
    session.advance_frame(16)
    assert world.frame == frame
    assert session.snapshot().shake_frames == 9



def test_coin_on_fatal_frame_still_records_progress(session, memory_store):
    start(session)
    world = session.world
    world.progression.lives = 1
    world.progression.score = 495
    world.player.y = -10
    world.collectibles = [Collectible(x=world.player.x + 10, y=0)]

    snap = session.advance_frame(0)
    assert snap.mode is SessionMode.GAME_OVER
    assert snap.hud["score"] == 505
    assert snap.hud["high_score"] == 505
    assert snap.unlocks == (True, True, False, False)
    assert memory_store.data["highScore"] == "505"
    assert memory_store.data["unlocks"] == "[true, true, false, false]"


def test_restart_resets_transients_and_keeps_progress(session, memory_store):
    session.world.progression.unlocks[1] = True
    session.handle_intent(Intent.select(1), 0)
    world = session.world
    world.progression.score = 120
    world.progression.high_score = 120
    world.progression.level = 3
    world.progression.lives = 1
    world.progression.coin_count = 4
    world.progression.pipe_streak = 2
    world.power_up = ActivePowerUp(PowerUpKind.DOUBLE, 50)
    world.player.y = -10
    session.advance_frame(0)
    assert session.mode is SessionMode.GAME_OVER

    session.handle_intent(Intent.restart(), 200)
    progression = session.world.progression
    assert session.mode is SessionMode.INTRO
    assert (progression.score, progression.level, progression.lives) == (0, 1, 3)
    assert (progression.coin_count, progression.pipe_streak) == (0, 0)
    assert progression.high_score == 120
    assert progression.unlocks == [True, True, False, False]
    assert session.world.power_up is None
    assert session.world.obstacles == []
    assert session.world.player.craft is Craft.ROCKET
    assert session.world.player.lift == -12.0
    assert session.world.player.y == 300


def test_restart_in_intro_is_idempotent(session, memory_store):
    memory_store.set("highScore", "90")
    before = dict(memory_store.data)
    session.world.progression.high_score = 90
    session.handle_intent(Intent.restart(), 0)
    session.handle_intent(Intent.restart(), 200)
    assert session.mode is SessionMode.INTRO
    assert session.world.progression.high_score == 90
    assert session.world.progression.score == 0
    assert memory_store.data == before


def test_share_only_after_the_run(session):
    session.handle_intent(Intent.share(), 0)
    assert session.last_share_text is None

    start(session, now=200)
    session.world.progression.lives = 1
    session.world.player.y = -10
    session.advance_frame(0)
    session.handle_intent(Intent.share(), 400)
    assert session.last_share_text == "Scored 0 in $fullsend Community Challenge! #FullSend"
    assert session.mode is SessionMode.GAME_OVER


def test_victory_ends_the_run(session):
    start(session)
    session.world.progression.score = 10000
    snap = session.advance_frame(0)
    assert snap.mode is SessionMode.VICTORY
    assert Cue.VICTORY in snap.cues

    session.handle_intent(Intent.flap(), 200)
    assert session.world.player.velocity == 0
    session.handle_intent(Intent.share(), 400)
    assert session.last_share_text.startswith("I escaped the galaxy with 10000 points")


def test_long_run_invariants():
    session = GameSession(ProgressStore(MemoryStore()), rng=random.Random(42))
    flapper = random.Random(5)
    start(session)

    now = 0.0
    last_score = 0
    for _ in range(3000):
        now += 16.67
        if flapper.random() < 0.08:
            session.handle_intent(Intent.flap(), now)
        snap = session.advance_frame(now)
        hud = snap.hud
        assert 0 <= hud["lives"] <= 5
        assert hud["score"] >= last_score
        assert hud["high_score"] == max(hud["high_score"], hud["score"])
        assert len(snap.particles) <= 200
        if hud["lives"] == 0:
            assert snap.mode is SessionMode.GAME_OVER
        last_score = hud["score"]
        if snap.mode is not SessionMode.PLAYING:
            break
