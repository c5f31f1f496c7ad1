import pytest

from conftest import ConstantRng, obstacle_at
from fullsend.collision import CollisionResolver, roll_power_up
from fullsend.data_models import (
    ActivePowerUp, Collectible, CollectibleKind, Cue, PowerUpKind, SessionMode
)


@pytest.fixture
def resolver():
    return CollisionResolver()


def touching(world, kind=CollectibleKind.COIN) -> Collectible:
    """A collectible overlapping the player's box."""
    player = world.player
    return Collectible(x=player.x + 10, y=player.y + 10, kind=kind)


def test_coin_scores_and_is_consumed(world, resolver):
    world.collectibles = [touching(world), Collectible(x=700, y=100)]
    resolver.resolve(world, now_ms=1000)
    assert world.progression.score == 10
    assert world.progression.coin_count == 1
    assert len(world.collectibles) == 1
    assert Cue.COIN in world.cues


def test_coin_doubled(world, resolver):
    world.power_up = ActivePowerUp(PowerUpKind.DOUBLE, 600)
    world.collectibles = [touching(world)]
    resolver.resolve(world, now_ms=1000)
    assert world.progression.score == 20


def test_fifth_coin_triggers_boost(world, resolver):
    for i in range(5):
        world.collectibles = [touching(world)]
        resolver.collect_pickups(world)
        if i < 4:
            assert not world.player.boost
    assert world.player.boost
    assert world.player.boost_timer == 200
    assert world.progression.coin_count == 0
    assert Cue.FULL_SEND in world.cues


def test_heart_adds_life_below_max(world, resolver):
    world.collectibles = [touching(world, CollectibleKind.HEART)]
    resolver.collect_pickups(world)
    assert world.progression.lives == 4
    assert world.collectibles == []


def test_heart_at_max_is_consumed_without_effect(world, resolver):
    world.progression.lives = 5
    world.collectibles = [touching(world, CollectibleKind.HEART)]
    resolver.collect_pickups(world)
    assert world.progression.lives == 5
    assert world.collectibles == []


@pytest.mark.parametrize("roll,kind", [
    (0.0, PowerUpKind.DOUBLE),
    (0.32, PowerUpKind.DOUBLE),
    (0.33, PowerUpKind.SLOW),
    (0.65, PowerUpKind.SLOW),
    (0.66, PowerUpKind.SHIELD),
    (0.82, PowerUpKind.SHIELD),
    (0.83, PowerUpKind.BLAST),
    (0.999, PowerUpKind.BLAST),
])
def test_power_up_roll(roll, kind):
    assert roll_power_up(roll) is kind


def test_capsule_replaces_active_power_up(world, resolver):
    world.rng = ConstantRng(0.5)
    world.power_up = ActivePowerUp(PowerUpKind.SHIELD, 100)
    world.collectibles = [touching(world, CollectibleKind.POWER_UP)]
    resolver.collect_pickups(world)
    assert world.power_up == ActivePowerUp(PowerUpKind.SLOW, 600)
    assert Cue.POWER_UP in world.cues


def test_pickups_ignore_invincibility_and_debounce(world, resolver):
    world.player.invincible = True
    world.last_collision_ms = 990
    world.collectibles = [touching(world)]
    resolver.resolve(world, now_ms=1000)
    assert world.progression.score == 10


def test_last_life_ends_the_game(world, resolver):
    world.progression.lives = 1
    world.player.y = -5
    resolver.resolve(world, now_ms=1000)
    assert world.progression.lives == 0
    assert world.mode is SessionMode.GAME_OVER
    assert world.shake_timer == 10
    assert Cue.CRASH in world.cues


def test_life_loss_recenters_and_clears_nearby_obstacles(world, resolver):
    player = world.player
    player.y = 20
    player.velocity = 4
    world.progression.pipe_streak = 2
    cleared = obstacle_at(-60, height=100)
    overlapping = obstacle_at(80, height=100)
    ahead = obstacle_at(500, height=100, is_top=False)
    world.obstacles = [cleared, overlapping, ahead]

    resolver.resolve(world, now_ms=1000)

    assert world.progression.lives == 2
    assert world.mode is SessionMode.PLAYING
    assert player.y == world.height / 2
    assert player.velocity == 0
    assert world.obstacles == [cleared]
    assert world.progression.pipe_streak == 0
    assert world.shake_timer == 10
    assert world.last_collision_ms == 1000


def test_shield_absorbs_hit(world, resolver):
    world.power_up = ActivePowerUp(PowerUpKind.SHIELD, 300)
    world.player.y = -5
    resolver.resolve(world, now_ms=1000)
    assert world.progression.lives == 3
    assert world.power_up is None
    assert world.shake_timer == 0
    assert Cue.CRASH in world.cues


def test_invincible_player_ignores_hazards(world, resolver):
    world.player.invincible = True
    world.player.y = -5
    resolver.resolve(world, now_ms=1000)
    assert world.progression.lives == 3


def test_hits_are_debounced(world, resolver):
    world.player.y = -5
    resolver.resolve(world, now_ms=1000)
    assert world.progression.lives == 2

    world.player.y = -5
    resolver.resolve(world, now_ms=1199)
    assert world.progression.lives == 2

    resolver.resolve(world, now_ms=1200)
    assert world.progression.lives == 1


def test_blast_clears_obstacles_then_expires(world, resolver):
    world.power_up = ActivePowerUp(PowerUpKind.BLAST, 10)
    for _ in range(9):
        world.obstacles = [obstacle_at(300), obstacle_at(300, is_top=False)]
        resolver.apply_blast(world)
        assert world.obstacles == []
        assert world.power_up is not None

    resolver.apply_blast(world)
    assert world.power_up is None
