"""
constants.py: Centralized configuration for game world, physics and progression policy.
"""

# -------- Game World Config --------
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
PLAYER_X = 50                   # Fixed player X position
REFERENCE_FRAME_MS = 16.67      # 60Hz reference frame used to normalize dt

# Frame admission
MAX_FRAME_DELTA_MS = 100.0      # Deltas are clamped to this first
SKIP_FRAME_DELTA_MS = 50.0      # Anything above this is skipped outright
INPUT_DEBOUNCE_MS = 150.0       # At most one accepted intent per window
COLLISION_DEBOUNCE_MS = 200.0   # One penalty per physical collision

# -------- Pipe Config --------
PIPE_WIDTH = 80
PIPE_SPAWN_INTERVAL_FRAMES = 150
PIPE_MIN_HEIGHT_RATIO = 0.2
PIPE_MAX_HEIGHT_RATIO = 0.6
BASE_PIPE_SPEED = 2.5           # Pixels / reference frame
PIPE_SPEED_PER_LEVEL = 0.2
BASE_PIPE_GAP = 300
MIN_PIPE_GAP = 200
PIPE_GAP_SHRINK_PER_LEVEL = 20
RINGS_PER_PIPE = 3
RING_FADE_PER_FRAME = 0.01

# -------- Collectible Config --------
COLLECTIBLE_SIZE = 20
POWER_UP_CHANCE = 0.10          # Cumulative roll thresholds
HEART_CHANCE = 0.15

# -------- Physics Config (Pixels / Reference Frame) --------
BOOST_LIFT_PER_FRAME = 0.2
BOOST_DURATION = 200
BOOST_GAP = 350
SLOW_PIPE_SPEED = 1.5
COINS_PER_BOOST = 5

# -------- Power-Up Config --------
POWER_UP_DURATIONS = {
    "double": 600,
    "slow": 600,
    "shield": 300,
    "blast": 10,
}
# Cumulative thresholds in roll order
POWER_UP_ROLLS = (
    (0.33, "double"),
    (0.66, "slow"),
    (0.83, "shield"),
    (1.0, "blast"),
)

# -------- Progression Config --------
START_LIVES = 3
MAX_LIVES = 5
COIN_SCORE = 10
PIPE_SCORE = 5
STREAK_LENGTH = 3
STREAK_BONUS = 10
DOUBLE_MULTIPLIER = 2
VICTORY_SCORE = 10000
INVINCIBILITY_MILESTONE = 250
INVINCIBILITY_DURATION = 900
BACKGROUND_STAGE_SCORE = 200
SHAKE_FRAMES = 10

# -------- Particles / Background --------
MAX_PARTICLES = 200
PARTICLE_SHRINK = 0.97
STAR_COUNT = 100
NEBULA_COUNT = 7

# -------- Persistence Keys --------
HIGH_SCORE_KEY = "highScore"
UNLOCKS_KEY = "unlocks"
