import random

import pytest

from fullsend.data_models import Obstacle, SessionMode
from fullsend.session import GameSession
from fullsend.storage import MemoryStore, ProgressStore
from fullsend.world import World


class ConstantRng:
    """Stands in for random.Random where a test needs a fixed roll."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def world():
    w = World(width=800, height=600, rng=random.Random(1))
    w.mode = SessionMode.PLAYING
    return w


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def progress_store(memory_store):
    return ProgressStore(memory_store)


@pytest.fixture
def session(progress_store):
    return GameSession(progress_store, width=800, height=600, rng=random.Random(7))


def obstacle_at(x: float, height: float = 100, is_top: bool = True) -> Obstacle:
    return Obstacle(x=x, height=height, is_top=is_top)
