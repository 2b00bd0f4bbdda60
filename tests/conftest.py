import os

# Scene tests open a pygame display; keep them headless.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from game_context import GameContext
from scene_helpers import FakeManager
from visualizers.lcm_bridge import BoundingBox, BridgeConfig, ElementId, StackBridgeEngine, StaticLayout
from visualizers.shared.timers import Scheduler

CONTAINER = BoundingBox(0, 0, 800, 400)
PRIMARY_STACK = BoundingBox(250, 280, 80, 80)
SECONDARY_STACK = BoundingBox(470, 280, 80, 80)
PRIMARY_AVATAR = BoundingBox(245, 100, 90, 130)  # feet 170 above the container bottom
SECONDARY_AVATAR = BoundingBox(475, 145, 70, 95)  # feet 160 above the container bottom
PRIMARY_SECTION = BoundingBox(240, 100, 100, 300)


def full_layout():
    return {
        ElementId.CONTAINER: CONTAINER,
        ElementId.PRIMARY_STACK: PRIMARY_STACK,
        ElementId.SECONDARY_STACK: SECONDARY_STACK,
        ElementId.PRIMARY_AVATAR: PRIMARY_AVATAR,
        ElementId.SECONDARY_AVATAR: SECONDARY_AVATAR,
        ElementId.PRIMARY_SECTION: PRIMARY_SECTION,
    }


@pytest.fixture
def config():
    return BridgeConfig()


@pytest.fixture
def boxes():
    return full_layout()


@pytest.fixture
def layout(boxes):
    return StaticLayout(dict(boxes))


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def engine(layout, config, scheduler):
    eng = StackBridgeEngine(layout, config, scheduler)
    eng.set_block_sizes(4, 4)
    return eng


@pytest.fixture
def manager():
    mgr = FakeManager()
    yield mgr
    pygame.quit()


@pytest.fixture
def context():
    return GameContext()


@pytest.fixture
def exits():
    return []
