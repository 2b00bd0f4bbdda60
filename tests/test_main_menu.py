import pygame
import pytest

from main_menu import ACTIVITIES, MainMenu
from visualizer_loader import load_visualizer_module
from visualizers.factor_finder.game import FactorFinderScene
from visualizers.lcm_bridge.game import LCMBridgeScene
from visualizers.multiples_reveal.game import MultiplesRevealScene

from scene_helpers import click, frame, press


@pytest.fixture
def menu(manager, context, exits):
    scene = MainMenu(manager, context, {"factor_finder": {"numbers": [6]}}, on_exit=exits.append)
    manager.push(scene)
    return scene


def button(menu, key):
    return next(b for b in menu.buttons if b.key == key)


def test_every_activity_has_a_launch_entry():
    for key, _ in ACTIVITIES:
        assert callable(load_visualizer_module(key).launch)


def test_unknown_activity_is_not_loaded(menu):
    assert load_visualizer_module("") is None
    assert load_visualizer_module("no_such_activity") is None
    assert menu.open("no_such_activity") is None
    assert menu.manager.scenes == [menu]


def test_click_opens_activity_with_its_options(menu, manager):
    frame(menu)
    click(menu, button(menu, "factor_finder").rect.center)
    scene = manager.scenes[-1]
    assert isinstance(scene, FactorFinderScene)
    assert scene.numbers == [6]


def test_leaving_an_activity_returns_to_the_menu(menu, manager, context, exits):
    click(menu, button(menu, "lcm_bridge").rect.center)
    assert isinstance(manager.scenes[-1], LCMBridgeScene)
    press(manager.scenes[-1], pygame.K_ESCAPE)
    assert manager.scenes == [menu]
    assert exits == [context]


def test_keyboard_navigation(menu, manager):
    press(menu, pygame.K_DOWN)
    assert menu.selected == 1
    press(menu, pygame.K_RETURN)
    assert isinstance(manager.scenes[-1], MultiplesRevealScene)

    press(menu, pygame.K_UP)
    press(menu, pygame.K_UP)
    assert menu.selected == len(menu.buttons) - 1  # wraps to Exit


def test_exit_posts_quit(menu):
    pygame.event.clear()
    click(menu, button(menu, None).rect.center)
    assert any(e.type == pygame.QUIT for e in pygame.event.get())
