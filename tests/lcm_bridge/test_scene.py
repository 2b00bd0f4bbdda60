"""Drives the pygame scene headlessly with synthetic input events."""

import pygame
import pytest

from visualizers.lcm_bridge import Actor, CrossingState
from visualizers.lcm_bridge.game import MINIGAME_ID, launch

from scene_helpers import click, frame, press


@pytest.fixture
def scene(manager, context, exits):
    return launch(manager, context, exits.append, pairs=[(4, 4), (3, 5)])


def build_equal(scene):
    click(scene, scene.layout.buttons["add_primary"].center)
    click(scene, scene.layout.buttons["add_secondary"].center)
    frame(scene)


def test_full_crossing_through_input(scene):
    build_equal(scene)
    assert scene.engine.report_stack_contents(Actor.PRIMARY) == (4,)
    assert scene.engine.report_stack_contents(Actor.SECONDARY) == (4,)

    press(scene, pygame.K_b, "b")
    frame(scene)
    span = scene.engine.span
    container = scene.layout.container
    primary_stack = scene.layout.rects["primary_stack"]
    secondary_stack = scene.layout.rects["secondary_stack"]
    assert span.left == primary_stack.left - container.left
    assert span.width == secondary_stack.right - primary_stack.left
    assert "handle_left" in scene.layout.buttons

    click(scene, scene.layout.buttons["walk"].center)
    assert scene.engine.state is CrossingState.IN_PROGRESS
    frame(scene)
    frame(scene, 1.0)
    frame(scene, 1.0)
    assert scene.engine.state is CrossingState.DONE
    assert scene.engine.resting_position is not None


def test_unequal_bridge_shows_message(scene):
    click(scene, scene.layout.buttons["add_primary"].center)
    frame(scene)
    click(scene, scene.layout.buttons["bridge"].center)
    assert scene.engine.message
    frame(scene, 2.0)
    assert scene.engine.message == ""


def test_dragging_right_handle_resizes_bridge(scene):
    build_equal(scene)
    press(scene, pygame.K_b, "b")
    frame(scene)
    width = scene.engine.span.width
    handle = scene.layout.buttons["handle_right"]

    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=handle.center))
    scene.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(handle.centerx - 60, handle.centery), rel=(-60, 0), buttons=(1, 0, 0)))
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(handle.centerx - 60, handle.centery)))
    frame(scene)

    assert scene.engine.span.width == width - 60
    assert scene.engine.span.customized
    assert scene.engine.bridge.dragging is None


def test_submit_records_result_and_resets_stacks(scene, context):
    build_equal(scene)
    press(scene, pygame.K_4, "4")
    press(scene, pygame.K_RETURN, "\r")

    assert context.last_result["outcome"] == "pass"
    assert context.last_result["question"] == (4, 4)
    assert scene.banner.active
    assert scene.engine.report_stack_contents(Actor.PRIMARY) == ()
    frame(scene, 1.1)
    assert not scene.banner.active


def test_next_question_swaps_block_sizes(scene):
    build_equal(scene)
    press(scene, pygame.K_RIGHT)
    assert scene.deck.index == 1
    assert scene.engine.report_stack_contents(Actor.PRIMARY) == ()
    click(scene, scene.layout.buttons["add_primary"].center)
    click(scene, scene.layout.buttons["add_secondary"].center)
    assert scene.engine.report_stack_contents(Actor.PRIMARY) == (3,)
    assert scene.engine.report_stack_contents(Actor.SECONDARY) == (5,)


def test_stacks_survive_relaunch(manager, context, exits, scene):
    build_equal(scene)
    assert context.flags[MINIGAME_ID] == {"question": 0, "primary": [4], "secondary": [4]}

    again = launch(manager, context, exits.append, pairs=[(4, 4), (3, 5)])
    assert again.engine.report_stack_contents(Actor.PRIMARY) == (4,)
    assert again.engine.stacks_equal


def test_escape_leaves_scene(scene, manager, context, exits):
    press(scene, pygame.K_ESCAPE)
    press(scene, pygame.K_ESCAPE)
    assert manager.popped == 1
    assert exits == [context]
    assert context.last_result["outcome"] == "quit"
