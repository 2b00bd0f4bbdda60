import pytest

from visualizers.lcm_bridge import Actor, CrossingState, DragHandle, StackBridgeEngine, StaticLayout
from visualizers.lcm_bridge.config import BridgeConfig


def build(engine, primary, secondary):
    for size in primary:
        assert engine.append_block(Actor.PRIMARY, size)
    for size in secondary:
        assert engine.append_block(Actor.SECONDARY, size)


def reach_ready(engine):
    engine.add_block(Actor.PRIMARY)
    engine.add_block(Actor.SECONDARY)
    assert engine.offer_bridge()
    return engine


def reach_in_progress(engine):
    reach_ready(engine)
    assert engine.walk_across()
    return engine


class TestScenarios:
    def test_equal_single_blocks_offer_bridge(self, engine):
        engine.add_block(Actor.PRIMARY)
        engine.add_block(Actor.SECONDARY)
        assert engine.stacks_equal
        assert engine.offer_bridge()
        assert engine.state is CrossingState.READY
        assert engine.span.editable

    def test_unequal_heights_show_message(self, engine):
        build(engine, [3], [5])
        assert engine.offer_bridge() is False
        assert engine.state is CrossingState.IDLE
        assert engine.message == "Heights are not the same. Try again."
        assert engine.span is None

    def test_blocks_disabled_while_ready(self, engine):
        reach_ready(engine)
        span = engine.span
        assert engine.add_block(Actor.PRIMARY) is False
        assert engine.report_stack_contents(Actor.PRIMARY) == (4,)
        assert engine.state is CrossingState.READY
        assert engine.span is span

    def test_new_question_cancels_crossing(self, engine, scheduler):
        reach_in_progress(engine)
        scheduler.advance(1000)
        assert engine.notify_question_changed("q-2")

        assert engine.state is CrossingState.IDLE
        assert engine.report_stack_contents(Actor.PRIMARY) == ()
        assert engine.report_stack_contents(Actor.SECONDARY) == ()
        assert scheduler.pending == 0
        scheduler.advance(5000)
        assert engine.state is CrossingState.IDLE
        assert not engine.traveler_hidden

    def test_left_drag_clamped_to_forty(self, engine):
        reach_ready(engine)
        span = engine.span
        span.left, span.width = 250.0, 100.0
        assert engine.begin_drag(DragHandle.LEFT)
        engine.drag_to(330.0)
        engine.release_drag()
        assert engine.span.width == 40


def test_offer_succeeds_iff_sums_match(layout, config):
    for a in (2, 3, 4, 6):
        for b in (2, 3, 4, 6):
            for i in range(0, 4):
                for j in range(0, 4):
                    engine = StackBridgeEngine(layout, config)
                    engine.set_block_sizes(a, b)
                    for _ in range(i):
                        engine.add_block(Actor.PRIMARY)
                    for _ in range(j):
                        engine.add_block(Actor.SECONDARY)
                    expected = i > 0 and j > 0 and a * i == b * j
                    assert engine.offer_bridge() is expected, (a, b, i, j)


def test_bridge_retracts_when_equality_breaks(engine):
    build(engine, [4], [4])
    # Put a bridge up behind the engine's back while blocks are still accepted.
    engine.bridge.offer(stacks_equal=True)
    engine.bridge.state = CrossingState.IDLE
    engine.model.append_block(Actor.PRIMARY, 4)
    engine.recompute()
    assert engine.bridge.span is None
    assert engine.state is CrossingState.IDLE


def test_walk_only_from_ready(engine):
    assert engine.walk_across() is False
    build(engine, [4], [4])
    assert engine.can_walk is False
    assert engine.walk_across() is False
    engine.offer_bridge()
    assert engine.can_walk
    assert engine.walk_across()
    assert engine.walk_across() is False


def test_no_blocks_during_or_after_crossing(engine, scheduler):
    reach_in_progress(engine)
    assert engine.add_block(Actor.SECONDARY) is False
    assert engine.offer_bridge() is False
    scheduler.advance(0)
    scheduler.advance(2000)
    assert engine.state is CrossingState.DONE
    assert engine.add_block(Actor.PRIMARY) is False
    assert engine.offer_bridge() is False
    assert engine.walk_across() is False


def test_crossing_uses_resolved_geometry(engine, scheduler, config):
    reach_ready(engine)
    span = engine.span
    assert (span.left, span.width, span.vertical_offset) == (250, 300, 164)

    engine.walk_across()
    assert engine.span.editable is False
    assert engine.traveler_left == 475
    assert engine.traveler_offset == 164 + config.bridge_thickness
    assert engine.traveler_hidden

    scheduler.advance(0)
    scheduler.advance(1999)
    assert engine.state is CrossingState.IN_PROGRESS
    scheduler.advance(1)
    assert engine.state is CrossingState.DONE
    assert engine.span is None
    assert engine.traveler_hidden
    assert engine.resting_position == (92, 180)


@pytest.mark.parametrize("signal", ["question", "submit", "reset"])
def test_reset_is_total_from_every_state(engine, scheduler, signal):
    fire = {
        "question": lambda n: engine.notify_question_changed(f"q{n}"),
        "submit": lambda n: engine.notify_submitted(n),
        "reset": lambda n: engine.reset(),
    }[signal]
    drivers = [
        lambda: None,
        lambda: build(engine, [4], [4, 4]),
        lambda: reach_ready(engine),
        lambda: reach_in_progress(engine),
        lambda: (reach_in_progress(engine), scheduler.advance(0), scheduler.advance(2000)),
    ]
    for n, drive in enumerate(drivers):
        drive()
        fire(n)
        assert engine.state is CrossingState.IDLE
        assert engine.report_stack_contents(Actor.PRIMARY) == ()
        assert engine.report_stack_contents(Actor.SECONDARY) == ()
        assert engine.message == ""
        assert not engine.traveler_hidden
        assert scheduler.pending == 0


def test_unchanged_tokens_do_not_reset(engine):
    assert engine.notify_question_changed(1)
    assert engine.notify_submitted(7)
    engine.add_block(Actor.PRIMARY)
    assert engine.notify_question_changed(1) is False
    assert engine.notify_submitted(7) is False
    assert engine.report_stack_contents(Actor.PRIMARY) == (4,)


def test_message_clears_after_delay(engine, scheduler):
    build(engine, [4], [4, 4])
    engine.offer_bridge()
    scheduler.advance(1999)
    assert engine.message
    scheduler.advance(1)
    assert engine.message == ""


def test_repeated_failure_restarts_message_timer(engine, scheduler):
    build(engine, [4], [4, 4])
    engine.offer_bridge()
    scheduler.advance(1500)
    engine.offer_bridge()
    scheduler.advance(1500)
    assert engine.message
    scheduler.advance(500)
    assert engine.message == ""


def test_successful_offer_clears_message(engine):
    build(engine, [4], [4, 4])
    engine.offer_bridge()
    engine.add_block(Actor.PRIMARY)
    assert engine.offer_bridge()
    assert engine.message == ""


def test_set_block_sizes_resets_and_validates(engine):
    build(engine, [4], [4])
    engine.set_block_sizes(3, 5)
    assert engine.report_stack_contents(Actor.PRIMARY) == ()
    engine.add_block(Actor.PRIMARY)
    engine.add_block(Actor.SECONDARY)
    assert engine.report_stack_contents(Actor.PRIMARY) == (3,)
    assert engine.report_stack_contents(Actor.SECONDARY) == (5,)
    with pytest.raises(ValueError):
        engine.set_block_sizes(0, 4)
    with pytest.raises(ValueError):
        engine.set_block_sizes(2, "3")


def test_stack_listener_and_restore(layout, config):
    seen = []
    engine = StackBridgeEngine(layout, config, on_stacks_changed=lambda a, b: seen.append((a, b)))
    engine.set_block_sizes(2, 3)
    engine.add_block(Actor.SECONDARY)
    assert seen[-1] == (Actor.SECONDARY, (3,))

    assert engine.restore_stacks([2, 2, 2], [3, 3])
    assert engine.stacks_equal
    assert engine.offer_bridge()
    assert engine.restore_stacks([2], [3]) is False


def test_geometry_refresh_waits_for_next_frame(engine, scheduler, layout):
    engine.add_block(Actor.PRIMARY)
    assert engine.anchors.start_left == 0
    scheduler.advance(16)
    assert engine.anchors.start_left == 475


def test_unmeasurable_layout_never_blocks_interaction(config, scheduler):
    engine = StackBridgeEngine(StaticLayout(), config, scheduler)
    engine.set_block_sizes(5, 5)
    engine.add_block(Actor.PRIMARY)
    engine.add_block(Actor.SECONDARY)
    scheduler.advance(16)
    assert engine.offer_bridge()
    assert engine.walk_across()
    scheduler.advance(0)
    scheduler.advance(2000)
    assert engine.state is CrossingState.DONE


def test_snapshot_and_repr(engine):
    build(engine, [4], [4])
    snap = engine.snapshot()
    assert snap == {
        "state": "idle",
        "primary": [4],
        "secondary": [4],
        "stacks_equal": True,
        "message": "",
    }
    assert "idle" in repr(engine)


def test_custom_config_is_honoured(layout, scheduler):
    config = BridgeConfig(crossing_duration_ms=500, message_clear_ms=100)
    engine = StackBridgeEngine(layout, config, scheduler)
    engine.set_block_sizes(2, 3)
    engine.add_block(Actor.PRIMARY)
    engine.add_block(Actor.SECONDARY)
    engine.offer_bridge()
    scheduler.advance(100)
    assert engine.message == ""
    engine.add_block(Actor.PRIMARY)
    engine.add_block(Actor.PRIMARY)
    engine.add_block(Actor.SECONDARY)
    engine.offer_bridge()
    engine.walk_across()
    scheduler.advance(0)
    scheduler.advance(500)
    assert engine.state is CrossingState.DONE
