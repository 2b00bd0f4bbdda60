import math

import pytest

from visualizers.lcm_bridge.bridge import BridgeSpan
from visualizers.lcm_bridge.config import BridgeConfig
from visualizers.lcm_bridge.geometry import BoundingBox, ElementId, GeometryResolver, StaticLayout


@pytest.fixture
def resolver(layout, config):
    return GeometryResolver(layout, config)


def test_bounding_box_edges():
    box = BoundingBox(10, 20, 30, 40)
    assert box.right == 40
    assert box.bottom == 60
    assert box.usable
    assert not BoundingBox(math.nan, 0, 10, 10).usable
    assert not BoundingBox(0, 0, -1, 10).usable


def test_from_rect_reads_xywh():
    class Rect:
        x, y, w, h = 1, 2, 3, 4

    assert BoundingBox.from_rect(Rect()) == BoundingBox(1.0, 2.0, 3.0, 4.0)


def test_bridge_spans_outer_union_of_stacks(resolver):
    span = resolver.resolve_bridge(BridgeSpan(editable=True), fallback_height=80)
    assert span.left == 250
    assert span.width == 300


def test_bridge_sits_at_lower_feet_plus_clearance(resolver):
    span = resolver.resolve_bridge(BridgeSpan(), fallback_height=80)
    # son's feet are 160 above the bottom, father's 170
    assert span.vertical_offset == 164


def test_bridge_falls_back_to_stack_height_without_avatars(config, boxes):
    del boxes[ElementId.SECONDARY_AVATAR]
    resolver = GeometryResolver(StaticLayout(boxes), config)
    span = resolver.resolve_bridge(BridgeSpan(), fallback_height=100)
    assert span.vertical_offset == 100 - config.bridge_thickness


def test_fallback_never_negative(config, boxes):
    del boxes[ElementId.PRIMARY_AVATAR]
    resolver = GeometryResolver(StaticLayout(boxes), config)
    span = resolver.resolve_bridge(BridgeSpan(), fallback_height=10)
    assert span.vertical_offset == 0


def test_unmeasurable_stacks_leave_span_unchanged(config, boxes):
    del boxes[ElementId.PRIMARY_STACK]
    resolver = GeometryResolver(StaticLayout(boxes), config)
    span = BridgeSpan(left=12, width=34, vertical_offset=56)
    resolver.resolve_bridge(span, fallback_height=80)
    assert (span.left, span.width, span.vertical_offset) == (12, 34, 56)


def test_garbage_measurement_counts_as_unmeasurable(config, boxes):
    boxes[ElementId.CONTAINER] = BoundingBox(math.inf, 0, 800, 400)
    resolver = GeometryResolver(StaticLayout(boxes), config)
    span = BridgeSpan(left=1, width=2)
    resolver.resolve_bridge(span, fallback_height=80)
    assert (span.left, span.width) == (1, 2)
    assert resolver.resolve_anchors().start_left == 0


def test_customized_span_keeps_user_edges(resolver):
    span = BridgeSpan(left=270, width=120, editable=True, customized=True)
    resolver.resolve_bridge(span, fallback_height=80)
    assert (span.left, span.width) == (270, 120)
    assert span.vertical_offset == 164


def test_recompute_is_idempotent(resolver):
    span = BridgeSpan(editable=True)
    first = resolver.resolve_bridge(span, 80)
    snapshot = (first.left, first.width, first.vertical_offset)
    for _ in range(3):
        resolver.resolve_bridge(span, 80)
    assert (span.left, span.width, span.vertical_offset) == snapshot
    assert resolver.resolve_anchors() == resolver.resolve_anchors()


def test_walk_anchors_center_walker_over_stacks(resolver):
    anchors = resolver.resolve_anchors()
    assert anchors.start_left == 475  # son's stack 470 + (80 - 70) / 2
    assert anchors.end_left == 255


def test_anchors_relative_to_container(boxes):
    boxes = {k: BoundingBox(v.left + 100, v.top, v.width, v.height) for k, v in boxes.items()}
    resolver = GeometryResolver(StaticLayout(boxes), BridgeConfig())
    anchors = resolver.resolve_anchors()
    assert (anchors.start_left, anchors.end_left) == (475, 255)


def test_narrow_stack_does_not_shift_walker_left(boxes):
    boxes[ElementId.SECONDARY_STACK] = BoundingBox(470, 280, 50, 80)
    resolver = GeometryResolver(StaticLayout(boxes), BridgeConfig())
    assert resolver.resolve_anchors().start_left == 470


def test_anchors_kept_when_unmeasurable(resolver, layout):
    resolver.resolve_anchors()
    layout.boxes.clear()
    anchors = resolver.resolve_anchors()
    assert (anchors.start_left, anchors.end_left) == (475, 255)


def test_resting_bottom_matches_father_feet(resolver, layout):
    assert resolver.resolve_resting_bottom() == 170
    del layout.boxes[ElementId.PRIMARY_AVATAR]
    assert resolver.resolve_resting_bottom() == 170


def test_reset_clears_computed_values(resolver):
    resolver.resolve_anchors()
    resolver.resolve_resting_bottom()
    resolver.reset()
    assert resolver.anchors.start_left == 0
    assert resolver.resting_bottom == 0
