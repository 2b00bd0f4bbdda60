"""
geometry.py
-----------
Turns measured boxes of the rendered stacks and avatars into bridge and
walking coordinates.

All output is in container coordinates: x grows right from the container's
left edge, vertical offsets grow up from the container's bottom edge.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from .bridge import BridgeSpan
from .config import BridgeConfig

log = logging.getLogger(__name__)


class ElementId:
    CONTAINER = "container"
    PRIMARY_SECTION = "primary_section"
    PRIMARY_STACK = "primary_stack"
    SECONDARY_STACK = "secondary_stack"
    PRIMARY_AVATAR = "primary_avatar"
    SECONDARY_AVATAR = "secondary_avatar"


@dataclass(frozen=True)
class BoundingBox:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def usable(self) -> bool:
        values = (self.left, self.top, self.width, self.height)
        return all(math.isfinite(v) for v in values) and self.width >= 0 and self.height >= 0

    @classmethod
    def from_rect(cls, rect) -> "BoundingBox":
        """Accepts anything with x/y/w/h, e.g. a pygame.Rect."""
        return cls(float(rect.x), float(rect.y), float(rect.w), float(rect.h))


class LayoutOracle(Protocol):
    def measure(self, element_id: str) -> Optional[BoundingBox]:
        ...


class StaticLayout:
    """Oracle over a fixed dict of boxes; missing ids are unmeasurable."""

    def __init__(self, boxes: Optional[Dict[str, BoundingBox]] = None):
        self.boxes = dict(boxes or {})

    def measure(self, element_id: str) -> Optional[BoundingBox]:
        return self.boxes.get(element_id)


@dataclass
class WalkAnchors:
    start_left: float = 0.0
    end_left: float = 0.0


class GeometryResolver:
    def __init__(self, oracle: Optional[LayoutOracle] = None, config: Optional[BridgeConfig] = None):
        self.oracle = oracle or StaticLayout()
        self.config = config or BridgeConfig()
        self.anchors = WalkAnchors()
        self.resting_bottom = 0.0

    def reset(self):
        self.anchors = WalkAnchors()
        self.resting_bottom = 0.0

    def _measure(self, element_id: str) -> Optional[BoundingBox]:
        box = self.oracle.measure(element_id)
        if box is None or not box.usable:
            return None
        return box

    def _centered_left(self, parent: BoundingBox, box: BoundingBox) -> float:
        return box.left - parent.left + max(0.0, (box.width - self.config.walker_width) / 2)

    def resolve_anchors(self) -> WalkAnchors:
        """Son starts over his own stack and ends over the father's."""
        parent = self._measure(ElementId.CONTAINER)
        primary = self._measure(ElementId.PRIMARY_STACK)
        secondary = self._measure(ElementId.SECONDARY_STACK)
        if parent is None or primary is None or secondary is None:
            log.debug("anchors kept: stacks not measurable yet")
            return self.anchors
        self.anchors = WalkAnchors(
            start_left=self._centered_left(parent, secondary),
            end_left=self._centered_left(parent, primary),
        )
        return self.anchors

    def feet_offset(self, fallback_height: float) -> Optional[float]:
        """Bridge offset under the lower pair of feet, or the stack-height fallback."""
        parent = self._measure(ElementId.CONTAINER)
        if parent is None:
            return None
        primary = self._measure(ElementId.PRIMARY_AVATAR)
        secondary = self._measure(ElementId.SECONDARY_AVATAR)
        if primary is not None and secondary is not None:
            lowest = min(parent.bottom - primary.bottom, parent.bottom - secondary.bottom)
            return max(0.0, lowest + self.config.feet_clearance)
        return max(0.0, fallback_height - self.config.bridge_thickness)

    def resolve_bridge(self, span: BridgeSpan, fallback_height: float) -> BridgeSpan:
        """Update ``span`` in place from the current layout; unchanged if unmeasurable."""
        parent = self._measure(ElementId.CONTAINER)
        primary = self._measure(ElementId.PRIMARY_STACK)
        secondary = self._measure(ElementId.SECONDARY_STACK)
        if parent is None or primary is None or secondary is None:
            log.debug("bridge geometry kept: stacks not measurable yet")
            return span

        left_edge = min(primary.left, secondary.left) - parent.left
        right_edge = max(primary.right, secondary.right) - parent.left
        if not span.customized:
            span.left = left_edge
            span.width = right_edge - left_edge

        offset = self.feet_offset(fallback_height)
        if offset is not None:
            span.vertical_offset = offset
        return span

    def resolve_resting_bottom(self) -> float:
        """Height of the father's feet above the bottom of his section."""
        section = self._measure(ElementId.PRIMARY_SECTION)
        avatar = self._measure(ElementId.PRIMARY_AVATAR)
        if section is None or avatar is None:
            return self.resting_bottom
        self.resting_bottom = max(0.0, section.bottom - avatar.bottom)
        return self.resting_bottom
