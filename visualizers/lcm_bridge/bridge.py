"""Bridge span and the IDLE / READY / IN_PROGRESS / DONE crossing states."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import BridgeConfig

log = logging.getLogger(__name__)


class CrossingState(str, Enum):
    IDLE = "idle"
    READY = "ready"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class DragHandle(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class BridgeSpan:
    """Bridge box in container coordinates; ``vertical_offset`` is measured up from the container bottom."""

    left: float = 0.0
    width: float = 0.0
    vertical_offset: float = 0.0
    editable: bool = False
    customized: bool = False  # the user dragged a handle

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def placed(self) -> bool:
        return self.width > 0


class BridgeStateMachine:
    """
    Lifecycle of the bridge for one question:

        IDLE --offer--> READY --walk--> IN_PROGRESS --timer--> DONE

    ``retract`` and ``reset`` drop back to IDLE from anywhere.
    """

    def __init__(self, config: Optional[BridgeConfig] = None):
        self.config = config or BridgeConfig()
        self.state = CrossingState.IDLE
        self.span: Optional[BridgeSpan] = None
        self.dragging: Optional[DragHandle] = None

    # -----------------------------------------------------
    #   Queries
    # -----------------------------------------------------
    @property
    def visible(self) -> bool:
        return self.span is not None and self.state in (CrossingState.READY, CrossingState.IN_PROGRESS)

    @property
    def editable(self) -> bool:
        return self.span is not None and self.span.editable

    @property
    def accepts_blocks(self) -> bool:
        return self.state is CrossingState.IDLE

    # -----------------------------------------------------
    #   Transitions
    # -----------------------------------------------------
    def offer(self, stacks_equal: bool) -> bool:
        if self.state is CrossingState.READY:
            return True
        if self.state is not CrossingState.IDLE or not stacks_equal:
            return False
        self.state = CrossingState.READY
        self.span = BridgeSpan(editable=True)
        log.debug("bridge offered")
        return True

    def start_crossing(self, stacks_equal: bool) -> bool:
        if self.state is not CrossingState.READY or not stacks_equal:
            log.debug("walk rejected in state %s (equal=%s)", self.state.value, stacks_equal)
            return False
        self.state = CrossingState.IN_PROGRESS
        self.dragging = None
        if self.span is not None:
            self.span.editable = False
        log.debug("crossing started")
        return True

    def finish_crossing(self) -> bool:
        if self.state is not CrossingState.IN_PROGRESS:
            return False
        self.state = CrossingState.DONE
        self.span = None
        log.debug("crossing done")
        return True

    def retract(self):
        if self.span is not None or self.state is not CrossingState.IDLE:
            log.debug("bridge retracted from %s", self.state.value)
        self.state = CrossingState.IDLE
        self.span = None
        self.dragging = None

    def reset(self):
        self.retract()

    # -----------------------------------------------------
    #   Drag-resize while READY
    # -----------------------------------------------------
    def begin_drag(self, handle: DragHandle) -> bool:
        if self.state is not CrossingState.READY or not self.editable or not self.span.placed:
            return False
        self.dragging = DragHandle(handle)
        return True

    def drag_to(self, x: float) -> bool:
        """Move the grabbed edge to container x, respecting the minimum width."""
        if self.dragging is None or not self.editable:
            return False
        span = self.span
        floor = self.config.drag_min_width
        if self.dragging is DragHandle.LEFT:
            right = span.right
            new_left = max(0.0, min(x, max(0.0, right - floor)))
            span.width = max(floor, right - new_left)
            span.left = new_left
        else:
            span.width = max(floor, x - span.left)
        span.customized = True
        return True

    def end_drag(self):
        self.dragging = None
