"""
engine.py
---------
Stack-and-bridge core driven by a visualizer scene.

Every accepted action ends in ``recompute()``, which re-derives stack
equality, retracts a bridge that no longer fits, and queues a geometry
refresh for the next frame (after the scene has laid out the new stacks).
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Tuple

from visualizers.shared.arithmetic import is_block_size
from visualizers.shared.timers import Scheduler, TimerHandle

from .bridge import BridgeSpan, BridgeStateMachine, CrossingState, DragHandle
from .config import BridgeConfig
from .crossing import CrossingAnimator
from .geometry import GeometryResolver, LayoutOracle, WalkAnchors
from .stacks import Actor, EqualityDetector, StackModel

log = logging.getLogger(__name__)

_UNSET = object()


class StackBridgeEngine:
    def __init__(
        self,
        oracle: Optional[LayoutOracle] = None,
        config: Optional[BridgeConfig] = None,
        scheduler: Optional[Scheduler] = None,
        on_stacks_changed: Optional[Callable[[Actor, Tuple[int, ...]], None]] = None,
    ):
        self.config = config or BridgeConfig()
        self.scheduler = scheduler or Scheduler()
        self.model = StackModel(self.config)
        self.detector = EqualityDetector(self.model)
        self.bridge = BridgeStateMachine(self.config)
        self.resolver = GeometryResolver(oracle, self.config)
        self.animator = CrossingAnimator(self.scheduler, self.config)
        if on_stacks_changed:
            self.model.subscribe(on_stacks_changed)

        self.block_sizes = {Actor.PRIMARY: 2, Actor.SECONDARY: 3}
        self.message = ""
        self._message_handle: Optional[TimerHandle] = None
        self._geometry_handle: Optional[TimerHandle] = None
        self._question_token = _UNSET
        self._submit_token = _UNSET

    # -----------------------------------------------------
    #   Inbound signals from the quiz
    # -----------------------------------------------------
    def set_block_sizes(self, primary_size: int, secondary_size: int):
        if not (is_block_size(primary_size) and is_block_size(secondary_size)):
            raise ValueError(f"block sizes must be positive integers, got {primary_size!r}, {secondary_size!r}")
        self.reset()
        self.block_sizes = {Actor.PRIMARY: primary_size, Actor.SECONDARY: secondary_size}
        log.info("block sizes set to %d / %d", primary_size, secondary_size)

    def notify_question_changed(self, token) -> bool:
        if token == self._question_token:
            return False
        self._question_token = token
        self.reset()
        return True

    def notify_submitted(self, token) -> bool:
        if token == self._submit_token:
            return False
        self._submit_token = token
        self.reset()
        return True

    def reset(self):
        """Back to empty stacks and IDLE from any state; cancels every pending timer."""
        self.animator.cancel()
        for handle in (self._message_handle, self._geometry_handle):
            if handle is not None:
                handle.cancel()
        self._message_handle = self._geometry_handle = None
        self.message = ""
        self.bridge.reset()
        self.model.reset()
        self.detector.reset()
        self.resolver.reset()
        log.info("stacks and bridge reset")

    # -----------------------------------------------------
    #   User actions
    # -----------------------------------------------------
    @property
    def can_add_block(self) -> bool:
        return self.bridge.accepts_blocks

    def add_block(self, actor: Actor) -> bool:
        """Stack one more block of the current question's size for ``actor``."""
        return self.append_block(actor, self.block_sizes[Actor(actor)])

    def append_block(self, actor: Actor, size) -> bool:
        actor = Actor(actor)
        if not self.can_add_block:
            log.debug("block for %s ignored in state %s", actor.value, self.state.value)
            return False
        if not self.model.append_block(actor, size):
            return False
        self.recompute()
        return True

    def restore_stacks(self, primary: Iterable[int], secondary: Iterable[int]) -> bool:
        """Hand back contents a parent persisted from ``report_stack_contents``."""
        if not self.can_add_block:
            return False
        primary, secondary = list(primary), list(secondary)
        if not all(is_block_size(b) for b in primary + secondary):
            return False
        self.model.restore(Actor.PRIMARY, primary)
        self.model.restore(Actor.SECONDARY, secondary)
        self.recompute()
        return True

    @property
    def can_offer_bridge(self) -> bool:
        return self.state in (CrossingState.IDLE, CrossingState.READY)

    def offer_bridge(self) -> bool:
        if not self.can_offer_bridge:
            return False
        if not self.bridge.offer(self.stacks_equal):
            self._show_message(self.config.unequal_message)
            return False
        self.model.locked = True
        self._clear_message()
        self.refresh_geometry()
        return True

    def begin_drag(self, handle: DragHandle) -> bool:
        return self.bridge.begin_drag(handle)

    def drag_to(self, x: float) -> bool:
        return self.bridge.drag_to(x)

    def release_drag(self):
        self.bridge.end_drag()

    @property
    def can_walk(self) -> bool:
        return (
            self.bridge.visible
            and self.state is CrossingState.READY
            and self.stacks_equal
            and self.model.height_of(Actor.PRIMARY) > 0
        )

    def walk_across(self) -> bool:
        if not self.can_walk:
            return False
        if not self.bridge.start_crossing(self.stacks_equal):
            return False
        self.refresh_geometry()
        anchors = self.resolver.anchors
        span = self.bridge.span
        self.animator.begin(
            anchors.start_left,
            anchors.end_left,
            span.vertical_offset + self.config.bridge_thickness,
            on_arrive=self._on_arrived,
        )
        return True

    def _on_arrived(self):
        self.bridge.finish_crossing()
        self.resolver.resolve_resting_bottom()
        log.info("son reached the father")

    # -----------------------------------------------------
    #   Derived state
    # -----------------------------------------------------
    @property
    def state(self) -> CrossingState:
        return self.bridge.state

    @property
    def stacks_equal(self) -> bool:
        return self.detector.evaluate()

    @property
    def span(self) -> Optional[BridgeSpan]:
        return self.bridge.span if self.bridge.visible else None

    @property
    def anchors(self) -> WalkAnchors:
        return self.resolver.anchors

    @property
    def traveler_left(self) -> float:
        return self.animator.current_left

    @property
    def traveler_offset(self) -> float:
        return self.animator.y_offset

    @property
    def traveler_hidden(self) -> bool:
        return self.animator.traveler_hidden

    @property
    def resting_position(self) -> Optional[Tuple[float, float]]:
        if self.state is not CrossingState.DONE:
            return None
        return self.animator.resting_position(self.resolver.resting_bottom)

    def fallback_height(self) -> float:
        return float(self.model.tallest_display_height())

    def recompute(self):
        change = self.detector.refresh()
        if not change.equal and (change.dropped or self.bridge.span is not None):
            if self.state is CrossingState.IN_PROGRESS:
                self.animator.cancel()
            self.bridge.retract()
            self.model.locked = False
        self._schedule_geometry()

    def _schedule_geometry(self):
        if self._geometry_handle is not None and self._geometry_handle.active:
            return
        self._geometry_handle = self.scheduler.call_next_frame(self.refresh_geometry, label="geometry")

    def refresh_geometry(self):
        """Read the layout now and update anchors, bridge span and resting spot."""
        self.resolver.resolve_anchors()
        if self.bridge.span is not None:
            self.resolver.resolve_bridge(self.bridge.span, self.fallback_height())
        self.resolver.resolve_resting_bottom()

    def update(self, dt_ms: float):
        self.scheduler.advance(dt_ms)

    # -----------------------------------------------------
    #   Messages
    # -----------------------------------------------------
    def _show_message(self, text: str):
        if self._message_handle is not None:
            self._message_handle.cancel()
        self.message = text
        self._message_handle = self.scheduler.call_later(
            self.config.message_clear_ms, self._clear_message, label="message"
        )
        log.debug("message: %s", text)

    def _clear_message(self):
        if self._message_handle is not None:
            self._message_handle.cancel()
            self._message_handle = None
        self.message = ""

    # -----------------------------------------------------
    #   Outbound
    # -----------------------------------------------------
    def report_stack_contents(self, actor: Actor) -> Tuple[int, ...]:
        return self.model.blocks_of(Actor(actor))

    def snapshot(self) -> dict:
        return {
            "state": self.state.value,
            "primary": list(self.report_stack_contents(Actor.PRIMARY)),
            "secondary": list(self.report_stack_contents(Actor.SECONDARY)),
            "stacks_equal": self.stacks_equal,
            "message": self.message,
        }

    def __repr__(self):
        snap = self.snapshot()
        return f"<StackBridgeEngine {snap['state']} {snap['primary']} vs {snap['secondary']}>"
