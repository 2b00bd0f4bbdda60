"""
stacks.py
---------
Block stacks for the two actors and the equality check that gates the bridge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple

from visualizers.shared.arithmetic import blocks_height, is_block_size, total, visual_blocks_height

from .config import BridgeConfig

log = logging.getLogger(__name__)


class Actor(str, Enum):
    PRIMARY = "primary"  # father, stays put
    SECONDARY = "secondary"  # son, walks across

    @property
    def other(self) -> "Actor":
        return Actor.SECONDARY if self is Actor.PRIMARY else Actor.PRIMARY


class BlockStack:
    """Append-only run of block sizes for one actor."""

    def __init__(self, actor: Actor, scale: int, gap: int = 0):
        self.actor = actor
        self.scale = scale
        self.gap = gap
        self._blocks = []

    @property
    def blocks(self) -> Tuple[int, ...]:
        return tuple(self._blocks)

    @property
    def empty(self) -> bool:
        return not self._blocks

    @property
    def total(self) -> int:
        return total(self._blocks)

    @property
    def height(self) -> int:
        return blocks_height(self._blocks, self.scale)

    @property
    def visual_height(self) -> int:
        return visual_blocks_height(self._blocks, self.scale, self.gap)

    def append(self, size: int):
        self._blocks.append(size)

    def clear(self):
        self._blocks = []

    def __len__(self):
        return len(self._blocks)

    def __repr__(self):
        return f"<BlockStack {self.actor.value} {self._blocks}>"


class StackModel:
    """Both actors' stacks. ``locked`` is set by the engine once a bridge is up."""

    def __init__(self, config: Optional[BridgeConfig] = None):
        self.config = config or BridgeConfig()
        self.stacks: Dict[Actor, BlockStack] = {
            actor: BlockStack(actor, self.config.block_scale, self.config.block_gap)
            for actor in Actor
        }
        self.locked = False
        self.listeners = []

    def subscribe(self, callback: Callable[[Actor, Tuple[int, ...]], None]):
        self.listeners.append(callback)

    def _notify(self, actor: Actor):
        blocks = self.stacks[actor].blocks
        for callback in self.listeners:
            callback(actor, blocks)

    def append_block(self, actor: Actor, size) -> bool:
        if self.locked:
            log.debug("append to %s ignored: stacks locked", actor.value)
            return False
        if not is_block_size(size):
            log.debug("append to %s ignored: bad block size %r", actor.value, size)
            return False
        self.stacks[actor].append(size)
        self._notify(actor)
        return True

    def restore(self, actor: Actor, blocks: Iterable[int]) -> bool:
        """Replace one stack with previously reported contents."""
        blocks = list(blocks)
        if self.locked or not all(is_block_size(b) for b in blocks):
            return False
        stack = self.stacks[actor]
        stack.clear()
        for size in blocks:
            stack.append(size)
        self._notify(actor)
        return True

    def reset(self):
        self.locked = False
        for actor, stack in self.stacks.items():
            if not stack.empty:
                stack.clear()
                self._notify(actor)

    def blocks_of(self, actor: Actor) -> Tuple[int, ...]:
        return self.stacks[actor].blocks

    def height_of(self, actor: Actor) -> int:
        return self.stacks[actor].height

    def visual_height_of(self, actor: Actor) -> int:
        return self.stacks[actor].visual_height

    def display_height_of(self, actor: Actor) -> int:
        """Rendered box height: the initial placeholder while empty."""
        stack = self.stacks[actor]
        if stack.empty:
            return self.config.initial_stack_height
        return stack.visual_height

    def tallest_display_height(self) -> int:
        return max(self.display_height_of(actor) for actor in Actor)


@dataclass
class EqualityChange:
    equal: bool
    dropped: bool  # was equal before this evaluation, is not now


class EqualityDetector:
    """Re-derived after every mutation; never raises the bridge on its own."""

    def __init__(self, model: StackModel):
        self.model = model
        self.equal = False

    def evaluate(self) -> bool:
        primary = self.model.stacks[Actor.PRIMARY]
        secondary = self.model.stacks[Actor.SECONDARY]
        # Raw heights only; the visual gap depends on block count.
        return not primary.empty and not secondary.empty and primary.height == secondary.height

    def refresh(self) -> EqualityChange:
        previous = self.equal
        self.equal = self.evaluate()
        change = EqualityChange(equal=self.equal, dropped=previous and not self.equal)
        if change.dropped:
            log.debug("stacks no longer equal")
        return change

    def reset(self):
        self.equal = False
