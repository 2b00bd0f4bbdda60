"""Father-and-son stacking visualizer for least common multiples.

``game.launch`` builds the pygame scene; everything exported here runs
without a display.
"""

from .bridge import BridgeSpan, BridgeStateMachine, CrossingState, DragHandle
from .config import BridgeConfig
from .engine import StackBridgeEngine
from .geometry import BoundingBox, ElementId, GeometryResolver, StaticLayout
from .quiz import QuestionDeck
from .stacks import Actor

__all__ = [
    "Actor",
    "BoundingBox",
    "BridgeConfig",
    "BridgeSpan",
    "BridgeStateMachine",
    "CrossingState",
    "DragHandle",
    "ElementId",
    "GeometryResolver",
    "QuestionDeck",
    "StackBridgeEngine",
    "StaticLayout",
]
