"""Tunable constants for the stacks, bridge and crossing."""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Tuple


@dataclass
class BridgeConfig:
    block_scale: int = 10  # px per unit of block size
    initial_stack_height: int = 60  # px shown for an empty stack
    block_gap: int = 4  # px between rendered blocks
    crossing_duration_ms: int = 2000
    bridge_thickness: int = 24
    drag_min_width: int = 40
    message_clear_ms: int = 2000
    feet_clearance: int = 4
    walker_width: int = 70
    final_stand_offset: int = 92
    final_stand_delta: int = 10
    unequal_message: str = "Heights are not the same. Try again."
    easing: Tuple[float, float, float, float] = (0.5, 1.3, 0.5, 1.0)

    def __post_init__(self):
        for name in (
            "block_scale",
            "crossing_duration_ms",
            "bridge_thickness",
            "drag_min_width",
            "message_clear_ms",
            "walker_width",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        for name in ("initial_stack_height", "block_gap", "feet_clearance"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)!r}")
        if len(self.easing) != 4:
            raise ValueError("easing needs four control values")

    @classmethod
    def from_mapping(cls, payload: Dict[str, Any]) -> "BridgeConfig":
        """Build a config from loosely-typed values (CLI, JSON); unknown keys are ignored."""

        def _coerce(value: Any, default: Any) -> Any:
            if isinstance(default, int):
                try:
                    return int(value)
                except (TypeError, ValueError):
                    raise ValueError(f"expected an integer, got {value!r}") from None
            if isinstance(default, tuple):
                if isinstance(value, str):
                    value = value.split(",")
                return tuple(float(v) for v in value)
            return str(value)

        defaults = cls()
        values = {}
        for f in fields(cls):
            if f.name in payload and payload[f.name] is not None:
                values[f.name] = _coerce(payload[f.name], getattr(defaults, f.name))
        return cls(**values)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
