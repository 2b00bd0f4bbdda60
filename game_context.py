"""
game_context.py
---------------
Session state shared between the shell and the visualizer scenes.
Holds persisted stacks (``flags``), the answer history and playtime.
"""


class GameContext:
    def __init__(self):
        self.flags = {}  # e.g. {"lcm_bridge": {"question": 2, "primary": [4, 4], ...}}
        self.results = []  # one dict per submitted answer, oldest first
        self.last_result = {}
        self.total_time = 0.0  # seconds

    def record_result(self, result):
        """Store a submission outcome and make it the most recent one."""
        self.last_result = dict(result)
        self.results.append(self.last_result)

    def add_playtime(self, dt):
        """Add delta-time (in seconds) to total runtime."""
        self.total_time += dt

    def summary(self):
        return {
            "flags": dict(self.flags),
            "results": list(self.results),
            "last_result": self.last_result,
            "total_time": self.total_time,
        }

    def __repr__(self):
        return (
            f"<GameContext answers={len(self.results)} "
            f"time={self.total_time:.1f}s>"
        )
