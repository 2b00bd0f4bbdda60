from __future__ import annotations

import importlib
import logging

log = logging.getLogger(__name__)


def load_visualizer_module(visualizer_id: str, module: str = "game"):
    """Import ``visualizers.<id>.<module>``; None when it is missing or broken."""
    if not visualizer_id:
        return None
    module_name = f"visualizers.{visualizer_id}.{module}"
    try:
        return importlib.import_module(module_name)
    except ImportError:
        log.exception("could not load %s", module_name)
        return None
