"""Number-theory visualizers; each sub-package exposes ``launch``."""
