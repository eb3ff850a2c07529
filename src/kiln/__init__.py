from __future__ import annotations

__all__ = [
    "app",
    "color",
    "geom",
    "math",
    "timers",
]
