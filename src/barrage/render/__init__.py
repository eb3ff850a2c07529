from __future__ import annotations

__all__ = [
    "binding",
    "raylib_view",
]
