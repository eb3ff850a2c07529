from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .math import clamp

if TYPE_CHECKING:
    import pyray as rl


@dataclass(slots=True, frozen=True)
class RGBA:
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    @classmethod
    def from_hex(cls, value: int, *, alpha: float = 1.0) -> RGBA:
        inv_255 = 1.0 / 255.0
        return cls(
            float((value >> 16) & 0xFF) * inv_255,
            float((value >> 8) & 0xFF) * inv_255,
            float(value & 0xFF) * inv_255,
            float(alpha),
        )

    def clamped(self) -> RGBA:
        return RGBA(
            r=clamp(self.r, 0.0, 1.0),
            g=clamp(self.g, 0.0, 1.0),
            b=clamp(self.b, 0.0, 1.0),
            a=clamp(self.a, 0.0, 1.0),
        )

    def with_alpha(self, alpha: float) -> RGBA:
        return RGBA(self.r, self.g, self.b, float(alpha))

    def to_rl(self) -> rl.Color:
        import pyray as rl

        c = self.clamped()
        return rl.Color(
            int(c.r * 255.0 + 0.5),
            int(c.g * 255.0 + 0.5),
            int(c.b * 255.0 + 0.5),
            int(c.a * 255.0 + 0.5),
        )


WHITE = RGBA()
