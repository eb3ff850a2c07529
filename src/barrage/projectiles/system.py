from __future__ import annotations

from kiln.geom import Rect, Vec2

from ..config import BulletDef, GameConfig, default_config
from ..debug_log import trace
from .patterns import circle_angles, fan_angles, player_spread_barrels
from .types import Owner, Projectile, ProjectileListener, TurnMode

__all__ = ["BulletSystem"]


class BulletSystem:
    """Owns every live projectile: spawning, pattern fire, movement and culling."""

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        turn_mode: TurnMode = TurnMode.HORIZONTAL,
        listener: ProjectileListener | None = None,
    ) -> None:
        self._config = config if config is not None else default_config()
        self._turn_mode = turn_mode
        self._listener = listener
        self._bullets: list[Projectile] = []
        self._closed = False
        self._bounds = Rect(0.0, 0.0, float(self._config.width), float(self._config.height)).expanded(
            float(self._config.cull_margin)
        )

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def bounds(self) -> Rect:
        """Playfield grown by the cull margin; projectiles outside it are dropped."""
        return self._bounds

    @property
    def closed(self) -> bool:
        """True once `destroy()` ran; pattern fire is then ignored."""
        return self._closed

    @property
    def projectiles(self) -> list[Projectile]:
        return list(self._bullets)

    def __len__(self) -> int:
        return len(self._bullets)

    def fire(
        self,
        pos: Vec2,
        angle: float,
        definition: BulletDef,
        owner: Owner,
        turn_after_units: float = 0.0,
        turn_angle: float = 0.0,
    ) -> Projectile:
        if self._closed:
            raise RuntimeError("bullet system was destroyed")
        bullet = Projectile.launch(
            pos=pos,
            angle=angle,
            definition=definition,
            owner=owner,
            unit_size=self._config.unit_size,
            turn_after_units=turn_after_units,
            turn_angle=turn_angle,
            turn_mode=self._turn_mode,
        )
        self._bullets.append(bullet)
        if self._listener is not None:
            self._listener.spawned(bullet)
        return bullet

    def fire_player_spread(self, pos: Vec2) -> list[Projectile]:
        if self._closed:
            return []
        definition = self._config.player_bullet
        fired = [
            self.fire(pos, barrel.angle, definition, Owner.PLAYER, barrel.turn_after_units, barrel.turn_angle)
            for barrel in player_spread_barrels()
        ]
        trace("pattern", kind="spread", x=pos.x, y=pos.y, count=len(fired))
        return fired

    def fire_circle(self, pos: Vec2, count: int) -> list[Projectile]:
        if self._closed:
            return []
        definition = self._config.mob_bullet
        fired = [self.fire(pos, angle, definition, Owner.MONSTER) for angle in circle_angles(count)]
        trace("pattern", kind="circle", x=pos.x, y=pos.y, count=len(fired))
        return fired

    def fire_fan(self, pos: Vec2, spread_deg: float, count: int) -> list[Projectile]:
        if self._closed:
            return []
        definition = self._config.mob_bullet
        fired = [self.fire(pos, angle, definition, Owner.MONSTER) for angle in fan_angles(spread_deg, count)]
        trace("pattern", kind="fan", x=pos.x, y=pos.y, spread=spread_deg, count=len(fired))
        return fired

    def update(self, dt_ms: float) -> int:
        """Advance every projectile and drop the ones that left the bounds.

        Returns the number of projectiles culled this tick.
        """

        survivors: list[Projectile] = []
        culled: list[Projectile] = []
        for bullet in self._bullets:
            bullet.update(dt_ms)
            if self._bounds.contains(bullet.pos):
                survivors.append(bullet)
            else:
                culled.append(bullet)
        self._bullets = survivors

        for bullet in culled:
            self._release(bullet)
        return len(culled)

    def by_owner(self, owner: Owner) -> list[Projectile]:
        return [bullet for bullet in self._bullets if bullet.owner is owner]

    def player_bullets(self) -> list[Projectile]:
        return self.by_owner(Owner.PLAYER)

    def monster_bullets(self) -> list[Projectile]:
        return self.by_owner(Owner.MONSTER)

    def remove(self, bullet: Projectile) -> bool:
        for index, entry in enumerate(self._bullets):
            if entry is bullet:
                del self._bullets[index]
                self._release(bullet)
                return True
        return False

    def destroy(self) -> None:
        self._closed = True
        bullets = self._bullets
        self._bullets = []
        for bullet in bullets:
            self._release(bullet)

    def _release(self, bullet: Projectile) -> None:
        bullet.active = False
        if self._listener is not None:
            self._listener.removed(bullet)
