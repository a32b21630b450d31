"""
どこで: `systems.particle`
何を: 生成時刻・寿命（decay）・生成時点の位置/色スナップショットを持つ単一パーティクル。
なぜ: 生成器の周期とは独立に、各パーティクルが自分の寿命で消えるようにするため。

サイズ:
- `size` は生成時点で決まる点の大きさ（未指定なら None）。None のときは
  `draw_point(position, color)` のみで呼び、描画先の既定サイズに任せる。

寿命規則:
- `now - spawn_time <= decay` の間は生存（描画される）。
- `now - spawn_time > decay` で消滅。
"""

from __future__ import annotations

from dataclasses import dataclass

from pxparticles.common.types import RGBA, Vec3
from pxparticles.engine.core.tickable import PointDrawer
from pxparticles.util.color import with_alpha


def fade_color(color: RGBA, age: float, decay: float) -> RGBA:
    """経過 `age` に応じてアルファを線形に 0 へ落とした色を返す。"""
    if decay <= 0.0:
        return with_alpha(color, 0.0)
    return with_alpha(color, color[3] * (1.0 - age / decay))


@dataclass(frozen=True)
class Particle:
    """1 つのパーティクル（不変）。"""

    position: Vec3
    color: RGBA
    spawn_time: float
    decay: float
    size: float | None = None

    def age(self, now: float) -> float:
        return now - self.spawn_time

    def is_alive(self, now: float) -> bool:
        return now - self.spawn_time <= self.decay

    def color_at(self, now: float, *, fade: bool = False) -> RGBA:
        if not fade:
            return self.color
        return fade_color(self.color, max(0.0, self.age(now)), self.decay)

    def draw(self, drawer: PointDrawer, now: float, *, fade: bool = False) -> bool:
        """生存中なら `drawer` に描いて True、寿命切れなら何もせず False。"""
        if not self.is_alive(now):
            return False
        color = self.color_at(now, fade=fade)
        if self.size is None:
            drawer.draw_point(self.position, color)
        else:
            drawer.draw_point(self.position, color, size=self.size)
        return True


__all__ = ["Particle", "fade_color"]
