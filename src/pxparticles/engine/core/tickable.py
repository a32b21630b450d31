"""
どこで: `engine.core` の描画/更新インターフェース。
何を: 点描画 `draw_point` を持つ `PointDrawer`、1 フレーム実行 `run` を持つ
      `FrameRunnable`、`tick(dt)` を持つ `Tickable` の各 Protocol を定義。
なぜ: 描画バックエンドとパーティクル系を互いの具象型に依存させず、一様に扱うため。
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pxparticles.common.types import RGBA, Vec3


class PointDrawer(Protocol):
    """色付きの点を 1 つ描く外部能力。"""

    def draw_point(self, position: Vec3, color: RGBA, *, size: float | None = None) -> None:
        """`position` に `color`（RGBA 0–1）の点を描く。

        `size` はサイズ列を設定した生成器からのみキーワードで渡される。
        """


class FrameRunnable(Protocol):
    """ホストループから毎フレーム呼ばれるもの（ParticleSystem が満たす）。"""

    def run(self, drawer: PointDrawer, now: float | None = None) -> bool:
        """1 フレーム分を描く。生成継続中なら True。"""
        ...


@runtime_checkable
class Tickable(Protocol):
    """1 フレーム分の更新を行うインターフェース（FrameClock が満たす）。

    ホストの GUI ループは `tick` だけを知っていればよい。
    """

    def tick(self, dt: float | None = None) -> int:
        """内部状態を 1 フレームぶん進める。"""
        ...


__all__ = ["PointDrawer", "FrameRunnable", "Tickable"]
