"""
どこで: `engine.core` の簡易フレームドライバ。
何を: 登録された `FrameRunnable`（パーティクル系）を共有の現在時刻で固定順序に実行する FrameClock。
なぜ: ホストの描画ループから 1 行呼ぶだけで、複数の生成器を同一の時刻読み取りで駆動し、
      描画結果を 1 つのバッファに集めるため。
"""

from __future__ import annotations

import logging
from typing import Sequence

from pxparticles.common.errors import InvalidConfigError, NotRunningError

from .clock import Clock, TimeFn
from .points import PointBuffer
from .tickable import FrameRunnable, PointDrawer, Tickable

logger = logging.getLogger(__name__)


class FrameClock:
    """登録された系を毎フレーム同じ `now` で実行する極小クラス。

    引数:
        systems: 実行順に並んだ系。
        drawer: 描画先。省略時は `PointBuffer` を生成し、各 tick の先頭で clear する。
        time_fn: 時間源（系の Clock と同じものを渡すこと）。
    """

    def __init__(
        self,
        systems: Sequence[FrameRunnable],
        drawer: PointDrawer | None = None,
        *,
        time_fn: TimeFn | None = None,
    ) -> None:
        self._systems = tuple(systems)
        self._owns_buffer = drawer is None
        self._drawer: PointDrawer = drawer if drawer is not None else PointBuffer()
        self._clock = Clock(time_fn)
        self._frames = 0

    @property
    def drawer(self) -> PointDrawer:
        return self._drawer

    @property
    def frames(self) -> int:
        return self._frames

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> int:
        """全系を 1 フレーム実行し、生成継続中の系の数を返す。

        `dt` は pyglet 互換のために受け取るだけで、時刻は時間源から 1 度だけ読む。
        """
        now = self._clock.now()
        if self._owns_buffer and isinstance(self._drawer, PointBuffer):
            self._drawer.clear()
        generating = 0
        for s in self._systems:
            try:
                if s.run(self._drawer, now):
                    generating += 1
            except NotRunningError:
                logger.debug("skipping system that has not been started: %r", s)
        self._frames += 1
        return generating


def drive(target: Tickable, frames: int, dt: float | None = None) -> list[int]:
    """`target.tick(dt)` を `frames` 回呼び、各回の戻り値を返す（ヘッドレス実行・書き出し用）。"""
    if frames < 0:
        raise InvalidConfigError(f"frames must be >= 0: {frames!r}")
    return [target.tick(dt) for _ in range(frames)]


__all__ = ["FrameClock", "drive"]
