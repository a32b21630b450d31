"""
どこで: `engine.core.clock`
何を: 開始時刻 t0 を記録し、経過秒 `now - t0` を返す最小の時間源ラッパ `Clock`。
なぜ: パーティクル生成器/グループが同じ規則で経過時間を測り、テストでは
      偽の時間関数を注入して決定的に検証できるようにするため。

方針:
- 時間関数は既定で `time.perf_counter`（単調・高分解能）。
- `start()` を稼働中に再度呼ぶと t0 をリセットする（再始動）。
- 内部に並行性は無い。
"""

from __future__ import annotations

import time
from typing import Callable

from pxparticles.common.errors import NotStartedError

TimeFn = Callable[[], float]


class Clock:
    """開始時刻からの経過秒を返す時計。"""

    __slots__ = ("_time_fn", "_t0")

    def __init__(self, time_fn: TimeFn | None = None) -> None:
        self._time_fn: TimeFn = time_fn if time_fn is not None else time.perf_counter
        self._t0: float | None = None

    @property
    def time_fn(self) -> TimeFn:
        return self._time_fn

    @property
    def is_running(self) -> bool:
        return self._t0 is not None

    @property
    def started_at(self) -> float | None:
        return self._t0

    def now(self) -> float:
        """時間源の現在値 [秒]。"""
        return float(self._time_fn())

    def start(self, now: float | None = None) -> float:
        """t0 を `now`（省略時は現在時刻）に設定して返す。稼働中ならリセット。"""
        self._t0 = self.now() if now is None else float(now)
        return self._t0

    def elapsed(self, now: float | None = None) -> float:
        """`now - t0` [秒]。未開始なら `NotStartedError`。"""
        if self._t0 is None:
            raise NotStartedError("clock has not been started")
        t = self.now() if now is None else float(now)
        return t - self._t0

    def advance(self, seconds: float) -> None:
        """t0 を `seconds` だけ後ろへずらす（ループ周期の切り替えで使用）。"""
        if self._t0 is None:
            raise NotStartedError("clock has not been started")
        self._t0 += float(seconds)

    def stop(self) -> None:
        """t0 を破棄する。以後 `elapsed()` は再 `start()` まで失敗する。"""
        self._t0 = None

    def __repr__(self) -> str:
        return f"Clock(t0={self._t0!r})"


__all__ = ["Clock", "TimeFn"]
