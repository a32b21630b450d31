"""
どこで: `systems.base`
何を: パーティクル系の共通能力 {start, start_loop, run, stop, period} と状態機械を実装する
      抽象基底 `ParticleSystem`。
なぜ: LinearParticles/SyncGrp/SeqGrp を同一インターフェースで扱い、グループが具象型では
      なく能力の集合として子を保持できるようにするため。

状態遷移:
- NOT_STARTED --start()--> RUNNING（period 経過で自動停止する単発）
- NOT_STARTED --start_loop()--> LOOPING（period ごとに時計を巻き戻して無限に継続）
- RUNNING --run()--> RUNNING（elapsed < period の間）
- RUNNING --run(elapsed >= period)--> STOPPED（生成停止。既存パーティクルは寿命まで描画）
- * --stop()--> STOPPED

決定事項:
- `run()` を NOT_STARTED で呼ぶと `NotRunningError`（描画 0 件）。
- STOPPED での `run()` は「排出」呼び出し: 生成せず、生存中のパーティクルだけを描いて False。
- `stop()` 後も既存パーティクルは各自の寿命まで残る。`stop(clear=True)` で即時破棄。
- 稼働中の `start()` は再始動（progress 0 からやり直し）。
- 稼働中の period 変更は `InvalidConfigError`（先に `stop()` する）。
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum, auto
from numbers import Real

from pxparticles.common.errors import InvalidConfigError, NotRunningError
from pxparticles.engine.core.clock import Clock, TimeFn
from pxparticles.engine.core.tickable import PointDrawer

logger = logging.getLogger(__name__)


class State(Enum):
    NOT_STARTED = auto()
    RUNNING = auto()
    LOOPING = auto()
    STOPPED = auto()


def check_period(period: object) -> float:
    """period（秒）を検証して float で返す。`>= 0` かつ有限。"""
    if isinstance(period, bool) or not isinstance(period, Real):
        raise InvalidConfigError(f"period must be a number: {period!r}")
    p = float(period)
    if not math.isfinite(p) or p < 0.0:
        raise InvalidConfigError(f"period should be a non-negative value: {period!r}")
    return p


class ParticleSystem(ABC):
    """パーティクル系の抽象基底。

    サブクラスは `_next_frame` を実装し、必要に応じて `_on_start`/`_on_stop`/`_on_cycle`
    フックを上書きする。`run` の時刻処理（経過時間、ループの巻き戻し、自動停止）は
    この基底が一元的に扱う。
    """

    _period: float = 0.0

    def __init__(self, *, time_fn: TimeFn | None = None) -> None:
        self._clock = Clock(time_fn)
        self._state = State.NOT_STARTED

    # ── 状態 ─────────────────────────
    @property
    def state(self) -> State:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state in (State.RUNNING, State.LOOPING)

    @property
    def is_looping(self) -> bool:
        return self._state is State.LOOPING

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def period(self) -> float:
        """1 回の生成にかける秒数。"""
        return self._period

    @period.setter
    def period(self, value: float) -> None:
        p = check_period(value)
        self._check_idle("period")
        self._period = p

    def _check_idle(self, what: str) -> None:
        """稼働中（RUNNING/LOOPING）の設定変更を拒否する。"""
        if self.is_active:
            raise InvalidConfigError(f"cannot change {what} of a running {type(self).__name__}; stop it first")

    def with_period(self, period: float):
        """period を設定して self を返す（ビルダー）。"""
        self.period = period
        return self

    def elapsed(self, now: float | None = None) -> float:
        """開始からの経過秒（ループ中は現周期の先頭から）。"""
        return self._clock.elapsed(now)

    # ── 開始/停止 ────────────────────
    def start(self, now: float | None = None) -> None:
        """単発で開始する。稼働中なら再始動。"""
        self._activate(False, now)

    def start_loop(self, now: float | None = None) -> None:
        """ループで開始する。period ごとに時計を巻き戻して継続する。"""
        self._activate(True, now)

    def _check_startable(self, looping: bool) -> None:
        if looping and self.period <= 0.0:
            raise InvalidConfigError("start_loop requires period > 0")

    def _activate(self, looping: bool, now: float | None) -> None:
        self._check_startable(looping)
        if self.is_active:
            logger.debug("restarting %r", self)
        t0 = self._clock.start(now)
        self._state = State.LOOPING if looping else State.RUNNING
        self._on_start(t0, looping)
        logger.debug("%s started (looping=%s, period=%.3f)", type(self).__name__, looping, self.period)

    def stop(self, *, clear: bool = False) -> None:
        """生成を止めて STOPPED にする。既存パーティクルは `clear=True` でなければ残る。"""
        if self.is_active:
            self._on_stop()
            logger.debug("%s stopped", type(self).__name__)
        self._state = State.STOPPED
        self._clock.stop()
        if clear:
            self.clear()

    def clear(self) -> None:
        """生存中のパーティクルを破棄する。"""

    # ── フレーム ─────────────────────
    def run(self, drawer: PointDrawer, now: float | None = None) -> bool:
        """1 フレーム分を進めて描く。生成継続中なら True。

        `now` は時間源と同じ基準の絶対時刻 [秒]。省略時は自身の時計から読む。
        """
        if self._state is State.NOT_STARTED:
            raise NotRunningError(f"{type(self).__name__} has not been started")
        t = self._clock.now() if now is None else float(now)
        if self._state is State.STOPPED:
            self._next_frame(drawer, t, None)
            return False

        elapsed = self._clock.elapsed(t)
        if self._state is State.LOOPING and elapsed >= self.period:
            period = self.period
            self._clock.advance(math.floor(elapsed / period) * period)
            # 丸め誤差で周期外に出ないよう [0, period) に収める
            elapsed = min(max(self._clock.elapsed(t), 0.0), math.nextafter(period, 0.0))
            self._on_cycle(t)

        if self._next_frame(drawer, t, elapsed):
            return True
        self._state = State.STOPPED
        self._clock.stop()
        logger.debug("%s completed", type(self).__name__)
        return False

    @abstractmethod
    def _next_frame(self, drawer: PointDrawer, now: float, elapsed: float | None) -> bool:
        """1 フレーム分を処理する。

        `elapsed` が None のときは排出呼び出し（生成しない）。生成継続中なら True を返す。
        """

    def _on_start(self, t0: float, looping: bool) -> None:
        pass

    def _on_stop(self) -> None:
        pass

    def _on_cycle(self, now: float) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state.name}, period={self.period!r})"


__all__ = ["ParticleSystem", "State", "check_period"]
