"""
どこで: `systems.groups`
何を: 複数の `ParticleSystem` を 1 つの時計で同時に走らせる `SyncGrp` と、
      順番に 1 つずつ走らせる `SeqGrp`。
なぜ: 個別に時間設定された生成器（入れ子のグループを含む）を組み合わせ、
      より複雑な効果を単一の `run` 呼び出しで駆動できるようにするため。

共通:
- メンバーは空でない順序付き列。構成は木（同一インスタンスの重複/自己参照は不可）。
- メンバーへの `run` は常にグループと同じ `now` で呼ぶ。
- 自然停止したメンバーは排出（生存パーティクルの描画のみ）として扱い、エラーにしない。
"""

from __future__ import annotations

import logging
from itertools import accumulate
from typing import Iterable, Iterator, Sequence

from pxparticles.common.errors import InvalidConfigError
from pxparticles.engine.core.clock import TimeFn
from pxparticles.engine.core.tickable import PointDrawer

from .base import ParticleSystem, State, check_period

logger = logging.getLogger(__name__)


def _walk(members: Iterable[ParticleSystem]) -> Iterator[ParticleSystem]:
    for m in members:
        yield m
        if isinstance(m, _Group):
            yield from _walk(m.members)


class _Group(ParticleSystem):
    """グループ共通部（メンバー保持・木構造の検証・一括 clear）。"""

    def __init__(self, members: Sequence[ParticleSystem], *, time_fn: TimeFn | None = None) -> None:
        super().__init__(time_fn=time_fn)
        self._members: tuple[ParticleSystem, ...] = ()
        self.with_systems(members)

    def with_systems(self, members: Sequence[ParticleSystem]):
        """メンバーを差し替えて self を返す（稼働中は不可）。"""
        self._check_idle("members")
        ms = tuple(members)
        if not ms:
            raise InvalidConfigError(f"{type(self).__name__} requires at least one member")
        for m in ms:
            if not isinstance(m, ParticleSystem):
                raise InvalidConfigError(f"group member must be a ParticleSystem: {m!r}")
        seen: set[int] = set()
        for node in _walk(ms):
            if node is self:
                raise InvalidConfigError("a group cannot contain itself")
            if id(node) in seen:
                raise InvalidConfigError(f"the same system appears twice in a group: {node!r}")
            seen.add(id(node))
        self._members = ms
        return self

    @property
    def members(self) -> tuple[ParticleSystem, ...]:
        return self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[ParticleSystem]:
        return iter(self._members)

    def clear(self) -> None:
        for m in self._members:
            m.clear()

    def _check_members_idle(self) -> None:
        # 途中まで書き換えないよう、代入前に全メンバーを確認する
        self._check_idle("period")
        for m in self._members:
            m._check_idle("period")

    def _run_started(self, drawer: PointDrawer, now: float) -> None:
        for m in self._members:
            if m.state is not State.NOT_STARTED:
                m.run(drawer, now)


class SyncGrp(_Group):
    """メンバーを同じ開始時刻・同じ `now` で同時に走らせるグループ。

    - `start`/`start_loop`/`stop` は全メンバーへ同じ開始時刻で一斉送信する。
    - 描画結果は各メンバーの描画の和集合。
    - 全メンバーが停止した時点でグループも停止する。
    - `period` はメンバーの最大値。`period=` を与えると全メンバーに同じ period を設定する。
    """

    def __init__(
        self,
        members: Sequence[ParticleSystem],
        *,
        period: float | None = None,
        time_fn: TimeFn | None = None,
    ) -> None:
        super().__init__(members, time_fn=time_fn)
        if period is not None:
            self.period = period

    @property
    def period(self) -> float:
        return max(m.period for m in self._members)

    @period.setter
    def period(self, value: float) -> None:
        p = check_period(value)
        self._check_members_idle()
        for m in self._members:
            m.period = p

    def _check_startable(self, looping: bool) -> None:
        super()._check_startable(looping)
        for m in self._members:
            m._check_startable(looping)

    def _on_start(self, t0: float, looping: bool) -> None:
        for m in self._members:
            if looping:
                m.start_loop(t0)
            else:
                m.start(t0)

    def _on_stop(self) -> None:
        for m in self._members:
            m.stop()

    def _next_frame(self, drawer: PointDrawer, now: float, elapsed: float | None) -> bool:
        self._run_started(drawer, now)
        return elapsed is not None and any(m.is_active for m in self._members)


class SeqGrp(_Group):
    """メンバーを 1 つずつ順番に走らせるグループ。

    - `start` はメンバー 0 だけを開始する（他は NOT_STARTED のまま）。
    - 各 `run` でグループ開始からの経過が「アクティブなメンバーまでの period 累積」に
      達していれば、そのメンバーを止めて次を `now` で開始する（子の時計は起動時点から）。
    - 最後のメンバーが終わるとグループは停止する（`start_loop` ならメンバー 0 へ戻る）。
    - 停止させたメンバーのパーティクルは寿命まで描画され続ける。
    - `period` はメンバーの合計。`period=` を与えるとメンバー数で等分して設定する。
    """

    def __init__(
        self,
        members: Sequence[ParticleSystem],
        *,
        period: float | None = None,
        time_fn: TimeFn | None = None,
    ) -> None:
        super().__init__(members, time_fn=time_fn)
        self._index = 0
        self._bounds: list[float] = []
        if period is not None:
            self.period = period

    @property
    def period(self) -> float:
        return sum(m.period for m in self._members)

    @period.setter
    def period(self, value: float) -> None:
        share = check_period(value) / len(self._members)
        self._check_members_idle()
        for m in self._members:
            m.period = share

    @property
    def active_index(self) -> int:
        """現在アクティブなメンバーの index（全て終了後は `len(self)`）。"""
        return self._index

    @property
    def active(self) -> ParticleSystem | None:
        if self._index < len(self._members):
            return self._members[self._index]
        return None

    def _on_start(self, t0: float, looping: bool) -> None:
        # 再始動時は前回のアクティブメンバーを止めてから先頭に戻る
        for m in self._members:
            if m.is_active:
                m.stop()
        self._bounds = list(accumulate(m.period for m in self._members))
        self._index = 0
        self._members[0].start(t0)

    def _on_stop(self) -> None:
        cur = self.active
        if cur is not None and cur.is_active:
            cur.stop()

    def _on_cycle(self, now: float) -> None:
        self._on_stop()
        self._index = 0
        self._members[0].start(now)
        logger.debug("SeqGrp wrapped to member 0")

    def _advance(self, now: float, elapsed: float) -> None:
        n = len(self._members)
        while self._index < n and elapsed >= self._bounds[self._index]:
            cur = self._members[self._index]
            if cur.is_active:
                cur.stop()
            self._index += 1
            if self._index < n:
                self._members[self._index].start(now)
                logger.debug("SeqGrp advanced to member %d", self._index)

    def _next_frame(self, drawer: PointDrawer, now: float, elapsed: float | None) -> bool:
        if elapsed is not None:
            self._advance(now, elapsed)
        self._run_started(drawer, now)
        return elapsed is not None and self._index < len(self._members)


__all__ = ["SyncGrp", "SeqGrp"]
