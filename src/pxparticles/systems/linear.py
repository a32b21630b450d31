"""
どこで: `systems.linear`
何を: 2 端点を結ぶ直線上に確率的にパーティクルを生成する `LinearParticles`。
なぜ: 密度・経路上の位置・色をキーフレームで時間変化させ、各パーティクルは固有の寿命
      （decay）で消える、最も基本的な時間駆動パーティクル効果を提供するため。

1 フレームの処理（`run(drawer, now)`）:
1. `progress = clamp(elapsed / period, 0, 1)`（ループ中は周期内の elapsed）。
2. `density = densities.sample(progress)`、一様乱数 `r∈[0,1)` を 1 つ引き、
   `r < density` なら `start + loc * (end - start)` に `colors.sample(progress)` の色で生成。
   `sizes` があれば `sizes.sample(progress)` を生成時のサイズとして持たせる。
3. `now - spawn_time > decay` のパーティクルを除去。
4. 生存中の全パーティクルを `drawer.draw_point(position, color)` で描く。

設定はビルダー（`with_*`）で行い、各メソッドは検証して self を返すか
`InvalidConfigError` を送出する。描画時に設定エラーは起きない。

使用例:
    line = (
        LinearParticles((-1.0, 0.0, 3.0), (1.0, 0.0, 3.0))
        .with_period(3.0)
        .with_decay(1.4)
        .with_locations(Keyframes.evenly([0.0, 0.0, 1.0, 1.0]))
        .with_colors(color_ramp("skyblue", "blue"))
    )
    line.start_loop()
    line.run(buffer)  # 毎フレーム
"""

from __future__ import annotations

import copy
import logging
import math
from numbers import Real
from typing import Sequence

import numpy as np

from pxparticles.common import settings
from pxparticles.common.errors import InvalidConfigError
from pxparticles.common.keyframes import Keyframes, check_range, coerce_keyframes
from pxparticles.common.types import UniformSource, Vec3
from pxparticles.engine.core.clock import Clock, TimeFn
from pxparticles.engine.core.tickable import PointDrawer
from pxparticles.util.color import normalize_color

from .base import ParticleSystem, State
from .particle import Particle

logger = logging.getLogger(__name__)


def _as_point(value: object, name: str) -> np.ndarray:
    """3D 座標を `(3,) float64` に正規化する（2D は Z=0 で補う）。"""
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError(f"{name} must be a 2D/3D point: {value!r}") from e
    if arr.ndim != 1 or arr.shape[0] not in (2, 3):
        raise InvalidConfigError(f"{name} must be a 2D/3D point: {value!r}")
    if not np.all(np.isfinite(arr)):
        raise InvalidConfigError(f"{name} must be finite: {value!r}")
    if arr.shape[0] == 2:
        arr = np.append(arr, 0.0)
    return arr


def _check_decay(decay: object) -> float:
    if isinstance(decay, bool) or not isinstance(decay, Real):
        raise InvalidConfigError(f"decay must be a number: {decay!r}")
    d = float(decay)
    if not math.isfinite(d) or d <= 0.0:
        raise InvalidConfigError(f"decay should be a positive value: {decay!r}")
    return d


def _scalar_keys(keys: object, name: str) -> Keyframes:
    k = coerce_keyframes(keys, name=name)
    if not k.is_scalar:
        raise InvalidConfigError(f"{name}: values must be scalars")
    return check_range(k, name)


def _size_keys(keys: object) -> Keyframes:
    k = coerce_keyframes(keys, name="sizes")
    if not k.is_scalar:
        raise InvalidConfigError("sizes: values must be scalars")
    if not bool(np.all(k.values > 0.0)):
        raise InvalidConfigError("sizes: values must be positive")
    return k


def _color_keys(keys: object) -> Keyframes:
    k = coerce_keyframes(keys, name="colors", convert=normalize_color)
    if k.is_scalar or k.dim != 4:
        raise InvalidConfigError("colors: values must be RGBA colors")
    return check_range(k, "colors")


def color_ramp(*colors: object) -> Keyframes:
    """色の並びを [0,1] に等間隔配置した色キーフレーム（色名/Hex/タプル可）。"""
    if not colors:
        raise InvalidConfigError("colors: at least one color is required")
    return Keyframes.evenly([normalize_color(c) for c in colors])


class LinearParticles(ParticleSystem):
    """直線経路上のパーティクル生成器。

    引数:
        start_location, end_location: 経路の端点（3D。2D は Z=0）。
        period: 生成にかける秒数（>= 0）。省略時は `PXP_DEFAULT_PERIOD`。
        decay: 各パーティクルの寿命 [秒]（> 0）。省略時は `PXP_DEFAULT_DECAY`。
        densities: 1 フレームあたりの生成確率のキーフレーム（各値 0..1）。既定は常に 1。
        locations: 経路上の生成位置（0=start, 1=end）のキーフレーム。既定は 0→1。
        colors: 生成色のキーフレーム。既定は白。
        sizes: 点サイズのキーフレーム（各値 > 0）。既定は None（サイズを渡さない）。
        fade: True なら描画時にアルファを寿命に応じて減衰させる。
        rng: `random()` を持つ乱数源。省略時は `numpy.random.default_rng(PXP_SEED)`。
        time_fn: 時計の時間源（既定 `time.perf_counter`）。
    """

    def __init__(
        self,
        start_location: Sequence[float] = (0.0, 0.0, 0.0),
        end_location: Sequence[float] = (1.0, 0.0, 0.0),
        *,
        period: float | None = None,
        decay: float | None = None,
        densities: object = None,
        locations: object = None,
        colors: object = None,
        sizes: object = None,
        fade: bool = False,
        rng: UniformSource | None = None,
        time_fn: TimeFn | None = None,
    ) -> None:
        super().__init__(time_fn=time_fn)
        cfg = settings.get()
        self._particles: list[Particle] = []
        self.with_start_end(start_location, end_location)
        self.period = cfg.DEFAULT_PERIOD if period is None else period
        self.with_decay(cfg.DEFAULT_DECAY if decay is None else decay)
        self.with_densities(Keyframes.constant(1.0) if densities is None else densities)
        self.with_locations(Keyframes.evenly([0.0, 1.0]) if locations is None else locations)
        self.with_colors(Keyframes.constant((1.0, 1.0, 1.0, 1.0)) if colors is None else colors)
        self.with_sizes(sizes)
        self._fade = bool(fade)
        self._rng: UniformSource = rng if rng is not None else np.random.default_rng(cfg.SEED)

    # ── ビルダー ─────────────────────
    def with_start_end(self, start: Sequence[float], end: Sequence[float]) -> "LinearParticles":
        s = _as_point(start, "start_location")
        e = _as_point(end, "end_location")
        self._start = s
        self._end = e
        return self

    def with_decay(self, decay: float) -> "LinearParticles":
        self._decay = _check_decay(decay)
        return self

    def with_densities(self, densities: object) -> "LinearParticles":
        self._densities = _scalar_keys(densities, "densities")
        return self

    def with_locations(self, locations: object) -> "LinearParticles":
        self._locations = _scalar_keys(locations, "locations")
        return self

    def with_colors(self, colors: object) -> "LinearParticles":
        self._colors = _color_keys(colors)
        return self

    def with_sizes(self, sizes: object) -> "LinearParticles":
        """点サイズのキーフレーム（各値 > 0）。None でサイズ指定なしに戻す。"""
        self._sizes = None if sizes is None else _size_keys(sizes)
        return self

    def with_fade(self, fade: bool = True) -> "LinearParticles":
        self._fade = bool(fade)
        return self

    def with_rng(self, rng: UniformSource) -> "LinearParticles":
        if not callable(getattr(rng, "random", None)):
            raise InvalidConfigError(f"rng must provide random(): {rng!r}")
        self._rng = rng
        return self

    # ── 複製 ─────────────────────────
    def _clone(self) -> "LinearParticles":
        """設定だけを共有した未開始のコピー（キーフレームは不変なので共有、乱数源も共有）。"""
        new = copy.copy(self)
        new._clock = Clock(self._clock.time_fn)
        new._state = State.NOT_STARTED
        new._particles = []
        return new

    def clone_with_start_end(self, start: Sequence[float], end: Sequence[float]) -> "LinearParticles":
        return self._clone().with_start_end(start, end)

    def clone_with_colors(self, colors: object) -> "LinearParticles":
        return self._clone().with_colors(colors)

    # ── 参照 ─────────────────────────
    @property
    def start_location(self) -> Vec3:
        x, y, z = self._start.tolist()
        return (x, y, z)

    @property
    def end_location(self) -> Vec3:
        x, y, z = self._end.tolist()
        return (x, y, z)

    @property
    def decay(self) -> float:
        return self._decay

    @property
    def densities(self) -> Keyframes:
        return self._densities

    @property
    def locations(self) -> Keyframes:
        return self._locations

    @property
    def colors(self) -> Keyframes:
        return self._colors

    @property
    def sizes(self) -> Keyframes | None:
        return self._sizes

    @property
    def fade(self) -> bool:
        return self._fade

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self._particles)

    def clear(self) -> None:
        self._particles.clear()

    # ── フレーム ─────────────────────
    def position_at(self, location: float) -> Vec3:
        """経路上の位置 `location`（0=start, 1=end）の 3D 座標。"""
        x, y, z = (self._start + float(location) * (self._end - self._start)).tolist()
        return (x, y, z)

    def _spawn(self, now: float, progress: float) -> Particle | None:
        density = float(self._densities.sample(progress))  # type: ignore[arg-type]
        r = float(self._rng.random())
        if not r < density:
            return None
        loc = float(self._locations.sample(progress))  # type: ignore[arg-type]
        color = self._colors.sample(progress)
        size = None if self._sizes is None else float(self._sizes.sample(progress))  # type: ignore[arg-type]
        particle = Particle(
            position=self.position_at(loc),
            color=color,  # type: ignore[arg-type]
            spawn_time=now,
            decay=self._decay,
            size=size,
        )
        self._particles.append(particle)
        if settings.get().DEBUG_SPAWN and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "spawn progress=%.3f density=%.3f r=%.3f pos=%s live=%d",
                progress,
                density,
                r,
                particle.position,
                len(self._particles),
            )
        return particle

    def _next_frame(self, drawer: PointDrawer, now: float, elapsed: float | None) -> bool:
        period = self._period
        generating = elapsed is not None and elapsed < period
        if generating:
            progress = min(max(elapsed / period, 0.0), 1.0) if period > 0.0 else 1.0  # type: ignore[operator]
            self._spawn(now, progress)

        self._particles = [p for p in self._particles if p.is_alive(now)]
        for p in self._particles:
            p.draw(drawer, now, fade=self._fade)
        return generating


__all__ = ["LinearParticles", "color_ramp"]
