"""
どこで: `common.keyframes`
何を: 正規化進捗 progress∈[0,1] に対するキーフレーム列 `(progress, value)` の線形補間。
なぜ: 密度（スカラー）・経路上の位置（スカラー）・色（RGBA 各チャンネル）を同一の
      規則で時間変化させるため。エンジン/描画に非依存の純粋ロジック。

補間規則:
- `progress <= 最初の p` → 最初の値、`progress >= 最後の p` → 最後の値。
- キーフレーム 1 個 → 全 progress で定数。
- それ以外は挟む 2 点 `(p_lo, v_lo)`, `(p_hi, v_hi)` を探し
  `v = v_lo + (v_hi - v_lo) * (progress - p_lo) / (p_hi - p_lo)`。
- 同一 progress が並ぶ退化区間ではその区間の後側 `v_hi` を採用する。

値の内部表現:
- `progress: float64 (N,)`、`values: float64 (N, D)`（スカラーは D=1）。
- 構築後は不変（配列は書き込み不可）。
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Callable, Iterable, Iterator, Sequence

import numpy as np

from .errors import InvalidConfigError
from .types import KeyValue


def _as_row(value: object) -> tuple[np.ndarray, bool]:
    """値 1 個を `(D,)` 配列へ正規化し、スカラーかどうかを返す。"""
    if isinstance(value, bool):
        raise InvalidConfigError(f"keyframe value must be numeric: {value!r}")
    if isinstance(value, Real):
        return np.array([float(value)], dtype=np.float64), True
    if isinstance(value, (str, bytes)):
        raise InvalidConfigError(f"keyframe value must be numeric: {value!r}")
    try:
        row = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError(f"keyframe value must be numeric: {value!r}") from e
    if row.ndim != 1 or row.size == 0:
        raise InvalidConfigError(f"keyframe value must be a scalar or a flat vector: {value!r}")
    return row, False


class Keyframes:
    """不変のキーフレーム列。`sample(progress)` で補間値を返す。

    引数:
        samples: `(progress, value)` の反復可能。progress は [0,1] 内で非減少。
            value はスカラー、または同じ長さのベクトル（座標/色）。

    例外:
        InvalidConfigError: 空列、範囲外/減少する progress、非有限値、形状不一致。
    """

    __slots__ = ("_progress", "_values", "_scalar")

    def __init__(self, samples: Iterable[tuple[float, object]]) -> None:
        progress: list[float] = []
        rows: list[np.ndarray] = []
        scalar: bool | None = None
        for item in samples:
            try:
                p, v = item  # type: ignore[misc]
            except (TypeError, ValueError) as e:
                raise InvalidConfigError(
                    f"keyframe must be a (progress, value) pair: {item!r}"
                ) from e
            if isinstance(p, bool) or not isinstance(p, Real):
                raise InvalidConfigError(f"keyframe progress must be a number: {p!r}")
            row, is_scalar = _as_row(v)
            if scalar is None:
                scalar = is_scalar
            elif scalar != is_scalar or row.shape != rows[0].shape:
                raise InvalidConfigError("keyframe values must all have the same shape")
            progress.append(float(p))
            rows.append(row)

        if not rows:
            raise InvalidConfigError("keyframes: at least one sample is required")

        ps = np.asarray(progress, dtype=np.float64)
        vs = np.stack(rows).astype(np.float64, copy=False)
        if not np.all(np.isfinite(ps)) or not np.all(np.isfinite(vs)):
            raise InvalidConfigError("keyframes must contain finite numbers only")
        if np.any(ps < 0.0) or np.any(ps > 1.0):
            raise InvalidConfigError(f"keyframe progress must lie in [0, 1]: {progress}")
        if np.any(np.diff(ps) < 0.0):
            raise InvalidConfigError(f"keyframe progress must be non-decreasing: {progress}")

        ps.setflags(write=False)
        vs.setflags(write=False)
        self._progress = ps
        self._values = vs
        self._scalar = bool(scalar)

    # ── ファクトリ ───────────────────
    @classmethod
    def constant(cls, value: object) -> "Keyframes":
        """全 progress で `value` を返す列。"""
        return cls([(0.0, value)])

    @classmethod
    def evenly(cls, values: Sequence[object]) -> "Keyframes":
        """値の並びを [0,1] に等間隔配置した列（例: `[0, 0, 1, 1]`）。"""
        vals = list(values)
        if not vals:
            raise InvalidConfigError("keyframes: at least one sample is required")
        if len(vals) == 1:
            return cls([(0.0, vals[0])])
        ps = np.linspace(0.0, 1.0, len(vals))
        return cls(zip(ps.tolist(), vals))

    # ── 参照 ─────────────────────────
    @property
    def progress(self) -> np.ndarray:
        return self._progress

    @property
    def values(self) -> np.ndarray:
        """`(N, D)` の値配列（読み取り専用）。"""
        return self._values

    @property
    def dim(self) -> int:
        return int(self._values.shape[1])

    @property
    def is_scalar(self) -> bool:
        return self._scalar

    def __len__(self) -> int:
        return int(self._progress.shape[0])

    def __iter__(self) -> Iterator[tuple[float, KeyValue]]:
        for p, row in zip(self._progress, self._values):
            yield float(p), self._unwrap(row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keyframes):
            return NotImplemented
        return (
            self._scalar == other._scalar
            and np.array_equal(self._progress, other._progress)
            and np.array_equal(self._values, other._values)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Keyframes({list(self)!r})"

    def _unwrap(self, row: np.ndarray) -> KeyValue:
        if self._scalar:
            return float(row[0])
        return tuple(float(x) for x in row)

    # ── 評価 ─────────────────────────
    def sample(self, progress: float) -> KeyValue:
        """`progress` における補間値を返す（スカラーは float、ベクトルは tuple）。"""
        p = float(progress)
        if math.isnan(p):
            raise ValueError("progress must not be NaN")
        ps = self._progress
        vs = self._values
        if p <= ps[0]:
            return self._unwrap(vs[0])
        if p >= ps[-1]:
            return self._unwrap(vs[-1])
        # ps[lo] <= p < ps[hi]（重複 progress は末尾側が lo になる）
        hi = int(np.searchsorted(ps, p, side="right"))
        lo = hi - 1
        t = (p - ps[lo]) / (ps[hi] - ps[lo])
        return self._unwrap(vs[lo] + (vs[hi] - vs[lo]) * t)

    def in_range(self, lo: float, hi: float) -> bool:
        """全値（全チャンネル）が `[lo, hi]` 内か。"""
        return bool(np.all(self._values >= lo) and np.all(self._values <= hi))


def coerce_keyframes(
    obj: object,
    *,
    name: str = "keyframes",
    convert: Callable[[object], object] | None = None,
) -> Keyframes:
    """`Keyframes` または `(progress, value)` 組の列を `Keyframes` にする。

    `convert` は組の値に適用される（色の正規化など）。`Keyframes` が直接渡された
    場合は値が既に正規化済みとみなし、そのまま返す。
    """
    if isinstance(obj, Keyframes):
        return obj
    if obj is None or isinstance(obj, (str, bytes)):
        raise InvalidConfigError(f"{name}: expected Keyframes or (progress, value) pairs, got {obj!r}")
    try:
        pairs = list(obj)  # type: ignore[call-overload]
    except TypeError as e:
        raise InvalidConfigError(f"{name}: expected Keyframes or (progress, value) pairs") from e
    if convert is not None:
        converted = []
        for item in pairs:
            try:
                p, v = item
            except (TypeError, ValueError) as e:
                raise InvalidConfigError(
                    f"{name}: keyframe must be a (progress, value) pair: {item!r}"
                ) from e
            converted.append((p, convert(v)))
        pairs = converted
    try:
        return Keyframes(pairs)
    except InvalidConfigError as e:
        raise InvalidConfigError(f"{name}: {e}") from e


def check_range(keys: Keyframes, name: str, lo: float = 0.0, hi: float = 1.0) -> Keyframes:
    """値域 `[lo, hi]` 外の値を含む列を拒否する。"""
    if not keys.in_range(lo, hi):
        raise InvalidConfigError(f"{name}: values must be between {lo} and {hi} inclusive")
    return keys


__all__ = ["Keyframes", "coerce_keyframes", "check_range"]
