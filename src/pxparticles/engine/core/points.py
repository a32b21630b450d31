"""
どこで: `engine.core.points`
何を: `draw_point` 呼び出しを蓄積し、`(N,3)` 座標と `(N,4)` 色の float32 配列へまとめる
      `PointBuffer`。
なぜ: ホスト側が 1 フレーム分の点をまとめて GPU/描画 API に渡せるようにするため。
      `PointDrawer` Protocol を満たすので、生成器からは通常の描画先として扱える。

データモデル:
- `coords: float32 ndarray (N, 3)`: 点の位置（行は XYZ）。
- `colors: float32 ndarray (N, 4)`: 点の色（行は RGBA 0–1）。
- 空バッファは `coords.shape==(0,3)`, `colors.shape==(0,4)`。
- `sizes(): float32 ndarray (N,)`: 点ごとのサイズ（`size` なしの点は `default_size`）。
"""

from __future__ import annotations

import numpy as np

from pxparticles.common.types import RGBA, Vec3


class PointBuffer:
    """点描画の蓄積先。フレームごとに `clear()` して再利用する。

    引数:
        default_size: `size` なしで描かれた点に記録するサイズ。
    """

    __slots__ = ("_positions", "_colors", "_sizes", "_default_size")

    def __init__(self, default_size: float = 1.0) -> None:
        self._positions: list[Vec3] = []
        self._colors: list[RGBA] = []
        self._sizes: list[float] = []
        self._default_size = float(default_size)

    @property
    def default_size(self) -> float:
        return self._default_size

    def draw_point(self, position: Vec3, color: RGBA, *, size: float | None = None) -> None:
        self._positions.append(position)
        self._colors.append(color)
        self._sizes.append(self._default_size if size is None else float(size))

    def clear(self) -> None:
        self._positions.clear()
        self._colors.clear()
        self._sizes.clear()

    def __len__(self) -> int:
        return len(self._positions)

    @property
    def is_empty(self) -> bool:
        return not self._positions

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """`(coords (N,3) float32, colors (N,4) float32)` を返す（コピー）。"""
        if not self._positions:
            return (
                np.zeros((0, 3), dtype=np.float32),
                np.zeros((0, 4), dtype=np.float32),
            )
        coords = np.asarray(self._positions, dtype=np.float32).reshape(-1, 3)
        colors = np.asarray(self._colors, dtype=np.float32).reshape(-1, 4)
        return coords, colors

    def sizes(self) -> np.ndarray:
        """点ごとのサイズ `(N,) float32`（コピー）。"""
        return np.asarray(self._sizes, dtype=np.float32).reshape(-1)

    def __repr__(self) -> str:
        return f"PointBuffer(n={len(self)})"


__all__ = ["PointBuffer"]
