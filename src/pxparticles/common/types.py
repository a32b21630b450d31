"""
どこで: `common` の型定義。
何を: Vec3/RGBA などの軽量エイリアスと、乱数源の Protocol。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from __future__ import annotations

from typing import Protocol, Union

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
RGBA = tuple[float, float, float, float]

# キーフレーム値: スカラー / 2D・3D 座標 / RGBA
KeyValue = Union[float, tuple[float, ...]]


class UniformSource(Protocol):
    """[0, 1) の一様乱数を 1 つ返す乱数源。

    `numpy.random.Generator` と `random.Random` の双方が満たす。
    """

    def random(self) -> float: ...


__all__ = ["Vec2", "Vec3", "RGBA", "KeyValue", "UniformSource"]
