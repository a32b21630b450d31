"""
どこで: `util.color`。
何を: 色指定の正規化（色名, Hex, RGBA 0–1, RGBA 0–255）を RGBA(0–1) に一元化。
なぜ: キーフレームの色値と描画呼び出しで同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

from typing import Sequence

from pxparticles.common.errors import InvalidConfigError
from pxparticles.common.types import RGBA

# よく使う色（0–1）。名前は小文字で照合する。
NAMED_COLORS: dict[str, RGBA] = {
    "white": (1.0, 1.0, 1.0, 1.0),
    "black": (0.0, 0.0, 0.0, 1.0),
    "blank": (0.0, 0.0, 0.0, 0.0),
    "red": (0.90, 0.16, 0.22, 1.0),
    "orange": (1.0, 0.63, 0.0, 1.0),
    "yellow": (0.99, 0.98, 0.0, 1.0),
    "gold": (1.0, 0.80, 0.0, 1.0),
    "green": (0.0, 0.89, 0.19, 1.0),
    "lime": (0.0, 0.62, 0.18, 1.0),
    "skyblue": (0.40, 0.75, 1.0, 1.0),
    "blue": (0.0, 0.47, 0.95, 1.0),
    "violet": (0.53, 0.24, 0.75, 1.0),
    "purple": (0.78, 0.48, 1.0, 1.0),
    "pink": (1.0, 0.43, 0.76, 1.0),
}


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> RGBA:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise InvalidConfigError(
            f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)"
        )
    try:
        channels = [int(t[i : i + 2], 16) for i in range(0, len(t), 2)]
    except ValueError as e:
        raise InvalidConfigError(f"invalid hex color: '{s}'") from e
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = (c / 255.0 for c in channels)
    return (r, g, b, a)


def _from_sequence(seq: Sequence[object]) -> RGBA:
    if len(seq) not in (3, 4):
        raise InvalidConfigError("color tuple/list must be length 3 or 4")
    try:
        vals = [float(v) for v in seq]  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise InvalidConfigError(f"invalid color tuple/list: {seq!r}") from e
    if len(vals) == 3:
        vals.append(1.0)
    # 全要素が 0..1 なら正規化済みとみなす
    if all(0.0 <= v <= 1.0 for v in vals):
        r, g, b, a = vals
        return (r, g, b, a)
    # 次に 0–255 とみなし、整数丸め → 0–1 へスケール
    if len(seq) == 3:
        vals[3] = 255.0
    r, g, b, a = (max(0, min(255, int(round(v)))) / 255.0 for v in vals)
    return (r, g, b, a)


def normalize_color(value: object) -> RGBA:
    """色を RGBA(0–1) へ正規化する。

    - 受理: 色名（`NAMED_COLORS`）, Hex 文字列, (r,g,b[,a]) （0–1 または 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        named = NAMED_COLORS.get(value.strip().lower())
        if named is not None:
            return named
        return parse_hex_color_str(value)
    if isinstance(value, (list, tuple)):
        return _from_sequence(value)
    # numpy 配列など
    tolist = getattr(value, "tolist", None)
    if callable(tolist):
        seq = tolist()
        if isinstance(seq, list):
            return _from_sequence(seq)
    raise InvalidConfigError(f"unsupported color type: {type(value)!r}")


def with_alpha(color: RGBA, alpha: float) -> RGBA:
    """アルファのみ差し替えた色を返す（0..1 に clamp）。"""
    r, g, b, _ = color
    return (r, g, b, _clamp01(alpha))


__all__ = [
    "NAMED_COLORS",
    "parse_hex_color_str",
    "normalize_color",
    "with_alpha",
]
