"""
どこで: `util` パッケージ。
何を: 色指定の正規化など、小さな変換ユーティリティ。
"""

from .color import NAMED_COLORS, normalize_color, parse_hex_color_str, with_alpha

__all__ = ["NAMED_COLORS", "normalize_color", "parse_hex_color_str", "with_alpha"]
