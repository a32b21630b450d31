"""
どこで: `common` パッケージ。
何を: 例外・型・設定・ロギング・キーフレーム補間など、層に依存しない基盤。
なぜ: systems/engine/api から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .errors import InvalidConfigError, NotRunningError, NotStartedError, ParticleError
from .keyframes import Keyframes, check_range, coerce_keyframes

__all__ = [
    "ParticleError",
    "InvalidConfigError",
    "NotStartedError",
    "NotRunningError",
    "Keyframes",
    "coerce_keyframes",
    "check_range",
]
