"""
どこで: `common.errors`
何を: パーティクル系で送出する例外階層（設定不正・未開始・非稼働）を定義。
なぜ: ホストループ側が `except ParticleError` で一括処理でき、かつ
      `ValueError`/`RuntimeError` としても従来通り捕捉できるようにするため。
"""

from __future__ import annotations


class ParticleError(Exception):
    """pxparticles が送出する例外の基底。"""


class InvalidConfigError(ParticleError, ValueError):
    """設定値が不正（空のキーフレーム列、負の period、0 以下の decay など）。

    構築/ビルダー呼び出し時に同期的に送出され、描画時には送出されない。
    """


class NotStartedError(ParticleError, RuntimeError):
    """`Clock.start()` 前（または `stop()` 後）に経過時間を問い合わせた。"""


class NotRunningError(ParticleError, RuntimeError):
    """`start()`/`start_loop()` 前に `run()` が呼ばれた。"""


__all__ = [
    "ParticleError",
    "InvalidConfigError",
    "NotStartedError",
    "NotRunningError",
]
