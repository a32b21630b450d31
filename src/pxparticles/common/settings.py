"""
どこで: `common.settings`
何を: パーティクル系の既定値（period/decay/シード/ログ）を環境変数から型付きで読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_str


@dataclass
class _Settings:
    # 生成器の既定
    DEFAULT_PERIOD: float = 1.0
    DEFAULT_DECAY: float = 1.0

    # 乱数（None で非決定）
    SEED: int | None = None

    # ログ
    LOG_LEVEL: str = "INFO"
    DEBUG_SPAWN: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - period は `>= 0`、decay は `> 0` を満たさない値を既定へフォールバック。
    - シードは整数として解釈できない場合は未設定扱い。
    """
    _settings.DEFAULT_PERIOD = env_float("PXP_DEFAULT_PERIOD", 1.0, min_value=0.0)
    _settings.DEFAULT_DECAY = env_float(
        "PXP_DEFAULT_DECAY", 1.0, min_value=0.0, strict_min=True
    )
    _settings.SEED = env_int("PXP_SEED", None)
    _settings.LOG_LEVEL = env_str("PXP_LOG_LEVEL", "INFO").upper()
    _settings.DEBUG_SPAWN = env_bool("PXP_DEBUG_SPAWN", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
