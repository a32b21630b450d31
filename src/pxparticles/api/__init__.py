"""
どこで: `api` 入口（高レベル公開 API）。
何を: 生成器 `LinearParticles`・グループ `SyncGrp/SeqGrp`・キーフレーム・時計/フレーム駆動・
      例外・ロギング設定を再輸出する薄いファサード。
なぜ: 利用者が単一名前空間から構成→開始→毎フレーム実行まで完結できるようにするため。

Usage:
    from pxparticles.api import FrameClock, Keyframes, LinearParticles, SyncGrp, color_ramp

    edge = (
        LinearParticles((-1.0, 0.0, 3.0), (1.0, 0.0, 3.0))
        .with_decay(1.4)
        .with_locations(Keyframes.evenly([0.0, 0.0, 1.0, 1.0]))
        .with_colors(color_ramp("skyblue", "blue"))
    )
    group = SyncGrp([edge, edge.clone_with_start_end((1.0, 0.0, 5.0), (-1.0, 0.0, 5.0))], period=3.0)
    group.start_loop()

    frame = FrameClock([group])
    frame.tick()                            # 毎フレーム
    coords, colors = frame.drawer.as_arrays()
"""

from pxparticles.common.errors import (
    InvalidConfigError,
    NotRunningError,
    NotStartedError,
    ParticleError,
)
from pxparticles.common.keyframes import Keyframes
from pxparticles.common.logging import setup_default_logging
from pxparticles.engine.core.clock import Clock
from pxparticles.engine.core.frame_clock import FrameClock, drive
from pxparticles.engine.core.points import PointBuffer
from pxparticles.engine.core.tickable import PointDrawer, Tickable
from pxparticles.systems.base import ParticleSystem, State
from pxparticles.systems.groups import SeqGrp, SyncGrp
from pxparticles.systems.linear import LinearParticles, color_ramp
from pxparticles.systems.particle import Particle
from pxparticles.util.color import normalize_color

__all__ = [
    # 生成器/グループ
    "LinearParticles",
    "SyncGrp",
    "SeqGrp",
    "ParticleSystem",
    "State",
    "Particle",
    # パラメータ
    "Keyframes",
    "color_ramp",
    "normalize_color",
    # 時間/描画
    "Clock",
    "FrameClock",
    "PointBuffer",
    "PointDrawer",
    "Tickable",
    "drive",
    # 例外
    "ParticleError",
    "InvalidConfigError",
    "NotStartedError",
    "NotRunningError",
    # ロギング
    "setup_default_logging",
]
