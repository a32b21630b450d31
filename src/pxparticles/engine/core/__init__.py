"""
どこで: `engine.core` サブパッケージ。
何を: 時計（Clock）・フレーム駆動（FrameClock）・描画インターフェース・点バッファを提供。
なぜ: 時間計測と描画受け渡しの基盤を構成し、systems/api から再利用可能にするため。
"""

from .clock import Clock
from .frame_clock import FrameClock, drive
from .points import PointBuffer
from .tickable import FrameRunnable, PointDrawer, Tickable

__all__ = ["Clock", "FrameClock", "drive", "PointBuffer", "PointDrawer", "FrameRunnable", "Tickable"]
