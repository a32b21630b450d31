"""
pxparticles: リアルタイム描画ループに埋め込む時間駆動パーティクル効果ライブラリ。

キーフレームで密度・位置・色を時間変化させる生成器（LinearParticles）と、
それらを同時（SyncGrp）/順次（SeqGrp）に束ねるグループを提供する。
描画は `draw_point(position, color)` を持つ任意の描画先へ委譲する。
"""

from pxparticles.api import *  # noqa: F401,F403
from pxparticles.api import __all__ as __all__

__version__ = "0.1.0"
