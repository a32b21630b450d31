"""
どこで: `systems` パッケージ。
何を: パーティクル系の共通能力（ParticleSystem）と、その実装
      （LinearParticles, SyncGrp, SeqGrp）および単一パーティクル。
なぜ: 生成器とグループを同一インターフェースで組み合わせられるようにするため。
"""

from .base import ParticleSystem, State, check_period
from .groups import SeqGrp, SyncGrp
from .linear import LinearParticles, color_ramp
from .particle import Particle, fade_color

__all__ = [
    "ParticleSystem",
    "State",
    "check_period",
    "LinearParticles",
    "color_ramp",
    "SyncGrp",
    "SeqGrp",
    "Particle",
    "fade_color",
]
