"""共通フィクスチャ。

- 乱数シード固定
- 偽の時間源 / 記録する描画先 / 固定乱数源
- 小さな LinearParticles 試料
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from pxparticles.common import settings
from pxparticles.systems.linear import LinearParticles
from tests._utils.dummies import FakeTime, FixedUniform, RecordingDrawer


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def fake_time() -> FakeTime:
    return FakeTime(100.0)


@pytest.fixture()
def drawer() -> RecordingDrawer:
    return RecordingDrawer()


@pytest.fixture()
def always() -> FixedUniform:
    """常に生成させる乱数源（r=0.0 < density）。"""
    return FixedUniform(0.0)


@pytest.fixture()
def line_factory(fake_time: FakeTime):
    """密度 1・乱数 0 の決定的な LinearParticles を作るファクトリ。"""

    def _make(**kwargs) -> LinearParticles:
        kwargs.setdefault("period", 2.0)
        kwargs.setdefault("decay", 0.5)
        kwargs.setdefault("rng", FixedUniform(0.0))
        kwargs.setdefault("time_fn", fake_time)
        start = kwargs.pop("start", (0.0, 0.0, 0.0))
        end = kwargs.pop("end", (1.0, 1.0, 1.0))
        return LinearParticles(start, end, **kwargs)

    return _make


@pytest.fixture()
def env_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """環境変数を差し替えて設定を再読込し、終了後に元へ戻す。"""
    yield monkeypatch
    monkeypatch.undo()
    settings.reload_from_env()
