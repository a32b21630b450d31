from __future__ import annotations

import pytest

# 確認内容
# - 公開 API が単一名前空間から import できる
# - 構成 -> start_loop -> FrameClock.tick -> as_arrays の最小フローが動く


@pytest.mark.smoke
def test_api_import_and_min_flow():
    import pxparticles
    from pxparticles.api import FrameClock, Keyframes, LinearParticles, SyncGrp, color_ramp
    from tests._utils.dummies import FakeTime, FixedUniform

    assert set(pxparticles.__all__) >= {"LinearParticles", "SyncGrp", "SeqGrp", "Keyframes"}
    assert pxparticles.__version__

    t = FakeTime(0.0)
    edge = (
        LinearParticles((-1.0, 0.0, 3.0), (1.0, 0.0, 3.0), rng=FixedUniform(0.0), time_fn=t)
        .with_decay(1.4)
        .with_locations(Keyframes.evenly([0.0, 0.0, 1.0, 1.0]))
        .with_colors(color_ramp("skyblue", "blue"))
    )
    group = SyncGrp(
        [edge, edge.clone_with_start_end((1.0, 0.0, 5.0), (-1.0, 0.0, 5.0))],
        period=3.0,
        time_fn=t,
    )
    group.start_loop()

    frame = FrameClock([group], time_fn=t)
    assert frame.tick() == 1
    coords, colors = frame.drawer.as_arrays()  # type: ignore[attr-defined]
    assert coords.shape == (2, 3)
    assert colors.shape == (2, 4)
    assert sorted(coords[:, 2].tolist()) == [3.0, 5.0]
