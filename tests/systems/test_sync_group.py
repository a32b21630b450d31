from __future__ import annotations

import pytest

from pxparticles.common.errors import InvalidConfigError, NotRunningError
from pxparticles.systems.base import State
from pxparticles.systems.groups import SeqGrp, SyncGrp


@pytest.fixture()
def pair(line_factory):
    a = line_factory(period=1.0, start=(0.0, 0.0, 0.0), end=(1.0, 0.0, 0.0))
    b = line_factory(period=2.0, start=(5.0, 5.0, 5.0), end=(6.0, 5.0, 5.0))
    return a, b


def test_run_before_start_raises(pair, fake_time, drawer) -> None:
    grp = SyncGrp(pair, time_fn=fake_time)
    with pytest.raises(NotRunningError):
        grp.run(drawer)
    assert len(drawer) == 0


def test_output_is_union_of_members(pair, fake_time, drawer) -> None:
    a, b = pair
    grp = SyncGrp([a, b], time_fn=fake_time)
    grp.start()
    assert grp.run(drawer) is True
    assert sorted(drawer.positions) == [(0.0, 0.0, 0.0), (5.0, 5.0, 5.0)]


def test_start_is_broadcast_with_shared_instant(pair, fake_time) -> None:
    a, b = pair
    grp = SyncGrp([a, b], time_fn=fake_time)
    grp.start()
    assert a.state is State.RUNNING and b.state is State.RUNNING
    assert a.clock.started_at == b.clock.started_at == grp.clock.started_at == 100.0

    grp.start_loop(now=105.0)
    assert a.is_looping and b.is_looping
    assert a.clock.started_at == b.clock.started_at == 105.0

    grp.stop()
    assert grp.state is a.state is b.state is State.STOPPED


def test_period_is_max_and_group_stops_with_last_member(pair, fake_time, drawer) -> None:
    a, b = pair
    grp = SyncGrp([a, b], time_fn=fake_time)
    assert grp.period == 2.0
    grp.start(now=100.0)
    assert grp.run(drawer, now=100.5) is True
    assert grp.run(drawer, now=101.0) is True
    assert a.state is State.STOPPED
    assert b.state is State.RUNNING
    assert grp.run(drawer, now=102.0) is False
    assert grp.state is State.STOPPED
    # 停止後も排出呼び出しはエラーにならない
    assert grp.run(drawer, now=102.2) is False


def test_members_run_with_group_now(pair, fake_time, drawer) -> None:
    a, b = pair
    grp = SyncGrp([a, b], time_fn=fake_time)
    grp.start(now=100.0)
    grp.run(drawer, now=100.25)
    assert a.particles[-1].spawn_time == b.particles[-1].spawn_time == 100.25


def test_period_override_pushes_into_members(pair, fake_time, drawer) -> None:
    a, b = pair
    grp = SyncGrp([a, b], period=1.5, time_fn=fake_time)
    assert a.period == b.period == grp.period == 1.5
    grp.start_loop(now=100.0)
    assert grp.run(drawer, now=101.6) is True
    assert a.clock.started_at == b.clock.started_at == 101.5
    with pytest.raises(InvalidConfigError):
        grp.with_period(3.0)
    grp.stop()
    assert grp.with_period(3.0) is grp
    assert a.period == b.period == 3.0


def test_start_loop_rejects_member_with_zero_period(line_factory, fake_time) -> None:
    ok = line_factory(period=1.0)
    zero = line_factory(period=0.0)
    grp = SyncGrp([ok, zero], time_fn=fake_time)
    with pytest.raises(InvalidConfigError):
        grp.start_loop()
    assert ok.state is State.NOT_STARTED


def test_nested_groups_run_together(line_factory, fake_time, drawer) -> None:
    a = line_factory(period=1.0)
    b = line_factory(period=1.0)
    c = line_factory(period=1.0)
    grp = SyncGrp([a, SeqGrp([b, c], time_fn=fake_time)], time_fn=fake_time)
    assert grp.period == 2.0
    grp.start(now=100.0)
    grp.run(drawer, now=100.0)
    assert len(drawer) == 2
    assert c.state is State.NOT_STARTED


def test_clear_is_broadcast(pair, fake_time, drawer) -> None:
    a, b = pair
    grp = SyncGrp([a, b], time_fn=fake_time)
    grp.start()
    grp.run(drawer)
    grp.stop(clear=True)
    assert a.particles == () and b.particles == ()


def test_membership_rules(line_factory, fake_time) -> None:
    a = line_factory()
    b = line_factory()
    with pytest.raises(InvalidConfigError):
        SyncGrp([], time_fn=fake_time)
    with pytest.raises(InvalidConfigError):
        SyncGrp([a, a], time_fn=fake_time)
    with pytest.raises(InvalidConfigError):
        SyncGrp([SyncGrp([a], time_fn=fake_time), a], time_fn=fake_time)
    with pytest.raises(InvalidConfigError):
        SyncGrp([a, object()], time_fn=fake_time)  # type: ignore[list-item]

    grp = SyncGrp([a], time_fn=fake_time)
    with pytest.raises(InvalidConfigError):
        grp.with_systems([grp])
    with pytest.raises(InvalidConfigError):
        grp.with_systems([SeqGrp([grp], time_fn=fake_time)])

    assert grp.with_systems([a, b]) is grp
    assert list(grp) == [a, b]
    assert len(grp) == 2
    grp.start()
    with pytest.raises(InvalidConfigError):
        grp.with_systems([a])


def test_period_change_with_running_member_leaves_all_members_untouched(pair, fake_time) -> None:
    a, b = pair
    grp = SyncGrp([a, b], time_fn=fake_time)
    b.start(now=100.0)
    with pytest.raises(InvalidConfigError):
        grp.period = 4.0
    assert (a.period, b.period) == (1.0, 2.0)
