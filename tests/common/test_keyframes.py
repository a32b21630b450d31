from __future__ import annotations

import math

import numpy as np
import pytest

from pxparticles.common.errors import InvalidConfigError
from pxparticles.common.keyframes import Keyframes, check_range, coerce_keyframes


def test_endpoints_return_first_and_last_values() -> None:
    k = Keyframes([(0.0, 2.0), (0.4, 5.0), (1.0, -1.0)])
    assert k.sample(0.0) == 2.0
    assert k.sample(1.0) == -1.0


def test_linear_interpolation_between_keyframes() -> None:
    k = Keyframes([(0.0, 0.0), (0.5, 1.0), (1.0, 0.0)])
    assert math.isclose(k.sample(0.25), 0.5)
    assert math.isclose(k.sample(0.75), 0.5)
    assert math.isclose(k.sample(0.5), 1.0)


def test_outside_keyframe_domain_clamps_to_edge_values() -> None:
    k = Keyframes([(0.2, 3.0), (0.8, 7.0)])
    assert k.sample(0.0) == 3.0
    assert k.sample(0.1) == 3.0
    assert k.sample(0.9) == 7.0
    assert k.sample(1.0) == 7.0
    # [0,1] 外の progress も端の値
    assert k.sample(-1.0) == 3.0
    assert k.sample(2.0) == 7.0


def test_single_keyframe_is_constant() -> None:
    k = Keyframes.constant(0.3)
    for p in (0.0, 0.25, 0.5, 1.0):
        assert k.sample(p) == 0.3


def test_degenerate_interval_returns_upper_value() -> None:
    k = Keyframes([(0.0, 0.0), (0.5, 1.0), (0.5, 4.0), (1.0, 4.0)])
    assert k.sample(0.5) == 4.0
    assert math.isclose(k.sample(0.25), 0.5)


def test_vector_values_interpolate_per_channel() -> None:
    k = Keyframes([(0.0, (0.0, 1.0, 0.0, 1.0)), (1.0, (1.0, 0.0, 0.0, 0.0))])
    r, g, b, a = k.sample(0.25)  # type: ignore[misc]
    assert math.isclose(r, 0.25)
    assert math.isclose(g, 0.75)
    assert b == 0.0
    assert math.isclose(a, 0.75)
    assert k.dim == 4
    assert not k.is_scalar


def test_scalar_sample_returns_float_and_vector_returns_tuple() -> None:
    assert isinstance(Keyframes.constant(1).sample(0.5), float)
    assert isinstance(Keyframes.constant((1, 2, 3)).sample(0.5), tuple)


def test_evenly_spaces_values_over_unit_interval() -> None:
    k = Keyframes.evenly([1.0, 0.0, 0.5, 0.0])
    assert np.allclose(k.progress, [0.0, 1.0 / 3.0, 2.0 / 3.0, 1.0])
    assert math.isclose(k.sample(0.5), 0.25)
    assert Keyframes.evenly([0.7]).sample(0.9) == 0.7


def test_iteration_and_equality() -> None:
    a = Keyframes([(0.0, 1.0), (1.0, 2.0)])
    b = Keyframes.evenly([1.0, 2.0])
    assert list(a) == [(0.0, 1.0), (1.0, 2.0)]
    assert a == b
    assert len(a) == 2


def test_arrays_are_read_only() -> None:
    k = Keyframes([(0.0, 1.0), (1.0, 2.0)])
    with pytest.raises(ValueError):
        k.values[0, 0] = 5.0
    with pytest.raises(ValueError):
        k.progress[0] = 0.5


@pytest.mark.parametrize(
    "samples",
    [
        [],
        [(0.5,)],
        [(1.2, 0.0)],
        [(-0.1, 0.0)],
        [(0.6, 0.0), (0.4, 1.0)],
        [(0.0, 1.0), (1.0, (1.0, 2.0))],
        [(0.0, (1.0, 2.0)), (1.0, (1.0, 2.0, 3.0))],
        [(0.0, float("nan"))],
        [(0.0, "red")],
        [("a", 1.0)],
    ],
)
def test_invalid_series_raise(samples) -> None:
    with pytest.raises(InvalidConfigError):
        Keyframes(samples)


def test_invalid_config_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Keyframes([])


def test_evenly_empty_raises() -> None:
    with pytest.raises(InvalidConfigError):
        Keyframes.evenly([])


def test_nan_progress_is_rejected() -> None:
    with pytest.raises(ValueError):
        Keyframes.constant(1.0).sample(float("nan"))


def test_coerce_accepts_pairs_and_passes_keyframes_through() -> None:
    k = Keyframes.constant(1.0)
    assert coerce_keyframes(k) is k
    c = coerce_keyframes([(0, 0), (1, 1)], name="locations")
    assert c.sample(0.5) == 0.5


def test_coerce_applies_converter_to_values() -> None:
    c = coerce_keyframes([(0.0, 1.0), (1.0, 3.0)], convert=lambda v: float(v) * 2.0)  # type: ignore[arg-type]
    assert c.sample(1.0) == 6.0


def test_coerce_rejects_non_series_and_prefixes_name() -> None:
    with pytest.raises(InvalidConfigError):
        coerce_keyframes("0,1")
    with pytest.raises(InvalidConfigError):
        coerce_keyframes(None)
    with pytest.raises(InvalidConfigError, match="densities"):
        coerce_keyframes([], name="densities")


def test_check_range() -> None:
    ok = Keyframes([(0.0, 0.0), (1.0, 1.0)])
    assert check_range(ok, "densities") is ok
    with pytest.raises(InvalidConfigError):
        check_range(Keyframes.constant(1.5), "densities")
    with pytest.raises(InvalidConfigError):
        check_range(Keyframes.constant(-0.1), "locations")


def test_monotonic_series_samples_monotonically() -> None:
    k = Keyframes([(0.0, 0.0), (0.3, 0.2), (0.3, 0.5), (1.0, 1.0)])
    samples = [k.sample(i / 20.0) for i in range(21)]
    assert all(a <= b for a, b in zip(samples, samples[1:]))


def test_empty_series_message() -> None:
    with pytest.raises(InvalidConfigError, match="at least one sample"):
        Keyframes([])
