import pytest

from panoscroll_py.normalize import (
    normalise_alpha,
    normalise_alpha_anticlockwise,
    normalise_alpha_clockwise,
    normalise_beta,
    normalise_gamma_anticlockwise,
    normalise_gamma_clockwise,
    normalise_sample,
)
from panoscroll_py.orientation import DeviceOrientationState, RawOrientationSample

PORTRAIT = DeviceOrientationState(is_landscape=False)
CLOCKWISE = DeviceOrientationState(is_landscape=True, is_rotated_clockwise=True)
ANTICLOCKWISE = DeviceOrientationState(is_landscape=True, is_rotated_clockwise=False)


@pytest.mark.parametrize(
    "raw, expected",
    [(0, 0), (1, 1), (90, 90), (179, 179), (180, 180), (-179, 181), (-180, 180), (-90, 270), (-1, 0)],
)
def test_normalise_beta_fixed_points(raw, expected):
    assert normalise_beta(raw) == expected


def test_normalise_beta_stays_in_range():
    for tenth in range(-1800, 1801):
        assert 0 <= normalise_beta(tenth / 10.0) <= 270


def test_normalise_beta_continuous_through_face_down():
    # face up -> horizontal -> face down -> horizontal inverted
    path = [t / 10.0 for t in range(0, 1801)] + [t / 10.0 for t in range(-1800, -899)]
    values = [normalise_beta(beta) for beta in path]
    steps = [abs(b - a) for a, b in zip(values, values[1:])]
    assert max(steps) <= 0.1 + 1e-9
    assert values[-1] == pytest.approx(270)


def test_normalise_beta_folds_face_up_inverted_arc_onto_zero():
    assert normalise_beta(-0.5) == 0
    assert normalise_beta(-89) == 0


@pytest.mark.parametrize("raw, expected", [(-1, 179), (89, 89), (-89, 91), (1, 1), (0, 0)])
def test_normalise_gamma_clockwise(raw, expected):
    assert normalise_gamma_clockwise(raw) == expected


@pytest.mark.parametrize("raw, expected", [(1, 179), (89, 91), (-89, 89), (-1, 1), (0, 0)])
def test_normalise_gamma_anticlockwise(raw, expected):
    assert normalise_gamma_anticlockwise(raw) == expected


def test_alpha_clockwise_half_turn_below_horizon():
    assert normalise_alpha_clockwise(100, 10) == 100
    assert normalise_alpha_clockwise(100, -10) == 280
    assert normalise_alpha_clockwise(200, -10) == 20
    # exactly 360 is not wrapped
    assert normalise_alpha_clockwise(180, -10) == 360


def test_alpha_anticlockwise_half_turn_above_horizon():
    assert normalise_alpha_anticlockwise(100, -10) == 100
    assert normalise_alpha_anticlockwise(300, 10) == 120
    assert normalise_alpha_anticlockwise(100, 10) == 280
    assert normalise_alpha_anticlockwise(180, 10) == 0


def test_portrait_alpha_passes_through():
    sample = RawOrientationSample(alpha=123.4, beta=60, gamma=-45)
    assert normalise_alpha(sample, PORTRAIT) == 123.4


def test_normalise_sample_uses_gamma_for_tilt_in_landscape():
    sample = RawOrientationSample(alpha=90, beta=170, gamma=-30)
    assert normalise_sample(sample, PORTRAIT).beta == 170
    assert normalise_sample(sample, CLOCKWISE).beta == 150
    assert normalise_sample(sample, CLOCKWISE).alpha == 270
    assert normalise_sample(sample, ANTICLOCKWISE).beta == 30
    assert normalise_sample(sample, ANTICLOCKWISE).alpha == 90
