import math

from panoscroll_py.smoothing import JumpDamper


def test_damper_lets_first_value_through():
    damper = JumpDamper(movement_limit=5, dampening=0.9)
    assert damper.apply(200, None) == 200


def test_damper_holds_back_large_increase():
    damper = JumpDamper(movement_limit=5, dampening=0.9)
    assert math.isclose(damper.apply(200, 100), 110)


def test_damper_holds_back_large_decrease():
    damper = JumpDamper(movement_limit=10, dampening=0.8)
    assert math.isclose(damper.apply(0, 100), 80)


def test_damper_ignores_small_moves():
    damper = JumpDamper(movement_limit=5, dampening=0.9)
    assert damper.apply(105, 100) == 105
    assert damper.apply(95, 100) == 95
    assert damper.apply(100, 100) == 100


def test_damper_from_zero_is_still_damped():
    damper = JumpDamper(movement_limit=5, dampening=0.9)
    assert math.isclose(damper.apply(100, 0), 10)
