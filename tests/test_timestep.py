import pytest

from emerald.timestep import Timestep


def test_default_is_zero():
    assert float(Timestep()) == 0.0
    assert Timestep().seconds == 0.0


def test_seconds_round_trip():
    step = Timestep(0.25)
    assert step.seconds == 0.25
    assert float(step) == 0.25


def test_milliseconds_scale():
    step = Timestep(0.5)
    assert step.milliseconds == pytest.approx(step.seconds * 1000.0)


def test_arithmetic_matches_float():
    step = Timestep(0.25)
    assert step * 4 == pytest.approx(1.0)
    assert 4 * step == pytest.approx(1.0)
    assert 1 / step == pytest.approx(4.0)
    assert step + 0.75 == pytest.approx(1.0)
    assert 1.0 - step == pytest.approx(0.75)
    assert -step == -0.25


def test_division_by_zero_step_raises():
    with pytest.raises(ZeroDivisionError):
        1 / Timestep(0.0)


def test_is_immutable():
    step = Timestep(1.0)
    with pytest.raises(AttributeError):
        step.time = 2.0  # type: ignore[misc]
    assert step.seconds == 1.0
    assert float(step) == 1.0