"""
Measurement & Sampling Tests
============================
Projection of packets into range table rows, hold directions and
distance-step sampling.
"""

import numpy as np
import pytest

from point_mass import (
    Adjustment, Length, Packet, Trajectory, measure, range_table, sample,
)
from point_mass.measurements import angular_equivalent


def make_packet(x=91.44, y=0.0, z=0.0, speed=800.0, time_s=0.1):
    return Packet(
        time_s=time_s,
        position=np.array([x, y, z]),
        velocity_vector=np.array([speed, 0.0, 0.0]),
        acceleration_vector=np.array([-300.0, -9.8, 0.0]),
        mach=speed / 340.0,
        mass=0.01,
    )


TOLERANCE = Length(0.5, 'in')


class TestAdjustments:
    def test_high_and_right(self):
        m = measure(make_packet(y=Length(1, 'in').si, z=Length(2, 'in').si), TOLERANCE)
        assert m.elevation_adjustment is Adjustment.DOWN
        assert m.windage_adjustment is Adjustment.LEFT

    def test_low_and_left(self):
        m = measure(make_packet(y=Length(-1, 'in').si, z=Length(-2, 'in').si), TOLERANCE)
        assert m.elevation_adjustment is Adjustment.UP
        assert m.windage_adjustment is Adjustment.RIGHT

    def test_inside_tolerance(self):
        m = measure(make_packet(y=Length(0.4, 'in').si, z=Length(-0.49, 'in').si), TOLERANCE)
        assert m.elevation_adjustment is Adjustment.ON_TARGET
        assert m.windage_adjustment is Adjustment.ON_TARGET
        assert m.elevation_angle.si == 0.0
        assert m.windage_angle.si == 0.0

    def test_exactly_at_tolerance_needs_a_hold(self):
        high = measure(make_packet(y=TOLERANCE.si, z=TOLERANCE.si), TOLERANCE)
        assert high.elevation_adjustment is Adjustment.DOWN
        assert high.windage_adjustment is Adjustment.LEFT
        assert high.elevation_angle.si > 0
        low = measure(make_packet(y=-TOLERANCE.si, z=-TOLERANCE.si), TOLERANCE)
        assert low.elevation_adjustment is Adjustment.UP
        assert low.windage_adjustment is Adjustment.RIGHT
        assert low.windage_angle.si < 0

    def test_symbols(self):
        assert [str(a) for a in Adjustment] == ['U', 'D', 'L', 'R', '*']

    def test_aim_point_offsets_miss(self):
        packet = make_packet(y=Length(3, 'in').si)
        m = measure(packet, TOLERANCE, height=Length(3, 'in'))
        assert m.elevation_adjustment is Adjustment.ON_TARGET
        assert m.elevation.to('in') == pytest.approx(3.0)


class TestAngles:
    def test_inch_at_hundred_yards(self):
        m = measure(make_packet(y=Length(1, 'in').si, z=Length(-2, 'in').si), TOLERANCE)
        assert m.elevation_angle.to('moa') == pytest.approx(0.955, abs=1e-3)
        assert m.windage_angle.to('moa') == pytest.approx(-1.910, abs=1e-3)

    def test_no_angle_at_muzzle(self):
        angle = angular_equivalent(Length(-1.5, 'in'), Length(0.0), TOLERANCE)
        assert angle.si == 0.0


class TestMeasurement:
    def test_derived_quantities(self):
        m = measure(make_packet(speed=800.0, time_s=0.25), TOLERANCE)
        assert m.distance.to('yd') == pytest.approx(100.0)
        assert m.velocity.si == pytest.approx(800.0)
        assert m.mach == pytest.approx(800.0 / 340.0)
        assert m.energy.si == pytest.approx(0.5 * 0.01 * 800.0 ** 2)
        assert m.acceleration.si == pytest.approx(np.hypot(300.0, 9.8))
        assert m.time.si == 0.25


class TestSampling:
    def _packets(self, xs):
        return [make_packet(x=x) for x in xs]

    def test_first_packet_past_each_threshold(self):
        packets = self._packets([0, 4, 9, 10, 12, 19, 21, 29, 31, 40, 45, 50])
        rows = list(sample(packets, Length(0), Length(30), Length(10)))
        assert [p.position[0] for p in rows] == [0, 10, 21, 31, 40]

    def test_offset_start(self):
        packets = self._packets(range(0, 100, 3))
        rows = list(sample(packets, Length(20), Length(50), Length(15)))
        assert [p.position[0] for p in rows] == [21, 36, 51]

    def test_lazy_consumption(self):
        consumed = []

        def stream():
            for x in range(1000):
                consumed.append(x)
                yield make_packet(x=float(x))

        list(sample(stream(), Length(0), Length(10), Length(5)))
        assert max(consumed) == 16

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            list(sample([], Length(0), Length(10), Length(0)))
        with pytest.raises(ValueError):
            list(sample([], Length(10), Length(0), Length(1)))

    def test_range_table_on_real_trajectory(self, fast_config):
        step = Length(100, 'yd')
        rows = range_table(Trajectory(fast_config), Length(0, 'yd'),
                           Length(300, 'yd'), step, TOLERANCE)
        assert len(rows) == 4
        for i, row in enumerate(rows):
            assert row.distance.si >= i * step.si
            assert row.distance.si < i * step.si + 0.1
        assert rows[0].elevation.to('in') == pytest.approx(-1.5)
        velocities = [r.velocity.si for r in rows]
        assert velocities == sorted(velocities, reverse=True)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
