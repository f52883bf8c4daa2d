"""
Trajectory Tests
================
Packet stream behaviour: initial state, determinism, symmetry,
termination and agreement with closed-form motion.
"""

from dataclasses import replace
from itertools import islice

import numpy as np
import pytest

from point_mass import (
    Angle, Flags, Length, Scope, SimulationConfig, Time, Trajectory,
    Velocity, Wind, validate_against_vacuum,
)
from point_mass.validation import max_error

from conftest import first_past


class TestInitialState:
    def test_first_packet_is_muzzle(self, default_config):
        packet = next(Trajectory(default_config))
        assert packet.time_s == 0.0
        assert packet.distance.si == 0.0
        assert packet.elevation.to('in') == pytest.approx(-1.5)
        assert packet.windage.si == 0.0
        assert packet.velocity.to('ft/s') == pytest.approx(3000.0)

    def test_energy_at_muzzle(self, default_config):
        packet = next(Trajectory(default_config))
        # 220 gr at 3000 ft/s
        assert packet.energy.to('ft*lbf') == pytest.approx(4396, rel=1e-3)

    def test_mach_at_muzzle(self, default_config):
        packet = next(Trajectory(default_config))
        assert packet.mach == pytest.approx(914.4 / 340.3, rel=2e-3)

    def test_angles_default_to_scope(self):
        config = SimulationConfig(scope=Scope(pitch=Angle(2, 'moa'), yaw=Angle(-1, 'moa')))
        trajectory = Trajectory(config)
        assert trajectory.pitch == Angle(2, 'moa')
        assert trajectory.yaw == Angle(-1, 'moa')

    def test_cant_moves_muzzle(self):
        config = SimulationConfig(scope=Scope(cant=Angle(90, 'deg')))
        packet = next(Trajectory(config))
        # bore below the scope ends up beside it
        assert packet.elevation.si == pytest.approx(0.0, abs=1e-12)
        assert packet.windage.to('in') == pytest.approx(-1.5)


class TestDeterminism:
    @pytest.mark.parametrize("method", ['euler', 'rk4'])
    def test_identical_runs(self, method):
        config = SimulationConfig(method=method)
        a = list(islice(Trajectory(config, Angle(3, 'moa')), 2000))
        b = list(islice(Trajectory(config, Angle(3, 'moa')), 2000))
        for p, q in zip(a, b):
            assert p.time_s == q.time_s
            np.testing.assert_array_equal(p.position, q.position)
            np.testing.assert_array_equal(p.velocity_vector, q.velocity_vector)


class TestSymmetry:
    def test_no_lateral_drift_without_lateral_effects(self):
        config = SimulationConfig(flags=Flags(use_drag=True, use_gravity=True, use_coriolis=False))
        for packet in islice(Trajectory(config), 6000):
            assert packet.position[2] == 0.0

    def test_mirrored_wind_mirrors_windage(self, fast_config):
        flags = Flags(use_drag=True, use_gravity=True, use_coriolis=False)
        left = replace(fast_config, flags=flags,
                       wind=Wind(Velocity(10, 'mph'), Angle(270, 'deg')))
        right = replace(fast_config, flags=flags,
                        wind=Wind(Velocity(10, 'mph'), Angle(90, 'deg')))
        pl = first_past(Trajectory(left), Length(300, 'yd'))
        pr = first_past(Trajectory(right), Length(300, 'yd'))
        assert pr.windage.si < 0
        assert pl.windage.si == pytest.approx(-pr.windage.si, rel=1e-6)


class TestDragEffects:
    def test_speed_decays(self, fast_config):
        speeds = [p.speed for p in islice(Trajectory(fast_config), 4000)]
        assert all(b < a for a, b in zip(speeds, speeds[1:]))

    def test_drag_free_drop(self, vacuum_config):
        """Without drag: y ≈ -½ g (x / v)² along a level bore."""
        packet = first_past(Trajectory(vacuum_config), Length(100, 'yd'))
        t = packet.position[0] / vacuum_config.projectile.velocity.si
        expected = -0.5 * 9.80665 * t ** 2
        assert packet.position[1] == pytest.approx(expected, rel=1e-3)

    def test_drag_increases_drop(self, vacuum_config):
        with_drag = replace(vacuum_config, flags=Flags(use_drag=True, use_gravity=True,
                                                       use_coriolis=False))
        vac = first_past(Trajectory(vacuum_config), Length(200, 'yd'))
        real = first_past(Trajectory(with_drag), Length(200, 'yd'))
        assert real.elevation < vac.elevation
        assert real.time_s > vac.time_s


class TestTermination:
    def test_minimum_velocity(self):
        config = SimulationConfig(minimum_velocity=Velocity(2900, 'ft/s'))
        packets = list(Trajectory(config))
        assert packets[-1].velocity < Velocity(2900, 'ft/s')
        assert all(p.velocity >= Velocity(2900, 'ft/s') for p in packets[:-1])

    def test_max_time(self):
        config = SimulationConfig(max_time=Time(0.01))
        packets = list(Trajectory(config))
        assert packets[-1].time_s >= 0.01
        assert packets[-2].time_s < 0.01

    def test_not_restartable(self):
        trajectory = Trajectory(SimulationConfig(max_time=Time(0.001)))
        assert len(list(trajectory)) > 0
        assert list(trajectory) == []
        with pytest.raises(StopIteration):
            next(trajectory)

    def test_time_and_distance_advance(self, fast_config):
        packets = list(islice(Trajectory(fast_config), 500))
        times = [p.time_s for p in packets]
        xs = [p.position[0] for p in packets]
        assert all(b > a for a, b in zip(times, times[1:]))
        assert all(b > a for a, b in zip(xs, xs[1:]))


class TestValidation:
    DISTANCES = [Length(d, 'yd') for d in (50, 100, 200)]

    def test_euler_close_to_closed_form(self, default_config):
        results = validate_against_vacuum(default_config, self.DISTANCES, verbose=False)
        assert len(results) == 3
        assert max_error(results).to('in') < 0.01

    def test_rk4_matches_closed_form(self, default_config):
        config = replace(default_config, method='rk4', time_step=Time(1e-3))
        results = validate_against_vacuum(config, self.DISTANCES, verbose=False)
        assert max_error(results).si < 1e-9


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
