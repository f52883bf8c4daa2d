"""
Zero Solver Tests
=================
Convergence, the reference 100 yd zero, coupled axes and failure modes.
"""

from dataclasses import replace

import pytest

from point_mass import (
    Angle, ConfigurationError, ConvergenceError, Flags, Length, Scope,
    SimulationConfig, Target, TerminatedEarlyError, Time, Trajectory,
    Velocity, Wind, ZeroFindingError, ZeroSolver, find_zero_angles,
    solve_for,
)

from conftest import first_past


class TestReferenceZero:
    """220 gr .308, G7 0.5, 3000 ft/s, 1.5 in scope, 59 °F, 29.92 inHg."""

    def test_converges_within_bound(self, default_config, zero_target):
        solution = ZeroSolver(default_config).solve(zero_target)
        assert 1 <= solution.iterations <= 40
        assert abs(solution.elevation_miss) <= zero_target.tolerance
        assert abs(solution.windage_miss) <= zero_target.tolerance

    def test_refly_passes_through_target(self, default_config, zero_target):
        pitch, yaw = find_zero_angles(default_config, zero_target)
        trajectory = Trajectory(default_config, pitch, yaw)
        first = next(trajectory)
        assert first.elevation.to('in') == pytest.approx(-1.5)
        packet = first_past(trajectory, zero_target.distance)
        assert abs(packet.elevation.to('in')) <= 0.001
        assert abs(packet.windage.to('in')) <= 0.001

    def test_pitch_is_plausible(self, default_config, zero_target):
        pitch, _ = find_zero_angles(default_config, zero_target)
        # bore must point up to climb 1.5 in and beat ~2 in of drop
        assert 2.0 < pitch.to('moa') < 5.0

    def test_history_records_every_pass(self, default_config, zero_target):
        solver = ZeroSolver(default_config)
        solution = solver.solve(zero_target)
        assert len(solver.history) == solution.iterations
        assert solver.history[0].pitch == Angle(0.0)
        misses = [abs(h.elevation_miss.si) for h in solver.history]
        assert misses[-1] < misses[0]


class TestCoupledAxes:
    def test_crosswind_needs_right_yaw(self, fast_config, zero_target):
        config = fast_config.with_conditions(wind=Wind(Velocity(10, 'mph'), Angle(90, 'deg')))
        solution = ZeroSolver(config).solve(zero_target)
        assert solution.yaw.si > 0
        assert abs(solution.windage_miss) <= zero_target.tolerance

    def test_canted_scope(self, fast_config, zero_target):
        config = replace(fast_config, scope=Scope(cant=Angle(5, 'deg')))
        solution = ZeroSolver(config).solve(zero_target)
        assert abs(solution.elevation_miss) <= zero_target.tolerance
        assert abs(solution.windage_miss) <= zero_target.tolerance

    def test_offset_target(self, fast_config):
        target = Target(distance=Length(200, 'yd'), height=Length(2, 'in'),
                        offset=Length(-1, 'in'))
        solution = ZeroSolver(fast_config).solve(target)
        assert abs(solution.elevation_miss) <= target.tolerance
        assert abs(solution.windage_miss) <= target.tolerance
        assert solution.yaw.si < 0

    def test_solve_for_adds_dialled_angles(self, fast_config, zero_target):
        dial = Angle(1, 'moa')
        firing = replace(fast_config, scope=replace(fast_config.scope, pitch=dial))
        pitch, yaw = find_zero_angles(fast_config, zero_target)
        trajectory = solve_for(fast_config, firing, zero_target)
        assert trajectory.pitch.si == pytest.approx((pitch + dial).si)
        assert trajectory.yaw.si == pytest.approx(yaw.si)
        packet = first_past(trajectory, zero_target.distance)
        # one MOA is about 1.047 in at 100 yd
        assert packet.elevation.to('in') == pytest.approx(1.047, abs=0.01)


class TestFailures:
    def test_iteration_bound(self, default_config, zero_target):
        with pytest.raises(ConvergenceError) as info:
            ZeroSolver(default_config, max_iterations=1).solve(zero_target)
        err = info.value
        assert err.iterations == 1
        assert abs(err.elevation_miss) > zero_target.tolerance
        assert isinstance(err, ZeroFindingError)

    def test_unreachable_distance(self, zero_target):
        config = SimulationConfig(max_time=Time(0.05))
        with pytest.raises(TerminatedEarlyError) as info:
            find_zero_angles(config, zero_target)
        assert info.value.reached < zero_target.distance
        assert info.value.requested == zero_target.distance

    def test_drag_free_zero_still_converges(self, zero_target):
        config = SimulationConfig(flags=Flags(use_drag=False, use_gravity=True,
                                              use_coriolis=False))
        pitch, yaw = find_zero_angles(config, zero_target)
        assert yaw.si == 0.0
        assert pitch.si > 0

    def test_invalid_target(self):
        with pytest.raises(ConfigurationError):
            Target(distance=Length(0))
        with pytest.raises(ConfigurationError):
            Target(tolerance=Length(0))
        with pytest.raises(ConfigurationError):
            Target(distance=100)

    def test_invalid_solver_arguments(self, default_config):
        with pytest.raises(ConfigurationError):
            ZeroSolver(default_config, max_iterations=0)
        with pytest.raises(ConfigurationError):
            ZeroSolver(object())


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
