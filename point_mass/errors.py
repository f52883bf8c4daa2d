"""
Exception hierarchy for the ballistic core.

Configuration problems are caught eagerly when a config value is built.
Zeroing failures are split so callers can tell an unreachable target
apart from a solver that ran out of iterations.
"""


class BallisticsError(Exception):
    """Root of every error raised by point_mass."""


class ConfigurationError(BallisticsError, ValueError):
    """An invalid physical parameter was supplied."""


class ZeroFindingError(BallisticsError):
    """The zero solver could not produce a validated angle pair."""


class ConvergenceError(ZeroFindingError):
    """Iteration bound exhausted before the miss fell inside tolerance."""

    def __init__(self, iterations, pitch, yaw, elevation_miss, windage_miss):
        self.iterations = iterations
        self.pitch = pitch
        self.yaw = yaw
        self.elevation_miss = elevation_miss
        self.windage_miss = windage_miss
        super().__init__(
            f"Zero did not converge after {iterations} iterations "
            f"(elevation miss {elevation_miss.to('in'):.4f} in, "
            f"windage miss {windage_miss.to('in'):.4f} in)"
        )


class TerminatedEarlyError(ZeroFindingError):
    """The trajectory ended before reaching the requested distance."""

    def __init__(self, requested, reached):
        self.requested = requested
        self.reached = reached
        super().__init__(
            f"Trajectory terminated at {reached.to('yd'):.1f} yd, "
            f"before the requested {requested.to('yd'):.1f} yd"
        )
