"""
Numerical Integration Engine
=============================
Fixed time-step advancement of the projectile state:

1. **Euler Method** (semi-implicit, 1st order) — velocity first, then
   position with the updated velocity. Cheap; accurate enough at the small
   steps (~5e-5 s) that stiff high-Mach drag needs anyway.
2. **Runge-Kutta 4th Order (RK4)** — four force evaluations per step,
   much more accurate at the same timestep.

Both integrate the equations of motion:
    dx/dt = v
    dv/dt = a(x, v)  (from ForceModel)

There is no adaptive stepping. The same state, forces and step always
produce the same next state, bit for bit.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .projectile import ForceModel


@dataclass(frozen=True)
class State:
    """Projectile state at one instant (SI units)."""
    time: float
    position: np.ndarray   # [x, y, z]
    velocity: np.ndarray   # [vx, vy, vz]


def step_euler(state: State, forces: ForceModel, dt: float,
               acceleration: Optional[np.ndarray] = None) -> State:
    """
    Semi-implicit Euler.

    v_{n+1} = v_n + a(x_n, v_n) * dt
    x_{n+1} = x_n + v_{n+1} * dt
    """
    if acceleration is None:
        acceleration = forces.acceleration(state.position, state.velocity)
    vel = state.velocity + acceleration * dt
    pos = state.position + vel * dt
    return State(state.time + dt, pos, vel)


def step_rk4(state: State, forces: ForceModel, dt: float,
             acceleration: Optional[np.ndarray] = None) -> State:
    """
    4th-order Runge-Kutta integration.

    ``acceleration`` may carry the k1 stage when the caller already has it.
    """
    pos, vel = state.position, state.velocity
    accel = forces.acceleration

    k1v = acceleration if acceleration is not None else accel(pos, vel)
    k1x = vel

    k2v = accel(pos + 0.5 * dt * k1x, vel + 0.5 * dt * k1v)
    k2x = vel + 0.5 * dt * k1v

    k3v = accel(pos + 0.5 * dt * k2x, vel + 0.5 * dt * k2v)
    k3x = vel + 0.5 * dt * k2v

    k4v = accel(pos + dt * k3x, vel + dt * k3v)
    k4x = vel + dt * k3v

    pos = pos + (dt / 6.0) * (k1x + 2*k2x + 2*k3x + k4x)
    vel = vel + (dt / 6.0) * (k1v + 2*k2v + 2*k3v + k4v)
    return State(state.time + dt, pos, vel)


STEPPERS = {
    'euler': step_euler,
    'rk4': step_rk4,
}


def step(state: State, forces: ForceModel, dt: float, method: str = 'euler',
         acceleration: Optional[np.ndarray] = None) -> State:
    """Advance ``state`` by one time step of ``dt`` seconds."""
    try:
        stepper = STEPPERS[method]
    except KeyError:
        raise ValueError(
            f"Unknown integration method '{method}'. "
            f"Available: {list(STEPPERS.keys())}"
        ) from None
    return stepper(state, forces, dt, acceleration)
