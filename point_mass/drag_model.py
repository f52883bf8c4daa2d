"""
Aerodynamic Drag Model
======================
Mach-dependent drag coefficients (Cd) for the eight standard reference
projectiles (G1, G2, G5, G6, G7, G8, GI, GS).

The table family is a plain enum chosen when the simulation is configured,
so one simulation type serves every drag family. Each family is looked up
by piecewise-linear interpolation over its (Mach, Cd) breakpoints.

Outside the tabulated Mach range the boundary coefficient is returned
rather than an extrapolated one: projectiles start above the last
breakpoint and end well below the first, and extrapolation diverges there.

The projectile's ballistic coefficient scales the reference curve through
its form factor i = SD / BC (see projectile.py).
"""

from enum import Enum
from functools import lru_cache

import numpy as np
from scipy.interpolate import interp1d

from . import drag_tables


class DragTable(Enum):
    """Standard drag function families."""

    G1 = 'G1'
    G2 = 'G2'
    G5 = 'G5'
    G6 = 'G6'
    G7 = 'G7'
    G8 = 'G8'
    GI = 'GI'
    GS = 'GS'

    @classmethod
    def from_name(cls, name: str) -> 'DragTable':
        """Case-insensitive lookup, e.g. ``DragTable.from_name('g7')``."""
        try:
            return cls(name.upper())
        except ValueError:
            raise ValueError(
                f"Unknown drag table '{name}'. "
                f"Available: {[t.value for t in cls]}"
            ) from None

    @property
    def table(self) -> np.ndarray:
        """(N, 2) array of (Mach, Cd) breakpoints."""
        return _TABLES[self]


_TABLES = {
    DragTable.G1: drag_tables.G1_TABLE,
    DragTable.G2: drag_tables.G2_TABLE,
    DragTable.G5: drag_tables.G5_TABLE,
    DragTable.G6: drag_tables.G6_TABLE,
    DragTable.G7: drag_tables.G7_TABLE,
    DragTable.G8: drag_tables.G8_TABLE,
    DragTable.GI: drag_tables.GI_TABLE,
    DragTable.GS: drag_tables.GS_TABLE,
}

# Plot styling per family (used by visualization.py)
STYLES = {
    DragTable.G1: ('#e74c3c', '-'),
    DragTable.G2: ('#3498db', '--'),
    DragTable.G5: ('#2ecc71', '-.'),
    DragTable.G6: ('#9b59b6', ':'),
    DragTable.G7: ('#f39c12', '-'),
    DragTable.G8: ('#1abc9c', '--'),
    DragTable.GI: ('#e84393', '-.'),
    DragTable.GS: ('#bdc3c7', ':'),
}


# ══════════════════════════════════════════════════════════════════════════
#  Interpolation-based Cd lookup
# ══════════════════════════════════════════════════════════════════════════

class DragModel:
    """
    Drag coefficient model for one standard drag family.

    Uses linear interpolation over the Cd vs Mach breakpoints,
    clamped to the boundary coefficients outside the table.
    """

    def __init__(self, table: DragTable = DragTable.G7):
        """
        Parameters
        ----------
        table : DragTable
            Drag family to look up.
        """
        if not isinstance(table, DragTable):
            raise ValueError(
                f"Expected a DragTable, got {table!r}. "
                f"Available: {[t.value for t in DragTable]}"
            )

        data = table.table
        mach_arr = data[:, 0]
        cd_arr = data[:, 1]
        if np.any(np.diff(mach_arr) <= 0):
            raise ValueError(f"{table.value} breakpoints must increase strictly in Mach")

        self.table = table
        self.name = table.value
        self.color, self.linestyle = STYLES[table]

        # Linear interpolation, boundary values held outside the table
        self._interp = interp1d(
            mach_arr, cd_arr,
            kind='linear',
            bounds_error=False,
            fill_value=(cd_arr[0], cd_arr[-1]),
            assume_sorted=True,
        )

    def coefficient(self, mach: float) -> float:
        """Return drag coefficient at the given Mach number."""
        return float(self._interp(mach))

    cd = coefficient

    def cd_array(self, mach_array: np.ndarray) -> np.ndarray:
        """Vectorized Cd lookup."""
        return self._interp(np.asarray(mach_array, dtype=float))

    def __repr__(self):
        return f"DragModel({self.name})"


@lru_cache(maxsize=None)
def drag_model(table: DragTable) -> DragModel:
    """Shared, read-only DragModel for a family."""
    return DragModel(table)


def drag_acceleration(velocity_rel: np.ndarray, rho: float, cd: float,
                      area: float, form_factor: float,
                      mass: float) -> np.ndarray:
    """
    Compute drag deceleration vector (m/s²).

    a_drag = -½ ρ |v_rel| v_rel A Cd i / m

    Parameters
    ----------
    velocity_rel : np.ndarray
        Velocity relative to air mass [vx, vy, vz] (m/s)
    rho : float
        Air density (kg/m³)
    cd : float
        Reference drag coefficient from the drag table
    area : float
        Reference cross-sectional area (m²)
    form_factor : float
        Projectile form factor i = SD / BC
    mass : float
        Projectile mass (kg)

    Returns
    -------
    np.ndarray
        Drag acceleration [ax, ay, az] (m/s²)
    """
    v_mag = np.linalg.norm(velocity_rel)
    if v_mag < 1e-10:
        return np.zeros(3)

    return -(0.5 * rho * v_mag * cd * area * form_factor / mass) * velocity_rel
