#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  POINT MASS BALLISTICS — Demonstration Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete pipeline for a reference load
  (220 gr .308, G7 BC 0.5, 3000 ft/s, 1.5 in scope height):
    1. Drag tables
    2. Atmosphere
    3. Zero at 100 yd
    4. Range table 0-1000 yd
    5. Drag-free validation against closed-form motion
    6. Plots

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip plots

═══════════════════════════════════════════════════════════════════════════════
"""

import logging
import sys
import time

from point_mass import (
    Angle, Atmosphere, DragTable, Length, SimulationConfig, Target, Velocity,
    Wind, ZeroSolver, Trajectory, range_table, validate_against_vacuum,
    drag_model,
)


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    config = SimulationConfig()
    tolerance = Length(0.5, 'in')

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Drag Tables
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Standard Drag Functions")
    for table in DragTable:
        model = drag_model(table)
        print(f"  {model.name:<4s}  Cd @ M0.5={model.cd(0.5):.4f}  "
              f"Cd @ M1.0={model.cd(1.0):.4f}  Cd @ M2.5={model.cd(2.5):.4f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Atmosphere
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Atmosphere")
    for label, atm in [("Firing conditions", config.atmosphere),
                       ("ISA 1500 m", Atmosphere.at_altitude(Length(1500))),
                       ("90 % humidity", Atmosphere(humidity=0.9))]:
        print(f"  {label:<20s} ρ={atm.air_density():.4f} kg/m³  "
              f"ratio={atm.density_ratio():.4f}  "
              f"a={atm.speed_of_sound().to('ft/s'):.1f} ft/s")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Zero
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Zero at 100 yd")
    target = Target()
    solver = ZeroSolver(config)
    solution = solver.solve(target)
    print(f"  Pitch: {solution.pitch.to('moa'):.3f} MOA  "
          f"Yaw: {solution.yaw.to('moa'):.3f} MOA  "
          f"({solution.iterations} iterations)")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Range Table (10 mph full value wind from the right)
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Range Table (10 mph wind from 3 o'clock)")
    firing = config.with_conditions(wind=Wind(Velocity(10, 'mph'), Angle(90, 'deg')))
    rows = range_table(Trajectory(firing, solution.pitch, solution.yaw),
                       Length(0, 'yd'), Length(1000, 'yd'), Length(100, 'yd'), tolerance)
    print(f"  {'Dist(yd)':>8} {'Elev(in)':>10} {'MOA':>8}   {'Wind(in)':>10} {'MOA':>8}   "
          f"{'Vel(ft/s)':>9} {'Mach':>5} {'E(ftlb)':>8} {'Time(s)':>7}")
    for r in rows:
        print(f"  {r.distance.to('yd'):>8.0f} "
              f"{abs(r.elevation.to('in')):>10.2f} {abs(r.elevation_angle.to('moa')):>8.2f} {r.elevation_adjustment} "
              f"{abs(r.windage.to('in')):>10.2f} {abs(r.windage_angle.to('moa')):>8.2f} {r.windage_adjustment} "
              f"{r.velocity.to('ft/s'):>9.1f} {r.mach:>5.2f} "
              f"{r.energy.to('ft*lbf'):>8.0f} {r.time.si:>7.3f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Validation — drag-free flight")
    validate_against_vacuum(config, [Length(d, 'yd') for d in (25, 50, 100, 200)])

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Plots
    # ══════════════════════════════════════════════════════════════════════
    if not quick:
        section("PHASE 6: Plots")
        import matplotlib.pyplot as plt
        from point_mass.visualization import (
            ensure_output_dir, plot_drag_tables, plot_trajectory,
            plot_zero_convergence,
        )
        out = ensure_output_dir('outputs')
        for name, fig in [
            ('01_drag_tables.png', plot_drag_tables()),
            ('02_range_table.png', plot_trajectory(rows, title='220 gr .308 — G7 0.5')),
            ('03_zero_convergence.png', plot_zero_convergence(solver.history)),
        ]:
            fig.savefig(f'{out}/{name}', dpi=150, bbox_inches='tight',
                        facecolor=fig.get_facecolor())
            plt.close(fig)
            print(f"  ✓ Saved: {out}/{name}")
    else:
        section("PHASE 6: Plots SKIPPED (--quick mode)")

    section("COMPLETE")
    print(f"  Total runtime: {time.time() - start_time:.1f} seconds")


if __name__ == "__main__":
    main()
