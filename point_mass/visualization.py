"""
Visualization Engine
====================
Analysis plots for the ballistic core:
  1. Cd vs Mach for every standard drag table
  2. Range table: elevation and windage vs distance, velocity and energy
  3. Zero solver convergence (miss per iteration)
"""

import os
from typing import List, Sequence

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .drag_model import DragTable, drag_model
from .measurements import Measurement
from .zero import ZeroIteration


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
}


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _legend(ax):
    ax.legend(fontsize=10, facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'])


def _save(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Cd vs Mach Curves
# ══════════════════════════════════════════════════════════════════════════

def plot_drag_tables(tables: Sequence[DragTable] = tuple(DragTable),
                     save_path: str = None) -> plt.Figure:
    """Plot Cd vs Mach for the given drag tables."""
    fig, ax = plt.subplots(figsize=(11, 6))
    _apply_dark_style(fig, ax)

    mach_range = np.linspace(0, 5.0, 500)
    for table in tables:
        model = drag_model(table)
        ax.plot(mach_range, model.cd_array(mach_range), color=model.color,
                linestyle=model.linestyle, linewidth=2.5, label=model.name)

    # Annotate transonic region
    ax.axvspan(0.8, 1.2, alpha=0.08, color='#ff5252')
    ax.text(1.0, 0.05, 'Transonic\nRegion', ha='center',
            color='#ff5252', fontsize=10, alpha=0.7)

    ax.set_xlabel('Mach Number', fontsize=12)
    ax.set_ylabel('Drag Coefficient (Cd)', fontsize=12)
    ax.set_title('Standard Drag Functions', fontsize=14, fontweight='bold')
    _legend(ax)
    ax.set_xlim(0, 5.0)
    ax.set_ylim(0, 1.1)

    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Range Table
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(rows: List[Measurement], title: str = 'Trajectory',
                    save_path: str = None) -> plt.Figure:
    """Elevation/windage (in) and velocity/energy vs distance (yd)."""
    fig, axes = plt.subplots(2, 1, figsize=(12, 9), sharex=True)
    _apply_dark_style(fig, axes)

    dist = np.array([r.distance.to('yd') for r in rows])
    elev = np.array([r.elevation.to('in') for r in rows])
    wind = np.array([r.windage.to('in') for r in rows])
    vel = np.array([r.velocity.to('ft/s') for r in rows])
    energy = np.array([r.energy.to('ft*lbf') for r in rows])

    ax = axes[0]
    ax.plot(dist, elev, color=STYLE['accent_colors'][0], linewidth=2.5,
            marker='o', label='Elevation')
    ax.plot(dist, wind, color=STYLE['accent_colors'][1], linewidth=2,
            marker='s', linestyle='--', label='Windage')
    ax.axhline(y=0, color='#555', linestyle=':', alpha=0.8)
    ax.set_ylabel('Deviation from line of sight (in)', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    _legend(ax)

    ax = axes[1]
    ax.plot(dist, vel, color=STYLE['accent_colors'][2], linewidth=2.5,
            label='Velocity (ft/s)')
    ax.set_xlabel('Distance (yd)', fontsize=12)
    ax.set_ylabel('Velocity (ft/s)', fontsize=12)
    twin = ax.twinx()
    twin.plot(dist, energy, color=STYLE['accent_colors'][3], linewidth=2,
              linestyle='--', label='Energy (ft·lbf)')
    twin.set_ylabel('Energy (ft·lbf)', color=STYLE['text_color'], fontsize=12)
    twin.tick_params(colors=STYLE['text_color'])
    _legend(ax)

    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Zero Convergence
# ══════════════════════════════════════════════════════════════════════════

def plot_zero_convergence(history: List[ZeroIteration],
                          save_path: str = None) -> plt.Figure:
    """|miss| per solver iteration on a log scale."""
    fig, ax = plt.subplots(figsize=(10, 5))
    _apply_dark_style(fig, ax)

    n = np.arange(1, len(history) + 1)
    elev = np.array([abs(h.elevation_miss.to('in')) for h in history])
    wind = np.array([abs(h.windage_miss.to('in')) for h in history])
    # log scale cannot show an exact zero
    floor = 1e-9
    ax.semilogy(n, np.maximum(elev, floor), 'o-', color=STYLE['accent_colors'][0],
                linewidth=2, label='Elevation miss')
    ax.semilogy(n, np.maximum(wind, floor), 's--', color=STYLE['accent_colors'][4],
                linewidth=2, label='Windage miss')
    ax.set_xlabel('Iteration', fontsize=12)
    ax.set_ylabel('|miss| (in)', fontsize=12)
    ax.set_title('Zero Solver Convergence', fontsize=14, fontweight='bold')
    _legend(ax)

    _save(fig, save_path)
    return fig
