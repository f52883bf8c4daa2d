"""
Range table sampling.

Pulls from a Trajectory and keeps the first packet at or past each step
threshold between ``start`` and ``end``. Rows are nearest-step samples;
no interpolation between integration steps is done.
"""

from typing import Iterable, Iterator, List

from .measurements import Measurement, measure
from .trajectory import Packet
from .units import Length


def sample(packets: Iterable[Packet], start: Length, end: Length,
           step: Length) -> Iterator[Packet]:
    """Yield one packet per ``step`` of distance from ``start`` to ``end``."""
    if step.si <= 0:
        raise ValueError(f"step must be positive, got {step!r}")
    if end < start:
        raise ValueError(f"end {end!r} is before start {start!r}")

    limit = (end + step).si
    threshold = start.si
    for packet in packets:
        distance = packet.position[0]
        if distance > limit:
            break
        if distance >= threshold:
            threshold += step.si
            yield packet


def range_table(packets: Iterable[Packet], start: Length, end: Length,
                step: Length, tolerance: Length) -> List[Measurement]:
    """Measured rows for a range table."""
    return [measure(p, tolerance) for p in sample(packets, start, end, step)]
