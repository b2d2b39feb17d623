"""
Standard Component Series
=========================

Reference tables and topology semantics shared by every sizer:
- Standard MCB ratings (A)
- Cable cross-sections with rated current (mm² -> A)
- Series / parallel / series-parallel wiring descriptions
- Fixed design factors (safety margin, overheads, nominal AC voltage)

Lookups never fail: a value beyond the largest table entry saturates at that
entry.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

import numpy as np


SAFETY_MARGIN = 1.25          # continuous-current margin on breakers, cables, controllers
SOLAR_OVERHEAD = 1.2          # temperature, soiling and conversion losses
VOC_FACTOR = 1.2              # Voc estimate from Vmp
NOMINAL_AC_VOLTAGE = 230.0    # V, inverter output
EARTH_CONDUCTOR_MM2 = 16.0
CONTROLLER_STEP_A = 10        # MPPT controllers are sold in 10A steps
SURGE_CLASS_STEP_V = 100
DEFAULT_POWER_FACTOR = 0.8

SYSTEM_VOLTAGES: Tuple[int, ...] = (12, 24, 48)
BATTERY_VOLTAGES: Tuple[int, ...] = (6, 12, 24)

STANDARD_BREAKERS_A: Tuple[int, ...] = (
    6, 10, 16, 20, 25, 32, 40, 50, 63, 80, 100, 125, 160
)

# (cross-section mm², rated current A), ascending
CABLE_AMPACITY: Tuple[Tuple[float, float], ...] = (
    (1.5, 15.0),
    (2.5, 21.0),
    (4.0, 28.0),
    (6.0, 36.0),
    (10.0, 50.0),
    (16.0, 68.0),
    (25.0, 89.0),
    (35.0, 110.0),
    (50.0, 133.0),
    (70.0, 171.0),
    (95.0, 207.0),
)

_BREAKERS = np.asarray(STANDARD_BREAKERS_A, dtype=float)
_CABLE_SIZES = np.asarray([size for size, _ in CABLE_AMPACITY], dtype=float)
_CABLE_AMPS = np.asarray([amps for _, amps in CABLE_AMPACITY], dtype=float)


class Topology(str, Enum):
    """Wiring topology of a battery bank or a panel array."""
    SERIES = "series"
    PARALLEL = "parallel"
    SERIES_PARALLEL = "series-parallel"

    @property
    def label(self) -> str:
        return self.value.title()


_DESCRIPTIONS = {
    "battery": {
        Topology.SERIES: "Batteries connected in series increase voltage while maintaining the same Ah capacity.",
        Topology.PARALLEL: "Batteries connected in parallel increase Ah capacity while maintaining the same voltage.",
        Topology.SERIES_PARALLEL: "Combination of series and parallel connections for both higher voltage and capacity.",
    },
    "panel": {
        Topology.SERIES: "Panels in series increase voltage (Vmp adds up). Good for MPPT controllers.",
        Topology.PARALLEL: "Panels in parallel increase current while maintaining voltage. Good for PWM controllers.",
        Topology.SERIES_PARALLEL: "Mixed configuration for optimal voltage and current balance.",
    },
}


def describe_topology(topology: Topology, component: str) -> str:
    """Help text for a topology, component is "battery" or "panel"."""
    return _DESCRIPTIONS[component][Topology(topology)]


def _first_at_least(table: np.ndarray, value: float) -> int:
    # index of the smallest entry >= value, clamped to the last entry
    idx = int(np.searchsorted(table, value, side="left"))
    return min(idx, table.size - 1)


def next_standard_breaker(current: float) -> int:
    """
    Smallest standard breaker rating covering `current` plus the 25% margin.

    Saturates at the largest rating (160A) instead of failing.
    """
    margined = float(current) * SAFETY_MARGIN
    return int(_BREAKERS[_first_at_least(_BREAKERS, margined)])


def cable_size_for_current(current: float) -> float:
    """
    Smallest cable cross-section (mm²) whose rated current covers `current`
    plus the 25% margin. Saturates at 95 mm².
    """
    margined = float(current) * SAFETY_MARGIN
    return float(_CABLE_SIZES[_first_at_least(_CABLE_AMPS, margined)])


def breaker_saturated(current: float) -> bool:
    return float(current) * SAFETY_MARGIN > _BREAKERS[-1]


def cable_saturated(current: float) -> bool:
    return float(current) * SAFETY_MARGIN > _CABLE_AMPS[-1]


def kva_to_watts(kva: float, power_factor: float = DEFAULT_POWER_FACTOR) -> float:
    """Inverter apparent power (kVA) to real power (W)."""
    return float(kva) * 1000.0 * float(power_factor)
