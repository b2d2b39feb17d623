"""
Protection & Cable Sizing
=========================

Derives breakers, cables, surge protection, isolator and earthing for the
power path:

    panels -> controller -> battery -> inverter -> AC loads

Simplifications:
- The worst-case load current (max of solar/backup load over the DC bus
  voltage) is assumed on every DC segment.
- The AC side is sized at a nominal 230V.
- Earth conductor is a fixed 16 mm² baseline, not calculated.
"""

from __future__ import annotations

import math
from typing import List

from .models import BreakerRatings, CableSizes, IsolatorSpec, ProtectionSpec
from .solar import panels_in_series
from .standards import (
    EARTH_CONDUCTOR_MM2,
    NOMINAL_AC_VOLTAGE,
    STANDARD_BREAKERS_A,
    SURGE_CLASS_STEP_V,
    VOC_FACTOR,
    Topology,
    breaker_saturated,
    cable_saturated,
    cable_size_for_current,
    next_standard_breaker,
)


def surge_voltage_class(array_voc: float) -> int:
    """Array Voc rounded up to the next 100V class."""
    return int(math.ceil(float(array_voc) / SURGE_CLASS_STEP_V) * SURGE_CLASS_STEP_V)


def size_protection(
    *,
    solar_load: float,
    backup_load: float,
    system_voltage: float,
    panel_vmp: float,
    panel_count: int,
    panel_topology: Topology,
) -> ProtectionSpec:
    max_load = max(float(solar_load), float(backup_load))
    i_dc = max_load / float(system_voltage)
    i_ac = max_load / NOMINAL_AC_VOLTAGE

    dc_breaker = next_standard_breaker(i_dc)
    dc_cable = cable_size_for_current(i_dc)

    voc = float(panel_vmp) * VOC_FACTOR * panels_in_series(panel_count, panel_topology)
    surge_v = surge_voltage_class(voc)

    return ProtectionSpec(
        dc_current_a=i_dc,
        ac_current_a=i_ac,
        array_voc_v=voc,
        breakers=BreakerRatings(
            panel_to_controller=dc_breaker,
            controller_to_battery=dc_breaker,
            battery_to_inverter=dc_breaker,
            inverter_to_load=next_standard_breaker(i_ac),
        ),
        cables_mm2=CableSizes(
            panel_to_controller=dc_cable,
            controller_to_battery=dc_cable,
            battery_to_inverter=dc_cable,
            inverter_to_load=cable_size_for_current(i_ac),
        ),
        surge_voltage_v=surge_v,
        earth_conductor_mm2=EARTH_CONDUCTOR_MM2,
        isolator=IsolatorSpec(voltage_v=surge_v, current_a=dc_breaker),
    )


def saturation_warnings(spec: ProtectionSpec) -> List[str]:
    """Advisory notes for ratings clamped at the top of a standard table."""
    warnings: List[str] = []
    for side, current in (("DC", spec.dc_current_a), ("AC", spec.ac_current_a)):
        if breaker_saturated(current):
            warnings.append(
                f"{side} current {current:.1f} A exceeds the largest standard breaker; "
                f"rating held at {STANDARD_BREAKERS_A[-1]} A. Split the circuit or use a custom device."
            )
        if cable_saturated(current):
            warnings.append(
                f"{side} current {current:.1f} A exceeds the largest cable in the table; "
                f"size held at the maximum. Run parallel conductors."
            )
    return warnings
