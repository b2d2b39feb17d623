from __future__ import annotations

import math

from .standards import CONTROLLER_STEP_A, SAFETY_MARGIN


def size_charge_controller(*, array_wattage: float, system_voltage: float) -> int:
    """MPPT controller rating: array current plus 25%, rounded up to the next 10A."""
    max_current = float(array_wattage) / float(system_voltage)
    return int(math.ceil(max_current * SAFETY_MARGIN / CONTROLLER_STEP_A) * CONTROLLER_STEP_A)
