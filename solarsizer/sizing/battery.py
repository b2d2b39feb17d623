from __future__ import annotations

import math

from .models import BatteryBank


def size_battery_bank(
    *,
    backup_load: float,
    backup_hours: float,
    system_voltage: float,
    battery_voltage: float,
    battery_capacity: float,
) -> BatteryBank:
    """
    Battery count needed to carry `backup_load` for `backup_hours`.

    Rules:
    - Required energy is backup_load * backup_hours, fully usable. Depth of
      discharge and inverter losses are folded into backup_load by the caller.
    - One string holds system_voltage / battery_voltage batteries in series.
    - Parallel strings and the total count are both rounded up.
    """
    energy_wh = float(backup_load) * float(backup_hours)
    series = float(system_voltage) / float(battery_voltage)

    string_wh = float(battery_voltage) * float(battery_capacity) * series
    parallel = math.ceil(energy_wh / string_wh)
    count = math.ceil(series * parallel)

    return BatteryBank(
        required_energy_wh=energy_wh,
        series_count=series,
        parallel_strings=parallel,
        battery_count=count,
        bank_voltage=float(system_voltage),
        bank_capacity_ah=float(battery_capacity) * parallel,
    )
