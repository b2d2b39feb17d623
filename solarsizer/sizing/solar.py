from __future__ import annotations

import math

from .models import SolarArray
from .standards import SOLAR_OVERHEAD, Topology

# series-parallel arrays are modelled as sub-strings of two panels
SUBSTRING_PANELS = 2


def daily_demand_wh(
    *, solar_load: float, solar_hours: float, backup_load: float, backup_hours: float
) -> float:
    """Daily energy the array must deliver, including the 20% overhead (Wh)."""
    return (float(solar_load) * float(solar_hours) + float(backup_load) * float(backup_hours)) * SOLAR_OVERHEAD


def array_voltage(panel_vmp: float, panel_count: int, topology: Topology) -> float:
    topology = Topology(topology)
    if topology is Topology.SERIES:
        return float(panel_vmp) * panel_count
    if topology is Topology.PARALLEL:
        return float(panel_vmp)
    return float(panel_vmp) * SUBSTRING_PANELS


def panels_in_series(panel_count: int, topology: Topology) -> int:
    """Panels stacked in one series string, used for the Voc estimate."""
    topology = Topology(topology)
    if topology is Topology.SERIES:
        return int(panel_count)
    if topology is Topology.PARALLEL:
        return 1
    return math.ceil(panel_count / 2)


def size_solar_array(
    *,
    solar_load: float,
    backup_load: float,
    backup_hours: float,
    solar_hours: float,
    panel_wattage: float,
    panel_vmp: float,
    panel_topology: Topology,
) -> SolarArray:
    """
    Panel count covering the daytime load plus recharging the backup energy.

    Notes:
    - The 20% overhead is only used to size the count; daily_energy_wh is the
      ideal production of the chosen panels.
    - Array wattage does not depend on topology; array voltage does.
    """
    demand = daily_demand_wh(
        solar_load=solar_load,
        solar_hours=solar_hours,
        backup_load=backup_load,
        backup_hours=backup_hours,
    )
    per_panel_wh = float(panel_wattage) * float(solar_hours)
    count = max(1, math.ceil(demand / per_panel_wh))

    return SolarArray(
        daily_demand_wh=demand,
        panel_count=count,
        array_voltage=array_voltage(panel_vmp, count, panel_topology),
        array_wattage=float(panel_wattage) * count,
        daily_energy_wh=float(panel_wattage) * count * float(solar_hours),
    )
