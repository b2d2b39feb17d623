from __future__ import annotations

from typing import List, Tuple

from ..sizing.models import SizingResult


def _num(value: float, decimals: int = 0) -> str:
    if decimals == 0:
        return f"{round(float(value)):,}"
    return f"{float(value):,.{decimals}f}"


def amps(value: float) -> str:
    return f"{_num(value)}A"


def watts(value: float) -> str:
    return f"{_num(value)}W"


def watt_hours(value: float) -> str:
    return f"{_num(value)}Wh"


def volts(value: float) -> str:
    return f"{_num(value)}V"


def amp_hours(value: float) -> str:
    return f"{_num(value)}Ah"


def mm2(value: float) -> str:
    return f"{float(value):g}mm²"


POWER_PATH: Tuple[Tuple[str, str], ...] = (
    ("panel_to_controller", "Panels → Charge controller"),
    ("controller_to_battery", "Charge controller → Battery"),
    ("battery_to_inverter", "Battery → Inverter"),
    ("inverter_to_load", "Inverter → AC loads"),
)


def protection_rows(result: SizingResult) -> List[Tuple[str, str, str]]:
    """(segment, breaker, cable) display rows along the power path."""
    p = result.protection
    return [
        (label, amps(getattr(p.breakers, key)), mm2(getattr(p.cables_mm2, key)))
        for key, label in POWER_PATH
    ]


def summary_rows(result: SizingResult) -> List[Tuple[str, str]]:
    """(label, value) rows shared by every report format."""
    p = result.protection
    return [
        ("Batteries", f"{result.battery_count} ({volts(result.bank_voltage)} / {amp_hours(result.bank_capacity_ah)} bank)"),
        ("Solar panels", f"{result.panel_count} ({watts(result.array_wattage)} array at {volts(result.array_voltage)})"),
        ("Daily production", watt_hours(result.daily_energy_wh)),
        ("Charge controller", f"{amps(result.charge_controller_amps)} MPPT"),
        ("Surge protection", f"{volts(p.surge_voltage_v)} DC class"),
        ("DC isolator", f"{volts(p.isolator.voltage_v)} / {amps(p.isolator.current_a)}"),
        ("Earth conductor", mm2(p.earth_conductor_mm2)),
    ]


NOTES: Tuple[str, ...] = (
    "Battery energy is sized on the backup load as entered; depth of discharge and inverter losses are applied only when a derating policy is selected.",
    "20% solar production overhead is included for real-world conditions.",
    "DC protection assumes the worst-case load current on every DC segment.",
    "Protection sizing is advisory. Always consult a qualified engineer for final system design.",
)
