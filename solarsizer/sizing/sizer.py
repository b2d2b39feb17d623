from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from .battery import size_battery_bank
from .controller import size_charge_controller
from .models import Configuration, SizingResult
from .protection import saturation_warnings, size_protection
from .solar import size_solar_array

logger = logging.getLogger(__name__)


def _series_warning(system_voltage: float, battery_voltage: float) -> Optional[str]:
    series = system_voltage / battery_voltage
    if abs(series - round(series)) > 1e-9 or series < 1:
        return (
            f"{battery_voltage:g}V batteries do not build a {system_voltage:g}V bus in whole series strings "
            f"({series:.2f} per string). Choose a battery voltage that divides the system voltage."
        )
    return None


def compute(config: Union[Configuration, Mapping[str, Any]]) -> Optional[SizingResult]:
    """
    Size the battery bank, solar array, charge controller and protection.

    Pipeline:
    - battery bank from backup load and duration
    - solar array from daily demand
    - charge controller from the array wattage
    - protection and cables from the max load and the array Voc

    Returns None when the configuration is incomplete (a required value is
    missing, non-numeric, non-finite, zero or negative).
    """
    if not isinstance(config, Configuration):
        try:
            config = Configuration.model_validate(config)
        except ValidationError as e:
            logger.debug("Incomplete configuration: %d invalid field(s)", e.error_count())
            return None

    battery = size_battery_bank(
        backup_load=config.backup_load,
        backup_hours=config.backup_hours,
        system_voltage=config.system_voltage,
        battery_voltage=config.battery_voltage,
        battery_capacity=config.battery_capacity,
    )

    array = size_solar_array(
        solar_load=config.solar_load,
        backup_load=config.backup_load,
        backup_hours=config.backup_hours,
        solar_hours=config.solar_hours,
        panel_wattage=config.panel_wattage,
        panel_vmp=config.panel_vmp,
        panel_topology=config.panel_topology,
    )

    controller_a = size_charge_controller(
        array_wattage=array.array_wattage,
        system_voltage=config.system_voltage,
    )

    protection = size_protection(
        solar_load=config.solar_load,
        backup_load=config.backup_load,
        system_voltage=config.system_voltage,
        panel_vmp=config.panel_vmp,
        panel_count=array.panel_count,
        panel_topology=config.panel_topology,
    )

    warnings: List[str] = []
    series_note = _series_warning(config.system_voltage, config.battery_voltage)
    if series_note:
        warnings.append(series_note)
    warnings.extend(saturation_warnings(protection))

    logger.debug(
        "Sized %d batteries, %d panels, %dA controller, %dA DC breakers",
        battery.battery_count,
        array.panel_count,
        controller_a,
        protection.breakers.battery_to_inverter,
    )

    return SizingResult(
        inputs=config,
        battery=battery,
        array=array,
        charge_controller_amps=controller_a,
        protection=protection,
        warnings=tuple(warnings),
    )
