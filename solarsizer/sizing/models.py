from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt

from .standards import Topology


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Configuration(BaseModel):
    """Sizing inputs. Accepts the form's camelCase names or the Python names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    solar_load: PositiveFloat = Field(..., alias="solarLoad", description="Load while generating (W).")
    backup_load: PositiveFloat = Field(..., alias="backupLoad", description="Load while on battery only (W).")
    system_voltage: PositiveFloat = Field(..., alias="systemVoltage", description="DC bus voltage (V).")
    backup_hours: PositiveFloat = Field(..., alias="backupHours", description="Desired backup duration (h).")

    battery_voltage: PositiveFloat = Field(..., alias="batteryVoltage", description="Nominal battery voltage (V).")
    battery_capacity: PositiveFloat = Field(..., alias="batteryCapacity", description="Battery capacity (Ah).")
    battery_topology: Topology = Field(Topology.SERIES, alias="batteryTopology")

    solar_hours: PositiveFloat = Field(..., alias="solarHours", description="Peak sun hours per day.")
    panel_wattage: PositiveFloat = Field(..., alias="panelWattage", description="Panel rated power (W).")
    panel_vmp: PositiveFloat = Field(..., alias="panelVmp", description="Panel voltage at max power (V).")
    panel_topology: Topology = Field(Topology.SERIES, alias="panelTopology")


class BatteryBank(_Frozen):
    required_energy_wh: float
    series_count: float = Field(..., description="system_voltage / battery_voltage; may be non-integral.")
    parallel_strings: PositiveInt
    battery_count: PositiveInt
    bank_voltage: float
    bank_capacity_ah: float


class SolarArray(_Frozen):
    daily_demand_wh: float = Field(..., description="Daily demand including the 20% overhead.")
    panel_count: PositiveInt
    array_voltage: float
    array_wattage: float
    daily_energy_wh: float = Field(..., description="Ideal daily production of the array.")


class BreakerRatings(_Frozen):
    """MCB rating (A) at each point of the power path."""
    panel_to_controller: int
    controller_to_battery: int
    battery_to_inverter: int
    inverter_to_load: int


class CableSizes(_Frozen):
    """Cable cross-section (mm²) at each point of the power path."""
    panel_to_controller: float
    controller_to_battery: float
    battery_to_inverter: float
    inverter_to_load: float


class IsolatorSpec(_Frozen):
    voltage_v: int
    current_a: int


class ProtectionSpec(_Frozen):
    dc_current_a: float
    ac_current_a: float
    array_voc_v: float
    breakers: BreakerRatings
    cables_mm2: CableSizes
    surge_voltage_v: int
    earth_conductor_mm2: float
    isolator: IsolatorSpec


class SizingResult(_Frozen):
    inputs: Configuration
    battery: BatteryBank
    array: SolarArray
    charge_controller_amps: int
    protection: ProtectionSpec
    warnings: Tuple[str, ...] = ()

    @property
    def battery_count(self) -> int:
        return self.battery.battery_count

    @property
    def bank_voltage(self) -> float:
        return self.battery.bank_voltage

    @property
    def bank_capacity_ah(self) -> float:
        return self.battery.bank_capacity_ah

    @property
    def panel_count(self) -> int:
        return self.array.panel_count

    @property
    def array_voltage(self) -> float:
        return self.array.array_voltage

    @property
    def array_wattage(self) -> float:
        return self.array.array_wattage

    @property
    def daily_energy_wh(self) -> float:
        return self.array.daily_energy_wh
