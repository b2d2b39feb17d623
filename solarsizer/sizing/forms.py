"""
Form Boundary
=============

Raw string form fields -> Configuration. The engine never sees malformed
input: anything blank, non-numeric, non-finite, zero or negative makes the
form incomplete and parse_form returns None.

Also holds the load helpers that feed the form:
- Appliance list totals
- Inverter kVA to watts
- Battery derating policy (depth of discharge, inverter efficiency)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveFloat, ValidationError

from .models import Configuration
from .standards import Topology

FORM_FIELDS: Tuple[str, ...] = (
    "solarLoad",
    "backupLoad",
    "systemVoltage",
    "backupHours",
    "batteryVoltage",
    "batteryCapacity",
    "batteryTopology",
    "solarHours",
    "panelWattage",
    "panelVmp",
    "panelTopology",
)

DEFAULT_FORM: Dict[str, str] = {
    "solarLoad": "",
    "backupLoad": "",
    "systemVoltage": "24",
    "backupHours": "4",
    "batteryVoltage": "12",
    "batteryCapacity": "200",
    "batteryTopology": Topology.SERIES.value,
    "solarHours": "5",
    "panelWattage": "450",
    "panelVmp": "40",
    "panelTopology": Topology.SERIES.value,
}


def _clean(raw: Mapping[str, Any]) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    for name in FORM_FIELDS:
        value = raw.get(name)
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if value is None:
            continue
        cleaned[name] = value
    return cleaned


def parse_form(raw: Mapping[str, Any]) -> Optional[Configuration]:
    """Configuration from raw form fields, or None when the form is incomplete."""
    try:
        return Configuration.model_validate(_clean(raw))
    except ValidationError:
        return None


def field_text(value: float) -> str:
    """Form text for a number; parses back to the same float."""
    value = float(value)
    return f"{value:.0f}" if value.is_integer() else repr(value)


def form_from_configuration(config: Configuration) -> Dict[str, str]:
    """Raw string form record for a configuration (inverse of parse_form)."""
    data = config.model_dump(mode="json", by_alias=True)
    return {name: field_text(data[name]) if isinstance(data[name], float) else str(data[name]) for name in FORM_FIELDS}


class Appliance(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=100)
    wattage: PositiveFloat
    quantity: NonNegativeInt = 1

    @property
    def total_watts(self) -> float:
        return self.wattage * self.quantity


def total_load(appliances: Iterable[Appliance]) -> float:
    """Combined running load of an appliance list (W)."""
    return float(sum(a.total_watts for a in appliances))


@dataclass(frozen=True)
class DeratingPolicy:
    """
    Battery derating applied to the backup load before sizing.

    Attributes:
        name: Policy identifier
        depth_of_discharge: Usable fraction of battery capacity (0-1]
        inverter_efficiency: DC to AC conversion efficiency (0-1]
    """
    name: str
    depth_of_discharge: float = 1.0
    inverter_efficiency: float = 1.0

    def __post_init__(self):
        if not (0 < self.depth_of_discharge <= 1):
            raise ValueError("depth_of_discharge must be between 0 and 1")
        if not (0 < self.inverter_efficiency <= 1):
            raise ValueError("inverter_efficiency must be between 0 and 1")

    @property
    def factor(self) -> float:
        return self.depth_of_discharge * self.inverter_efficiency


NO_DERATING = DeratingPolicy("none")
LITHIUM = DeratingPolicy("lithium", depth_of_discharge=0.8, inverter_efficiency=0.9)
LEAD_ACID = DeratingPolicy("lead-acid", depth_of_discharge=0.5, inverter_efficiency=0.85)

DERATING_POLICIES: Dict[str, DeratingPolicy] = {
    p.name: p for p in (NO_DERATING, LITHIUM, LEAD_ACID)
}


def apply_derating(config: Configuration, policy: DeratingPolicy = NO_DERATING) -> Configuration:
    """Configuration whose backup load is grossed up for DoD and inverter losses."""
    if policy.factor == 1.0:
        return config
    return config.model_copy(update={"backup_load": config.backup_load / policy.factor})
