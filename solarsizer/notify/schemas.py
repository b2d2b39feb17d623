from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, confloat, conint, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
MAX_TOTAL = 1_000_000


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class ApplianceEntry(_Payload):
    name: str = Field(..., min_length=1, max_length=100)
    wattage: confloat(ge=0, le=100_000)
    quantity: conint(ge=1, le=1000)
    is_heavy_duty: bool = Field(False, alias="isHeavyDuty")
    solo_only: bool = Field(False, alias="soloOnly")

    @property
    def subtotal(self) -> float:
        return self.wattage * self.quantity


class SizingTotals(_Payload):
    total_load: Optional[confloat(ge=0, le=MAX_TOTAL)] = Field(None, alias="totalLoad")
    peak_surge: Optional[confloat(ge=0, le=MAX_TOTAL)] = Field(None, alias="peakSurge")
    required_kva: Optional[confloat(ge=0, le=MAX_TOTAL)] = Field(None, alias="requiredKva")
    recommended_inverter: Optional[confloat(ge=0, le=MAX_TOTAL)] = Field(None, alias="recommendedInverter")
    warnings: List[str] = Field(default_factory=list, max_length=50)
    recommendations: List[str] = Field(default_factory=list, max_length=50)


class SizingSnapshot(_Payload):
    """Appliance list and the totals the user saw when submitting."""
    appliances: List[ApplianceEntry] = Field(default_factory=list, max_length=100)
    calculations: SizingTotals = Field(default_factory=SizingTotals)
    total_wattage: Optional[confloat(ge=0, le=MAX_TOTAL)] = Field(None, alias="totalWattage")
    recommended_inverter_size: Optional[confloat(ge=0, le=MAX_TOTAL)] = Field(
        None, alias="recommendedInverterSize"
    )

    @property
    def total_load(self) -> float:
        for value in (self.calculations.total_load, self.total_wattage):
            if value is not None:
                return value
        return 0.0

    @property
    def recommended_inverter(self) -> Optional[float]:
        if self.calculations.recommended_inverter is not None:
            return self.calculations.recommended_inverter
        return self.recommended_inverter_size


class ContactRequest(_Payload):
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(None, max_length=30)
    location: Optional[str] = Field(None, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)
    contact_method: Literal["email", "whatsapp"] = Field(..., alias="contactMethod")
    inverter_sizing: Optional[SizingSnapshot] = Field(None, alias="inverterSizing")

    @field_validator("email", "phone", "location", mode="before")
    @classmethod
    def _blank_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
