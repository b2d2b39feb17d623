"""
Sizing engine.

This package turns an off-grid installation description (loads, DC bus
voltage, backup duration, battery and panel specs, wiring topology) into
component counts and protection ratings. The engine is pure: one
Configuration in, one SizingResult (or None when incomplete) out.
"""

from .models import Configuration, SizingResult
from .sizer import compute
from .standards import Topology, cable_size_for_current, next_standard_breaker

__all__ = [
    "Configuration",
    "SizingResult",
    "Topology",
    "compute",
    "cable_size_for_current",
    "next_standard_breaker",
]
