"""
Off-Grid Solar Sizer
====================

Component sizing tool for off-grid solar installations:
- Battery bank count and capacity from backup load and duration
- Solar array panel count and electrical characteristics
- MPPT charge controller rating
- Breaker, cable, surge protection, isolator and earthing sizes

Architecture:
- sizing/: Pure sizing engine, raw form boundary and CLI
- storage.py: Persisted raw form record (with legacy migration)
- reports/: HTML/print and plain-text report renderers
- notify/: Contact notification HTTP service (email relay)
- ui/: Streamlit form interface
"""

__version__ = "1.0.0"
