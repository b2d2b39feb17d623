"""
HTML / Print Report
===================

Print-ready HTML document for one sizing run. Values come from the result
as computed; this module only formats them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from jinja2 import Environment, select_autoescape

from ..sizing.models import Configuration, SizingResult
from ..sizing.standards import describe_topology
from . import formatting as fmt

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))

REPORT_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Solar System Sizing Report</title>
  <style>
    body { font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; color: #1f2937; max-width: 800px; margin: 0 auto; padding: 24px; }
    h1 { color: #ff7900; margin-bottom: 4px; }
    .muted { color: #6b7280; font-size: 12px; }
    table { width: 100%; border-collapse: collapse; margin: 12px 0 24px 0; }
    th, td { padding: 8px 12px; border-bottom: 1px solid #e5e7eb; text-align: left; }
    th { background-color: #f3f4f6; font-size: 13px; }
    .warning-box { background-color: #fef3c7; border-left: 4px solid #f59e0b; padding: 12px 16px; margin: 16px 0; }
    .notes { background-color: #f9fafb; padding: 12px 16px; font-size: 12px; color: #4b5563; }
    @media print { body { padding: 0; } }
  </style>
</head>
<body>
  <h1>⚡ Solar System Sizing Report</h1>
  <p class="muted">Generated {{ generated_at.strftime("%B %d, %Y %H:%M") }}</p>

  <h2>Configuration</h2>
  <table>
    <tr><th>Parameter</th><th>Value</th></tr>
    {% for label, value in inputs %}<tr><td>{{ label }}</td><td>{{ value }}</td></tr>
    {% endfor %}
  </table>
  <p class="muted">{{ battery_help }}<br>{{ panel_help }}</p>

  <h2>Recommended System</h2>
  <table>
    <tr><th>Component</th><th>Recommendation</th></tr>
    {% for label, value in summary %}<tr><td>{{ label }}</td><td>{{ value }}</td></tr>
    {% endfor %}
  </table>

  <h2>Breakers &amp; Cables</h2>
  <table>
    <tr><th>Segment</th><th>Breaker</th><th>Cable</th></tr>
    {% for segment, breaker, cable in protection %}<tr><td>{{ segment }}</td><td>{{ breaker }}</td><td>{{ cable }}</td></tr>
    {% endfor %}
  </table>

  {% if warnings %}<div class="warning-box">
    <strong>Warnings</strong>
    <ul>{% for w in warnings %}<li>{{ w }}</li>{% endfor %}</ul>
  </div>{% endif %}

  <div class="notes">
    <strong>Important Notes</strong>
    <ul>{% for n in notes %}<li>{{ n }}</li>{% endfor %}</ul>
  </div>
</body>
</html>
"""
)


def configuration_rows(config: Configuration):
    return [
        ("Solar-hours load", fmt.watts(config.solar_load)),
        ("Backup load", fmt.watts(config.backup_load)),
        ("System voltage", fmt.volts(config.system_voltage)),
        ("Backup duration", f"{config.backup_hours:g} h"),
        ("Battery", f"{fmt.volts(config.battery_voltage)} / {fmt.amp_hours(config.battery_capacity)}"),
        ("Battery connection", config.battery_topology.label),
        ("Solar hours", f"{config.solar_hours:g} h/day"),
        ("Panel", f"{fmt.watts(config.panel_wattage)}, Vmp {config.panel_vmp:g}V"),
        ("Panel connection", config.panel_topology.label),
    ]


def render_html(
    config: Configuration,
    result: SizingResult,
    generated_at: Optional[datetime] = None,
) -> str:
    return REPORT_TEMPLATE.render(
        generated_at=generated_at or datetime.now(),
        inputs=configuration_rows(config),
        battery_help=describe_topology(config.battery_topology, "battery"),
        panel_help=describe_topology(config.panel_topology, "panel"),
        summary=fmt.summary_rows(result),
        protection=fmt.protection_rows(result),
        warnings=result.warnings,
        notes=fmt.NOTES,
    )
