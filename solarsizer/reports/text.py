from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..sizing.models import Configuration, SizingResult
from . import formatting as fmt
from .html import configuration_rows


def render_text(
    config: Configuration,
    result: SizingResult,
    generated_at: Optional[datetime] = None,
) -> str:
    """Plain-text summary for clipboard / share targets."""
    when = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    lines: List[str] = [f"☀️ Solar System Sizing Report ({when})", ""]

    lines.append("Configuration:")
    lines.extend(f"- {label}: {value}" for label, value in configuration_rows(config))
    lines.append("")

    lines.append("Recommended system:")
    lines.extend(f"- {label}: {value}" for label, value in fmt.summary_rows(result))
    lines.append("")

    lines.append("Breakers / cables:")
    lines.extend(f"- {segment}: {breaker} breaker, {cable} cable" for segment, breaker, cable in fmt.protection_rows(result))

    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"- {w}" for w in result.warnings)

    lines.append("")
    lines.append(fmt.NOTES[-1])
    return "\n".join(lines)
