"""
Report renderers (display only, no recalculation).
"""

from .html import render_html
from .text import render_text

__all__ = ["render_html", "render_text"]
