"""Derivations, style tokens and list rendering for dashboard widgets."""

from fleetdash.views.components import ListView, Rendered, RenderedItem, RenderState
from fleetdash.views.tokens import Icon, StyleToken, TrendDirection, bg_class, text_class

__all__ = [
    "Icon",
    "ListView",
    "RenderState",
    "Rendered",
    "RenderedItem",
    "StyleToken",
    "TrendDirection",
    "bg_class",
    "text_class",
]
