"""
그래프 렌더링 패키지
"""

from .surface import Surface, RecordingSurface
from .pillow_surface import PillowSurface, ensure_font_support
from .renderer import GraphRenderer, render_png
from .view import GraphView

__all__ = [
    "Surface",
    "RecordingSurface",
    "PillowSurface",
    "ensure_font_support",
    "GraphRenderer",
    "render_png",
    "GraphView"
]
