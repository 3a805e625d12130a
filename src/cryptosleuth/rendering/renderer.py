"""
그래프 렌더러

GraphLayout을 Surface에 그립니다. 매 호출마다 화면 전체를 다시 그립니다.
"""

from typing import Any, Optional, Sequence

from ..config import Settings, StyleSettings
from ..layout import GraphLayout, compute_layout
from .pillow_surface import PillowSurface
from .surface import Surface


class GraphRenderer:
    """레이아웃을 Surface에 그리는 렌더러"""

    def __init__(self, style: Optional[StyleSettings] = None):
        self.style = style or StyleSettings()

    def render(self, surface: Optional[Surface], layout: GraphLayout) -> bool:
        """
        🎨 레이아웃을 그립니다.

        그리는 순서:
        1. 이전 프레임 지우기
        2. 엣지 (노드가 위에 오도록 먼저)
        3. 중심 노드
        4. 피어 노드
        5. 중심 노드 위에 축약된 주소 라벨

        Args:
            surface: 그리기 대상. None이면 아무것도 하지 않음
            layout: compute_layout() 결과

        Returns:
            실제로 그렸는지 여부
        """
        if surface is None:
            return False

        style = self.style
        surface.clear()

        for edge in layout.edges:
            (x1, y1), (x2, y2) = layout.edge_endpoints(edge)
            surface.draw_line(x1, y1, x2, y2, style.edge_color, style.edge_width)

        center = layout.center_node
        surface.draw_circle(center.x, center.y, center.radius,
                            style.center_fill, style.center_stroke, style.node_stroke_width)

        for node in layout.peer_nodes:
            surface.draw_circle(node.x, node.y, node.radius,
                                style.peer_fill, style.peer_stroke, style.node_stroke_width)

        surface.draw_text(layout.center_label, center.x, center.y - style.label_offset,
                          style.label_color, style.label_size)
        return True


def render_png(address: str,
               transactions: Sequence[Any],
               settings: Optional[Settings] = None,
               width: Optional[float] = None,
               height: Optional[float] = None,
               pixel_ratio: Optional[float] = None) -> bytes:
    """편의 함수: 레이아웃 계산부터 PNG 인코딩까지 한 번에 수행합니다."""
    settings = settings or Settings()
    canvas = settings.canvas

    surface = PillowSurface(width or canvas.width,
                            height or canvas.height,
                            pixel_ratio or canvas.pixel_ratio,
                            background=settings.style.background)
    width, height = surface.logical_size()
    layout = compute_layout(address, transactions, width, height, settings.layout)
    GraphRenderer(settings.style).render(surface, layout)
    return surface.to_png()
