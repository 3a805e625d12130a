"""
그래프 뷰

현재 (주소, 트랜잭션) 입력과 Surface를 들고 있다가, 주소·트랜잭션·Surface
크기 중 하나라도 바뀌면 레이아웃과 렌더링을 처음부터 다시 수행합니다.
Surface가 아직 붙지 않았으면 렌더링은 건너뛰고, 붙는 순간 다시 시도합니다.
"""

import threading
from typing import Any, Optional, Sequence, Tuple

from ..config import LayoutSettings
from ..layout import GraphLayout, compute_layout
from .renderer import GraphRenderer
from .surface import Surface


class GraphView:
    """레이아웃 + 렌더링 파이프라인 컨트롤러"""

    def __init__(self,
                 renderer: Optional[GraphRenderer] = None,
                 layout_settings: Optional[LayoutSettings] = None,
                 surface: Optional[Surface] = None):
        self.renderer = renderer or GraphRenderer()
        self.layout_settings = layout_settings or LayoutSettings()
        self.surface = surface
        self.address: Optional[str] = None
        self.transactions: Tuple[Any, ...] = ()
        self.last_layout: Optional[GraphLayout] = None
        self.render_count = 0
        self._lock = threading.RLock()

    def attach(self, surface: Surface) -> bool:
        """Surface를 붙이고, 그릴 데이터가 있으면 바로 그립니다."""
        with self._lock:
            self.surface = surface
            return self.refresh()

    def detach(self) -> None:
        with self._lock:
            self.surface = None

    def update(self, address: str, transactions: Sequence[Any]) -> bool:
        """입력을 교체하고 다시 그립니다."""
        with self._lock:
            self.address = address
            self.transactions = tuple(transactions)
            return self.refresh()

    def resize(self, width: float, height: float, pixel_ratio: Optional[float] = None) -> bool:
        """Surface 크기를 바꾸고 다시 그립니다. Surface가 없으면 아무것도 하지 않습니다."""
        with self._lock:
            if self.surface is None:
                return False
            self.surface.resize(width, height, pixel_ratio)
            return self.refresh()

    def refresh(self) -> bool:
        """
        현재 입력으로 레이아웃을 새로 계산하고 전체를 다시 그립니다.

        Returns:
            실제로 그렸는지 여부 (Surface나 주소가 없으면 False)
        """
        with self._lock:
            if self.surface is None or self.address is None:
                return False

            width, height = self.surface.logical_size()
            layout = compute_layout(self.address, self.transactions, width, height,
                                    self.layout_settings)
            drawn = self.renderer.render(self.surface, layout)
            if drawn:
                self.last_layout = layout
                self.render_count += 1
            return drawn
