"""
그리기 대상(Surface) 추상화

렌더러는 이 인터페이스만 사용합니다. 모든 좌표와 크기는 논리 픽셀 단위이며,
디바이스 픽셀 밀도(pixel ratio) 처리는 각 Surface 구현이 담당합니다.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Tuple


class Surface(ABC):
    """그리기 대상 인터페이스"""

    @abstractmethod
    def logical_size(self) -> Tuple[float, float]:
        """논리 크기 (width, height)"""

    @abstractmethod
    def resize(self, width: float, height: float, pixel_ratio=None) -> None:
        """논리 크기(와 pixel ratio)를 바꿉니다."""

    @abstractmethod
    def clear(self) -> None:
        """이전 프레임을 완전히 지웁니다."""

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  color: str, width: float) -> None:
        ...

    @abstractmethod
    def draw_circle(self, x: float, y: float, radius: float,
                    fill: str, stroke: str, stroke_width: float) -> None:
        ...

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float,
                  color: str, size: float) -> None:
        """(x, y)를 기준선 중앙으로 하여 텍스트를 그립니다."""


class RecordingSurface(Surface):
    """
    그리기 호출을 기록만 하는 헤드리스 Surface.

    clear()가 호출되면 기록이 비워지고 ('clear',) 한 건만 남습니다.
    """

    def __init__(self, width: float, height: float, pixel_ratio: float = 1.0):
        self.width = width
        self.height = height
        self.pixel_ratio = pixel_ratio
        self.calls: List[Tuple[Any, ...]] = []
        self.clear_count = 0

    def logical_size(self) -> Tuple[float, float]:
        return self.width, self.height

    def resize(self, width: float, height: float, pixel_ratio=None) -> None:
        self.width = width
        self.height = height
        if pixel_ratio is not None:
            self.pixel_ratio = pixel_ratio

    def clear(self) -> None:
        self.clear_count += 1
        self.calls = [('clear',)]

    def draw_line(self, x1, y1, x2, y2, color, width):
        self.calls.append(('line', x1, y1, x2, y2, color, width))

    def draw_circle(self, x, y, radius, fill, stroke, stroke_width):
        self.calls.append(('circle', x, y, radius, fill, stroke, stroke_width))

    def draw_text(self, text, x, y, color, size):
        self.calls.append(('text', text, x, y, color, size))

    def calls_of(self, kind: str) -> List[Tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == kind]
