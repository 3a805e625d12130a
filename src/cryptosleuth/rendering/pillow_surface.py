"""
Pillow 기반 래스터 Surface

논리 크기 × pixel ratio 크기의 RGBA 이미지에 그리고, PNG로 내보냅니다.
"""

import threading
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .surface import Surface


FONT_CANDIDATES = ("Inter.ttf", "DejaVuSans.ttf", "Arial.ttf")

_font_lock = threading.Lock()
_font_initialized = False
_font_source: Optional[str] = None


def ensure_font_support() -> Optional[str]:
    """
    프로세스당 한 번만 폰트 소스를 결정합니다. 이미 초기화됐으면 아무것도 하지 않습니다.

    Returns:
        사용할 TrueType 폰트 이름. 없으면 None (Pillow 내장 폰트 사용)
    """
    global _font_initialized, _font_source

    if _font_initialized:
        return _font_source

    with _font_lock:
        if not _font_initialized:
            for candidate in FONT_CANDIDATES:
                try:
                    ImageFont.truetype(candidate, 12)
                except OSError:
                    continue
                _font_source = candidate
                break
            _font_initialized = True

    return _font_source


@lru_cache(maxsize=32)
def _font(pixel_size: int):
    source = ensure_font_support()
    if source is None:
        return ImageFont.load_default(size=pixel_size)
    return ImageFont.truetype(source, pixel_size)


def _rgba(color: str) -> Tuple[int, int, int, int]:
    rgba = ImageColor.getrgb(color)
    if len(rgba) == 3:
        return rgba + (255,)
    return rgba


class PillowSurface(Surface):
    """Pillow 이미지 Surface"""

    def __init__(self, width: float, height: float, pixel_ratio: float = 1.0,
                 background: str = "#00000000"):
        """
        Args:
            width: 논리 너비
            height: 논리 높이
            pixel_ratio: 디바이스 픽셀 밀도
            background: clear() 시 채울 색
        """
        self.background = background
        self.resize(width, height, pixel_ratio)

    def resize(self, width: float, height: float, pixel_ratio: Optional[float] = None) -> None:
        """백킹 이미지를 새 크기로 다시 만듭니다. 기존 내용은 버려집니다."""
        if pixel_ratio is not None:
            if pixel_ratio <= 0:
                raise ValueError(f"pixel_ratio는 0보다 커야 합니다: {pixel_ratio}")
            self.pixel_ratio = float(pixel_ratio)

        self.width = width
        self.height = height
        self.image = Image.new("RGBA", self.pixel_size, _rgba(self.background))
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return (max(1, round(self.width * self.pixel_ratio)),
                max(1, round(self.height * self.pixel_ratio)))

    def logical_size(self) -> Tuple[float, float]:
        return self.width, self.height

    def _px(self, value: float) -> float:
        return value * self.pixel_ratio

    def _stroke(self, width: float) -> int:
        return max(1, round(width * self.pixel_ratio))

    def clear(self) -> None:
        # paste는 알파 블렌딩 없이 픽셀을 덮어씀
        self.image.paste(_rgba(self.background), (0, 0) + self.image.size)

    def draw_line(self, x1, y1, x2, y2, color, width):
        self._draw.line(
            [(self._px(x1), self._px(y1)), (self._px(x2), self._px(y2))],
            fill=_rgba(color),
            width=self._stroke(width)
        )

    def draw_circle(self, x, y, radius, fill, stroke, stroke_width):
        box = [self._px(x - radius), self._px(y - radius),
               self._px(x + radius), self._px(y + radius)]
        self._draw.ellipse(box, fill=_rgba(fill), outline=_rgba(stroke),
                           width=self._stroke(stroke_width))

    def draw_text(self, text, x, y, color, size):
        font = _font(max(1, round(size * self.pixel_ratio)))
        # 'ms' = 가로 중앙, 세로 기준선
        self._draw.text((self._px(x), self._px(y)), text, fill=_rgba(color),
                        font=font, anchor="ms")

    def to_png(self) -> bytes:
        buffer = BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(path, format="PNG")
        return path
