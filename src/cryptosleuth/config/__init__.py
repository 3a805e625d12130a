"""
설정 모듈

YAML 설정 파일을 읽어 pydantic 설정 모델로 변환합니다.
파일이 없거나 읽을 수 없으면 코드에 정의된 기본값을 사용합니다.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, Field, field_validator


DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"
BACKEND_URL_ENV = "CRYPTOSLEUTH_BACKEND_URL"


class BackendSettings(BaseModel):
    url: str = "http://localhost:8000"
    timeout: float = 30.0


class CanvasSettings(BaseModel):
    width: int = Field(800, gt=0)
    height: int = Field(288, gt=0)
    pixel_ratio: float = Field(1.0, gt=0)


class LayoutSettings(BaseModel):
    """그래프 레이아웃 파라미터 (샘플링 상한, 링 반지름 비율, 노드 반지름)"""
    max_peers: int = Field(14, ge=0)
    max_edges: int = Field(40, ge=0)
    ring_divisor: float = Field(2.4, gt=0)
    center_radius: float = 12.0
    peer_radius: float = 8.0


class RiskSettings(BaseModel):
    thresholds: Tuple[float, float, float] = (20.0, 50.0, 70.0)

    @field_validator('thresholds')
    @classmethod
    def _ascending(cls, value):
        if not value[0] <= value[1] <= value[2]:
            raise ValueError("risk thresholds must be ascending")
        return value


class StyleSettings(BaseModel):
    """렌더링 색상/선 굵기. 색상은 '#RRGGBB' 또는 '#RRGGBBAA'"""
    background: str = "#00000000"
    edge_color: str = "#3B82F659"
    edge_width: float = 2.0
    center_fill: str = "#111827"
    center_stroke: str = "#60A5FA"
    peer_fill: str = "#0B1220"
    peer_stroke: str = "#34D399"
    node_stroke_width: float = 2.0
    label_color: str = "#93C5FD"
    label_size: float = 12.0
    label_offset: float = 16.0


class Settings(BaseModel):
    backend: BackendSettings = Field(default_factory=BackendSettings)
    canvas: CanvasSettings = Field(default_factory=CanvasSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    risk: RiskSettings = Field(default_factory=RiskSettings)
    style: StyleSettings = Field(default_factory=StyleSettings)


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    """YAML 파일을 딕셔너리로 읽습니다. 실패하면 빈 딕셔너리를 반환합니다."""
    if not config_path.exists():
        print(f"설정 파일을 찾을 수 없습니다: {config_path}. 기본 설정을 사용합니다.")
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"설정 파일 로딩 실패: {e}. 기본 설정을 사용합니다.")
        return {}


def load_settings(config_path: Optional[Union[str, Path]] = None,
                  environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    설정을 로드합니다.

    Args:
        config_path: 설정 파일 경로. None이면 패키지 기본 설정 파일 사용
        environ: 환경 변수 딕셔너리 (테스트용). None이면 os.environ

    Returns:
        Settings 객체
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    raw = _read_yaml(Path(config_path))
    settings = Settings.model_validate(raw)

    # 백엔드 URL은 환경 변수가 우선
    environ = os.environ if environ is None else environ
    backend_url = environ.get(BACKEND_URL_ENV)
    if backend_url:
        settings.backend.url = backend_url

    return settings
