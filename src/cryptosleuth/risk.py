"""
리스크 등급 분류 모듈

백엔드가 계산한 리스크 스코어(0-100)를 화면에 표시할 4단계 등급으로 변환합니다.
"""

from enum import Enum
from typing import Any, Dict, Optional, Sequence


DEFAULT_THRESHOLDS = (20.0, 50.0, 70.0)


class RiskTier(Enum):
    """리스크 등급 (라벨, 색상 토큰)"""
    SAFE = ("Safe", "#10B981")
    MODERATE = ("Moderate Risk", "#F59E0B")
    HIGH = ("High Risk", "#EA580C")
    EXTREME = ("Extreme Risk", "#DC2626")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def color(self) -> str:
        return self.value[1]


class RiskClassifier:
    """리스크 등급 분류기"""

    def __init__(self, thresholds: Optional[Sequence[float]] = None):
        """
        Args:
            thresholds: (safe, moderate, high) 상한값. None이면 기본값 20/50/70 사용
        """
        if thresholds is None:
            thresholds = DEFAULT_THRESHOLDS

        if len(thresholds) != 3:
            raise ValueError(f"임계값은 3개여야 합니다: {thresholds}")

        safe, moderate, high = (float(t) for t in thresholds)
        if not safe <= moderate <= high:
            raise ValueError(f"임계값은 오름차순이어야 합니다: {thresholds}")

        self.thresholds = (safe, moderate, high)

    def classify(self, score: float) -> RiskTier:
        """
        🎚️ 점수를 등급으로 분류합니다.

        등급 체계 (하한 포함, 낮은 임계값부터 순서대로 체크):
        🟢 SAFE: score <= 20
        🟡 MODERATE: score <= 50
        🟠 HIGH: score <= 70
        🔴 EXTREME: 그 외 전부 (범위 밖 값, NaN 포함)
        """
        safe, moderate, high = self.thresholds

        if score <= safe:
            return RiskTier.SAFE
        elif score <= moderate:
            return RiskTier.MODERATE
        elif score <= high:
            return RiskTier.HIGH
        else:
            return RiskTier.EXTREME

    def badge(self, score: float) -> Dict[str, Any]:
        """뱃지 표시용 딕셔너리를 반환합니다."""
        tier = self.classify(score)
        return {
            'score': score,
            'tier': tier.name,
            'label': tier.label,
            'color': tier.color
        }


_default_classifier = RiskClassifier()


def classify(score: float) -> RiskTier:
    """편의 함수: 기본 임계값으로 등급을 분류합니다."""
    return _default_classifier.classify(score)


def risk_badge(score: float) -> Dict[str, Any]:
    """편의 함수: 기본 임계값으로 뱃지 데이터를 만듭니다."""
    return _default_classifier.badge(score)
