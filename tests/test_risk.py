"""
리스크 등급 분류 모듈 테스트
"""

import math

import pytest

from cryptosleuth.risk import RiskClassifier, RiskTier, classify, risk_badge


class TestClassify:
    """기본 임계값 분류 테스트"""

    @pytest.mark.parametrize("score, expected", [
        (20, RiskTier.SAFE),
        (21, RiskTier.MODERATE),
        (50, RiskTier.MODERATE),
        (51, RiskTier.HIGH),
        (70, RiskTier.HIGH),
        (71, RiskTier.EXTREME),
    ])
    def test_threshold_boundaries(self, score, expected):
        """임계값 경계 테스트"""
        assert classify(score) == expected

    def test_fractional_scores(self):
        assert classify(20.0001) == RiskTier.MODERATE
        assert classify(70.5) == RiskTier.EXTREME

    def test_out_of_range_scores(self):
        """0-100 범위 밖 값도 오류 없이 분류"""
        assert classify(-15) == RiskTier.SAFE
        assert classify(0) == RiskTier.SAFE
        assert classify(100) == RiskTier.EXTREME
        assert classify(1e9) == RiskTier.EXTREME
        assert classify(float('-inf')) == RiskTier.SAFE
        assert classify(float('inf')) == RiskTier.EXTREME

    def test_nan_is_extreme(self):
        assert classify(math.nan) == RiskTier.EXTREME

    def test_tier_labels_and_colors(self):
        assert RiskTier.SAFE.label == "Safe"
        assert RiskTier.MODERATE.label == "Moderate Risk"
        assert RiskTier.HIGH.label == "High Risk"
        assert RiskTier.EXTREME.label == "Extreme Risk"
        colors = {tier.color for tier in RiskTier}
        assert len(colors) == 4


class TestRiskClassifier:
    """RiskClassifier 클래스 테스트"""

    def test_custom_thresholds(self):
        classifier = RiskClassifier((10, 30, 60))
        assert classifier.classify(10) == RiskTier.SAFE
        assert classifier.classify(11) == RiskTier.MODERATE
        assert classifier.classify(60) == RiskTier.HIGH
        assert classifier.classify(61) == RiskTier.EXTREME

    def test_descending_thresholds_rejected(self):
        with pytest.raises(ValueError):
            RiskClassifier((50, 20, 70))

    def test_wrong_threshold_count_rejected(self):
        with pytest.raises(ValueError):
            RiskClassifier((20, 50))

    def test_badge(self):
        badge = risk_badge(42)
        assert badge == {
            'score': 42,
            'tier': 'MODERATE',
            'label': 'Moderate Risk',
            'color': RiskTier.MODERATE.color
        }


if __name__ == "__main__":
    pytest.main([__file__])
