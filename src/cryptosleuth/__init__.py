"""
CryptoSleuth Graph

암호화폐 주소의 트랜잭션 이웃 그래프를 배치·렌더링하고
리스크 스코어를 등급으로 분류하는 엔진입니다.
"""

__version__ = "0.3.0"
__author__ = "CryptoSleuth Team"

from .risk import RiskTier, RiskClassifier, classify, risk_badge
from .layout import GraphNode, GraphEdge, GraphLayout, compute_layout, elide_address, elide_txid
from .models import Transaction, TraceResult, Report
from .rendering import GraphRenderer, GraphView, PillowSurface, RecordingSurface, render_png

__all__ = [
    "RiskTier",
    "RiskClassifier",
    "classify",
    "risk_badge",
    "GraphNode",
    "GraphEdge",
    "GraphLayout",
    "compute_layout",
    "elide_address",
    "elide_txid",
    "Transaction",
    "TraceResult",
    "Report",
    "GraphRenderer",
    "GraphView",
    "PillowSurface",
    "RecordingSurface",
    "render_png"
]
