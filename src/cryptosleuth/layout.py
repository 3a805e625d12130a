"""
트랜잭션 그래프 레이아웃 모듈

분석 대상 주소를 중심에, 거래 상대(피어) 주소들을 원형으로 배치합니다.
그리기 대상(Surface)과 독립적인 순수 함수이며, 같은 입력에는 항상 같은
좌표를 돌려줍니다.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .config import LayoutSettings


ELLIPSIS = "…"

Point = Tuple[float, float]


@dataclass(frozen=True)
class GraphNode:
    """화면에 그릴 노드"""
    id: str
    x: float
    y: float
    radius: float
    is_center: bool


@dataclass(frozen=True)
class GraphEdge:
    """노드 간 엣지 (주소 참조만 가짐)"""
    source: str
    target: str


def elide(text: str, max_length: int, head: int, tail: int) -> str:
    """max_length보다 긴 문자열을 앞 head글자 + … + 뒤 tail글자로 줄입니다."""
    if len(text) > max_length:
        return text[:head] + ELLIPSIS + text[-tail:]
    return text


def elide_address(address: str) -> str:
    """주소 표시용: 14자 초과 시 앞 6자 + … + 뒤 4자"""
    return elide(address, 14, 6, 4)


def elide_txid(txid: str) -> str:
    """트랜잭션 ID 표시용: 18자 초과 시 앞 10자 + … + 뒤 5자"""
    return elide(txid, 18, 10, 5)


def _endpoint(transaction: Any, field: str) -> Optional[str]:
    # Transaction 모델과 dict 둘 다 허용
    if isinstance(transaction, Mapping):
        return transaction.get(field)
    return getattr(transaction, field, None)


def discover_peers(address: str, transactions: Iterable[Any]) -> List[str]:
    """
    거래 상대 주소들을 처음 등장한 순서대로 중복 없이 수집합니다.

    한 트랜잭션 안에서는 from_address를 to_address보다 먼저 봅니다.
    빈 문자열 주소도 하나의 피어로 취급하고, 키 자체가 없는(None) 끝점만 건너뜁니다.
    """
    peers: Dict[str, None] = {}

    for tx in transactions:
        for field in ('from_address', 'to_address'):
            peer = _endpoint(tx, field)
            if peer is not None and peer != address:
                peers.setdefault(peer, None)

    return list(peers)


class GraphLayout:
    """한 번의 레이아웃 계산 결과"""

    def __init__(self, address: str, width: float, height: float,
                 nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]):
        self.address = address
        self.width = width
        self.height = height
        self.nodes: Tuple[GraphNode, ...] = tuple(nodes)
        self.edges: Tuple[GraphEdge, ...] = tuple(edges)
        self._positions = {node.id: (node.x, node.y) for node in self.nodes}

    @property
    def center_node(self) -> GraphNode:
        return self.nodes[0]

    @property
    def center(self) -> Point:
        return self.center_node.x, self.center_node.y

    @property
    def peer_nodes(self) -> Tuple[GraphNode, ...]:
        return self.nodes[1:]

    def position_of(self, address: Optional[str]) -> Point:
        """주소의 좌표를 반환합니다. 샘플링에서 빠진 주소는 중심 좌표로 대체됩니다."""
        return self._positions.get(address, self.center)

    def edge_endpoints(self, edge: GraphEdge) -> Tuple[Point, Point]:
        return self.position_of(edge.source), self.position_of(edge.target)

    def label_for(self, node: GraphNode) -> str:
        return elide_address(node.id)

    @property
    def center_label(self) -> str:
        return self.label_for(self.center_node)

    def to_dict(self) -> Dict[str, Any]:
        """API 응답용 딕셔너리"""
        return {
            'address': self.address,
            'width': self.width,
            'height': self.height,
            'label': self.center_label,
            'nodes': [
                {
                    'id': node.id,
                    'x': node.x,
                    'y': node.y,
                    'radius': node.radius,
                    'is_center': node.is_center,
                    'label': self.label_for(node)
                }
                for node in self.nodes
            ],
            'edges': [
                {
                    'source': edge.source,
                    'target': edge.target,
                    'points': [list(p) for p in self.edge_endpoints(edge)]
                }
                for edge in self.edges
            ]
        }


def compute_layout(address: str,
                   transactions: Iterable[Any],
                   width: float,
                   height: float,
                   settings: Optional[LayoutSettings] = None) -> GraphLayout:
    """
    주소와 트랜잭션 리스트로부터 노드/엣지 레이아웃을 계산합니다.

    배치 규칙:
    1. 중심 노드: (width/2, height/2)
    2. 피어 i/n: 반지름 min(width, height)/2.4 원 위, 각도 (i/n)·2π
       (0도는 +x 방향, 화면 좌표계(y 아래 방향)에서 시계 방향으로 증가)
    3. 피어는 처음 등장 순서대로 최대 14개, 엣지는 입력 순서대로 최대 40개
    4. 끝점 키가 없는(None) 트랜잭션은 피어를 만들지 않고, 엣지는 중심으로 이어짐

    Args:
        address: 분석 대상(중심) 주소
        transactions: Transaction 모델 또는 같은 키를 가진 dict 리스트
        width: 캔버스 논리 너비
        height: 캔버스 논리 높이
        settings: 레이아웃 설정. None이면 기본값

    Returns:
        GraphLayout
    """
    settings = settings or LayoutSettings()
    # 제너레이터도 피어 수집과 엣지 샘플링에 두 번 쓸 수 있도록
    transactions = list(transactions)

    cx, cy = width / 2, height / 2
    nodes = [GraphNode(id=address, x=cx, y=cy, radius=settings.center_radius, is_center=True)]

    peers = discover_peers(address, transactions)[:settings.max_peers]
    n = len(peers)

    if n:
        ring = min(width, height) / settings.ring_divisor
        angles = np.arange(n, dtype=float) / n * 2 * np.pi
        xs = cx + ring * np.cos(angles)
        ys = cy + ring * np.sin(angles)

        for peer, x, y in zip(peers, xs, ys):
            nodes.append(GraphNode(id=peer, x=float(x), y=float(y),
                                   radius=settings.peer_radius, is_center=False))

    edges = []
    if n:
        for tx in transactions[:settings.max_edges]:
            edges.append(GraphEdge(source=_endpoint(tx, 'from_address'),
                                   target=_endpoint(tx, 'to_address')))

    return GraphLayout(address, width, height, nodes, edges)
