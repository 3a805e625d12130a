"""
그래프 레이아웃 모듈 테스트
"""

import math

import pytest

from cryptosleuth.config import LayoutSettings
from cryptosleuth.layout import (
    compute_layout,
    discover_peers,
    elide_address,
    elide_txid
)
from cryptosleuth.models import Transaction


CENTER = "0xcenter00000000000000000000000000000000aa"


def make_tx(i, from_address, to_address, amount=1.0):
    return Transaction(
        txid=f"tx{i:04d}",
        from_address=from_address,
        to_address=to_address,
        amount=amount,
        symbol="ETH",
        flags=[],
        timestamp="2024-01-01T00:00:00Z"
    )


class TestElision:
    """주소/ID 축약 테스트"""

    def test_long_address_is_elided(self):
        address = "abcdef" + "x" * 20 + "wxyz"
        assert len(address) == 30
        assert elide_address(address) == "abcdef…wxyz"

    def test_short_address_unchanged(self):
        assert elide_address("0123456789") == "0123456789"

    def test_exactly_fourteen_chars_unchanged(self):
        assert elide_address("a" * 14) == "a" * 14

    def test_txid_elision(self):
        txid = "0123456789" + "-" * 10 + "vwxyz"
        assert elide_txid(txid) == "0123456789…vwxyz"
        assert elide_txid("a" * 18) == "a" * 18


class TestPeerDiscovery:
    """피어 수집 테스트"""

    def test_first_appearance_order(self):
        txs = [
            make_tx(0, "B", CENTER),
            make_tx(1, CENTER, "A"),
            make_tx(2, "B", "C"),
            make_tx(3, "A", CENTER),
        ]
        assert discover_peers(CENTER, txs) == ["B", "A", "C"]

    def test_from_before_to_within_transaction(self):
        txs = [make_tx(0, "X", "Y")]
        assert discover_peers(CENTER, txs) == ["X", "Y"]

    def test_dict_transactions_and_missing_endpoints(self):
        txs = [
            {'from_address': CENTER, 'to_address': "P1"},
            {'to_address': "P2"},
        ]
        assert discover_peers(CENTER, txs) == ["P1", "P2"]

    def test_empty_string_endpoint_is_a_peer(self):
        """빈 문자열 주소도 중심 주소와 다르면 피어로 수집"""
        txs = [
            {'from_address': "", 'to_address': "P1"},
            {'from_address': CENTER, 'to_address': ""},
        ]
        assert discover_peers(CENTER, txs) == ["", "P1"]


class TestComputeLayout:
    """레이아웃 계산 테스트"""

    def test_empty_transactions(self):
        layout = compute_layout(CENTER, [], 300, 200)
        assert len(layout.nodes) == 1
        assert len(layout.edges) == 0
        node = layout.nodes[0]
        assert node.is_center
        assert (node.x, node.y) == (150, 100)

    def test_self_transfers_only_center(self):
        layout = compute_layout(CENTER, [make_tx(0, CENTER, CENTER)], 300, 200)
        assert len(layout.nodes) == 1
        assert len(layout.edges) == 0

    def test_sampling_caps(self):
        """피어 14개, 엣지 40개 상한 테스트"""
        txs = [make_tx(i, CENTER, f"peer{i}") for i in range(100)]
        layout = compute_layout(CENTER, txs, 400, 400)

        assert len(layout.peer_nodes) == 14
        assert len(layout.edges) == 40
        assert [n.id for n in layout.peer_nodes] == [f"peer{i}" for i in range(14)]
        assert [e.target for e in layout.edges] == [f"peer{i}" for i in range(40)]

    def test_single_center_node(self):
        txs = [make_tx(i, f"peer{i}", CENTER) for i in range(5)]
        layout = compute_layout(CENTER, txs, 400, 300)
        centers = [n for n in layout.nodes if n.is_center]
        assert len(centers) == 1
        assert centers[0].id == CENTER
        assert layout.center == (200, 150)

    def test_four_peer_angular_placement(self):
        """4개 피어가 0/90/180/270도에 배치되는지 테스트"""
        txs = [make_tx(i, CENTER, f"p{i}") for i in range(4)]
        layout = compute_layout(CENTER, txs, 200, 200)
        ring = 200 / 2.4

        expected = [
            (100 + ring, 100),
            (100, 100 + ring),
            (100 - ring, 100),
            (100, 100 - ring),
        ]
        for node, (x, y) in zip(layout.peer_nodes, expected):
            assert node.x == pytest.approx(x, abs=1e-9)
            assert node.y == pytest.approx(y, abs=1e-9)
            assert math.hypot(node.x - 100, node.y - 100) == pytest.approx(83.333, abs=1e-3)

    def test_node_radii(self):
        layout = compute_layout(CENTER, [make_tx(0, CENTER, "p0")], 200, 200)
        assert layout.center_node.radius == 12
        assert layout.peer_nodes[0].radius == 8

    def test_edge_fallback_to_center(self):
        """샘플링에서 빠진 주소로 가는 엣지는 중심에서 끝남"""
        txs = [make_tx(i, CENTER, f"peer{i}") for i in range(15)]
        layout = compute_layout(CENTER, txs, 200, 200)

        assert len(layout.edges) == 15
        dropped = layout.edges[14]
        assert dropped.target == "peer14"
        start, end = layout.edge_endpoints(dropped)
        assert start == layout.center
        assert end == layout.center

    def test_determinism(self):
        txs = [make_tx(i, f"from{i % 7}", f"to{i % 11}") for i in range(60)]
        first = compute_layout(CENTER, txs, 640, 288)
        second = compute_layout(CENTER, txs, 640, 288)

        assert first.nodes == second.nodes
        assert first.edges == second.edges
        assert [first.label_for(n) for n in first.nodes] == [second.label_for(n) for n in second.nodes]

    def test_center_label(self):
        layout = compute_layout(CENTER, [], 200, 200)
        assert layout.center_label == "0xcent…00aa"

    def test_generator_input_keeps_edges(self):
        """한 번만 순회 가능한 입력에서도 피어와 엣지가 모두 생성됨"""
        txs = ({'from_address': CENTER, 'to_address': f"p{i}"} for i in range(3))
        layout = compute_layout(CENTER, txs, 200, 200)

        assert len(layout.peer_nodes) == 3
        assert len(layout.edges) == 3
        assert [e.target for e in layout.edges] == ["p0", "p1", "p2"]

    def test_custom_settings(self):
        settings = LayoutSettings(max_peers=3, max_edges=2)
        txs = [make_tx(i, CENTER, f"peer{i}") for i in range(10)]
        layout = compute_layout(CENTER, txs, 200, 200, settings)
        assert len(layout.peer_nodes) == 3
        assert len(layout.edges) == 2

    def test_to_dict(self):
        txs = [make_tx(0, CENTER, "p0")]
        data = compute_layout(CENTER, txs, 200, 200).to_dict()
        assert data['label'] == "0xcent…00aa"
        assert len(data['nodes']) == 2
        assert data['edges'][0]['source'] == CENTER
        assert data['edges'][0]['points'][0] == [100, 100]


if __name__ == "__main__":
    pytest.main([__file__])
