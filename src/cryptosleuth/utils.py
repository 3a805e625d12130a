"""
유틸리티 모듈

트랜잭션 테이블 변환, 이웃 그래프 요약, 파일 로딩, 리포트 저장 등
화면/CLI/API에서 공통으로 쓰는 헬퍼 함수들을 제공합니다.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import jsonlines
import networkx as nx
import pandas as pd

from .layout import elide_txid
from .models import SUPPORTED_CHAINS, Report, TraceResult, Transaction


TABLE_COLUMNS = ['TXID', 'From', 'To', 'Amount', 'Asset', 'Flags', 'Time']


def validate_chain(chain: str) -> bool:
    """
    지원하는 체인인지 확인합니다.

    Args:
        chain: 체인 이름 (대소문자 무시)

    Returns:
        지원 여부
    """
    if not isinstance(chain, str):
        return False
    return chain.lower().strip() in SUPPORTED_CHAINS


def format_timestamp(timestamp: Optional[datetime], format_str: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    타임스탬프를 포맷된 문자열로 변환합니다.

    Args:
        timestamp: 거래 시각
        format_str: 날짜 형식 문자열

    Returns:
        포맷된 날짜 문자열. 시각이 없으면 "N/A"
    """
    if timestamp is None:
        return "N/A"
    return timestamp.strftime(format_str)


def transactions_table(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """
    트랜잭션 리스트를 화면 표시용 테이블로 변환합니다.

    TXID는 18자를 넘으면 축약되고, 플래그는 쉼표로 연결됩니다.
    """
    rows = []
    for tx in transactions:
        rows.append({
            'TXID': elide_txid(tx.txid),
            'From': tx.from_address,
            'To': tx.to_address,
            'Amount': tx.amount,
            'Asset': tx.symbol,
            'Flags': ", ".join(tx.flags),
            'Time': format_timestamp(tx.timestamp)
        })
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def build_neighborhood_graph(transactions: Sequence[Transaction]) -> nx.DiGraph:
    """트랜잭션들로부터 방향 그래프를 구성합니다. 엣지에 금액 합계와 건수를 기록합니다."""
    graph = nx.DiGraph()

    for tx in transactions:
        if not tx.from_address or not tx.to_address:
            continue

        if graph.has_edge(tx.from_address, tx.to_address):
            graph[tx.from_address][tx.to_address]['weight'] += tx.amount
            graph[tx.from_address][tx.to_address]['count'] += 1
        else:
            graph.add_edge(tx.from_address, tx.to_address, weight=tx.amount, count=1)

    return graph


def summarize_neighborhood(address: str, transactions: Sequence[Transaction]) -> Dict[str, Any]:
    """
    대상 주소의 1-hop 이웃 요약을 계산합니다.

    Returns:
        {
            'address': 대상 주소,
            'transaction_count': 트랜잭션 수,
            'unique_counterparties': 거래 상대 수,
            'fanin_degree': 입차수,
            'fanout_degree': 출차수,
            'total_in': 수신 금액 합계,
            'total_out': 송신 금액 합계,
            'flag_counts': 플래그별 등장 횟수
        }
    """
    graph = build_neighborhood_graph(transactions)

    flag_counts: Dict[str, int] = {}
    for tx in transactions:
        for flag in tx.flags:
            flag_counts[flag] = flag_counts.get(flag, 0) + 1

    if address not in graph:
        return {
            'address': address,
            'transaction_count': len(transactions),
            'unique_counterparties': 0,
            'fanin_degree': 0,
            'fanout_degree': 0,
            'total_in': 0.0,
            'total_out': 0.0,
            'flag_counts': flag_counts
        }

    counterparties = (set(graph.predecessors(address)) | set(graph.successors(address))) - {address}

    return {
        'address': address,
        'transaction_count': len(transactions),
        'unique_counterparties': len(counterparties),
        'fanin_degree': graph.in_degree(address),
        'fanout_degree': graph.out_degree(address),
        'total_in': float(graph.in_degree(address, weight='weight')),
        'total_out': float(graph.out_degree(address, weight='weight')),
        'flag_counts': flag_counts
    }


def load_trace_file(file_path: Union[str, Path], address: Optional[str] = None) -> TraceResult:
    """
    로컬 파일에서 트레이스 결과를 로드합니다.

    지원 형식:
    - .json: TraceResult 객체 하나
    - .jsonl: 한 줄에 트랜잭션 하나 (address 인자가 필요)

    Args:
        file_path: 파일 경로
        address: .jsonl인 경우 중심 주소

    Returns:
        TraceResult
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"파일을 찾을 수 없습니다: {file_path}")

    suffix = file_path.suffix.lower()

    if suffix == '.json':
        with open(file_path, 'r', encoding='utf-8') as f:
            trace = TraceResult.model_validate(json.load(f))
        if address and trace.address is None:
            trace.address = address
        return trace

    if suffix == '.jsonl':
        if not address:
            raise ValueError("JSONL 파일에는 중심 주소가 필요합니다")
        with jsonlines.open(file_path) as reader:
            transactions = [Transaction.model_validate(row) for row in reader]
        return TraceResult(address=address, transactions=transactions)

    raise ValueError(f"지원하지 않는 파일 형식: {file_path.suffix}")


def report_filename(report: Report) -> str:
    return f"cryptosleuth-{report.address}-report.json"


def export_report(report: Report, output_dir: Union[str, Path] = ".") -> Path:
    """
    리포트를 JSON 파일로 저장합니다.

    Args:
        report: 저장할 리포트
        output_dir: 저장 디렉토리

    Returns:
        저장된 파일 경로
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    output_path = output_dir / report_filename(report)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)

    return output_path


def table_records(transactions: Sequence[Transaction]) -> List[Dict[str, Any]]:
    """API 응답용: 테이블을 레코드 리스트로 반환합니다."""
    return transactions_table(transactions).to_dict('records')
