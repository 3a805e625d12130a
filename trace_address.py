#!/usr/bin/env python3
"""
주소 트레이스 실행 스크립트

백엔드(또는 로컬 파일)에서 트레이스 결과를 가져와 리스크 등급, 플래그,
트랜잭션 테이블을 출력하고 그래프 PNG와 리포트 JSON을 저장합니다.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from cryptosleuth.client import BackendClient
from cryptosleuth.config import load_settings
from cryptosleuth.models import DEFAULT_CHAIN, TraceResult
from cryptosleuth.rendering import render_png
from cryptosleuth.risk import RiskClassifier
from cryptosleuth.utils import (
    export_report,
    load_trace_file,
    summarize_neighborhood,
    transactions_table,
    validate_chain
)


OUTPUT_DIR = Path("trace_results")


def show_trace(trace: TraceResult, classifier: RiskClassifier) -> None:
    """트레이스 결과를 콘솔에 출력합니다."""
    badge = classifier.badge(trace.risk_score)
    print(f"\n🎯 분석 결과: {trace.address}")
    print(f"  리스크: {badge['label']} ({badge['score']})")
    print(f"  플래그: {', '.join(trace.flags) if trace.flags else '-'}")

    summary = summarize_neighborhood(trace.address, trace.transactions)
    print(f"  트랜잭션: {summary['transaction_count']}개")
    print(f"  거래 상대: {summary['unique_counterparties']}개")

    if trace.transactions:
        print("\n📋 트랜잭션 목록:")
        print(transactions_table(trace.transactions).to_string(index=False))


def save_graph(trace: TraceResult, settings) -> Path:
    """그래프 PNG를 저장합니다."""
    OUTPUT_DIR.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    png_path = OUTPUT_DIR / f"graph_{trace.address}_{timestamp}.png"

    png = render_png(trace.address, trace.transactions, settings)
    png_path.write_bytes(png)
    return png_path


def run_trace(address: str, chain: str = DEFAULT_CHAIN, with_report: bool = False) -> None:
    """백엔드에서 주소를 트레이스합니다."""
    settings = load_settings()
    classifier = RiskClassifier(settings.risk.thresholds)
    client = BackendClient(settings.backend)

    print("🔍 주소 트레이스")
    print("="*40)
    print(f"📍 주소: {address}")
    print(f"⛓️  체인: {chain}")

    if not validate_chain(chain):
        print(f"❌ 지원하지 않는 체인입니다: {chain}")
        return

    trace = client.trace(address, chain)
    if not trace.ok:
        print(f"❌ 트레이스 실패: {trace.error}")
        return

    show_trace(trace, classifier)

    png_path = save_graph(trace, settings)
    print(f"\n🖼️  그래프 저장: {png_path}")

    if with_report:
        report = client.report(address, chain)
        if report is None:
            print("❌ 리포트 생성 실패")
            return

        print(f"\n📝 자동 리포트: {report.address} · {report.chain}")
        print(f"  {report.summary}")
        print(f"  권장 조치: {report.details.recommendation}")
        report_path = export_report(report, OUTPUT_DIR)
        print(f"💾 리포트 저장: {report_path}")


def run_file(file_path: str, address: Optional[str] = None) -> None:
    """로컬 JSON/JSONL 파일로부터 트레이스 결과를 그립니다."""
    settings = load_settings()
    classifier = RiskClassifier(settings.risk.thresholds)

    print(f"📥 파일 로딩: {file_path}")
    trace = load_trace_file(file_path, address)

    if not trace.ok:
        print(f"❌ 트레이스 오류: {trace.error}")
        return
    if not trace.address:
        print("❌ 중심 주소가 없습니다")
        return

    show_trace(trace, classifier)

    png_path = save_graph(trace, settings)
    print(f"\n🖼️  그래프 저장: {png_path}")


def main(argv: List[str]) -> None:
    if not argv:
        print("사용법: python trace_address.py <address> [chain] [--report]")
        print("        python trace_address.py file <path.json|.jsonl> [address]")
        return

    if argv[0] == "file":
        if len(argv) < 2:
            print("사용법: python trace_address.py file <path.json|.jsonl> [address]")
            return
        run_file(argv[1], argv[2] if len(argv) > 2 else None)
        return

    with_report = "--report" in argv
    args = [a for a in argv if a != "--report"]
    chain = args[1] if len(args) > 1 else DEFAULT_CHAIN
    run_trace(args[0], chain, with_report)


if __name__ == "__main__":
    main(sys.argv[1:])
