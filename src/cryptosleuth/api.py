"""
FastAPI 기반 그래프 렌더링 API

트레이스 결과를 받아 리스크 등급, 레이아웃, PNG 이미지, 트랜잭션 테이블을
돌려주는 엔드포인트를 제공합니다.
"""

from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field

from . import __version__
from .config import load_settings
from .layout import compute_layout
from .models import TraceResult
from .rendering import render_png
from .risk import RiskClassifier
from .utils import summarize_neighborhood, table_records


settings = load_settings()
classifier = RiskClassifier(settings.risk.thresholds)

app = FastAPI(
    title="CryptoSleuth Graph API",
    description="트랜잭션 이웃 그래프 렌더링 및 리스크 등급 API",
    version=__version__
)


class ClassifyRequest(BaseModel):
    """등급 분류 요청 모델"""
    score: float = Field(..., description="리스크 스코어")


class ClassifyResponse(BaseModel):
    """등급 분류 응답 모델"""
    score: float = Field(..., description="리스크 스코어")
    tier: str = Field(..., description="등급 이름")
    label: str = Field(..., description="표시 라벨")
    color: str = Field(..., description="색상 토큰")


def _require_trace(trace: TraceResult) -> str:
    """오류가 담긴 트레이스 결과나 주소 없는 결과는 400으로 거부합니다."""
    if trace.error is not None:
        raise HTTPException(status_code=400, detail=f"트레이스 오류: {trace.error}")
    if not trace.address:
        raise HTTPException(status_code=400, detail="주소가 없습니다")
    return trace.address


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": "CryptoSleuth Graph API",
        "version": __version__,
        "endpoints": {
            "classify": "POST /classify - 리스크 등급 분류",
            "layout": "POST /layout - 그래프 레이아웃 계산",
            "render": "POST /render - 그래프 PNG 렌더링",
            "table": "POST /transactions/table - 트랜잭션 테이블",
            "summary": "POST /summary - 이웃 요약",
            "health": "GET /health - 헬스체크"
        }
    }


@app.get("/health")
async def health_check():
    """헬스체크 엔드포인트"""
    return {"status": "healthy", "service": "cryptosleuth-graph"}


@app.post("/classify", response_model=ClassifyResponse)
async def classify_score(request: ClassifyRequest):
    """스코어를 리스크 등급으로 분류합니다."""
    return ClassifyResponse(**classifier.badge(request.score))


@app.post("/layout")
async def layout_trace(trace: TraceResult,
                       width: Optional[float] = Query(None, gt=0),
                       height: Optional[float] = Query(None, gt=0)) -> Dict[str, Any]:
    """
    트레이스 결과의 그래프 레이아웃을 계산합니다.

    Args:
        trace: 트레이스 결과
        width: 캔버스 논리 너비 (기본값: 설정값)
        height: 캔버스 논리 높이 (기본값: 설정값)
    """
    address = _require_trace(trace)
    layout = compute_layout(
        address,
        trace.transactions,
        width or settings.canvas.width,
        height or settings.canvas.height,
        settings.layout
    )
    result = layout.to_dict()
    result['risk'] = classifier.badge(trace.risk_score)
    return result


@app.post("/render")
async def render_trace(trace: TraceResult,
                       width: Optional[float] = Query(None, gt=0),
                       height: Optional[float] = Query(None, gt=0),
                       pixel_ratio: Optional[float] = Query(None, gt=0)):
    """트레이스 결과를 PNG 이미지로 렌더링합니다."""
    address = _require_trace(trace)
    png = render_png(address, trace.transactions, settings,
                     width=width, height=height, pixel_ratio=pixel_ratio)
    return Response(content=png, media_type="image/png")


@app.post("/transactions/table")
async def transaction_table(trace: TraceResult) -> List[Dict[str, Any]]:
    """트랜잭션 테이블 레코드를 반환합니다."""
    _require_trace(trace)
    return table_records(trace.transactions)


@app.post("/summary")
async def neighborhood_summary(trace: TraceResult) -> Dict[str, Any]:
    """대상 주소의 이웃 요약과 리스크 등급을 반환합니다."""
    address = _require_trace(trace)
    summary = summarize_neighborhood(address, trace.transactions)
    summary['flags'] = trace.flags
    summary['risk'] = classifier.badge(trace.risk_score)
    return summary


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8001)
