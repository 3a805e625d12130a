"""
데이터 모델 모듈

백엔드(트레이스 서비스)가 내려주는 트랜잭션, 트레이스 결과, 리포트를
pydantic 모델로 정의합니다.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


SUPPORTED_CHAINS = ("bitcoin", "ethereum", "tron", "polygon", "bsc", "litecoin")
DEFAULT_CHAIN = "ethereum"


class Transaction(BaseModel):
    """트랜잭션 데이터 모델 (불변)"""
    model_config = ConfigDict(frozen=True)

    txid: str = Field(..., description="트랜잭션 ID")
    from_address: str = Field(..., description="송신자 주소")
    to_address: str = Field(..., description="수신자 주소")
    amount: float = Field(0.0, description="거래 금액")
    symbol: str = Field("", description="자산 심볼")
    flags: Tuple[str, ...] = Field(default_factory=tuple, description="트랜잭션 플래그")
    timestamp: Optional[datetime] = Field(None, description="거래 시각")

    @field_validator('flags', mode='before')
    @classmethod
    def _null_flags(cls, value):
        # 백엔드가 flags: null 을 보내는 경우가 있음
        return () if value is None else value


class TraceResult(BaseModel):
    """
    트레이스 결과 모델

    백엔드는 정상 결과 또는 {"error": "..."} 둘 중 하나를 돌려줍니다.
    """
    address: Optional[str] = Field(None, description="분석된 주소")
    risk_score: float = Field(0.0, description="리스크 스코어 (0-100)")
    flags: List[str] = Field(default_factory=list, description="주소 플래그")
    transactions: List[Transaction] = Field(default_factory=list, description="트랜잭션 리스트")
    error: Optional[str] = Field(None, description="오류 메시지")

    @field_validator('flags', mode='before')
    @classmethod
    def _null_flags(cls, value):
        return [] if value is None else value

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, message: str) -> "TraceResult":
        return cls(error=message)


class ReportDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    recommendation: Optional[str] = Field(None, description="권장 조치")


class Report(BaseModel):
    """자동 생성 리포트 모델"""
    model_config = ConfigDict(extra="allow")

    address: str = Field(..., description="대상 주소")
    chain: str = Field(DEFAULT_CHAIN, description="체인")
    risk_score: float = Field(0.0, description="리스크 스코어")
    summary: str = Field("", description="요약")
    details: ReportDetails = Field(default_factory=ReportDetails, description="상세 내용")
    generated_at: Optional[datetime] = Field(None, description="생성 시각")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class TraceRequest(BaseModel):
    """트레이스/리포트 요청 모델"""
    address: str = Field(..., min_length=1, description="조회할 주소")
    chain: str = Field(DEFAULT_CHAIN, description="체인")
