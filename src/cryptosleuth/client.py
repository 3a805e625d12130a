"""
백엔드 트레이스 서비스 클라이언트

POST /api/trace, POST /api/report 를 호출합니다. 재시도는 하지 않습니다.
"""

from typing import Optional

import requests
from pydantic import ValidationError

from .config import BackendSettings
from .models import DEFAULT_CHAIN, Report, TraceRequest, TraceResult


class BackendClient:
    """트레이스 서비스 HTTP 클라이언트"""

    def __init__(self, settings: Optional[BackendSettings] = None,
                 session: Optional[requests.Session] = None):
        self.settings = settings or BackendSettings()
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.settings.url.rstrip('/')

    def _post(self, path: str, address: str, chain: str) -> requests.Response:
        payload = TraceRequest(address=address, chain=chain).model_dump()
        response = self.session.post(
            f"{self.base_url}{path}",
            json=payload,
            headers={'Content-Type': 'application/json'},
            timeout=self.settings.timeout
        )
        response.raise_for_status()
        return response

    def trace(self, address: str, chain: str = DEFAULT_CHAIN) -> TraceResult:
        """
        주소의 트랜잭션 이웃과 리스크 스코어를 조회합니다.

        네트워크/HTTP/응답 형식 오류는 예외 대신 error 필드가 채워진
        TraceResult로 돌려줍니다.
        """
        try:
            response = self._post('/api/trace', address, chain)
            return TraceResult.model_validate(response.json())
        except requests.RequestException as e:
            print(f"트레이스 요청 실패: {e}")
            return TraceResult.failed(str(e))
        except (ValueError, ValidationError) as e:
            print(f"트레이스 응답 해석 실패: {e}")
            return TraceResult.failed(f"잘못된 응답 형식: {e}")

    def report(self, address: str, chain: str = DEFAULT_CHAIN) -> Optional[Report]:
        """자동 리포트를 요청합니다. 실패하면 None을 반환합니다."""
        try:
            response = self._post('/api/report', address, chain)
            return Report.model_validate(response.json())
        except (requests.RequestException, ValueError, ValidationError) as e:
            print(f"리포트 요청 실패: {e}")
            return None
