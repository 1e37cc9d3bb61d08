import httpx
import logging
from typing import Dict, Any, Optional
from app.core.exceptions import GatewayError

logger = logging.getLogger(__name__)


class RazorpayGateway:
    """Razorpay Orders API 클라이언트 (httpx 비동기)"""

    def __init__(
        self,
        key_id: Optional[str],
        key_secret: Optional[str],
        base_url: str = "https://api.razorpay.com/v1",
        client: Optional[httpx.AsyncClient] = None
    ):
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient()

        if not (self.key_id and self.key_secret):
            logger.warning("⚠️ Razorpay 키가 설정되지 않았습니다 (RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET)")

    async def create_order(
        self,
        amount: int,
        currency: str,
        payment_capture: bool = True,
        receipt: Optional[str] = None,
        notes: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        결제 주문 생성

        Args:
            amount: 최소 화폐 단위 금액 (INR이면 paise)
            currency: 통화 코드
            payment_capture: 결제 승인 시 자동 캡처 여부

        Returns:
            dict: 게이트웨이가 반환한 주문 객체 (id, amount, currency, status ...)

        Raises:
            GatewayError: 인증 정보 누락, 네트워크 오류, 4xx/5xx 응답
        """
        if not (self.key_id and self.key_secret):
            raise GatewayError("Payment gateway credentials are not configured")

        payload: Dict[str, Any] = {
            "amount": amount,
            "currency": currency,
            "payment_capture": 1 if payment_capture else 0,
        }
        if receipt:
            payload["receipt"] = receipt
        if notes:
            payload["notes"] = notes

        try:
            response = await self._client.post(
                f"{self.base_url}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret)
            )
            response.raise_for_status()  # HTTP 4xx/5xx 에러 시 예외 발생
        except httpx.HTTPStatusError as e:
            detail = self._error_description(e.response)
            logger.error(f"Razorpay order 생성 실패 - Status: {e.response.status_code}, Detail: {detail}")
            raise GatewayError(status_code=e.response.status_code, detail=detail) from e
        except httpx.HTTPError as e:
            logger.error(f"Razorpay 호출 오류: {e!r}")
            raise GatewayError(detail=str(e)) from e

        try:
            order = response.json()
        except ValueError as e:
            raise GatewayError(detail="Invalid JSON from payment gateway") from e

        if not isinstance(order, dict) or not order.get("id"):
            logger.error(f"Razorpay 응답에 order id가 없습니다: {order}")
            raise GatewayError(detail="Missing order id in gateway response")

        logger.info(f"💳 Razorpay order 생성: {order['id']} ({amount} {currency})")
        return order

    @staticmethod
    def _error_description(response: httpx.Response) -> str:
        # Razorpay 에러 포맷: {"error": {"code": "...", "description": "..."}}
        try:
            body = response.json()
        except ValueError:
            return response.text
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("description"):
            return error["description"]
        return response.text

    async def aclose(self):
        await self._client.aclose()
