from typing import List, Optional
from decimal import Decimal
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
import logging

from app.core.config import Settings
from app.core.exceptions import MissingResumeError, StorageError
from app.models.application import Application, PAYMENT_STATUS_PENDING
from app.schemas.application import ApplicationForm, SubmitResponse
from app.services.payment_gateway_service import RazorpayGateway

logger = logging.getLogger(__name__)


def fee_in_minor_units(fee: Decimal) -> int:
    """루피 금액을 paise(최소 화폐 단위)로 변환"""
    return int(Decimal(fee) * 100)


class ApplicationService:
    def __init__(self, db: Session, gateway: Optional[RazorpayGateway] = None, settings: Optional[Settings] = None):
        self.db = db
        self.gateway = gateway
        self.settings = settings

    async def submit(self, form: ApplicationForm, resume_path: Optional[str]) -> SubmitResponse:
        """
        지원서 제출 + 결제 주문 생성

        1. 이력서가 없으면 MissingResumeError
        2. 게이트웨이에 주문 생성 (실패 시 GatewayError, 레코드 저장 안 함)
        3. PENDING 상태로 지원서 저장
        """
        if not resume_path:
            raise MissingResumeError()

        amount = fee_in_minor_units(self.settings.submission_fee_rupees)
        order = await self.gateway.create_order(
            amount=amount,
            currency=self.settings.currency,
            payment_capture=True
        )
        order_id = order["id"]

        application = await run_in_threadpool(self._insert_pending, form, resume_path, order_id)
        logger.info(f"Application {application.id} saved as {PAYMENT_STATUS_PENDING} (order={order_id})")

        return SubmitResponse(orderId=order_id, key=self.settings.razorpay_key_id, amount=amount)

    def _insert_pending(self, form: ApplicationForm, resume_path: str, order_id: str) -> Application:
        application = Application(
            **form.model_dump(),
            resume_path=resume_path,
            razorpay_order_id=order_id,
            payment_status=PAYMENT_STATUS_PENDING
        )
        try:
            self.db.add(application)
            self.db.commit()
            self.db.refresh(application)
        except SQLAlchemyError as e:
            self.db.rollback()
            # 게이트웨이 주문은 이미 생성됨 - 수동 정산용으로 order id 기록
            logger.error(f"Orphaned gateway order {order_id}: application insert failed: {e}")
            raise StorageError() from e
        return application

    def reconcile(self, order_id: Optional[str], payment_id: Optional[str], status: Optional[str]) -> int:
        """
        결제 결과 반영 (order id 기준, 상태 전이 검증 없이 덮어씀)

        Returns:
            int: 변경된 레코드 수 (일치하는 주문이 없어도 0으로 성공 처리)
        """
        # SQL `= NULL`은 어떤 행과도 일치하지 않음 (IS NULL로 컴파일되지 않도록 먼저 처리)
        if order_id is None:
            logger.warning("Payment reconciliation without order id - nothing updated")
            return 0

        try:
            result = self.db.execute(
                update(Application)
                .where(Application.razorpay_order_id == order_id)
                .values(razorpay_payment_id=payment_id, payment_status=status)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Payment reconciliation failed for order {order_id}: {e}")
            raise StorageError("DB update failed") from e

        if result.rowcount == 0:
            logger.warning(f"Payment reconciliation matched no application (order={order_id})")
        else:
            logger.info(f"Payment reconciled: order={order_id}, payment={payment_id}, status={status}")
        return result.rowcount

    def list_all(self) -> List[Application]:
        """전체 지원서 조회 (최신순)"""
        try:
            return (
                self.db.query(Application)
                .order_by(Application.created_at.desc(), Application.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch applications: {e}")
            raise StorageError("Failed to fetch applications") from e
