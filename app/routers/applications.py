from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from app.core.exceptions import ValidationError
from app.database.database import get_db
from app.schemas.application import (
    ApplicationForm, ApplicationResponse, ErrorResponse, SubmitResponse,
    VerifyPaymentRequest, VerifyPaymentResponse
)
from app.services.application_service import ApplicationService

router = APIRouter(prefix="/api")

_error_responses = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

def get_application_service(request: Request, db: Session = Depends(get_db)) -> ApplicationService:
    state = request.app.state
    return ApplicationService(db, gateway=state.gateway, settings=state.settings)

@router.post("/submit", response_model=SubmitResponse, responses=_error_responses)
async def submit_application(
    request: Request,
    full_name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    dob: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    service: ApplicationService = Depends(get_application_service)
):
    """지원서 제출 - 이력서 저장 후 결제 주문 생성, PENDING 상태로 기록"""
    form = ApplicationForm(
        full_name=full_name, email=email, phone=phone,
        gender=gender, dob=dob, bio=bio
    )

    # 파일명이 없는 파트는 첨부하지 않은 것으로 간주
    resume_path = None
    if resume is not None and resume.filename:
        resume_path = await request.app.state.resume_storage.accept(resume)

    return await service.submit(form, resume_path)

async def read_verify_payload(request: Request) -> VerifyPaymentRequest:
    """JSON 또는 urlencoded 폼 본문을 같은 모델로 변환"""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/x-www-form-urlencoded") or content_type.startswith("multipart/form-data"):
            payload = dict(await request.form())
        else:
            payload = await request.json()
        return VerifyPaymentRequest.model_validate(payload)
    except (ValueError, PydanticValidationError) as e:
        raise ValidationError() from e

@router.post("/verify-payment", response_model=VerifyPaymentResponse, responses=_error_responses)
def verify_payment(
    payload: VerifyPaymentRequest = Depends(read_verify_payload),
    service: ApplicationService = Depends(get_application_service)
):
    """결제 결과 반영 (서명 검증 없음)"""
    service.reconcile(payload.order_id, payload.payment_id, payload.status)
    return VerifyPaymentResponse(success=True)

@router.get("/applications", response_model=List[ApplicationResponse], responses={500: {"model": ErrorResponse}})
def list_applications(service: ApplicationService = Depends(get_application_service)):
    """관리자용 전체 지원서 목록 (최신순, 인증/페이지네이션 없음)"""
    return service.list_all()
