from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class ApplicationForm(BaseModel):
    """지원서 폼 필드 (검증 없이 그대로 저장)"""
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    dob: Optional[str] = None
    bio: Optional[str] = None

class SubmitResponse(BaseModel):
    orderId: str
    key: Optional[str] = None
    amount: int  # paise 등 최소 화폐 단위

class VerifyPaymentRequest(BaseModel):
    # 결제 상태 등은 검증 없이 그대로 전달 (숫자도 문자열로 저장)
    model_config = ConfigDict(coerce_numbers_to_str=True)

    order_id: Optional[str] = None
    payment_id: Optional[str] = None
    # PENDING 외 값은 게이트웨이가 보고한 값을 그대로 전달 (paid, failed 등)
    status: Optional[str] = None

class VerifyPaymentResponse(BaseModel):
    success: bool = True

class ApplicationResponse(BaseModel):
    id: int
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    dob: Optional[str] = None
    bio: Optional[str] = None
    resume_path: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    payment_status: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ErrorResponse(BaseModel):
    error: str
