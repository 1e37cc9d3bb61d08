from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.database.database import Base

# 결제 상태: 생성 시 PENDING, 이후 값은 클라이언트/게이트웨이가 보낸 값 그대로 저장 (paid, failed 등)
PAYMENT_STATUS_PENDING = "PENDING"


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    full_name = Column(Text)
    email = Column(Text)
    phone = Column(Text)
    gender = Column(Text)
    dob = Column(Text)
    bio = Column(Text)
    # 저장된 실제 파일명 (/uploads/{resume_path}로 조회)
    resume_path = Column(Text)
    razorpay_order_id = Column(String(64), index=True)
    razorpay_payment_id = Column(String(64), nullable=True)
    payment_status = Column(String(32))
    created_at = Column(DateTime, server_default=func.now())
